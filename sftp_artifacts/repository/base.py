"""Artifact repository contract - upload, listing and retrieval of run artifacts.

Repositories store the files a run produces (models, logs, metric dumps)
under a run-scoped root, addressed by a run-relative artifact path.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


@dataclass(frozen=True)
class FileInfo:
    """
    One entry of an artifact listing.

    Attributes:
        path: Entry name relative to the listed directory
        file_size: Size in bytes as reported by the server
        is_dir: True if the entry is a directory
    """
    path: str
    file_size: int
    is_dir: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "file_size": self.file_size,
            "is_dir": self.is_dir,
        }


class ArtifactRepository(ABC):
    """Interface for artifact storage backends."""

    @abstractmethod
    def log_artifact(
        self,
        local_file: Union[str, Path],
        artifact_path: Optional[str] = None,
    ) -> str:
        """Upload a single local file, returning the location it was written to.

        Args:
            local_file: File to upload
            artifact_path: Run-relative directory to place it under; the
                repository root when None
        """
        ...

    @abstractmethod
    def log_artifacts(
        self,
        local_dir: Union[str, Path],
        artifact_path: Optional[str] = None,
    ) -> List[str]:
        """Upload the regular files directly inside ``local_dir``."""
        ...

    @abstractmethod
    def list_artifacts(self, artifact_path: Optional[str] = None) -> List[FileInfo]:
        """List the immediate children of an artifact directory."""
        ...

    @abstractmethod
    def download_artifacts(self, artifact_path: Optional[str] = None) -> str:
        """Download an artifact file or directory to a new local temp location.

        Returns:
            Local path of the downloaded file, or of a directory holding
            the downloaded files. The caller owns it.
        """
        ...
