"""
Mapping of run-relative artifact paths onto the remote filesystem.
"""

from pathlib import PurePath, PurePosixPath
from typing import Optional, Union


class ArtifactPathResolver:
    """
    Resolve artifact paths against the repository base directory.

    Artifact paths are joined literally: ``..`` segments are left for the
    server to interpret, but leading slashes are dropped so a path is always
    taken relative to the base directory.

    Example:
        >>> resolver = ArtifactPathResolver("/data/artifacts")
        >>> resolver.resolve_folder("checkpoints/epoch1")
        '/data/artifacts/checkpoints/epoch1'
        >>> resolver.resolve_file("/tmp/model.pkl", "model")
        '/data/artifacts/model/model.pkl'
    """

    def __init__(self, base_path: str):
        self._base = PurePosixPath(base_path or ".")

    @property
    def base_path(self) -> str:
        return str(self._base)

    def resolve_folder(self, artifact_path: Optional[str] = None) -> str:
        """Remote directory for ``artifact_path``; the base directory when None."""
        if artifact_path is None:
            return str(self._base)
        return str(self._base / artifact_path.lstrip("/"))

    def resolve_file(
        self,
        local_file_name: Union[str, PurePath],
        artifact_path: Optional[str] = None,
    ) -> str:
        """Remote path for a local file uploaded under ``artifact_path``."""
        name = PurePath(local_file_name).name
        return str(PurePosixPath(self.resolve_folder(artifact_path)) / name)

    @staticmethod
    def parent(remote_path: str) -> str:
        return str(PurePosixPath(remote_path).parent)
