"""
Artifact repositories for storing run outputs.

This module provides:
- ArtifactRepository: Interface every backend implements
- SftpArtifactRepository: Repository on an SFTP server
- get_artifact_repository: Pick an implementation from a URI
"""

from sftp_artifacts.repository.base import ArtifactRepository, FileInfo
from sftp_artifacts.repository.factory import (
    UnsupportedArtifactUriError,
    get_artifact_repository,
)
from sftp_artifacts.repository.paths import ArtifactPathResolver
from sftp_artifacts.repository.sftp_repository import (
    ResolvedTarget,
    SftpArtifactRepository,
    TargetKind,
)

__all__ = [
    "ArtifactPathResolver",
    "ArtifactRepository",
    "FileInfo",
    "ResolvedTarget",
    "SftpArtifactRepository",
    "TargetKind",
    "UnsupportedArtifactUriError",
    "get_artifact_repository",
]
