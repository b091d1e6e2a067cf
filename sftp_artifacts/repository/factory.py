"""
Selection of an artifact repository implementation from a URI.
"""

import logging
from typing import Callable, Dict
from urllib.parse import urlparse

from sftp_artifacts.repository.base import ArtifactRepository
from sftp_artifacts.repository.sftp_repository import SftpArtifactRepository

logger = logging.getLogger(__name__)


class UnsupportedArtifactUriError(ValueError):
    """Raised when no repository implementation handles a URI scheme."""
    pass


_REPOSITORIES: Dict[str, Callable[..., ArtifactRepository]] = {
    "sftp": SftpArtifactRepository.from_uri,
}


def get_artifact_repository(artifact_uri: str, run_id: str, **options) -> ArtifactRepository:
    """
    Create the artifact repository for ``artifact_uri``.

    Args:
        artifact_uri: Repository root, e.g. "sftp://alice@host/data/artifacts"
        run_id: Run the repository stores artifacts for
        **options: Extra repository settings (key_path, verify_host_key, ...)

    Raises:
        UnsupportedArtifactUriError: If the URI scheme has no implementation
        ConfigError: If the URI or options are invalid
    """
    scheme = urlparse(artifact_uri).scheme.lower()
    factory = _REPOSITORIES.get(scheme)
    if factory is None:
        raise UnsupportedArtifactUriError(
            f"No artifact repository for scheme '{scheme}' "
            f"(supported: {', '.join(sorted(_REPOSITORIES))})"
        )

    logger.debug(f"Using {scheme} artifact repository for run '{run_id}'")
    return factory(artifact_uri, run_id, **options)
