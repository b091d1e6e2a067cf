"""Tests for choosing a repository implementation from a URI."""

import pytest

from sftp_artifacts import ConfigError, SftpArtifactRepository, get_artifact_repository
from sftp_artifacts.repository import UnsupportedArtifactUriError


def test_sftp_uri():
    repository = get_artifact_repository("sftp://alice:pw@host:2222/data/artifacts", "run-1")

    assert isinstance(repository, SftpArtifactRepository)
    assert repository.run_id == "run-1"
    assert repository.config.base_path == "/data/artifacts"


def test_scheme_is_case_insensitive():
    assert isinstance(get_artifact_repository("SFTP://alice@host/x", "r"), SftpArtifactRepository)


def test_options_passed_through():
    repository = get_artifact_repository(
        "sftp://alice@host/x", "r", verify_host_key=True, known_hosts_path="/tmp/known_hosts"
    )

    assert repository.config.verify_host_key is True
    assert repository.config.known_hosts_path == "/tmp/known_hosts"


@pytest.mark.parametrize("uri", ["s3://bucket/key", "file:///tmp/artifacts", "artifacts"])
def test_unsupported_scheme(uri):
    with pytest.raises(UnsupportedArtifactUriError):
        get_artifact_repository(uri, "r")


def test_invalid_option():
    with pytest.raises(ConfigError):
        get_artifact_repository("sftp://alice@host/x", "r", verify_host_key="not a bool")
