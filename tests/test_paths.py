"""Tests for resolving artifact paths against the repository base."""

from pathlib import Path

import pytest

from sftp_artifacts.repository.paths import ArtifactPathResolver


@pytest.fixture
def resolver():
    return ArtifactPathResolver("/data/artifacts")


class TestResolveFolder:
    def test_absent_path_is_base(self, resolver):
        assert resolver.resolve_folder() == "/data/artifacts"
        assert resolver.resolve_folder(None) == "/data/artifacts"

    @pytest.mark.parametrize(
        "artifact_path, expected",
        [
            ("model", "/data/artifacts/model"),
            ("checkpoints/epoch1", "/data/artifacts/checkpoints/epoch1"),
            ("model/", "/data/artifacts/model"),
        ],
    )
    def test_joins_under_base(self, resolver, artifact_path, expected):
        assert resolver.resolve_folder(artifact_path) == expected

    def test_parent_segments_kept_literally(self, resolver):
        assert resolver.resolve_folder("../other") == "/data/artifacts/../other"

    def test_leading_slash_stays_under_base(self, resolver):
        assert resolver.resolve_folder("/model") == "/data/artifacts/model"

    def test_empty_base_is_login_directory(self):
        resolver = ArtifactPathResolver("")

        assert resolver.resolve_folder() == "."
        assert resolver.resolve_folder("model") == "model"


class TestResolveFile:
    def test_root(self, resolver):
        assert resolver.resolve_file("a.txt") == "/data/artifacts/a.txt"

    def test_directory_components_dropped(self, resolver):
        assert resolver.resolve_file("/tmp/run/model.pkl", "model") == "/data/artifacts/model/model.pkl"

    def test_accepts_path_objects(self, resolver, tmp_path):
        local = Path(tmp_path) / "metrics.json"

        assert resolver.resolve_file(local, "sub") == "/data/artifacts/sub/metrics.json"


def test_parent():
    assert ArtifactPathResolver.parent("/data/artifacts/sub/a.txt") == "/data/artifacts/sub"
