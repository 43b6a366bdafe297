"""Tests for project/detect.py module."""

from pathlib import Path

import pytest

from dockerbuild.errors import (
    FolderNotFoundError,
    MissingNameError,
    MissingVersionError,
    NoBuildFileError,
)
from dockerbuild.project.detect import MANIFEST_PROBES, detect_project, find_manifest
from dockerbuild.types import BuildType


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a folder with only a Dockerfile."""
    folder = tmp_path / "project"
    folder.mkdir()
    (folder / "Dockerfile").write_text("FROM scratch\n")
    return folder


class TestManifestProbes:
    """Tests for the ordered probe list."""

    def test_probe_order(self) -> None:
        markers = [p.marker for p in MANIFEST_PROBES]
        assert markers == ["package.json", "pom.xml", "build.gradle", "build.gradle.kts"]

    def test_find_manifest_none(self, project_dir: Path) -> None:
        assert find_manifest(project_dir) is None

    def test_first_match_wins(self, project_dir: Path) -> None:
        """With several manifests the earliest probe is used."""
        (project_dir / "pom.xml").write_text("<project/>")
        (project_dir / "build.gradle").write_text("")
        probe = find_manifest(project_dir)
        assert probe is not None
        assert probe.build_type is BuildType.MAVEN


class TestDetectProject:
    """Tests for detect_project."""

    def test_node_project(self, project_dir: Path) -> None:
        (project_dir / "package.json").write_text('{"name": "svc", "version": "1.2.0"}')

        descriptor = detect_project(project_dir)

        assert descriptor.build_type is BuildType.NODE
        assert descriptor.image_name == "svc"
        assert descriptor.version == "1.2.0"
        assert descriptor.manifest == project_dir / "package.json"
        assert descriptor.dockerfile == project_dir / "Dockerfile"

    def test_maven_project(self, project_dir: Path) -> None:
        (project_dir / "pom.xml").write_text(
            "<project>\n    <artifactId>orders</artifactId>\n"
            "    <version>2.0.0</version>\n</project>\n"
        )

        descriptor = detect_project(project_dir)

        assert descriptor.build_type is BuildType.MAVEN
        assert (descriptor.image_name, descriptor.version) == ("orders", "2.0.0")

    def test_gradle_groovy_project(self, project_dir: Path) -> None:
        (project_dir / "build.gradle").write_text("version = '0.1.0'\n")
        (project_dir / "settings.gradle").write_text("rootProject.name = 'inventory'\n")

        descriptor = detect_project(project_dir)

        assert descriptor.build_type is BuildType.GRADLE
        assert (descriptor.image_name, descriptor.version) == ("inventory", "0.1.0")

    def test_gradle_kotlin_project(self, project_dir: Path) -> None:
        (project_dir / "build.gradle.kts").write_text('version = "4.5.6"\n')
        (project_dir / "settings.gradle.kts").write_text('rootProject.name = "gateway"\n')

        descriptor = detect_project(project_dir)

        assert descriptor.build_type is BuildType.GRADLE
        assert descriptor.manifest == project_dir / "build.gradle.kts"
        assert (descriptor.image_name, descriptor.version) == ("gateway", "4.5.6")

    def test_folder_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FolderNotFoundError) as exc_info:
            detect_project(tmp_path / "nope")
        assert exc_info.value.code == "folder_not_found"

    def test_file_instead_of_folder(self, tmp_path: Path) -> None:
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(FolderNotFoundError):
            detect_project(path)

    def test_no_dockerfile(self, tmp_path: Path) -> None:
        """The Dockerfile check comes before any manifest probing."""
        (tmp_path / "package.json").write_text('{"name": "svc", "version": "1.0.0"}')
        with pytest.raises(NoBuildFileError) as exc_info:
            detect_project(tmp_path)
        assert str(exc_info.value) == "Folder does not contain Dockerfile"

    def test_generic_project_has_no_name(self, project_dir: Path) -> None:
        with pytest.raises(MissingNameError) as exc_info:
            detect_project(project_dir)
        assert exc_info.value.build_type == "generic"
        assert "generic project" in str(exc_info.value)

    def test_missing_version(self, project_dir: Path) -> None:
        (project_dir / "package.json").write_text('{"name": "svc"}')
        with pytest.raises(MissingVersionError) as exc_info:
            detect_project(project_dir)
        assert "Node project" in str(exc_info.value)

    def test_gradle_without_settings(self, project_dir: Path) -> None:
        (project_dir / "build.gradle").write_text("version = '1.0.0'\n")
        with pytest.raises(MissingNameError):
            detect_project(project_dir)
