"""Project detection.

Probes a build folder for a Dockerfile and a known manifest, then
extracts the image name and version.

Manifest probe order (first match wins):
  package.json      -> Node
  pom.xml           -> Maven
  build.gradle      -> Gradle (Groovy DSL)
  build.gradle.kts  -> Gradle (Kotlin DSL)

A folder holding several manifests gets whichever comes first in this
order; there is no further precedence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from dockerbuild.errors import (
    FolderNotFoundError,
    MissingNameError,
    MissingVersionError,
    NoBuildFileError,
)
from dockerbuild.project.manifests import (
    extract_gradle_groovy,
    extract_gradle_kotlin,
    extract_maven,
    extract_node,
)
from dockerbuild.project.models import ProjectDescriptor
from dockerbuild.types import BuildType

logger = logging.getLogger(__name__)

BUILD_FILE = "Dockerfile"


class ManifestProbe(NamedTuple):
    """A marker file and how to read name/version from it."""

    marker: str
    build_type: BuildType
    extract: Callable[[Path], tuple[str, str]]


MANIFEST_PROBES: tuple[ManifestProbe, ...] = (
    ManifestProbe("package.json", BuildType.NODE, extract_node),
    ManifestProbe("pom.xml", BuildType.MAVEN, extract_maven),
    ManifestProbe("build.gradle", BuildType.GRADLE, extract_gradle_groovy),
    ManifestProbe("build.gradle.kts", BuildType.GRADLE, extract_gradle_kotlin),
)


def find_manifest(folder: Path) -> ManifestProbe | None:
    """Return the first probe whose marker file exists in `folder`."""
    for probe in MANIFEST_PROBES:
        if (folder / probe.marker).is_file():
            return probe
    return None


def detect_project(folder: Path) -> ProjectDescriptor:
    """Detect project type, image name and version for a build folder.

    Args:
        folder: Build folder; must contain a Dockerfile.

    Returns:
        ProjectDescriptor for the folder.

    Raises:
        FolderNotFoundError: If `folder` is not a directory.
        NoBuildFileError: If the folder has no Dockerfile.
        MissingNameError: If no image name could be extracted.
        MissingVersionError: If no version could be extracted.
    """
    if not folder.is_dir():
        raise FolderNotFoundError(folder)

    if not (folder / BUILD_FILE).is_file():
        raise NoBuildFileError(folder)

    probe = find_manifest(folder)
    if probe is None:
        build_type = BuildType.GENERIC
        manifest = None
        image_name, version = "", ""
    else:
        build_type = probe.build_type
        manifest = folder / probe.marker
        image_name, version = probe.extract(manifest)
        logger.debug(
            "Read %s manifest %s: name=%r version=%r",
            build_type.value,
            manifest,
            image_name,
            version,
        )

    if not image_name:
        raise MissingNameError(build_type.value)
    if not version:
        raise MissingVersionError(build_type.value)

    return ProjectDescriptor(
        build_type=build_type,
        image_name=image_name,
        version=version,
        folder=folder,
        manifest=manifest,
    )


__all__ = ["BUILD_FILE", "MANIFEST_PROBES", "ManifestProbe", "detect_project", "find_manifest"]
