"""Project descriptor model."""

from dataclasses import dataclass
from pathlib import Path

from dockerbuild.types import BuildType


@dataclass(frozen=True)
class ProjectDescriptor:
    """What was learned about a project folder.

    Attributes:
        build_type: Kind of project, from the first matching manifest.
        image_name: Image name extracted from the manifest.
        version: Version extracted from the manifest; used as the image tag.
        folder: The build folder (docker build context).
        manifest: Manifest file the values came from (None for generic).
    """

    build_type: BuildType
    image_name: str
    version: str
    folder: Path
    manifest: Path | None = None

    @property
    def dockerfile(self) -> Path:
        return self.folder / "Dockerfile"


__all__ = ["ProjectDescriptor"]
