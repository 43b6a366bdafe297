"""Shared type definitions for dockerbuild.

This module contains enums and immutable value types shared across
subpackages to avoid circular imports.
"""

from dataclasses import dataclass
from enum import Enum


class BuildType(str, Enum):
    """Kind of project detected from its manifest file."""

    NODE = "Node"
    MAVEN = "Maven"
    GRADLE = "Gradle"
    GENERIC = "generic"


class BuildAction(str, Enum):
    """What the pipeline should do for a resolved target."""

    BUILD = "build"
    SKIP = "skip"
    PULL = "pull"


class BuildStrategy(str, Enum):
    """How the image gets built."""

    SINGLE_ARCH = "single-arch"
    MULTI_ARCH = "multi-arch"


class PipelineState(str, Enum):
    """State of a single build invocation."""

    INIT = "init"
    PARSED = "parsed"
    DETECTED = "detected"
    TARGET_RESOLVED = "target_resolved"
    SKIPPED = "skipped"
    BUILT = "built"
    PUSHED = "pushed"
    LATEST_PUSHED = "latest_pushed"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class BuildOptions:
    """Flags controlling one invocation.

    Attributes:
        current_arch_only: Build natively for the host architecture only.
        pull_existing: Pull the image if the tag exists remotely but not locally.
        tag_latest: Also build/tag/push the `latest` reference.
        push_image: Push resulting image(s) to the registry.
        force_rebuild: Rebuild even if the tag already exists remotely.
    """

    current_arch_only: bool = False
    pull_existing: bool = False
    tag_latest: bool = False
    push_image: bool = False
    force_rebuild: bool = False

    @property
    def strategy(self) -> BuildStrategy:
        if self.current_arch_only:
            return BuildStrategy.SINGLE_ARCH
        return BuildStrategy.MULTI_ARCH


__all__ = [
    "BuildAction",
    "BuildOptions",
    "BuildStrategy",
    "BuildType",
    "PipelineState",
]
