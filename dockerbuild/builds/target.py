"""Target image reference resolution."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dockerbuild.config import Settings
    from dockerbuild.project.models import ProjectDescriptor

LATEST_TAG = "latest"

# Tags that never get a registry existence check.
UNVERSIONED_TAGS = frozenset({LATEST_TAG, "0.0.0"})


@dataclass(frozen=True)
class TargetReference:
    """Fully-qualified image reference.

    Rendered as `registry_host/namespace/image_name:tag`, leaving out
    empty parts.
    """

    image_name: str
    tag: str
    registry_host: str | None = None
    namespace: str | None = None

    @property
    def repository(self) -> str:
        parts = [p for p in (self.registry_host, self.namespace) if p]
        parts.append(self.image_name)
        return "/".join(parts)

    @property
    def reference(self) -> str:
        return f"{self.repository}:{self.tag}"

    @property
    def is_versioned(self) -> bool:
        """False for `latest` and `0.0.0`, which are always rebuilt."""
        return self.tag not in UNVERSIONED_TAGS

    def with_tag(self, tag: str) -> TargetReference:
        return replace(self, tag=tag)

    def latest(self) -> TargetReference:
        return self.with_tag(LATEST_TAG)

    def __str__(self) -> str:
        return self.reference


def resolve_target(descriptor: ProjectDescriptor, settings: Settings) -> TargetReference:
    """Compose the target reference for a detected project.

    Args:
        descriptor: Detected project.
        settings: Settings providing the optional registry and namespace.

    Returns:
        TargetReference tagged with the project version.
    """
    return TargetReference(
        image_name=descriptor.image_name,
        tag=descriptor.version,
        registry_host=settings.docker_registry or None,
        namespace=settings.docker_namespace or None,
    )


__all__ = ["LATEST_TAG", "UNVERSIONED_TAGS", "TargetReference", "resolve_target"]
