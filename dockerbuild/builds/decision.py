"""Decide whether a target needs to be built.

Versioned tags that already exist in the registry are not rebuilt
unless forced. `latest` and `0.0.0` skip the registry check entirely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dockerbuild.errors import AuthFailedError
from dockerbuild.types import BuildAction, BuildOptions

if TYPE_CHECKING:
    from dockerbuild.builds.target import TargetReference
    from dockerbuild.engine.runner import DockerEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildDecision:
    """Outcome of the registry check.

    Attributes:
        action: BUILD, SKIP, or PULL (skip, but pull the image locally first).
        reason: Short human-readable explanation.
    """

    action: BuildAction
    reason: str

    @property
    def needs_build(self) -> bool:
        return self.action is BuildAction.BUILD


def decide_if_build_needed(
    target: TargetReference,
    options: BuildOptions,
    engine: DockerEngine,
) -> BuildDecision:
    """Check the registry and decide between build, skip and pull.

    Args:
        target: Versioned target reference.
        options: Invocation flags.
        engine: Container engine used for login and inspections.

    Returns:
        BuildDecision for the target.

    Raises:
        AuthFailedError: If logging in to the registry fails.
    """
    if not target.is_versioned:
        return BuildDecision(BuildAction.BUILD, f"tag '{target.tag}' is always built")

    if not engine.login(target.registry_host):
        raise AuthFailedError(target.registry_host)

    if not engine.manifest_exists(target.reference):
        return BuildDecision(BuildAction.BUILD, "tag not found in registry")

    if options.force_rebuild:
        logger.info("Image with tag '%s' already exists in registry, rebuilding.", target.tag)
        return BuildDecision(BuildAction.BUILD, "rebuild forced")

    logger.info(
        "Image with tag '%s' already exists in registry, skipping build.", target.tag
    )
    if engine.image_exists(target.reference):
        return BuildDecision(BuildAction.SKIP, "image exists in registry and locally")

    if options.pull_existing:
        return BuildDecision(BuildAction.PULL, "image exists in registry only")

    logger.warning("Image does not exist locally, use -e to pull from registry.")
    return BuildDecision(BuildAction.SKIP, "image exists in registry only")


__all__ = ["BuildDecision", "decide_if_build_needed"]
