"""Build execution strategies.

Two mutually exclusive strategies:
- single-arch: `docker build` for the host architecture, then optional
  `docker push` of the versioned tag and the `latest` tag
- multi-arch: an ephemeral buildx builder with a local layer cache,
  building (and optionally pushing) every platform in one command per tag

Any failing step raises immediately. Only the multi-arch strategy
cleans up after itself: the builder and the cache directory are removed
when it finishes, whether or not the builds succeeded. That cleanup is
best effort; its failures are logged and never replace a build error.
"""

from __future__ import annotations

import logging
import platform
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from dockerbuild.errors import BuildFailedError, DockerBuildError, PushFailedError
from dockerbuild.types import BuildOptions, BuildStrategy, PipelineState

if TYPE_CHECKING:
    from dockerbuild.builds.target import TargetReference
    from dockerbuild.config import Settings
    from dockerbuild.engine.runner import DockerEngine

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """What a build strategy did.

    Attributes:
        strategy: Strategy that ran.
        references: Image references built, in build order.
        states: Pipeline states reached (BUILT, PUSHED, LATEST_PUSHED).
    """

    strategy: BuildStrategy
    references: list[str] = field(default_factory=list)
    states: list[PipelineState] = field(default_factory=list)

    @property
    def pushed(self) -> bool:
        return PipelineState.PUSHED in self.states


def remove_cache_dir(cache_dir: Path) -> None:
    """Remove the layer cache directory if it exists."""
    if cache_dir.exists():
        logger.debug("Removing cache directory %s", cache_dir)
        shutil.rmtree(cache_dir)


def teardown_builder(engine: DockerEngine, builder: str, cache_dir: Path) -> None:
    """Remove the buildx builder and the cache directory, logging failures."""
    logger.info("Cleaning up buildx container..")
    try:
        engine.buildx_remove(builder)
    except DockerBuildError as e:
        logger.warning("Could not remove buildx builder %s: %s", builder, e)

    logger.info("Cleaning up cache..")
    try:
        remove_cache_dir(cache_dir)
    except OSError as e:
        logger.warning("Could not remove cache directory %s: %s", cache_dir, e)


def build_single_arch(
    target: TargetReference,
    folder: Path,
    options: BuildOptions,
    engine: DockerEngine,
) -> ExecutionResult:
    """Build natively for the host architecture, then push if requested.

    Raises:
        BuildFailedError: If the build fails.
        PushFailedError: If tagging or pushing fails.
    """
    result = ExecutionResult(strategy=BuildStrategy.SINGLE_ARCH)

    logger.info("Building for %s", platform.machine())
    if not engine.build(target.reference, folder):
        raise BuildFailedError("[ERROR] Docker build unsuccessful!")
    result.references.append(target.reference)
    result.states.append(PipelineState.BUILT)

    if not options.push_image:
        return result

    logger.info("Pushing image to %s", target.reference)
    if not engine.push(target.reference):
        raise PushFailedError("[ERROR] Docker push unsuccessful!")
    result.states.append(PipelineState.PUSHED)

    if options.tag_latest:
        latest = target.latest()
        logger.info("Pushing image to %s", latest.reference)
        if not engine.tag(target.reference, latest.reference):
            raise PushFailedError(f"[ERROR] Could not tag image as {latest.reference}!")
        if not engine.push(latest.reference):
            raise PushFailedError("[ERROR] Docker push unsuccessful!")
        result.references.append(latest.reference)
        result.states.append(PipelineState.LATEST_PUSHED)

    return result


def build_multi_arch(
    target: TargetReference,
    folder: Path,
    options: BuildOptions,
    settings: Settings,
    engine: DockerEngine,
) -> ExecutionResult:
    """Build for all configured platforms with an ephemeral buildx builder.

    With push enabled, each tag is built and pushed in a single buildx
    invocation.

    Raises:
        BuildFailedError: If any buildx build fails.
    """
    result = ExecutionResult(strategy=BuildStrategy.MULTI_ARCH)
    builder = settings.builder_name
    cache_dir = settings.cache_dir
    platforms = settings.platforms

    targets = [target]
    if options.tag_latest:
        targets.append(target.latest())

    logger.info("Creating buildx container..")
    remove_cache_dir(cache_dir)
    # A builder left over from an aborted run may or may not exist.
    engine.buildx_remove(builder)
    if not engine.buildx_create(builder, platforms):
        raise BuildFailedError(f"[ERROR] Could not create buildx builder '{builder}'!")

    try:
        if options.push_image:
            for t in targets:
                logger.info("Setting push to %s", t.reference)
        else:
            logger.info("Skipped push")

        arch_names = " and ".join(p.rsplit("/", 1)[-1] for p in platforms)
        for t in targets:
            logger.info(
                "Building image for %s (host: %s).. (tag: %s)",
                arch_names,
                platform.machine(),
                t.tag,
            )
            ok = engine.buildx_build(
                t.reference, folder, platforms, cache_dir, push=options.push_image
            )
            if not ok:
                raise BuildFailedError("[ERROR] Docker command unsuccessful!")
            result.references.append(t.reference)

        result.states.append(PipelineState.BUILT)
        if options.push_image:
            result.states.append(PipelineState.PUSHED)
            if options.tag_latest:
                result.states.append(PipelineState.LATEST_PUSHED)
    finally:
        teardown_builder(engine, builder, cache_dir)

    return result


def execute_build(
    target: TargetReference,
    folder: Path,
    options: BuildOptions,
    settings: Settings,
    engine: DockerEngine,
) -> ExecutionResult:
    """Run the strategy selected by `options`."""
    if options.strategy is BuildStrategy.SINGLE_ARCH:
        return build_single_arch(target, folder, options, engine)
    return build_multi_arch(target, folder, options, settings, engine)


__all__ = [
    "ExecutionResult",
    "build_multi_arch",
    "build_single_arch",
    "execute_build",
    "remove_cache_dir",
    "teardown_builder",
]
