"""Build service module.

This module provides the high-level build API:
- BuildPipeline.run(): detect, resolve, check registry, then pull or build
- State tracking for one invocation

State flow:
  INIT -> PARSED -> DETECTED -> TARGET_RESOLVED
       -> SKIPPED | BUILT [-> PUSHED [-> LATEST_PUSHED]] -> DONE
Any fatal error moves the pipeline to ABORTED and propagates.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from dockerbuild.builds.decision import BuildDecision, decide_if_build_needed
from dockerbuild.builds.executor import ExecutionResult, execute_build
from dockerbuild.builds.target import TargetReference, resolve_target
from dockerbuild.config import Settings, get_settings
from dockerbuild.engine.runner import DockerEngine
from dockerbuild.errors import DaemonNotRunningError, DockerBuildError, PullFailedError
from dockerbuild.project.detect import detect_project
from dockerbuild.project.models import ProjectDescriptor
from dockerbuild.types import BuildAction, BuildOptions, PipelineState

logger = logging.getLogger(__name__)


@dataclass
class BuildOutcome:
    """Result of a successful (or legitimately skipped) invocation."""

    descriptor: ProjectDescriptor
    target: TargetReference
    decision: BuildDecision
    history: list[PipelineState]
    execution: ExecutionResult | None = None
    elapsed_seconds: int | None = None
    pulled: bool = False

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    @property
    def skipped(self) -> bool:
        return PipelineState.SKIPPED in self.history


@dataclass
class BuildPipeline:
    """One build invocation for one folder.

    `history` records every state reached, including ABORTED when a
    stage raises.
    """

    folder: Path
    options: BuildOptions
    settings: Settings = field(default_factory=get_settings)
    engine: DockerEngine | None = None
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.INIT])

    def __post_init__(self) -> None:
        if self.engine is None:
            self.engine = DockerEngine(self.settings.docker_bin)
        self._engine: DockerEngine = self.engine
        self._advance(PipelineState.PARSED)

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    def _advance(self, state: PipelineState) -> None:
        logger.debug("Pipeline state: %s -> %s", self.state.value, state.value)
        self.history.append(state)

    def run(self) -> BuildOutcome:
        """Run the pipeline to completion.

        Returns:
            BuildOutcome describing what happened.

        Raises:
            DockerBuildError: Any fatal condition; the pipeline is ABORTED.
        """
        try:
            return self._run()
        except DockerBuildError as e:
            logger.debug("Pipeline aborted (%s): %s", e.code, e)
            self._advance(PipelineState.ABORTED)
            raise

    def _run(self) -> BuildOutcome:
        engine = self._engine

        descriptor = detect_project(self.folder)
        self._advance(PipelineState.DETECTED)

        target = resolve_target(descriptor, self.settings)
        self._advance(PipelineState.TARGET_RESOLVED)

        logger.info(
            "Building %s project: %s v%s (TAG: %s)",
            descriptor.build_type.value,
            descriptor.image_name,
            descriptor.version,
            target.tag,
        )

        if not engine.is_running():
            raise DaemonNotRunningError()

        decision = decide_if_build_needed(target, self.options, engine)
        outcome = BuildOutcome(
            descriptor=descriptor,
            target=target,
            decision=decision,
            history=self.history,
        )

        if decision.action is BuildAction.PULL:
            logger.info("Image does not exist locally, pulling..")
            if not engine.pull(target.reference):
                raise PullFailedError(target.reference)
            logger.info("Successfully pulled image.")
            outcome.pulled = True

        if not decision.needs_build:
            self._advance(PipelineState.SKIPPED)
            self._advance(PipelineState.DONE)
            return outcome

        started = time.monotonic()
        execution = execute_build(
            target, self.folder, self.options, self.settings, engine
        )
        for state in execution.states:
            self._advance(state)
        outcome.execution = execution
        outcome.elapsed_seconds = int(time.monotonic() - started)

        logger.info(
            "Successfully built docker container in %d seconds.",
            outcome.elapsed_seconds,
        )
        self._advance(PipelineState.DONE)
        return outcome


def run_pipeline(
    folder: Path,
    options: BuildOptions,
    settings: Settings | None = None,
    engine: DockerEngine | None = None,
) -> BuildOutcome:
    """Build (or skip) the image for `folder`.

    Args:
        folder: Build folder containing a Dockerfile and a manifest.
        options: Invocation flags.
        settings: Application settings; loaded from the environment if omitted.
        engine: Container engine; a DockerEngine for settings.docker_bin if omitted.

    Returns:
        BuildOutcome for the invocation.

    Raises:
        DockerBuildError: On any fatal condition.
    """
    if settings is None:
        settings = get_settings()
    return BuildPipeline(folder, options, settings=settings, engine=engine).run()


__all__ = ["BuildOutcome", "BuildPipeline", "run_pipeline"]
