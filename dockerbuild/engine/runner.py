"""Container engine runner.

This module handles:
- Composing docker CLI commands (build, push, tag, buildx, ...)
- Executing them with subprocess and reporting success/failure

Quiet commands (liveness, login, inspections, pull, buildx builder
management) have their output discarded. Build and push output streams
straight to the terminal.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from dockerbuild.errors import EngineExecutionError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of one engine command.

    Attributes:
        exit_code: Process exit code.
        command: The command that was executed, shell-quoted.
    """

    exit_code: int
    command: str

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def compose_build_command(reference: str, context: Path) -> list[str]:
    """Compose a native single-arch `docker build` command."""
    return ["build", "-t", reference, str(context)]


def compose_buildx_create_command(name: str, platforms: Sequence[str]) -> list[str]:
    """Compose the command creating (and selecting) a buildx builder."""
    return [
        "buildx",
        "create",
        "--platform",
        ",".join(platforms),
        "--name",
        name,
        "--use",
    ]


def compose_buildx_build_command(
    reference: str,
    context: Path,
    platforms: Sequence[str],
    cache_dir: Path,
    push: bool = False,
) -> list[str]:
    """Compose a multi-platform `docker buildx build` command.

    Args:
        reference: Fully-qualified image reference to tag.
        context: Build context folder.
        platforms: Target platforms, e.g. linux/amd64.
        cache_dir: Local directory used as layer cache source and destination.
        push: Push the result as part of the build.

    Returns:
        Arguments to pass after the engine executable.
    """
    cmd = [
        "buildx",
        "build",
        "--platform",
        ",".join(platforms),
        f"--cache-from=type=local,src={cache_dir}",
        f"--cache-to=type=local,dest={cache_dir}",
    ]
    if push:
        cmd.append("--push")
    cmd.extend(["-t", reference, str(context)])
    return cmd


class DockerEngine:
    """Thin wrapper over the docker CLI.

    Every method blocks until the command exits and reports success as a
    bool; deciding what a failure means is left to the caller.
    """

    def __init__(self, docker_bin: str = "docker") -> None:
        self.docker_bin = docker_bin

    def run(self, args: Sequence[str], quiet: bool = False) -> CommandResult:
        """Run one engine command.

        Args:
            args: Arguments after the engine executable.
            quiet: Discard stdout/stderr instead of streaming them.

        Returns:
            CommandResult with the exit code.

        Raises:
            EngineExecutionError: If the engine executable cannot be started.
        """
        cmd = [self.docker_bin, *args]
        cmd_str = shlex.join(cmd)
        logger.debug("Executing: %s", cmd_str)

        output = subprocess.DEVNULL if quiet else None
        try:
            result = subprocess.run(cmd, stdout=output, stderr=output, check=False)
        except OSError as e:
            raise EngineExecutionError(f"Failed to execute {cmd_str}: {e}") from e

        if result.returncode != 0:
            logger.debug("Command exited with %d: %s", result.returncode, cmd_str)
        return CommandResult(exit_code=result.returncode, command=cmd_str)

    def is_running(self) -> bool:
        return self.run(["ps", "-q"], quiet=True).success

    def login(self, registry: str | None = None) -> bool:
        args = ["login"]
        if registry:
            args.append(registry)
        return self.run(args, quiet=True).success

    def manifest_exists(self, reference: str) -> bool:
        """True when the tag's manifest exists in the remote registry."""
        return self.run(["manifest", "inspect", reference], quiet=True).success

    def image_exists(self, reference: str) -> bool:
        """True when the image is present in the local image store."""
        return self.run(["image", "inspect", reference], quiet=True).success

    def pull(self, reference: str) -> bool:
        return self.run(["pull", reference], quiet=True).success

    def build(self, reference: str, context: Path) -> bool:
        return self.run(compose_build_command(reference, context)).success

    def tag(self, source: str, target: str) -> bool:
        return self.run(["tag", source, target]).success

    def push(self, reference: str) -> bool:
        return self.run(["push", reference]).success

    def buildx_create(self, name: str, platforms: Sequence[str]) -> bool:
        return self.run(compose_buildx_create_command(name, platforms), quiet=True).success

    def buildx_remove(self, name: str) -> bool:
        return self.run(["buildx", "rm", name], quiet=True).success

    def buildx_build(
        self,
        reference: str,
        context: Path,
        platforms: Sequence[str],
        cache_dir: Path,
        push: bool = False,
    ) -> bool:
        cmd = compose_buildx_build_command(
            reference, context, platforms, cache_dir, push=push
        )
        return self.run(cmd).success


__all__ = [
    "CommandResult",
    "DockerEngine",
    "compose_build_command",
    "compose_buildx_build_command",
    "compose_buildx_create_command",
]
