"""Shared fixtures for dockerbuild tests.

FakeEngine stands in for the docker CLI: it records every call and
answers from configurable sets instead of running commands.
"""

import json
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

from dockerbuild.config import Settings


class FakeEngine:
    """Recording stand-in for DockerEngine."""

    def __init__(
        self,
        *,
        running: bool = True,
        login_ok: bool = True,
        remote: Iterable[str] = (),
        local: Iterable[str] = (),
        failing: Iterable[str] = (),
    ) -> None:
        self.running = running
        self.login_ok = login_ok
        self.remote = set(remote)
        self.local = set(local)
        self.failing = set(failing)
        self.calls: list[tuple[Any, ...]] = []
        # Whether the cache directory existed when each buildx build started.
        self.cache_present_at_build: list[bool] = []

    def commands(self, name: str) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == name]

    @property
    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def is_running(self) -> bool:
        self.calls.append(("ps",))
        return self.running

    def login(self, registry: str | None = None) -> bool:
        self.calls.append(("login", registry))
        return self.login_ok

    def manifest_exists(self, reference: str) -> bool:
        self.calls.append(("manifest_inspect", reference))
        return reference in self.remote

    def image_exists(self, reference: str) -> bool:
        self.calls.append(("image_inspect", reference))
        return reference in self.local

    def pull(self, reference: str) -> bool:
        self.calls.append(("pull", reference))
        return "pull" not in self.failing

    def build(self, reference: str, context: Path) -> bool:
        self.calls.append(("build", reference, context))
        return "build" not in self.failing

    def tag(self, source: str, target: str) -> bool:
        self.calls.append(("tag", source, target))
        return "tag" not in self.failing

    def push(self, reference: str) -> bool:
        self.calls.append(("push", reference))
        return "push" not in self.failing

    def buildx_create(self, name: str, platforms: Iterable[str]) -> bool:
        self.calls.append(("buildx_create", name, list(platforms)))
        return "buildx_create" not in self.failing

    def buildx_remove(self, name: str) -> bool:
        self.calls.append(("buildx_rm", name))
        return True

    def buildx_build(
        self,
        reference: str,
        context: Path,
        platforms: Iterable[str],
        cache_dir: Path,
        push: bool = False,
    ) -> bool:
        self.calls.append(("buildx_build", reference, push))
        self.cache_present_at_build.append(cache_dir.exists())
        # buildx writes the local cache as it goes
        cache_dir.mkdir(parents=True, exist_ok=True)
        (cache_dir / "index.json").write_text("{}")
        return "buildx_build" not in self.failing


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    """Factory for FakeEngine instances."""
    return FakeEngine


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with no registry and a cache directory under tmp_path."""
    return Settings(
        docker_registry="",
        docker_namespace="",
        config_file=tmp_path / "registry.conf",
        cache_dir=tmp_path / ".buildx_cache",
    )


@pytest.fixture
def registry_settings(tmp_path: Path) -> Settings:
    """Settings with a registry host and namespace."""
    return Settings(
        docker_registry="registry.example.com",
        docker_namespace="team",
        config_file=tmp_path / "registry.conf",
        cache_dir=tmp_path / ".buildx_cache",
    )


@pytest.fixture
def make_node_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a folder with a Dockerfile and package.json."""

    def _make(name: str = "svc", version: str = "1.2.0", folder: str = "app") -> Path:
        project = tmp_path / folder
        project.mkdir(parents=True, exist_ok=True)
        (project / "Dockerfile").write_text("FROM node:20-alpine\n")
        (project / "package.json").write_text(
            json.dumps({"name": name, "version": version, "private": True}, indent=2)
        )
        return project

    return _make
