"""Tests for error definitions."""

import pytest

from dockerbuild.errors import (
    AuthFailedError,
    BuildFailedError,
    DaemonNotRunningError,
    DockerBuildError,
    FolderNotFoundError,
    MissingNameError,
    MissingVersionError,
    NoBuildFileError,
    PullFailedError,
    PushFailedError,
)


class TestErrorCodes:
    """Every fatal error carries a stable code and shares one base."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (FolderNotFoundError("app"), "folder_not_found"),
            (NoBuildFileError("app"), "no_build_file"),
            (MissingNameError("Node"), "missing_name"),
            (MissingVersionError("Maven"), "missing_version"),
            (DaemonNotRunningError(), "daemon_not_running"),
            (AuthFailedError("r.io"), "auth_failed"),
            (PullFailedError("svc:1.0.0"), "pull_failed"),
            (BuildFailedError("boom"), "build_failed"),
            (PushFailedError("boom"), "push_failed"),
        ],
    )
    def test_codes(self, error: DockerBuildError, code: str) -> None:
        assert isinstance(error, DockerBuildError)
        assert error.code == code

    def test_code_override(self) -> None:
        error = DockerBuildError("custom", code="custom_code")
        assert error.code == "custom_code"
        assert str(error) == "custom"

    def test_messages(self) -> None:
        assert str(MissingNameError("Gradle")) == (
            "Could not retrieve image name from Gradle project, aborting.."
        )
        assert str(FolderNotFoundError("app")) == "app is not a folder"
