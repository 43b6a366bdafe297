"""Error definitions for dockerbuild.

Every fatal condition maps to one exception type with a stable code.
The CLI turns any of them into a printed message and exit status 1.
A missing registry config file is only a warning and has no exception.
"""

# Error code constants
FOLDER_NOT_FOUND = "folder_not_found"
NO_BUILD_FILE = "no_build_file"
MISSING_NAME = "missing_name"
MISSING_VERSION = "missing_version"
DAEMON_NOT_RUNNING = "daemon_not_running"
AUTH_FAILED = "auth_failed"
PULL_FAILED = "pull_failed"
BUILD_FAILED = "build_failed"
PUSH_FAILED = "push_failed"
EXECUTION_ERROR = "execution_error"


class DockerBuildError(Exception):
    """Base error for all fatal build conditions."""

    code = "dockerbuild_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class FolderNotFoundError(DockerBuildError):
    """Raised when the build folder does not exist."""

    code = FOLDER_NOT_FOUND

    def __init__(self, folder: object) -> None:
        super().__init__(f"{folder} is not a folder")
        self.folder = folder


class NoBuildFileError(DockerBuildError):
    """Raised when the build folder has no Dockerfile."""

    code = NO_BUILD_FILE

    def __init__(self, folder: object) -> None:
        super().__init__("Folder does not contain Dockerfile")
        self.folder = folder


class MissingNameError(DockerBuildError):
    """Raised when no image name could be extracted from the manifest."""

    code = MISSING_NAME

    def __init__(self, build_type: str) -> None:
        super().__init__(
            f"Could not retrieve image name from {build_type} project, aborting.."
        )
        self.build_type = build_type


class MissingVersionError(DockerBuildError):
    """Raised when no version could be extracted from the manifest."""

    code = MISSING_VERSION

    def __init__(self, build_type: str) -> None:
        super().__init__(
            f"Could not retrieve version from {build_type} project, aborting.."
        )
        self.build_type = build_type


class DaemonNotRunningError(DockerBuildError):
    """Raised when the docker engine does not respond."""

    code = DAEMON_NOT_RUNNING

    def __init__(self) -> None:
        super().__init__("Docker engine is not running!")


class AuthFailedError(DockerBuildError):
    """Raised when logging in to the registry fails."""

    code = AUTH_FAILED

    def __init__(self, registry: str | None) -> None:
        super().__init__("Could not login to registry")
        self.registry = registry


class PullFailedError(DockerBuildError):
    """Raised when pulling an existing image fails."""

    code = PULL_FAILED

    def __init__(self, reference: str) -> None:
        super().__init__(f"Could not pull image {reference}")
        self.reference = reference


class BuildFailedError(DockerBuildError):
    """Raised when a docker build command fails."""

    code = BUILD_FAILED


class PushFailedError(DockerBuildError):
    """Raised when pushing (or tagging for push) fails."""

    code = PUSH_FAILED


class EngineExecutionError(DockerBuildError):
    """Raised when the engine binary cannot be executed at all."""

    code = EXECUTION_ERROR


__all__ = [
    "AUTH_FAILED",
    "BUILD_FAILED",
    "DAEMON_NOT_RUNNING",
    "EXECUTION_ERROR",
    "FOLDER_NOT_FOUND",
    "MISSING_NAME",
    "MISSING_VERSION",
    "NO_BUILD_FILE",
    "PULL_FAILED",
    "PUSH_FAILED",
    "AuthFailedError",
    "BuildFailedError",
    "DaemonNotRunningError",
    "DockerBuildError",
    "EngineExecutionError",
    "FolderNotFoundError",
    "MissingNameError",
    "MissingVersionError",
    "NoBuildFileError",
    "PullFailedError",
    "PushFailedError",
]
