"""Container engine access.

All interaction with the docker CLI goes through DockerEngine.
"""

from dockerbuild.engine.runner import CommandResult, DockerEngine

__all__ = ["CommandResult", "DockerEngine"]
