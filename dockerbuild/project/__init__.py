"""Project detection module.

This module handles:
- Locating the Dockerfile and the project manifest
- Extracting image name and version from the manifest
"""

from dockerbuild.project.detect import detect_project
from dockerbuild.project.models import ProjectDescriptor

__all__ = ["ProjectDescriptor", "detect_project"]
