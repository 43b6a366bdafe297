"""dockerbuild - Build and push container images for project folders.

This package infers an image name and version from a project's manifest
(package.json, pom.xml, build.gradle, build.gradle.kts) and drives the
docker CLI to build single-arch or multi-arch images, skipping tags that
already exist in the registry.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
