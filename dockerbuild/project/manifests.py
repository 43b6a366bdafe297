"""Name/version extraction from project manifests.

Extraction is a first-match text scan, not a real parser for any of
these formats:
- package.json: first `"name": "..."` and `"version": "..."` pair
- pom.xml: first `<artifactId>` and `<version>` at project level
  (indented exactly one level)
- build.gradle / build.gradle.kts: `rootProject.name = ...` from the
  settings file and the first `version = ...` from the build file

Every extractor returns a `(name, version)` tuple with empty strings
for values it could not find.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

NODE_NAME_RE = re.compile(r'"name"\s*:\s*"([^"]*)"')
NODE_VERSION_RE = re.compile(r'"version"\s*:\s*"([^"]*)"')

# One indentation level below <project>: four spaces or a single tab.
MAVEN_ARTIFACT_ID_RE = re.compile(
    r"^(?: {4}|\t)<artifactId>(.*)</artifactId>\s*$", re.MULTILINE
)
MAVEN_VERSION_RE = re.compile(r"^(?: {4}|\t)<version>(.*)</version>\s*$", re.MULTILINE)

GRADLE_ROOT_PROJECT_RE = re.compile(r"""rootProject\.name\s*=\s*["']([^"']*)["']""")
GRADLE_VERSION_RE = re.compile(r"""^\s*version\s*=\s*["']([^"']*)["']""", re.MULTILINE)


def _read_text(path: Path) -> str:
    """Read a manifest, returning an empty string if it is missing."""
    if not path.is_file():
        logger.debug("Manifest file not found: %s", path)
        return ""
    return path.read_text(encoding="utf-8", errors="replace")


def _first_match(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    if not match:
        return ""
    return match.group(1).strip()


def extract_node(manifest: Path) -> tuple[str, str]:
    """Extract name and version from a package.json."""
    text = _read_text(manifest)
    return _first_match(NODE_NAME_RE, text), _first_match(NODE_VERSION_RE, text)


def extract_maven(manifest: Path) -> tuple[str, str]:
    """Extract artifactId and version from a pom.xml.

    Only project-level elements count, so the parent's or a dependency's
    coordinates (indented deeper) are never picked up.
    """
    text = _read_text(manifest)
    return (
        _first_match(MAVEN_ARTIFACT_ID_RE, text),
        _first_match(MAVEN_VERSION_RE, text),
    )


def _extract_gradle(manifest: Path, settings_name: str) -> tuple[str, str]:
    settings_text = _read_text(manifest.parent / settings_name)
    build_text = _read_text(manifest)
    return (
        _first_match(GRADLE_ROOT_PROJECT_RE, settings_text),
        _first_match(GRADLE_VERSION_RE, build_text),
    )


def extract_gradle_groovy(manifest: Path) -> tuple[str, str]:
    """Extract name from settings.gradle and version from build.gradle."""
    return _extract_gradle(manifest, "settings.gradle")


def extract_gradle_kotlin(manifest: Path) -> tuple[str, str]:
    """Extract name from settings.gradle.kts and version from build.gradle.kts."""
    return _extract_gradle(manifest, "settings.gradle.kts")


__all__ = [
    "extract_gradle_groovy",
    "extract_gradle_kotlin",
    "extract_maven",
    "extract_node",
]
