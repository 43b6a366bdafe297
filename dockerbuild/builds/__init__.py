"""Build orchestration module.

This module handles:
- Target reference resolution
- Registry existence checks and the build/skip/pull decision
- Single-arch and multi-arch build execution
- The per-invocation pipeline
"""

from dockerbuild.builds.target import TargetReference, resolve_target

__all__ = ["TargetReference", "resolve_target"]
