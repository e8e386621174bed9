"""Public API functions for anchorsnap."""

from .snapshot import build_snapshot, configure_logging, registry_for_schema, run_snapshot

__all__ = [
    "build_snapshot",
    "configure_logging",
    "registry_for_schema",
    "run_snapshot",
]
