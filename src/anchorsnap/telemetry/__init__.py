"""Tracer and meter accessors for anchorsnap runs.

Both resolve against whatever OpenTelemetry providers the host application
installed; without an SDK they return no-op instruments. Instruments are
versioned with the installed anchorsnap release unless told otherwise.
"""

from typing import Optional

from opentelemetry import metrics, trace

from anchorsnap.__version__ import __version__

__all__ = [
    "INSTRUMENTATION_NAME",
    "get_tracer",
    "get_meter",
]

INSTRUMENTATION_NAME = "anchorsnap"


def get_tracer(name: str = INSTRUMENTATION_NAME, version: Optional[str] = None) -> trace.Tracer:
    return trace.get_tracer(name, version or __version__)


def get_meter(name: str = INSTRUMENTATION_NAME, version: Optional[str] = None) -> metrics.Meter:
    return metrics.get_meter(name, version or __version__)
