"""Shared observability context utilities."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry.trace import Status, StatusCode
from pydantic import Field

from anchorsnap.logging import get_logger
from anchorsnap.logging.filters import reset_run_context, set_run_context
from anchorsnap.telemetry import get_tracer
from anchorsnap.types.base import SnapBaseModel


class RunContext(SnapBaseModel):
    """Observability context propagated across one decoding run."""

    run_id: str
    program_id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def generate(cls, **kwargs: Any) -> "RunContext":
        """Generate a new context with a unique run id."""
        return cls(run_id=str(uuid.uuid4()), **kwargs)

    def to_telemetry_dict(self) -> Dict[str, str]:
        payload: Dict[str, str] = {"run_id": self.run_id}
        if self.program_id:
            payload["program_id"] = self.program_id
        payload.update(sanitize_extras(self.attributes, prefix="ctx."))
        return payload


@contextmanager
def run_scope(
    ctx: RunContext,
    *,
    operation: Optional[str] = None,
) -> Iterator[Dict[str, str]]:
    """Apply logging + tracing scope for a decoding run."""
    telemetry = ctx.to_telemetry_dict()

    tokens = set_run_context(run_id=ctx.run_id, program_id=ctx.program_id)

    tracer = get_tracer()
    span_name = operation or "anchorsnap.run"

    with tracer.start_as_current_span(span_name) as span:
        for key, value in telemetry.items():
            span.set_attribute(f"anchorsnap.{key}", value)

        try:
            yield telemetry
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR))
            get_logger(__name__).error(
                "Run failed",
                extra={**telemetry, "operation.name": span_name},
                exc_info=True,
            )
            raise
        finally:
            reset_run_context(tokens)


def _stringify(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def sanitize_extras(
    extra: Optional[Dict[str, Any]],
    *,
    prefix: Optional[str] = None,
) -> Dict[str, str]:
    """Sanitize arbitrary telemetry extras into a JSON-safe dict."""
    if not extra:
        return {}

    result: Dict[str, str] = {}
    for key, value in extra.items():
        sanitized = _stringify(value)
        if sanitized is None:
            continue
        field = f"{prefix}{key}" if prefix else str(key)
        result[field] = sanitized
    return result
