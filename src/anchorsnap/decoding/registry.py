"""Registry of account types decoded structurally.

Only registered account types get a full layout decode. Everything else
resolves to a fallback record, so new or unsupported account types in an
evolving schema never break a run. A registration may carry a projection
that reshapes the decoded tree (for example to keep a subset of fields).
"""

from typing import Any, Callable, Dict, List, Optional, Set

from anchorsnap.logging import get_logger

logger = get_logger(__name__)

Projection = Callable[[Dict[str, Any]], Any]


class DecoderRegistry:
    """Maps account type names to their decode behaviour.

    Example:
        >>> registry = DecoderRegistry()
        >>> registry.register("Pool")
        >>> @registry.projection("Vault")
        ... def vault_summary(data):
        ...     return {"total": data["total_amount"]}
        >>> registry.acknowledge("LockEscrow")
    """

    def __init__(self):
        self._projections: Dict[str, Optional[Projection]] = {}
        self._acknowledged: Set[str] = set()

    def register(self, type_name: str, projection: Optional[Projection] = None, *, replace: bool = False) -> None:
        """Register an account type for structural decoding.

        Once registered, subsequent registration attempts are ignored unless
        ``replace`` is set.

        Args:
            type_name: Account type name as written in the schema
            projection: Optional callable applied to the decoded tree
            replace: Overwrite an existing registration
        """
        if type_name in self._projections and not replace:
            logger.debug(
                f"Decoder for '{type_name}' already registered, ignoring re-registration attempt"
            )
            return
        self._projections[type_name] = projection
        self._acknowledged.discard(type_name)
        logger.debug(f"Registered decoder: {type_name}")

    def projection(self, type_name: str) -> Callable[[Projection], Projection]:
        """Decorator form of ``register`` for a projection function."""
        def decorator(func: Projection) -> Projection:
            self.register(type_name, func)
            return func
        return decorator

    def acknowledge(self, type_name: str) -> None:
        """Mark a type as known but intentionally not decoded.

        Acknowledged types still produce fallback records but are not
        reported as classification gaps.
        """
        if type_name not in self._projections:
            self._acknowledged.add(type_name)

    def unregister(self, type_name: str) -> None:
        self._projections.pop(type_name, None)

    def is_registered(self, type_name: str) -> bool:
        return type_name in self._projections

    def is_acknowledged(self, type_name: str) -> bool:
        return type_name in self._acknowledged

    def get_projection(self, type_name: str) -> Optional[Projection]:
        return self._projections.get(type_name)

    def names(self) -> List[str]:
        return list(self._projections)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._projections

    def __len__(self) -> int:
        return len(self._projections)


def register_decoder(registry: DecoderRegistry, type_name: str) -> Callable[[Projection], Projection]:
    """Decorator registering a projection for ``type_name`` on ``registry``.

    Example:
        >>> @register_decoder(registry, "Pool")
        ... def pool_summary(data):
        ...     return {"enabled": data["enabled"]}
    """
    return registry.projection(type_name)
