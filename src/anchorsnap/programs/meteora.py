"""Meteora dynamic AMM pool program.

Registers the ``Pool`` account for structural decoding and projects it to
the fields a pool snapshot keeps. ``LockEscrow`` accounts are known but not
decoded; they yield fallback records without being reported as gaps.
"""

from typing import Any, Dict

from anchorsnap.decoding.registry import DecoderRegistry

METEORA_POOL_PROGRAM_ID = "Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB"

POOL_ACCOUNT = "Pool"
LOCK_ESCROW_ACCOUNT = "LockEscrow"

# Padding, bootstrapping and partner info are dropped from snapshots
POOL_SNAPSHOT_FIELDS = (
    "enabled",
    "lp_mint",
    "token_a_mint",
    "token_b_mint",
    "a_vault",
    "b_vault",
    "a_vault_lp",
    "b_vault_lp",
    "a_vault_lp_bump",
    "protocol_token_a_fee",
    "protocol_token_b_fee",
    "pool_type",
    "curve_type",
    "stake",
    "total_locked_lp",
)


def pool_snapshot(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep the snapshot fields of a decoded ``Pool``, missing ones skipped."""
    return {name: data[name] for name in POOL_SNAPSHOT_FIELDS if name in data}


def register(registry: DecoderRegistry) -> DecoderRegistry:
    """Register the Meteora pool decoders on ``registry``."""
    registry.register(POOL_ACCOUNT, pool_snapshot)
    registry.acknowledge(LOCK_ESCROW_ACCOUNT)
    return registry
