"""Constants module for anchorsnap.

This module contains all constant values and enumerations used throughout
anchorsnap. It has no dependencies on other anchorsnap modules.
"""

from anchorsnap.constants.core import (
    ACCOUNT_DISCRIMINATOR_NAMESPACE,
    DISCRIMINATOR_SIZE,
    PUBKEY_SIZE,
    UNKNOWN_ACCOUNT_TYPE,
    WIDE_INTEGERS,
    Primitive,
    TypeKind,
)

__all__ = [
    "ACCOUNT_DISCRIMINATOR_NAMESPACE",
    "DISCRIMINATOR_SIZE",
    "PUBKEY_SIZE",
    "UNKNOWN_ACCOUNT_TYPE",
    "WIDE_INTEGERS",
    "Primitive",
    "TypeKind",
]
