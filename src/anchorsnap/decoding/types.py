"""Decode result types."""

from typing import Any, Dict, Optional

from pydantic import Field

from anchorsnap.constants import UNKNOWN_ACCOUNT_TYPE
from anchorsnap.types.base import SnapBaseModel


class DecodedAccount(SnapBaseModel):
    """One decoded account.

    Attributes:
        pubkey: Identifier (address) of the account the blob came from
        account_type: Resolved type name, or ``"Unknown"``
        data: JSON-compatible value tree
        fallback: True when the record only carries the discriminator
    """

    pubkey: str
    account_type: str
    data: Any
    fallback: bool = Field(default=False, exclude=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pubkey": self.pubkey,
            "account_type": self.account_type,
            "data": self.data,
        }

    @property
    def is_unknown(self) -> bool:
        return self.account_type == UNKNOWN_ACCOUNT_TYPE


def fallback_record(pubkey: str, discriminator: bytes, account_type: Optional[str] = None) -> DecodedAccount:
    """Build the minimal record for a blob whose layout is not decoded."""
    return DecodedAccount(
        pubkey=pubkey,
        account_type=account_type or UNKNOWN_ACCOUNT_TYPE,
        data={"discriminator": discriminator.hex()},
        fallback=True,
    )
