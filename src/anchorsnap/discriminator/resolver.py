"""Discriminator derivation and blob classification.

Every account blob starts with an 8-byte tag: the first 8 bytes of
``sha256("account:<TypeName>")``. Deriving tags from names lets
independently built schemas agree on them without a registry. The
resolver precomputes a tag-to-name table once per schema, so classifying a
blob is a single dictionary lookup.
"""

import hashlib
from typing import Dict, List, Mapping, NamedTuple, Optional

from anchorsnap.common.exceptions import UnknownDiscriminatorError, too_short_error
from anchorsnap.constants import ACCOUNT_DISCRIMINATOR_NAMESPACE, DISCRIMINATOR_SIZE
from anchorsnap.logging import get_logger
from anchorsnap.schema.model import Schema

logger = get_logger(__name__)


def account_discriminator(name: str, namespace: str = ACCOUNT_DISCRIMINATOR_NAMESPACE) -> bytes:
    """Return the 8-byte tag for an account type name."""
    preimage = f"{namespace}:{name}".encode("utf-8")
    return hashlib.sha256(preimage).digest()[:DISCRIMINATOR_SIZE]


class ResolvedAccount(NamedTuple):
    """A blob classified to an account type.

    Attributes:
        type_name: The matching account type
        discriminator: The blob's leading 8 bytes
        payload: Everything after the discriminator
    """

    type_name: str
    discriminator: bytes
    payload: bytes


class DiscriminatorResolver:
    """Classifies raw blobs against the account types of one schema."""

    def __init__(self, schema: Schema):
        self.schema = schema
        table: Dict[bytes, str] = {}
        for account in schema.accounts:
            tag = account_discriminator(account.name)
            existing = table.get(tag)
            if existing is not None:
                # First declaration wins
                logger.warning(
                    "discriminator.collision",
                    extra={
                        "discriminator": tag.hex(),
                        "kept_type": existing,
                        "shadowed_type": account.name,
                    },
                )
                continue
            table[tag] = account.name
        self._table = table

    @property
    def table(self) -> Mapping[bytes, str]:
        return dict(self._table)

    def discriminator_for(self, type_name: str) -> Optional[bytes]:
        """Return the tag registered for ``type_name``, if it is an account type."""
        for tag, name in self._table.items():
            if name == type_name:
                return tag
        return None

    def resolve(self, blob: bytes) -> ResolvedAccount:
        """Classify a blob by its leading tag.

        Args:
            blob: Complete raw account data

        Returns:
            ResolvedAccount with the type name and the bytes after the tag

        Raises:
            ResolveError: RESOLVE_TOO_SHORT if the blob has fewer than 8 bytes
            UnknownDiscriminatorError: If no account type has this tag
        """
        if len(blob) < DISCRIMINATOR_SIZE:
            raise too_short_error(len(blob), DISCRIMINATOR_SIZE)

        tag = bytes(blob[:DISCRIMINATOR_SIZE])
        type_name = self._table.get(tag)
        if type_name is None:
            raise UnknownDiscriminatorError(tag)
        return ResolvedAccount(type_name, tag, bytes(blob[DISCRIMINATOR_SIZE:]))


def get_resolver(schema: Schema) -> DiscriminatorResolver:
    """Return the resolver memoized on ``schema``."""
    return schema.resolver


def resolve(schema: Schema, blob: bytes) -> ResolvedAccount:
    """Classify ``blob`` against ``schema``. See ``DiscriminatorResolver.resolve``."""
    return get_resolver(schema).resolve(blob)


def discriminators(schema: Schema) -> List[Dict[str, str]]:
    """List every account type with its hex discriminator, in declaration order."""
    return [
        {"account_type": account.name, "discriminator": account_discriminator(account.name).hex()}
        for account in schema.accounts
    ]
