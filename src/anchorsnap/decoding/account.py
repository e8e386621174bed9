"""Per-blob decode pipeline: resolve, then decode or fall back."""

from typing import Optional

from anchorsnap.common.exceptions import UnknownDiscriminatorError, field_mismatch_error
from anchorsnap.decoding.layout import DEFAULT_MAX_DEPTH, LayoutDecoder
from anchorsnap.decoding.registry import DecoderRegistry
from anchorsnap.decoding.types import DecodedAccount, fallback_record
from anchorsnap.discriminator.resolver import DiscriminatorResolver, get_resolver
from anchorsnap.logging import get_logger
from anchorsnap.schema.model import Schema

logger = get_logger(__name__)


class AccountDecoder:
    """Turns one raw ``(pubkey, blob)`` pair into a DecodedAccount.

    Unknown discriminators and resolved types without a registered decoder
    both produce fallback records; they never raise. Blobs too short to
    carry a discriminator and payloads that do not match their layout raise
    ``ResolveError`` / ``DecodeError`` for the caller to isolate.

    Attributes:
        schema: Loaded schema
        registry: Account types decoded structurally
        resolver: Discriminator lookup for ``schema``
        layout: Field walker for ``schema``
    """

    def __init__(
        self,
        schema: Schema,
        registry: DecoderRegistry,
        layout: Optional[LayoutDecoder] = None,
        resolver: Optional[DiscriminatorResolver] = None,
    ):
        self.schema = schema
        self.registry = registry
        self.resolver = resolver or get_resolver(schema)
        self.layout = layout or LayoutDecoder(schema, max_depth=DEFAULT_MAX_DEPTH)

    def decode_account(self, pubkey: str, blob: bytes) -> DecodedAccount:
        """Resolve and decode one account blob.

        Args:
            pubkey: Account identifier
            blob: Complete raw account data, discriminator included

        Returns:
            Structurally decoded record, or a fallback record

        Raises:
            ResolveError: RESOLVE_TOO_SHORT if the blob is under 8 bytes
            DecodeError: If a registered type's payload does not match its layout
                or its projection raises
        """
        try:
            resolved = self.resolver.resolve(blob)
        except UnknownDiscriminatorError as exc:
            logger.debug(
                "decode.unknown_discriminator",
                extra={"pubkey": pubkey, "discriminator": exc.discriminator_hex},
            )
            return fallback_record(pubkey, exc.discriminator)

        if resolved.type_name not in self.registry:
            if not self.registry.is_acknowledged(resolved.type_name):
                logger.warning(
                    f"address: {pubkey}, Unhandled account type: {resolved.type_name} "
                    f"(discriminator: {resolved.discriminator.hex()})",
                    extra={
                        "pubkey": pubkey,
                        "account_type": resolved.type_name,
                        "discriminator": resolved.discriminator.hex(),
                    },
                )
            return fallback_record(pubkey, resolved.discriminator, resolved.type_name)

        data = self.layout.decode(resolved.type_name, resolved.payload)
        projection = self.registry.get_projection(resolved.type_name)
        if projection is not None:
            try:
                data = projection(data)
            except Exception as exc:
                raise field_mismatch_error(
                    resolved.type_name,
                    f"projection failed: {type(exc).__name__}: {exc}",
                    cause=exc,
                ) from exc

        return DecodedAccount(pubkey=pubkey, account_type=resolved.type_name, data=data)
