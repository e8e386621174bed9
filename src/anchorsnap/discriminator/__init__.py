"""Discriminator resolution: classify raw account blobs by their 8-byte tag."""

from .resolver import (
    DiscriminatorResolver,
    ResolvedAccount,
    account_discriminator,
    discriminators,
    get_resolver,
    resolve,
)

__all__ = [
    "DiscriminatorResolver",
    "ResolvedAccount",
    "account_discriminator",
    "discriminators",
    "get_resolver",
    "resolve",
]
