"""In-memory account sources.

RPC nodes return account data base64-encoded, either as a bare string or
as a ``[data, "base64"]`` pair. ``Base64AccountSource`` accepts both, so a
response already fetched by the caller can be fed straight to the
aggregator.
"""

import base64
import binascii
from typing import Any, Iterable, Iterator, Mapping, Sequence, Tuple, Union

from anchorsnap.common.exceptions import source_error

RawPairs = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def _iter_pairs(accounts: RawPairs) -> Iterator[Tuple[str, Any]]:
    if isinstance(accounts, Mapping):
        yield from accounts.items()
    else:
        yield from accounts


class StaticAccountSource:
    """Serves raw account bytes held in memory."""

    def __init__(self, accounts: Union[Mapping[str, bytes], Iterable[Tuple[str, bytes]]]):
        self._accounts = list(_iter_pairs(accounts))

    def iter_accounts(self) -> Iterator[Tuple[str, bytes]]:
        for pubkey, data in self._accounts:
            yield pubkey, bytes(data)

    def __len__(self) -> int:
        return len(self._accounts)


class Base64AccountSource:
    """Serves account data delivered base64-encoded."""

    def __init__(self, accounts: RawPairs):
        self._accounts = list(_iter_pairs(accounts))

    @staticmethod
    def decode_data(pubkey: str, value: Union[str, Sequence[str]]) -> bytes:
        """Decode one account's data field.

        Raises:
            AnchorSnapError: IO_SOURCE_ERROR for an unsupported encoding or
                invalid base64
        """
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise source_error(f"Expected [data, encoding] for {pubkey}, got {len(value)} items", identifier=pubkey)
            value, encoding = value
            if encoding != "base64":
                raise source_error(f"Unsupported account data encoding '{encoding}'", identifier=pubkey)
        if not isinstance(value, str):
            raise source_error(f"Account data for {pubkey} must be a base64 string", identifier=pubkey)
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise source_error(f"Invalid base64 account data for {pubkey}", identifier=pubkey, cause=exc) from exc

    def iter_accounts(self) -> Iterator[Tuple[str, bytes]]:
        for pubkey, value in self._accounts:
            yield pubkey, self.decode_data(pubkey, value)

    def __len__(self) -> int:
        return len(self._accounts)
