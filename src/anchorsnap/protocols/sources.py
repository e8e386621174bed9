"""Boundary protocols for raw account input and snapshot output.

Retrieving raw accounts (RPC calls, pagination, commitment levels) and
persisting snapshots are collaborators of the decoding core. These
protocols describe the only things the core needs from them.
"""

from typing import TYPE_CHECKING, Iterable, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from anchorsnap.snapshot.types import Snapshot


@runtime_checkable
class AccountSource(Protocol):
    """Supplies raw ``(pubkey, data)`` pairs.

    Each ``data`` must be one complete account record whose first 8 bytes
    are the discriminator.
    """

    def iter_accounts(self) -> Iterable[Tuple[str, bytes]]:
        """Yield ``(pubkey, data)`` pairs.

        Raises:
            AnchorSnapError: IO_SOURCE_ERROR if the source cannot supply data
        """
        ...


@runtime_checkable
class SnapshotWriter(Protocol):
    """Persists a finished snapshot."""

    def write(self, snapshot: "Snapshot") -> None:
        """Write ``snapshot`` to the underlying store.

        Raises:
            AnchorSnapError: IO_WRITE_ERROR if the snapshot cannot be stored
        """
        ...
