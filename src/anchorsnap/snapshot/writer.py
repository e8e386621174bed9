"""JSON persistence of finished snapshots."""

import json
from pathlib import Path
from typing import Union

from anchorsnap.common.exceptions import write_error
from anchorsnap.logging import get_logger
from anchorsnap.snapshot.types import Snapshot

logger = get_logger(__name__)


class JsonSnapshotWriter:
    """Writes a snapshot as a pretty-printed JSON document keyed by pubkey.

    Each entry holds ``pubkey``, ``account_type`` and ``data``. Keys are
    sorted so repeated runs over the same accounts produce identical files.
    """

    def __init__(self, path: Union[str, Path], indent: int = 2):
        self.path = Path(path)
        self.indent = indent

    def render(self, snapshot: Snapshot) -> str:
        """Serialize ``snapshot`` to strict JSON text.

        Raises:
            AnchorSnapError: IO_WRITE_ERROR if a value has no JSON encoding,
                such as a non-finite float left by a projection
        """
        try:
            return json.dumps(
                snapshot.to_dict(),
                indent=self.indent,
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise write_error(f"Snapshot is not serializable as JSON: {exc}", path=str(self.path), cause=exc) from exc

    def write(self, snapshot: Snapshot) -> None:
        """Write ``snapshot`` to ``self.path``, creating parent directories.

        Raises:
            AnchorSnapError: IO_WRITE_ERROR if the snapshot cannot be serialized
                or the file cannot be written
        """
        document = self.render(snapshot)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(document + "\n", encoding="utf-8")
        except OSError as exc:
            raise write_error(f"Failed to write snapshot to {self.path}", path=str(self.path), cause=exc) from exc

        logger.info(
            "snapshot.saved",
            extra={"path": str(self.path), "accounts": len(snapshot)},
        )
