"""Shared fixtures: sample interface descriptions and a blob encoder."""

import copy
import json
import struct
from pathlib import Path

import pytest
from solders.pubkey import Pubkey

from anchorsnap.discriminator import account_discriminator
from anchorsnap.schema import load_schema, load_schema_file

FIXTURES = Path(__file__).parent / "fixtures"


class Encoder:
    """Little-endian writer used to build account blobs from values."""

    def __init__(self):
        self._parts = []

    def raw(self, data: bytes) -> "Encoder":
        self._parts.append(bytes(data))
        return self

    def u8(self, value: int) -> "Encoder":
        return self.raw(struct.pack("<B", value))

    def u16(self, value: int) -> "Encoder":
        return self.raw(struct.pack("<H", value))

    def u32(self, value: int) -> "Encoder":
        return self.raw(struct.pack("<I", value))

    def u64(self, value: int) -> "Encoder":
        return self.raw(struct.pack("<Q", value))

    def i64(self, value: int) -> "Encoder":
        return self.raw(struct.pack("<q", value))

    def u128(self, value: int) -> "Encoder":
        return self.raw(value.to_bytes(16, "little", signed=False))

    def i128(self, value: int) -> "Encoder":
        return self.raw(value.to_bytes(16, "little", signed=True))

    def f64(self, value: float) -> "Encoder":
        return self.raw(struct.pack("<d", value))

    def boolean(self, value: bool) -> "Encoder":
        return self.u8(1 if value else 0)

    def pubkey(self, key: Pubkey) -> "Encoder":
        return self.raw(bytes(key))

    def some(self) -> "Encoder":
        return self.u8(1)

    def none(self) -> "Encoder":
        return self.u8(0)

    def build(self) -> bytes:
        return b"".join(self._parts)


def make_pubkey(seed: int) -> Pubkey:
    return Pubkey(bytes([seed]) * 32)


def account_blob(type_name: str, payload: bytes) -> bytes:
    """Prefix ``payload`` with the discriminator of ``type_name``."""
    return account_discriminator(type_name) + payload


WIDGET_IDL = {
    "version": "0.1.0",
    "name": "widgets",
    "instructions": [
        {
            "name": "initialize",
            "accounts": [{"name": "widget", "isMut": True, "isSigner": False}],
            "args": [{"name": "id", "type": "u64"}],
        }
    ],
    "accounts": [
        {
            "name": "Widget",
            "type": {
                "kind": "struct",
                "fields": [
                    {"name": "id", "type": "u64"},
                    {"name": "enabled", "type": "bool"},
                    {"name": "owner", "type": "publicKey"},
                    {"name": "data", "type": {"array": ["u8", 4]}},
                    {"name": "parent", "type": {"option": "publicKey"}},
                    {"name": "status", "type": {"defined": "Status"}},
                ],
            },
        },
        {
            "name": "Gadget",
            "type": {"kind": "struct", "fields": [{"name": "count", "type": "u16"}]},
        },
    ],
    "types": [
        {
            "name": "Status",
            "type": {
                "kind": "enum",
                "variants": [
                    {"name": "Idle"},
                    {"name": "Active", "fields": [{"name": "since", "type": "i64"}]},
                    {"name": "Paused", "fields": ["u8", "bool"]},
                ],
            },
        }
    ],
    "errors": [{"code": 6000, "name": "Disabled", "msg": "Widget is disabled"}],
}

OWNER = make_pubkey(7)
PARENT = make_pubkey(9)


@pytest.fixture
def widget_idl():
    """A fresh copy of the widget interface description."""
    return copy.deepcopy(WIDGET_IDL)


@pytest.fixture
def widget_schema():
    return load_schema(json.dumps(WIDGET_IDL))


@pytest.fixture
def encoder():
    return Encoder()


@pytest.fixture
def widget_payload():
    """Factory encoding a Widget payload (no discriminator)."""
    def build(
        widget_id=42,
        enabled=True,
        owner=OWNER,
        data=(1, 2, 3, 4),
        parent=PARENT,
        status=("Active", -5),
    ) -> bytes:
        enc = Encoder().u64(widget_id).boolean(enabled).pubkey(owner).raw(bytes(data))
        if parent is None:
            enc.none()
        else:
            enc.some().pubkey(parent)
        name = status[0]
        if name == "Idle":
            enc.u8(0)
        elif name == "Active":
            enc.u8(1).i64(status[1])
        else:
            enc.u8(2).u8(status[1]).boolean(status[2])
        return enc.build()
    return build


@pytest.fixture
def widget_blob(widget_payload):
    """Factory encoding a complete Widget account blob."""
    def build(**overrides) -> bytes:
        return account_blob("Widget", widget_payload(**overrides))
    return build


@pytest.fixture
def gadget_blob():
    return account_blob("Gadget", Encoder().u16(3).build())


@pytest.fixture
def meteora_schema():
    return load_schema_file(FIXTURES / "meteora_pool_idl.json")


@pytest.fixture
def pool_payload():
    """Factory encoding a Meteora ``Pool`` payload.

    ``curve`` is ``None`` for a constant product pool or ``(amp, depeg_tag)``
    for a stable pool.
    """
    def build(enabled=True, pool_type=1, total_locked_lp=5_000, curve=None) -> bytes:
        enc = Encoder()
        for seed in range(1, 8):
            enc.pubkey(make_pubkey(seed))
        enc.u8(254).boolean(enabled)
        enc.pubkey(make_pubkey(8)).pubkey(make_pubkey(9))
        enc.u64(1_700_000_000)
        enc.raw(bytes(24))
        enc.u64(25).u64(10_000).u64(20).u64(100)
        enc.u8(pool_type)
        enc.pubkey(make_pubkey(10))
        enc.u64(total_locked_lp)
        enc.u64(0).pubkey(make_pubkey(11)).pubkey(make_pubkey(12)).u8(0)
        enc.u64(0).pubkey(make_pubkey(13)).u64(0).u64(0)
        enc.raw(bytes(6))
        for _ in range(42):
            enc.u64(0)
        if curve is None:
            enc.u8(0)
        else:
            amp, depeg_tag = curve
            enc.u8(1).u64(amp)
            enc.u64(1).u64(1_000).u8(6)
            enc.u64(1_000_000).u64(1_690_000_000).u8(depeg_tag)
            enc.u64(1_680_000_000)
        return enc.build()
    return build


@pytest.fixture
def pool_blob(pool_payload):
    def build(**overrides) -> bytes:
        return account_blob("Pool", pool_payload(**overrides))
    return build


@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def parent():
    return PARENT


@pytest.fixture
def make_blob():
    """``account_blob`` as a fixture: ``make_blob(type_name, payload)``."""
    return account_blob
