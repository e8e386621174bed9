"""Layout decoding of account payloads.

Key Components:
    - **LayoutDecoder**: walks a type definition and decodes bytes into a
      JSON-compatible tree
    - **DecoderRegistry**: which account types are decoded structurally
    - **AccountDecoder**: resolve + decode + fallback for one blob
"""

from .account import AccountDecoder
from .layout import DEFAULT_MAX_DEPTH, LayoutDecoder
from .reader import PRIMITIVE_CODECS, ByteReader
from .registry import DecoderRegistry, Projection, register_decoder
from .types import DecodedAccount, fallback_record

__all__ = [
    "AccountDecoder",
    "LayoutDecoder",
    "DEFAULT_MAX_DEPTH",
    "ByteReader",
    "PRIMITIVE_CODECS",
    "DecoderRegistry",
    "Projection",
    "register_decoder",
    "DecodedAccount",
    "fallback_record",
]
