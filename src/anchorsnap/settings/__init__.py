"""Settings module providing configuration management for anchorsnap.

Built on Pydantic Settings. Configuration sources, in precedence order:

    1. Environment variables
    2. A ``.env`` file in the working directory
    3. Default values in code

Environment Variable Naming:
    - Top level: ``PROGRAM_ID``, ``SCHEMA_PATH``, ``LOG_LEVEL``, ``MAX_WORKERS``
    - Decoding: ``DECODING_ALLOWED_ACCOUNT_TYPES``, ``DECODING_STRICT_TRAILING_BYTES``,
      ``DECODING_MAX_DEPTH``
    - Output: ``OUTPUT_SNAPSHOT_PATH``, ``OUTPUT_INDENT``

Quick Start:
    >>> from anchorsnap.settings import get_settings
    >>> settings = get_settings()
    >>> settings.decoding.get_allowed_account_types()
    ['Pool']
"""

from .main import _Settings, get_settings, _reload_settings
from .base import SnapBaseSettings
from .decoding import DecodingSettings
from .output import OutputSettings

__all__ = [
    "get_settings",
    "SnapBaseSettings",
    "DecodingSettings",
    "OutputSettings",
]
