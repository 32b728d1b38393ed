"""Persistence subsystem.

Provides:
- A versioned JSON codec for :class:`grid_rogue.state.State`
- :class:`SaveStore`, an atomic single-file save slot
- The error taxonomy raised by both
"""

from .codec import SAVE_FORMAT, SAVE_VERSION, decode_state, encode_state
from .errors import (
    PersistenceError,
    SaveDecodeError,
    SaveEncodeError,
    SaveIOError,
    SaveNotFoundError,
    SaveVersionError,
)
from .store import SaveStore

__all__ = [
    "SAVE_FORMAT",
    "SAVE_VERSION",
    "decode_state",
    "encode_state",
    "PersistenceError",
    "SaveDecodeError",
    "SaveEncodeError",
    "SaveIOError",
    "SaveNotFoundError",
    "SaveVersionError",
    "SaveStore",
]
