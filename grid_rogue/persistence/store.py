"""File-backed save slot.

:class:`SaveStore` owns one save file. Writes are atomic: the payload goes to
a temporary file in the same directory which then replaces the old save, so a
crash mid-write leaves the previous save intact. Every failure surfaces as a
:class:`grid_rogue.persistence.errors.PersistenceError` subclass; nothing here
exits the process.

Single process, single session: there is no file locking.
"""

import logging
import os
import tempfile

from grid_rogue.state import State

from .codec import decode_state, encode_state
from .errors import SaveIOError, SaveNotFoundError


logger = logging.getLogger(__name__)


class SaveStore:
    """Save/load a :class:`State` to a single file.

    Attributes:
        path: Location of the save file.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def save(self, state: State) -> None:
        """Write ``state`` to the save file, replacing any previous save.

        Raises:
            SaveEncodeError: If the state cannot be encoded.
            SaveIOError: If the file cannot be written.
        """
        payload = encode_state(state)
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=directory, prefix=f".{os.path.basename(self.path)}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as exc:
            raise SaveIOError(f"Cannot write save file {self.path}: {exc}") from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.info("Saved game to %s (%d bytes, turn %d)", self.path, len(payload), state.turn)

    def load(self) -> State:
        """Read the save file back into a :class:`State`.

        Raises:
            SaveNotFoundError: If there is no save file.
            SaveIOError: If the file exists but cannot be read.
            SaveDecodeError: If the content is not a valid save.
        """
        try:
            with open(self.path, "rb") as f:
                payload = f.read()
        except FileNotFoundError as exc:
            raise SaveNotFoundError(f"No save file at {self.path}") from exc
        except OSError as exc:
            raise SaveIOError(f"Cannot read save file {self.path}: {exc}") from exc

        state = decode_state(payload)
        logger.info("Loaded game from %s (turn %d)", self.path, state.turn)
        return state
