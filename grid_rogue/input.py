"""Input events and the line-oriented terminal input source.

The session never talks to a keyboard directly. It asks an
:class:`InputSource` for :class:`InputEvent` values: at most one key name
(``"k"``, ``"up"``, ``"escape"``, ``"a"``...) and the latest pointer tile.
A poll without a key yields an event whose ``key`` is ``None``, which the
session treats as "do nothing this frame".

:class:`LineInput` reads one command per line from a text stream:

* a key name, e.g. ``k`` or ``escape`` (``esc`` and ``q`` are aliases of
  ``escape``);
* ``look X Y`` (or ``@ X Y``) to move the pointer to tile ``(X, Y)``;
* an empty line for "no key";
* ``close`` or end of input to close the window.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, TextIO

from grid_rogue.components import Position


logger = logging.getLogger(__name__)

KEY_ALIASES = {
    "esc": "escape",
    "q": "escape",
    "quit": "escape",
}


@dataclass(frozen=True)
class InputEvent:
    """One poll result.

    Attributes:
        key: Normalized key name, or ``None`` when no key was pressed.
        pointer: Tile under the pointer, if known.
    """

    key: Optional[str] = None
    pointer: Optional[Position] = None


NO_EVENT = InputEvent()


class InputSource(Protocol):
    @property
    def closed(self) -> bool:
        """True once the hosting window or stream has gone away."""
        ...

    def poll(self) -> InputEvent:
        """Return the next pending event, or a key-less event."""
        ...

    def wait(self) -> InputEvent:
        """Block until a key event arrives (or the source closes)."""
        ...


class LineInput:
    """Read input events from a line-oriented text stream."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self._closed = False
        self._pointer: Optional[Position] = None

    @property
    def closed(self) -> bool:
        return self._closed

    def poll(self) -> InputEvent:
        if self._closed:
            return NO_EVENT
        line = self.stream.readline()
        if line == "":
            logger.info("Input stream ended")
            self._closed = True
            return NO_EVENT
        return self._parse(line)

    def wait(self) -> InputEvent:
        while not self._closed:
            event = self.poll()
            if event.key is not None:
                return event
        return NO_EVENT

    def _parse(self, line: str) -> InputEvent:
        tokens = line.strip().split()
        if not tokens:
            return InputEvent(pointer=self._pointer)

        head = tokens[0].lower()
        if head == "close":
            self._closed = True
            return NO_EVENT
        if head in ("look", "@"):
            try:
                self._pointer = Position(int(tokens[1]), int(tokens[2]))
            except (IndexError, ValueError):
                logger.warning("Ignoring malformed pointer command %r", line.strip())
            return InputEvent(pointer=self._pointer)

        return InputEvent(key=KEY_ALIASES.get(head, head), pointer=self._pointer)
