"""Message log helpers.

Messages are wrapped to the width of the message panel when they are logged,
so the log holds display lines rather than raw sentences.
"""

import textwrap
from dataclasses import replace

from grid_rogue.state import Message, State
from grid_rogue.types import Color


MSG_WIDTH = 58


def add_message(
    state: State, text: str, color: Color = Color.WHITE, width: int = MSG_WIDTH
) -> State:
    """Append ``text`` to the log, split into lines of at most ``width`` characters."""
    lines = textwrap.wrap(text, width) or [""]
    return replace(
        state, messages=state.messages.extend(Message(line, color) for line in lines)
    )
