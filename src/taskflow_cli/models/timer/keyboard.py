"""Non-blocking single-key input for the full-screen timer."""

from __future__ import annotations

import logging
import select
import sys
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

# Raw keys that map onto the timer's bindings.
KEY_ALIASES = {
    "\x1b": "q",  # Esc
    "\r": "p",
    "\n": "p",
}


def normalize_key(raw: Optional[str]) -> Optional[str]:
    """Lower-case a keypress and translate aliases. Empty input is ``None``."""
    if not raw:
        return None
    return KEY_ALIASES.get(raw, raw.lower())


class NullKeyboard:
    """Used when stdin is not an interactive terminal: never reports a key."""

    def get_key(self) -> Optional[str]:
        return None

    def stop(self) -> None:
        pass


class PosixKeyboard:
    """Reads keys from a TTY switched into cbreak mode.

    The previous terminal attributes are restored by ``stop``.
    """

    def __init__(self, stream: TextIO):
        import termios
        import tty

        self._termios = termios
        self.stream = stream
        self.fd = stream.fileno()
        self.saved_attrs = termios.tcgetattr(self.fd)
        tty.setcbreak(self.fd)

    def get_key(self) -> Optional[str]:
        ready, _, _ = select.select([self.stream], [], [], 0)
        if not ready:
            return None
        return normalize_key(self.stream.read(1))

    def stop(self) -> None:
        if self.saved_attrs is None:
            return
        try:
            self._termios.tcsetattr(self.fd, self._termios.TCSADRAIN, self.saved_attrs)
        except self._termios.error as e:
            logger.warning("Could not restore terminal settings: %s", e)
        self.saved_attrs = None


class WindowsKeyboard:
    """Reads keys through ``msvcrt`` on Windows consoles."""

    def __init__(self):
        import msvcrt

        self._msvcrt = msvcrt

    def get_key(self) -> Optional[str]:
        if not self._msvcrt.kbhit():
            return None
        key = self._msvcrt.getwch()
        if key in ("\x00", "\xe0"):
            # Function and arrow keys arrive as a two-character sequence.
            self._msvcrt.getwch()
            return None
        return normalize_key(key)

    def stop(self) -> None:
        pass


def get_keyboard_handler(stream: Optional[TextIO] = None):
    """Pick a keyboard reader for the current platform and stdin."""
    stream = stream or sys.stdin
    if not stream.isatty():
        logger.debug("stdin is not a terminal; keyboard controls disabled")
        return NullKeyboard()
    if sys.platform.startswith("win"):
        return WindowsKeyboard()
    try:
        return PosixKeyboard(stream)
    except (ImportError, OSError) as e:
        logger.warning("Keyboard controls unavailable: %s", e)
        return NullKeyboard()
