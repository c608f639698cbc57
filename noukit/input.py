"""Per-frame keyboard state tracking."""

from __future__ import annotations

from enum import IntEnum

# Highest key code plus one, matching the GLFW key table.
DEFAULT_MAX_KEYS = 349


class KeyAction(IntEnum):
    """Key event actions as reported by the windowing layer."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class KeyFlag(IntEnum):
    """What happened to a key during the current frame."""

    PASSIVE = 0
    PRESSED = 1
    RELEASED = 2


class Input:
    """Tracks which keys are held and which changed during the current frame."""

    def __init__(self, max_keys: int = DEFAULT_MAX_KEYS) -> None:
        self.max_keys = max_keys
        self.reset()

    def reset(self) -> None:
        """Clear all held keys and frame flags."""
        self._states = [False] * self.max_keys
        self._flags = [KeyFlag.PASSIVE] * self.max_keys

    def _in_range(self, keycode: int) -> bool:
        return 0 <= keycode < self.max_keys

    def key_callback(self, key: int, action: int) -> None:
        """Record a key event; out-of-range keys and repeats are ignored."""
        if not self._in_range(key):
            return
        if action == KeyAction.PRESS:
            self._flags[key] = KeyFlag.PRESSED
            self._states[key] = True
        elif action == KeyAction.RELEASE:
            self._flags[key] = KeyFlag.RELEASED
            self._states[key] = False

    def frame_start(self) -> None:
        """Forget last frame's press and release events."""
        self._flags = [KeyFlag.PASSIVE] * self.max_keys

    def get_key(self, keycode: int) -> bool:
        """True while the key is held down."""
        return self._in_range(keycode) and self._states[keycode]

    def get_key_down(self, keycode: int) -> bool:
        """True if the key was pressed this frame."""
        return self._in_range(keycode) and self._flags[keycode] is KeyFlag.PRESSED

    def get_key_up(self, keycode: int) -> bool:
        """True if the key was released this frame."""
        return self._in_range(keycode) and self._flags[keycode] is KeyFlag.RELEASED