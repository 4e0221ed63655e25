"""Play modes, their on-screen key help and the keys of manual play."""

from __future__ import annotations

from enum import Enum


class PlayMode(Enum):
    """Whether a person or the AI is playing."""

    MANUAL = "manual"
    AUTO = "auto"

    def controls(self) -> tuple[tuple[str, str], ...]:
        """Key name and description pairs shown in the controls panel."""
        if self is PlayMode.MANUAL:
            return (
                ("Left", "Move left"),
                ("Right", "Move right"),
                ("Down", "Soft drop"),
                ("Up", "Hard drop"),
                ("z", "Rotate left"),
                ("x", "Rotate right"),
                ("Space", "Hold"),
                ("p", "Pause"),
                ("q", "Quit"),
            )
        return (("p", "Pause"), ("q", "Quit"))


class ManualPlayAction(Enum):
    """An action a player can take during manual play."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"
    PAUSE = "pause"
    QUIT = "quit"

    @classmethod
    def from_key(cls, key: str) -> "ManualPlayAction | None":
        """Map a key to its action.

        Arrow keys are named "Left", "Right", "Down" and "Up"; other keys are
        given as the character they type. Unbound keys give None.
        """
        return _KEY_BINDINGS.get(key)


_KEY_BINDINGS = {
    "Left": ManualPlayAction.MOVE_LEFT,
    "Right": ManualPlayAction.MOVE_RIGHT,
    "Down": ManualPlayAction.SOFT_DROP,
    "Up": ManualPlayAction.HARD_DROP,
    "z": ManualPlayAction.ROTATE_LEFT,
    "x": ManualPlayAction.ROTATE_RIGHT,
    " ": ManualPlayAction.HOLD,
    "p": ManualPlayAction.PAUSE,
    "q": ManualPlayAction.QUIT,
}