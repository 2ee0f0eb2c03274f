"""Symbolic key events understood by the simulation.

The frame driver translates raw keyboard input into :class:`Key` members.
Events can also be given by their symbolic name (``"PauseToggle"``) or by
the default keyboard binding (``"Space"``); anything else resolves to
``None`` and is ignored.
"""

from enum import Enum

from beartype import beartype


class Key(Enum):
    """Key events that mutate simulation state."""

    RESET = "Reset"
    PAUSE_TOGGLE = "PauseToggle"
    GRAVITY_TOGGLE = "GravityToggle"
    DRAG_TOGGLE = "DragToggle"
    THRUST_TOGGLE = "ThrustToggle"
    EXHAUST_LEFT = "ExhaustLeft"
    EXHAUST_RIGHT = "ExhaustRight"


# Default keyboard layout
KEYBOARD_BINDINGS: dict[str, Key] = {
    "R": Key.RESET,
    "Space": Key.PAUSE_TOGGLE,
    "G": Key.GRAVITY_TOGGLE,
    "D": Key.DRAG_TOGGLE,
    "T": Key.THRUST_TOGGLE,
    "Left": Key.EXHAUST_LEFT,
    "Right": Key.EXHAUST_RIGHT,
}


@beartype
def resolve_key(key: Key | str) -> Key | None:
    """Resolve a key event from a Key, symbolic name or keyboard binding.

    Args:
        key: Key member, symbolic name ("GravityToggle") or binding ("G")

    Returns:
        Matching Key, or None for unrecognized input
    """
    if isinstance(key, Key):
        return key
    try:
        return Key(key)
    except ValueError:
        return KEYBOARD_BINDINGS.get(key)
