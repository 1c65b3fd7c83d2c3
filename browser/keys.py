"""
Keyboard key names.

Selenium-style constant names mapped to the key names Playwright's
``keyboard.press`` and ``ElementHandle.press`` accept.
"""


class Key:
    """Key names for ``press`` calls, e.g. ``await element.press(Key.ENTER)``."""

    BACK_SPACE = "Backspace"
    TAB = "Tab"
    ENTER = "Enter"
    RETURN = "Enter"
    SHIFT = "Shift"
    CONTROL = "Control"
    ALT = "Alt"
    META = "Meta"
    COMMAND = "Meta"
    ESCAPE = "Escape"
    SPACE = "Space"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    END = "End"
    HOME = "Home"
    ARROW_LEFT = "ArrowLeft"
    ARROW_UP = "ArrowUp"
    ARROW_RIGHT = "ArrowRight"
    ARROW_DOWN = "ArrowDown"
    LEFT = ARROW_LEFT
    UP = ARROW_UP
    RIGHT = ARROW_RIGHT
    DOWN = ARROW_DOWN
    INSERT = "Insert"
    DELETE = "Delete"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"

    @staticmethod
    def chord(*keys: str) -> str:
        """
        Combine keys into one shortcut, e.g. ``Key.chord(Key.CONTROL, "a")``
        gives ``"Control+a"``.
        """
        return "+".join(keys)
