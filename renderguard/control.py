"""Control character checks for candidate text."""

FORBIDDEN_CONTROL_CHARS = frozenset("\t\n\r")


def contains_forbidden_control(text: str) -> bool:
    """Return True if text holds a tab, line feed or carriage return."""

    return any(ch in FORBIDDEN_CONTROL_CHARS for ch in text)
