"""Text sanitization helpers."""

# Characters escaped before any user text is stored
_MARKUP_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
        "/": "&#x2F;",
    }
)


def escape_markup(text: str) -> str:
    """Escape ``& < > " ' /`` so stored text renders as plain text.

    Escaping happens exactly once, at write time. Rendering surfaces must
    not escape again.

    Args:
        text: Raw user input

    Returns:
        Escaped text
    """
    return text.translate(_MARKUP_ESCAPES)
