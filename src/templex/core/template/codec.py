"""
Escape codec.

``\\\\``, ``\\{`` and ``\\}`` are swapped for reserved code points before the
source is split on braces, and swapped back in every chunk afterwards, so the
splitter only ever sees unescaped braces.
"""

ESCAPED_BACKSLASH = "\u0000"
ESCAPED_OPEN = "\u0001"
ESCAPED_CLOSE = "\u0002"

RESERVED = frozenset({ESCAPED_BACKSLASH, ESCAPED_OPEN, ESCAPED_CLOSE})


def has_reserved(source: str) -> bool:
    return any(c in RESERVED for c in source)


def encode(source: str) -> str:
    # Backslash pairs first, so "\\\\{" keeps its brace
    return (
        source.replace("\\\\", ESCAPED_BACKSLASH)
        .replace("\\{", ESCAPED_OPEN)
        .replace("\\}", ESCAPED_CLOSE)
    )


def decode(text: str) -> str:
    return (
        text.replace(ESCAPED_BACKSLASH, "\\")
        .replace(ESCAPED_OPEN, "{")
        .replace(ESCAPED_CLOSE, "}")
    )
