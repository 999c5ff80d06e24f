"""Search – literal-pattern escaping.

Every pattern sent to the store is built from caller input through
:func:`escape_pattern`; no other module concatenates raw input into a
regular expression.
"""
from __future__ import annotations

import re

# Metacharacters of the store's (PCRE) pattern syntax.
_METACHARACTERS = re.compile(r"[.*+?^${}()|\[\]\\]")


def escape_pattern(text: str) -> str:
    """Backslash-escape every pattern metacharacter in *text*.

    The result matches *text* literally, e.g. ``"a.b"`` → ``"a\\.b"``.
    """
    return _METACHARACTERS.sub(r"\\\g<0>", text)


def contains_pattern(text: str) -> str:
    """Pattern matching *text* anywhere in a value."""
    return escape_pattern(text)


def anchored_pattern(text: str) -> str:
    """Pattern matching a value equal to *text* in its entirety.

    ``$`` alone also matches before a trailing newline; the lookahead
    rejects it.  ``\\z`` would do the same but the stdlib ``re`` used by
    the in-memory store does not support it.
    """
    return f"^{escape_pattern(text)}$(?!\\n)"


__all__ = ["anchored_pattern", "contains_pattern", "escape_pattern"]
