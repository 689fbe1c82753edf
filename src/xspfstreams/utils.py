"""String helpers shared by the playlist parsers."""

import math
import re
from typing import Optional, Union


_WORD_SEPARATORS = re.compile(r"[\s_\-]+")
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def camelize(token: str) -> str:
    """Convert a separator-delimited token to camelCase.

    Words are split on whitespace, underscores and hyphens. Words written
    entirely in capitals are lower-cased first, so ``"BITRATE"`` becomes
    ``"bitrate"`` while ``"contentType"`` is left untouched.

    Args:
        token: Token such as ``"stream-description"`` or ``"Content Type"``

    Returns:
        The camel-cased identifier, empty if the token has no words
    """
    words = [word for word in _WORD_SEPARATORS.split(token.strip()) if word]
    if not words:
        return ""

    result = []
    for i, word in enumerate(words):
        if word.isupper():
            word = word.lower()
        if i == 0:
            result.append(word[0].lower() + word[1:])
        else:
            result.append(word[0].upper() + word[1:])
    return "".join(result)


def parse_int(text: str) -> Optional[int]:
    """Parse the leading integer of a string, ignoring trailing garbage.

    ``"5000"`` and ``" 5000ms"`` both give 5000, ``"abc"`` gives None.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def to_number(text: str) -> Optional[Union[int, float]]:
    """Convert a numeric string to int or float, None if it isn't one."""
    value = text.strip()
    # int() and float() accept digit grouping underscores and non-ASCII digits
    if "_" in value or not value.isascii():
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tag names."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag
