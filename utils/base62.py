"""
Base62 codec.

The alphabet preserves ASCII ordering, so equal-width encodings sort like
the integers they encode.
"""

from core.errors import InvalidEncoding, OutOfRange

BASE62 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(BASE62)
_INDEX = {char: i for i, char in enumerate(BASE62)}


def encode(n):
    """Encode a non-negative integer."""
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidEncoding(f"Cannot encode {n!r}, non-negative integer expected", context={"value": n})
    if n == 0:
        return BASE62[0]

    chars = []
    while n > 0:
        n, remainder = divmod(n, BASE)
        chars.append(BASE62[remainder])

    return "".join(reversed(chars))


def encode_fixed(n, width):
    """Encode left-padded with '0' to exactly `width` chars."""
    encoded = encode(n)
    if len(encoded) > width:
        raise OutOfRange(f"{n} needs more than {width} base62 chars", context={"value": n, "width": width})
    return encoded.rjust(width, BASE62[0])


def decode(s):
    """Decode a base62 string back to its integer."""
    if not isinstance(s, str) or not s:
        raise InvalidEncoding("Cannot decode empty or non-string value", context={"value": s})

    n = 0
    for char in s:
        try:
            n = n * BASE + _INDEX[char]
        except KeyError:
            raise InvalidEncoding(f"Invalid base62 char {char!r} in {s!r}", context={"value": s}) from None
    return n
