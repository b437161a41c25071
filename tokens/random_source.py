"""
Random strings built from secure random bytes.

Bytes are rendered with the base64 alphabet, then '+' and '/' are replaced
by '0' so that output only contains [a-zA-Z0-9].
"""

import base64
import math
import os
import re

from core.errors import InvalidOption, RandomSourceError
from utils.timestamp import now_seconds

DEFAULT_PREFIX = ""
DEFAULT_SEPARATOR = "_"


class SystemRandomBytes:
    """Secure random bytes from the operating system."""

    async def __call__(self, n):
        try:
            return os.urandom(n)
        except (NotImplementedError, OSError) as exc:
            raise RandomSourceError("Error when generating random bytes", cause=exc) from exc


class SystemClock:
    """Wall clock in Unix seconds."""

    def now(self):
        return now_seconds()


def _chars_needed_after_prefix(length, prefix, separator):
    return length - len(prefix) - len(separator) if prefix else length


def _check_prefix_options(prefix, separator):
    if not isinstance(prefix, str) or not isinstance(separator, str):
        raise InvalidOption("String prefix options expected", context={"prefix": prefix, "separator": separator})


class RandomSource:
    def __init__(self, random_bytes=None):
        self._random_bytes = random_bytes or SystemRandomBytes()

    async def random_bytes(self, n):
        try:
            raw = await self._random_bytes(n)
        except RandomSourceError:
            raise
        except Exception as exc:
            raise RandomSourceError("Error when generating random bytes", cause=exc) from exc
        if not isinstance(raw, (bytes, bytearray)) or len(raw) < n:
            raise RandomSourceError(f"Random source returned fewer than {n} bytes", context={"requested": n})
        return bytes(raw[:n])

    async def random_string(self, length, prefix=DEFAULT_PREFIX, separator=DEFAULT_SEPARATOR,
                            replace_pattern=None, replacement=None):
        """Random string of `length` chars, including `prefix + separator` when a prefix is given.

        `replace_pattern` and `replacement` are passed to `re.sub` on the random part only.
        The replacement must keep the length unchanged, this is not checked.
        """
        _check_prefix_options(prefix, separator)
        if bool(replace_pattern) != bool(replacement):
            raise InvalidOption("Both of replace_pattern and replacement optional parameters expected")

        chars_needed = _chars_needed_after_prefix(length, prefix, separator)
        base_string = prefix + separator if prefix else ""
        if chars_needed <= 0:
            return base_string

        raw = await self.random_bytes(math.ceil(chars_needed * 3 / 4))
        random_chars = (base64.b64encode(raw).decode("ascii")[:chars_needed]
                        .replace("+", "0")
                        .replace("/", "0"))

        if replace_pattern:
            random_chars = re.sub(replace_pattern, replacement, random_chars)

        return base_string + random_chars

    async def pad_with_random_chars(self, base, length, position="right", **random_options):
        """Pad `base` with random chars up to `length`, before it when position is 'left'."""
        random_chars = await self.random_string(length - len(base), **random_options)
        if position == "left":
            return random_chars + base
        return base + random_chars


def random_string_regex(length=1, prefix=DEFAULT_PREFIX, separator=DEFAULT_SEPARATOR):
    """Pattern matching strings produced by `random_string` with the same arguments."""
    _check_prefix_options(prefix, separator)
    chars_needed = max(_chars_needed_after_prefix(length, prefix, separator), 0)
    escaped_base = re.escape(prefix + separator if prefix else "")
    return re.compile(f"^{escaped_base}[a-zA-Z0-9]{{{chars_needed}}}$")
