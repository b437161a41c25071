"""Unit tests for random string generation."""

import asyncio
import re

import pytest

from core.errors import InvalidOption, RandomSourceError
from tokens.random_source import RandomSource, SystemRandomBytes, random_string_regex


class FailingRandomBytes:
    async def __call__(self, n):
        raise OSError("entropy pool unavailable")


class ShortRandomBytes:
    async def __call__(self, n):
        return b"\x00" * (n - 1)


class TestRandomString:
    """Tests for RandomSource.random_string."""

    async def test_random_string_of_given_length(self):
        """Random string matches its own validation pattern."""
        random_string = await RandomSource().random_string(10)
        assert isinstance(random_string, str)
        assert random_string_regex(10).match(random_string)

    async def test_prefix_with_default_separator(self, random_source):
        """Prefix is followed by '_' and counted in length."""
        random_string = await random_source.random_string(16, prefix="TEST")
        assert re.match(r"^TEST_[a-zA-Z0-9]{11}$", random_string)
        assert random_string_regex(16, prefix="TEST").match(random_string)

    async def test_custom_prefix_and_separator(self, random_source):
        """Regex special chars in prefix and separator are escaped."""
        random_string = await random_source.random_string(16, prefix="TesT", separator="@")
        special_string = await random_source.random_string(16, prefix="+00/", separator="+")

        assert re.match(r"^TesT@[a-zA-Z0-9]{11}$", random_string)
        assert random_string_regex(16, prefix="TesT", separator="@").match(random_string)
        assert re.match(r"^\+00/\+[a-zA-Z0-9]{11}$", special_string)
        assert random_string_regex(16, prefix="+00/", separator="+").match(special_string)

    @pytest.mark.parametrize("options", [
        {"prefix": 0, "separator": "@"},
        {"prefix": "+00/", "separator": False},
    ])
    async def test_wrong_option_types(self, random_source, options):
        """Non-string prefix or separator is rejected."""
        with pytest.raises(InvalidOption, match="(?i)string"):
            await random_source.random_string(16, **options)

    async def test_short_length_returns_prefix_only(self, random_bytes):
        """No random chars are drawn when prefix fills the length."""
        random_source = RandomSource(random_bytes)
        options = {"prefix": "9Char", "separator": "LONG"}

        assert re.match(r"^9CharLONG[a-zA-Z0-9]{2}$", await random_source.random_string(11, **options))
        calls = random_bytes.calls
        assert await random_source.random_string(9, **options) == "9CharLONG"
        assert await random_source.random_string(5, **options) == "9CharLONG"
        assert random_bytes.calls == calls

    async def test_only_alphanumeric_chars(self):
        """Base64 '+' and '/' never show up."""
        random_source = RandomSource()
        strings = await asyncio.gather(*(random_source.random_string(32) for _ in range(1000)))
        pattern = random_string_regex(32)
        assert all(pattern.match(string) for string in strings)

    async def test_digit_substitution(self):
        """Substitution maps non-digit chars to digits, keeping the length."""
        random_source = RandomSource()
        strings = await asyncio.gather(*(
            random_source.random_string(
                8,
                replace_pattern=r"[^0-9]",
                replacement=lambda match: str(ord(match.group(0)) % 9),
            )
            for _ in range(1000)
        ))
        pattern = random_string_regex(8)
        assert all(pattern.match(string) for string in strings)
        assert all(string.isdigit() for string in strings)

    async def test_substitution_skips_prefix(self, random_source):
        """Prefix is left untouched by substitution."""
        random_string = await random_source.random_string(
            12, prefix="abc", replace_pattern=r"[^0-9]", replacement="7"
        )
        assert random_string.startswith("abc_")
        assert random_string[4:].isdigit()

    @pytest.mark.parametrize("options", [
        {"replace_pattern": r"[a-z]"},
        {"replacement": "0"},
    ])
    async def test_substitution_needs_both_options(self, random_source, options):
        """Pattern without replacement (or the reverse) is rejected."""
        with pytest.raises(InvalidOption):
            await random_source.random_string(8, **options)


class TestRandomBytes:
    """Tests for random byte collaborators."""

    async def test_system_random_bytes(self):
        """System source returns the requested number of bytes."""
        assert len(await SystemRandomBytes()(16)) == 16

    async def test_failing_source_raises_random_source_error(self):
        """Collaborator failures surface as RandomSourceError."""
        with pytest.raises(RandomSourceError) as exc_info:
            await RandomSource(FailingRandomBytes()).random_string(10)
        assert isinstance(exc_info.value.cause, OSError)

    async def test_short_source_raises_random_source_error(self):
        """Fewer bytes than requested is a failure."""
        with pytest.raises(RandomSourceError):
            await RandomSource(ShortRandomBytes()).random_string(10)


class TestPadding:
    """Tests for pad_with_random_chars."""

    async def test_pad_right(self, random_source):
        """Base is kept at the start by default."""
        padded = await random_source.pad_with_random_chars("123", 10)
        assert len(padded) == 10
        assert padded.startswith("123")

    async def test_pad_left(self, random_source):
        """Base is moved to the end with position='left'."""
        padded = await random_source.pad_with_random_chars("123", 10, position="left")
        assert len(padded) == 10
        assert padded.endswith("123")
