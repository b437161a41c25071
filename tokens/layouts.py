"""
ApiKey layout versions.

Keys are `{type}_{env}_{payload}`. The payload holds random chars with a
5-char marketplace block (zone + masked id) spliced in at a fixed offset,
and ends with the 3-char shuffler:

    pubk_live_ iuJzTKo5wumu E1inR jmcg imx
               random       block rand shuffler

Parsing tries layouts in order, newest first.
"""

import re

from core.errors import InvalidType
from tokens.masking import MARKETPLACE_PART_LENGTH, SHUFFLER_LENGTH

BUILTIN_KEY_TYPES = (
    # Two chars max.
    "sk",  # secret
    "pk",  # publishable
    "ck",  # content
)

# Legacy short codes, normalized on parse
KEY_TYPE_ALIASES = {
    "sk": "seck",
    "pk": "pubk",
    "ck": "cntk",
}

BUILTIN_TYPE_MAX_LENGTH = 2
CUSTOM_TYPE_MIN_LENGTH = 3


class KeyLayout:
    __slots__ = ("name", "payload_length", "metadata_offset", "builtin_types", "custom_type_regex")

    def __init__(self, name, payload_length, metadata_offset, builtin_types, custom_type_regex=None):
        if metadata_offset < 0 or metadata_offset + MARKETPLACE_PART_LENGTH + SHUFFLER_LENGTH > payload_length:
            raise ValueError(f"Marketplace block at {metadata_offset} does not fit a {payload_length}-char payload")
        self.name = name
        self.payload_length = payload_length
        self.metadata_offset = metadata_offset
        self.builtin_types = frozenset(builtin_types)
        self.custom_type_regex = custom_type_regex

    def validate_type(self, key_type):
        if not key_type or not isinstance(key_type, str):
            raise InvalidType("ApiKey type is expected to be a string", key_type=key_type)
        if key_type in self.builtin_types:
            return key_type
        if self.custom_type_regex is None or len(key_type) <= BUILTIN_TYPE_MAX_LENGTH:
            raise InvalidType("Invalid ApiKey type", key_type=key_type)
        if not self.custom_type_regex.fullmatch(key_type):
            raise InvalidType(f"Custom ApiKey type must match {self.custom_type_regex.pattern}",
                              key_type=key_type)
        return key_type

    def __repr__(self):
        return f"KeyLayout({self.name!r}, payload_length={self.payload_length}, offset={self.metadata_offset})"


def custom_type_regex(max_length):
    return re.compile(f"[a-z0-9]{{{CUSTOM_TYPE_MIN_LENGTH},{max_length}}}", re.IGNORECASE | re.ASCII)


def current_layout(config):
    return KeyLayout(
        "current",
        payload_length=config.key_length,
        metadata_offset=config.key_metadata_offset,
        builtin_types=BUILTIN_KEY_TYPES,
        custom_type_regex=custom_type_regex(config.type_max_length),
    )


# Shorter payload, block at offset 12, no custom types
LEGACY_V1_LAYOUT = KeyLayout(
    "legacy-v1",
    payload_length=24,
    metadata_offset=12,
    builtin_types=BUILTIN_KEY_TYPES + tuple(KEY_TYPE_ALIASES.values()),
)


def key_layouts(config):
    return (current_layout(config), LEGACY_V1_LAYOUT)
