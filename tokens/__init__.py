from tokens.api_key import ApiKeyFormat, ParsedKey
from tokens.layouts import KEY_TYPE_ALIASES, LEGACY_V1_LAYOUT, KeyLayout, current_layout, key_layouts
from tokens.masking import (
    MARKETPLACE_ID_CODEC,
    MAX_MARKETPLACE_ID,
    MaskedIntegerCodec,
    is_valid_marketplace_id,
    random_marketplace_id,
)
from tokens.object_id import ObjectIdData, ObjectIdFormat
from tokens.random_source import RandomSource, SystemClock, SystemRandomBytes, random_string_regex

__all__ = [
    "ApiKeyFormat",
    "ParsedKey",
    "KEY_TYPE_ALIASES",
    "LEGACY_V1_LAYOUT",
    "KeyLayout",
    "current_layout",
    "key_layouts",
    "MARKETPLACE_ID_CODEC",
    "MAX_MARKETPLACE_ID",
    "MaskedIntegerCodec",
    "is_valid_marketplace_id",
    "random_marketplace_id",
    "ObjectIdData",
    "ObjectIdFormat",
    "RandomSource",
    "SystemClock",
    "SystemRandomBytes",
    "random_string_regex",
]
