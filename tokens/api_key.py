"""
ApiKey generation and parsing.

Parsing runs on untrusted input and never raises: invalid keys come back
with has_valid_format=False. No integrity is checked, so a mutated key may
still decode to another valid marketplace id.
"""

from config import TokenConfig
from core.errors import InvalidEnvironment, InvalidMarketplaceId, TokenError
from internal.logging import get_logger
from tokens.layouts import KEY_TYPE_ALIASES, key_layouts
from tokens.masking import (
    MARKETPLACE_PART_LENGTH,
    MAX_MARKETPLACE_ID,
    SHUFFLER_LENGTH,
    decode_marketplace_block,
    encode_marketplace_block,
    parse_marketplace_id,
)
from tokens.random_source import RandomSource

KEY_SEPARATOR = "_"


class ParsedKey:
    __slots__ = ("type", "env", "marketplace_id", "zone", "has_valid_format")

    def __init__(self, type=None, env=None, marketplace_id=None, zone=None):
        self.type = type
        self.env = env
        self.marketplace_id = marketplace_id
        self.zone = zone
        self.has_valid_format = all([type, env, marketplace_id, zone])

    @classmethod
    def invalid(cls):
        return cls()

    def to_dict(self):
        return {
            "type": self.type,
            "env": self.env,
            "marketplace_id": self.marketplace_id,
            "zone": self.zone,
            "has_valid_format": self.has_valid_format,
        }

    def __eq__(self, other):
        return isinstance(other, ParsedKey) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"ParsedKey({self.to_dict()})"


class ApiKeyFormat:
    def __init__(self, config=None, random_source=None, layouts=None):
        self.config = config or TokenConfig()
        self.random_source = random_source or RandomSource()
        self.layouts = tuple(layouts or key_layouts(self.config))
        self._log = get_logger(component="api_key")

    async def generate(self, type, env, marketplace_id, zone=None, layout=None):
        """
        Generate an ApiKey embedding marketplace id and zone among random chars.

        Args:
            type: built-in type ('sk', 'pk', 'ck') or custom type [a-z0-9]{3,10}
            env: environment such as 'live' or 'test'
            marketplace_id: marketplace id as a decimal integer string
            zone: one of the configured zones, defaults to the first one
            layout: KeyLayout to build, defaults to the current one

        Returns:
            `{type}_{env}_` followed by the layout payload
        """
        layout = layout or self.layouts[0]
        valid_type = layout.validate_type(type)

        if not isinstance(marketplace_id, str):
            raise InvalidMarketplaceId("Marketplace id is expected to be a string", marketplace_id=marketplace_id)
        number = parse_marketplace_id(marketplace_id)
        if number is None:
            raise InvalidMarketplaceId(
                f"Marketplace id is expected to be a string integer in [1-{MAX_MARKETPLACE_ID}] range",
                marketplace_id=marketplace_id,
            )
        if not isinstance(env, str):
            raise InvalidEnvironment("Environment is expected to be a string", context={"env": env})

        zone = zone or self.config.default_zone
        base_string = f"{valid_type}{KEY_SEPARATOR}{env}{KEY_SEPARATOR}"

        random_chars = await self.random_source.random_string(layout.payload_length - MARKETPLACE_PART_LENGTH)
        marketplace_block = encode_marketplace_block(
            number, random_chars[-SHUFFLER_LENGTH:], env, zone, self.config.zones
        )

        offset = layout.metadata_offset
        self._log.debug("key generated", type=valid_type, env=env, marketplace_id=marketplace_id,
                        zone=zone, layout=layout.name)
        return base_string + random_chars[:offset] + marketplace_block + random_chars[offset:]

    def parse(self, key):
        if not isinstance(key, str):
            return ParsedKey.invalid()

        parts = key.split(KEY_SEPARATOR)
        if len(parts) != 3:
            return ParsedKey.invalid()

        fallback = None
        for layout in self.layouts:
            parsed = self._parse_layout(layout, *parts)
            if parsed.has_valid_format:
                parsed.type = KEY_TYPE_ALIASES.get(parsed.type, parsed.type)
                return parsed
            fallback = fallback or parsed

        self._log.debug("invalid key format", type=parts[0], env=parts[1])
        return fallback

    def _parse_layout(self, layout, key_type, env, payload):
        if len(payload) != layout.payload_length:
            return ParsedKey(key_type, env)

        offset = layout.metadata_offset
        block = payload[offset:offset + MARKETPLACE_PART_LENGTH]
        zone = block[:1].lower()
        shuffler = payload[-SHUFFLER_LENGTH:]

        marketplace_id = None
        try:
            key_type = layout.validate_type(key_type)
            marketplace_id = decode_marketplace_block(block, shuffler, self.config.zones)
        except TokenError as exc:
            self._log.debug("key layout mismatch", layout=layout.name, error=type(exc).__name__)

        return ParsedKey(key_type, env, marketplace_id, zone)

    def get_base_key(self, key):
        """
        `type_env_` of a valid key, None otherwise.

        The type is the normalized one, so `sk_test_...` gives `seck_test_`
        and the base key is then not a prefix of the key itself.
        """
        parsed = self.parse(key)
        if not parsed.has_valid_format:
            return None
        return f"{parsed.type}{KEY_SEPARATOR}{parsed.env}{KEY_SEPARATOR}"
