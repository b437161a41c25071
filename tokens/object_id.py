"""
Object ids with model prefix, zone, masked marketplace id and timestamp.

Ids are 24-char long and made of 7 parts:

- A: 3 to 5 char-long prefix (preferably 3 for numerous resources like ast or evt)
- B: separator
- C: random base62 chars, fewer when the prefix is longer
- D: zone, uppercase if env is 'live'
- E: 4 chars for the masked marketplace id (see tokens.masking)
- F: 6 chars for the UNIX timestamp masked with G + '0'
- G: 3 last chars are the random shuffler used as mask for E and F

Example:

    ast _ 2l7fQp s 1I3a 1gJYz2 I3a
    A   B C      D E    F      G

This makes it easy to sort by zone, marketplace and approximate creation date
without any lookup.
"""

import math

from config import TokenConfig
from core.errors import DecodeError, InvalidMarketplaceId, InvalidOption, InvalidPrefix, LengthError, TokenError
from internal.logging import get_logger
from tokens.masking import (
    MARKETPLACE_PART_LENGTH,
    MAX_MARKETPLACE_ID,
    SHUFFLER_LENGTH,
    decode_marketplace_block,
    encode_marketplace_block,
    parse_marketplace_id,
    timestamp_codec,
)
from tokens.random_source import DEFAULT_SEPARATOR, RandomSource, SystemClock
from utils.base62 import BASE62


def check_separator(separator):
    # base62 chars would be ambiguous with the random part
    if not isinstance(separator, str) or not separator or any(char in BASE62 for char in separator):
        raise InvalidOption("Non-empty separator without base62 chars expected", context={"separator": separator})


class ObjectIdData:
    __slots__ = ("object", "marketplace_id", "zone", "is_live", "timestamp")

    def __init__(self, object, marketplace_id, zone, is_live, timestamp):
        self.object = object
        self.marketplace_id = marketplace_id
        self.zone = zone
        self.is_live = is_live
        self.timestamp = timestamp

    def to_dict(self):
        return {
            "object": self.object,
            "marketplace_id": self.marketplace_id,
            "zone": self.zone,
            "is_live": self.is_live,
            "timestamp": self.timestamp,
        }


class ObjectIdFormat:
    def __init__(self, config=None, random_source=None, clock=None):
        self.config = config or TokenConfig()
        self.random_source = random_source or RandomSource()
        self.clock = clock or SystemClock()
        self._timestamp_codec = timestamp_codec(self.config.object_id_timestamp_length)
        self._log = get_logger(component="object_id")

    def _random_chars_needed(self, base_string):
        return (self.config.object_id_length - len(base_string) - MARKETPLACE_PART_LENGTH
                - self.config.object_id_timestamp_length)

    async def generate(self, prefix, marketplace_id, separator=DEFAULT_SEPARATOR, env="test", zone=None):
        if not isinstance(prefix, str):
            raise InvalidPrefix("String prefix expected", context={"prefix": prefix})
        check_separator(separator)

        base_string = prefix + separator if prefix else ""
        length = self.config.object_id_length
        random_chars_needed = self._random_chars_needed(base_string)
        # 4/3 base64 overhead
        if 3 * length <= 4 * (len(base_string) + MARKETPLACE_PART_LENGTH) or random_chars_needed < SHUFFLER_LENGTH:
            raise LengthError("Length should be high enough to pad ID with random characters",
                              context={"prefix": prefix, "length": length})

        number = parse_marketplace_id(marketplace_id)
        if number is None:
            raise InvalidMarketplaceId(f"Expect marketplace id to be a number in [1-{MAX_MARKETPLACE_ID}] range",
                                       marketplace_id=marketplace_id)

        random_chars = await self.random_source.random_string(random_chars_needed)
        shuffler = random_chars[-SHUFFLER_LENGTH:]
        marketplace_block = encode_marketplace_block(
            number, shuffler, env, zone or self.config.default_zone, self.config.zones
        )
        encoded_timestamp = self._timestamp_codec.encode(math.floor(self.clock.now()), shuffler)

        return (base_string +  # AB
                random_chars[:-SHUFFLER_LENGTH] +  # C
                marketplace_block +  # DE
                encoded_timestamp +  # F
                shuffler)  # G

    def extract_data(self, object_id, separator=DEFAULT_SEPARATOR):
        """
        Extract object prefix, marketplace id, zone and timestamp.

        Raises:
            DecodeError: malformed id, wrap in try/except when a result is always needed
        """
        check_separator(separator)
        if not isinstance(object_id, str) or len(object_id) != self.config.object_id_length:
            raise DecodeError("Invalid object id length", context={"object_id": object_id})

        object_name, found, encoded_string = object_id.rpartition(separator)
        base_string = object_name + separator if found else ""
        random_chars_length = self._random_chars_needed(base_string) - SHUFFLER_LENGTH
        if random_chars_length < 0:
            raise DecodeError("Object id prefix is too long", context={"object_id": object_id})

        marketplace_block = encoded_string[random_chars_length:random_chars_length + MARKETPLACE_PART_LENGTH]
        shuffler = object_id[-SHUFFLER_LENGTH:]
        timestamp_end = -SHUFFLER_LENGTH
        timestamp_start = timestamp_end - self.config.object_id_timestamp_length

        try:
            marketplace_id = decode_marketplace_block(marketplace_block, shuffler, self.config.zones)
            timestamp = self._timestamp_codec.decode(object_id[timestamp_start:timestamp_end], shuffler)
        except TokenError as exc:
            self._log.debug("object id decode failed", object=object_name, error=exc)
            raise DecodeError(f"Can't decode object id {object_id!r}", context={"object_id": object_id},
                              cause=exc) from exc

        zone = marketplace_block[0]
        return ObjectIdData(object_name or None, marketplace_id, zone, zone.isupper(), timestamp)
