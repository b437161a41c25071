"""
Fixed-width masked integer encoding.

An integer is shifted by a constant offset and by the value of a 3-char
random "shuffler", then base62 encoded:

    encoded = base62(value + offset + decode(shuffler) * mask_scale)

The offset makes the smallest value use the full width, so there is no
constant-looking leading '0'. The shuffler varies the encoding of the same
value from one token to the next. Decoding subtracts both again.

Marketplace ids use 4 chars with offset 62^3 - 1:
  '1000' = 238328 is the lowest masked value (id 1, shuffler '000')
  'zzzz' = 14776335 is the highest one (max id, shuffler 'zzz')
which makes 14299681 marketplaces.

Timestamps use 6 chars masked with `shuffler + '0'`, i.e. mask_scale 62.
(62^6 - 1) seconds from epoch is year 3769.
"""

import random

from core.errors import InvalidEncoding, InvalidEnvironment, InvalidZone, OutOfRange
from utils import base62

SHUFFLER_LENGTH = 3
MAX_SHUFFLER = base62.BASE ** SHUFFLER_LENGTH - 1  # 'zzz'

ENCODED_MARKETPLACE_ID_LENGTH = 4
MARKETPLACE_PART_LENGTH = ENCODED_MARKETPLACE_ID_LENGTH + 1  # including zone
MARKETPLACE_ID_OFFSET = base62.BASE ** 3 - 1


class MaskedIntegerCodec:
    __slots__ = ("width", "offset", "mask_scale", "maximum")

    def __init__(self, width, offset=0, mask_scale=1):
        self.width = width
        self.offset = offset
        self.mask_scale = mask_scale
        self.maximum = base62.BASE ** width - 1 - offset - MAX_SHUFFLER * mask_scale

    def mask(self, shuffler):
        if not isinstance(shuffler, str) or len(shuffler) != SHUFFLER_LENGTH:
            raise InvalidEncoding(f"Shuffler must be {SHUFFLER_LENGTH} base62 chars", context={"shuffler": shuffler})
        return base62.decode(shuffler) * self.mask_scale

    def encode(self, value, shuffler):
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= self.maximum:
            raise OutOfRange(f"Expect a number in [1-{self.maximum}] range", context={"value": value})
        return base62.encode_fixed(value + self.offset + self.mask(shuffler), self.width)

    def decode(self, encoded, shuffler):
        if not isinstance(encoded, str) or len(encoded) != self.width:
            raise InvalidEncoding(f"Expect {self.width} base62 chars", context={"encoded": encoded})
        value = base62.decode(encoded) - self.offset - self.mask(shuffler)
        if not 1 <= value <= self.maximum:
            raise OutOfRange(f"Decoded value {value} out of [1-{self.maximum}] range",
                             context={"encoded": encoded, "shuffler": shuffler})
        return value


MARKETPLACE_ID_CODEC = MaskedIntegerCodec(ENCODED_MARKETPLACE_ID_LENGTH, offset=MARKETPLACE_ID_OFFSET)
MAX_MARKETPLACE_ID = MARKETPLACE_ID_CODEC.maximum


def timestamp_codec(width=6):
    """Codec for Unix seconds masked with `shuffler + '0'`."""
    return MaskedIntegerCodec(width, mask_scale=base62.BASE)


def parse_marketplace_id(value):
    """Integer value of a marketplace id, or None when the format or range is wrong."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            number = int(value, 10)
        except ValueError:
            return None
        if str(number) != value:
            return None
    elif isinstance(value, int):
        number = value
    else:
        return None
    return number if 1 <= number <= MAX_MARKETPLACE_ID else None


def is_valid_marketplace_id(value):
    return parse_marketplace_id(value) is not None


def random_marketplace_id():
    """Pseudo-random valid marketplace id, as a string."""
    return str(random.randint(1, MAX_MARKETPLACE_ID))


def format_zone(env, zone, zones):
    if not isinstance(env, str):
        raise InvalidEnvironment("Environment is expected to be a string", context={"env": env})
    if zone not in zones:
        raise InvalidZone(f"Zone must be one of {', '.join(zones)}", context={"zone": zone})
    return zone.upper() if env == "live" else zone


def encode_marketplace_block(marketplace_id, shuffler, env, zone, zones):
    """Zone char followed by the masked marketplace id."""
    number = parse_marketplace_id(marketplace_id)
    if number is None:
        raise OutOfRange(f"Expect marketplace id to be a number in [1-{MAX_MARKETPLACE_ID}] range",
                         context={"marketplace_id": marketplace_id})
    return format_zone(env, zone, zones) + MARKETPLACE_ID_CODEC.encode(number, shuffler)


def decode_marketplace_block(block, shuffler, zones):
    """Marketplace id string from a zone + masked id block."""
    if not block or block[0].lower() not in zones:
        raise InvalidEncoding(f"Can't extract marketplace id from {block!r} with {shuffler!r} shuffler",
                              context={"block": block, "shuffler": shuffler})
    return str(MARKETPLACE_ID_CODEC.decode(block[1:], shuffler))
