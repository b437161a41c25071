"""Token errors carrying the offending input as context."""

from utils.timestamp import format_timestamp


class TokenError(Exception):
    """Base error with timestamp and context for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def to_dict(self):
        return {"error": type(self).__name__, "msg": str(self), "context": self.context}


class InvalidEncoding(TokenError):
    """Empty string or characters outside the base62 alphabet."""


class InvalidOption(TokenError):
    """Malformed options passed to a generator."""


class OutOfRange(TokenError):
    """Integer does not fit its fixed-width masked encoding."""


class InvalidType(TokenError):
    """ApiKey type not in the layout vocabulary."""

    def __init__(self, message, key_type=None, **kwargs):
        context = kwargs.pop("context", {})
        context["type"] = key_type
        super().__init__(message, context=context, **kwargs)


class InvalidMarketplaceId(TokenError):
    """Marketplace id is not a decimal integer string within range."""

    def __init__(self, message, marketplace_id=None, **kwargs):
        context = kwargs.pop("context", {})
        context["marketplace_id"] = marketplace_id
        super().__init__(message, context=context, **kwargs)


class InvalidEnvironment(TokenError):
    """Environment is not a string."""


class InvalidZone(TokenError):
    """Zone is not one of the configured marketplace zones."""


class InvalidPrefix(TokenError):
    """Object id prefix is not a string."""


class LengthError(TokenError):
    """Fixed length too short for prefix and metadata."""


class RandomSourceError(TokenError):
    """Secure random bytes could not be produced."""


class DecodeError(TokenError):
    """Object id cannot be decoded."""
