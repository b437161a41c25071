import json
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class TokenConfig:
    """Layout constants shared by key and object id formats. Read-only once built."""

    __slots__ = ("zones", "default_zone", "key_length", "key_metadata_offset", "type_max_length",
                 "object_id_length", "object_id_timestamp_length")

    def __init__(self, zones=("e", "s"), default_zone=None, key_length=32, key_metadata_offset=20,
                 type_max_length=10, object_id_length=24, object_id_timestamp_length=6):
        zones = tuple(zones)
        if not zones or not all(len(zone) == 1 and zone == zone.lower() for zone in zones):
            raise ValueError(f"All zones should be a single lowercase char, got {zones}")
        default_zone = default_zone or zones[0]
        if default_zone not in zones:
            raise ValueError(f"Default zone {default_zone!r} is not one of {zones}")

        values = {
            "zones": zones,
            "default_zone": default_zone,
            "key_length": key_length,
            "key_metadata_offset": key_metadata_offset,
            "type_max_length": type_max_length,
            "object_id_length": object_id_length,
            "object_id_timestamp_length": object_id_timestamp_length,
        }
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"TokenConfig is read-only, cannot set {name}")

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"TokenConfig({fields})"


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level",)

    def __init__(self, level="INFO"):
        self.level = level


class Config:
    __slots__ = ("tokens", "server", "logging")

    def __init__(self, tokens=None, server=None, logging=None):
        self.tokens = tokens or TokenConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            TokenConfig(**d.get("tokens", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
