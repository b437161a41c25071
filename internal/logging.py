import json
import sys
import threading
from enum import IntEnum
from utils.timestamp import format_timestamp

class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, level):
        if isinstance(level, cls):
            return level
        name = str(level).upper()
        if name == "WARNING":
            name = "WARN"
        return cls[name]

_logger = None
_logger_lock = threading.Lock()

class StructuredLogger:
    """One JSON record per line on stderr. Bound fields are merged into every record."""

    def __init__(self, level=LogLevel.INFO, stream=None, fields=None):
        self.level = level
        self.stream = stream
        self.fields = fields or {}

    def bind(self, **fields):
        return StructuredLogger(self.level, self.stream, {**self.fields, **fields})

    def _emit(self, level, message, error=None, **kwargs):
        if level < self.level:
            return
        try:
            record = {"timestamp": format_timestamp(), "level": level.name, "msg": message,
                      **self.fields, **kwargs}
            if error:
                record["err"] = str(error)
            print(json.dumps(record, default=str), file=self.stream or sys.stderr, flush=True)
        except Exception:
            pass

    def debug(self, message, **kwargs):
        self._emit(LogLevel.DEBUG, message, **kwargs)

    def info(self, message, **kwargs):
        self._emit(LogLevel.INFO, message, **kwargs)

    def warn(self, message, error=None, **kwargs):
        self._emit(LogLevel.WARN, message, error, **kwargs)

    def error(self, message, error=None, **kwargs):
        self._emit(LogLevel.ERROR, message, error, **kwargs)

    @classmethod
    def configure(cls, min_level=LogLevel.INFO, stream=None):
        global _logger
        with _logger_lock:
            _logger = cls(LogLevel.parse(min_level), stream)
        return _logger

def get_logger(**fields):
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                _logger = StructuredLogger()
    return _logger.bind(**fields) if fields else _logger
