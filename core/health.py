import asyncio
import time
from enum import Enum
from utils.timestamp import format_timestamp

# 2020-01-01, anything before means a broken clock
MIN_SANE_TIMESTAMP = 1577836800

class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"

class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name,
                "status": self.status.value,
                "msg": self.msg}

class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}

class HealthChecker:
    def __init__(self, ttl=1.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._start_time = time.time()

    @property
    def uptime(self):
        return time.time() - self._start_time

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def check(self):
        now = time.time()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = []
        for name, (check_fn, is_critical) in self._checks.items():
            try:
                result = await asyncio.wait_for(check_fn(), timeout=5)
            except asyncio.TimeoutError:
                result = CheckResult(name, Status.FAIL, "timeout")
            except Exception as exc:
                result = CheckResult(name, Status.FAIL, str(exc))
            results.append((result, is_critical))

        status = Status.OK
        for result, is_critical in results:
            if result.status == Status.FAIL and is_critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache

# Checks
async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)

def create_random_source_check(random_source):
    async def check():
        chars = await random_source.random_string(4)
        if len(chars) != 4:
            return CheckResult("random", Status.FAIL, f"got {len(chars)} chars")
        return CheckResult("random", Status.OK)
    return check

def create_clock_check(clock):
    async def check():
        now = clock.now()
        if now < MIN_SANE_TIMESTAMP:
            return CheckResult("clock", Status.DEGRADED, f"t{now}")
        return CheckResult("clock", Status.OK, f"t{now}")
    return check

def create_key_format_check(api_keys, env="test", marketplace_id="1"):
    """Generate a key then parse it back."""
    async def check():
        key = await api_keys.generate(type="sk", env=env, marketplace_id=marketplace_id)
        parsed = api_keys.parse(key)
        if not parsed.has_valid_format or parsed.marketplace_id != marketplace_id:
            return CheckResult("api_key", Status.FAIL, "roundtrip")
        return CheckResult("api_key", Status.OK, f"{len(api_keys.layouts)}layouts")
    return check
