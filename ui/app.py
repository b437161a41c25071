"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from config import load_config
from core.errors import TokenError
from core.health import (
    HealthChecker,
    check_event_loop,
    create_clock_check,
    create_key_format_check,
    create_random_source_check,
)
from internal.logging import StructuredLogger, get_logger
from tokens.api_key import ApiKeyFormat
from tokens.object_id import ObjectIdFormat
from tokens.random_source import RandomSource, SystemClock
from ui import auth
from ui.routes import health, keys, object_ids


def create_app(config=None, random_bytes=None, clock=None, issuer_credentials=None):
    """Create and configure the FastAPI application.

    `random_bytes` and `clock` replace the system collaborators, mostly for tests.
    `issuer_credentials` defaults to the TOKENS_ISSUER_* environment variables
    and startup fails when they are unset.
    """
    config = config or load_config()
    issuer_credentials = issuer_credentials or auth.load_issuer_credentials()

    StructuredLogger.configure(min_level=config.logging.level)
    logger_instance = get_logger(component="app")

    # Create core components
    random_source = RandomSource(random_bytes)
    clock = clock or SystemClock()
    api_keys = ApiKeyFormat(config=config.tokens, random_source=random_source)
    object_id_format = ObjectIdFormat(config=config.tokens, random_source=random_source, clock=clock)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("random_source", create_random_source_check(random_source), critical=True)
    health_checker.register("api_key_format", create_key_format_check(api_keys), critical=True)
    health_checker.register("clock", create_clock_check(clock), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version="1.0.0", zones=list(config.tokens.zones))
        logger_instance.info("Application started successfully")
        yield
        logger_instance.info("Application shutdown complete")

    app = FastAPI(
        title="Marketplace Tokens",
        version="1.0.0",
        description="API keys and object ids with embedded marketplace metadata",
        lifespan=lifespan,
    )

    @app.exception_handler(TokenError)
    async def token_error_handler(request: Request, exc: TokenError):
        logger_instance.warn("Token request rejected", error=exc, path=request.url.path,
                             kind=type(exc).__name__)
        return JSONResponse(status_code=400, content=jsonable_encoder(exc.to_dict()))

    # Initialize route modules with dependencies
    auth.init(issuer_credentials)
    keys.init(api_keys)
    object_ids.init(object_id_format)
    health.init(health_checker, config.tokens)

    # Include routers
    app.include_router(keys.router)
    app.include_router(object_ids.router)
    app.include_router(health.router)

    return app
