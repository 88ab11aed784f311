import os

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from gymfinder.api import errors
from gymfinder.api.routers.gyms import router as gyms_router
from gymfinder.api.routers.healthz import router as healthz_router
from gymfinder.logging import setup_logging
from gymfinder.middleware.request_id import request_id_middleware


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def create_app() -> FastAPI:
    setup_logging()
    env = os.getenv("APP_ENV", "dev")
    _init_sentry(env)

    app = FastAPI(title="Gym Finder Map")
    app.middleware("http")(request_id_middleware)
    errors.install(app)

    # CORS from ALLOW_ORIGINS env (comma-separated); the map UI runs on another origin.
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["GET", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    app.include_router(gyms_router)
    app.include_router(healthz_router)

    structlog.get_logger(__name__).info("app_startup", env=env)
    return app


app = create_app()
