import time
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from househunter import __version__
from househunter.core.config import Settings
from househunter.core.errors import AppError, InternalError
from househunter.core.logger import configure_logging, logger
from househunter.core.security import PasswordHasher, TokenCodec
from househunter.db.init_db import init_db
from househunter.db.session import build_engine, build_session_factory
from househunter.routers import auth, protected, users


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    try:
        init_db(engine)
    except Exception:
        logger.exception("DB CONNECTION FAILED | aborting startup")
        engine.dispose()
        raise
    logger.info("Connected to database")

    yield

    engine.dispose()
    logger.info("Disconnected from database")


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # drop "input" so a rejected body never reflects the password back
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request body", "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"UNHANDLED ERROR | {request.method} {request.url.path} | {exc}")
    return JSONResponse(status_code=500, content=InternalError().to_payload())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="House Hunter Backend",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_codec = TokenCodec(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            f"{request.method} {request.url.path} | status={response.status_code} | duration_ms={duration_ms}"
        )
        return response

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Server is running"

    app.include_router(auth.router)
    app.include_router(protected.router)
    app.include_router(users.router)

    return app
