import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from src.adapter.services.email_dispatcher import build_email_dispatcher
from src.domain.errors import ErrorCode
from .error import ClientError, ServerError, error_body
from .middleware import add_request_logging
from .utils.jwt import SigningContext

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error.code, "Internal server error"),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
        problems.append(f"{field}: {err.get('msg', 'invalid value')}")
    message = "; ".join(problems) or "Invalid request"
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(ErrorCode.VALIDATION_ERROR, message),
    )


async def handle_persistence_error(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Persistence error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(ErrorCode.PERSISTENCE_ERROR, "Internal server error"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.config.CREATE_TABLES_ON_STARTUP:
        from src.depends import engine

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    yield


def create_app(ApplicationConfig) -> FastAPI:
    # Fails fast when no signing secret is configured
    signing_context = SigningContext.from_config(ApplicationConfig)

    app = FastAPI(title="RedCap Courier API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.signing_context = signing_context
    app.state.email_dispatcher = build_email_dispatcher(ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        add_request_logging(app)

    from src.api.routes import auth, bookings, health_check, profile

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router)
    app.include_router(auth.router, prefix=prefix)
    app.include_router(profile.router, prefix=prefix)
    app.include_router(bookings.router, prefix=prefix)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_persistence_error)

    return app
