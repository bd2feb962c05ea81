import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.exceptions import (
    CartaException,
    UnauthorizedException,
    NotFoundException,
    ForbiddenException,
    ConflictException,
    GoneException,
    ValidationException,
)
from app.core.logging_setup import configure_logging
from app.middleware.edge_gate import EdgeGateMiddleware
from app.routes import (
    admin_routes,
    auth_routes,
    category_routes,
    invitation_routes,
    meal_routes,
    order_routes,
    page_routes,
    public_menu_routes,
    settings_routes,
    system_message_routes,
)

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Host routing runs inside CORS
app.add_middleware(EdgeGateMiddleware)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error_response(status_code: int, exc: CartaException, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return _error_response(
        status.HTTP_401_UNAUTHORIZED, exc, headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    # Also handles PlanRestrictionException
    return _error_response(status.HTTP_403_FORBIDDEN, exc)


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(GoneException)
async def gone_exception_handler(request: Request, exc: GoneException):
    return _error_response(status.HTTP_410_GONE, exc)


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request",
            "code": "validation_error",
            "errors": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "internal_error"},
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Include routers
app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
app.include_router(auth_routes.backoffice_router, prefix="/api/backoffice", tags=["Auth"])
app.include_router(category_routes.router, prefix="/api/categories", tags=["Categories"])
app.include_router(meal_routes.router, prefix="/api/master", tags=["Meals"])
app.include_router(order_routes.router, prefix="/api/orders", tags=["Orders"])
app.include_router(settings_routes.router, prefix="/api/settings", tags=["Settings"])
app.include_router(
    system_message_routes.router, prefix="/api/backoffice/system-messages", tags=["System Messages"]
)
app.include_router(invitation_routes.router, prefix="/api/invitations", tags=["Invitations"])
app.include_router(admin_routes.router, prefix="/api/admin", tags=["Admin"])
app.include_router(public_menu_routes.router, prefix="/api/public", tags=["Public Menu"])
# Pages last: /{slug} matches any single segment
app.include_router(page_routes.router, tags=["Pages"])
