# main.py - FastAPI application: routers, CORS and error mapping
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import API_TITLE, API_VERSION, CORS_ORIGINS, IS_PRODUCTION
from routes import achievements, bookings, marketplace_requests, messaging, reviews, services, users
from utils.errors import ApiError, MethodNotAllowed, ValidationError, format_issues
from utils.firebase_service import FirebaseService
import logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    description="Bookings, reviews, messaging and marketplace requests between Lookers and Providers",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    issues = format_issues(exc.errors(), strip_prefix=True)
    logger.warning(f"Validation error at {request.url.path}: {issues}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(ValidationError(details=issues).to_dict()),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = MethodNotAllowed().to_dict()
    else:
        content = {"error": exc.detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


app.include_router(bookings.router)
app.include_router(marketplace_requests.router)
app.include_router(messaging.router)
app.include_router(reviews.router)
app.include_router(services.router)
app.include_router(users.router)
app.include_router(achievements.router)


@app.get("/", tags=["Root"])
def read_root():
    """
    Welcome endpoint that provides basic API information
    """
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "status": "running",
        "production": IS_PRODUCTION,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_schema": "/openapi.json"
        },
    }


@app.get("/health", tags=["Health"])
def health():
    return {
        "status": "healthy",
        "firebase": "initialized" if FirebaseService.is_initialized() else "lazy",
        "production": IS_PRODUCTION,
        "version": API_VERSION,
    }
