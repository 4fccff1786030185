import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobhub.core.config import settings
from jobhub.core.messages import Message
from jobhub.database.database import check_db_connection, create_db_and_tables
from jobhub.routers import applications, auth, companies, files, recruitments, statistics, users
from jobhub.schemas.common import error_response
from jobhub.services.amqp_service import AmqpService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("jobhub.main")

app = FastAPI(
    title="JobHub API",
    description="Job recruitment platform backend API",
    version="1.0.0"
)


@app.on_event("startup")
async def on_startup():
    create_db_and_tables()
    app.state.amqp_service = AmqpService(settings.amqp_uri)
    logger.info(f"Started; AMQP broker at {settings.amqp_host}:{settings.amqp_port}")


@app.on_event("shutdown")
async def on_shutdown():
    amqp_service = getattr(app.state, "amqp_service", None)
    if amqp_service is not None:
        amqp_service.close()


logger.info(f"Configured CORS origins: {settings.cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    client_ip = request.client.host if request.client else "-"
    user_id = getattr(request.state, "user_id", "-")
    logger.info(
        f"{client_ip} {request.method} {request.url.path} {response.status_code} "
        f"user={user_id} {elapsed_ms:.1f}ms"
    )
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = Message.ERROR
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", Message.ERROR)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_response(message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_response(Message.ERROR))


app.include_router(auth.router, tags=["auth"])
app.include_router(users.router, tags=["users"])
app.include_router(companies.router, tags=["companies"])
app.include_router(recruitments.router, tags=["recruitments"])
app.include_router(applications.router, tags=["applications"])
app.include_router(files.router, tags=["files"])
app.include_router(statistics.router, tags=["statistics"])


@app.get("/")
async def root():
    return {"message": "JobHub API is running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "database": check_db_connection()}
