from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from structlog import get_logger

from app import database
from app.config import settings
from app.errors import DatabaseUnavailableError, ErrorKind
from app.logging_config import configure_logging
from app.routers import owners
from app.routers import properties
from app.schemas.common import ApiResponse
from app.services.seed import seed_sample_data

logger = get_logger()

app = FastAPI(title="Real Estate Records Service", description="CRUD and filtered search over properties and their owners")
app.add_middleware(CORSMiddleware, allow_origins=settings.cors_origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])

@app.on_event("startup")
async def startup_event():
    configure_logging()
    await database.connect()
    db = database.get_database()
    try:
        await database.ensure_indexes(db)
        if settings.SEED_DATA:
            await seed_sample_data(db)
    except Exception as e:
        # The API still serves requests; store errors surface per call.
        logger.error("Error preparing database", error=str(e))
    logger.info("Real Estate API started", database=settings.MONGODB_DATABASE)

@app.on_event("shutdown")
async def shutdown_event():
    await database.close()

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning("Invalid request data", path=request.url.path, errors=problems)
    body = ApiResponse.fail(ErrorKind.VALIDATION, f"Invalid request data: {problems}")
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(body.model_dump(by_alias=True, mode="json")),
    )

@app.exception_handler(DatabaseUnavailableError)
async def database_unavailable_handler(request: Request, exc: DatabaseUnavailableError):
    logger.error("Database unavailable", path=request.url.path, error=str(exc))
    body = ApiResponse.fail(ErrorKind.INTERNAL, "Database unavailable")
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, mode="json"))

app.include_router(owners.router)
app.include_router(properties.router)

@app.get("/health")
async def root_health():
    return "ok"

@app.get("/health/db")
async def database_health():
    try:
        healthy = await database.ping(database.get_database())
    except DatabaseUnavailableError:
        healthy = False
    if not healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"mongodb": "unavailable"})
    return {"mongodb": "ok"}
