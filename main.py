from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.middleware.logging_md import LoggingMiddleware
from framework.logging.logger import LogConfig, get_logger
from framework.exceptions.handler import BusinessException, global_exception_handler
from apps.airports.api.router import router as airport_router
from apps.flights.api.router import router as flight_router

# Initialize logging configuration
LogConfig.setup_logging()
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager = DatabaseManager.get_instance()
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION} ({settings.APP_ENV})")
    await manager.sql.connect()
    logger.info("Database connection verified")
    if settings.DB_AUTO_CREATE:
        await manager.sql.create_all()
        logger.info("Database tables created")
    yield
    await manager.sql.disconnect()
    logger.info("Database engine disposed")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Register global exception handlers
app.add_exception_handler(BusinessException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(LoggingMiddleware)

# Mount routers (prefix from config)
app.include_router(
    airport_router,
    prefix=settings.API_V1_AIRPORTS_PREFIX,
    tags=["Airports"]
)

app.include_router(
    flight_router,
    prefix=settings.API_V1_FLIGHTS_PREFIX,
    tags=["Flights"]
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
