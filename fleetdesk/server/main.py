"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from fleetdesk.core.database import init_db
from fleetdesk.core.logging_config import get_logger, setup_logging
from fleetdesk.core.monitoring import initialize_logfire
from fleetdesk.realtime import get_realtime_manager

from .api.v1 import (
    clients,
    drivers,
    exports,
    finance,
    fuel_logs,
    health,
    incidents,
    invoices,
    leases,
    maintenance,
    notifications,
    payroll,
    quotations,
    realtime,
    spare_parts,
    trips,
    vehicles,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Initializes the database on startup and closes every realtime channel on
    shutdown.
    """
    # Startup
    try:
        logger.info("Starting up fleetdesk server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down fleetdesk server...")
    get_realtime_manager().cleanup()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    fleetdesk Server API

    Back office for a vehicle fleet operator: vehicles, drivers, clients, trips,
    maintenance and spare parts, fuel, invoicing and quotations, vehicle leases,
    payroll, incident reports, financial reporting and live change streams.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)

app.mount(
    settings.storage.public_base_url,
    StaticFiles(directory=settings.storage.root, check_dir=False),
    name="files",
)

app.include_router(health.router, tags=["health"])
app.include_router(vehicles.router, prefix=f"{constant.API_V1_STR}/vehicles")
app.include_router(drivers.router, prefix=f"{constant.API_V1_STR}/drivers")
app.include_router(clients.router, prefix=f"{constant.API_V1_STR}/clients")
app.include_router(trips.router, prefix=f"{constant.API_V1_STR}/trips")
app.include_router(maintenance.router, prefix=f"{constant.API_V1_STR}/maintenance")
app.include_router(spare_parts.router, prefix=f"{constant.API_V1_STR}/spare-parts")
app.include_router(fuel_logs.router, prefix=f"{constant.API_V1_STR}/fuel-logs")
app.include_router(invoices.router, prefix=f"{constant.API_V1_STR}/invoices")
app.include_router(quotations.router, prefix=f"{constant.API_V1_STR}/quotations")
app.include_router(leases.router, prefix=f"{constant.API_V1_STR}/leases")
app.include_router(payroll.router, prefix=f"{constant.API_V1_STR}/payroll")
app.include_router(incidents.router, prefix=f"{constant.API_V1_STR}/incidents")
app.include_router(finance.router, prefix=f"{constant.API_V1_STR}/finance")
app.include_router(exports.router, prefix=f"{constant.API_V1_STR}/exports")
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications")
app.include_router(realtime.router, prefix=f"{constant.API_V1_STR}/realtime")
