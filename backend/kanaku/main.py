"""
FastAPI application entry point for the Kanaku360 shop billing API.

This module initializes the FastAPI app with middleware, CORS, logging,
and registers all API routers.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi

from slowapi.errors import RateLimitExceeded

from kanaku.config import settings
from kanaku.core.limiter import limiter
from kanaku.database import init_db
from kanaku.logger import setup_logging
from kanaku.routers import (
    auth,
    shops,
    employees,
    categories,
    brands,
    price_types,
    suppliers,
    products,
    inventory,
    purchase_orders,
    bills,
    reports,
)

logger = logging.getLogger(__name__)

API_DESCRIPTION = "Multi-shop retail billing, catalog and inventory API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    setup_logging()
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")


# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan,
)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Rate limit exceeded. Please try again later."},
    )


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add GZip compression
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Register routers
api = settings.API_PREFIX
shop_api = f"{api}/shops/{{shop_id}}"

app.include_router(auth.router, prefix=f"{api}/auth", tags=["auth"])
app.include_router(shops.router, prefix=f"{api}/shops", tags=["shops"])
app.include_router(employees.router, prefix=f"{shop_api}/employees", tags=["employees"])
app.include_router(categories.router, prefix=f"{shop_api}/categories", tags=["categories"])
app.include_router(brands.router, prefix=f"{shop_api}/brands", tags=["brands"])
app.include_router(price_types.router, prefix=f"{shop_api}/price-types", tags=["price types"])
app.include_router(suppliers.router, prefix=f"{shop_api}/suppliers", tags=["suppliers"])
app.include_router(products.router, prefix=f"{shop_api}/products", tags=["products"])
app.include_router(inventory.router, prefix=f"{shop_api}/inventory", tags=["inventory"])
app.include_router(
    purchase_orders.router, prefix=f"{shop_api}/purchase-orders", tags=["purchase orders"]
)
app.include_router(bills.router, prefix=f"{shop_api}/bills", tags=["bills"])
app.include_router(reports.router, prefix=f"{shop_api}/reports", tags=["reports"])


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=API_DESCRIPTION,
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error", "details": str(exc)},
    )


@app.get("/")
async def root():
    """Root endpoint for health check."""
    return {"message": settings.API_TITLE, "status": "running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kanaku.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
