"""
Storefront API - Main FastAPI Application

Single entry point for the storefront's serverless proxy layer: cart and
wishlist state per browser session, WooCommerce catalog/shipping/settings
proxies and checkout.
"""
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Serverless runtimes start in api/; make the project root importable
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from storefront import config  # noqa: E402
from storefront.logging import get_logger  # noqa: E402
from storefront.routers import router as storefront_router  # noqa: E402
from storefront.routers.deps import shutdown_services  # noqa: E402

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    yield
    await shutdown_services()


app = FastAPI(
    title="Storefront API",
    description="WooCommerce-backed storefront: cart, wishlist, catalog proxy, checkout",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(storefront_router, prefix="/api")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}
