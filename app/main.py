# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import BackendUnavailableError, DuplicateKeyError, EmptyCartError
from app.data.seed import seed_sample_data
from app.storage.base import Storage
from app.storage.factory import init_storage

# Routers
from app.routers.users import auth_router, router as users_router
from app.routers.products import categories_router, router as products_router
from app.routers.cart import router as cart_router
from app.routers.orders import router as orders_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


def create_app(storage: Storage | None = None) -> FastAPI:
    """
    Build the application.

    storage: backend to serve from. When omitted it is selected at
    startup from settings (see storage.factory.init_storage).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
          - Select the storage backend (with in-memory fallback).
          - Seed the sample catalog if the store is empty.

        Shutdown:
          - Close backend connections.
        """
        if app.state.storage is None:
            app.state.storage = init_storage(settings)
        logger.info(f"Storage backend: {app.state.storage.backend.value}")

        if settings.SEED_SAMPLE_DATA:
            seed_sample_data(app.state.storage)
        yield
        app.state.storage.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(EmptyCartError)
    async def empty_cart_handler(request: Request, exc: EmptyCartError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Cart is empty"},
        )

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.exception_handler(BackendUnavailableError)
    async def backend_unavailable_handler(request: Request, exc: BackendUnavailableError):
        logger.error(f"Storage backend unavailable: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage backend unavailable"},
        )

    # API prefix, e.g. /api
    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(users_router, prefix=settings.API_PREFIX)
    app.include_router(categories_router, prefix=settings.API_PREFIX)
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(orders_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root(request: Request):
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": "shopease-backend",
            "storage": request.app.state.storage.backend.value,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
