"""
StockLedger - Inventory Tracking Backend
FastAPI Application Entry Point
"""
import uvicorn
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional

from app.core import settings as default_settings, Settings, InventoryError
from app.api.router import api_router
from app.api.reporting import router as reporting_router
from app.stores import DocumentStore, create_store

logger = logging.getLogger("stockledger")


def create_app(store: Optional[DocumentStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. A store passed in is used as-is and left open;
    otherwise one is created from DATABASE_URL for the app's lifetime.
    """
    settings = settings or default_settings
    
    # Lifespan for startup/shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = create_store(settings.DATABASE_URL, echo=settings.DEBUG)
        logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT} ({app.state.store.backend_name} store)")
        
        yield
        
        if owns_store:
            app.state.store.close()
            app.state.store = None
        logger.info(f"{settings.APP_NAME} shutting down")
    
    app = FastAPI(
        title=settings.APP_NAME,
        description="Product stock, stock movement records and customer tracking",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.store = store
    app.state.settings = settings
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.error})")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
    
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path} -> 400: invalid request")
        return JSONResponse(status_code=400, content={"message": "Invalid request", "error": str(exc.errors())})
    
    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
        return JSONResponse(status_code=500, content={"message": "Internal server error", "error": str(exc)})
    
    # Include routers
    app.include_router(api_router, prefix="/api")
    app.include_router(reporting_router)
    
    # Health check
    @app.get("/health")
    def health_check():
        return {"status": "healthy", "app": settings.APP_NAME}
    
    return app


logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=default_settings.APP_PORT,
        reload=default_settings.DEBUG
    )
