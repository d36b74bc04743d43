"""
FastAPI application for the Pop Up storefront
"""

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import html
import json
import logging
import os

from server.config import server_config
from server.models import ErrorResponse
from server.dependencies import get_places_loader
from server.checkout.routes import router as checkout_router
from server.address.routes import router as address_router
from storefront.address import PlacesScriptLoader
from storefront.config import config
from storefront.errors import (
    ConfigurationError,
    FormValidationError,
    GraphQLQueryError,
    StockLimitExceeded,
    TransportError,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

frontend_public_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "frontend", "public")
index_path = os.path.join(frontend_public_dir, "index.html")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting storefront server...")
    if not config.shop_url or not config.access_token:
        logger.warning("SHOPIFY_SHOP_URL or SHOPIFY_ACCESS_TOKEN not set, backend calls will fail")
    yield
    logger.info("Shutting down storefront server...")


# Create FastAPI app
app = FastAPI(
    title="Pop Up Storefront",
    description="Single-event storefront backed by the Shopify Admin API",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=server_config.ALLOWED_ORIGINS,
    allow_credentials=server_config.ALLOW_CREDENTIALS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"]
)

app.mount("/static", StaticFiles(directory=frontend_public_dir), name="static")

app.include_router(checkout_router)
app.include_router(address_router)


@app.get("/", response_class=HTMLResponse)
async def index(
    loader: PlacesScriptLoader = Depends(get_places_loader)
):
    """Serve the storefront page with the Places script in its head"""
    try:
        await loader.load()
    except Exception as e:
        # Autocomplete is optional, the page still renders without it
        logger.error(f"Error loading Google Maps: {str(e)}")

    with open(index_path, encoding="utf-8") as f:
        page = f.read()

    page_config = {
        "placesOptions": loader.widget_options(),
        "placesReady": loader.is_widget_ready
    }
    page = page.replace("<!-- HEAD_SCRIPTS -->", loader.head.render())
    page = page.replace("{{ STORE_NAME }}", html.escape(server_config.STORE_NAME))
    page = page.replace("{{ PAGE_CONFIG }}", json.dumps(page_config))
    return HTMLResponse(page)


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "storefront"}


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.detail,
            detail=str(exc)
        ).model_dump(mode="json")
    )


@app.exception_handler(StockLimitExceeded)
async def stock_limit_handler(request: Request, exc: StockLimitExceeded):
    return JSONResponse(
        status_code=409,
        content=ErrorResponse(
            error=str(exc),
            detail={"variant_id": exc.variant_id, "requested": exc.requested, "available": exc.available}
        ).model_dump(mode="json")
    )


@app.exception_handler(FormValidationError)
async def form_validation_handler(request: Request, exc: FormValidationError):
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error=str(exc), detail={"fields": exc.fields}).model_dump(mode="json")
    )


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    logger.error(f"Shopify transport error: {str(exc)}")
    return JSONResponse(
        status_code=502,
        content=ErrorResponse(error="Shopify request failed", detail=str(exc)).model_dump(mode="json")
    )


@app.exception_handler(GraphQLQueryError)
async def graphql_error_handler(request: Request, exc: GraphQLQueryError):
    logger.error(f"Shopify GraphQL error: {exc.errors}")
    return JSONResponse(
        status_code=502,
        content=ErrorResponse(error=str(exc), detail=exc.errors).model_dump(mode="json")
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Server misconfigured", detail=str(exc)).model_dump(mode="json")
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            detail="An unexpected error occurred"
        ).model_dump(mode="json")
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "server.app:app",
        host=server_config.API_HOST,
        port=server_config.API_PORT,
        reload=True,
        log_level="info"
    )
