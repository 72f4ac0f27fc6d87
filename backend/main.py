# backend/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

load_dotenv()

from config import settings
from database import init_db
from utils.errors import StorageError

# Router imports
from routes.units import router as units_router
from routes.categories import router as categories_router
from routes.products import router as products_router
from routes.recipes import router as recipes_router
from routes.movements import router as movements_router
from routes.stores import router as stores_router
from routes.store_products import router as store_products_router
from routes.catalog import router as catalog_router
from routes.home_products import router as home_products_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Schema creation runs once at startup, independent of request handling
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database schema ready")
    yield


app = FastAPI(title="Bakery Inventory API", version="1.0.0", lifespan=lifespan)

# Uploads - make sure the directory exists before mounting it
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Storage failures become a generic 500 carrying the underlying error
@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message, "error": str(exc.error)},
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error", "error": str(exc)},
    )


# Router registration
app.include_router(units_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(recipes_router)
app.include_router(movements_router)
app.include_router(stores_router)
app.include_router(store_products_router)
app.include_router(catalog_router)
app.include_router(home_products_router)
app.include_router(logs_router)


@app.get("/")
def read_root():
    return {"message": "Bakery Inventory API is running"}
