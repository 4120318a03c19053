from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import errors
from .database import init_db
from .logging_config import setup_logging
from .price_routes import router as price_router
from .product_routes import router as product_router
from .store_routes import router as store_router

setup_logging()
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    errors.ValidationError.kind: 422,
    errors.NotFoundError.kind: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database tables ready")
    yield


app = FastAPI(title="pricecheck API", lifespan=lifespan)

# Permissive CORS for the mobile/web clients during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(errors.PriceCheckError)
async def price_check_error_handler(request: Request, exc: errors.PriceCheckError):
    status_code = STATUS_BY_KIND.get(exc.kind)
    if status_code is None:
        # StorageUnavailable and anything unexpected: opaque to the client, full detail in the log
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message,
                     exc_info=exc.__cause__ or exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Database error"})
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "kind": exc.kind})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("%s %s failed with a database error", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Database error"})


@app.get('/healthcheck')
def healthcheck():
    return Response(status_code=status.HTTP_200_OK)


app.include_router(product_router)
app.include_router(store_router)
app.include_router(price_router)
