import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Config, setup_logging
from database import close_client, ensure_indexes, get_db
from errors import ApiError, error_body
from routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    try:
        db = get_db()
        if db is None:
            logger.warning("MONGODB_URI not set, serving fallback data")
        else:
            ensure_indexes(db)
    except PyMongoError as e:
        logger.error(f"Could not prepare database: {e}")
    yield
    close_client()


app = FastAPI(title="Kaaya Beauty Store API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in ALL_ROUTERS:
    app.include_router(router, prefix="/api")
    # admin-scoped aliases used by the back-office
    app.include_router(router, prefix="/admin", include_in_schema=False)


# Error translation: every failure leaves as the JSON envelope

@app.exception_handler(ApiError)
async def api_error_handler(request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, data=exc.data))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        ctx_error = (err.get("ctx") or {}).get("error")
        errors.append({
            "field": ".".join(loc),
            "message": str(ctx_error) if ctx_error else err.get("msg"),
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation errors", errors=errors),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


@app.exception_handler(PyMongoError)
async def database_error_handler(request, exc: PyMongoError):
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


@app.get("/")
async def root():
    return {"message": "Kaaya Beauty Store API running"}


@app.get("/test")
def test_database(db: Optional[Database] = Depends(get_db)):
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
    }
    try:
        if db is not None:
            response["database"] = "✅ Connected"
            response["collections"] = db.list_collection_names()[:10]
    except PyMongoError as e:
        response["database"] = f"⚠️ {str(e)[:80]}"
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)
