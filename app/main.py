import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api import admin, attendance, auth, classes, students, subjects
from app.core.config import settings
from app.core.errors import AppError, PersistenceError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        # Alembic stays the source of truth in production; this is for local sqlite runs
        from app.db import Base
        from app.db.session import engine

        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="School Attendance API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    message = exc.message
    if isinstance(exc, PersistenceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        if not settings.EXPOSE_STORE_ERRORS:
            message = "Server error"
    return JSONResponse(status_code=exc.status_code, content={"detail": message})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    message = str(exc) if settings.EXPOSE_STORE_ERRORS else "Server error"
    return JSONResponse(status_code=500, content={"detail": message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Missing or malformed input is a 400 here, not FastAPI's default 422
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content={"detail": "; ".join(problems) or "Invalid request"})


app.include_router(auth.router, prefix="/api/teacher", tags=["teacher"])
app.include_router(classes.router, prefix="/api/class", tags=["class"])
app.include_router(students.router, prefix="/api/student", tags=["student"])
app.include_router(subjects.router, prefix="/api/subject", tags=["subject"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])


@app.get("/")
def root():
    return {"message": "School Attendance API running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
