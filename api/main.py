import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import router as auth_router
from core import db
from core.errors import BackendError
from core.observability import setup_logging
from course_sections import router as course_sections_router
from employees import router as employees_router
from grades import router as grades_router
from sections import router as sections_router
from students import router as students_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip() or "http://localhost:5173,http://127.0.0.1:5173"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
    # Details stay in the log; clients get a generic message.
    logger.error(
        "backend_error method=%s path=%s error_type=%s error=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


app.include_router(auth_router.router, tags=["auth"])
app.include_router(sections_router.router, prefix="/seccion", tags=["sections"])
app.include_router(grades_router.router, prefix="/grado", tags=["grades"])
app.include_router(students_router.router, prefix="/estudiante", tags=["students"])
app.include_router(employees_router.router, prefix="/empleado", tags=["employees"])
app.include_router(course_sections_router.router, prefix="/curso-seccion", tags=["course-sections"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "academic-records api"}
