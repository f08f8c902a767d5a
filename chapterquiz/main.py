"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from chapterquiz.core.config import settings
from chapterquiz.core.auth import SESSION_USER_KEY
from chapterquiz.core.errors import QuizError, PersistenceError
from chapterquiz.api.auth import router as auth_router
from chapterquiz.api.chapters import router as chapters_router
from chapterquiz.api.quizzes import router as quizzes_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    yield
    logger.info("Shutdown complete")

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG or not settings.is_production() else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY.get_secret_value(),
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_TTL,
    same_site="lax",
    https_only=settings.is_production(),
)

# Exception handlers
@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    """Typed service failures keep their message key for the client."""
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc.message_key)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    error = {"message": "Internal Server Error", "message_key": "internal_error", "type": "internal_error"}
    if settings.DEBUG:
        error["debug"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error})

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok", "version": settings.APP_VERSION}

@app.get("/", include_in_schema=False)
def root(request: Request):
    target = "/chapters" if request.session.get(SESSION_USER_KEY) else "/login"
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)

app.include_router(auth_router, tags=["auth"])
app.include_router(chapters_router, prefix="/chapters", tags=["chapters"])
app.include_router(quizzes_router, prefix="/chapters", tags=["quizzes"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("chapterquiz.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
