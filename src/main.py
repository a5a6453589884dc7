"""Movie API — FastAPI application entry point.

User registration/login and a movie catalog backed by a document store.
Each handler reads its input, calls one service function and maps the
result, or the ApiError it raised, to a JSON response.
"""

import os
from contextlib import asynccontextmanager
from pathlib import PurePath

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.types import Scope

from src.config.settings import get_settings
from src.errors import ApiError, InternalError, ValidationError
from src.logging.audit import (
    RequestTimer,
    generate_request_id,
    get_audit_logger,
    request_id_var,
    setup_logging,
)
from src.services.movies import add_movie, get_movie, list_movies, movies_by_genre
from src.services.users import login_user, register_user
from src.store.base import Store
from src.store.factory import create_store

VERSION = "1.0.0"

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store once at startup and close it once at shutdown.

    A failed initial connection propagates, which makes the server exit
    with a non-zero status.
    """
    setup_logging()
    logger = get_audit_logger()

    store = create_store()
    try:
        await store.connect()
    except Exception:
        logger.exception("Database connection failed")
        raise
    app.state.store = store
    logger.info("API started", extra={"audit_data": {"version": VERSION}})

    yield

    logger.info("Shutting down")
    await store.close()
    logger.info("Database connection closed")


app = FastAPI(
    title="Movie API",
    description="User accounts and a movie catalog over a document store",
    version=VERSION,
    lifespan=lifespan,
)


def get_store(request: Request) -> Store:
    return request.app.state.store


@app.middleware("http")
async def log_requests(request: Request, call_next):
    rid = generate_request_id()
    request_id_var.set(rid)

    with RequestTimer() as timer:
        response = await call_next(request)

    response.headers["X-Request-Id"] = rid
    get_audit_logger().info(
        "Request handled",
        extra={"audit_data": {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "latency_ms": timer.elapsed_ms,
            "client_ip": request.client.host if request.client else "unknown",
        }},
    )
    return response


# --- Users ---


@app.post("/api/register")
async def register(request: Request, store: Store = Depends(get_store)):
    logger = get_audit_logger()
    try:
        body = await _read_fields(request)
        user_id = await register_user(store, body)
    except ApiError as e:
        logger.warning("Registration rejected", extra={"audit_data": {"reason": e.message}})
        return _user_failure(e)
    except Exception:
        logger.exception("Error registering user")
        return _user_failure(InternalError("Registration failed"))

    logger.info("User registered", extra={"audit_data": {"user_id": user_id}})
    return {"success": True, "message": "Registration successful", "userId": user_id}


@app.post("/api/login")
async def login(request: Request, store: Store = Depends(get_store)):
    logger = get_audit_logger()
    try:
        body = await _read_fields(request)
        user = await login_user(store, body)
    except ApiError as e:
        logger.warning("Login rejected", extra={"audit_data": {"reason": e.message}})
        return _user_failure(e)
    except Exception:
        logger.exception("Error logging in")
        return _user_failure(InternalError("Login failed"))

    return {"success": True, "message": "Login successful", "user": user.public_profile()}


# --- Movies ---


@app.get("/api/movies")
async def movies_index(store: Store = Depends(get_store)):
    try:
        return await list_movies(store)
    except Exception:
        get_audit_logger().exception("Error fetching movies")
        return _movie_failure(InternalError("Failed to fetch movies"))


@app.get("/api/movies/genre/{genre}")
async def movies_for_genre(genre: str, store: Store = Depends(get_store)):
    try:
        return await movies_by_genre(store, genre)
    except Exception:
        get_audit_logger().exception(
            "Error fetching movies by genre", extra={"audit_data": {"genre": genre}},
        )
        return _movie_failure(InternalError("Failed to fetch movies by genre"))


@app.get("/api/movies/{movie_id}")
async def movie_detail(movie_id: str, store: Store = Depends(get_store)):
    try:
        return await get_movie(store, movie_id)
    except ApiError as e:
        return _movie_failure(e)
    except Exception:
        get_audit_logger().exception(
            "Error fetching movie", extra={"audit_data": {"movie_id": movie_id}},
        )
        return _movie_failure(InternalError("Failed to fetch movie"))


@app.post("/api/movies")
async def movie_create(request: Request, store: Store = Depends(get_store)):
    logger = get_audit_logger()
    try:
        movie_id = await add_movie(store, await _read_json(request))
    except ApiError as e:
        logger.warning("Movie rejected", extra={"audit_data": {"reason": e.message}})
        return _movie_failure(e)
    except Exception:
        logger.exception("Error adding movie")
        return _movie_failure(InternalError("Failed to add movie"))

    logger.info("Movie added", extra={"audit_data": {"movie_id": movie_id}})
    return JSONResponse(
        status_code=201,
        content={"message": "Movie added successfully", "movieId": movie_id},
    )


# --- Health ---


@app.get("/api/health")
async def health(store: Store = Depends(get_store)):
    try:
        await store.ping()
    except Exception as e:
        get_audit_logger().error("Health check failed", extra={"audit_data": {"error": str(e)}})
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "MongoDB connection failed"},
        )
    return {"status": "ok", "message": "MongoDB connection is healthy"}


# --- Helpers ---


async def _read_json(request: Request):
    # An empty body reads as an empty object
    if not await request.body():
        return {}
    try:
        return await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON") from e


async def _read_fields(request: Request) -> dict:
    """Read a flat field mapping from a JSON or form-encoded body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except HTTPException as e:
            raise ValidationError("Request body must be valid form data") from e
        return {k: v for k, v in form.items() if isinstance(v, str)}

    body = await _read_json(request)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _user_failure(error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "message": error.message},
    )


def _movie_failure(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


class PublicFiles(StaticFiles):
    """StaticFiles that never serves dotfiles or anything under a dot directory."""

    async def get_response(self, path: str, scope: Scope):
        if any(part.startswith(".") for part in PurePath(path).parts):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)


def _mount_static(app: FastAPI) -> None:
    """Serve static files at / behind the API routes, if the directory exists."""
    static_dir = get_settings().static_dir
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", PublicFiles(directory=static_dir, html=True), name="static")


_mount_static(app)
