# inkwell/api/main.py

# ============================================================
# 1. LOAD ENV VARS FIRST
# ============================================================
from dotenv import load_dotenv
load_dotenv()  # config.py reads os.environ at import time

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inkwell import config
from inkwell.api.deps import build_default_cache
from inkwell.llm.net_loader import NetLLMClient
from inkwell.memory.pg_posts import PostStore, PostStoreError

# ============================================================
# IMPORT API ROUTERS
# ============================================================

from inkwell.api.session import router as session_router
from inkwell.api.predict import router as predict_router
from inkwell.api.next import router as next_router
from inkwell.api.posts import router as posts_router

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


# ============================================================
# ERROR RENDERING ({"error": reason})
# ============================================================

async def _http_error(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request, exc: RequestValidationError):
    errors = exc.errors()
    loc = errors[0].get("loc", ()) if errors else ()
    field = ".".join(str(p) for p in loc if p not in ("body", "path", "query"))
    reason = f"invalid field: {field}" if field else "invalid request body"
    return JSONResponse(status_code=400, content={"error": reason})


async def _post_store_error(request, exc: PostStoreError):
    logger.error("[POSTS] store failure: %s", exc)
    return JSONResponse(status_code=503, content={"error": "post store unavailable"})


# ============================================================
# FASTAPI APPLICATION
# ============================================================

def create_app(cache=None, llm=None, posts=None) -> FastAPI:
    app = FastAPI(
        title="Inkwell Backend API",
        description=(
            "Writing suggestions for the Inkwell editor\n\n"
            "- POST /session  start a writing session\n"
            "- POST /predict  word / bridge suggestions\n"
            "- POST /next     next-section phrase + angle\n"
            "- /posts         saved documents\n"
        ),
        version="1.0.0",
    )

    app.state.cache = cache if cache is not None else build_default_cache()
    app.state.llm = llm if llm is not None else NetLLMClient()
    app.state.posts = posts if posts is not None else PostStore()

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(PostStoreError, _post_store_error)

    # ========================================================
    # CORS CONFIGURATION
    # ========================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # ========================================================
    # ROUTER REGISTRATION
    # ========================================================

    app.include_router(predict_router)      # POST /predict
    app.include_router(next_router)         # POST /next
    app.include_router(session_router)      # POST /session
    app.include_router(posts_router)        # /posts

    # ========================================================
    # STARTUP
    # ========================================================

    @app.on_event("startup")
    def startup_event():
        logger.info(
            "[STARTUP] cache=%s | llm=%s",
            app.state.cache.backend_name,
            getattr(app.state.llm, "provider", "custom"),
        )
        try:
            app.state.posts.init_schema()
            logger.info("[STARTUP] posts table verified")
        except PostStoreError as e:
            logger.warning("[STARTUP] post store unavailable: %s", e)

    # ========================================================
    # INFO + HEALTH
    # ========================================================

    @app.get("/", tags=["Health"])
    def root_info():
        return {
            "status": "ok",
            "service": "Inkwell Backend",
            "features": [
                "Session context with derived thesis",
                "Word and bridge suggestions",
                "Next-section phrase + angle",
                "Prediction cache",
                "Saved posts (Postgres)",
            ],
        }

    @app.get("/health", tags=["Health"])
    def health_check():
        cache_backend = app.state.cache
        status = {
            "status": "ok",
            "services": {
                "cache": cache_backend.backend_name,
                "posts": "unknown",
            },
        }

        ping = getattr(cache_backend, "ping", None)
        if ping is not None and not ping():
            status["services"]["cache"] = f"{cache_backend.backend_name}: error"
            status["status"] = "degraded"

        if app.state.posts.ping():
            status["services"]["posts"] = "ok"
        else:
            status["services"]["posts"] = "error"
            status["status"] = "degraded"

        return status

    return app


app = create_app()


def run() -> None:
    """
    Console entry point (inkwell-server).
    """
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
