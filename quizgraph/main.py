from contextlib import asynccontextmanager
from fastapi import FastAPI

from .core.config import settings
from .core.cors import setup_cors
from .core.logging import configure_logging, get_logger
from .graphql.context import build_services
from .graphql.router import router as graphql_router
from .repositories.factory import create_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events для FastAPI."""
    configure_logging(debug=settings.DEBUG)
    logger.info("Starting FastAPI server", env=settings.APP_ENV)

    store = await create_store(settings)
    app.state.services = build_services(store, settings)

    # ---------------------------------------------------------------
    yield
    # ---------------------------------------------------------------

    logger.info("Shutting down FastAPI server")
    try:
        await store.close()
    except Exception:
        logger.exception("Error closing entity store")


# ---------------------------------------------------------------
# FastAPI App
# ---------------------------------------------------------------

app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan
)

setup_cors(app)

# Routers
app.include_router(graphql_router)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {
        "message": "QuizGraph API",
        "status": "running",
        "graphql": settings.GRAPHQL_PATH,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("quizgraph.main:app", host="0.0.0.0", port=settings.BACKEND_PORT)
