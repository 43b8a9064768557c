"""
App factory for the topic question answering API
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from topicqa.api.routes import ask, health
from topicqa.core.config import Settings, get_settings
from topicqa.core.context import AppContext
from topicqa.core.logging_config import LoggingConfig
from topicqa.core.middleware import LoggingContextMiddleware
from topicqa.core.ollama_client import OllamaClient
from topicqa.core.topic_config import resolve_topic_config
from topicqa.services.query_gate import ChatClient, QueryGate
from topicqa.services.reference_loader import ReferenceLoader

logger = LoggingConfig.get_logger(__name__)


def build_context(settings: Settings, llm_client: Optional[ChatClient] = None) -> AppContext:
    """
    Resolve the topic configuration and wire the request pipeline.

    Raises:
        ConfigError: the data file name is malformed
    """
    topic_config = resolve_topic_config(settings.data_file_path)
    loader = ReferenceLoader(settings.data_file_path)
    if llm_client is None:
        llm_client = OllamaClient(
            base_url=settings.ollama_url,
            timeout=settings.llm_timeout_seconds,
        )
    query_gate = QueryGate(
        config=topic_config,
        loader=loader,
        llm_client=llm_client,
        model=settings.llm_model,
    )
    return AppContext(
        settings=settings,
        topic_config=topic_config,
        loader=loader,
        llm_client=llm_client,
        query_gate=query_gate,
    )


def create_app(settings: Optional[Settings] = None, llm_client: Optional[ChatClient] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Configuration is resolved here, before any server can accept
    requests; a ConfigError propagates to the caller.
    """
    settings = settings or get_settings()
    context = build_context(settings, llm_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting {settings.app_name} in {settings.app_env} mode...",
            extra={
                "topic": context.topic_config.topic,
                "language": context.topic_config.language,
                "llm_model": settings.llm_model,
            },
        )
        yield
        logger.info(f"Shutting down {settings.app_name}...")
        close = getattr(context.llm_client, "close", None)
        if close is not None:
            await close()

    app = FastAPI(
        title=settings.app_name,
        description=(
            f"Answers questions about {context.topic_config.topic} "
            f"in {context.topic_config.language}"
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Log unhandled errors and answer with a generic 500"""
        if isinstance(exc, FastAPIHTTPException):
            raise exc

        logger.error(
            "Unhandled exception",
            exc_info=exc,
            extra={
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process the request."},
        )

    app.include_router(ask.router)
    app.include_router(health.router)

    return app
