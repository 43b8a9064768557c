"""
Health check endpoints
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from topicqa.core.context import AppContext, get_app_context
from topicqa.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(context: AppContext = Depends(get_app_context)):
    """
    Basic health check endpoint

    Returns:
        dict: Health status
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": context.settings.app_name,
    }


@router.get("/health/detailed")
async def detailed_health_check(context: AppContext = Depends(get_app_context)) -> Dict[str, Any]:
    """
    Detailed health check with component status

    Returns:
        dict: status of the reference data file and the LLM server
    """
    settings = context.settings
    health_status: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.app_name,
        "environment": settings.app_env,
        "topic": context.topic_config.topic,
        "language": context.topic_config.language,
        "components": {},
    }

    overall_healthy = True

    if await context.loader.load():
        health_status["components"]["data_file"] = {
            "status": "healthy",
            "path": str(context.loader.path),
        }
    else:
        overall_healthy = False
        health_status["components"]["data_file"] = {
            "status": "unhealthy",
            "path": str(context.loader.path),
            "message": "Data file is missing or cannot be read.",
        }

    health_check_fn = getattr(context.llm_client, "health_check", None)
    if health_check_fn is None:
        llm_healthy = True
    else:
        llm_healthy = await health_check_fn()
    if not llm_healthy:
        overall_healthy = False
        logger.warning("LLM server is not reachable")
    health_status["components"]["llm"] = {
        "status": "healthy" if llm_healthy else "unhealthy",
        "model": settings.llm_model,
        "url": settings.ollama_url,
    }

    if not overall_healthy:
        health_status["status"] = "degraded"

    return health_status
