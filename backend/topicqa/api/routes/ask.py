"""
Question answering endpoints
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from topicqa.core.context import AppContext, get_app_context
from topicqa.core.errors import QueryError
from topicqa.core.logging_config import LoggingConfig
from topicqa.services.query_gate import DEFAULT_QUERY

router = APIRouter(tags=["ask"])
logger = LoggingConfig.get_logger(__name__)


class AskRequest(BaseModel):
    """Question payload"""
    query: Optional[str] = Field(default=None, description="User question; defaults to \"Hello\"")


class AskResponse(BaseModel):
    """Answer payload"""
    response: str


class ErrorResponse(BaseModel):
    error: str


@router.get("/")
async def describe_api(context: AppContext = Depends(get_app_context)) -> Dict[str, Any]:
    """Describe the API and how to call it"""
    topic = context.topic_config.topic
    language = context.topic_config.language
    return {
        "message": (
            f"Welcome to the {context.settings.llm_model} API! "
            f"This API provides answers in {language} about {topic}."
        ),
        "usage": {
            "endpoint": "/ask",
            "method": "POST",
            "body": {"query": "Your question here"},
            "example": {"query": f"How do I make {topic}?"},
            "response": {"response": f"Step-by-step instructions in {language}."},
        },
    }


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={500: {"model": ErrorResponse}},
)
async def ask(
    payload: Optional[AskRequest] = None,
    context: AppContext = Depends(get_app_context),
):
    """
    Answer a question about the configured topic.

    Off-topic questions get a 200 with a refusal message. Unreadable
    reference data and LLM failures are reported as 500.
    """
    user_input = (payload.query if payload else None) or DEFAULT_QUERY
    try:
        result = await context.query_gate.ask(user_input)
    except QueryError as e:
        logger.error(
            "Query failed",
            extra={"error_type": type(e).__name__, "error": str(e)},
        )
        return JSONResponse(status_code=500, content={"error": e.public_message})
    return AskResponse(response=result.response)
