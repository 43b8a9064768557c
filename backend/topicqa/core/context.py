"""
Process-wide application context built once at startup
"""
from dataclasses import dataclass

from fastapi import Request

from topicqa.core.config import Settings
from topicqa.core.topic_config import TopicConfig
from topicqa.services.query_gate import ChatClient, QueryGate
from topicqa.services.reference_loader import ReferenceLoader


@dataclass(frozen=True)
class AppContext:
    """Read-only collaborators shared by every request handler"""
    settings: Settings
    topic_config: TopicConfig
    loader: ReferenceLoader
    llm_client: ChatClient
    query_gate: QueryGate


def get_app_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context stored on app.state"""
    return request.app.state.context
