"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Keep test runs off the network and out of the log directory
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("OLLAMA_URL", "http://ollama.test:11434")

from topicqa.core.config import Settings  # noqa: E402
from topicqa.core.ollama_client import ChatMessage, ChatResponse  # noqa: E402

REFERENCE_TEXT = "Arepas are made with precooked corn flour.\nReina pepiada is filled with chicken and avocado."


def chat_reply(content):
    """Build a ChatResponse the way OllamaClient.chat returns it"""
    return ChatResponse(
        model="deepseek-r1:8b",
        message=ChatMessage(role="assistant", content=content),
        done=True,
    )


@pytest.fixture
def data_file(tmp_path) -> Path:
    """Reference text file named after the topic and language"""
    path = tmp_path / "arepas_de_reina_pepiada.spanish.txt"
    path.write_text(REFERENCE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def settings(data_file) -> Settings:
    return Settings(
        data_file_path=str(data_file),
        llm_model="deepseek-r1:8b",
        ollama_url="http://ollama.test:11434",
        log_file_enabled=False,
    )


@pytest.fixture
def llm_client():
    """Stand-in for OllamaClient; configure chat.side_effect per test"""
    client = AsyncMock()
    client.chat = AsyncMock()
    client.health_check = AsyncMock(return_value=True)
    client.close = AsyncMock()
    return client


@pytest.fixture
def client(settings, llm_client):
    """Create test client with the LLM replaced"""
    from fastapi.testclient import TestClient

    from topicqa.main import create_app

    app = create_app(settings=settings, llm_client=llm_client)
    with TestClient(app) as test_client:
        yield test_client
