import logging
from unittest.mock import MagicMock

import pytest
import requests

from convoai_server.config.settings import load_config
from convoai_server.services.convoai_client import ConvoAIClient

TEST_ENV = {
    "AGORA_APP_ID": "test-app-id",
    "AGORA_APP_CERTIFICATE": "test-app-cert",
    "AGORA_CUSTOMER_ID": "test-customer-id",
    "AGORA_CUSTOMER_SECRET": "test-customer-secret",
    "AGORA_CONVO_AI_BASE_URL": "https://api.example.com",
    "AGENT_UID": "123456",
    "LLM_MODEL": "gpt-3.5-turbo",
    "LLM_URL": "https://api.openai.com/v1/chat/completions",
    "LLM_TOKEN": "test-llm-token",
    "TTS_VENDOR": "microsoft",
    "MICROSOFT_TTS_KEY": "test-ms-key",
    "MICROSOFT_TTS_REGION": "eastus",
    "MICROSOFT_TTS_VOICE_NAME": "en-US-AriaNeural",
    "MICROSOFT_TTS_RATE": "1.0",
    "MICROSOFT_TTS_VOLUME": "1.0",
    "CORS_ALLOW_ORIGIN": "*",
}


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture
def test_env():
    return dict(TEST_ENV)


@pytest.fixture
def config(test_env):
    return load_config(test_env)


@pytest.fixture
def token_issuer():
    """Stub token issuer that always returns "tok"."""
    issuer = MagicMock()
    issuer.issue_rtc_token.return_value = "tok"
    return issuer


def make_response(status_code=200, json_body=None, text=None):
    """Build a stand-in for requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_body is not None:
        response.json.return_value = json_body
        response.text = text if text is not None else str(json_body)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    return response


@pytest.fixture
def http_session():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response(200, {"agent_id": "test-agent-123"})
    return session


@pytest.fixture
def convoai_client(config, http_session):
    return ConvoAIClient(
        config.base_url,
        config.app_id,
        config.customer_id,
        config.customer_secret,
        session=http_session,
    )


@pytest.fixture
def response_factory():
    return make_response
