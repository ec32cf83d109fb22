import pytest
import os
import sys
import time
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import jwt
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_JWT_SECRET = "test_jwt_secret_with_enough_length_for_hs256"


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables before any imports."""
    env_vars = {
        "GEMINI_API_KEY": "test_gemini_key",
        "APP_JWT_SECRET": TEST_JWT_SECRET,
        "GEMINI_MODEL": "gemini-2.5-flash",
    }
    for key, value in env_vars.items():
        os.environ[key] = value
    yield
    # Cleanup
    for key in env_vars.keys():
        os.environ.pop(key, None)


@pytest.fixture
def settings():
    """Explicit settings object, isolated from any local .env file."""
    from config import Settings
    return Settings(
        _env_file=None,
        GEMINI_API_KEY="test_gemini_key",
        APP_JWT_SECRET=TEST_JWT_SECRET,
        FREE_DAILY_LIMIT=2,
    )


@pytest.fixture
def gemini_reply():
    """Build the {raw, text} dict GeminiClient returns."""
    def _build(text: str, grounding_metadata=None, queries=None):
        candidate = {"content": {"role": "model", "parts": [{"text": text}]}}
        if grounding_metadata is not None or queries is not None:
            metadata = dict(grounding_metadata or {})
            if queries is not None:
                metadata["webSearchQueries"] = queries
            candidate["groundingMetadata"] = metadata
        return {"raw": {"candidates": [candidate]}, "text": text}
    return _build


@pytest.fixture
def fake_client():
    """Stand-in for GeminiClient with awaitable generate/generate_text."""
    client = MagicMock()
    client.generate = AsyncMock()
    client.generate_text = AsyncMock()
    return client


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient for provider calls."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock()
    mock_client.post = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def auth_header():
    """Authorization header carrying a valid app token."""
    def _build(uid: str = "user-1", email: str = "user@example.com", secret: str = TEST_JWT_SECRET):
        token = jwt.encode(
            {"uid": uid, "email": email, "exp": int(time.time()) + 3600},
            secret,
            algorithm="HS256",
        )
        return {"Authorization": f"Bearer {token}"}
    return _build


@pytest.fixture
def test_app(settings):
    """App wired from the test settings."""
    from main import create_app
    return create_app(settings)


@pytest.fixture
def test_client(test_app):
    """Create a TestClient for FastAPI app."""
    return TestClient(test_app)


@pytest.fixture
def sample_grounded_response():
    """Grounded Gemini generateContent response in the current API shape."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [
                        {"text": '{"oa":"Likely True","oc":0.8,"claims":[{"c":"Unemployment was 3.7% in 2023",'},
                        {"text": '"r":8,"conf":0.8,"exp":"BLS data shows 3.6-3.7%.","src":["https://www.bls.gov/cps/"]}]}'},
                    ],
                },
                "groundingMetadata": {
                    "webSearchQueries": ["unemployment rate 2023"],
                    "groundingChunks": [
                        {"web": {"uri": "https://www.bls.gov/cps/", "title": "bls.gov"}},
                        {"web": {"uri": "https://apnews.com/article/jobs-report"}},
                    ],
                    "groundingSupports": [
                        {"segment": {"startIndex": 0, "endIndex": 20}, "groundingChunkIndices": [0]}
                    ],
                },
            }
        ]
    }
