"""Unit tests for SentimentClient."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import httpx

from diary_mood.clients import SentimentAnalyzer
from diary_mood.clients.sentiment_client import SentimentClient
from diary_mood.config import SentimentAPISettings
from diary_mood.utils.errors import AnalysisServiceError


@pytest.fixture
def settings():
    """Sentiment API settings for testing."""
    return SentimentAPISettings(
        url="https://clova.test/sentiment-analysis/v1/analyze",
        api_key_id="test-key-id",
        api_key="test-key",
        timeout=3,
    )


@pytest.fixture
def client(settings):
    return SentimentClient(settings)


class TestSentimentClient:
    """Test suite for SentimentClient."""

    def test_init(self, client, settings):
        assert client._client.url == settings.url
        assert client._client.timeout == 3.0
        assert client._client._headers["X-NCP-APIGW-API-KEY-ID"] == "test-key-id"

    def test_satisfies_protocol(self, client):
        assert isinstance(client, SentimentAnalyzer)

    @pytest.mark.asyncio
    async def test_analyze_success(self, client):
        response = {
            "document": {
                "sentiment": "negative",
                "confidence": {"negative": 99.1, "positive": 0.4, "neutral": 0.5},
            },
            "sentences": [],
        }
        with patch.object(client._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = response

            scores = await client.analyze("오늘은 너무 힘들었다")

            assert scores.negative == 99.1
            assert scores.positive == 0.4
            assert scores.neutral == 0.5
            mock_post.assert_called_once_with(json={"content": "오늘은 너무 힘들었다"})

    @pytest.mark.asyncio
    async def test_http_error_raises_analysis_error(self, client):
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.text = "Internal Server Error"
        http_error = httpx.HTTPStatusError(
            "Internal Server Error", request=MagicMock(), response=mock_response
        )

        with patch.object(client._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = http_error

            with pytest.raises(AnalysisServiceError) as exc_info:
                await client.analyze("text")

            assert exc_info.value.status_code == 502
            assert exc_info.value.details["upstream_status"] == 500
            assert exc_info.value.details["service"] == "sentiment-analysis"
            assert exc_info.value.__cause__ is http_error

    @pytest.mark.asyncio
    async def test_timeout_raises_analysis_error_504(self, client):
        with patch.object(client._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ReadTimeout("timed out")

            with pytest.raises(AnalysisServiceError) as exc_info:
                await client.analyze("text")

            assert exc_info.value.status_code == 504

    @pytest.mark.asyncio
    async def test_connection_error_raises_analysis_error(self, client):
        with patch.object(client._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ConnectError("Connection refused")

            with pytest.raises(AnalysisServiceError) as exc_info:
                await client.analyze("text")

            assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_non_json_body_raises_analysis_error(self, client):
        with patch.object(client._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = ValueError("Expecting value: line 1 column 1")

            with pytest.raises(AnalysisServiceError):
                await client.analyze("text")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"document": {}},
            {"document": {"confidence": {"positive": 1, "negative": 2}}},
            {"document": {"confidence": None}},
            [],
            "oops",
        ],
    )
    async def test_malformed_payload_raises_analysis_error(self, client, body):
        with patch.object(client._client, "post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = body

            with pytest.raises(AnalysisServiceError) as exc_info:
                await client.analyze("text")

            assert exc_info.value.code == "ANALYSIS_SERVICE_ERROR"
