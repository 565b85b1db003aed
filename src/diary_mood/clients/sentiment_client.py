"""Client for the CLOVA sentiment-analysis API."""

from typing import Any

import httpx

from diary_mood.clients.clova_api_client import ClovaAPIClient
from diary_mood.config import SentimentAPISettings
from diary_mood.models.mood import SentimentScores
from diary_mood.utils.errors import AnalysisServiceError
from diary_mood.utils.logging import get_logger

logger = get_logger("sentiment_client")


class SentimentClient:
    """
    Scores one chunk of diary text per sentiment category.

    Request body is ``{"content": chunk}``; the response must carry
    ``document.confidence`` with a score for every category. Any transport
    failure, non-2xx status or malformed payload raises AnalysisServiceError.
    Requests are never retried.
    """

    def __init__(self, settings: SentimentAPISettings):
        """
        Initialize the sentiment client.

        Args:
            settings: Endpoint, credentials and timeout for the sentiment API
        """
        self._client = ClovaAPIClient(
            url=settings.url,
            api_key_id=settings.api_key_id,
            api_key=settings.api_key,
            timeout=float(settings.timeout),
        )

    async def analyze(self, content: str) -> SentimentScores:
        """
        Analyze the sentiment of one chunk.

        Args:
            content: Chunk text

        Returns:
            Confidence per category

        Raises:
            AnalysisServiceError: If the request fails or the payload is malformed
        """
        try:
            body = await self._client.post(json={"content": content})
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling sentiment API ({len(content)} chars) - {e}")
            raise AnalysisServiceError(
                "Timeout calling sentiment analysis API",
                status_code=504,
            ) from e
        except httpx.HTTPStatusError as e:
            upstream_status = e.response.status_code
            logger.error(
                f"Sentiment API returned an error. "
                f"Status: {upstream_status}, Response: {e.response.text}"
            )
            raise AnalysisServiceError(
                f"Sentiment analysis API returned {upstream_status}",
                upstream_status=upstream_status,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error calling sentiment API - {e}")
            raise AnalysisServiceError("Request error calling sentiment analysis API") from e
        except ValueError as e:
            logger.error(f"Sentiment API returned a non-JSON body - {e}")
            raise AnalysisServiceError("Sentiment analysis API returned a non-JSON body") from e

        return self._parse_scores(body)

    @staticmethod
    def _parse_scores(body: Any) -> SentimentScores:
        try:
            confidence = body["document"]["confidence"]
            return SentimentScores.from_confidence(confidence)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed sentiment API payload: {e}")
            raise AnalysisServiceError(
                f"Malformed sentiment analysis payload: {e}",
                details={"payload": body},
            ) from e
