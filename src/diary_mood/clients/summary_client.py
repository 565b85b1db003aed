"""Client for the CLOVA text-summary API."""

from typing import Any

import httpx

from diary_mood.clients.clova_api_client import ClovaAPIClient
from diary_mood.config import SummaryAPISettings
from diary_mood.utils.errors import SummaryServiceError
from diary_mood.utils.logging import get_logger

logger = get_logger("summary_client")


class SummaryClient:
    """Summarizes a diary from its title and (truncated) content."""

    def __init__(self, settings: SummaryAPISettings):
        """
        Initialize the summary client.

        Args:
            settings: Endpoint, credentials, timeout and truncation length
        """
        self.max_content_length = settings.max_content_length
        self.language = settings.language
        self._client = ClovaAPIClient(
            url=settings.url,
            api_key_id=settings.api_key_id,
            api_key=settings.api_key,
            timeout=float(settings.timeout),
        )

    async def summarize(self, title: str, content: str) -> str:
        """
        Summarize a diary.

        The content is always cut to the first ``max_content_length``
        characters before it is sent.

        Args:
            title: Diary title
            content: Diary content

        Returns:
            Summary text

        Raises:
            SummaryServiceError: If the request fails or the payload has no summary
        """
        payload = {
            "document": {"title": title, "content": content[: self.max_content_length]},
            "option": {"language": self.language},
        }

        try:
            body = await self._client.post(json=payload)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling summary API - {e}")
            raise SummaryServiceError(
                "Timeout calling text summary API",
                status_code=504,
            ) from e
        except httpx.HTTPStatusError as e:
            upstream_status = e.response.status_code
            logger.error(
                f"Summary API returned an error. "
                f"Status: {upstream_status}, Response: {e.response.text}"
            )
            raise SummaryServiceError(
                f"Text summary API returned {upstream_status}",
                upstream_status=upstream_status,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error calling summary API - {e}")
            raise SummaryServiceError("Request error calling text summary API") from e
        except ValueError as e:
            logger.error(f"Summary API returned a non-JSON body - {e}")
            raise SummaryServiceError("Text summary API returned a non-JSON body") from e

        return self._parse_summary(body)

    @staticmethod
    def _parse_summary(body: Any) -> str:
        summary = body.get("summary") if isinstance(body, dict) else None
        if not isinstance(summary, str):
            logger.error(f"Malformed summary API payload: {body!r}")
            raise SummaryServiceError(
                "Malformed text summary payload: missing 'summary'",
                details={"payload": body},
            )
        return summary
