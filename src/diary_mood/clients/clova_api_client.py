"""Base HTTP client for the NAVER Cloud CLOVA APIs.

Every CLOVA endpoint authenticates with the same pair of static headers,
X-NCP-APIGW-API-KEY-ID and X-NCP-APIGW-API-KEY. This client injects them and
leaves error translation to the service-specific clients.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

API_KEY_ID_HEADER = "X-NCP-APIGW-API-KEY-ID"
API_KEY_HEADER = "X-NCP-APIGW-API-KEY"


class ClovaAPIClient:
    """
    HTTP client for a single CLOVA endpoint.

    Handles:
    - Injection of the two API-key headers
    - Timeout configuration
    - JSON request/response handling

    Example:
        ```python
        client = ClovaAPIClient(
            url="https://naveropenapi.apigw.ntruss.com/sentiment-analysis/v1/analyze",
            api_key_id="key-id",
            api_key="key",
            timeout=10.0,
        )
        body = await client.post(json={"content": "오늘은 좋은 날"})
        ```
    """

    def __init__(
        self,
        url: str,
        api_key_id: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the CLOVA API client.

        Args:
            url: Full endpoint URL
            api_key_id: API key id for X-NCP-APIGW-API-KEY-ID
            api_key: API key for X-NCP-APIGW-API-KEY
            timeout: Request timeout in seconds (default: 10.0)
        """
        self.url = url
        self.timeout = timeout
        self._headers: Dict[str, str] = {"Content-Type": "application/json"}

        if api_key_id and api_key:
            self._headers[API_KEY_ID_HEADER] = api_key_id
            self._headers[API_KEY_HEADER] = api_key
        else:
            logger.debug(f"No CLOVA credentials configured for {url} - requests will be unauthenticated")

    async def post(self, json: Dict[str, Any]) -> Any:
        """
        POST a JSON payload to the endpoint.

        Args:
            json: JSON payload

        Returns:
            Decoded JSON response body

        Raises:
            httpx.HTTPStatusError: If response status code indicates an error
            httpx.RequestError: If request fails
            ValueError: If the response body is not JSON
        """
        logger.debug(f"POST {self.url}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.url, json=json, headers=self._headers)
            response.raise_for_status()
            return response.json()
