"""Unary transport: one HTTP POST per request."""

from typing import Any

import httpx

from parley.conversation.models import TransportKind
from parley.exceptions import TransportError
from parley.observability.logging import get_logger
from parley.transports.base import ReplyHandler, Transport

logger = get_logger(__name__)


class UnaryTransport(Transport):
    """POSTs each body as JSON and returns the decoded response body.

    Attributes:
        url: Bot endpoint
    """

    kind = TransportKind.UNARY

    def __init__(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            url: Bot endpoint
            headers: Extra headers sent with every request
            timeout: Request timeout in seconds
            client: Pre-built HTTP client; the transport then does not own it
        """
        self.url = url
        self._headers = {**(headers or {}), "content-type": "application/json"}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def start(self, on_reply: ReplyHandler) -> None:  # noqa: ARG002
        """Nothing to open; replies come back from dispatch."""

    async def dispatch(self, body: dict[str, Any]) -> Any:
        """POST the body and return the parsed JSON reply."""
        try:
            response = await self._client.post(
                self.url,
                json=body,
                headers=self._headers,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Timed out contacting {self.url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {self.url} failed: {e}") from e

        if response.status_code >= 400:
            logger.warning(
                "bot_http_error",
                status_code=response.status_code,
                response_preview=response.text[:200],
            )
            raise TransportError(
                f"Bot responded with HTTP {response.status_code}",
                status_code=response.status_code,
                details=response.text[:500],
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Bot response is not JSON",
                status_code=response.status_code,
                details=response.text[:500],
            ) from e

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
