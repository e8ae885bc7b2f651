"""
HTTP loader for model bundles served from a URL (static hosting, CDN).

Uses a lazily created httpx AsyncClient; the client is closed with
aclose() once the bundle is loaded.
"""

from typing import Optional

import httpx
import structlog

from bounce_classifier.exceptions import ModelLoadError
from bounce_classifier.loaders.base_loader import BaseModelLoader

logger = structlog.get_logger(__name__)


class HttpModelLoader(BaseModelLoader):
    """
    Fetches bundle files relative to a base URL.

    Args:
        base_url: URL of the bundle directory (e.g. https://cdn.example.com/model)
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url.rstrip("/"))
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def load_bytes(self, name: str) -> bytes:
        url = self.describe(name)
        client = await self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ModelLoadError(
                f"Timed out fetching {name}",
                source=url,
                details={"timeout": self.timeout},
            ) from e
        except httpx.HTTPStatusError as e:
            raise ModelLoadError(
                f"Failed to fetch {name}: {e.response.status_code}",
                source=url,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise ModelLoadError(
                f"Failed to fetch {name}",
                source=url,
                details={"error": f"{type(e).__name__}: {e}"},
            ) from e

        logger.debug("Fetched bundle file", url=url, size=len(response.content))
        return response.content

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
