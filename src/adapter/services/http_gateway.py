import logging
from typing import Any

import httpx

from src.app.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class HttpGateway:
    """Base for JSON-over-HTTP gateways sharing one httpx.AsyncClient"""

    service_name = "upstream"

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(f"{self.service_name} {method} {path} failed: {exc!r}")
            raise UpstreamUnavailableError(self.service_name, str(exc)) from exc

        if not response.is_success:
            logger.warning(
                f"{self.service_name} {method} {path} returned {response.status_code}"
            )
            raise UpstreamUnavailableError(
                self.service_name, f"{method} {path} returned {response.status_code}"
            )

        if not response.content:
            return None
        return response.json()
