"""
Async client for the FXBank HTTP adapter.
"""

from typing import Any, Dict, List, Optional

import httpx

from .. import config
from ..errors import FXBankError, UnknownPromptError, UnknownToolError
from ..logging_config import get_logger

logger = get_logger("fxbank.clients.tools")


class ToolsClientError(FXBankError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ToolsClient:
    """
    Thin httpx wrapper around /tools and /prompts.

    Pass `transport` (e.g. httpx.ASGITransport) to talk to an in-process app.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.TOOLS_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else config.REQUEST_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "ToolsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP %s %s -> %s %s", method, path, e.response.status_code, e.response.text)
            detail = (
                e.response.json().get("detail")
                if e.response.headers.get("content-type", "").startswith("application/json")
                else e.response.text
            )
            raise ToolsClientError(str(detail), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("HTTP %s %s failed: %s", method, path, e)
            raise ToolsClientError(str(e)) from e

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    async def list_tools(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/tools")
        return data.get("tools", [])

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Invoke a tool and return its result payload."""
        try:
            data = await self._request("POST", f"/tools/{name}", json={"arguments": arguments or {}})
        except ToolsClientError as e:
            if e.status_code == 404:
                raise UnknownToolError(name) from e
            raise
        return data["result"]

    async def list_prompts(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/prompts")
        return data.get("prompts", [])

    async def get_prompt(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            return await self._request("POST", f"/prompts/{name}", json={"arguments": arguments or {}})
        except ToolsClientError as e:
            if e.status_code == 404:
                raise UnknownPromptError(name) from e
            raise
