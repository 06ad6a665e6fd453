"""Executor collaborators — the functions that actually run provider tools.

The broker only knows tool schemas. Running a tool is delegated to a
callable ``(full_tool_name, arguments) -> result`` supplied by the host.
Two implementations are provided:

- :class:`HandlerTable`: an explicit name -> handler dispatch table for
  in-process provider handlers.
- :class:`HttpToolExecutor`: forwards calls to an HTTP tool gateway.

Neither retries or rate-limits; failures surface as :class:`ToolExecutionError`.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

import httpx

from .exceptions import ToolExecutionError
from .logging_config import create_logger, get_request_id

if TYPE_CHECKING:
    from collections.abc import Callable

logger = create_logger(__name__)


class HandlerTable:
    """Explicit mapping from full tool name to handler function."""

    def __init__(self, handlers: dict[str, Callable[..., Any]] | None = None) -> None:
        self._handlers: dict[str, Callable[..., Any]] = dict(handlers or {})

    def register(self, name: str, handler: Callable[..., Any]) -> None:
        """Register (or replace) the handler for ``name``."""
        self._handlers[name] = handler

    def names(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    async def __call__(self, name: str, arguments: dict[str, Any]) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolExecutionError(f"No handler registered for tool {name!r}", tool_name=name)

        try:
            result = handler(**arguments)
        except TypeError as e:
            raise ToolExecutionError(f"Invalid arguments for {name}: {e}", tool_name=name) from e
        if inspect.isawaitable(result):
            result = await result
        return result


class HttpToolExecutor:
    """Executor that POSTs tool calls to an HTTP gateway.

    Request: ``POST <base_url>/tools/execute`` with JSON
    ``{"tool": <name>, "arguments": {...}}`` and an ``X-User`` header.
    The decoded JSON response body is the tool result.
    """

    def __init__(
        self,
        base_url: str,
        user: str = "toolkit",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            base_url: Gateway root URL, e.g. ``https://gateway.example.com/api/v1``.
            user: Value sent in the ``X-User`` header.
            timeout: HTTP timeout in seconds.
            client: Optional pre-built client (used for connection reuse and tests).
        """
        self.base_url = base_url.rstrip("/")
        self.user = user
        self.timeout = timeout
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"X-User": self.user, "Content-Type": "application/json"}
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def __call__(self, name: str, arguments: dict[str, Any]) -> Any:
        url = f"{self.base_url}/tools/execute"
        payload = {"tool": name, "arguments": arguments}

        try:
            if self._client is not None:
                resp = await self._client.post(
                    url, json=payload, headers=self._headers(), timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.post(
                        url, json=payload, headers=self._headers(), timeout=self.timeout
                    )
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise ToolExecutionError(
                f"Tool {name} timed out after {self.timeout}s", tool_name=name
            ) from e
        except httpx.HTTPStatusError as e:
            raise ToolExecutionError(
                f"Gateway error (HTTP {e.response.status_code}): {e.response.text}",
                tool_name=name,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ToolExecutionError(f"Gateway request failed: {e}", tool_name=name) from e

        logger.debug("Tool %s returned HTTP %s", name, resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise ToolExecutionError(
                f"Gateway returned a non-JSON body for {name}", tool_name=name
            ) from e

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
