"""Shared plumbing for the JSON-RPC method wrappers."""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..client.dispatch import DispatchClient
from ..context import RequestContext


class MethodsBase:
    """Hold the dispatch client the wrappers call through."""

    def __init__(self, dispatcher: DispatchClient) -> None:
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> DispatchClient:
        return self._dispatcher

    def _request(
        self,
        method: str | Enum,
        *params: Any,
        context: RequestContext | None = None,
    ) -> bytes:
        return self._dispatcher.request(method, *params, context=context)
