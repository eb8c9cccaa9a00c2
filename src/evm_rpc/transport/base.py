"""Transport capability shared by every JSON-RPC channel."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from ..context import RequestContext
from ..exceptions import RPCError, TransportError


class Transport(ABC):
    """A single channel able to deliver one JSON-RPC call."""

    endpoint: str = ""

    @abstractmethod
    def request(self, method: str, params: Sequence[Any], context: RequestContext) -> bytes:
        """Send ``method`` with positional ``params`` and return the raw result.

        Raises:
            TransportError: If the call could not be delivered or the node
                answered with an error object
            ContextError: If ``context`` ended before the call completed
        """

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.endpoint!r})"


def build_payload(request_id: int, method: str, params: Sequence[Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "method": method, "params": list(params)}


def extract_result(envelope: Any, endpoint: str) -> bytes:
    """Return the JSON encoding of an envelope's ``result`` member.

    Raises:
        RPCError: If the envelope carries an ``error`` object
        TransportError: If the envelope is not a JSON-RPC response
    """
    if not isinstance(envelope, Mapping):
        raise TransportError(
            "Malformed JSON-RPC response",
            endpoint=endpoint,
            details={"response": envelope},
        )

    error = envelope.get("error")
    if error is not None:
        if isinstance(error, Mapping):
            raise RPCError(
                error.get("code"),
                str(error.get("message", "")),
                data=error.get("data"),
                endpoint=endpoint,
            )
        raise RPCError(None, str(error), endpoint=endpoint)

    if "result" not in envelope:
        raise TransportError(
            "JSON-RPC response has neither result nor error",
            endpoint=endpoint,
            details={"response": dict(envelope)},
        )

    return json.dumps(envelope["result"], separators=(",", ":")).encode("utf-8")
