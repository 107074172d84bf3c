"""Test helper functions."""

import json
from typing import Any, Callable, Dict, Optional, Union

import httpx


Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


def json_response(status_code: int, body: Any) -> httpx.Response:
    """Build a JSON response for the simulated server."""
    return httpx.Response(status_code, json=body)


class RecordingServer:
    """
    Simulated posting service for httpx.MockTransport.

    Routes are keyed by path. Unrouted paths answer 404. Every request is
    recorded so tests can assert which candidates were tried and in what order.
    """

    def __init__(self, routes: Optional[Dict[str, Responder]] = None):
        self.routes: Dict[str, Responder] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def route(self, path: str, responder: Responder) -> None:
        self.routes[path] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get(request.url.path)
        if responder is None:
            return json_response(404, {"error": "Not Found"})
        if callable(responder):
            return responder(request)
        return responder

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


def refuse_connection(request: httpx.Request) -> httpx.Response:
    """Responder that simulates a refused TCP connection."""
    raise httpx.ConnectError("Connection refused", request=request)


def time_out(request: httpx.Request) -> httpx.Response:
    """Responder that simulates a read timeout."""
    raise httpx.ReadTimeout("Read timed out", request=request)
