from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

import requests

from ..errors import TransportError


logger = logging.getLogger(__name__)


@dataclass
class Request:
    """A single HTTP request as handed to a Transport."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@runtime_checkable
class Transport(Protocol):
    """
    Minimal HTTP abstraction used by the API client.

    Implementations must return the raw response body of a 200 response
    and raise TransportError for anything else, including connection
    failures. Tests substitute their own implementation.
    """

    def perform(self, request: Request) -> bytes:
        raise NotImplementedError


class RequestsTransport(Transport):
    """
    Transport backed by a `requests.Session`.

    No retries are made; timeouts, TLS and connection pooling are left to
    `requests`.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout_seconds

    def perform(self, request: Request) -> bytes:
        try:
            resp = self._session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self._timeout,
            )
        except (requests.RequestException, OSError) as exc:
            raise TransportError(
                request.url, f"http request to {request.url} failed: {exc}"
            ) from exc

        if resp.status_code != 200:
            raise TransportError(
                request.url,
                f"http error {resp.status_code} for {request.url}: {resp.text}",
                status_code=resp.status_code,
            )

        logger.debug("%s %s -> %d bytes", request.method, request.url, len(resp.content))
        return resp.content
