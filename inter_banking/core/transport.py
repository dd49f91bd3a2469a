"""Mutual-TLS HTTP transport for the Inter API."""
from __future__ import annotations

import asyncio
import logging
import os
import ssl
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Set, Union
from urllib.parse import urlsplit

import httpx

from .exceptions import CredentialError, DeadlineExceededError, RequestCancelledError, TransportError

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://cdpj.partners.bancointer.com.br"
DEFAULT_TIMEOUT = httpx.Timeout(20.0, connect=5.0)

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class ClientCertificate:
    """Client certificate and private key used for mutual TLS."""

    cert_file: PathLike
    key_file: PathLike
    password: Optional[str] = None

    def ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        try:
            context.load_cert_chain(self.cert_file, self.key_file, password=self.password)
        except OSError as exc:
            raise CredentialError(f"could not load client certificate: {exc}") from exc
        return context


class SecureTransport:
    """Thin wrapper over ``httpx.AsyncClient`` that only talks HTTPS with a client certificate."""

    def __init__(
        self,
        certificate: Optional[ClientCertificate],
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if certificate is None:
            raise CredentialError("a client certificate is required for mutual TLS")
        if urlsplit(base_url).scheme != "https":
            raise CredentialError(f"refusing non-HTTPS API base URL: {base_url}")

        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            verify=certificate.ssl_context(),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: "Settings", **kwargs: Any) -> "SecureTransport":
        return cls(
            settings.client_certificate(),
            settings.api_base_url,
            timeout=httpx.Timeout(settings.timeout, connect=5.0),
            **kwargs,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        data: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """Perform one round-trip and return the fully read response.

        ``cancel`` aborts the call as soon as it is set; ``timeout`` bounds the
        whole round-trip in seconds. Status codes are not interpreted here.
        """
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError(f"{method} {path} cancelled before sending")

        logger.debug("Sending %s %s", method, path)
        send = asyncio.ensure_future(
            self._client.request(method, path, params=params, data=data, headers=headers)
        )
        pending: Set["asyncio.Future[Any]"] = {send}
        watcher: Optional["asyncio.Future[Any]"] = None
        if cancel is not None:
            watcher = asyncio.ensure_future(cancel.wait())
            pending.add(watcher)

        try:
            done, _ = await asyncio.wait(pending, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            leftovers = [task for task in pending if not task.done()]
            for task in leftovers:
                task.cancel()
            if leftovers:
                await asyncio.gather(*leftovers, return_exceptions=True)

        if send not in done:
            if watcher is not None and watcher in done:
                raise RequestCancelledError(f"{method} {path} cancelled while in flight")
            raise DeadlineExceededError(f"{method} {path} exceeded deadline of {timeout}s")

        try:
            response = send.result()
        except httpx.TimeoutException as exc:
            raise DeadlineExceededError(f"{method} {path} timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response

    async def aclose(self) -> None:
        """Dispose the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "SecureTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
