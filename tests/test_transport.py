"""Tests for the mTLS transport: credential checks, cancellation and deadlines."""

import asyncio

import httpx
import pytest

from inter_banking.core.exceptions import (
    CredentialError,
    DeadlineExceededError,
    RequestCancelledError,
    TransportError,
)
from inter_banking.core.transport import ClientCertificate, SecureTransport


class TestCredentials:
    def test_missing_certificate(self):
        with pytest.raises(CredentialError):
            SecureTransport(None)

    def test_missing_files(self, tmp_path):
        certificate = ClientCertificate(tmp_path / "missing.crt", tmp_path / "missing.key")

        with pytest.raises(CredentialError):
            SecureTransport(certificate)

    def test_invalid_pem(self, tmp_path):
        cert_file = tmp_path / "cert.crt"
        key_file = tmp_path / "cert.key"
        cert_file.write_text("not a certificate")
        key_file.write_text("not a key")

        with pytest.raises(CredentialError):
            SecureTransport(ClientCertificate(cert_file, key_file))

    def test_plain_http_is_refused(self, certificate):
        with pytest.raises(CredentialError):
            SecureTransport(certificate, "http://api.inter.test")


@pytest.mark.asyncio
async def test_returns_response(make_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "api.inter.test"
        return httpx.Response(418, text="teapot", headers={"X-Trace": "1"})

    async with make_transport(handler) as transport:
        response = await transport.request("GET", "/ping", params={"a": "1"})

    assert response.status_code == 418
    assert response.text == "teapot"
    assert response.headers["X-Trace"] == "1"


@pytest.mark.asyncio
async def test_already_cancelled_sends_nothing(make_transport):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    cancel = asyncio.Event()
    cancel.set()

    async with make_transport(handler) as transport:
        with pytest.raises(RequestCancelledError):
            await transport.request("GET", "/ping", cancel=cancel)

    assert calls == []


@pytest.mark.asyncio
async def test_cancel_while_in_flight(make_transport):
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200)

    cancel = asyncio.Event()

    async def fire():
        await started.wait()
        cancel.set()

    async with make_transport(handler) as transport:
        trigger = asyncio.ensure_future(fire())
        with pytest.raises(RequestCancelledError):
            await asyncio.wait_for(transport.request("GET", "/slow", cancel=cancel), timeout=2)
        await trigger


@pytest.mark.asyncio
async def test_deadline(make_transport):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200)

    async with make_transport(handler) as transport:
        with pytest.raises(DeadlineExceededError):
            await transport.request("GET", "/slow", timeout=0.05)


@pytest.mark.asyncio
async def test_httpx_timeout_maps_to_deadline(make_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    async with make_transport(handler) as transport:
        with pytest.raises(DeadlineExceededError):
            await transport.request("GET", "/ping")


@pytest.mark.asyncio
async def test_connection_failure(make_transport):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_transport(handler) as transport:
        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "/ping")

    assert not isinstance(exc_info.value, RequestCancelledError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
