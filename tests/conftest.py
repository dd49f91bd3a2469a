"""Shared fixtures: a real self-signed client certificate and mocked HTTP transports."""

from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from inter_banking.core.transport import ClientCertificate, SecureTransport

API_BASE_URL = "https://api.inter.test"


@pytest.fixture(scope="session")
def certificate(tmp_path_factory) -> ClientCertificate:
    """Write a self-signed certificate and key pair to disk."""
    directory = tmp_path_factory.mktemp("certs")
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "inter-banking-test")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )

    cert_file = directory / "cert.crt"
    key_file = directory / "cert.key"
    cert_file.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_file.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return ClientCertificate(str(cert_file), str(key_file))


@pytest.fixture
def make_transport(certificate) -> Callable[[Callable], SecureTransport]:
    """Build a SecureTransport whose requests are answered by ``handler``."""

    def _make(handler: Callable) -> SecureTransport:
        return SecureTransport(certificate, API_BASE_URL, transport=httpx.MockTransport(handler))

    return _make
