from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .core.transport import DEFAULT_API_BASE_URL, ClientCertificate

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _split_scopes(raw: str) -> List[str]:
    return [scope.strip() for scope in raw.split(",") if scope.strip()]


class Settings:
    """Client settings read from the environment (and an optional ``.env``)."""

    def __init__(self) -> None:
        self.api_base_url: str = os.getenv("INTER_API_URL", DEFAULT_API_BASE_URL)
        self.cert_file: str = os.getenv("INTER_CERT_FILE", "cert.crt")
        self.key_file: str = os.getenv("INTER_KEY_FILE", "cert.key")
        self.key_password: Optional[str] = os.getenv("INTER_KEY_PASSWORD") or None
        self.client_id: Optional[str] = os.getenv("INTER_CLIENT_ID")
        self.client_secret: Optional[str] = os.getenv("INTER_CLIENT_SECRET")
        self.scopes: str = os.getenv("INTER_SCOPES", "")
        self.timeout: float = float(os.getenv("INTER_TIMEOUT", "20"))

    @property
    def scope_list(self) -> List[str]:
        return _split_scopes(self.scopes)

    def client_certificate(self) -> ClientCertificate:
        return ClientCertificate(self.cert_file, self.key_file, password=self.key_password)


def get_settings() -> Settings:
    return Settings()
