"""Domain values returned by the Inter banking client."""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Token(BaseModel):
    """OAuth2 bearer token granted by the provider.

    Tokens are never refreshed by the client; once ``expires_at`` passes the
    caller has to authorize again.
    """

    model_config = ConfigDict(frozen=True)

    data: str
    type: str = "Bearer"
    expires_at: Optional[dt.datetime] = None
    scopes: Tuple[str, ...] = ()

    @classmethod
    def from_string(cls, data: str) -> "Token":
        """Wrap a raw access token obtained out of band."""
        return cls(data=data)

    @classmethod
    def from_json(cls, text: str) -> "Token":
        return cls.model_validate_json(text)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(indent=indent)

    def describe(self) -> str:
        expires = self.expires_at.isoformat() if self.expires_at else "never"
        return (
            f"token     {self.data}\n"
            f"type      {self.type}\n"
            f"expires   {expires}\n"
            f"scopes    {' '.join(self.scopes)}"
        )

    def is_expired(self, now: Optional[dt.datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or dt.datetime.now(dt.timezone.utc)
        return now >= self.expires_at


class Balance(BaseModel):
    """Account balances at a given date."""

    model_config = ConfigDict(frozen=True)

    available: Decimal
    limit: Decimal
    check_on_hold: Decimal
    judicially_blocked: Decimal
    administratively_blocked: Decimal


class TransactionType(str, Enum):
    PIX = "pix"
    PAYMENT = "pagamento"
    TRANSFER = "transferencia"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class TransactionOperation(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    INVALID = "invalid"

    def __str__(self) -> str:
        return self.value


class Transaction(BaseModel):
    """A single statement entry, as booked by the provider."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    type: TransactionType = TransactionType.UNKNOWN
    operation: TransactionOperation = TransactionOperation.INVALID
    value: Decimal
    title: str = ""
    description: str = ""
