"""Core package exposing the transport, authentication and banking interfaces."""

from .banking import BankingService
from .data_models import Balance, Token, Transaction, TransactionOperation, TransactionType
from .exceptions import (
    ApiError,
    AuthError,
    CredentialError,
    DeadlineExceededError,
    InterError,
    ParseError,
    RequestCancelledError,
    TransportError,
)
from .oauth import TokenAuthenticator
from .transport import ClientCertificate, SecureTransport

__all__ = [
    "BankingService",
    "TokenAuthenticator",
    "SecureTransport",
    "ClientCertificate",
    "Token",
    "Balance",
    "Transaction",
    "TransactionType",
    "TransactionOperation",
    "InterError",
    "CredentialError",
    "TransportError",
    "RequestCancelledError",
    "DeadlineExceededError",
    "AuthError",
    "ApiError",
    "ParseError",
]
