"""Balance and statement queries against the Inter banking API."""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional

import httpx

from .codec import decode_balance, decode_transactions, format_date
from .data_models import Balance, Token, Transaction
from .exceptions import ApiError
from .transport import SecureTransport

logger = logging.getLogger(__name__)

BALANCE_PATH = "/banking/v2/saldo"
STATEMENT_PATH = "/banking/v2/extrato"


class BankingService:
    """Read-only banking operations authorized with a fixed bearer token.

    The token is never refreshed; once it expires the provider rejects
    calls and they surface as ApiError.
    """

    def __init__(self, transport: SecureTransport, token: Token):
        self._transport = transport
        self._token = token

    @property
    def token(self) -> Token:
        return self._token

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token.data}",
            "Content-Type": "application/json",
        }

    async def _get(
        self,
        path: str,
        params: Dict[str, str],
        cancel: Optional[asyncio.Event],
        timeout: Optional[float],
    ) -> httpx.Response:
        response = await self._transport.request(
            "GET",
            path,
            params=params,
            headers=self._headers(),
            cancel=cancel,
            timeout=timeout,
        )
        if response.status_code != 200:
            logger.info("%s answered %d", path, response.status_code)
            raise ApiError(response.text, status_code=response.status_code)
        return response

    async def balance(
        self,
        day: Optional[date] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> Balance:
        """Fetch account balances at ``day`` (today when omitted)."""
        day = day or date.today()
        logger.info("Fetching balance at %s", day)
        response = await self._get(BALANCE_PATH, {"dataSaldo": format_date(day)}, cancel, timeout)
        return decode_balance(response.content)

    async def transactions(
        self,
        start: date,
        end: Optional[date] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> List[Transaction]:
        """Fetch the statement between ``start`` and ``end`` (today when omitted).

        The range is forwarded as given, even when ``start`` is after ``end``.
        """
        end = end or date.today()
        logger.info("Fetching statement from %s to %s", start, end)
        params = {"dataInicio": format_date(start), "dataFim": format_date(end)}
        response = await self._get(STATEMENT_PATH, params, cancel, timeout)
        transactions = decode_transactions(response.content)
        logger.info("Fetched %d transactions from %s to %s", len(transactions), start, end)
        return transactions
