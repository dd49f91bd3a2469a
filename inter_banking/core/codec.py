"""Translation between Inter wire payloads and domain values.

The provider sends enums as free-form strings, amounts as strings (or JSON
numbers for balances) and dates as ``YYYY-MM-DD``. Dates and amounts must
parse or the whole payload is rejected; enum fields degrade to the
``UNKNOWN``/``INVALID`` sentinels instead of failing.
"""
from __future__ import annotations

import json
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, getcontext
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_serializer

from .data_models import Balance, Transaction, TransactionOperation, TransactionType
from .exceptions import ParseError

Payload = Union[bytes, str]

DATE_FORMAT = "%Y-%m-%d"

TRANSACTION_TYPES: Mapping[str, TransactionType] = MappingProxyType(
    {
        "PIX": TransactionType.PIX,
        "PAGAMENTO": TransactionType.PAYMENT,
        "TRANSFERENCIA": TransactionType.TRANSFER,
    }
)

TRANSACTION_OPERATIONS: Mapping[str, TransactionOperation] = MappingProxyType(
    {
        "C": TransactionOperation.CREDIT,
        "D": TransactionOperation.DEBIT,
    }
)

_WIRE_TRANSACTION_TYPES: Mapping[TransactionType, str] = MappingProxyType(
    {value: key for key, value in TRANSACTION_TYPES.items()}
)
_WIRE_TRANSACTION_OPERATIONS: Mapping[TransactionOperation, str] = MappingProxyType(
    {value: key for key, value in TRANSACTION_OPERATIONS.items()}
)

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_AMOUNT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class _ApiBalance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    available: Decimal = Field(alias="disponivel")
    limit: Decimal = Field(alias="limite")
    check_on_hold: Decimal = Field(alias="bloqueadoCheque")
    judicially_blocked: Decimal = Field(alias="bloqueadoJudicialmente")
    administratively_blocked: Decimal = Field(alias="bloqueadoAdministrativo")

    @field_serializer(
        "available",
        "limit",
        "check_on_hold",
        "judicially_blocked",
        "administratively_blocked",
        when_used="json",
    )
    def serialize_amount(self, value: Decimal) -> Union[int, float]:
        if value == value.to_integral_value():
            return int(value)
        return float(value)


class _ApiTransaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: StrictStr = Field("", alias="dataEntrada")
    type: StrictStr = Field("", alias="tipoTransacao")
    operation: StrictStr = Field("", alias="tipoOperacao")
    value: StrictStr = Field("", alias="valor")
    title: StrictStr = Field("", alias="titulo")
    description: StrictStr = Field("", alias="descricao")


class _ApiStatement(BaseModel):
    transactions: Optional[List[_ApiTransaction]] = Field(None, alias="transacoes")


def parse_transaction_type(raw: str) -> TransactionType:
    return TRANSACTION_TYPES.get(raw, TransactionType.UNKNOWN)


def parse_transaction_operation(raw: str) -> TransactionOperation:
    return TRANSACTION_OPERATIONS.get(raw, TransactionOperation.INVALID)


def parse_date(raw: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date."""
    if not _DATE_RE.fullmatch(raw):
        raise ParseError(f"invalid date {raw!r}: expected YYYY-MM-DD")
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(f"invalid date {raw!r}: {exc}") from exc


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_amount(raw: str) -> Decimal:
    """Parse a decimal amount sent as a string, e.g. ``"-123.45"``."""
    if not _AMOUNT_RE.fullmatch(raw):
        raise ParseError(f"invalid amount {raw!r}")
    try:
        amount = Decimal(raw)
    except InvalidOperation as exc:
        raise ParseError(f"invalid amount {raw!r}") from exc

    context = getcontext()
    if amount and not context.Emin <= amount.adjusted() <= context.Emax:
        raise ParseError(f"amount {raw!r} out of range")
    return amount


def decode_balance(payload: Payload) -> Balance:
    """Decode the ``/banking/v2/saldo`` response body.

    Values are copied as-is; negative or otherwise odd amounts are not
    checked.
    """
    try:
        document = json.loads(payload, parse_float=Decimal)
        wire = _ApiBalance.model_validate(document)
    except ValidationError as exc:
        raise ParseError(f"unexpected balance payload: {exc}") from exc
    except ValueError as exc:
        raise ParseError(f"malformed balance JSON: {exc}") from exc

    return Balance(
        available=wire.available,
        limit=wire.limit,
        check_on_hold=wire.check_on_hold,
        judicially_blocked=wire.judicially_blocked,
        administratively_blocked=wire.administratively_blocked,
    )


def _transaction_from_api(wire: _ApiTransaction) -> Transaction:
    return Transaction(
        date=parse_date(wire.date),
        type=parse_transaction_type(wire.type),
        operation=parse_transaction_operation(wire.operation),
        value=parse_amount(wire.value),
        title=wire.title.strip(),
        description=wire.description.strip(),
    )


def decode_transactions(payload: Payload) -> List[Transaction]:
    """Decode the ``/banking/v2/extrato`` response body.

    All or nothing: one entry with a bad date or amount rejects the whole
    statement. Order and duplicates are kept as sent.
    """
    try:
        statement = _ApiStatement.model_validate_json(payload)
    except ValidationError as exc:
        raise ParseError(f"unexpected statement payload: {exc}") from exc

    transactions: List[Transaction] = []
    for index, wire in enumerate(statement.transactions or []):
        try:
            transactions.append(_transaction_from_api(wire))
        except ParseError as exc:
            raise ParseError(f"transaction #{index}: {exc.message}") from exc
    return transactions


def encode_balance(balance: Balance) -> Dict[str, Any]:
    """Render a balance with the provider's field names and JSON numbers."""
    wire = _ApiBalance.model_validate(balance.model_dump())
    return wire.model_dump(mode="json", by_alias=True)


def encode_transaction(transaction: Transaction) -> Dict[str, str]:
    """Render a transaction the way the statement endpoint sends it."""
    wire = _ApiTransaction(
        date=format_date(transaction.date),
        type=_WIRE_TRANSACTION_TYPES.get(transaction.type, ""),
        operation=_WIRE_TRANSACTION_OPERATIONS.get(transaction.operation, ""),
        value=str(transaction.value),
        title=transaction.title,
        description=transaction.description,
    )
    return wire.model_dump(by_alias=True)
