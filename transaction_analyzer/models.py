"""Data models used by the transaction analyzer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple


class TransactionType(str, Enum):
    """The two transaction types that aggregates treat specially."""

    DEBIT = "debit"
    CREDIT = "credit"


class DominantType(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"
    EQUAL = "equal"


@dataclass(frozen=True)
class Transaction:
    """Represents a single record from a transactions file.

    ``date`` is ``None`` and ``amount`` is ``nan`` only for records loaded in
    lenient mode whose fields could not be parsed.
    """

    id: str
    date: Optional[datetime]
    amount: float
    type: str
    description: str = ""
    merchant_name: str = ""

    @property
    def is_debit(self) -> bool:
        return self.type == TransactionType.DEBIT.value

    @property
    def is_credit(self) -> bool:
        return self.type == TransactionType.CREDIT.value

    @property
    def has_valid_date(self) -> bool:
        return self.date is not None

    @property
    def has_valid_amount(self) -> bool:
        return not math.isnan(self.amount)


@dataclass(frozen=True)
class MonthCount:
    month: int
    count: int


@dataclass(frozen=True)
class RejectedRecord:
    """A record (or one field of it) that could not be interpreted."""

    index: int
    field: Optional[str]
    value: Any
    reason: str


@dataclass(frozen=True)
class LoadResult:
    transactions: Tuple[Transaction, ...]
    rejected: Tuple[RejectedRecord, ...] = ()

    @property
    def ok(self) -> bool:
        """Return ``True`` when every record was loaded cleanly."""

        return not self.rejected
