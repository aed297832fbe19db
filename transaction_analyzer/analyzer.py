"""Queries and aggregates over an in-memory collection of transactions.

Every operation is a single pass over the current contents; nothing is cached
so results always reflect transactions appended since the last call.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .models import DominantType, MonthCount, Transaction, TransactionType
from .periods import matches_calendar, parse_datetime

DateLike = Union[str, date, datetime]

MONTHS = range(1, 13)


def _busiest(counts: Dict[int, int]) -> MonthCount:
    best = MonthCount(month=1, count=0)
    for month in MONTHS:
        if counts[month] > best.count:
            best = MonthCount(month=month, count=counts[month])
    return best


def _count_months(transactions: Iterable[Transaction]) -> Dict[int, int]:
    counts = {month: 0 for month in MONTHS}
    for tx in transactions:
        if tx.date is not None:
            counts[tx.date.month] += 1
    return counts


class TransactionAnalyzer:
    """An ordered collection of transactions that answers analytical queries.

    The collection only grows through :meth:`append`. Callers sharing an
    analyzer between threads must serialise access themselves.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None) -> None:
        self._transactions: List[Transaction] = list(transactions or [])

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._transactions)} transactions)"

    # -- mutation -----------------------------------------------------------

    def append(self, transaction: Transaction) -> None:
        """Add ``transaction`` to the end of the collection."""

        self._transactions.append(transaction)

    add_transaction = append

    # -- queries ------------------------------------------------------------

    def all_transactions(self) -> List[Transaction]:
        return list(self._transactions)

    def unique_types(self) -> List[str]:
        """Return each distinct ``type`` once, in first-seen order."""

        return list(dict.fromkeys(tx.type for tx in self._transactions))

    def by_type(self, type_: str) -> List[Transaction]:
        return [tx for tx in self._transactions if tx.type == type_]

    def by_merchant(self, merchant_name: str) -> List[Transaction]:
        return [tx for tx in self._transactions if tx.merchant_name == merchant_name]

    def by_amount_range(self, min_amount: float, max_amount: float) -> List[Transaction]:
        """Return transactions with ``min_amount <= amount <= max_amount``."""

        return [tx for tx in self._transactions if min_amount <= tx.amount <= max_amount]

    def in_date_range(self, start: DateLike, end: DateLike) -> List[Transaction]:
        """Return transactions dated within ``[start, end]``, inclusive.

        ``start`` and ``end`` may be strings, dates or datetimes; strings are
        parsed with the same rules used for transaction dates.
        """

        start_at = parse_datetime(start)
        end_at = parse_datetime(end)
        return [
            tx
            for tx in self._transactions
            if tx.date is not None and start_at <= tx.date <= end_at
        ]

    def before(self, when: DateLike) -> List[Transaction]:
        """Return transactions dated strictly earlier than ``when``."""

        cutoff = parse_datetime(when)
        return [tx for tx in self._transactions if tx.date is not None and tx.date < cutoff]

    def find_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Return the first transaction with ``transaction_id`` or ``None``."""

        for tx in self._transactions:
            if tx.id == transaction_id:
                return tx
        return None

    def descriptions(self) -> List[str]:
        return [tx.description for tx in self._transactions]

    # -- aggregates ---------------------------------------------------------

    def total_amount(self) -> float:
        return sum((tx.amount for tx in self._transactions), 0.0)

    def total_amount_on_date(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        day: Optional[int] = None,
    ) -> float:
        """Sum amounts of transactions matching every given date component.

        ``month`` is 1-indexed; omitted components match any value.
        """

        return sum(
            (
                tx.amount
                for tx in self._transactions
                if matches_calendar(tx.date, year, month, day)
            ),
            0.0,
        )

    def average_amount(self) -> float:
        """Return the mean amount, or ``nan`` for an empty collection."""

        if not self._transactions:
            return math.nan
        return self.total_amount() / len(self._transactions)

    def total_debit_amount(self) -> float:
        return sum((tx.amount for tx in self._transactions if tx.is_debit), 0.0)

    def count_by_type(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for tx in self._transactions:
            counts[tx.type] = counts.get(tx.type, 0) + 1
        return counts

    def total_by_merchant(self) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        for tx in self._transactions:
            totals[tx.merchant_name] = totals.get(tx.merchant_name, 0.0) + tx.amount
        return totals

    def month_counts(self) -> Dict[int, int]:
        """Return the number of transactions per calendar month (1-12).

        Years are ignored and transactions without a valid date are skipped.
        """

        return _count_months(self._transactions)

    def busiest_month(self) -> MonthCount:
        """Return the month with the most transactions and its count.

        Ties go to the lowest month; an empty collection yields month 1 with
        a count of 0.
        """

        return _busiest(self.month_counts())

    def busiest_debit_month(self) -> MonthCount:
        return _busiest(_count_months(self.by_type(TransactionType.DEBIT.value)))

    def month_with_most_transactions(self) -> int:
        return self.busiest_month().month

    def month_with_most_debit_transactions(self) -> int:
        return self.busiest_debit_month().month

    def dominant_type(self) -> DominantType:
        """Compare debit and credit counts; other types are ignored."""

        debit_count = len(self.by_type(TransactionType.DEBIT.value))
        credit_count = len(self.by_type(TransactionType.CREDIT.value))
        if debit_count > credit_count:
            return DominantType.DEBIT
        if credit_count > debit_count:
            return DominantType.CREDIT
        return DominantType.EQUAL
