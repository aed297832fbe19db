"""Produce a report snapshot of an analyzer's aggregates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Sequence

from .analyzer import TransactionAnalyzer
from .models import DominantType


def _money(value: float) -> float:
    if math.isnan(value):
        return value
    return round(value, 2)


@dataclass(frozen=True)
class TypeSummaryRow:
    type: str
    count: int


@dataclass(frozen=True)
class MerchantSummaryRow:
    merchant_name: str
    total: float


@dataclass(frozen=True)
class TransactionReport:
    count: int
    total_amount: float
    average_amount: float
    total_debit_amount: float
    unique_types: Sequence[str]
    types: Sequence[TypeSummaryRow]
    merchants: Sequence[MerchantSummaryRow]
    busiest_month: int
    busiest_month_count: int
    busiest_debit_month: int
    busiest_debit_month_count: int
    dominant_type: DominantType
    month_counts: Dict[int, int]


def build_report(analyzer: TransactionAnalyzer) -> TransactionReport:
    busiest = analyzer.busiest_month()
    busiest_debit = analyzer.busiest_debit_month()

    types = [
        TypeSummaryRow(type=type_, count=count)
        for type_, count in analyzer.count_by_type().items()
    ]
    merchants = [
        MerchantSummaryRow(merchant_name=name, total=_money(total))
        for name, total in analyzer.total_by_merchant().items()
    ]
    merchants.sort(key=lambda row: row.merchant_name.lower())

    return TransactionReport(
        count=len(analyzer),
        total_amount=_money(analyzer.total_amount()),
        average_amount=_money(analyzer.average_amount()),
        total_debit_amount=_money(analyzer.total_debit_amount()),
        unique_types=tuple(analyzer.unique_types()),
        types=tuple(types),
        merchants=tuple(merchants),
        busiest_month=busiest.month,
        busiest_month_count=busiest.count,
        busiest_debit_month=busiest_debit.month,
        busiest_debit_month_count=busiest_debit.count,
        dominant_type=analyzer.dominant_type(),
        month_counts=analyzer.month_counts(),
    )
