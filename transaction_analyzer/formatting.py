"""Utility helpers for turning reports and transactions into text tables."""

from __future__ import annotations

import calendar
import math
from typing import Iterable, Sequence

from .models import Transaction
from .summary import TransactionReport


def _column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Sequence[int]:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    return widths


def _format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = _column_widths(headers, rows)

    def format_row(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row)).rstrip()

    lines = [format_row(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def format_amount(value: float) -> str:
    if math.isnan(value):
        return "n/a"
    return f"{value:,.2f}"


def _month_label(month: int, count: int) -> str:
    return f"{calendar.month_name[month]} ({count} transactions)"


def format_transactions(transactions: Iterable[Transaction]) -> str:
    headers = ["ID", "Date", "Type", "Merchant", "Amount", "Description"]
    rows = [
        [
            tx.id,
            f"{tx.date:%Y-%m-%d %H:%M}" if tx.date is not None else "invalid",
            tx.type,
            tx.merchant_name,
            format_amount(tx.amount),
            tx.description,
        ]
        for tx in transactions
    ]
    return _format_table(headers, rows)


def format_report(report: TransactionReport) -> str:
    header_lines = [
        "Transaction Summary",
        f"Transactions: {report.count}",
        f"Total Amount: {format_amount(report.total_amount)}",
        f"Average Amount: {format_amount(report.average_amount)}",
        f"Total Debit Amount: {format_amount(report.total_debit_amount)}",
        f"Busiest Month: {_month_label(report.busiest_month, report.busiest_month_count)}",
        "Busiest Debit Month: "
        + _month_label(report.busiest_debit_month, report.busiest_debit_month_count),
        f"Dominant Type: {report.dominant_type.value}",
    ]

    type_table = _format_table(
        ["Type", "Count"],
        [[row.type or "(blank)", str(row.count)] for row in report.types],
    )
    merchant_table = _format_table(
        ["Merchant", "Total"],
        [
            [row.merchant_name or "Unspecified", format_amount(row.total)]
            for row in report.merchants
        ],
    )
    return "\n".join(
        header_lines
        + ["", "By Type", type_table, "", "By Merchant", merchant_table]
    )
