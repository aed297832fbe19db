"""Helpers for loading transactions from JSON, CSV and Excel files."""

from __future__ import annotations

import csv
import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from .excel import read_workbook_records
from .logging_setup import get_logger
from .models import LoadResult, RejectedRecord, Transaction
from .periods import parse_amount, parse_datetime

logger = get_logger("transaction_analyzer.loader")

FIELD_ID = "transaction_id"
FIELD_DATE = "transaction_date"
FIELD_AMOUNT = "transaction_amount"
FIELD_TYPE = "transaction_type"
FIELD_DESCRIPTION = "transaction_description"
FIELD_MERCHANT = "merchant_name"


def _text(record: Mapping[str, Any], field: str) -> str:
    value = record.get(field)
    if value is None:
        return ""
    return str(value)


def _iter_csv_records(path: Path) -> Iterator[Dict[str, Any]]:
    with path.open(newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for row in reader:
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            yield row


def _read_json_records(path: Path) -> List[Any]:
    data = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of transaction records in {path}")
    return data


def read_records(path: str | Path) -> List[Any]:
    """Deserialise the raw records of a ``.json``, ``.csv`` or ``.xlsx`` file."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transactions file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return _read_json_records(path)
    if suffix == ".csv":
        return list(_iter_csv_records(path))
    if suffix == ".xlsx":
        return read_workbook_records(path)
    raise ValueError(f"Unsupported transactions file type: {path.suffix or path.name}")


def records_to_transactions(
    records: Iterable[Any], *, lenient: bool = False
) -> LoadResult:
    """Convert raw records into transactions.

    In strict mode a record with an unparsable date or amount is skipped and
    reported. In lenient mode it is kept with ``date=None`` or
    ``amount=nan`` and still reported.
    """

    transactions: List[Transaction] = []
    rejected: List[RejectedRecord] = []

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            rejected.append(RejectedRecord(index, None, record, "record is not an object"))
            continue

        problems: List[RejectedRecord] = []
        raw_date = record.get(FIELD_DATE)
        try:
            when: Optional[datetime] = parse_datetime(raw_date)
        except ValueError as exc:
            problems.append(RejectedRecord(index, FIELD_DATE, raw_date, str(exc)))
            when = None

        raw_amount = record.get(FIELD_AMOUNT)
        try:
            amount = parse_amount(raw_amount)
        except ValueError as exc:
            problems.append(RejectedRecord(index, FIELD_AMOUNT, raw_amount, str(exc)))
            amount = math.nan

        rejected.extend(problems)
        if problems and not lenient:
            continue

        transactions.append(
            Transaction(
                id=_text(record, FIELD_ID),
                date=when,
                amount=amount,
                type=_text(record, FIELD_TYPE),
                description=_text(record, FIELD_DESCRIPTION),
                merchant_name=_text(record, FIELD_MERCHANT),
            )
        )

    for problem in rejected:
        logger.warning(
            "record %d: %s %s (%s)",
            problem.index,
            problem.field or "record",
            "kept with placeholder" if lenient and problem.field else "rejected",
            problem.reason,
        )
    return LoadResult(transactions=tuple(transactions), rejected=tuple(rejected))


def load_transactions(path: str | Path, *, lenient: bool = False) -> LoadResult:
    """Load transactions from ``path``; see :func:`records_to_transactions`."""

    records = read_records(path)
    logger.debug("read %d raw records from %s", len(records), path)
    result = records_to_transactions(records, lenient=lenient)
    logger.info(
        "loaded %d transactions from %s (%d problems)",
        len(result.transactions),
        path,
        len(result.rejected),
    )
    return result
