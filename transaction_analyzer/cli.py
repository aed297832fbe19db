"""Command line entry point for analysing a transactions file."""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from .analyzer import TransactionAnalyzer
from .excel import write_report_workbook
from .formatting import format_report, format_transactions
from .loader import load_transactions
from .logging_setup import configure_logging, get_logger
from .models import Transaction
from .periods import parse_amount, parse_datetime
from .summary import build_report

logger = get_logger("transaction_analyzer.cli")


def _date_arg(value: str) -> datetime:
    try:
        return parse_datetime(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _amount_arg(value: str) -> float:
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Summarise a transactions file (JSON, CSV or Excel) or list the "
            "transactions matching the given filters."
        )
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="transactions.json",
        help="Path to the transactions file.",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help=(
            "Keep records with unparsable dates or amounts instead of skipping "
            "them. Such records make the affected totals n/a."
        ),
    )
    parser.add_argument(
        "--fail-on-rejected",
        action="store_true",
        help="Exit with an error when any record could not be parsed.",
    )
    parser.add_argument("--type", dest="type_", help="Only transactions of this type.")
    parser.add_argument("--merchant", help="Only transactions from this merchant.")
    parser.add_argument("--start", type=_date_arg, help="Start of an inclusive date range.")
    parser.add_argument("--end", type=_date_arg, help="End of an inclusive date range.")
    parser.add_argument("--before", type=_date_arg, help="Only transactions strictly before this date.")
    parser.add_argument("--min-amount", type=_amount_arg, help="Lower bound of an inclusive amount range.")
    parser.add_argument("--max-amount", type=_amount_arg, help="Upper bound of an inclusive amount range.")
    parser.add_argument("--id", dest="transaction_id", help="Show the transaction with this id.")
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the output to the specified file instead of printing to stdout.",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        help="Also write the summary and transactions to this Excel workbook.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults to TRANSACTION_ANALYZER_LOG_LEVEL or INFO).",
    )
    args = parser.parse_args(argv)
    if (args.start is None) != (args.end is None):
        parser.error("--start and --end must be given together")
    if (args.min_amount is None) != (args.max_amount is None):
        parser.error("--min-amount and --max-amount must be given together")
    return args


def _has_filters(args: argparse.Namespace) -> bool:
    return any(
        value is not None
        for value in (args.type_, args.merchant, args.start, args.before, args.min_amount)
    )


def apply_filters(analyzer: TransactionAnalyzer, args: argparse.Namespace) -> List[Transaction]:
    """Narrow ``analyzer`` by each requested filter in turn."""

    current = analyzer
    if args.type_ is not None:
        current = TransactionAnalyzer(current.by_type(args.type_))
    if args.merchant is not None:
        current = TransactionAnalyzer(current.by_merchant(args.merchant))
    if args.start is not None:
        current = TransactionAnalyzer(current.in_date_range(args.start, args.end))
    if args.before is not None:
        current = TransactionAnalyzer(current.before(args.before))
    if args.min_amount is not None:
        current = TransactionAnalyzer(current.by_amount_range(args.min_amount, args.max_amount))
    return current.all_transactions()


def run(argv: Iterable[str] | None = None) -> str:
    args = parse_args(argv)
    configure_logging(args.log_level)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Transactions file not found: {path}")

    try:
        result = load_transactions(path, lenient=args.lenient)
    except ValueError as exc:
        raise SystemExit(f"Failed to read transactions: {exc}")

    if result.rejected and args.fail_on_rejected:
        raise SystemExit(f"{len(result.rejected)} record problem(s) found in {path}")

    analyzer = TransactionAnalyzer(result.transactions)

    if args.transaction_id is not None:
        found = analyzer.find_by_id(args.transaction_id)
        if found is None:
            raise SystemExit(f"Transaction not found: {args.transaction_id}")
        output_text = format_transactions([found]) + "\n"
    elif _has_filters(args):
        matches = apply_filters(analyzer, args)
        logger.info("%d of %d transactions match", len(matches), len(analyzer))
        output_text = format_transactions(matches) + "\n"
    else:
        output_text = format_report(build_report(analyzer)) + "\n"

    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)

    if args.excel_output:
        write_report_workbook(build_report(analyzer), analyzer.all_transactions(), args.excel_output)
        logger.info("wrote workbook to %s", args.excel_output)
    return output_text


def main() -> None:
    run()


if __name__ == "__main__":
    main()
