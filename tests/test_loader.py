import json
import math
from datetime import datetime

import pytest

from transaction_analyzer.loader import load_transactions, records_to_transactions


def make_record(**kwargs):
    base = dict(
        transaction_id="1",
        transaction_date="2024-03-05",
        transaction_amount="100",
        transaction_type="debit",
        transaction_description="Groceries",
        merchant_name="Market",
    )
    base.update(kwargs)
    return base


def test_records_are_converted_to_transactions():
    result = records_to_transactions([make_record(transaction_amount=12.5)])

    assert result.ok
    tx = result.transactions[0]
    assert tx.id == "1"
    assert tx.date == datetime(2024, 3, 5)
    assert tx.amount == 12.5
    assert tx.type == "debit"
    assert tx.description == "Groceries"
    assert tx.merchant_name == "Market"


def test_missing_text_fields_become_empty_strings():
    record = make_record()
    del record["transaction_description"]
    del record["merchant_name"]

    tx = records_to_transactions([record]).transactions[0]

    assert tx.description == ""
    assert tx.merchant_name == ""


def test_strict_mode_skips_and_reports_bad_records():
    result = records_to_transactions(
        [
            make_record(transaction_id="good"),
            make_record(transaction_id="bad-date", transaction_date="yesterday"),
            make_record(transaction_id="bad-amount", transaction_amount="ten"),
            "not a record",
        ]
    )

    assert [tx.id for tx in result.transactions] == ["good"]
    assert not result.ok
    assert [(r.index, r.field) for r in result.rejected] == [
        (1, "transaction_date"),
        (2, "transaction_amount"),
        (3, None),
    ]
    assert result.rejected[1].value == "ten"


def test_strict_mode_rejects_ambiguous_and_oversized_amounts():
    result = records_to_transactions(
        [
            make_record(transaction_id="decimal-comma", transaction_amount="12,50"),
            make_record(transaction_id="huge", transaction_amount=10**400),
            make_record(transaction_id="grouped", transaction_amount="1,250.00"),
        ]
    )

    assert [tx.id for tx in result.transactions] == ["grouped"]
    assert result.transactions[0].amount == 1250.0
    assert [(r.index, r.field) for r in result.rejected] == [
        (0, "transaction_amount"),
        (1, "transaction_amount"),
    ]


def test_lenient_mode_keeps_records_with_placeholders():
    result = records_to_transactions(
        [
            make_record(transaction_id="bad-date", transaction_date="yesterday"),
            make_record(transaction_id="bad-amount", transaction_amount="ten"),
        ],
        lenient=True,
    )

    bad_date, bad_amount = result.transactions
    assert bad_date.date is None
    assert not bad_date.has_valid_date
    assert math.isnan(bad_amount.amount)
    assert not bad_amount.has_valid_amount
    assert len(result.rejected) == 2


def test_load_json_file(tmp_path):
    path = tmp_path / "transactions.json"
    path.write_text(
        json.dumps([make_record(), make_record(transaction_id="2", transaction_type="credit")]),
        encoding="utf-8",
    )

    result = load_transactions(path)

    assert [tx.id for tx in result.transactions] == ["1", "2"]
    assert result.ok


def test_load_json_requires_a_list(tmp_path):
    path = tmp_path / "transactions.json"
    path.write_text(json.dumps(make_record()), encoding="utf-8")

    with pytest.raises(ValueError):
        load_transactions(path)


def test_load_csv_file_skips_blank_rows(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "transaction_id,transaction_date,transaction_amount,transaction_type,"
        "transaction_description,merchant_name\n"
        "1,2024-03-05,100,debit,Groceries,Market\n"
        ",,,,,\n"
        "2,2024-03-20,-50.25,credit,,Employer\n",
        encoding="utf-8",
    )

    result = load_transactions(path)

    assert [tx.id for tx in result.transactions] == ["1", "2"]
    assert result.transactions[1].amount == -50.25
    assert result.transactions[1].description == ""


def test_load_rejects_unknown_suffix(tmp_path):
    path = tmp_path / "transactions.txt"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_transactions(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_transactions(tmp_path / "missing.json")
