"""Tests for the pure stock arithmetic in warehouse_kernel.domain.stock."""

import pytest

from warehouse_kernel.domain.stock import (
    apply_delta,
    occupancy_percentage,
    parse_status,
    parse_transaction_type,
    quantity_delta,
    require_positive_quantity,
)
from warehouse_kernel.exceptions import (
    InvalidStatusError,
    InvalidTransactionTypeError,
    ValidationError,
)
from warehouse_kernel.models.transaction import TransactionStatus, TransactionType


class TestQuantityDelta:
    @pytest.mark.parametrize(
        "txn_type", [TransactionType.RECEIPT, TransactionType.RETURN]
    )
    def test_credit_types_add(self, txn_type):
        assert quantity_delta(txn_type, 7) == 7

    @pytest.mark.parametrize(
        "txn_type",
        [
            TransactionType.ORDER,
            TransactionType.ISSUE_TO_PRODUCTION,
            TransactionType.ISSUE_TO_SALES,
        ],
    )
    def test_debit_types_subtract(self, txn_type):
        assert quantity_delta(txn_type, 7) == -7


class TestApplyDelta:
    def test_positive_result(self):
        assert apply_delta(10, -4) == 6

    def test_negative_result_is_clamped_to_zero(self):
        assert apply_delta(3, -5) == 0


class TestParsing:
    def test_parse_type_accepts_enum_and_any_case(self):
        assert parse_transaction_type(TransactionType.ORDER) is TransactionType.ORDER
        assert parse_transaction_type("receipt") is TransactionType.RECEIPT

    def test_parse_type_rejects_unknown(self):
        with pytest.raises(InvalidTransactionTypeError) as exc_info:
            parse_transaction_type("TRANSFER")
        assert exc_info.value.value == "TRANSFER"
        assert isinstance(exc_info.value, ValidationError)

    def test_parse_type_rejects_none(self):
        with pytest.raises(ValidationError):
            parse_transaction_type(None)

    def test_parse_status(self):
        assert parse_status(" completed ") is TransactionStatus.COMPLETED

    def test_parse_status_rejects_unknown(self):
        with pytest.raises(InvalidStatusError):
            parse_status("SHIPPED")


class TestRequirePositiveQuantity:
    def test_accepts_positive_int(self):
        assert require_positive_quantity(5) == 5

    @pytest.mark.parametrize("value", [None, 0, -1, 1.5, True, "3"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_positive_quantity(value)
        assert exc_info.value.field == "quantity"


def test_occupancy_percentage():
    assert occupancy_percentage(25, 50) == 50.0
    assert occupancy_percentage(10, 0) == 0.0
