"""
Tests for the movement classifier.
"""

import pytest
from django.test import override_settings

from ledgerman import LedgerError, ledger
from ledgerman.classifier import (
    MovementClassifier,
    classify_movement,
    get_classifier,
    reset_classifier,
    reverse_sign,
)
from ledgerman.conf import DEFAULT_MOVEMENT_FAMILIES
from ledgerman.models import MovementCategory


class TestClassifyMovement:
    """Tests for classify_movement()."""

    @pytest.mark.parametrize('code, sign, expected', [
        ('OF', 1, MovementCategory.SUPPLIER_RECEIPT),
        ('ORD_FORNITORE', 1, MovementCategory.SUPPLIER_RECEIPT),
        ('NC', 1, MovementCategory.CUSTOMER_RETURN),
        ('NDC', 1, MovementCategory.CUSTOMER_RETURN),
        ('NCF', 1, MovementCategory.CUSTOMER_RETURN),
        ('RESO_FORNITORE', 1, MovementCategory.SUPPLIER_RECEIPT),
        ('DDT', -1, MovementCategory.DELIVERY_ISSUE),
        ('CAF', -1, MovementCategory.DELIVERY_ISSUE),
        ('FAI', -1, MovementCategory.SALES_ISSUE),
        ('FAD', -1, MovementCategory.SALES_ISSUE),
        ('FAC', -1, MovementCategory.SALES_ISSUE),
        ('RESO_FORNITORE', -1, MovementCategory.SUPPLIER_RETURN),
    ])
    def test_known_codes(self, code, sign, expected):
        assert classify_movement(code, sign) == expected

    def test_case_insensitive(self):
        assert classify_movement('ddt', -1) == MovementCategory.DELIVERY_ISSUE
        assert classify_movement('Ndc', 1) == MovementCategory.CUSTOMER_RETURN

    def test_unknown_codes_fall_back_by_sign(self):
        assert classify_movement('XYZ', 1) == MovementCategory.SUPPLIER_RECEIPT
        assert classify_movement('XYZ', -1) == MovementCategory.SALES_ISSUE

    def test_family_code_with_other_sign_uses_default(self):
        """A delivery note that loads stock is not a delivery issue."""
        assert classify_movement('DDT', 1) == MovementCategory.SUPPLIER_RECEIPT
        assert classify_movement('OF', -1) == MovementCategory.SALES_ISSUE

    def test_unknown_code_logs_warning(self, caplog):
        with caplog.at_level('WARNING', logger='ledgerman'):
            classify_movement('ZZZ', -1)
        assert any(r.getMessage() == 'ledger.classifier.default' for r in caplog.records)

    @pytest.mark.parametrize('sign', [0, 2, -2, True, False, None, '1', 1.0])
    def test_invalid_sign_fails_fast(self, sign):
        with pytest.raises(LedgerError) as exc:
            classify_movement('DDT', sign)
        assert exc.value.code == 'INVALID_SIGN'

    def test_totality(self):
        """Every (code, sign) pair maps into the closed set."""
        codes = {c for family in DEFAULT_MOVEMENT_FAMILIES.values() for c in family}
        codes |= {'', 'PRO', 'ORD', 'X'}
        for code in codes:
            for sign in (1, -1):
                assert classify_movement(code, sign) in MovementCategory.values

    def test_facade(self):
        assert ledger.classify_movement('FAI', -1) == MovementCategory.SALES_ISSUE


class TestMovementClassifier:
    """Tests for the lookup table itself."""

    def test_known_codes(self):
        classifier = MovementClassifier({'delivery_note': ['bolla']})
        assert classifier.known_codes() == {'BOLLA'}
        assert classifier.classify('BOLLA', -1) == MovementCategory.DELIVERY_ISSUE

    def test_code_in_two_families_prefers_first(self):
        classifier = MovementClassifier({
            'supplier_order': ['X'],
            'credit_note': ['X'],
        })
        assert classifier.classify('X', 1) == MovementCategory.SUPPLIER_RECEIPT

    def test_settings_override(self):
        with override_settings(LEDGERMAN={'MOVEMENT_FAMILIES': {'delivery_note': ['BOLLA']}}):
            reset_classifier()
            assert classify_movement('BOLLA', -1) == MovementCategory.DELIVERY_ISSUE
            assert classify_movement('DDT', -1) == MovementCategory.SALES_ISSUE
        reset_classifier()
        assert classify_movement('DDT', -1) == MovementCategory.DELIVERY_ISSUE

    def test_classifier_is_cached(self):
        assert get_classifier() is get_classifier()


class TestReverseSign:

    def test_reverse(self):
        assert reverse_sign(1) == -1
        assert reverse_sign(-1) == 1

    def test_invalid(self):
        with pytest.raises(LedgerError):
            reverse_sign(0)
