"""Tests for exclusivity tiers and shifts."""

import pytest

from models.shift import Shift
from models.tier import ExclusivityTier


class TestExclusivityTier:
    def test_total_order(self):
        assert ExclusivityTier.FAMILIAR < ExclusivityTier.GOLD < ExclusivityTier.DIAMOND

    @pytest.mark.parametrize("ticket,attraction,expected", [
        (ExclusivityTier.DIAMOND, ExclusivityTier.FAMILIAR, True),
        (ExclusivityTier.GOLD, ExclusivityTier.GOLD, True),
        (ExclusivityTier.GOLD, ExclusivityTier.DIAMOND, False),
        (ExclusivityTier.FAMILIAR, ExclusivityTier.GOLD, False),
    ])
    def test_has_access(self, ticket, attraction, expected):
        assert ExclusivityTier.has_access(ticket, attraction) is expected

    def test_invalid_or_missing_tier_denies_access(self):
        assert ExclusivityTier.has_access(None, ExclusivityTier.FAMILIAR) is False
        assert ExclusivityTier.has_access("Platinum", ExclusivityTier.FAMILIAR) is False
        assert ExclusivityTier.has_access(ExclusivityTier.DIAMOND, None) is False

    def test_legacy_labels(self):
        assert ExclusivityTier.from_string("Oro") == ExclusivityTier.GOLD
        assert ExclusivityTier.from_string("Diamante") == ExclusivityTier.DIAMOND
        assert ExclusivityTier.has_access("Diamante", "Oro") is True

    def test_is_valid_never_raises(self):
        assert ExclusivityTier.is_valid("familiar")
        assert not ExclusivityTier.is_valid(None)
        assert not ExclusivityTier.is_valid(42)
        assert not ExclusivityTier.is_valid("")


class TestShift:
    def test_labels(self):
        assert Shift.from_label("Opening") == Shift.OPENING
        assert Shift.from_label("closing") == Shift.CLOSING
        assert Shift.from_label("Apertura") == Shift.OPENING
        assert Shift.from_label("Cierre") == Shift.CLOSING

    def test_invalid_labels(self):
        assert not Shift.is_valid("Night")
        assert not Shift.is_valid(None)
        assert Shift.from_label("") is None
