"""Tests for the lead-time policy."""

import pytest
from datetime import date

from inventory_risk.analysis import LeadTimePolicy, lead_time_boundary, lead_time_weeks


class TestLeadTimeWeeks:
    """Tests for the default lead-time table."""

    @pytest.mark.parametrize("location, weeks", [
        ("IDCKDM", 6),
        ("VNHCDM", 7),
        ("VNHNDM", 7),
        ("THBNDM", 5),
        ("MYBGPM", 5),
        ("THRYPM", 4),
        ("UNKNOWN", 4),
        ("", 4),
    ])
    def test_table(self, location, weeks):
        """Test mapped locations and the default fall-through."""
        assert lead_time_weeks(location) == weeks


class TestLeadTimeBoundary:
    """Tests for boundary dates and windows."""

    def test_boundary_adds_weeks(self, reference_date):
        """Test that the boundary is reference + weeks * 7 days."""
        assert lead_time_boundary("MYBGPM", reference_date) == date(2025, 12, 24)
        assert lead_time_boundary("VNHCDM", reference_date) == date(2026, 1, 7)

    def test_boundary_defaults_to_today(self):
        """Test that no reference date means today."""
        policy = LeadTimePolicy(weeks_by_location={}, default_weeks=0)

        assert policy.boundary_date("ANY") == date.today()

    def test_window(self, reference_date):
        """Test the inside-lead-time date window."""
        policy = LeadTimePolicy()

        assert policy.window("IDCKDM", reference_date) == (reference_date, date(2025, 12, 31))


class TestLeadTimePolicy:
    """Tests for custom policies."""

    def test_custom_table(self):
        """Test that a custom table overrides the defaults."""
        policy = LeadTimePolicy(weeks_by_location={"X": 2}, default_weeks=1)

        assert policy.weeks_for("X") == 2
        assert policy.weeks_for("MYBGPM") == 1

    def test_negative_default_rejected(self):
        """Test that negative lead times are configuration errors."""
        with pytest.raises(ValueError, match="default_weeks"):
            LeadTimePolicy(default_weeks=-1)

    def test_negative_entry_rejected(self):
        """Test that negative table entries are configuration errors."""
        with pytest.raises(ValueError, match="Lead times"):
            LeadTimePolicy(weeks_by_location={"X": -2})
