"""
Tests for investment projection and savings goal tracking.
"""

import pytest
from decimal import Decimal

from mortgage_sim.calculations.projections import project_investment, track_savings_goal


class TestInvestmentProjection:
    """Test compound growth with monthly contributions."""

    def test_lump_sum_only(self):
        """Test 1,000 at 12% compounds monthly for a year."""
        projection = project_investment(1000, 0, 1, 12)
        assert projection.final_capital == Decimal("1126.83")
        assert projection.total_contributed == Decimal("1000.00")
        assert projection.total_interest == Decimal("126.83")

    def test_contributions_without_return(self):
        """Test contributions simply add up at 0%."""
        projection = project_investment(0, 100, 2, 0)
        assert projection.final_capital == Decimal("2400.00")
        assert projection.total_interest == 0
        assert [p.value for p in projection.points] == [Decimal("1200.00"), Decimal("2400.00")]

    def test_one_point_per_year(self):
        """Test the yearly series."""
        projection = project_investment(10000, 500, 20, 6)
        assert [p.year for p in projection.points] == list(range(1, 21))
        assert projection.points[-1].value == projection.final_capital
        values = [p.value for p in projection.points]
        assert values == sorted(values)

    def test_interest_is_growth_over_contributions(self):
        """Test total interest is final capital minus contributions."""
        projection = project_investment(10000, 500, 20, 6)
        assert projection.total_contributed == Decimal("130000.00")
        assert projection.total_interest == projection.final_capital - projection.total_contributed
        assert projection.total_interest > 0

    def test_no_years(self):
        """Test a zero horizon keeps the initial capital."""
        projection = project_investment(5000, 100, 0, 6)
        assert projection.final_capital == Decimal("5000.00")
        assert projection.points == []


class TestSavingsGoal:
    """Test time left to reach a savings goal."""

    def test_months_remaining(self):
        """Test 40,000 left at 500 a month takes 6 years and 8 months."""
        progress = track_savings_goal(50000, 10000, 500)
        assert progress.progress_percent == Decimal("20.00")
        assert progress.remaining_amount == Decimal("40000.00")
        assert progress.months_remaining == 80
        assert (progress.years, progress.months) == (6, 8)

    def test_partial_month_rounds_up(self):
        """Test a partial last month counts as a full month."""
        progress = track_savings_goal(1000, 0, 300)
        assert progress.months_remaining == 4

    @pytest.mark.parametrize("current", [50000, 60000])
    def test_goal_reached(self, current):
        """Test reaching or exceeding the goal."""
        progress = track_savings_goal(50000, current, 500)
        assert progress.progress_percent == Decimal("100.00")
        assert progress.remaining_amount == 0
        assert (progress.years, progress.months) == (0, 0)

    def test_no_monthly_saving(self):
        """Test the goal is never reached without saving."""
        progress = track_savings_goal(50000, 10000, 0)
        assert progress.progress_percent == Decimal("20.00")
        assert progress.months_remaining is None
        assert progress.years is None

    def test_no_target(self):
        """Test a zero target reports no progress and no time."""
        progress = track_savings_goal(0, 1000, 500)
        assert progress.progress_percent == 0
        assert progress.months_remaining is None
