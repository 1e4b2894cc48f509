"""
Financial Calculation Engine

Pure calculation modules for mortgage amortization, prepayment
strategies and investment projections. All money is Decimal.
"""

from mortgage_sim.calculations import amortization, money, projections, scenarios

__all__ = ["amortization", "money", "projections", "scenarios"]
