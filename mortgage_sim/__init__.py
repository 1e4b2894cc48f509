"""Mortgage strategy simulator: amortization, prepayment and investment calculations."""
