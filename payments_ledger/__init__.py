"""
Payments Ledger

Applies an ordered stream of deposit, withdrawal, dispute, resolve and
chargeback records to per-client accounts using fixed-point integer
arithmetic, and reports the final balances.
"""

__version__ = "1.0.0"
