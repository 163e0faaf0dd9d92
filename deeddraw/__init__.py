"""
DeedDraw ledger.

Points-based promotional draw: transaction verification, certificate
numbering, referral pricing and withdrawal accounting.
"""

__version__ = "1.0.0"
