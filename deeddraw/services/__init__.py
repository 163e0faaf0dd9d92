"""
Ledger services.

Business logic layer; LedgerFacade is the inbound entry point.
"""
