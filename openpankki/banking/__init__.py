"""Bank account identifiers: IBAN, Finnish BBAN, BIC and the bank registry.

Architecture: pure domain layer, no I/O. Country tables and the Finnish bank
registry are built once at import time and never mutated.
"""
