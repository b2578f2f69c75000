"""ORM Models — persistence shape of the registry and ledger tables.

Invariants:
    - Both tables are addressed by primary key only
    - Models are never imported by core/ (shell-only)
"""
