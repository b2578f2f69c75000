"""Infrastructure Layer — storage backends, event delivery and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols; it never contains domain rules
    - All database failures mapped to DatabaseError (core/errors.py)

Design Decisions:
    - One module per backend (memory, SQL) behind the same Protocol (ADR: swap without touching services)
"""
