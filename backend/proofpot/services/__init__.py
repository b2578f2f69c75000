"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own IO ordering: read, decide (core), write (store), publish (events)
    - Events are published only after the store write returned success
    - Services never catch domain errors to log them instead of raising

Design Decisions:
    - Stores, clock and event publisher injected via constructor (ADR: in-memory in tests,
      SQL in production, same service code)
"""
