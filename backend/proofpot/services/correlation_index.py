"""Correlation Index — in-memory content id -> token id lookup for the client.

Invariants:
    - At most one token per content id; the last associate() wins
    - Purely additive: nothing is ever removed
    - Not persisted: rebuilt by the application after restart if it needs it

Design Decisions:
    - Deliberately weak guarantee (no uniqueness of token ids, no durability):
      durable correlation belongs to the surrounding application, not this core
"""

import threading

from proofpot.core.domain_types import TokenId


class CorrelationIndex:
    """Application-level content id -> ownership token id."""

    def __init__(self):
        self._tokens: dict[str, TokenId] = {}
        self._lock = threading.Lock()

    def associate(self, content_id: str, token_id: TokenId) -> None:
        with self._lock:
            self._tokens[content_id] = token_id

    def token_for(self, content_id: str) -> TokenId | None:
        with self._lock:
            return self._tokens.get(content_id)

    def __len__(self) -> int:
        return len(self._tokens)
