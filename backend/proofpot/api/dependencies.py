"""Request Dependencies — caller identity extraction shared by all routes.

Invariants:
    - The caller identity travels in the X-Caller-Address header
    - A malformed header is a ValidationError (400), a missing one is None
      (the core then answers Unauthorized where a caller is required)
"""

from fastapi import Header

from proofpot.core.domain_types import HashKey, Identity, parse_identity
from proofpot.core.errors import ValidationError

CALLER_HEADER = "X-Caller-Address"


async def get_caller(
    x_caller_address: str | None = Header(None, alias=CALLER_HEADER),
) -> Identity | None:
    return parse_identity(x_caller_address, "caller")


def parse_hash_path(content_hash: str) -> HashKey:
    """Path parameter -> HashKey, ValidationError (400) when malformed."""
    try:
        return HashKey.from_hex(content_hash)
    except ValueError as e:
        raise ValidationError(str(e), "content_hash") from e
