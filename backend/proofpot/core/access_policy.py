"""Access Policy — tagged variant deciding who may perform gated registry writes.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - OwnerGated always carries a non-null administrator
    - Only the current administrator may designate the next one
    - Open has no administrator: transfer_administrator always fails under Open
    - The null identity never passes can_register, in any mode

Design Decisions:
    - Tagged variant (OwnerGated | Open) over a boolean flag: a third mode is a
      new dataclass plus one match arm, not a new branch in every caller
    - transfer_administrator returns a NEW policy: callers swap the reference
      atomically, the old value is never mutated
"""

from dataclasses import dataclass

from proofpot.core.domain_types import AccessMode, Identity, is_null_identity
from proofpot.core.errors import (
    InvalidAdministratorError, UnauthorizedError,
)


@dataclass(frozen=True)
class OwnerGated:
    """Only the administrator may register."""
    administrator: Identity

    def __post_init__(self):
        if is_null_identity(self.administrator):
            raise InvalidAdministratorError()

    @property
    def mode(self) -> AccessMode:
        return AccessMode.OWNER_GATED


@dataclass(frozen=True)
class Open:
    """Any non-null caller may register."""

    @property
    def mode(self) -> AccessMode:
        return AccessMode.OPEN


AccessPolicy = OwnerGated | Open


def can_register(policy: AccessPolicy, caller: Identity | None) -> bool:
    """True when `caller` may perform a registry write under `policy`."""
    if is_null_identity(caller):
        return False
    match policy:
        case OwnerGated(administrator=administrator):
            return caller == administrator
        case Open():
            return True
    return False


def transfer_administrator(
    policy: AccessPolicy, new_admin: Identity | None, caller: Identity | None,
) -> OwnerGated:
    """Hand the administrator role to `new_admin`. Returns the new policy."""
    if not isinstance(policy, OwnerGated) or caller != policy.administrator:
        raise UnauthorizedError(caller, "transfer the administrator role")
    if is_null_identity(new_admin):
        raise InvalidAdministratorError()
    return OwnerGated(administrator=new_admin)


def describe_policy(policy: AccessPolicy) -> dict:
    """Serializable snapshot for API responses and logs."""
    return {
        "mode": policy.mode.value,
        "administrator": (
            policy.administrator if isinstance(policy, OwnerGated) else None
        ),
    }
