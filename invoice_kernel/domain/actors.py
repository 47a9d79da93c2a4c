"""
Caller identity and role (``invoice_kernel.domain.actors``).

The request layer resolves who is calling before the kernel is invoked;
the kernel only ever sees a ``Caller``.  ``CallerRole`` is closed: every
role-dependent decision handles all three members and rejects anything
else explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CallerRole(str, Enum):
    """The three actor roles of the invoice workflow."""

    BANK = "BANK"
    CLIENT = "CLIENT"
    SUPPLIER = "SUPPLIER"


@dataclass(frozen=True)
class Caller:
    """An already-authenticated actor: identity string plus role."""

    identity: str
    role: CallerRole

    def __post_init__(self) -> None:
        if not self.identity:
            raise ValueError("Caller identity must be a non-empty string")
        if not isinstance(self.role, CallerRole):
            raise ValueError(f"Unknown caller role: {self.role!r}")

    @classmethod
    def bank(cls, identity: str) -> Caller:
        return cls(identity, CallerRole.BANK)

    @classmethod
    def client(cls, identity: str) -> Caller:
        return cls(identity, CallerRole.CLIENT)

    @classmethod
    def supplier(cls, identity: str) -> Caller:
        return cls(identity, CallerRole.SUPPLIER)
