"""
Service layer for Party operations.

Registers suppliers and clients and resolves them by code or by the
caller identity (username) that acts for them.

Returns PartyInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from invoice_kernel.exceptions import (
    ClientNotFoundError,
    PartyAlreadyExistsError,
    SupplierNotFoundError,
)
from invoice_kernel.logging_config import get_logger
from invoice_kernel.models.party import Client, Supplier
from invoice_kernel.services.base import BaseService
from invoice_kernel.services.sequence_service import SequenceService

logger = get_logger("services.party")


class PartyType(str, Enum):
    SUPPLIER = "SUPPLIER"
    CLIENT = "CLIENT"


_CODE_PREFIX = {
    PartyType.SUPPLIER: "SP",
    PartyType.CLIENT: "CL",
}


@dataclass(frozen=True)
class PartyInfo:
    """Immutable DTO for supplier and client data."""

    id: int
    code: str
    party_type: PartyType
    username: str
    name: str
    email: str | None
    contact_number: str | None


def format_party_code(party_type: PartyType, value: int) -> str:
    """SP_00001 / CL_00001 style codes."""
    return f"{_CODE_PREFIX[party_type]}_{value:05d}"


class PartyService(BaseService):
    """
    Service for registering and resolving suppliers and clients.

    A username may act for at most one supplier and at most one client.
    """

    def _to_dto(self, party: Supplier | Client, party_type: PartyType) -> PartyInfo:
        return PartyInfo(
            id=party.id,
            code=party.code,
            party_type=party_type,
            username=party.username,
            name=party.name,
            email=party.email,
            contact_number=party.contact_number,
        )

    def create_supplier(
        self,
        username: str,
        name: str,
        email: str | None = None,
        contact_number: str | None = None,
    ) -> PartyInfo:
        """
        Register a supplier under the next SP_ code.

        Raises:
            PartyAlreadyExistsError: If ``username`` already acts for a supplier.
        """
        if self.store.find_supplier_by_username(username) is not None:
            raise PartyAlreadyExistsError(username)

        code = format_party_code(
            PartyType.SUPPLIER,
            self.store.next_sequence_value(SequenceService.SUPPLIER),
        )
        supplier = Supplier(
            code=code,
            username=username,
            name=name,
            email=email,
            contact_number=contact_number,
        )
        self.store.save_party(supplier)
        logger.info("supplier_registered", extra={"code": code, "username": username})
        return self._to_dto(supplier, PartyType.SUPPLIER)

    def create_client(
        self,
        username: str,
        name: str,
        email: str | None = None,
        contact_number: str | None = None,
    ) -> PartyInfo:
        """
        Register a client under the next CL_ code.

        Raises:
            PartyAlreadyExistsError: If ``username`` already acts for a client.
        """
        if self.store.find_client_by_username(username) is not None:
            raise PartyAlreadyExistsError(username)

        code = format_party_code(
            PartyType.CLIENT,
            self.store.next_sequence_value(SequenceService.CLIENT),
        )
        client = Client(
            code=code,
            username=username,
            name=name,
            email=email,
            contact_number=contact_number,
        )
        self.store.save_party(client)
        logger.info("client_registered", extra={"code": code, "username": username})
        return self._to_dto(client, PartyType.CLIENT)

    def get_supplier(self, code: str) -> PartyInfo:
        """
        Raises:
            SupplierNotFoundError: If no supplier has this code.
        """
        supplier = self.store.find_supplier_by_code(code)
        if supplier is None:
            raise SupplierNotFoundError(code)
        return self._to_dto(supplier, PartyType.SUPPLIER)

    def get_client(self, code: str) -> PartyInfo:
        """
        Raises:
            ClientNotFoundError: If no client has this code.
        """
        client = self.store.find_client_by_code(code)
        if client is None:
            raise ClientNotFoundError(code)
        return self._to_dto(client, PartyType.CLIENT)

    def find_supplier_by_username(self, username: str) -> PartyInfo | None:
        supplier = self.store.find_supplier_by_username(username)
        return self._to_dto(supplier, PartyType.SUPPLIER) if supplier else None

    def find_client_by_username(self, username: str) -> PartyInfo | None:
        client = self.store.find_client_by_username(username)
        return self._to_dto(client, PartyType.CLIENT) if client else None
