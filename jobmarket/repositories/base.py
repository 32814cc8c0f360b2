"""
Contract repository port.

`ContractService` talks to storage only through this protocol. Adapters
must replace the full record atomically on `save` (status and signers
together) and must reject a save whose `version` no longer matches the
stored one with `ConflictError`.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from jobmarket.models.contract import Contract, ContractStatus
from jobmarket.schemas.contract import ContractCreate


class ContractRepository(Protocol):
    async def get(self, contract_id: str) -> Contract:
        """Return the stored contract or raise `NotFoundError`."""
        ...

    async def save(self, contract: Contract) -> Contract:
        """
        Replace the stored record with `contract` if its version is current.

        Returns the stored contract, with `version` incremented and
        `updated_at` refreshed. Raises `ConflictError` on a version mismatch
        and `NotFoundError` if the record disappeared.
        """
        ...

    async def create(self, data: ContractCreate) -> Contract: ...

    async def list(
        self,
        *,
        status: Optional[ContractStatus] = None,
        employer_id: Optional[str] = None,
        title: Optional[str] = None,
        exclude_open: bool = False,
    ) -> List[Contract]: ...
