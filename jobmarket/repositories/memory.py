"""
In-memory contract repository.

Keeps contracts in a dict and applies the same versioned-save rules as the
MongoDB repository. Used for local runs without a database and in tests.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from jobmarket.exceptions import ConflictError, NotFoundError
from jobmarket.models.contract import Contract, ContractStatus
from jobmarket.schemas.contract import ContractCreate


class InMemoryContractRepository:
    def __init__(self):
        self._contracts: Dict[str, Contract] = {}
        self._lock = asyncio.Lock()

    async def get(self, contract_id: str) -> Contract:
        contract = self._contracts.get(contract_id)
        # Hand back the snapshot after one suspension, as a database round trip would.
        await asyncio.sleep(0)
        if contract is None:
            raise NotFoundError(contract_id)
        return contract

    async def save(self, contract: Contract) -> Contract:
        async with self._lock:
            stored = self._contracts.get(contract.id)
            if stored is None:
                raise NotFoundError(contract.id)
            if stored.version != contract.version:
                raise ConflictError(contract.id, contract.version)
            saved = contract.model_copy(
                update={
                    "version": contract.version + 1,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self._contracts[contract.id] = saved
            return saved

    async def create(self, data: ContractCreate) -> Contract:
        now = datetime.now(timezone.utc)
        contract = Contract(
            id=uuid.uuid4().hex,
            title=data.title,
            description=data.description,
            location=data.location,
            payment_rate=data.payment_rate,
            payment_frequency=data.payment_frequency,
            employer_id=data.employer_id,
            employee_id=data.employee_id,
            status=data.status,
            signers=tuple(signer.to_signer() for signer in data.signers),
            created_at=now,
            updated_at=now,
        )
        async with self._lock:
            self._contracts[contract.id] = contract
        return contract

    async def list(
        self,
        *,
        status: Optional[ContractStatus] = None,
        employer_id: Optional[str] = None,
        title: Optional[str] = None,
        exclude_open: bool = False,
    ) -> List[Contract]:
        contracts = list(self._contracts.values())
        if status is not None:
            contracts = [c for c in contracts if c.status == status]
        if exclude_open:
            contracts = [c for c in contracts if c.status != ContractStatus.OPEN]
        if employer_id:
            contracts = [c for c in contracts if c.employer_id == employer_id]
        if title:
            needle = title.lower()
            contracts = [c for c in contracts if needle in c.title.lower()]
        return sorted(contracts, key=lambda c: c.created_at, reverse=True)
