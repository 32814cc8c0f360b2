"""
Contracts service.

This module implements the business logic for the contract approval
workflow of the job marketplace. It is the only component that talks to
the contract repository: every operation loads the current contract,
applies the lifecycle rules from `jobmarket.services.lifecycle` in memory
and persists the result with a single versioned save.

Nothing is cached between calls, so each operation works on the latest
stored state. Errors raised by the lifecycle or the repository are
propagated unchanged; in particular `ConflictError` is left to the caller,
which decides whether to reload and retry.
"""

import logging
from typing import List, Optional

from jobmarket.exceptions import ContractWorkflowError
from jobmarket.models.contract import ENTRY_STATUSES, Contract, ContractStatus, Signer
from jobmarket.repositories.base import ContractRepository
from jobmarket.schemas.contract import ContractCreate
from jobmarket.services import lifecycle

logger = logging.getLogger("jobmarket.contracts")


class ContractService:
    """
    Orchestrates load, validate, mutate and persist for each contract operation.

    Args:
        repository (ContractRepository): Storage for contracts.
    """

    def __init__(self, repository: ContractRepository):
        self._repository = repository

    async def load_contract(self, contract_id: str) -> Contract:
        """
        Retrieves a contract by its identifier.

        Raises:
            NotFoundError: If the contract does not exist.
        """

        return await self._repository.get(contract_id)

    async def list_contracts(
        self,
        *,
        status: Optional[ContractStatus] = None,
        employer_id: Optional[str] = None,
        title: Optional[str] = None,
        exclude_open: bool = False,
    ) -> List[Contract]:
        return await self._repository.list(
            status=status,
            employer_id=employer_id,
            title=title,
            exclude_open=exclude_open,
        )

    async def create_contract(self, data: ContractCreate) -> Contract:
        """
        Creates a new contract in one of the entry states.

        Args:
            data (ContractCreate): Terms, owner and initial signers.

        Returns:
            Contract: The stored contract.

        Raises:
            ContractWorkflowError: If the requested initial status is not
                `open` or `Contract Created`.
        """

        if data.status not in ENTRY_STATUSES:
            raise ContractWorkflowError(
                f"Contracts cannot be created with status '{data.status.value}'"
            )
        contract = await self._repository.create(data)
        logger.info(
            "Contract %s created by employer %s with status '%s'",
            contract.id, contract.employer_id, contract.status.value,
        )
        return contract

    async def update_signer_selection(self, contract_id: str, index: int, selected: bool) -> Contract:
        """
        Marks or unmarks one signer of a contract and persists the change.

        Args:
            contract_id (str): Contract identifier.
            index (int): Zero-based signer position.
            selected (bool): New selection flag.

        Returns:
            Contract: The stored, updated contract.

        Raises:
            NotFoundError: If the contract does not exist.
            IndexOutOfRangeError: If `index` is outside the signer list.
            ConflictError: If the contract changed concurrently.
        """

        contract = await self._repository.get(contract_id)
        updated = lifecycle.set_signer_selected(contract, index, selected)
        saved = await self._repository.save(updated)
        logger.info(
            "Contract %s signer %d %s", contract_id, index,
            "selected" if selected else "deselected",
        )
        return saved

    async def advance_to_pending(self, contract_id: str) -> Contract:
        """
        Moves a contract to `pending` together with its signer selection.

        Nothing is written when the guard fails.

        Args:
            contract_id (str): Contract identifier.

        Returns:
            Contract: The stored contract with status `pending`.

        Raises:
            NotFoundError: If the contract does not exist.
            NoSignerSelectedError: If no signer is selected.
            InvalidTransitionError: If the contract is not in an entry state.
            ConflictError: If the contract changed concurrently.
        """

        contract = await self._repository.get(contract_id)
        updated = lifecycle.request_advance_to_pending(contract)
        saved = await self._repository.save(updated)
        logger.info("Contract %s moved from '%s' to 'pending'", contract_id, contract.status.value)
        return saved

    async def confirm_contract(self, contract_id: str) -> Contract:
        """Applies the external confirmation event: `pending` -> `active`."""

        contract = await self._repository.get(contract_id)
        saved = await self._repository.save(lifecycle.confirm(contract))
        logger.info("Contract %s confirmed", contract_id)
        return saved

    async def complete_contract(self, contract_id: str) -> Contract:
        """Applies the external completion event: `active` -> `completed`."""

        contract = await self._repository.get(contract_id)
        saved = await self._repository.save(lifecycle.complete(contract))
        logger.info("Contract %s completed", contract_id)
        return saved

    async def add_signer(self, contract_id: str, name: str, wallet_address: str) -> Contract:
        """
        Appends a candidate signer (an applicant) to a contract.

        Raises:
            NotFoundError: If the contract does not exist.
            SignerSetLockedError: If the signer list can no longer grow.
            ConflictError: If the contract changed concurrently.
        """

        contract = await self._repository.get(contract_id)
        signer = Signer(name=name, wallet_address=wallet_address)
        saved = await self._repository.save(lifecycle.add_signer(contract, signer))
        logger.info("Signer '%s' added to contract %s", name, contract_id)
        return saved
