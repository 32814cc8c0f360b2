"""
Contract routes.

This module defines the API endpoints of the contract approval workflow.
Employers create contracts, collect candidate signers, mark the signers
that should proceed and advance the contract to `pending`. Confirmation
and completion events are posted by an authorized collaborator.

Only the explicit workflow operations are exposed; there is no endpoint
that patches arbitrary contract fields. All endpoints delegate to
`ContractService` (`jobmarket.services.contracts_service`). Workflow
errors are translated into HTTP responses by the exception handler
registered in `jobmarket.main`.
"""

import secrets
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from jobmarket.core import config
from jobmarket.db.client import get_db
from jobmarket.models.contract import Contract, ContractStatus
from jobmarket.repositories.mongo import MongoContractRepository
from jobmarket.schemas.contract import ContractCreate, SignerCreate, SignerSelectionUpdate
from jobmarket.services.contracts_service import ContractService

router = APIRouter()


def get_contract_service() -> ContractService:
    """Builds a `ContractService` on top of the MongoDB repository."""
    return ContractService(MongoContractRepository(get_db()))


async def _require_owner(
    contract_id: str,
    employer_id: Optional[str],
    service: ContractService,
) -> None:
    """
    Ensures the caller is the employer owning the contract.

    Raises:
        HTTPException: 401 if no employer id was sent, 403 if it does not
            match the contract owner.
        NotFoundError: If the contract does not exist.
    """

    if not employer_id:
        raise HTTPException(status_code=401, detail="Missing X-Employer-Id header")
    contract = await service.load_contract(contract_id)
    if contract.employer_id != employer_id:
        raise HTTPException(status_code=403, detail="Only the contract owner can modify it")


def require_collaborator(
    collaborator_key: Optional[str] = Header(default=None, alias="X-Collaborator-Key"),
) -> None:
    """
    Ensures confirmation and completion events come from the authorized
    collaborator holding `COLLABORATOR_API_KEY`.

    Raises:
        HTTPException: 401 if no key was sent, 403 if it does not match or
            no key is configured.
    """

    if not collaborator_key:
        raise HTTPException(status_code=401, detail="Missing X-Collaborator-Key header")
    expected = config.COLLABORATOR_API_KEY
    if not expected or not secrets.compare_digest(collaborator_key.encode(), expected.encode()):
        raise HTTPException(status_code=403, detail="Invalid collaborator key")


def parse_status_filter(status: Optional[str] = None) -> Optional[ContractStatus]:
    """Matches the `status` query parameter against the known states, ignoring case."""
    if status is None or not status.strip():
        return None
    wanted = status.strip().lower()
    for candidate in ContractStatus:
        if candidate.value.lower() == wanted:
            return candidate
    raise HTTPException(status_code=422, detail=f"Unknown contract status '{status}'")


@router.post("", status_code=201, response_model=Contract)
async def create_contract_route(
    data: ContractCreate,
    employer_id: Optional[str] = Header(default=None, alias="X-Employer-Id"),
    service: ContractService = Depends(get_contract_service),
):
    """
    Create a new contract.

    Args:
        data (ContractCreate): Terms, owner and initial signers. The status
            defaults to `open`; `Contract Created` is also accepted.

    Returns:
        Contract: The created contract.

    Example:
        >>> POST /contracts
        {
            "title": "Backend developer",
            "employerId": "employer-1",
            "paymentRate": "40",
            "paymentFrequency": "hourly",
            "signers": [{"name": "Alice", "walletAddress": "0xA"}]
        }
    """

    if not employer_id:
        raise HTTPException(status_code=401, detail="Missing X-Employer-Id header")
    if employer_id != data.employer_id:
        raise HTTPException(status_code=403, detail="Contracts can only be created for yourself")
    return await service.create_contract(data)


@router.get("", response_model=List[Contract])
async def list_contracts_route(
    status: Optional[ContractStatus] = Depends(parse_status_filter),
    employer_id: Optional[str] = None,
    title: Optional[str] = None,
    exclude_open: bool = False,
    service: ContractService = Depends(get_contract_service),
):
    """
    List contracts, newest first. The status filter is case-insensitive.

    Example:
        >>> GET /contracts?employer_id=employer-1&exclude_open=true&status=pending
    """

    return await service.list_contracts(
        status=status, employer_id=employer_id, title=title, exclude_open=exclude_open
    )


@router.get("/{contract_id}", response_model=Contract)
async def get_contract_route(
    contract_id: str,
    service: ContractService = Depends(get_contract_service),
):
    return await service.load_contract(contract_id)


@router.post("/{contract_id}/signers", response_model=Contract)
async def add_signer_route(
    contract_id: str,
    signer: SignerCreate,
    employer_id: Optional[str] = Header(default=None, alias="X-Employer-Id"),
    service: ContractService = Depends(get_contract_service),
):
    """
    Add a candidate signer to a contract that is still collecting applicants.

    Example:
        >>> POST /contracts/665f.../signers
        {"name": "Bob", "walletAddress": "0xB"}
    """

    await _require_owner(contract_id, employer_id, service)
    return await service.add_signer(contract_id, signer.name, signer.wallet_address)


@router.put("/{contract_id}/signers/{index}", response_model=Contract)
async def update_signer_selection_route(
    contract_id: str,
    index: int,
    update: SignerSelectionUpdate,
    employer_id: Optional[str] = Header(default=None, alias="X-Employer-Id"),
    service: ContractService = Depends(get_contract_service),
):
    """
    Mark or unmark the signer at position `index`.

    Example:
        >>> PUT /contracts/665f.../signers/1
        {"selected": true}
    """

    await _require_owner(contract_id, employer_id, service)
    return await service.update_signer_selection(contract_id, index, update.selected)


@router.post("/{contract_id}/advance", response_model=Contract)
async def advance_contract_route(
    contract_id: str,
    employer_id: Optional[str] = Header(default=None, alias="X-Employer-Id"),
    service: ContractService = Depends(get_contract_service),
):
    """
    Move the contract to `pending` with its current signer selection.

    Raises:
        NoSignerSelectedError: If no signer is selected (answered with 422).
    """

    await _require_owner(contract_id, employer_id, service)
    return await service.advance_to_pending(contract_id)


@router.post("/{contract_id}/confirm", response_model=Contract, dependencies=[Depends(require_collaborator)])
async def confirm_contract_route(
    contract_id: str,
    service: ContractService = Depends(get_contract_service),
):
    return await service.confirm_contract(contract_id)


@router.post("/{contract_id}/complete", response_model=Contract, dependencies=[Depends(require_collaborator)])
async def complete_contract_route(
    contract_id: str,
    service: ContractService = Depends(get_contract_service),
):
    return await service.complete_contract(contract_id)
