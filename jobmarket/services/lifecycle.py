"""
Contract lifecycle.

This module holds the state machine that governs contract status changes
and the signer selection rules attached to it. All functions are pure:
they receive a `Contract`, validate the requested change and return a new
`Contract`. The input is never modified and nothing is persisted here;
persisting is the job of `ContractService`.

Legal transitions::

    open / Contract Created --(>=1 signer selected)--> pending
    pending                 --(confirmation event)---> active
    active                  --(completion event)-----> completed

Signer selection may change in any non-terminal state without a status
change.
"""

import logging
from typing import Dict, FrozenSet

from jobmarket.exceptions import (
    IndexOutOfRangeError,
    InvalidTransitionError,
    NoSignerSelectedError,
    SignerSetLockedError,
)
from jobmarket.models.contract import (
    ENTRY_STATUSES,
    TERMINAL_STATUSES,
    Contract,
    ContractStatus,
    Signer,
)

logger = logging.getLogger("jobmarket.lifecycle")


TRANSITIONS: Dict[ContractStatus, FrozenSet[ContractStatus]] = {
    ContractStatus.OPEN: frozenset({ContractStatus.PENDING}),
    ContractStatus.CREATED: frozenset({ContractStatus.PENDING}),
    ContractStatus.PENDING: frozenset({ContractStatus.ACTIVE}),
    ContractStatus.ACTIVE: frozenset({ContractStatus.COMPLETED}),
    ContractStatus.COMPLETED: frozenset(),
}


def can_transition(source: ContractStatus, target: ContractStatus) -> bool:
    """
    Tells whether the state machine allows moving from `source` to `target`.

    Args:
        source (ContractStatus): Current status.
        target (ContractStatus): Requested status.

    Returns:
        bool: True if the transition is part of the lifecycle.
    """

    return target in TRANSITIONS[source]


def _transition(contract: Contract, target: ContractStatus) -> Contract:
    if not can_transition(contract.status, target):
        logger.warning(
            "Rejected transition of contract %s from '%s' to '%s'",
            contract.id, contract.status.value, target.value,
        )
        raise InvalidTransitionError(contract.id, contract.status.value, target.value)
    return contract.model_copy(update={"status": target})


def set_signer_selected(contract: Contract, signer_index: int, selected: bool) -> Contract:
    """
    Marks or unmarks one signer of a contract.

    The returned contract has a new signer tuple identical to the original
    except at `signer_index`. The status and every other field are kept.
    Applying the same call twice gives the same result as applying it once.

    Args:
        contract (Contract): Contract whose signers are updated.
        signer_index (int): Zero-based position of the signer.
        selected (bool): New selection flag.

    Returns:
        Contract: Updated copy of the contract.

    Raises:
        IndexOutOfRangeError: If `signer_index` is outside the signer list.
        InvalidTransitionError: If the contract is already completed.
    """

    size = len(contract.signers)
    if not 0 <= signer_index < size:
        raise IndexOutOfRangeError(signer_index, size)
    if contract.status in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            contract.id, contract.status.value, contract.status.value
        )

    signers = list(contract.signers)
    signers[signer_index] = signers[signer_index].model_copy(update={"selected": selected})
    return contract.model_copy(update={"signers": tuple(signers)})


def request_advance_to_pending(contract: Contract) -> Contract:
    """
    Moves a contract from `open` or `Contract Created` to `pending`.

    The signer selection is carried over unchanged so that status and
    signers are saved together.

    Args:
        contract (Contract): Contract with its signer selection already set.

    Returns:
        Contract: Copy of the contract with status `pending`.

    Raises:
        InvalidTransitionError: If the contract is not in an entry state.
        NoSignerSelectedError: If no signer is selected.
    """

    if contract.status in ENTRY_STATUSES and not contract.has_selected_signer():
        logger.warning("Contract %s cannot advance: no signer selected", contract.id)
        raise NoSignerSelectedError(contract.id)
    return _transition(contract, ContractStatus.PENDING)


def confirm(contract: Contract) -> Contract:
    """`pending` -> `active`, triggered by an external confirmation."""
    return _transition(contract, ContractStatus.ACTIVE)


def complete(contract: Contract) -> Contract:
    """`active` -> `completed`, triggered by an external completion."""
    return _transition(contract, ContractStatus.COMPLETED)


def add_signer(contract: Contract, signer: Signer) -> Contract:
    """
    Appends a candidate signer to the end of the signer list.

    Positions address the selection, so a signer can only join while the
    contract is in an entry state and nobody has been selected yet.

    Raises:
        SignerSetLockedError: If the signer list must stay stable.
    """

    if contract.status not in ENTRY_STATUSES:
        raise SignerSetLockedError(contract.id, f"status is '{contract.status.value}'")
    if contract.has_selected_signer():
        raise SignerSetLockedError(contract.id, "a signer selection is in progress")
    candidate = signer.model_copy(update={"selected": False})
    return contract.model_copy(update={"signers": contract.signers + (candidate,)})
