"""
Contract workflow errors.

Every failure raised by the contract lifecycle, the contract service or a
contract repository derives from `ContractWorkflowError`. Each error carries
the HTTP status code the request layer answers with, so the FastAPI
exception handler registered in `main.py` can translate them uniformly.

None of these errors is fatal to the process; each one is scoped to a
single contract operation.
"""


class ContractWorkflowError(Exception):
    """
    Base class for all contract workflow failures.

    Attributes:
        status_code (int): HTTP status code used when surfaced by the API.
        detail (str): Human readable description of the failure.
    """

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ContractWorkflowError):
    """The requested contract identifier does not exist."""

    status_code = 404

    def __init__(self, contract_id: str):
        super().__init__(f"Contract {contract_id} not found")
        self.contract_id = contract_id


class NoSignerSelectedError(ContractWorkflowError):
    """
    Raised when a contract is asked to advance to `pending` while none of
    its signers is selected. The contract is left untouched.
    """

    status_code = 422

    def __init__(self, contract_id: str):
        super().__init__(
            f"Contract {contract_id} has no selected signer. Select at least one signer."
        )
        self.contract_id = contract_id


class IndexOutOfRangeError(ContractWorkflowError):
    """A signer index outside `[0, len(signers))` was given."""

    status_code = 400

    def __init__(self, index: int, size: int):
        super().__init__(f"Signer index {index} is out of range for {size} signer(s)")
        self.index = index
        self.size = size


class InvalidTransitionError(ContractWorkflowError):
    """The requested status change is not part of the contract lifecycle."""

    status_code = 409

    def __init__(self, contract_id: str, source: str, target: str):
        super().__init__(
            f"Contract {contract_id} cannot move from '{source}' to '{target}'"
        )
        self.contract_id = contract_id
        self.source = source
        self.target = target


class SignerSetLockedError(ContractWorkflowError):
    """
    Raised when a signer is added to a contract whose signer positions must
    stay stable: a selection is in progress or the contract left the
    pre-pending states.
    """

    status_code = 409

    def __init__(self, contract_id: str, reason: str):
        super().__init__(f"Signers of contract {contract_id} are locked: {reason}")
        self.contract_id = contract_id


class ConflictError(ContractWorkflowError):
    """
    Concurrent modification detected at the persistence boundary.

    The stored contract changed since it was read. Callers should reload the
    contract and retry the operation; no automatic retry happens here.
    """

    status_code = 409

    def __init__(self, contract_id: str, expected_version: int):
        super().__init__(
            f"Contract {contract_id} was modified concurrently "
            f"(expected version {expected_version}). Reload and retry."
        )
        self.contract_id = contract_id
        self.expected_version = expected_version
