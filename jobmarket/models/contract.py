"""
Contract model definition.

This module defines the `Contract` data model, which represents an
agreement between an employer and prospective employees of the job
marketplace. A contract carries opaque terms (title, payment, location),
a status from a fixed set, and the ordered list of candidate signers the
employer selects from before the contract can proceed.

The models use Pydantic for validation and serialization. Signers and
contracts are frozen: every change produces a new instance, so a signer
list is replaced wholesale and never edited in place.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ContractStatus(str, Enum):
    """Contract lifecycle states."""

    OPEN = "open"
    CREATED = "Contract Created"
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


ENTRY_STATUSES = frozenset({ContractStatus.OPEN, ContractStatus.CREATED})
"""States a contract may be created in; both can advance to `pending`."""

TERMINAL_STATUSES = frozenset({ContractStatus.COMPLETED})


class Signer(BaseModel):
    """
    A candidate counterparty of a contract.

    `selected` means "marked by the employer to proceed", not "has signed".
    The wallet address is an opaque identifier and is never verified.

    Example:
        >>> signer = Signer(name="Alice", walletAddress="0xA")
        >>> signer.selected
        False
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    """Display label of the signer."""

    wallet_address: str = Field(alias="walletAddress")
    """Opaque counterparty identifier."""

    selected: bool = False
    """Whether the employer marked this signer to proceed."""


class Contract(BaseModel):
    """
    Represents a contract of the job marketplace.

    The `status` field is always a `ContractStatus` member. `created_at`,
    `updated_at` and `version` are maintained by the repository that stores
    the contract; `version` increases on every successful save and is used
    to reject concurrent writes.

    Example:
        >>> contract = Contract(
        ...     id="C1",
        ...     title="Backend developer",
        ...     employerId="employer-1",
        ...     signers=[Signer(name="Alice", walletAddress="0xA")],
        ... )
        >>> contract.status
        <ContractStatus.OPEN: 'open'>
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    """Unique identifier, immutable after creation."""

    title: str
    """Title of the contract."""

    description: Optional[str] = None
    location: Optional[str] = None
    payment_rate: Optional[str] = Field(default=None, alias="paymentRate")
    payment_frequency: Optional[str] = Field(default=None, alias="paymentFrequency")

    employer_id: str = Field(alias="employerId", min_length=1)
    """Employer owning the contract. Set at creation, never cleared."""

    employee_id: Optional[str] = Field(default=None, alias="employeeId")
    """Employee assigned to the contract, if any."""

    status: ContractStatus = ContractStatus.OPEN
    """Current lifecycle state."""

    signers: Tuple[Signer, ...] = ()
    """Ordered candidate signers. Positions never change."""

    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    version: int = 0
    """Optimistic concurrency token, incremented by the repository on save."""

    def has_selected_signer(self) -> bool:
        return any(signer.selected for signer in self.signers)
