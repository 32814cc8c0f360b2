from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobmarket.models.contract import ContractStatus, Signer


class SignerCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    wallet_address: str = Field(alias="walletAddress", min_length=1)

    def to_signer(self) -> Signer:
        return Signer(name=self.name, wallet_address=self.wallet_address)


class ContractCreate(BaseModel):
    """Payload accepted when an employer creates a contract."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    payment_rate: Optional[str] = Field(default=None, alias="paymentRate")
    payment_frequency: Optional[str] = Field(default=None, alias="paymentFrequency")
    employer_id: str = Field(alias="employerId", min_length=1)
    employee_id: Optional[str] = Field(default=None, alias="employeeId")
    status: ContractStatus = ContractStatus.OPEN
    signers: List[SignerCreate] = []


class SignerSelectionUpdate(BaseModel):
    selected: bool
