"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from jobmarket.main import app
from jobmarket.repositories.memory import InMemoryContractRepository
from jobmarket.routes.contracts_routes import get_contract_service
from jobmarket.schemas.contract import ContractCreate
from jobmarket.services.contracts_service import ContractService

EMPLOYER_ID = "employer-1"


def make_contract_data(**overrides) -> ContractCreate:
    """Contract payload with two unselected signers, Alice and Bob."""
    data = {
        "title": "Backend developer",
        "description": "Build the contracts API",
        "location": "Remote",
        "paymentRate": "40",
        "paymentFrequency": "hourly",
        "employerId": EMPLOYER_ID,
        "signers": [
            {"name": "Alice", "walletAddress": "0xA"},
            {"name": "Bob", "walletAddress": "0xB"},
        ],
    }
    data.update(overrides)
    return ContractCreate.model_validate(data)


@pytest.fixture
def repository():
    return InMemoryContractRepository()


@pytest.fixture
def service(repository):
    return ContractService(repository)


@pytest.fixture
def client(service):
    """Test client whose routes use the in-memory repository."""
    app.dependency_overrides[get_contract_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers():
    return {"X-Employer-Id": EMPLOYER_ID}


@pytest.fixture
def collaborator_headers(monkeypatch):
    """Headers of the collaborator allowed to post confirm/complete events."""
    monkeypatch.setattr("jobmarket.core.config.COLLABORATOR_API_KEY", "collaborator-secret")
    return {"X-Collaborator-Key": "collaborator-secret"}
