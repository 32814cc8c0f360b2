"""Tests for the contract API routes."""

from unittest.mock import AsyncMock

from jobmarket.exceptions import ConflictError
from tests.conftest import EMPLOYER_ID

CONTRACT_PAYLOAD = {
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


def _create(client, owner_headers, **overrides):
    response = client.post("/contracts", json={**CONTRACT_PAYLOAD, **overrides}, headers=owner_headers)
    assert response.status_code == 201
    return response.json()


def test_create_contract(client, owner_headers):
    contract = _create(client, owner_headers)

    assert contract["status"] == "open"
    assert contract["employerId"] == EMPLOYER_ID
    assert contract["paymentRate"] == "40"
    assert contract["signers"] == [
        {"name": "Alice", "walletAddress": "0xA", "selected": False},
        {"name": "Bob", "walletAddress": "0xB", "selected": False},
    ]
    assert contract["version"] == 0


def test_create_contract_in_contract_created_state(client, owner_headers):
    contract = _create(client, owner_headers, status="Contract Created")
    assert contract["status"] == "Contract Created"


def test_create_contract_rejects_other_initial_status(client, owner_headers):
    response = client.post(
        "/contracts", json={**CONTRACT_PAYLOAD, "status": "active"}, headers=owner_headers
    )
    assert response.status_code == 400


def test_create_contract_rejects_unknown_status(client, owner_headers):
    response = client.post(
        "/contracts", json={**CONTRACT_PAYLOAD, "status": "draft"}, headers=owner_headers
    )
    assert response.status_code == 422


def test_create_contract_for_someone_else(client):
    response = client.post("/contracts", json=CONTRACT_PAYLOAD, headers={"X-Employer-Id": "other"})
    assert response.status_code == 403


def test_select_signer_and_advance(client, owner_headers):
    contract = _create(client, owner_headers)

    response = client.put(
        f"/contracts/{contract['id']}/signers/1", json={"selected": True}, headers=owner_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert [s["selected"] for s in body["signers"]] == [False, True]
    assert body["status"] == "open"

    response = client.post(f"/contracts/{contract['id']}/advance", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    assert response.json()["signers"] == body["signers"]


def test_advance_without_selected_signer(client, owner_headers):
    contract = _create(client, owner_headers)

    response = client.post(f"/contracts/{contract['id']}/advance", headers=owner_headers)

    assert response.status_code == 422
    assert response.json()["error"] == "NoSignerSelectedError"
    assert client.get(f"/contracts/{contract['id']}").json()["status"] == "open"


def test_signer_index_out_of_range(client, owner_headers):
    contract = _create(client, owner_headers)

    response = client.put(
        f"/contracts/{contract['id']}/signers/5", json={"selected": True}, headers=owner_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "IndexOutOfRangeError"


def test_only_owner_can_mutate(client, owner_headers):
    contract = _create(client, owner_headers)

    response = client.put(
        f"/contracts/{contract['id']}/signers/0",
        json={"selected": True},
        headers={"X-Employer-Id": "someone-else"},
    )
    assert response.status_code == 403

    response = client.post(f"/contracts/{contract['id']}/advance")
    assert response.status_code == 401


def test_unknown_contract(client, owner_headers):
    assert client.get("/contracts/missing").status_code == 404
    assert client.post("/contracts/missing/advance", headers=owner_headers).status_code == 404


def test_add_signer(client, owner_headers):
    contract = _create(client, owner_headers)

    response = client.post(
        f"/contracts/{contract['id']}/signers",
        json={"name": "Carol", "walletAddress": "0xC"},
        headers=owner_headers,
    )

    assert response.status_code == 200
    assert [s["name"] for s in response.json()["signers"]] == ["Alice", "Bob", "Carol"]


def test_add_signer_during_selection_is_rejected(client, owner_headers):
    contract = _create(client, owner_headers)
    client.put(f"/contracts/{contract['id']}/signers/0", json={"selected": True}, headers=owner_headers)

    response = client.post(
        f"/contracts/{contract['id']}/signers",
        json={"name": "Carol", "walletAddress": "0xC"},
        headers=owner_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"] == "SignerSetLockedError"


def test_confirm_and_complete(client, owner_headers, collaborator_headers):
    contract = _create(client, owner_headers)
    contract_id = contract["id"]
    client.put(f"/contracts/{contract_id}/signers/0", json={"selected": True}, headers=owner_headers)

    assert client.post(f"/contracts/{contract_id}/confirm", headers=collaborator_headers).status_code == 409

    client.post(f"/contracts/{contract_id}/advance", headers=owner_headers)
    response = client.post(f"/contracts/{contract_id}/confirm", headers=collaborator_headers)
    assert response.json()["status"] == "active"
    response = client.post(f"/contracts/{contract_id}/complete", headers=collaborator_headers)
    assert response.json()["status"] == "completed"


def _pending_contract(client, owner_headers):
    contract = _create(client, owner_headers)
    client.put(f"/contracts/{contract['id']}/signers/0", json={"selected": True}, headers=owner_headers)
    client.post(f"/contracts/{contract['id']}/advance", headers=owner_headers)
    return contract


def test_confirm_without_collaborator_key(client, owner_headers, collaborator_headers):
    contract = _pending_contract(client, owner_headers)

    response = client.post(f"/contracts/{contract['id']}/confirm", headers=owner_headers)

    assert response.status_code == 401
    assert client.get(f"/contracts/{contract['id']}").json()["status"] == "pending"


def test_confirm_and_complete_with_wrong_collaborator_key(client, owner_headers, collaborator_headers):
    contract = _pending_contract(client, owner_headers)
    wrong = {"X-Collaborator-Key": "guess"}

    assert client.post(f"/contracts/{contract['id']}/confirm", headers=wrong).status_code == 403
    assert client.post(f"/contracts/{contract['id']}/complete", headers=wrong).status_code == 403
    assert client.get(f"/contracts/{contract['id']}").json()["status"] == "pending"


def test_collaborator_events_rejected_when_no_key_configured(client, owner_headers, monkeypatch):
    monkeypatch.setattr("jobmarket.core.config.COLLABORATOR_API_KEY", None)
    contract = _pending_contract(client, owner_headers)

    response = client.post(
        f"/contracts/{contract['id']}/confirm", headers={"X-Collaborator-Key": "anything"}
    )

    assert response.status_code == 403


def test_status_filter_ignores_case(client, owner_headers):
    contract = _pending_contract(client, owner_headers)
    _create(client, owner_headers)

    response = client.get("/contracts", params={"status": "Pending"})
    assert [c["id"] for c in response.json()] == [contract["id"]]

    response = client.get("/contracts", params={"status": "contract created"})
    assert response.json() == []


def test_status_filter_rejects_unknown_status(client):
    assert client.get("/contracts", params={"status": "draft"}).status_code == 422


def test_conflict_is_reported(client, owner_headers, service):
    contract = _create(client, owner_headers)
    service.update_signer_selection = AsyncMock(side_effect=ConflictError(contract["id"], 0))

    response = client.put(
        f"/contracts/{contract['id']}/signers/0", json={"selected": True}, headers=owner_headers
    )

    assert response.status_code == 409
    assert response.json()["error"] == "ConflictError"


def test_list_contracts(client, owner_headers):
    open_contract = _create(client, owner_headers, title="Frontend developer")
    moved = _create(client, owner_headers, title="Backend developer")
    client.put(f"/contracts/{moved['id']}/signers/0", json={"selected": True}, headers=owner_headers)
    client.post(f"/contracts/{moved['id']}/advance", headers=owner_headers)

    response = client.get("/contracts", params={"employer_id": EMPLOYER_ID, "exclude_open": True})
    assert [c["id"] for c in response.json()] == [moved["id"]]

    response = client.get("/contracts", params={"title": "frontend"})
    assert [c["id"] for c in response.json()] == [open_contract["id"]]

    response = client.get("/contracts", params={"status": "pending"})
    assert [c["id"] for c in response.json()] == [moved["id"]]
