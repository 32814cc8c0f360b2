"""
MongoDB contract repository.

Stores contracts in a Motor collection, one document per contract keyed by
an `ObjectId`. Saves are full-document replacements conditioned on the
version that was read, so two racing read-modify-write operations cannot
both succeed: the second one matches no document and raises
`ConflictError`.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from jobmarket.core.config import CONTRACTS_COLLECTION
from jobmarket.exceptions import ConflictError, NotFoundError
from jobmarket.models.contract import Contract, ContractStatus
from jobmarket.schemas.contract import ContractCreate

logger = logging.getLogger("jobmarket.db")


class MongoContractRepository:
    """
    Contract repository backed by MongoDB.

    Args:
        db (AsyncIOMotorDatabase): Database returned by `get_db()`.
        collection_name (str): Name of the contracts collection.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = CONTRACTS_COLLECTION):
        self._collection = db[collection_name]

    async def get(self, contract_id: str) -> Contract:
        """
        Retrieves a contract by its identifier.

        Args:
            contract_id (str): String form of the document `ObjectId`.

        Returns:
            Contract: Parsed contract.

        Raises:
            NotFoundError: If the id is malformed or no document matches.
        """

        if not ObjectId.is_valid(contract_id):
            raise NotFoundError(contract_id)
        document = await self._collection.find_one({"_id": ObjectId(contract_id)})
        if not document:
            raise NotFoundError(contract_id)
        return _parse_contract_document(document)

    async def save(self, contract: Contract) -> Contract:
        """
        Replaces the stored contract if nobody modified it since it was read.

        Args:
            contract (Contract): Contract carrying the version it was loaded with.

        Returns:
            Contract: The stored contract with its new version and `updated_at`.

        Raises:
            ConflictError: If the stored version differs from `contract.version`.
            NotFoundError: If the contract no longer exists.
        """

        if not ObjectId.is_valid(contract.id):
            raise NotFoundError(contract.id)

        saved = contract.model_copy(
            update={"version": contract.version + 1, "updated_at": _now()}
        )
        object_id = ObjectId(contract.id)
        result = await self._collection.replace_one(
            {"_id": object_id, "version": contract.version},
            _to_document(saved),
        )
        if result.matched_count == 0:
            if await self._collection.count_documents({"_id": object_id}, limit=1) == 0:
                raise NotFoundError(contract.id)
            logger.warning(
                "Version conflict saving contract %s (expected version %s)",
                contract.id, contract.version,
            )
            raise ConflictError(contract.id, contract.version)
        return saved

    async def create(self, data: ContractCreate) -> Contract:
        """
        Inserts a new contract document.

        Args:
            data (ContractCreate): Validated creation payload.

        Returns:
            Contract: The stored contract, with its generated id.
        """

        now = _now()
        document = {
            "title": data.title,
            "description": data.description,
            "location": data.location,
            "payment_rate": data.payment_rate,
            "payment_frequency": data.payment_frequency,
            "employer_id": data.employer_id,
            "employee_id": data.employee_id,
            "status": data.status.value,
            "signers": [
                {"name": s.name, "wallet_address": s.wallet_address, "selected": False}
                for s in data.signers
            ],
            "created_at": now,
            "updated_at": now,
            "version": 0,
        }
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return _parse_contract_document(document)

    async def list(
        self,
        *,
        status: Optional[ContractStatus] = None,
        employer_id: Optional[str] = None,
        title: Optional[str] = None,
        exclude_open: bool = False,
    ) -> List[Contract]:
        """
        Lists contracts, newest first.

        Args:
            status (ContractStatus, optional): Only contracts in this status.
            employer_id (str, optional): Only contracts of this employer.
            title (str, optional): Case-insensitive substring of the title.
            exclude_open (bool): Skip contracts still in status `open`.

        Returns:
            list[Contract]: Matching contracts.
        """

        query = _build_list_query(status, employer_id, title, exclude_open)
        cursor = self._collection.find(query).sort("created_at", DESCENDING)
        return [_parse_contract_document(document) async for document in cursor]


def _now() -> datetime:
    # BSON datetimes keep milliseconds only.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _build_list_query(
    status: Optional[ContractStatus],
    employer_id: Optional[str],
    title: Optional[str],
    exclude_open: bool,
) -> dict:
    query = {}
    status_clauses = {}
    if status is not None:
        status_clauses["$eq"] = status.value
    if exclude_open:
        status_clauses["$ne"] = ContractStatus.OPEN.value
    if status_clauses:
        query["status"] = status_clauses
    if employer_id:
        query["employer_id"] = employer_id
    if title:
        query["title"] = {"$regex": re.escape(title), "$options": "i"}
    return query


def _to_document(contract: Contract) -> dict:
    """
    Converts a `Contract` into the MongoDB document layout.

    The `id` becomes the `_id` key of the filter, so it is left out of the
    replacement document.
    """

    document = contract.model_dump(exclude={"id", "status", "signers"})
    document["status"] = contract.status.value
    document["signers"] = [signer.model_dump() for signer in contract.signers]
    return document


def _parse_contract_document(document: dict) -> Contract:
    data = {key: value for key, value in document.items() if key != "_id"}
    data["id"] = str(document["_id"])
    return Contract.model_validate(data)
