"""
Entity Codec

Converts ledger records to and from the byte-string values stored in world state.
Values are UTF-8 JSON objects with camelCase keys and a docType discriminator.
"""

import json
from typing import TypeVar

from pydantic import ValidationError

from crowdfunding_contracts.errors import SerializationError
from crowdfunding_contracts.types import LedgerRecord


DOC_TYPE_FIELD = "docType"

RecordType = TypeVar("RecordType", bound=LedgerRecord)


def encode(record: LedgerRecord) -> bytes:
    """
    Serialize a record for storage

    Args:
        record: Entity to serialize

    Returns:
        UTF-8 JSON bytes

    Raises:
        SerializationError: If the record cannot be represented as JSON
    """
    try:
        document = {DOC_TYPE_FIELD: record.DOC_TYPE}
        document.update(record.model_dump(mode="json", by_alias=True))
        return json.dumps(document, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal {type(record).__name__}: {e}") from e


def decode_document(value: bytes) -> dict:
    """Parse a stored value into its JSON object"""
    try:
        document = json.loads(value.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SerializationError(f"failed to unmarshal value: {e}") from e
    if not isinstance(document, dict):
        raise SerializationError("failed to unmarshal value: not a JSON object")
    return document


def decode(record_type: type[RecordType], value: bytes) -> RecordType:
    """
    Deserialize a stored value into a record

    Args:
        record_type: Expected entity class
        value: Stored bytes

    Returns:
        Entity instance

    Raises:
        SerializationError: If the bytes are not a valid record of that type
    """
    document = decode_document(value)

    doc_type = document.pop(DOC_TYPE_FIELD, record_type.DOC_TYPE)
    if doc_type != record_type.DOC_TYPE:
        raise SerializationError(
            f"failed to unmarshal {record_type.__name__}: stored docType is {doc_type!r}"
        )

    try:
        return record_type.model_validate(document)
    except ValidationError as e:
        raise SerializationError(f"failed to unmarshal {record_type.__name__}: {e}") from e
