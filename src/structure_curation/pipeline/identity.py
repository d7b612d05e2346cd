"""
Record Identity Bookkeeping.

Record ids are positional: the i-th record of a run's input gets id i.
Removal provenance records the index of the first step that excluded a
record. Both live in the identity slots of Record and never touch the
chemistry payload.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from structure_curation.domain.entities import EXTERNAL_ID_PLACEHOLDER, NOT_FILTERED, Record
from structure_curation.domain.exceptions import (
    MalformedIdentityError,
    MissingIdentityError,
    NullInputError,
)

logger = logging.getLogger(__name__)


def _require_records(records: Optional[Iterable[Record]]) -> List[Record]:
    if records is None:
        raise NullInputError("records must not be None", argument="records")
    materialized = list(records)
    for position, record in enumerate(materialized):
        if record is None:
            raise NullInputError(
                f"record at position {position} is None", argument="records"
            )
    return materialized


def assign_ids(records: Optional[Iterable[Record]]) -> List[Record]:
    """
    Assign positional ids to records.

    Earlier ids are overwritten. The records are returned as a list in
    input order.

    Raises:
        NullInputError: If records is None or contains None
    """
    materialized = _require_records(records)
    for index, record in enumerate(materialized):
        record.record_id = index
    logger.debug(f"Assigned ids to {len(materialized)} records")
    return materialized


def _normalize_id(value: Any) -> int:
    if isinstance(value, bool):
        raise MalformedIdentityError(f"record id {value!r} is not an integer", value)
    if isinstance(value, int):
        normalized = value
    elif isinstance(value, float) and value.is_integer():
        normalized = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        normalized = int(value.strip())
    else:
        raise MalformedIdentityError(f"record id {value!r} is not an integer", value)

    if normalized < 0:
        raise MalformedIdentityError(f"record id {value!r} is negative", value)
    return normalized


def read_record_id(record: Optional[Record]) -> int:
    """
    Read the id of a record.

    Raises:
        NullInputError: If record is None
        MissingIdentityError: If no id was ever assigned
        MalformedIdentityError: If the stored id is not a non-negative integer
    """
    if record is None:
        raise NullInputError("record must not be None", argument="record")
    if record.record_id is None:
        raise MissingIdentityError("record has no assigned record id")
    return _normalize_id(record.record_id)


def adopt_existing_ids(records: Optional[Iterable[Record]]) -> List[Record]:
    """
    Validate the ids records already carry and store them normalized.

    Ids must be unique within the collection. Nothing is changed unless
    every id is valid.

    Raises:
        NullInputError: If records is None or contains None
        MissingIdentityError: If a record has no id
        MalformedIdentityError: If an id is malformed or used twice
    """
    materialized = _require_records(records)
    positions: Dict[int, int] = {}
    for position, record in enumerate(materialized):
        record_id = read_record_id(record)
        if record_id in positions:
            raise MalformedIdentityError(
                f"record id {record_id} at position {position} is already used "
                f"at position {positions[record_id]}",
                record.record_id,
            )
        positions[record_id] = position
    for record_id, position in positions.items():
        materialized[position].record_id = record_id
    return materialized


def read_removal_step(record: Optional[Record]) -> Optional[int]:
    """Index of the step that excluded the record, or NOT_FILTERED."""
    if record is None:
        raise NullInputError("record must not be None", argument="record")
    return record.removed_by_step


def mark_removed(record: Record, step_index: int) -> bool:
    """
    Record that a step excluded the record.

    The first exclusion wins.

    Returns:
        True if provenance was recorded, False if the record was already removed
    """
    if record is None:
        raise NullInputError("record must not be None", argument="record")
    if record.removed_by_step is not NOT_FILTERED:
        return False
    record.removed_by_step = step_index
    return True


def reset_removal(records: Iterable[Record]) -> None:
    """Clear removal provenance of all records."""
    for record in records:
        record.removed_by_step = NOT_FILTERED


def propagate_external_ids(records: Iterable[Record], property_name: str) -> None:
    """
    Copy an identifying property into the external id slot.

    Records lacking the property get the "[no external ID]" placeholder.
    """
    for record in records:
        value = record.properties.get(property_name)
        record.external_id = EXTERNAL_ID_PLACEHOLDER if value is None else str(value)
