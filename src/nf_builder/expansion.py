"""First normal form: split a delimited multi-value field into rows.

Expose expand(record, delimiter) returning one OutputRecord per non-empty item.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List

DEFAULT_DELIMITER = ","

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised for an absent field or a delimiter that is not one character."""


@dataclass(frozen=True)
class InputRecord:
    identifier: Any
    label: str
    delimited_field: str


@dataclass(frozen=True)
class OutputRecord:
    identifier: Any
    label: str
    item: str


def _check_delimiter(delimiter: str) -> None:
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise InvalidInputError(
            f"delimiter must be a single character, got {delimiter!r}"
        )


def candidate_count(field: str, delimiter: str = DEFAULT_DELIMITER) -> int:
    """Upper bound on items in field: delimiter count + 1, 0 when empty."""
    _check_delimiter(delimiter)
    if not field:
        return 0
    return field.count(delimiter) + 1


def expand(
    record: InputRecord, delimiter: str = DEFAULT_DELIMITER, strip: bool = False
) -> List[OutputRecord]:
    """Return one OutputRecord per non-empty item of record.delimited_field, in order."""
    _check_delimiter(delimiter)
    field = record.delimited_field
    if not isinstance(field, str):
        raise InvalidInputError(
            f"record {record.identifier!r} has no delimited field"
        )
    out: List[OutputRecord] = []
    for token in field.split(delimiter):
        if strip:
            token = token.strip()
        if token:
            out.append(OutputRecord(record.identifier, record.label, token))
    return out


def expand_records(
    records: Iterable[InputRecord],
    delimiter: str = DEFAULT_DELIMITER,
    strip: bool = False,
) -> List[OutputRecord]:
    out: List[OutputRecord] = []
    n_in = 0
    for rec in records:
        n_in += 1
        out.extend(expand(rec, delimiter, strip))
    logger.debug("Expanded %d records into %d items", n_in, len(out))
    return out


def reconstruct_field(items: Iterable[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    _check_delimiter(delimiter)
    return delimiter.join(items)
