"""Result masks and the cardinality check every query method goes through.

A mask says which row counts a caller accepts:

- ``ONE``: exactly one row; the row itself is returned
- ``MANY``: one or more rows; the list is returned
- ``NONE``: no rows; ``None`` is returned

Masks combine: ``ONE | NONE`` accepts zero or one row, ``MANY | NONE``
(``ANY``) accepts any count. ``ONE | MANY`` is contradictory and rejected.
"""

from __future__ import annotations

import enum

from rowguard.errors.codes import QueryResultErrorCode
from rowguard.errors.query_result import ABSENT, QueryResultError, RowResult


class ResultMask(enum.IntFlag):
    ONE = 1
    MANY = 2
    NONE = 4
    ANY = MANY | NONE


def validate_mask(mask: ResultMask | int) -> ResultMask:
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise ValueError(f"invalid result mask: {mask!r}")
    value = int(mask)
    if value <= 0 or value & ~int(ResultMask.ONE | ResultMask.MANY | ResultMask.NONE):
        raise ValueError(f"invalid result mask: {value}")
    flags = ResultMask(value)
    if ResultMask.ONE in flags and ResultMask.MANY in flags:
        raise ValueError(f"invalid result mask: {value} (ONE and MANY are exclusive)")
    return flags


def check_result(
    result: RowResult,
    mask: ResultMask | int,
    query: object,
    values: object = ABSENT,
) -> object:
    """Shape ``result`` according to ``mask`` or raise QueryResultError.

    Returns the single row for ONE masks, the row list for MANY masks, and
    for an empty result either ``[]`` (MANY | NONE) or ``None`` (NONE alone,
    ONE | NONE).
    """
    flags = validate_mask(mask)
    rows = result.rows
    n = len(rows)

    if n == 0:
        if ResultMask.NONE in flags:
            return [] if ResultMask.MANY in flags else None
        raise QueryResultError(QueryResultErrorCode.NO_DATA, result, query, values)

    if n > 1 and ResultMask.ONE in flags:
        raise QueryResultError(QueryResultErrorCode.MULTIPLE, result, query, values)

    if not flags & (ResultMask.ONE | ResultMask.MANY):
        raise QueryResultError(QueryResultErrorCode.NOT_EMPTY, result, query, values)

    return rows[0] if ResultMask.ONE in flags else rows
