"""QueryResultError: the rejection raised when a result breaks its cardinality contract.

The error is a plain value: it is built by whoever ran the query and
checked the row count, carries the execution context verbatim, and renders
itself as a multi-line block so logs and consoles show everything at once::

    QueryResultError {
        code: queryResultErrorCode.noData
        message: "No data returned from the query."
        received: 0
        query: "SELECT * FROM users WHERE id = 1"
    }

The ``values:`` line appears only when bind values were passed separately
from the query text.
"""

from __future__ import annotations

import enum
import json
import math
import os
import traceback
from collections.abc import Mapping, Sequence
from typing import Protocol

from rowguard.errors.codes import QueryResultErrorCode, lookup, to_code


class _Absent(enum.Enum):
    ABSENT = "ABSENT"

    def __repr__(self) -> str:
        return "ABSENT"


# Marks "no bind values were given". None is a value (JSON null), not absence.
ABSENT = _Absent.ABSENT


def is_absent(value: object) -> bool:
    return value is ABSENT


class RowResult(Protocol):
    @property
    def rows(self) -> Sequence[object]: ...


_JSON_KEY_TYPES = (str, int, float, bool, type(None))


def to_jsonable(value: object) -> object:
    """Coerce ``value`` into something ``json.dumps`` accepts as-is.

    Mapping keys json can't encode become ``str(key)``, tuples and lists
    become lists, and non-finite floats become None (JSON.stringify turns
    NaN and Infinity into null). Other leaves are left for ``default=str``.
    """
    if isinstance(value, Mapping):
        return {
            (k if isinstance(k, _JSON_KEY_TYPES) else str(k)): to_jsonable(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _to_json(value: object) -> str:
    return json.dumps(
        to_jsonable(value),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=str,
    )


class QueryResultError(Exception):
    """A query returned a row count its caller did not accept.

    Attributes are read-only and fixed at construction:

    - ``code``: a :class:`QueryResultErrorCode`
    - ``message``: the canonical message for ``code``
    - ``result``: the result object the rows came from (held by reference)
    - ``received``: ``len(result.rows)`` at construction time
    - ``query``: the executed query text, before driver-side substitution
      when values were bound separately
    - ``values``: the bound values, or ``ABSENT``
    - ``stack``: the stack captured where the error was built

    Raises ValueError if ``code`` is not a registry code.
    """

    name = "QueryResultError"

    def __init__(
        self,
        code: QueryResultErrorCode | int,
        result: RowResult,
        query: object,
        values: object = ABSENT,
    ) -> None:
        entry = lookup(code)
        super().__init__(entry.message)
        self._code = to_code(code)
        self._code_name = entry.name
        self._message = entry.message
        self._result = result
        self._received = len(result.rows)
        self._query = query
        self._values = values
        # Drop this frame so the stack ends where the error was built.
        self._stack = traceback.StackSummary.from_list(traceback.extract_stack()[:-1])

    @property
    def code(self) -> QueryResultErrorCode:
        return self._code

    @property
    def code_name(self) -> str:
        return self._code_name

    @property
    def message(self) -> str:
        return self._message

    @property
    def result(self) -> RowResult:
        return self._result

    @property
    def received(self) -> int:
        return self._received

    @property
    def query(self) -> object:
        return self._query

    @property
    def values(self) -> object:
        return self._values

    @property
    def has_values(self) -> bool:
        return self._values is not ABSENT

    @property
    def stack(self) -> traceback.StackSummary:
        return self._stack

    def to_string(self) -> str:
        """Render the error as a deterministic multi-line block.

        Lines are joined with the platform line separator.
        """
        query = self._query
        rendered_query = f'"{query}"' if isinstance(query, str) else _to_json(query)
        lines = [
            f"{self.name} {{",
            f"    code: queryResultErrorCode.{self._code_name}",
            f'    message: "{self._message}"',
            f"    received: {self._received}",
            f"    query: {rendered_query}",
        ]
        if self.has_values:
            lines.append(f"    values: {_to_json(self._values)}")
        lines.append("}")
        return os.linesep.join(lines)

    def inspect(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self.to_string()

    def __reduce__(self):
        return (type(self), (self._code, self._result, self._query, self._values))
