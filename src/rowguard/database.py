"""Query methods that enforce a result cardinality on every call.

    async with Database.connect(config) as db:
        user = await db.one("SELECT * FROM users WHERE id = ?", [1])
        await db.none("DELETE FROM sessions WHERE user_id = ?", [1])

Every failure, whether from the driver or from the cardinality check, is
reported to the ``on_error`` hook and the query log before it propagates.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass

from rowguard.adapters._base import (
    AdapterError,
    ConnectionConfig,
    DatabaseAdapter,
    Params,
)
from rowguard.adapters._registry import get_adapter
from rowguard.errors.query_result import ABSENT, QueryResultError
from rowguard.querylog import log_error, log_query
from rowguard.results import ResultMask, check_result, validate_mask


@dataclass
class ErrorContext:
    sql: str
    params: Params | None
    db: str | None


ErrorHook = Callable[[Exception, ErrorContext], None]


class Database:
    def __init__(
        self,
        adapter: DatabaseAdapter,
        *,
        name: str | None = None,
        on_error: ErrorHook | None = None,
        log_queries: bool = True,
    ) -> None:
        self._adapter = adapter
        self._name = name
        self._on_error = on_error
        self._log_queries = log_queries

    @classmethod
    @contextlib.asynccontextmanager
    async def connect(
        cls,
        config: ConnectionConfig,
        *,
        on_error: ErrorHook | None = None,
        log_queries: bool = True,
    ) -> AsyncIterator[Database]:
        adapter = get_adapter(config.db_type)()
        await adapter.connect(config)
        try:
            yield cls(adapter, name=config.name, on_error=on_error, log_queries=log_queries)
        finally:
            await adapter.close()

    @property
    def adapter(self) -> DatabaseAdapter:
        return self._adapter

    async def query(
        self,
        sql: str,
        params: Params | None = None,
        mask: ResultMask | int = ResultMask.ANY,
    ) -> object:
        """Execute ``sql`` and shape the result according to ``mask``.

        When ``params`` is None the driver receives the SQL as-is and any
        QueryResultError carries no values; otherwise the params are bound
        by the driver and reported as the error's values.
        """
        flags = validate_mask(mask)
        try:
            result = await self._adapter.execute(sql, params)
            data = check_result(
                result, flags, sql, ABSENT if params is None else params,
            )
        except (AdapterError, QueryResultError) as e:
            self._notify(e, sql, params, flags)
            raise

        if self._log_queries:
            log_query(
                sql=sql,
                db=self._name,
                expect=mask_label(flags),
                params=params,
                row_count=result.row_count,
                duration_ms=result.duration_ms,
            )
        return data

    async def none(self, sql: str, params: Params | None = None) -> None:
        await self.query(sql, params, ResultMask.NONE)

    async def one(self, sql: str, params: Params | None = None) -> dict[str, object]:
        return await self.query(sql, params, ResultMask.ONE)

    async def one_or_none(
        self, sql: str, params: Params | None = None
    ) -> dict[str, object] | None:
        return await self.query(sql, params, ResultMask.ONE | ResultMask.NONE)

    async def many(self, sql: str, params: Params | None = None) -> list[dict[str, object]]:
        return await self.query(sql, params, ResultMask.MANY)

    async def many_or_none(
        self, sql: str, params: Params | None = None
    ) -> list[dict[str, object]]:
        return await self.query(sql, params, ResultMask.ANY)

    async def any(self, sql: str, params: Params | None = None) -> list[dict[str, object]]:
        return await self.many_or_none(sql, params)

    def _notify(
        self, err: Exception, sql: str, params: Params | None, flags: ResultMask
    ) -> None:
        if self._log_queries:
            log_error(err, sql=sql, db=self._name, expect=mask_label(flags))
        if self._on_error is not None:
            self._on_error(err, ErrorContext(sql=sql, params=params, db=self._name))


_MASK_LABELS = {
    ResultMask.NONE: "none",
    ResultMask.ONE: "one",
    ResultMask.ONE | ResultMask.NONE: "one-or-none",
    ResultMask.MANY: "many",
    ResultMask.ANY: "many-or-none",
}


def mask_label(flags: ResultMask) -> str:
    return _MASK_LABELS[flags]


def mask_from_label(label: str) -> ResultMask:
    """Parse a CLI-style expectation (``one-or-none``, ``any``, ...)."""
    if label == "any":
        return ResultMask.ANY
    for flags, name in _MASK_LABELS.items():
        if name == label:
            return flags
    raise ValueError(f"unknown expectation: {label!r}")
