"""
Generic CRUD access to a single Supabase table.

A ResourceDefinition is plain configuration (table, ordering, filterable
columns, creator stamping, error messages). Binding it to a client gives a
Resource whose operations never raise: each one returns a ResourceResult
carrying either data or a human-readable error message.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from fastapi import HTTPException
from postgrest.exceptions import APIError
from supabase import Client

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_AUTHENTICATED_MESSAGE = "Użytkownik niezalogowany"
NOT_FOUND_MESSAGE = "Nie znaleziono rekordu"

DEFAULT_ERROR_MESSAGES = {
    "fetch": "Błąd pobierania danych",
    "insert": "Błąd dodawania rekordu",
    "update": "Błąd aktualizacji rekordu",
    "delete": "Błąd usuwania rekordu",
}


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Filter value meaning "leave this column out of the query"
UNSET = _Unset()


@dataclass
class ResourceResult(Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self, status_code: int = 500) -> Optional[T]:
        """Return data or raise HTTPException (404 for missing rows, status_code otherwise)."""
        if self.not_found:
            raise HTTPException(status_code=404, detail=self.error or NOT_FOUND_MESSAGE)
        if self.error is not None:
            raise HTTPException(status_code=status_code, detail=self.error)
        return self.data


@dataclass(frozen=True)
class OrderBy:
    column: str
    ascending: bool = True
    nulls_first: Optional[bool] = None


QueryModifier = Callable[[Any, Dict[str, Any]], Any]


@dataclass(frozen=True)
class ResourceDefinition:
    table: str
    channel: str
    select: str = "*"
    order_by: Optional[OrderBy] = None
    filter_columns: Tuple[str, ...] = ()
    default_filters: Dict[str, Any] = field(default_factory=dict)
    primary_key: str = "id"
    auto_created_by: bool = False
    error_messages: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ERROR_MESSAGES))
    query_modifier: Optional[QueryModifier] = None

    def bind(self, client: Client) -> "Resource":
        return Resource(self, client)

    def message(self, operation: str) -> str:
        return self.error_messages.get(operation) or DEFAULT_ERROR_MESSAGES[operation]

    def active_filters(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge default and caller filters, keeping only configured columns and dropping UNSET values."""
        merged = {**self.default_filters, **(filters or {})}
        active = {}
        for column, value in merged.items():
            if value is UNSET:
                continue
            if self.filter_columns and column not in self.filter_columns and column not in self.default_filters:
                logger.warning(f"Ignoring filter on non-filterable column {self.table}.{column}")
                continue
            active[column] = value
        return active


def define_resource(
    table: str,
    *,
    channel: Optional[str] = None,
    select: str = "*",
    order_by: Optional[OrderBy] = None,
    filter_columns: Tuple[str, ...] = (),
    default_filters: Optional[Dict[str, Any]] = None,
    primary_key: str = "id",
    auto_created_by: bool = False,
    error_messages: Optional[Dict[str, str]] = None,
    query_modifier: Optional[QueryModifier] = None,
) -> ResourceDefinition:
    return ResourceDefinition(
        table=table,
        channel=channel or f"{table}_changes",
        select=select,
        order_by=order_by,
        filter_columns=tuple(filter_columns),
        default_filters=dict(default_filters or {}),
        primary_key=primary_key,
        auto_created_by=auto_created_by,
        error_messages={**DEFAULT_ERROR_MESSAGES, **(error_messages or {})},
        query_modifier=query_modifier,
    )


class Resource:
    def __init__(self, definition: ResourceDefinition, supabase: Client):
        self.definition = definition
        self.supabase = supabase

    def _failure(self, operation: str, exc: Exception) -> str:
        if isinstance(exc, APIError) and exc.message:
            logger.warning(f"{self.definition.table} {operation} failed: {exc.message}")
            return exc.message
        logger.exception(f"Unexpected error during {self.definition.table} {operation}")
        return self.definition.message(operation)

    def _apply_filters(self, query, filters: Dict[str, Any]):
        for column, value in filters.items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, value)
        return query

    def list(self, filters: Optional[Dict[str, Any]] = None) -> ResourceResult[List[Dict[str, Any]]]:
        """Fetch all rows matching the filters, in the configured order"""
        definition = self.definition
        try:
            active = definition.active_filters(filters)
            query = self.supabase.table(definition.table).select(definition.select)
            query = self._apply_filters(query, active)
            if definition.order_by:
                order_kwargs = {"desc": not definition.order_by.ascending}
                if definition.order_by.nulls_first is not None:
                    order_kwargs["nullsfirst"] = definition.order_by.nulls_first
                query = query.order(definition.order_by.column, **order_kwargs)
            if definition.query_modifier:
                query = definition.query_modifier(query, active)
            result = query.execute()
            return ResourceResult(data=list(result.data or []))
        except Exception as e:
            return ResourceResult(data=None, error=self._failure("fetch", e))

    def get(self, record_id: Any) -> ResourceResult[Dict[str, Any]]:
        """Fetch a single row by primary key. A missing row is data=None, not an error."""
        if record_id is None:
            return ResourceResult(data=None)
        definition = self.definition
        try:
            result = self.supabase.table(definition.table)\
                .select(definition.select)\
                .eq(definition.primary_key, record_id)\
                .maybe_single()\
                .execute()
            return ResourceResult(data=result.data if result else None)
        except Exception as e:
            return ResourceResult(data=None, error=self._failure("fetch", e))

    def insert(self, values: Dict[str, Any], acting_user_id: Optional[str]) -> ResourceResult[Dict[str, Any]]:
        """Insert a row on behalf of acting_user_id (stamped as created_by when configured)"""
        if not acting_user_id:
            return ResourceResult(data=None, error=NOT_AUTHENTICATED_MESSAGE)
        definition = self.definition
        payload = dict(values)
        if definition.auto_created_by:
            payload["created_by"] = acting_user_id
        try:
            result = self.supabase.table(definition.table).insert(payload).execute()
            if not result.data:
                return ResourceResult(data=None, error=definition.message("insert"))
            return ResourceResult(data=result.data[0])
        except Exception as e:
            return ResourceResult(data=None, error=self._failure("insert", e))

    def update(self, record_id: Any, values: Dict[str, Any]) -> ResourceResult[Dict[str, Any]]:
        """Partial update by primary key"""
        definition = self.definition
        try:
            result = self.supabase.table(definition.table)\
                .update(values)\
                .eq(definition.primary_key, record_id)\
                .execute()
            if not result.data:
                return ResourceResult(data=None, error=NOT_FOUND_MESSAGE, not_found=True)
            return ResourceResult(data=result.data[0])
        except Exception as e:
            return ResourceResult(data=None, error=self._failure("update", e))

    def remove(self, record_id: Any) -> ResourceResult[None]:
        """Hard delete by primary key. Deleting a missing row succeeds."""
        definition = self.definition
        try:
            self.supabase.table(definition.table)\
                .delete()\
                .eq(definition.primary_key, record_id)\
                .execute()
            return ResourceResult()
        except Exception as e:
            return ResourceResult(error=self._failure("delete", e))
