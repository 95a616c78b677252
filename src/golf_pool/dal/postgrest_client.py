"""
REST client for the pool's relational data store.

The store exposes its tables over a PostgREST-style interface under
``/rest/v1``. This client supports the subset of that interface the pool
needs: column projection, equality and existence filters, ordering with an
explicit null position, inserts, upserts keyed on a uniqueness constraint,
updates, and deletes.

Failures are never retried here. A non-2xx answer is raised as
UpstreamServiceError carrying the store's status code and body so callers can
surface it unchanged.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import httpx

from golf_pool.handlers.utils.errors import UpstreamServiceError
from golf_pool.handlers.utils.observability import logger, tracer

SERVICE_NAME = 'data-store'

RETURN_REPRESENTATION = 'return=representation'
MERGE_DUPLICATES = 'resolution=merge-duplicates'


class OrderBy(NamedTuple):
    """Ordering term, rendered as ``column.asc|desc[.nullsfirst|.nullslast]``."""

    column: str
    descending: bool = False
    nulls_last: Optional[bool] = None

    def __str__(self) -> str:
        term = f"{self.column}.{'desc' if self.descending else 'asc'}"
        if self.nulls_last is True:
            term += '.nullslast'
        elif self.nulls_last is False:
            term += '.nullsfirst'
        return term


def eq(value: Any) -> str:
    """Equality filter operand."""
    return f'eq.{value}'


def is_not_null() -> str:
    """Existence filter operand."""
    return 'not.is.null'


class PostgrestClient:
    """Thin synchronous client over the data store's REST interface."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Data store base URL, without the ``/rest/v1`` suffix
            api_key: Key sent both as ``apikey`` and as the bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip('/')
        self.http = httpx.Client(
            base_url=f'{self.base_url}/rest/v1',
            headers={
                'apikey': api_key,
                'Authorization': f'Bearer {api_key}',
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self.http.close()

    @tracer.capture_method
    def select(
        self,
        table: str,
        columns: Sequence[str],
        filters: Optional[Mapping[str, str]] = None,
        order: Sequence[OrderBy] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read rows from a table.

        Args:
            table: Table or view name
            columns: Columns to project
            filters: Column to filter operand, e.g. ``{'id': eq(3)}``
            order: Ordering terms, applied in sequence
            limit: Maximum number of rows

        Returns:
            List of row dictionaries (empty when nothing matches)
        """
        params: List[Tuple[str, str]] = [('select', ','.join(columns))]
        params.extend(self._filter_params(filters))
        if order:
            params.append(('order', ','.join(str(term) for term in order)))
        if limit is not None:
            params.append(('limit', str(limit)))

        return self._rows(self._request('GET', table, params=params))

    @tracer.capture_method
    def insert(
        self,
        table: str,
        row: Dict[str, Any],
        on_conflict: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Insert a row, or upsert it when ``on_conflict`` names the uniqueness constraint.

        Upserts merge into the existing row, updating only the columns present in ``row``.
        """
        params: List[Tuple[str, str]] = []
        prefer = RETURN_REPRESENTATION
        if on_conflict:
            params.append(('on_conflict', ','.join(on_conflict)))
            prefer = f'{MERGE_DUPLICATES},{RETURN_REPRESENTATION}'

        return self._rows(self._request('POST', table, params=params, json_body=row, prefer=prefer))

    @tracer.capture_method
    def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Mapping[str, str],
    ) -> List[Dict[str, Any]]:
        """Update the rows matching ``filters`` and return them."""
        return self._rows(self._request(
            'PATCH',
            table,
            params=list(self._filter_params(filters)),
            json_body=values,
            prefer=RETURN_REPRESENTATION,
        ))

    @tracer.capture_method
    def delete(self, table: str, filters: Mapping[str, str]) -> None:
        """Delete the rows matching ``filters``."""
        if not filters:
            # An unfiltered delete would empty the table
            raise ValueError(f'Refusing to delete from {table} without filters')
        self._request('DELETE', table, params=list(self._filter_params(filters)))

    @staticmethod
    def _filter_params(filters: Optional[Mapping[str, str]]) -> List[Tuple[str, str]]:
        return [(column, operand) for column, operand in (filters or {}).items()]

    @staticmethod
    def _rows(payload: Any) -> List[Dict[str, Any]]:
        if payload is None:
            return []
        if isinstance(payload, dict):
            return [payload]
        if isinstance(payload, list):
            return payload
        raise UpstreamServiceError(SERVICE_NAME, 502, f'Unexpected response payload: {payload!r}')

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = {'Prefer': prefer} if prefer else {}

        try:
            response = self.http.request(method, f'/{table}', params=params, json=json_body, headers=headers)
        except httpx.HTTPError as e:
            logger.error('Data store request failed', extra={
                'method': method,
                'table': table,
                'error': str(e),
            })
            raise UpstreamServiceError(SERVICE_NAME, 502, str(e))

        if response.is_error:
            logger.warning('Data store returned an error', extra={
                'method': method,
                'table': table,
                'status_code': response.status_code,
            })
            raise UpstreamServiceError(SERVICE_NAME, response.status_code, response.text)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            return response.text
