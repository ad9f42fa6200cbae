"""HTTP client for the Solr search backend."""

from collections.abc import Sequence
from typing import Any

import httpx
import structlog

from wavesearch.search.errors import SearchBackendError
from wavesearch.search.query import COMPLETENESS_QUERY
from wavesearch.search.schemas import IndexRecord

logger = structlog.get_logger()


class SolrClient:
    """Sends index mutations and paginated selects to Solr.

    No request is retried here; callers decide what to do with a
    SearchBackendError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Solr core URL, e.g. "http://localhost:8983/solr".
            timeout: Per-request timeout in seconds.
            transport: Optional transport override (tests).
        """
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    def _request(
        self,
        method: str,
        path: str,
        entity: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise SearchBackendError(
                f"{method} {path} failed: {e}", entity=entity
            ) from e
        if response.status_code != httpx.codes.OK:
            raise SearchBackendError(
                f"{method} {path} returned {response.status_code}",
                entity=entity,
                status_code=response.status_code,
            )
        return response

    def update(self, records: Sequence[IndexRecord], entity: str) -> None:
        """Upsert a batch of records with a synchronous commit.

        Args:
            records: Records to add or replace.
            entity: Wave or wavelet the batch belongs to, for error reports.

        Raises:
            SearchBackendError: If the backend does not answer OK.
        """
        self._request(
            "POST",
            "/update/json",
            entity=entity,
            params={"commit": "true"},
            json=[record.to_solr_document() for record in records],
        )
        logger.debug("solr_update_ok", entity=entity, documents=len(records))

    def delete_all(self, query: str = COMPLETENESS_QUERY) -> None:
        """Delete every document matching the query.

        Raises:
            SearchBackendError: If the backend does not answer OK.
        """
        self._request(
            "POST",
            "/update",
            params={"wt": "json"},
            json={"delete": {"query": query}},
        )

    def commit(self) -> None:
        """Commit pending index changes.

        Raises:
            SearchBackendError: If the backend does not answer OK.
        """
        self._request("POST", "/update", params={"wt": "json"}, json={"commit": {}})

    def select(self, start: int, rows: int, fq: str, q: str = COMPLETENESS_QUERY) -> list[dict[str, Any]]:
        """Fetch one page of matching documents.

        Args:
            start: Offset of the first document.
            rows: Page size.
            fq: Filter query.
            q: Base query.

        Returns:
            Documents of the page; empty when the results are exhausted.

        Raises:
            SearchBackendError: On transport errors, non-OK status or a
                body that is not a JSON select response.
        """
        response = self._request(
            "GET",
            "/select",
            params={"wt": "json", "start": start, "rows": rows, "q": q, "fq": fq},
        )
        try:
            body = response.json()
        except ValueError as e:
            raise SearchBackendError(f"malformed select response: {e}") from e
        if not isinstance(body, dict):
            raise SearchBackendError("malformed select response: body is not an object")
        payload = body.get("response") or {}
        if not isinstance(payload, dict):
            raise SearchBackendError("malformed select response: response is not an object")
        docs = payload.get("docs") or []
        if not isinstance(docs, list) or not all(isinstance(d, dict) for d in docs):
            raise SearchBackendError("malformed select response: docs is not a list of objects")
        return docs

    def ping(self) -> bool:
        """Whether the backend answers its ping handler."""
        try:
            self._request("GET", "/admin/ping", params={"wt": "json"})
        except SearchBackendError:
            return False
        return True

    def close(self) -> None:
        self._http.close()
