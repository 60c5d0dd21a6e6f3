import logging
from typing import Any, Iterable, Mapping, Optional

import requests

from ..config import FirestoreConfig
from ..draw.window import DrawWindow
from ..models import PaymentRecord, UserRecord
from .utils import confirmed_payment_filters, decode_document, open_session

logger = logging.getLogger(__name__)


class FirestoreClient:
    def __init__(
        self,
        token: Optional[str],
        config: Optional[FirestoreConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        if not token:
            raise ValueError("A Firebase ID token is required to query Firestore")

        self.config = config or FirestoreConfig.from_env()
        self.base_url = self.config.base_url.rstrip("/")
        self.session = session or open_session()
        self.timeout = self.config.timeout
        self._token = token

    # -------- headers --------
    @property
    def auth_headers(self) -> Mapping[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }

    # -------- core request --------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        # ":runQuery" is appended to the documents root rather than joined
        # as a path segment.
        if path.startswith(":"):
            url = self.base_url + path
        else:
            url = f"{self.base_url}/{path.lstrip('/')}"
        r = self.session.request(
            method=method.upper(),
            url=url,
            headers=self.auth_headers,
            params=params,
            json=json,
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json() if r.content else None

    # -------- API callers --------
    def run_query(
        self,
        collection: str,
        filters: Optional[Iterable[dict]] = None,
        order_by: Optional[str] = "dateSubmitted",
    ) -> list[dict]:
        """
        Run a structured query against ``collection`` and return decoded documents.

        Filters are combined with AND. A response that is not a list is logged
        and treated as an empty result.
        """
        structured_query: dict[str, Any] = {"from": [{"collectionId": collection}]}
        filters = list(filters or [])
        if filters:
            structured_query["where"] = {
                "compositeFilter": {"op": "AND", "filters": filters}
            }
        if order_by:
            structured_query["orderBy"] = [
                {"field": {"fieldPath": order_by}, "direction": "ASCENDING"}
            ]

        data = self._request(
            "POST", ":runQuery", json={"structuredQuery": structured_query}
        )
        if not isinstance(data, list):
            logger.error(f"Unexpected Firestore structured query response: {data!r}")
            return []

        return [decode_document(row["document"]) for row in data if row.get("document")]

    def list_documents(self, collection: str) -> list[dict]:
        """
        Fetch every document in ``collection``, following ``nextPageToken``.

        If a page fails, the error is logged and the documents gathered so
        far are returned.
        """
        documents: list[dict] = []
        params: dict[str, Any] = {"pageSize": self.config.page_size}
        while True:
            try:
                data = self._request("GET", collection, params=params)
            except requests.HTTPError as exc:
                logger.error(f"Failed to fetch {collection}: {exc}")
                break

            data = data or {}
            documents.extend(decode_document(doc) for doc in data.get("documents") or [])

            next_token = data.get("nextPageToken")
            if not next_token:
                break
            params = {**params, "pageToken": next_token}

        return documents

    def fetch_confirmed_payments(self, window: DrawWindow) -> list[PaymentRecord]:
        docs = self.run_query(
            self.config.payments_collection, confirmed_payment_filters(window)
        )
        return [PaymentRecord.from_document(doc) for doc in docs]

    def fetch_users(self) -> list[UserRecord]:
        docs = self.list_documents(self.config.users_collection)
        logger.info(f"Fetched {len(docs)} users total")
        return [UserRecord.from_document(doc) for doc in docs]
