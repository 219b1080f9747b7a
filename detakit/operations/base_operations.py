"""
DetaKit - Base Operations Module

Implements the Deta Base service: put, get, delete, insert, update and fetch.

Author: DetaKit Project
"""

import logging
from typing import Optional, List, Dict, Any
from urllib.parse import quote

from ..api import DetaClient
from ..exceptions import ErrorKind, DetaValidationError, DetaPutError
from ..models import (
    normalize_item,
    decode_item,
    is_record_type,
    compile_query,
    compile_updates,
    FetchOutput
)

# Configure logging
logger = logging.getLogger(__name__)


MAX_PUT_ITEMS = 25


class Base:
    """
    Client for one Deta Base.

    Responsibilities:
    - Normalize records into items before writing them
    - Compile updates and queries into wire documents
    - Decode stored items into dicts or caller-chosen record classes
    - Surface the paging cursor of fetch results
    """

    def __init__(self, client: DetaClient, name: str):
        """
        Initialize Base handle.

        Args:
            client: DetaClient bound to "{endpoint}/{project_id}/{base_name}"
            name: Base name
        """
        self.client = client
        self.name = name

    def put(self, item: Any) -> str:
        """
        Store an item, replacing any item with the same key.

        Args:
            item: Mapping or record; a missing "key" is assigned by the server

        Returns:
            Key of the stored item

        Raises:
            DetaPutError: BAD_ITEM if the service did not store the item
        """
        return self.put_many([item])[0]

    def put_many(self, items: List[Any]) -> List[str]:
        """
        Store up to 25 items in one request.

        Args:
            items: List of mappings or records

        Returns:
            Keys of the stored items, in request order

        Raises:
            DetaValidationError: BAD_ITEM if items is empty or holds a bad item,
                                 TOO_MANY_ITEMS for more than 25 items
            DetaPutError: BAD_ITEM if the service reports failed items; carries
                          the stored keys and the failed items
        """
        if not isinstance(items, (list, tuple)) or not items:
            raise DetaValidationError(ErrorKind.BAD_ITEM, "items must be a non-empty list")
        if len(items) > MAX_PUT_ITEMS:
            raise DetaValidationError(
                ErrorKind.TOO_MANY_ITEMS,
                f"at most {MAX_PUT_ITEMS} items per request, got {len(items)}"
            )

        payload = {"items": [normalize_item(item) for item in items]}
        output = self.client.request("PUT", "/items", json_body=payload)
        body = output.json() or {}
        processed = (body.get("processed") or {}).get("items") or []
        failed = (body.get("failed") or {}).get("items") or []
        keys = [stored["key"] for stored in processed]

        if failed or len(keys) != len(items):
            logger.warning(f"Base {self.name} stored {len(keys)} of {len(items)} item(s)")
            raise DetaPutError(output.status, keys, failed)

        logger.debug(f"Put {len(keys)} item(s) into base {self.name}")
        return keys

    def get(self, key: str, model: Optional[type] = None) -> Any:
        """
        Retrieve an item by key.

        Args:
            key: Item key
            model: Optional dataclass or pydantic model to decode into

        Returns:
            The item dict, or a model instance when model is given

        Raises:
            DetaAPIError: NOT_FOUND if no item has this key
        """
        self._check_key(key)
        if model is not None and not is_record_type(model):
            raise DetaValidationError(ErrorKind.BAD_DESTINATION, f"cannot decode into {model!r}")
        output = self.client.request("GET", f"/items/{quote(key, safe='')}")
        return decode_item(output.json(), model)

    def delete(self, key: str):
        """
        Delete an item by key.

        Deleting a key that does not exist is not an error.
        """
        self._check_key(key)
        self.client.request("DELETE", f"/items/{quote(key, safe='')}")
        logger.debug(f"Deleted key {key} from base {self.name}")

    def insert(self, item: Any) -> str:
        """
        Store an item only if its key is not taken yet.

        Args:
            item: Mapping or record

        Returns:
            Key of the inserted item

        Raises:
            DetaAPIError: CONFLICT if an item with the same key exists
        """
        normalized = normalize_item(item)
        key = normalized.get("key")
        path = f"/items/{quote(str(key), safe='')}" if key else "/items"
        output = self.client.request("POST", path, json_body={"item": normalized})
        return output.json()["key"]

    def update(self, key: str, updates: Dict[str, Any]):
        """
        Apply a partial update to an item.

        Args:
            key: Item key
            updates: Mapping of dotted field path to a literal or utility marker
                     (Increment, AppendOne, AppendMany, PrependOne, PrependMany, Trim)

        Raises:
            DetaAPIError: NOT_FOUND if no item has this key
        """
        self._check_key(key)
        document = compile_updates(updates)
        self.client.request("PATCH", f"/items/{quote(key, safe='')}", json_body=document)

    def fetch(self, query: Any = None, limit: int = 0, last: Optional[str] = None,
              model: Optional[type] = None, dest: Optional[list] = None) -> FetchOutput:
        """
        Fetch one page of items matching a query.

        Pass `result.last` as `last` to get the next page; a None cursor
        means no further pages exist.

        Args:
            query: None, a mapping group, or a list of groups
            limit: Maximum number of items in the page (0 for the server default)
            last: Cursor returned by the previous page
            model: Optional dataclass or pydantic model the items in dest are decoded into
            dest: Optional list, cleared and filled with the decoded items

        Returns:
            FetchOutput with the raw items and paging metadata

        Raises:
            DetaValidationError: BAD_QUERY for malformed queries,
                                 BAD_DESTINATION for an unusable dest or model
        """
        if dest is not None and not isinstance(dest, list):
            raise DetaValidationError(
                ErrorKind.BAD_DESTINATION,
                f"dest must be a list, got {type(dest).__name__}"
            )
        if model is not None and not is_record_type(model):
            raise DetaValidationError(ErrorKind.BAD_DESTINATION, f"cannot decode into {model!r}")

        payload: Dict[str, Any] = {"query": compile_query(query)}
        if limit > 0:
            payload["limit"] = limit
        if last:
            payload["last"] = last

        output = self.client.request("POST", "/query", json_body=payload)
        result = FetchOutput.model_validate(output.json())
        logger.debug(f"Fetched {len(result.items)} item(s) from base {self.name}, last={result.last}")

        if dest is not None:
            dest.clear()
            dest.extend(decode_item(item, model) for item in result.items)
        return result

    def _check_key(self, key: str):
        if not isinstance(key, str) or not key:
            raise DetaValidationError(ErrorKind.EMPTY_KEY, "key must be a non-empty string")
