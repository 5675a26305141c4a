"""Exchangeable document-store adapters.

:class:`DatabaseAdapter` is the interface every backend implements for one
*collection* of records. Adapters are created by name through
:func:`init_adapter`, which looks them up in :data:`ADAPTER_REGISTRY`.

Only an in-memory backend ships with the package; it is enough for the demo
and for tests, and a real backend registers itself the same way.

With the ``cache`` feature enabled, reads are kept per adapter and reused
until a write bumps the collection revision.

Conflict handling is explicit on every write:

* ``add_item``: ``error`` (default) | ``ignore`` (overwrite) | ``skip``
* ``update_item``: ``error`` (default) | ``ignore`` (insert) | ``skip``
* ``remove_item``: ``error`` (default) | ``skip``
"""

import copy
import itertools
import logging
import uuid
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
CacheKey = Tuple[Any, ...]


class AdapterError(Exception):
    """Raised when an adapter operation cannot be carried out."""


class Conflict(StrEnum):
    ERROR = "error"
    IGNORE = "ignore"
    SKIP = "skip"


class Feature(StrEnum):
    CACHE = "cache"


class DatabaseAdapter(ABC):
    """One collection inside a document store.

    Attributes:
        collection: Name of the collection this adapter works on.
        features: Feature name -> enabled flag.
    """

    def __init__(self, collection: str) -> None:
        if not isinstance(collection, str) or collection == "":
            raise ValueError(f"Invalid collection name: {collection!r}")
        self._collection = collection
        self.features: Dict[Feature, bool] = {Feature.CACHE: False}

    @property
    def collection(self) -> str:
        return self._collection

    def has_feature(self, feature: Feature | str) -> bool:
        """Return True if this backend can provide ``feature``."""
        feature = Feature(feature)
        if feature == Feature.CACHE:
            return all(
                callable(getattr(self, name, None))
                for name in ("cache_get_revision", "cache_check_revision", "cache_next_revision")
            )
        return False

    def enable_feature(self, feature: Feature | str, conflict: Conflict | str = Conflict.ERROR) -> None:
        """Switch ``feature`` on.

        Raises:
            AdapterError: If unsupported and ``conflict`` is ``error``.
        """
        feature = Feature(feature)
        conflict = Conflict(conflict)
        if conflict == Conflict.IGNORE:
            raise ValueError("enable_feature only accepts 'error' or 'skip'")
        if not self.has_feature(feature):
            if conflict == Conflict.ERROR:
                raise AdapterError(
                    f"{type(self).__name__} doesn't support feature {feature.value!r}"
                )
            return
        self.features[feature] = True

    @abstractmethod
    def connect(self) -> None: ...

    @property
    @abstractmethod
    def is_connected(self) -> bool: ...

    @abstractmethod
    def check_item(self, item_id: str) -> bool: ...

    @abstractmethod
    def count_items(self, filter: Optional[Mapping[str, Any]] = None) -> int: ...

    @abstractmethod
    def find_items(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Record]: ...

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[Record]: ...

    @abstractmethod
    def add_item(
        self, item_id: Optional[str], data: Mapping[str, Any], conflict: Conflict | str = Conflict.ERROR
    ) -> Optional[str]: ...

    @abstractmethod
    def update_item(
        self, item_id: str, data: Mapping[str, Any], conflict: Conflict | str = Conflict.ERROR
    ) -> bool: ...

    @abstractmethod
    def remove_item(self, item_id: str, conflict: Conflict | str = Conflict.ERROR) -> bool: ...


def _matches(record: Mapping[str, Any], filter: Optional[Mapping[str, Any]]) -> bool:
    return all(record.get(key) == value for key, value in (filter or {}).items())


class MemoryAdapter(DatabaseAdapter):
    """Keeps each collection in a process-local dict.

    Collections with the same name share their records across adapters, and
    every write bumps a collection revision so the ``cache`` feature works.
    """

    _collections: Dict[str, Dict[str, Record]] = {}
    _revisions: Dict[str, int] = {}

    def __init__(self, collection: str) -> None:
        super().__init__(collection)
        self._connected = False
        self._cache: Dict[CacheKey, Any] = {}
        self._cache_revision: Optional[int] = None

    @classmethod
    def drop_all(cls) -> None:
        cls._collections.clear()
        cls._revisions.clear()

    @property
    def _records(self) -> Dict[str, Record]:
        self._require_connection()
        return self._collections.setdefault(self.collection, {})

    def _require_connection(self) -> None:
        if not self._connected:
            raise AdapterError(f"Adapter for {self.collection!r} is not connected")

    def connect(self) -> None:
        self._connected = True
        logger.debug("Connected memory adapter to %r", self.collection)

    @property
    def is_connected(self) -> bool:
        return self._connected

    # -------- cache revision hooks --------

    def cache_get_revision(self) -> int:
        return self._revisions.get(self.collection, 0)

    def cache_check_revision(self, revision: int) -> bool:
        return revision == self.cache_get_revision()

    def cache_next_revision(self) -> int:
        revision = self.cache_get_revision() + 1
        self._revisions[self.collection] = revision
        return revision

    def _cached(self, key: CacheKey, load: Callable[[], Any]) -> Any:
        """Serve ``key`` from the read cache while the revision is unchanged."""
        if not self.features[Feature.CACHE]:
            return load()
        self._require_connection()
        revision = self.cache_get_revision()
        if self._cache_revision != revision:
            self._cache.clear()
            self._cache_revision = revision
        if key not in self._cache:
            self._cache[key] = load()
        return copy.deepcopy(self._cache[key])

    # -------- reads --------

    def check_item(self, item_id: str) -> bool:
        return item_id in self._records

    def count_items(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        return sum(1 for record in self._records.values() if _matches(record, filter))

    def find_items(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Record]:
        if offset < 0 or (limit is not None and limit < 0):
            raise ValueError("offset and limit must not be negative")
        key = ("find", repr(sorted((filter or {}).items())), offset, limit)
        return self._cached(key, lambda: self._find(filter, offset, limit))

    def _find(
        self, filter: Optional[Mapping[str, Any]], offset: int, limit: Optional[int]
    ) -> List[Record]:
        found = (
            {"id": item_id, **copy.deepcopy(record)}
            for item_id, record in self._records.items()
            if _matches(record, filter)
        )
        stop = None if limit is None else offset + limit
        return list(itertools.islice(found, offset, stop))

    def get_item(self, item_id: str) -> Optional[Record]:
        return self._cached(("get", item_id), lambda: self._get(item_id))

    def _get(self, item_id: str) -> Optional[Record]:
        record = self._records.get(item_id)
        return None if record is None else copy.deepcopy(record)

    # -------- writes --------

    def add_item(
        self, item_id: Optional[str], data: Mapping[str, Any], conflict: Conflict | str = Conflict.ERROR
    ) -> Optional[str]:
        conflict = Conflict(conflict)
        records = self._records
        if item_id is None:
            item_id = str(uuid.uuid4())
        elif item_id in records:
            if conflict == Conflict.ERROR:
                raise AdapterError(f"Item {item_id!r} already exists in {self.collection!r}")
            if conflict == Conflict.SKIP:
                return None
        records[item_id] = copy.deepcopy(dict(data))
        self.cache_next_revision()
        return item_id

    def update_item(
        self, item_id: str, data: Mapping[str, Any], conflict: Conflict | str = Conflict.ERROR
    ) -> bool:
        conflict = Conflict(conflict)
        records = self._records
        if item_id not in records:
            if conflict == Conflict.ERROR:
                raise AdapterError(f"Item {item_id!r} not found in {self.collection!r}")
            if conflict == Conflict.SKIP:
                return False
        records[item_id] = copy.deepcopy(dict(data))
        self.cache_next_revision()
        return True

    def remove_item(self, item_id: str, conflict: Conflict | str = Conflict.ERROR) -> bool:
        conflict = Conflict(conflict)
        if conflict == Conflict.IGNORE:
            raise ValueError("remove_item only accepts 'error' or 'skip'")
        records = self._records
        if item_id not in records:
            if conflict == Conflict.ERROR:
                raise AdapterError(f"Item {item_id!r} not found in {self.collection!r}")
            return False
        del records[item_id]
        self.cache_next_revision()
        return True


ADAPTER_REGISTRY: Dict[str, Callable[[str], DatabaseAdapter]] = {
    "memory": MemoryAdapter,
    "MemoryAdapter": MemoryAdapter,
}
"""Adapter name -> constructor taking the collection name."""


def init_adapter(name: str, collection: str) -> DatabaseAdapter:
    """Create the adapter registered as ``name`` for ``collection``.

    Raises:
        ValueError: If ``name`` is not registered.
    """
    factory = ADAPTER_REGISTRY.get(name)
    if factory is None:
        raise ValueError(f"Unknown database adapter given ({name}).")
    return factory(collection)
