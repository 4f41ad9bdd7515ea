"""Persistent list adapter: a JSON array under one storage key."""
import json
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

from storefront.events import ChangeBroadcaster
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.storage import KeyValueStorage

logger = get_logger(__name__)


class Record(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


R = TypeVar("R", bound=Record)


class JsonListStore(Generic[R]):
    """
    Reads and writes a list of records serialized as JSON.

    `read()` never raises: a missing key or malformed JSON yields an empty
    list, and individual malformed records are dropped. `write()` stores the
    list and then publishes it on the broadcaster; a storage failure is logged
    and the event still goes out, so observers reflect the attempted state.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        parse: Callable[[dict[str, Any]], R],
        broadcaster: Optional[ChangeBroadcaster] = None,
    ):
        self.storage = storage
        self.key = key
        self.parse = parse
        self.broadcaster = broadcaster or ChangeBroadcaster(key)

    def read(self) -> list[R]:
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.warning("Failed to read %s: %s", self.key, type(e).__name__)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.warning("Corrupted data under %s; treating as empty", self.key)
            return []

        if not isinstance(data, list):
            logger.warning("Unexpected %s payload under %s; treating as empty", type(data).__name__, self.key)
            return []

        records: list[R] = []
        for entry in data:
            if not isinstance(entry, dict):
                continue
            try:
                records.append(self.parse(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "Dropping malformed record under %s: %s",
                    self.key,
                    sanitize_string_for_logging(str(e)),
                )
        return records

    def write(self, records: list[R]) -> list[R]:
        records = list(records)
        try:
            self.storage.set(self.key, json.dumps([r.to_dict() for r in records]))
        except Exception:
            logger.error("Failed to save %s", self.key, exc_info=True)
        self.broadcaster.publish(records)
        return records

    def rekey(self, key: str) -> None:
        """Point the adapter at another storage key (identity switch)."""
        self.key = key
