import time
import uuid

from config import ID_STRATEGIES


def uuid_id() -> str:
    return uuid.uuid4().hex


def timestamp_id() -> str:
    # milliseconds since the epoch; can collide under rapid creation
    return str(int(time.time() * 1000))


def id_factory(strategy: str = "uuid"):
    if strategy not in ID_STRATEGIES:
        raise ValueError(f"unknown id strategy: {strategy!r}")
    return timestamp_id if strategy == "timestamp" else uuid_id


def merge(record: dict, fields: dict) -> dict:
    """Shallow merge: keys in fields overwrite or extend record."""
    return {**record, **fields}


def find_index(records: list, record_id) -> int:
    for i, r in enumerate(records):
        if r.get("id") == record_id:
            return i
    return -1


class CollectionService:
    collection = ""

    def __init__(self, store, new_id=uuid_id, strict=False):
        self.store = store
        self.new_id = new_id
        self.strict = strict

    def _lock(self):
        return self.store.lock(self.collection)

    def _load(self) -> list:
        if self.strict:
            return self.store.read(self.collection)
        return self.store.load(self.collection)

    def _save(self, records: list) -> None:
        if self.strict:
            self.store.write(self.collection, records)
        else:
            self.store.save(self.collection, records)
