import json
from pathlib import Path
from typing import Any, Dict, Iterable

COLLECTIONS = ("candidates", "companies", "jobs")
TIMESTAMP_FIELDS = ("createdAt", "updatedAt")


def empty_store() -> Dict[str, Any]:
    return {name: {} for name in COLLECTIONS}


def load_store(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return empty_store()
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
            if not content:
                return empty_store()
            store = json.loads(content)
    except (json.JSONDecodeError, IOError):
        return empty_store()
    if not isinstance(store, dict):
        return empty_store()
    for name in COLLECTIONS:
        if not isinstance(store.get(name), dict):
            store[name] = {}
    return store


def save_store(path: Path, store: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(store, f, indent=2, ensure_ascii=False)


def diff_dict(
    old: Dict[str, Any],
    new: Dict[str, Any],
    ignore: Iterable[str] = (),
) -> Dict[str, Dict[str, Any]]:
    """Map each differing key (outside ``ignore``) to its old and new value."""
    skipped = set(ignore)
    return {
        k: {"old": old.get(k), "new": new.get(k)}
        for k in set(old) | set(new)
        if k not in skipped and old.get(k) != new.get(k)
    }


def upsert_record(store: Dict[str, Any], collection: str, key: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """Insert or replace ``record`` under ``key``; timestamps are ignored when comparing."""
    records = store.setdefault(collection, {})
    existing = records.get(key)
    if existing is None:
        records[key] = record
        return {"status": "new"}
    changes = diff_dict(existing, record, ignore=TIMESTAMP_FIELDS)
    if not changes:
        return {"status": "no-change"}
    records[key] = {**record, "createdAt": existing.get("createdAt") or record.get("createdAt")}
    return {"status": "updated", "changed": sorted(changes)}
