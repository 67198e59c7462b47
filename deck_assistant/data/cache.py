"""On-disk JSON cache for card lookups."""

import hashlib
import json
import logging
from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class CacheManager:
    """
    Caches provider responses as JSON files keyed by namespace and name.

    Card names are case-insensitive, so key parts are lowercased and
    stripped before hashing.
    """

    def __init__(self, cache_dir: str = ".cache", ttl_hours: int = 24):
        """
        Initialize cache manager.

        Args:
            cache_dir: Directory for cache files
            ttl_hours: Entry time-to-live in hours
        """
        self.cache_dir = Path(cache_dir)
        self.ttl = timedelta(hours=ttl_hours)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _normalize(parts: tuple[str, ...]) -> list[str]:
        return [str(p).strip().lower() for p in parts]

    def _path_for(self, namespace: str, *parts: str) -> Path:
        key_string = "_".join([namespace] + self._normalize(parts))
        digest = hashlib.md5(key_string.encode()).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def _is_fresh(self, cache_path: Path) -> bool:
        if not cache_path.exists():
            return False
        mtime = datetime.fromtimestamp(cache_path.stat().st_mtime)
        return datetime.now() - mtime < self.ttl

    def get(self, namespace: str, *parts: str) -> Optional[Any]:
        """
        Retrieve a cached value.

        Args:
            namespace: Kind of data, e.g. "scryfall_card"
            *parts: Key parts such as the card name

        Returns:
            Cached value, or None when missing, expired or unreadable
        """
        cache_path = self._path_for(namespace, *parts)
        if not self._is_fresh(cache_path):
            return None

        try:
            with open(cache_path, "r", encoding="utf-8") as f:
                return json.load(f).get("data")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Discarding unreadable cache entry {cache_path.name}: {e}")
            cache_path.unlink(missing_ok=True)
            return None

    def set(self, data: Any, namespace: str, *parts: str) -> None:
        """
        Store a value.

        Args:
            data: JSON-serializable value
            namespace: Kind of data
            *parts: Key parts such as the card name
        """
        cache_entry = {
            "timestamp": datetime.now().isoformat(),
            "namespace": namespace,
            "key_parts": self._normalize(parts),
            "data": data,
        }
        with open(self._path_for(namespace, *parts), "w", encoding="utf-8") as f:
            json.dump(cache_entry, f, ensure_ascii=False, indent=2)

    def invalidate(self, namespace: str, *parts: str) -> bool:
        """Remove one entry. Returns True if it existed."""
        cache_path = self._path_for(namespace, *parts)
        if cache_path.exists():
            cache_path.unlink()
            return True
        return False

    def clear_all(self) -> int:
        """
        Delete every cache file.

        Returns:
            Number of files deleted
        """
        count = 0
        for cache_file in self.cache_dir.glob("*.json"):
            cache_file.unlink()
            count += 1
        logger.info(f"Cleared {count} cache entries from {self.cache_dir}")
        return count

    def get_stats(self) -> dict:
        """Entry counts (total, fresh, per namespace) and disk usage."""
        cache_files = list(self.cache_dir.glob("*.json"))
        total_size = sum(f.stat().st_size for f in cache_files)
        fresh = sum(1 for f in cache_files if self._is_fresh(f))

        namespaces: Counter = Counter()
        for cache_file in cache_files:
            try:
                with open(cache_file, "r", encoding="utf-8") as f:
                    namespaces[json.load(f).get("namespace", "unknown")] += 1
            except (json.JSONDecodeError, OSError):
                namespaces["unreadable"] += 1

        return {
            "total_entries": len(cache_files),
            "valid_entries": fresh,
            "expired_entries": len(cache_files) - fresh,
            "namespaces": dict(namespaces),
            "total_size_bytes": total_size,
            "total_size_mb": round(total_size / (1024 * 1024), 2),
            "cache_dir": str(self.cache_dir),
        }
