from typing import Any, Dict, Optional, Tuple


class FieldCache:
    """Cache for rebuilt fields so stepping back to a previous k is free

    Keys combine the point set fingerprint with every parameter that shapes
    the fields: (fingerprint, k, radius, extent).
    """

    def __init__(self, max_entries: int = 256):
        self.max_entries = max_entries
        self.field_cache: Dict[tuple, Any] = {}

        # Performance tracking
        self.cache_hits = 0
        self.cache_misses = 0

    @staticmethod
    def make_key(fingerprint: str, k: int, radius: float, extent) -> tuple:
        extent_key = None if extent is None else tuple(float(v) for v in extent)
        return (fingerprint, int(k), float(radius), extent_key)

    def get_fields(self, key: tuple) -> Optional[Tuple[Any, Any, Any]]:
        """Get cached (grid, decision_field, density_field) or None if not cached

        The fields are fresh copies, so the caller owns what it gets back.
        """
        if key in self.field_cache:
            self.cache_hits += 1
            grid, decision_field, density_field = self.field_cache[key]
            return grid, dict(decision_field), dict(density_field)

        self.cache_misses += 1
        return None

    def cache_fields(self, key: tuple, grid, decision_field, density_field):
        # Oldest entry goes first once full; dicts keep insertion order
        if len(self.field_cache) >= self.max_entries:
            self.field_cache.pop(next(iter(self.field_cache)))
        # Cached fields are never shared with callers
        self.field_cache[key] = (grid, dict(decision_field), dict(density_field))

    def clear_cache(self):
        """Clear all caches"""
        self.field_cache.clear()
        self.cache_hits = 0
        self.cache_misses = 0

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache performance statistics"""
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = self.cache_hits / total_requests if total_requests > 0 else 0

        return {
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': hit_rate,
            'field_cache_size': len(self.field_cache),
        }

# Global cache instance
_field_cache = FieldCache()

def get_field_cache() -> FieldCache:
    """Get the global field cache instance"""
    return _field_cache
