from typing import Generic, Hashable, Iterator, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


class MultiIndex(Generic[K, V]):
    """
    Maps a key to a set of values. Values are unique per key, a running count of all stored values is maintained.

    Each key's values are kept in an insertion-ordered dict used as a set, so iteration within a key is reproducible.
    With ordered=True the keys themselves are enumerated in sorted order.
    """

    def __init__(self, ordered: bool = False):
        self._map: dict[K, dict[V, None]] = {}
        self._ordered: bool = ordered
        self._size: int = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: K) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    @property
    def size(self) -> int:
        return self._size

    @property
    def ordered(self) -> bool:
        return self._ordered

    def contains_key(self, key: K) -> bool:
        return key in self._map

    def add(self, key: K, value: V | None) -> bool:
        """
        Adds value to the set for key. The key is registered even if value is None. Returns True if the value was not
        already present for the key.
        """
        values = self._map.setdefault(key, {})
        if value is None or value in values:
            return False
        values[value] = None
        self._size += 1
        return True

    def add_all(self, key: K, values) -> int:
        """Adds several values under one key, returns the number actually added."""
        return sum(1 for value in values if self.add(key, value))

    def remove_item(self, key: K, value: V) -> bool:
        """Removes value from the set for key. Returns True if it was present."""
        values = self._map.get(key)
        if values is None or value not in values:
            return False
        del values[value]
        self._size -= 1
        return True

    def remove_key(self, key: K) -> None:
        """Removes the key and all of its values."""
        values = self._map.pop(key, None)
        if values is not None:
            self._size -= len(values)

    def get(self, key: K) -> frozenset[V]:
        """Returns a read-only view of the values for key, an empty set if the key is unknown."""
        values = self._map.get(key)
        if values is None:
            return frozenset()
        return frozenset(values)

    def get_list(self, key: K) -> list[V]:
        """Same as get() but preserves insertion order."""
        return list(self._map.get(key, ()))

    def keys(self) -> list[K]:
        if self._ordered:
            return sorted(self._map.keys())
        return list(self._map.keys())

    def values(self) -> list[V]:
        """All values over all keys, each value once, in key order."""
        seen: dict[V, None] = {}
        for key in self.keys():
            for value in self._map[key]:
                seen.setdefault(value, None)
        return list(seen)

    def items(self) -> Iterator[tuple[K, list[V]]]:
        for key in self.keys():
            yield key, list(self._map[key])

    def merge(self, other: "MultiIndex[K, V]") -> None:
        """Adds all entries of other to this index."""
        for key, values in other.items():
            self._map.setdefault(key, {})
            self.add_all(key, values)

    def clear(self) -> None:
        self._map.clear()
        self._size = 0

    def recount(self) -> int:
        """Recomputes the number of stored values from scratch."""
        return sum(len(values) for values in self._map.values())
