# cache.py
import collections

from config import InvalidConfiguration

NO_EVICTION = -1


class LRUCache:
    """
    Fully-associative LRU model of one cache level.
    Holds up to `capacity` block ids; no set indexing, every block can go anywhere.
    """

    def __init__(self, capacity):
        if capacity < 0:
            raise InvalidConfiguration("capacity must be >= 0")
        self._capacity = capacity
        # block id -> True. Rightmost = most recently used.
        self._blocks = collections.OrderedDict()

    @property
    def capacity(self):
        return self._capacity

    def __len__(self):
        return len(self._blocks)

    def __contains__(self, block_id):
        # Presence check only, does not touch LRU order
        return block_id in self._blocks

    def access(self, block_id):
        """
        Look up `block_id`. Return True on hit and make it most recently used.
        A miss leaves the level untouched.
        """
        if block_id in self._blocks:
            self._blocks.move_to_end(block_id)
            return True
        return False

    def insert(self, block_id):
        """
        Place `block_id` as most recently used, evicting the LRU entry if full.
        Return the evicted block id, or NO_EVICTION.
        """
        if block_id in self._blocks:
            self._blocks.move_to_end(block_id)
            return NO_EVICTION
        if self._capacity == 0:
            return block_id
        evicted = NO_EVICTION
        if len(self._blocks) >= self._capacity:
            evicted, _ = self._blocks.popitem(last=False)
        self._blocks[block_id] = True
        return evicted

    def get_blocks(self):
        """Snapshot of the level, most recently used first."""
        return list(reversed(self._blocks))

    def set_capacity(self, capacity):
        if capacity < 0:
            raise InvalidConfiguration("capacity must be >= 0")
        self._capacity = capacity
        while len(self._blocks) > capacity:
            self._blocks.popitem(last=False)

    def clear(self):
        self._blocks.clear()

    def stats(self):
        return {
            "capacity": self._capacity,
            "used_blocks": len(self._blocks),
        }
