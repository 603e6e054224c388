# patterns.py
import math

from config import check_pattern, check_positive, InvalidConfiguration

DEFAULT_SEED = 12345

_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MASK = 0x7fffffff


class SeededRandom:
    """
    Linear congruential generator. Plain integer arithmetic, so a given seed
    yields the same stream on every platform.
    """

    def __init__(self, seed=DEFAULT_SEED):
        self.seed = seed

    def next(self):
        """Advance the state and return a float in [0, 1)."""
        self.seed = (self.seed * _LCG_MULTIPLIER + _LCG_INCREMENT) & _LCG_MASK
        return self.seed / (_LCG_MASK + 1)

    def next_int(self, max_value):
        """Return an int in [0, max_value). A bound of 0 always yields 0."""
        if max_value < 0:
            raise InvalidConfiguration("next_int bound must be >= 0")
        return int(self.next() * max_value)

    def reset(self, seed=None):
        self.seed = DEFAULT_SEED if seed is None else seed


class AccessPatternGenerator:
    """
    Produces the block id stream for each access pattern.

    `optimized` models the cache-friendly rewrite of a pattern: a smaller
    working set for random access, contiguous layout for the linked list and
    row-major traversal for column-wise matrix access.
    """

    def __init__(self, dataset_size, seed=DEFAULT_SEED):
        self.rng = SeededRandom(seed)
        self.index = 0
        self.set_dataset_size(dataset_size)

    @property
    def dataset_size(self):
        return self._dataset_size

    @property
    def matrix_size(self):
        return self._matrix_size

    @property
    def linked_list_order(self):
        return list(self._linked_list_order)

    def _generate_linked_list_order(self):
        # Fixed stride jumps across the dataset to mimic pointer chasing
        n = self._dataset_size
        stride = n // 8 or 1
        self._linked_list_order = [(i * stride + 7) % n for i in range(n)]

    def _next_sequential(self):
        block_id = self.index % self._dataset_size
        self.index += 1
        return block_id

    def next_access(self, pattern, optimized=False):
        """Return the next block id for `pattern` and advance the generator."""
        check_pattern(pattern)

        if pattern == "random":
            if optimized:
                working_set = self._dataset_size // 4
                return self.rng.next_int(working_set)
            return self.rng.next_int(self._dataset_size)

        if pattern == "linked-list" and not optimized:
            block_id = self._linked_list_order[self.index % len(self._linked_list_order)]
            self.index += 1
            return block_id

        if pattern == "matrix-col" and not optimized:
            n = self._matrix_size
            row = self.index % n
            col = (self.index // n) % n
            self.index += 1
            return row * n + col

        # sequential, matrix-row, and the optimized linked-list / matrix-col
        return self._next_sequential()

    def reset(self, seed=None):
        self.index = 0
        self.rng.reset(seed)

    def set_dataset_size(self, size):
        self._dataset_size = check_positive("dataset_size", size)
        self._matrix_size = math.isqrt(size)
        self._generate_linked_list_order()
