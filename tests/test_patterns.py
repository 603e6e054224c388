"""
Unit tests for the seeded generator and the access pattern generator
"""
import unittest

from config import InvalidConfiguration, InvalidPattern
from patterns import AccessPatternGenerator, SeededRandom, DEFAULT_SEED


class TestSeededRandom(unittest.TestCase):
    def test_first_state(self):
        rng = SeededRandom()
        rng.next()
        self.assertEqual(rng.seed, 1406932606)

    def test_same_seed_same_stream(self):
        a = SeededRandom(42)
        b = SeededRandom(42)
        self.assertEqual([a.next() for _ in range(100)], [b.next() for _ in range(100)])

    def test_range(self):
        rng = SeededRandom()
        for _ in range(5000):
            value = rng.next()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_next_int_bounds(self):
        rng = SeededRandom()
        values = [rng.next_int(10) for _ in range(2000)]
        self.assertEqual(min(values), 0)
        self.assertEqual(max(values), 9)
        self.assertEqual(rng.next_int(0), 0)

    def test_reset(self):
        rng = SeededRandom(7)
        first = [rng.next() for _ in range(5)]
        rng.reset(7)
        self.assertEqual([rng.next() for _ in range(5)], first)
        rng.reset()
        self.assertEqual(rng.seed, DEFAULT_SEED)


class TestAccessPatternGenerator(unittest.TestCase):
    def test_sequential_wraps(self):
        gen = AccessPatternGenerator(4)
        self.assertEqual([gen.next_access("sequential") for _ in range(6)], [0, 1, 2, 3, 0, 1])

    def test_matrix_row_is_sequential(self):
        gen = AccessPatternGenerator(9)
        self.assertEqual([gen.next_access("matrix-row", True) for _ in range(10)],
                         [0, 1, 2, 3, 4, 5, 6, 7, 8, 0])

    def test_linked_list_order(self):
        gen = AccessPatternGenerator(16)
        self.assertEqual(gen.linked_list_order[:8], [7, 9, 11, 13, 15, 1, 3, 5])
        self.assertEqual([gen.next_access("linked-list") for _ in range(3)], [7, 9, 11])

    def test_linked_list_small_dataset_stride_one(self):
        gen = AccessPatternGenerator(8)
        self.assertEqual(gen.linked_list_order, [7, 0, 1, 2, 3, 4, 5, 6])

    def test_linked_list_optimized_is_contiguous(self):
        gen = AccessPatternGenerator(16)
        self.assertEqual([gen.next_access("linked-list", True) for _ in range(3)], [0, 1, 2])

    def test_matrix_col(self):
        gen = AccessPatternGenerator(16)
        self.assertEqual(gen.matrix_size, 4)
        self.assertEqual([gen.next_access("matrix-col") for _ in range(9)],
                         [0, 4, 8, 12, 1, 5, 9, 13, 2])

    def test_matrix_col_optimized_row_major(self):
        gen = AccessPatternGenerator(16)
        self.assertEqual([gen.next_access("matrix-col", True) for _ in range(5)], [0, 1, 2, 3, 4])

    def test_matrix_col_non_square_dataset(self):
        gen = AccessPatternGenerator(10)
        self.assertEqual(gen.matrix_size, 3)
        ids = [gen.next_access("matrix-col") for _ in range(30)]
        self.assertTrue(all(0 <= i < 9 for i in ids))

    def test_random_within_dataset(self):
        gen = AccessPatternGenerator(100)
        ids = [gen.next_access("random") for _ in range(5000)]
        self.assertTrue(all(0 <= i < 100 for i in ids))
        self.assertGreater(len(set(ids)), 64)

    def test_random_optimized_working_set(self):
        gen = AccessPatternGenerator(256)
        ids = [gen.next_access("random", True) for _ in range(10000)]
        self.assertEqual(sum(1 for i in ids if i >= 64), 0)

    def test_random_does_not_advance_index(self):
        gen = AccessPatternGenerator(16)
        gen.next_access("random")
        self.assertEqual(gen.index, 0)
        self.assertEqual(gen.next_access("sequential"), 0)

    def test_reset(self):
        gen = AccessPatternGenerator(64)
        first = [gen.next_access("random") for _ in range(5)] + [gen.next_access("sequential")]
        gen.reset()
        self.assertEqual(gen.index, 0)
        again = [gen.next_access("random") for _ in range(5)] + [gen.next_access("sequential")]
        self.assertEqual(first, again)

    def test_set_dataset_size(self):
        gen = AccessPatternGenerator(16)
        gen.next_access("sequential")
        gen.set_dataset_size(8)
        self.assertEqual(gen.dataset_size, 8)
        self.assertEqual(gen.matrix_size, 2)
        self.assertEqual(gen.linked_list_order, [7, 0, 1, 2, 3, 4, 5, 6])
        self.assertEqual(gen.index, 1)

    def test_invalid_pattern(self):
        gen = AccessPatternGenerator(16)
        with self.assertRaises(InvalidPattern):
            gen.next_access("strided")

    def test_invalid_dataset_size(self):
        with self.assertRaises(InvalidConfiguration):
            AccessPatternGenerator(0)
        gen = AccessPatternGenerator(4)
        with self.assertRaises(InvalidConfiguration):
            gen.set_dataset_size(-3)
        self.assertEqual(gen.dataset_size, 4)


if __name__ == '__main__':
    unittest.main()
