import unittest

from rng import RandomStream, UINT32_MAX


class TestRandomStream(unittest.TestCase):
    def test_golden_values(self):
        rng = RandomStream()
        self.assertEqual(rng.next32(), 99185723)
        self.assertEqual(rng.next32(), 3832193919)

    def test_reset_replays_sequence(self):
        rng = RandomStream()
        first = [rng.next32() for _ in range(100)]
        rng.reset()
        self.assertEqual([rng.next32() for _ in range(100)], first)

    def test_independent_streams_agree(self):
        a = RandomStream()
        b = RandomStream()
        a.next32()
        b.next32()
        self.assertEqual(a.next_double(), b.next_double())

    def test_custom_seed_differs_and_resets_to_itself(self):
        rng = RandomStream(seed_w=1, seed_z=2)
        first = rng.next32()
        self.assertNotEqual(first, 99185723)
        rng.reset()
        self.assertEqual(rng.next32(), first)

    def test_next_double(self):
        rng = RandomStream()
        self.assertEqual(rng.next_double(), 99185723 / UINT32_MAX)
        for _ in range(1000):
            value = rng.next_double()
            self.assertGreaterEqual(value, 0.0)
            self.assertLessEqual(value, 1.0)

    def test_next_bounded(self):
        rng = RandomStream()
        self.assertEqual(rng.next_bounded(4), 99185723 % 4)
        for bound in (1, 3, 8, 1000):
            for _ in range(200):
                self.assertIn(rng.next_bounded(bound), range(bound))

    def test_next_bounded_keyword(self):
        rng = RandomStream()
        self.assertEqual(rng.next_bounded(bound=8), 99185723 % 8)

    def test_next_bounded_rejects_non_positive(self):
        rng = RandomStream()
        with self.assertRaises(ValueError):
            rng.next_bounded(0)

    def test_state_stays_32_bit(self):
        rng = RandomStream()
        for _ in range(10000):
            self.assertLessEqual(rng.next32(), UINT32_MAX)
            self.assertLessEqual(rng.m_z, UINT32_MAX)
            self.assertLessEqual(rng.m_w, UINT32_MAX)


if __name__ == "__main__":
    unittest.main()
