import unittest

from crosscheck import crosscheck
from mycache import L1_SIZE, L1_ASSOCIATIVITY


class TestAgainstPycachesim(unittest.TestCase):
    def test_l1_geometries_agree(self):
        for gen_name in ("memGen2", "memGen3", "memGen5"):
            for line_size in (16, 64, 128):
                ours, ref = crosscheck(gen_name, L1_SIZE, line_size, L1_ASSOCIATIVITY, 3000)
                self.assertEqual(ours, ref, f"{gen_name} {line_size}B")
                self.assertEqual(sum(ours), 3000)

    def test_small_cache_with_conflicts(self):
        ours, ref = crosscheck("memGen2", 1024, 16, 2, 3000)
        self.assertEqual(ours, ref)
        self.assertGreater(ours[1], 0)


if __name__ == "__main__":
    unittest.main()
