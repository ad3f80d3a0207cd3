import unittest
import logging
from Probe import HASH_PRIME_1, HASH_PRIME_2, hash_string, probe_index, probe_sequence, probe_step

KEYS = ["chien", "dog", "", "a", "+", "cat", "x" * 200, "clé", "ключ", "鍵"] + ["key" + str(i) for i in range(200)]


class ProbeTestCase(unittest.TestCase):
    def setUp(self) -> None:
        logging.basicConfig(level=logging.DEBUG)

    def test_hash_string(self) -> None:
        """
        Tests known hash values and the output range
        """
        self.assertEqual(hash_string("", HASH_PRIME_1, 53), 0)
        # 151^2 * ord('a') mod 53
        self.assertEqual(hash_string("a", HASH_PRIME_1, 53), 7)

        for m in (53, 107, 223):
            for key in KEYS:
                self.assertIn(hash_string(key, HASH_PRIME_1, m), range(m))
                self.assertIn(hash_string(key, HASH_PRIME_2, m), range(m))

    def test_probe_step(self) -> None:
        """
        Tests the step is never 0, including when h2 wraps around
        """
        # 163^2 * ord('+') mod 53 == 52, so h2 + 1 == 53
        self.assertEqual(hash_string("+", HASH_PRIME_2, 53), 52)
        self.assertEqual(probe_step("+", 53), 1)

        for m in (53, 107, 223):
            for key in KEYS:
                self.assertIn(probe_step(key, m), range(1, m))

    def test_probe_sequence_covers_table(self) -> None:
        """
        Tests the first m probes visit every slot exactly once
        """
        for m in (53, 107):
            for key in KEYS:
                seq = list(probe_sequence(key, m))
                self.assertEqual(len(seq), m)
                self.assertEqual(set(seq), set(range(m)))

    def test_probe_index_matches_sequence(self) -> None:
        """
        Tests probe_index and probe_sequence agree, and probe_index is pure
        """
        for key in ("chien", "+", ""):
            seq = list(probe_sequence(key, 53))
            for attempt in range(53):
                self.assertEqual(probe_index(key, 53, attempt), seq[attempt])
                self.assertEqual(probe_index(key, 53, attempt), probe_index(key, 53, attempt))

        self.assertEqual(probe_index("chien", 53, 0), hash_string("chien", HASH_PRIME_1, 53))


if __name__ == '__main__':
    unittest.main()
