import unittest
from unittest import mock

from components.work_loads import domain_terms
from components.work_loads.domain_terms import load_domain_terms, zipf_weights
from components.work_loads.workload import WorkLoad


class TestDomainTerms(unittest.TestCase):
    def test_zipf_weights(self):
        self.assertEqual(zipf_weights(3, s=1.0, scale=6.0), [6.0, 3.0, 2.0])

    def test_invalid_n_raises(self):
        with self.assertRaises(ValueError):
            load_domain_terms(0)
        with self.assertRaises(ValueError):
            load_domain_terms(domain_terms.MAX_DOMAINS + 1)

    def test_load_domain_terms_uses_tranco_list(self):
        with mock.patch.object(domain_terms, "Tranco") as tranco_cls:
            latest = tranco_cls.return_value.list.return_value
            latest.top.return_value = ["google.com", "youtube.com", "facebook.com"]
            domains, weights = load_domain_terms(3, cache_path="/tmp/unused", s=1.0, scale=1.0)

        tranco_cls.assert_called_once_with(cache=True, cache_dir="/tmp/unused")
        latest.top.assert_called_once_with(3)
        self.assertEqual(domains, ["google.com", "youtube.com", "facebook.com"])
        self.assertEqual(weights, [1.0, 0.5, 1.0 / 3])

    def test_falls_back_when_subdomains_unsupported(self):
        with mock.patch.object(domain_terms, "Tranco") as tranco_cls:
            fallback = mock.Mock()
            fallback.top.return_value = ["a.com"]
            tranco_cls.return_value.list.side_effect = [TypeError("no subdomains"), fallback]
            domains, _ = load_domain_terms(1)
        self.assertEqual(domains, ["a.com"])


class TestWorkLoad(unittest.TestCase):
    def test_terms_delegate_to_generator(self):
        terms, weights = WorkLoad(seed=11).terms(40)
        self.assertEqual(len(terms), 40)
        self.assertEqual(len(weights), 40)

    def test_prefixes_are_prefixes_of_terms(self):
        vocab = ["apple", "banana", "cherry", "kiwi"]
        prefixes = WorkLoad(seed=5).prefixes(vocab, 100, max_len=3)
        self.assertEqual(len(prefixes), 100)
        for p in prefixes:
            self.assertTrue(1 <= len(p) <= 3)
            self.assertTrue(any(t.startswith(p) for t in vocab))

    def test_prefixes_reproducible(self):
        vocab = ["apple", "banana", "cherry"]
        self.assertEqual(WorkLoad(seed=1).prefixes(vocab, 20), WorkLoad(seed=1).prefixes(vocab, 20))

    def test_prefixes_invalid_args(self):
        with self.assertRaises(ValueError):
            WorkLoad(seed=1).prefixes([], 5)
        with self.assertRaises(ValueError):
            WorkLoad(seed=1).prefixes(["a"], 0)
        with self.assertRaises(ValueError):
            WorkLoad(seed=1).prefixes(["a"], 3, max_len=0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
