import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from tries.brute_autocomplete import BruteAutocomplete
from tries.weighted_trie import WeightedTrie

logger = logging.getLogger(__name__)

IMPLEMENTATIONS = {
    "weighted_trie": WeightedTrie,
    "brute_force": BruteAutocomplete,
}

BENCH_COLUMNS = ["impl", "terms", "queries", "build_s", "query_mean_us", "query_p95_us", "nodes"]


@dataclass
class BenchConfig:
    """
    Configuration for run_bench
        k: int, number of matches requested per query
        repeats: int, how many times each prefix is queried
    """
    k: int = 10
    repeats: int = 1

    def __post_init__(self):
        if self.k < 1:
            raise ValueError("k must be at least 1")
        if self.repeats < 1:
            raise ValueError("repeats must be at least 1")


def _time_queries(impl, prefixes, config):
    samples = np.empty(len(prefixes) * config.repeats)
    i = 0
    for _ in range(config.repeats):
        for p in prefixes:
            start = time.perf_counter()
            impl.top_matches(p, config.k)
            samples[i] = time.perf_counter() - start
            i += 1
    return samples * 1e6


def run_bench(terms: Sequence[str], weights: Sequence[float], prefixes: Sequence[str],
              config: BenchConfig = None) -> pd.DataFrame:
    """Build every implementation from the same vocabulary and time `top_matches` on `prefixes`.

    One row per implementation; see BENCH_COLUMNS.
    """
    config = config or BenchConfig()
    if not prefixes:
        raise ValueError("prefixes must not be empty")
    rows = []
    for name, cls in IMPLEMENTATIONS.items():
        start = time.perf_counter()
        impl = cls(terms, weights)
        build_s = time.perf_counter() - start

        samples = _time_queries(impl, prefixes, config)
        nodes = impl.count_nodes() if hasattr(impl, "count_nodes") else np.nan
        rows.append({
            "impl": name,
            "terms": len(impl),
            "queries": len(samples),
            "build_s": build_s,
            "query_mean_us": float(samples.mean()),
            "query_p95_us": float(np.percentile(samples, 95)),
            "nodes": nodes,
        })
        logger.info("%s: build %.3fs, mean query %.1fus", name, build_s, samples.mean())
    return pd.DataFrame(rows, columns=BENCH_COLUMNS)


def check_agreement(terms: Sequence[str], weights: Sequence[float], prefixes: Sequence[str],
                    k: int = 10) -> Dict[str, List[List[float]]]:
    """Return prefixes whose top-k weight sequences differ between trie and brute force.

    Terms are compared through their weights, since ties may legitimately be
    ordered differently. Maps each disagreeing prefix to [trie_weights, brute_weights].
    """
    trie = WeightedTrie(terms, weights)
    brute = BruteAutocomplete(terms, weights)
    mismatches = {}
    for p in dict.fromkeys(prefixes):
        got = [trie.weight_of(t) for t in trie.top_matches(p, k)]
        exp = [brute.weight_of(t) for t in brute.top_matches(p, k)]
        if got != exp:
            mismatches[p] = [got, exp]
    if mismatches:
        logger.warning("%d of %d prefixes disagree", len(mismatches), len(set(prefixes)))
    return mismatches
