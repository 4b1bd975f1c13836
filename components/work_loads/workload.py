#!/usr/bin/env python3
import numpy as np

from components.work_loads.domain_terms import load_domain_terms
from components.work_loads.term_generator import TermConfig, TermGenerator


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def terms(self, num_terms, kind="word", zipf_s=1.1, unique=True):
        config = TermConfig(kind=kind, zipf_s=zipf_s, seed=self.seed, unique=unique)
        return TermGenerator(config).generate(num_terms)

    def domains(self, num_domains, s=1.1):
        return load_domain_terms(num_domains, s=s)

    def prefixes(self, terms, num_prefixes, max_len=3):
        """Sample query prefixes by cutting random vocabulary terms to 1..max_len symbols."""
        if num_prefixes < 1:
            raise ValueError("num_prefixes must be at least 1")
        if not terms:
            raise ValueError("terms must not be empty")
        if max_len < 1:
            raise ValueError("max_len must be at least 1")
        picks = self.rng.integers(0, len(terms), size=num_prefixes)
        cuts = self.rng.integers(1, max_len + 1, size=num_prefixes)
        return [terms[i][:c] for i, c in zip(picks, cuts)]
