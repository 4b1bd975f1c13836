import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from faker import Faker
from faker.exceptions import UniquenessException

logger = logging.getLogger(__name__)

# Faker provider method used for each term kind.
TERM_KINDS = {
    "word": "word",
    "name": "first_name",
    "city": "city",
    "company": "company",
}

## === Config Class === ##

@dataclass
class TermConfig:
    """
    Configuration for TermGenerator
        kind: str, which Faker provider the terms come from (see TERM_KINDS)
        zipf_s: float, Zipf exponent; weight of rank r is max_weight / r ** zipf_s
        max_weight: float, weight of the top-ranked term
        seed: int, seed for both Faker and the numpy generator
        unique: bool, draw distinct terms only
        lowercase: bool, lowercase every term
    """
    kind: str = "word"
    zipf_s: float = 1.1
    max_weight: float = 1_000_000.0
    seed: Optional[int] = None
    unique: bool = True
    lowercase: bool = True

    def __post_init__(self):
        if self.kind not in TERM_KINDS:
            raise ValueError(f"kind must be one of {sorted(TERM_KINDS)}, got {self.kind!r}")
        if self.zipf_s < 0:
            raise ValueError("zipf_s must be non-negative")
        if self.max_weight <= 0:
            raise ValueError("max_weight must be > 0")


class TermGenerator:
    def __init__(self, config: TermConfig):
        self.config = config
        self.rng = np.random.default_rng(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self._provider = TERM_KINDS[self.config.kind]

    def _draw(self):
        source = self.fake.unique if self.config.unique else self.fake
        term = getattr(source, self._provider)()
        return term.lower() if self.config.lowercase else term

    def zipf_weights(self, n: int) -> np.ndarray:
        """Weights for ranks 1..n, heaviest first."""
        ranks = np.arange(1, n + 1, dtype=float)
        return self.config.max_weight / ranks ** self.config.zipf_s

    def generate(self, num_terms: int) -> Tuple[List[str], List[float]]:
        """Return `num_terms` terms and their Zipf-distributed weights.

        Ranks are assigned to terms in a shuffled order, so weight is not
        correlated with draw order or alphabetical position.
        """
        if num_terms < 1:
            raise ValueError("num_terms must be at least 1")
        terms = []
        try:
            for _ in range(num_terms):
                terms.append(self._draw())
        except UniquenessException as e:
            raise ValueError(
                f"only {len(terms)} unique {self.config.kind!r} terms available, "
                f"asked for {num_terms}") from e
        finally:
            self.fake.unique.clear()

        weights = self.zipf_weights(num_terms)
        self.rng.shuffle(weights)
        logger.debug("generated %d %s terms (seed=%s)", num_terms, self.config.kind, self.config.seed)
        return terms, weights.tolist()
