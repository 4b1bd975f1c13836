"""
Brute-force autocompleter: a linear scan over every stored term.

Same construction rules and query surface as `WeightedTrie`. It exists as a
correctness oracle for tests and as the baseline in benchmarks.

Complexity
----------
- weight_of: O(1)
- top_match / top_matches: O(n * L) per query, n = number of terms
"""

import heapq

from tries.errors import InvalidArgumentError, NullInputError, check_string, check_weight


class BruteAutocomplete:
  __slots__ = ("_weights",)

  def __init__(self, terms, weights):
    if terms is None or weights is None:
      raise NullInputError("terms and weights must not be None")
    if len(terms) != len(weights):
      raise InvalidArgumentError(
        f"terms and weights differ in length ({len(terms)} != {len(weights)})")
    self._weights = {}
    for term, weight in zip(terms, weights):
      self._weights[check_string(term, "term")] = check_weight(weight)

  def __len__(self):
    return len(self._weights)

  def weight_of(self, term):
    return self._weights.get(check_string(term, "term"), 0.0)

  def _matching(self, prefix):
    return ((w, t) for t, w in self._weights.items() if t.startswith(prefix))

  def top_match(self, prefix):
    best = max(self._matching(check_string(prefix, "prefix")), default=None,
               key=lambda pair: pair[0])
    return "" if best is None else best[1]

  def top_matches(self, prefix, k):
    prefix = check_string(prefix, "prefix")
    if k <= 0:
      return []
    return [t for _, t in heapq.nlargest(k, self._matching(prefix), key=lambda pair: pair[0])]
