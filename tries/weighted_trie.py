"""
Weighted Trie (character-per-edge) with best-first top-k prefix queries.

This module provides a trie whose nodes carry the largest weight stored
anywhere beneath them. That single annotation is enough to answer ranked
autocomplete queries without enumerating every completion of a prefix.
Key design choices:
- **Subtree maxima:** every `WeightedTrieNode` keeps `subtree_max_weight`, the
  maximum weight among terminal nodes in its subtree (itself included). It is
  an upper bound on anything reachable below, which makes it an admissible
  priority for best-first search.
- **Memory efficiency:** nodes use `__slots__` and *lazy* child dicts
  (`children=None` until the first child is added).
- **Non-owning parents:** `parent` is a `weakref.ref`, so the tree stays a
  strict ownership hierarchy. Parents are only followed when a duplicate
  insertion lowers a weight and the maxima above it must be recomputed.
- **Iterative traversals:** no recursion anywhere.


Classes
-------
WeightedTrieNode
    Node holding `symbol`, `children`, `parent`, `is_terminal`, `term`,
    `weight` and `subtree_max_weight`.
WeightedTrie
    Public API: construction from parallel term/weight sequences, `add`,
    `weight_of`, `top_match`, `top_matches`, plus `items` and `count_nodes`.


Complexity (typical)
--------------------
- add / weight_of: O(L)
- top_match: O(L + D * B) where D is the depth of the best completion and B
  the branching factor along it
- top_matches: O(L + (k * D * B) log(k * D * B)); only nodes whose bound can
  still beat the current k-th result are ever expanded


Conventions & Notes
-------------------
- **Symbols:** a term is a plain sequence of characters. No case folding or
  Unicode normalization is applied; do that before calling in.
- **Last write wins:** re-adding a term replaces its weight. With
  `refresh_on_decrease=False` a lowered weight leaves stale (too large) maxima
  above it; queries stay correct in content but `top_matches` may return a
  lighter term earlier than a heavier sibling subtree would justify.
- **Absent == zero:** `weight_of` returns 0.0 for unknown terms. Use
  `term in trie` when membership matters.
- **Empty string:** `""` is a valid term; it is stored on the root.
    """

import heapq
import logging
import weakref
from itertools import count

from tries.errors import InvalidArgumentError, NullInputError, check_string, check_weight

logger = logging.getLogger(__name__)

NO_WEIGHT = float("-inf")
ROOT_SYMBOL = "-"

# Heap entry kinds. At equal priority a finished term pops before a node.
_TERM = 0
_NODE = 1


class WeightedTrieNode:
  __slots__ = ("symbol", "children", "parent", "is_terminal",
               "term", "weight", "subtree_max_weight", "__weakref__")

  def __init__(self, symbol, parent=None, subtree_max_weight=NO_WEIGHT):
    self.symbol = symbol
    self.children = None
    self.parent = None if parent is None else weakref.ref(parent)
    self.is_terminal = False
    self.term = None
    self.weight = 0.0
    self.subtree_max_weight = subtree_max_weight

  def child(self, symbol):
    children = self.children
    return None if children is None else children.get(symbol)

  def recompute_max(self):
    """Rebuild `subtree_max_weight` from this node and its direct children."""
    best = self.weight if self.is_terminal else NO_WEIGHT
    if self.children:
      for c in self.children.values():
        if c.subtree_max_weight > best:
          best = c.subtree_max_weight
    self.subtree_max_weight = best

  def __repr__(self):
    return (f"WeightedTrieNode({self.symbol!r}, term={self.term!r}, "
            f"weight={self.weight}, max={self.subtree_max_weight})")


class WeightedTrie:
  __slots__ = ("_root", "_size", "_refresh_on_decrease")

  def __init__(self, terms, weights, *, refresh_on_decrease=True):
    """Build the trie from parallel `terms` / `weights` sequences.

    Parameters
    ----------
    terms : Sequence[str]
        Terms to store, inserted in order.
    weights : Sequence[float]
        Non-negative weights; `weights[i]` belongs to `terms[i]`.
    refresh_on_decrease : bool, default=True
        When a repeated term gets a smaller weight, recompute the subtree
        maxima on its path so they stay exact. When False, maxima only ever
        grow.

    Raises
    ------
    NullInputError
        If either sequence is None.
    InvalidArgumentError
        If the sequences differ in length or a weight is negative.
    """
    if terms is None or weights is None:
      raise NullInputError("terms and weights must not be None")
    if len(terms) != len(weights):
      raise InvalidArgumentError(
        f"terms and weights differ in length ({len(terms)} != {len(weights)})")

    self._root = WeightedTrieNode(ROOT_SYMBOL)
    self._size = 0
    self._refresh_on_decrease = refresh_on_decrease

    for term, weight in zip(terms, weights):
      self.add(term, weight)
    logger.debug("built weighted trie: %d terms, %d nodes", self._size, self.count_nodes())

  @property
  def root(self):
    return self._root

  def __len__(self):
    return self._size

  def __contains__(self, term):
    node = self._find(check_string(term, "term"))
    return node is not None and node.is_terminal


  def add(self, term, weight):
    """Insert `term` with `weight`, or replace the weight of an existing term.

    Notes
    -----
    - Creates missing nodes along the path; a repeated term reuses its path.
    - Every node on the path has its `subtree_max_weight` raised to at least
      `weight` before the walk descends past it.
    - If the term already existed with a larger weight and
      `refresh_on_decrease` is set, maxima are rebuilt bottom-up through the
      parent references.

    Complexity
    ----------
    O(L) time, O(new_nodes) space where L = len(term).
    """
    term = check_string(term, "term")
    weight = check_weight(weight)
    node = self._root

    for ch in term:
      nxt = node.child(ch)
      if nxt is None:
        nxt = WeightedTrieNode(ch, node, weight)
        if node.children is None:
          node.children = {ch: nxt}
        else:
          node.children[ch] = nxt
      if weight > node.subtree_max_weight:
        node.subtree_max_weight = weight
      node = nxt

    old_weight = node.weight if node.is_terminal else None
    if old_weight is None:
      self._size += 1
    node.is_terminal = True
    node.term = term
    node.weight = weight
    if weight > node.subtree_max_weight:
      node.subtree_max_weight = weight

    if old_weight is not None and weight < old_weight and self._refresh_on_decrease:
      self._refresh_path(node)

  def _refresh_path(self, node):
    """Recompute maxima from `node` up to the root, stopping once nothing changes."""
    while node is not None:
      before = node.subtree_max_weight
      node.recompute_max()
      if node.subtree_max_weight == before:
        break
      node = node.parent() if node.parent is not None else None


  def _find(self, prefix):
    """Return the node at the end of `prefix`, or None if the path is missing."""
    node = self._root
    for ch in prefix:
      node = node.child(ch)
      if node is None:
        return None
    return node

  def weight_of(self, term):
    """Return the weight stored for `term`, or 0.0 if it is not stored."""
    node = self._find(check_string(term, "term"))
    if node is None or not node.is_terminal:
      return 0.0
    return node.weight


  def top_match(self, prefix):
    """Return the heaviest term starting with `prefix`, or "" if there is none.

    Follows the child that carries the current node's `subtree_max_weight`
    until a terminal node holding that weight itself is reached. Among
    children with equal maxima the first in insertion order wins.
    """
    node = self._find(check_string(prefix, "prefix"))
    if node is None:
      return ""

    while not (node.is_terminal and node.weight == node.subtree_max_weight):
      if not node.children:
        break
      target = node.subtree_max_weight
      best = None
      for c in node.children.values():
        if c.subtree_max_weight == target:
          best = c
          break
        if best is None or c.subtree_max_weight > best.subtree_max_weight:
          best = c
      node = best
    return node.term if node.is_terminal else ""


  def top_matches(self, prefix, k):
    """Return up to `k` terms starting with `prefix`, heaviest first.

    Parameters
    ----------
    prefix : str
        Prefix every returned term starts with. Use "" for the whole trie.
    k : int
        Maximum number of results. `k <= 0` returns an empty list.

    Returns
    -------
    list[str]
        Terms in non-increasing weight order. Fewer than `k` when fewer match.

    Implementation details
    ----------------------
    Best-first search over a max-heap (`heapq` with negated priorities).
    A node enters the heap keyed by its `subtree_max_weight`. When a terminal
    node is expanded, its own term re-enters the heap keyed by its exact
    weight, so it only surfaces once nothing left in the heap can beat it.
    The counter keeps ordering deterministic and avoids comparing nodes.
    """
    prefix = check_string(prefix, "prefix")
    if k <= 0:
      return []
    node = self._find(prefix)
    if node is None:
      return []

    tick = count()
    heap = [(-node.subtree_max_weight, _NODE, next(tick), node)]
    results = []

    while heap and len(results) < k:
      _, kind, _, n = heapq.heappop(heap)
      if kind == _TERM:
        results.append(n.term)
        continue
      if n.is_terminal:
        heapq.heappush(heap, (-n.weight, _TERM, next(tick), n))
      if n.children:
        for c in n.children.values():
          heapq.heappush(heap, (-c.subtree_max_weight, _NODE, next(tick), c))
    return results


  def items(self, prefix=""):
    """Yield `(term, weight)` pairs stored under `prefix` using an iterative DFS.

    Order follows child insertion order, not weight.
    """
    node = self._find(check_string(prefix, "prefix"))
    if node is None:
      return
    stack = [node]
    while stack:
      n = stack.pop()
      if n.is_terminal:
        yield n.term, n.weight
      if n.children:
        stack.extend(reversed(list(n.children.values())))


  def count_nodes(self, get_avg_branch_factor=False):
    """Size of the trie in nodes (root included).

    With `get_avg_branch_factor=True`, return the mean number of children per
    non-leaf node instead (0.0 for a trie that is only a root).
    """
    nodes = 0
    edges = 0
    parents = 0
    pending = [self._root]
    while pending:
      node = pending.pop()
      nodes += 1
      if node.children:
        parents += 1
        edges += len(node.children)
        pending.extend(node.children.values())
    if not get_avg_branch_factor:
      return nodes
    return edges / parents if parents else 0.0
