"""
Read weighted vocabularies from delimited text files.

Expected layout: one term per line, two fields separated by `sep`. By default
the weight comes first, as in frequency lists such as

    5627187200	the
    3395006400	of

Pass `weight_first=False` for `term<sep>weight` files and `skiprows=1` to drop
a leading count or header line.
"""

import csv
import logging

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from tries.weighted_trie import WeightedTrie

logger = logging.getLogger(__name__)


class TermFileError(ValueError):
  """A term file could not be parsed into (term, weight) pairs."""


def _describe(source):
  return getattr(source, "name", None) or str(source)


def load_terms(source, *, sep="\t", weight_first=True, skiprows=0):
  """Return `(terms, weights)` read from `source` (a path or a file-like object).

  Raises
  ------
  TermFileError
      If a row does not have exactly two fields, or a weight is not a
      non-negative number.
  """
  try:
    df = pd.read_csv(source, sep=sep, header=None, skiprows=skiprows, dtype=str,
                     keep_default_na=False, quoting=csv.QUOTE_NONE, engine="python")
  except EmptyDataError:
    logger.info("loaded 0 terms from %s", _describe(source))
    return [], []
  except ParserError as e:
    raise TermFileError(f"{_describe(source)}: {e}") from e

  if df.shape[1] != 2:
    raise TermFileError(f"{_describe(source)}: expected 2 fields per line, found {df.shape[1]}")
  df.columns = ["weight", "term"] if weight_first else ["term", "weight"]

  # Short rows are padded with NaN even with keep_default_na=False.
  short = df.isna().any(axis=1)
  if short.any():
    raise TermFileError(f"{_describe(source)}: line {int(short.idxmax()) + skiprows + 1} has a missing field")

  weights = pd.to_numeric(df["weight"].str.strip(), errors="coerce")
  bad = weights.isna() | (weights < 0)
  if bad.any():
    row = bad.idxmax()
    raise TermFileError(f"{_describe(source)}: invalid weight on line {int(row) + skiprows + 1}: "
                        f"{df.loc[row, 'weight']!r}")

  terms = df["term"].str.strip().tolist()
  logger.info("loaded %d terms from %s", len(terms), _describe(source))
  return terms, weights.astype(float).tolist()


def load_trie(source, **kwargs):
  """Build a `WeightedTrie` from a term file; keyword arguments go to `load_terms`."""
  terms, weights = load_terms(source, **kwargs)
  return WeightedTrie(terms, weights)
