"""Exceptions raised by the trie implementations."""

import math
import numbers


class TrieError(Exception):
  """Base class for all trie argument errors."""


class NullInputError(TrieError, TypeError):
  """A required term, prefix, weight or sequence argument was None."""


class InvalidArgumentError(TrieError, ValueError):
  """An argument has the wrong shape or value (length mismatch, negative weight)."""


def check_string(value, name):
  """Return `value` if it is a str; raise NullInputError / InvalidArgumentError otherwise."""
  if value is None:
    raise NullInputError(f"{name} must not be None")
  if not isinstance(value, str):
    raise InvalidArgumentError(f"{name} must be a str, got {type(value).__name__}")
  return value


def check_weight(weight):
  """Return `weight` as a float, rejecting None, non-numbers, bools, NaN and negatives."""
  if weight is None:
    raise NullInputError("weight must not be None")
  if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
    raise InvalidArgumentError(f"weight must be a real number, got {type(weight).__name__}")
  weight = float(weight)
  if math.isnan(weight) or weight < 0:
    raise InvalidArgumentError(f"invalid weight: {weight!r}")
  return weight
