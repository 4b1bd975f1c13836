import logging
import os

from tranco import Tranco

logger = logging.getLogger(__name__)

FILE_DIR = os.path.dirname(os.path.abspath(__file__))
domain_cache_path = os.path.join(FILE_DIR, "tranco_cache")

MAX_DOMAINS = 1_000_000


def zipf_weights(n, s=1.1, scale=1.0):
  """Weights for ranks 1..n following Zipf's law: scale / r ** s."""
  return [scale / ((r + 1) ** s) for r in range(n)]


def load_domain_terms(n=100_000, cache_path=domain_cache_path, s=1.1, scale=1_000_000.0):
  """Load the top n domains from the Tranco list, weighted by rank with Zipf's law.

  Returns (domains, weights) ready to build an autocompleter from. The list is
  downloaded once and cached under `cache_path`.
  """
  if n <= 0 or n > MAX_DOMAINS:
    raise ValueError(f"n must be between 1 and {MAX_DOMAINS:,}")
  t = Tranco(cache=True, cache_dir=cache_path)
  try:
    latest_list = t.list(subdomains=True)
  except TypeError:
    latest_list = t.list()
  domains = latest_list.top(n)
  logger.info("loaded %d domains from Tranco list", len(domains))
  return domains, zipf_weights(len(domains), s, scale)
