"""Constants shared across the nail diagnosis SDK.

The matcher constants are fixed: the six-product cap and the extra keyword
list are part of the recommendation contract.  Catalog transport settings
can be overridden via environment variables so deployments can point at a
different storefront without code changes.
"""

import os

# The four scoring dimensions, in display order.
DIMENSIONS: list[str] = ["brittleness", "dryness", "damage", "growth_deficiency"]

# Maximum number of products returned by the matcher (keyword hits or
# featured fallback alike).
MAX_RECOMMENDED_PRODUCTS = 6

# Always added to the diagnosis topic tags before matching.  These are
# substrings, not words: "moisturiz" covers moisturize/moisturizer/
# moisturizing and "hydrat" covers hydrate/hydrating/hydration.
EXTRA_KEYWORDS: tuple[str, ...] = (
    "strength",
    "strengthening",
    "cuticle",
    "oil",
    "moisturiz",
    "hydrat",
    "treatment",
    "growth",
    "base",
    "care",
)

# Storefront catalog endpoint.
# Overridable via CATALOG_BASE_URL / CATALOG_PRODUCTS_PATH / CATALOG_TIMEOUT_SECONDS.
CATALOG_BASE_URL = os.getenv("CATALOG_BASE_URL", "http://localhost:3000")
CATALOG_PRODUCTS_PATH = os.getenv("CATALOG_PRODUCTS_PATH", "/api/products")
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "10"))

# Ruleset version shipped inside the package (rules/<version>/).
DEFAULT_RULESET_VERSION = "v1"
