"""ProductMatcher — picks up to six catalog products for a diagnosis.

Matching is plain case-insensitive substring search: a product qualifies
if any keyword occurs anywhere in its name, description, or category
name.  "care" therefore also matches "careful"; that is the intended
behaviour.  Qualifying products keep their catalog order.

If nothing qualifies, the first featured products are returned instead.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from nail_diagnosis.constants import EXTRA_KEYWORDS, MAX_RECOMMENDED_PRODUCTS
from nail_diagnosis.models.catalog import CatalogProduct

logger = logging.getLogger(__name__)


def contains_keyword(text: str | None, keyword: str) -> bool:
    """Case-insensitive substring test shared by all matched fields.

    ``None`` is treated as the empty string.  ``str.lower`` is not
    locale-dependent, so results are the same on every host.
    """
    if not text:
        return False
    return keyword.lower() in text.lower()


def build_keywords(tags: Iterable[str]) -> list[str]:
    """Topic tags followed by the fixed extra keywords, without duplicates."""
    keywords: list[str] = []
    for kw in [*tags, *EXTRA_KEYWORDS]:
        if kw not in keywords:
            keywords.append(kw)
    return keywords


def product_matches(product: CatalogProduct, keywords: Sequence[str]) -> bool:
    """True if any keyword occurs in the product's name, description, or category."""
    category_name = product.category.name if product.category is not None else None
    fields = (product.name, product.description, category_name)
    return any(contains_keyword(f, kw) for kw in keywords for f in fields)


class ProductMatcher:
    """Keyword matcher with a featured-products fallback.

    Args:
        limit: maximum number of products returned
    """

    def __init__(self, limit: int = MAX_RECOMMENDED_PRODUCTS) -> None:
        self._limit = limit

    def match(
        self, tags: Iterable[str], catalog: Sequence[CatalogProduct]
    ) -> list[CatalogProduct]:
        """Return at most ``limit`` products for the given topic tags.

        1. Keyword hits, in catalog order.
        2. Otherwise featured products, in catalog order.
        3. Empty catalog gives an empty list.
        """
        if not catalog:
            return []

        keywords = build_keywords(tags)
        matched = [p for p in catalog if product_matches(p, keywords)]
        if matched:
            return matched[: self._limit]

        featured = [p for p in catalog if p.featured][: self._limit]
        if not featured:
            logger.warning(
                "No keyword matches and no featured products in a catalog of %d",
                len(catalog),
            )
        else:
            logger.info("No keyword matches; falling back to %d featured products", len(featured))
        return featured
