"""
Category filter resolution for nearby-POI queries.

Caller tokens are lenient: anything without a mapping is dropped, and a filter
that resolves to nothing means "all categories", never "no categories".
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Union
import logging

from wayfinder.models.poi import POICategory, category_from_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryFilter:
    categories: frozenset[POICategory] = frozenset()

    @property
    def is_unrestricted(self) -> bool:
        return not self.categories

    @property
    def is_multiple(self) -> bool:
        return len(self.categories) > 1

    @property
    def single(self) -> Optional[POICategory]:
        """The only requested category, or None for zero or several."""
        if len(self.categories) == 1:
            return next(iter(self.categories))
        return None

    def matches(self, category: POICategory) -> bool:
        return self.is_unrestricted or category in self.categories


def resolve_category_filter(tokens: Union[str, Iterable[str], None]) -> CategoryFilter:
    if tokens is None:
        return CategoryFilter()
    if isinstance(tokens, str):
        tokens = [tokens]

    resolved = set()
    for token in tokens:
        category = category_from_token(str(token))
        if category is None:
            logger.debug(f"Ignoring unknown category token {token!r}")
            continue
        resolved.add(category)
    return CategoryFilter(frozenset(resolved))
