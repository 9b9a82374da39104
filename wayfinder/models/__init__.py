# Database models

from .poi import POI, POICategory, CATEGORY_ALIASES, category_alias, category_from_token

__all__ = [
    "POI",
    "POICategory",
    "CATEGORY_ALIASES",
    "category_alias",
    "category_from_token",
]
