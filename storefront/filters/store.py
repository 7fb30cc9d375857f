"""Mutable holder for a browsing session's filter configuration."""

from typing import Any, Optional, Union

from ..models import Availability, FilterConfiguration, SortKey
from .pricing import PriceValue, parse_price


def _toggle(selected: tuple[str, ...], value: str) -> tuple[str, ...]:
    if value in selected:
        return tuple(v for v in selected if v != value)
    return selected + (value,)


class FilterStore:
    """
    Owns the current FilterConfiguration for one browsing session.

    Each setter swaps in a new validated configuration, so snapshots handed
    to the filter engine never change underneath it.
    """

    def __init__(self, initial: Optional[FilterConfiguration] = None):
        self._config = initial or FilterConfiguration()

    @property
    def config(self) -> FilterConfiguration:
        return self._config

    def snapshot(self) -> FilterConfiguration:
        """Current configuration value."""
        return self._config

    def _update(self, **changes: Any) -> FilterConfiguration:
        data = self._config.model_dump()
        data.update(changes)
        self._config = FilterConfiguration(**data)
        return self._config

    def set_search_query(self, query: str) -> FilterConfiguration:
        return self._update(search_query=query)

    def set_price_range(self, low: PriceValue, high: PriceValue) -> FilterConfiguration:
        return self._update(price_range=(parse_price(low), parse_price(high)))

    def toggle_category(self, category: str) -> FilterConfiguration:
        return self._update(selected_categories=_toggle(self._config.selected_categories, category))

    def toggle_brand(self, brand: str) -> FilterConfiguration:
        return self._update(selected_brands=_toggle(self._config.selected_brands, brand))

    def toggle_feature(self, feature: str) -> FilterConfiguration:
        return self._update(selected_features=_toggle(self._config.selected_features, feature))

    def set_availability(self, availability: Union[Availability, str]) -> FilterConfiguration:
        return self._update(availability=availability)

    def set_min_rating(self, rating: int) -> FilterConfiguration:
        return self._update(min_rating=rating)

    def set_show_deals_only(self, show: bool) -> FilterConfiguration:
        return self._update(show_deals_only=show)

    def set_sort_by(self, sort_by: Union[SortKey, str]) -> FilterConfiguration:
        return self._update(sort_by=sort_by)

    def clear_filters(self) -> FilterConfiguration:
        """Reset every field to its default in one step."""
        self._config = FilterConfiguration()
        return self._config
