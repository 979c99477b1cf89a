"""
Simple factory for the default offer aggregator.

The **Factory pattern** centralises source construction. The shopping service
calls `ServiceFactory.get_offer_aggregator()` instead of wiring sources
itself.

Benefits:
  - Single point of change for where offers come from (URL, file, both).
  - The cached aggregator is shared by every service built without one.
  - Easy to swap for testing (`reset()` clears the class-level cache).
"""

from shopping_offers.services.aggregator import OfferAggregator
from shopping_offers.services.sources import FileOfferSource, OfferSource, UrlOfferSource
from shopping_offers.settings import Settings, get_settings


class ServiceFactory:
    """Lazily creates and caches the default aggregator (class-level singleton)."""

    _aggregator: OfferAggregator | None = None

    @staticmethod
    def build_sources(settings: Settings) -> list[OfferSource]:
        """Remote source first (when configured), then the local file."""
        sources: list[OfferSource] = []
        if settings.offers_url:
            sources.append(UrlOfferSource(settings.offers_url, timeout=settings.http_timeout_seconds))
        sources.append(FileOfferSource(settings.offers_file))
        return sources

    @classmethod
    def get_offer_aggregator(cls, settings: Settings | None = None) -> OfferAggregator:
        if cls._aggregator is None:
            cls._aggregator = OfferAggregator(cls.build_sources(settings or get_settings()))
        return cls._aggregator

    @classmethod
    def reset(cls) -> None:
        cls._aggregator = None
