"""Unit tests for the concurrent offer aggregator."""

import asyncio
import logging

import pytest

from shopping_offers.domain.offers import TwoForOneOffer
from shopping_offers.errors import SourceNotFound
from shopping_offers.services.aggregator import OfferAggregator

from fakes import FailingSource, StaticSource


class SlowSource(StaticSource):
    def __init__(self, offers, delay: float) -> None:
        super().__init__(offers, description="slow")
        self.delay = delay

    async def load_offers(self):
        await asyncio.sleep(self.delay)
        return await super().load_offers()


class RendezvousSource(StaticSource):
    """Finishes only once every source in the group has started loading."""

    def __init__(self, offers, group: list, all_started: asyncio.Event, size: int) -> None:
        super().__init__(offers, description="rendezvous")
        self.group = group
        self.all_started = all_started
        self.size = size

    async def load_offers(self):
        self.group.append(self)
        if len(self.group) == self.size:
            self.all_started.set()
        await self.all_started.wait()
        return await super().load_offers()


class TestOfferAggregator:
    @pytest.mark.asyncio
    async def test_combines_offers_from_all_sources(self):
        a, b = TwoForOneOffer(["ProductA"]), TwoForOneOffer(["ProductB"])
        aggregator = OfferAggregator([StaticSource([a]), StaticSource([b])])

        assert await aggregator.load_offers() == [a, b]

    @pytest.mark.asyncio
    async def test_failing_source_contributes_nothing(self, caplog):
        offer = TwoForOneOffer(["ProductA"])
        failing = FailingSource(description="broken-source")
        aggregator = OfferAggregator([StaticSource([offer]), failing])

        with caplog.at_level(logging.WARNING):
            result = await aggregator.load_offers()

        assert result == [offer]
        assert failing.calls == 1
        assert "broken-source" in caplog.text

    @pytest.mark.asyncio
    async def test_order_follows_sources_not_completion(self):
        first, second = TwoForOneOffer(["First"]), TwoForOneOffer(["Second"])
        aggregator = OfferAggregator([SlowSource([first], delay=0.05), StaticSource([second])])

        assert await aggregator.load_offers() == [first, second]

    @pytest.mark.asyncio
    async def test_any_failing_subset_keeps_the_rest_in_order(self):
        offers = [TwoForOneOffer([name]) for name in "ABCD"]
        sources = [
            StaticSource([offers[0], offers[1]]),
            FailingSource(SourceNotFound("missing")),
            StaticSource([offers[2]]),
            FailingSource(),
            StaticSource([offers[3]]),
        ]

        assert await OfferAggregator(sources).load_offers() == offers

    @pytest.mark.asyncio
    async def test_all_sources_failing_yields_empty(self):
        aggregator = OfferAggregator([FailingSource(), FailingSource()])
        assert await aggregator.load_offers() == []

    @pytest.mark.asyncio
    async def test_no_sources(self):
        assert await OfferAggregator([]).load_offers() == []

    @pytest.mark.asyncio
    async def test_sources_load_concurrently(self):
        group: list = []
        all_started = asyncio.Event()
        offers = [TwoForOneOffer([name]) for name in "ABC"]
        sources = [RendezvousSource([offer], group, all_started, size=3) for offer in offers]

        # A one-at-a-time fan-out would block forever on the first source.
        result = await asyncio.wait_for(OfferAggregator(sources).load_offers(), 1.0)

        assert result == offers
        assert len(group) == 3
