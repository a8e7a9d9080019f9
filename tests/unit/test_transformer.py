from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch
import pytest
from plansync.core.parser import parse_feed_xml
from plansync.core.parsing_schemas import RawBasePlan, RawFeed, RawPlan, RawZone
from plansync.core.transformer import transform_feed
from plansync.models.enums import SellModeEnum
from tests.fixtures.sample_provider_responses import CORRUPT_RECORDS_XML_RESPONSE


def load_fixture(name: str) -> str:
    fixture_path = Path(__file__).parent.parent / "fixtures" / name
    with open(fixture_path, "r", encoding="utf-8") as f:
        return f.read()


def make_raw_plan(plan_id: str = "p1", zones=None, **overrides) -> RawPlan:
    fields = {
        "plan_id": plan_id,
        "plan_start_date": "2021-06-30T21:00:00",
        "plan_end_date": "2021-06-30T22:00:00",
        "sell_from": "2020-07-01T00:00:00",
        "sell_to": "2021-06-30T20:00:00",
        "sold_out": "false",
        "zone": zones or [],
    }
    fields.update(overrides)
    return RawPlan(**fields)


def make_feed(*plans: RawPlan, **base_overrides) -> RawFeed:
    base = {
        "base_plan_id": "b1",
        "sell_mode": "online",
        "title": "Base title",
        "organizer_company_id": "7",
        "plan": list(plans),
    }
    base.update(base_overrides)
    return RawFeed(base_plans=[RawBasePlan(**base)])


class TestTransformFeed:
    def test_transform_valid_feed(self):
        plans = transform_feed(parse_feed_xml(load_fixture("valid_sample.xml")))

        assert [p.id for p in plans] == ["291", "1642", "1643", "1644"]

        camela = plans[0]
        assert camela.title == "Camela en concierto"
        assert camela.base_plan_id == "291"
        assert camela.organizer_company_id is None
        assert camela.sell_mode is SellModeEnum.ONLINE
        assert camela.start_date == datetime(2021, 6, 30, 21, 0, 0)
        assert camela.end_date == datetime(2021, 6, 30, 22, 0, 0)
        assert camela.sell_from == datetime(2020, 7, 1, 0, 0, 0)
        assert camela.sell_to == datetime(2021, 6, 30, 20, 0, 0)
        assert camela.sold_out is False
        # Feed order is kept; storage orders by name
        assert [(z.id, z.name, z.capacity, z.price, z.numbered) for z in camela.zones] == [
            ("40", "Platea", 243, 20.0, True),
            ("38", "Grada 2", 100, 15.0, False),
            ("30", "A28", 90, 30.0, True),
        ]

        morancos = plans[3]
        assert morancos.sell_mode is SellModeEnum.OFFLINE
        assert morancos.organizer_company_id == "1"

    def test_plans_inherit_base_plan_fields(self):
        plans = transform_feed(make_feed(make_raw_plan("p1"), make_raw_plan("p2")))

        assert len(plans) == 2
        for plan in plans:
            assert plan.title == "Base title"
            assert plan.base_plan_id == "b1"
            assert plan.organizer_company_id == "7"
            assert plan.sell_mode is SellModeEnum.ONLINE

    def test_created_and_updated_at_are_set_to_transform_time(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        plan = transform_feed(make_feed(make_raw_plan()))[0]
        after = datetime.now(timezone.utc).replace(tzinfo=None)

        assert before <= plan.created_at <= after
        assert plan.created_at == plan.updated_at

    def test_non_numeric_capacity_and_price_fall_back_to_zero(self):
        zones = [
            RawZone(zone_id="A", name="Bad capacity", capacity="lots", price="20.0", numbered="true"),
            RawZone(zone_id="B", name="Bad price", capacity="10", price="free", numbered="false"),
            RawZone(zone_id="C", name="Missing values", numbered="false"),
        ]
        plan = transform_feed(make_feed(make_raw_plan(zones=zones)))[0]

        assert [(z.capacity, z.price) for z in plan.zones] == [(0, 20.0), (10, 0.0), (0, 0.0)]

    @pytest.mark.parametrize(
        "capacity, expected",
        [("10", 10), ("10.0", 10), ("12 ", 12), (" 7", 7), ("12 seats", 12), ("+3", 3), ("", 0)],
    )
    def test_capacity_keeps_leading_integer(self, capacity, expected):
        zones = [RawZone(zone_id="A", name="A", capacity=capacity, price="1", numbered="false")]
        plan = transform_feed(make_feed(make_raw_plan(zones=zones)))[0]

        assert plan.zones[0].capacity == expected

    def test_only_literal_true_is_true(self):
        zones = [
            RawZone(zone_id=str(i), name=value, capacity="1", price="1", numbered=value)
            for i, value in enumerate(["true", "TRUE", "True", "1", "yes"])
        ]
        plan = transform_feed(make_feed(make_raw_plan(zones=zones, sold_out="True")))[0]

        assert [z.numbered for z in plan.zones] == [True, False, False, False, False]
        assert plan.sold_out is False

    def test_corrupt_records_are_skipped_and_siblings_kept(self):
        plans = transform_feed(parse_feed_xml(CORRUPT_RECORDS_XML_RESPONSE))

        # C2 has an unparseable date, C3 ends before it starts, C4 has an
        # unknown sell mode and base plan 901 has no plan list at all.
        assert [p.id for p in plans] == ["C1"]
        zones = {z.id: z for z in plans[0].zones}
        assert zones["Z1"].capacity == 0
        assert zones["Z2"].price == 0.0
        assert zones["Z2"].numbered is False

    def test_plan_missing_zone_id_is_skipped(self):
        bad = make_raw_plan("bad", zones=[RawZone(name="No id", capacity="1", price="1")])
        good = make_raw_plan("good")

        plans = transform_feed(make_feed(bad, good))

        assert [p.id for p in plans] == ["good"]

    def test_negative_capacity_skips_the_plan(self):
        bad = make_raw_plan(
            "bad", zones=[RawZone(zone_id="A", name="A", capacity="-5", price="1")]
        )

        assert transform_feed(make_feed(bad)) == []

    def test_skip_warning_names_the_offending_zone(self):
        bad = make_raw_plan(
            "bad",
            zones=[
                RawZone(zone_id="ok-zone", name="Fine", capacity="5", price="1"),
                RawZone(zone_id="zone-77", name="Broken", capacity="-5", price="1"),
            ],
        )

        with patch("plansync.core.transformer.logger") as mock_logger:
            assert transform_feed(make_feed(bad)) == []

        mock_logger.warning.assert_called_once()
        message = mock_logger.warning.call_args[0][0]
        assert "plan bad" in message
        assert "zone zone-77" in message
        assert "ok-zone" not in message

    def test_base_plan_without_plan_list_is_skipped(self):
        feed = RawFeed(
            base_plans=[
                RawBasePlan(base_plan_id="empty", sell_mode="online", title="Empty"),
                RawBasePlan(
                    base_plan_id="full",
                    sell_mode="online",
                    title="Full",
                    plan=[make_raw_plan("p1")],
                ),
            ]
        )

        plans = transform_feed(feed)

        assert [p.base_plan_id for p in plans] == ["full"]

    def test_empty_feed(self):
        assert transform_feed(RawFeed()) == []
