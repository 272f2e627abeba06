"""Tests for unit price history and inflation trends."""

from datetime import datetime

from conftest import make_order
from zocli.stats.inflation import calculate_inflation, find_top_inflation_trends

T1 = datetime(2023, 1, 1, 10, 0)
T2 = datetime(2023, 2, 1, 10, 0)
T3 = datetime(2023, 3, 1, 10, 0)
T4 = datetime(2023, 4, 1, 10, 0)


class TestCalculateInflation:
    def test_basic_history(self):
        orders = [
            make_order(id="1", placed_at=T1, total="₹100", items=[("Cheese Pizza", 1)]),
            # Multi-item orders are ignored
            make_order(
                id="2", placed_at=T2, total="₹250",
                items=[("Cheese Pizza", 1), ("Coke", 1)],
            ),
            make_order(id="3", placed_at=T3, total="₹240", items=[("Cheese Pizza", 2)]),
            make_order(id="4", placed_at=T3, total="₹50", items=[("Garlic Bread", 1)]),
        ]
        points = calculate_inflation(orders, "Pizza")

        assert [(p.unit_price, p.change) for p in points] == [(100.0, 0.0), (120.0, 20.0)]
        assert points[1].quantity == 2
        assert points[1].order_total == 240.0
        assert points[1].order_id == "3"

    def test_sorted_chronologically(self):
        orders = [
            make_order(id="late", placed_at=T3, total="₹120"),
            make_order(id="early", placed_at=T1, total="₹100"),
        ]
        points = calculate_inflation(orders, "")
        assert [p.order_id for p in points] == ["early", "late"]
        assert points[1].change == 20.0

    def test_input_is_not_reordered(self):
        orders = [
            make_order(id="late", placed_at=T3),
            make_order(id="early", placed_at=T1),
        ]
        calculate_inflation(orders, "")
        assert [o.id for o in orders] == ["late", "early"]

    def test_change_is_per_restaurant(self):
        orders = [
            make_order(id="1", restaurant="A", placed_at=T1, total="₹100"),
            make_order(id="2", restaurant="B", placed_at=T2, total="₹300"),
            make_order(id="3", restaurant="A", placed_at=T3, total="₹110"),
        ]
        points = calculate_inflation(orders, "")
        assert [p.change for p in points] == [0.0, 0.0, 10.0]

    def test_query_is_case_insensitive_substring(self):
        orders = [
            make_order(id="1", placed_at=T1, items=[("Cheese PIZZA", 1)]),
            make_order(id="2", placed_at=T2, items=[("Burger", 1)]),
        ]
        assert [p.order_id for p in calculate_inflation(orders, "  pizza ")] == ["1"]

    def test_only_delivered_with_positive_total(self):
        orders = [
            make_order(id="1", status="Cancelled"),
            make_order(id="2", status="delivered"),
            make_order(id="3", total="₹0"),
            make_order(id="4", total="free"),
            make_order(id="5", items=[]),
        ]
        assert calculate_inflation(orders, "") == []

    def test_unit_price_rounding(self):
        orders = [make_order(total="₹100", items=[("Samosa", 3)])]
        assert calculate_inflation(orders, "")[0].unit_price == 33.33

    def test_change_rounding(self):
        orders = [
            make_order(id="1", placed_at=T1, total="₹300"),
            make_order(id="2", placed_at=T2, total="₹301"),
        ]
        assert calculate_inflation(orders, "")[1].change == 0.33


class TestTopInflationTrends:
    def test_single_observation_never_appears(self):
        orders = [
            make_order(id="1", restaurant="A", placed_at=T1, items=[("Pizza", 1)]),
            make_order(id="2", restaurant="A", placed_at=T2, items=[("Pasta", 1)]),
        ]
        assert find_top_inflation_trends(orders, 5) == []

    def test_trend_fields(self):
        orders = [
            make_order(id="1", restaurant="A", placed_at=T1, total="₹100"),
            make_order(id="2", restaurant="A", placed_at=T2, total="₹110"),
            make_order(id="3", restaurant="A", placed_at=T3, total="₹125"),
        ]
        [trend] = find_top_inflation_trends(orders, 5)
        assert trend.key == "A - Cheese Pizza"
        assert trend.count == 3
        assert trend.first_price == 100.0
        assert trend.last_price == 125.0
        assert trend.total_change == 25.0
        assert trend.first_seen == T1
        assert trend.last_seen == T3
        assert len(trend.points) == 3

    def test_same_item_at_different_restaurants_is_separate(self):
        orders = [
            make_order(id="1", restaurant="A", placed_at=T1, total="₹100"),
            make_order(id="2", restaurant="B", placed_at=T2, total="₹200"),
            make_order(id="3", restaurant="A", placed_at=T3, total="₹100"),
            make_order(id="4", restaurant="B", placed_at=T4, total="₹150"),
        ]
        trends = {t.restaurant: t for t in find_top_inflation_trends(orders, 5)}
        assert trends["A"].total_change == 0.0
        assert trends["B"].total_change == -25.0

    def test_ranked_by_count_and_limited(self):
        orders = []
        for n, item in ((4, "Dosa"), (2, "Idli"), (3, "Vada")):
            for i in range(n):
                orders.append(
                    make_order(
                        id=f"{item}{i}", restaurant="Cafe",
                        placed_at=datetime(2023, 1, i + 1), items=[(item, 1)],
                    )
                )
        trends = find_top_inflation_trends(orders, 2)
        assert [t.item_name for t in trends] == ["Dosa", "Vada"]

    def test_limit_defaults_to_five(self):
        orders = []
        for r in range(7):
            for i in range(2):
                orders.append(
                    make_order(id=f"{r}-{i}", restaurant=f"R{r}", placed_at=datetime(2023, 1, i + 1))
                )
        assert len(find_top_inflation_trends(orders, 0)) == 5
