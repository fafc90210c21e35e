"""Query planner tests"""

from skyfinder.services.query_planner import SearchStrategy, plan_strategies


def test_long_query_gets_three_strategies():
    assert plan_strategies("Mumbai") == [
        SearchStrategy(kind="exact", query="Mumbai"),
        SearchStrategy(kind="country_suffixed", query="Mumbai, India"),
        SearchStrategy(kind="prefix_truncated", query="Mum"),
    ]


def test_short_query_skips_prefix_strategy():
    strategies = plan_strategies("Goa")

    assert [s.kind for s in strategies] == ["exact", "country_suffixed"]
    assert strategies[1].query == "Goa, India"


def test_four_character_query_is_truncated():
    assert plan_strategies("Pune")[-1] == SearchStrategy(kind="prefix_truncated", query="Pun")
