from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StrategyKind = Literal["exact", "country_suffixed", "prefix_truncated"]

COUNTRY_SUFFIX = ", India"
PREFIX_LENGTH = 3


@dataclass(frozen=True, slots=True)
class SearchStrategy:
    kind: StrategyKind
    query: str


def plan_strategies(query: str) -> list[SearchStrategy]:
    """Return the query variants to try, highest priority first.

    ``query`` must already be trimmed and non-empty.
    """
    strategies = [
        SearchStrategy(kind="exact", query=query),
        SearchStrategy(kind="country_suffixed", query=f"{query}{COUNTRY_SUFFIX}"),
    ]
    if len(query) > PREFIX_LENGTH:
        strategies.append(SearchStrategy(kind="prefix_truncated", query=query[:PREFIX_LENGTH]))
    return strategies
