"""
Strategy rules: how items are ordered before packing, and how a position is
chosen among the feasible candidate points.

A rule with no score function takes the first feasible candidate. A rule with
one takes the lowest score; ties keep the earliest candidate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from binpack3d.config import ASPECT_WEIGHT, PackingStrategy
from binpack3d.geometry import Point
from binpack3d.models import Item

SortKey = Callable[[Item], Any]
ScoreFn = Callable[[Item, Point], float]


def volume_then_longest_edge(item: Item) -> tuple[float, float]:
    return (-item.volume, -item.longest_edge)


def flattest_first(item: Item) -> float:
    return -item.surface_ratio


def longest_edge_first(item: Item) -> float:
    return -item.longest_edge


def volume_then_shortest_edge(item: Item) -> tuple[float, float]:
    return (-item.volume, item.shortest_edge)


def distance_from_origin(item: Item, point: Point) -> float:
    return point.x + point.y + point.z


def greedy_score(item: Item, point: Point) -> float:
    return distance_from_origin(item, point) + ASPECT_WEIGHT * item.aspect_ratio


@dataclass(frozen=True)
class StrategyRule:
    strategy: PackingStrategy
    sort_key: SortKey
    score: Optional[ScoreFn] = None

    def order(self, items: list[Item]) -> list[Item]:
        # sorted() is stable: equal keys keep the caller's order
        return sorted(items, key=self.sort_key)

    def select(self, item: Item, feasible: Iterable[Point]) -> Optional[Point]:
        """Pick a point from feasible, which may be a lazy generator."""
        if self.score is None:
            return next(iter(feasible), None)

        best = None
        best_score = float("inf")
        for point in feasible:
            s = self.score(item, point)
            if s < best_score:
                best_score = s
                best = point
        return best


STRATEGY_RULES: dict[PackingStrategy, StrategyRule] = {
    PackingStrategy.BOTTOM_LEFT_FILL: StrategyRule(PackingStrategy.BOTTOM_LEFT_FILL, volume_then_longest_edge),
    PackingStrategy.BEST_FIT: StrategyRule(PackingStrategy.BEST_FIT, flattest_first, distance_from_origin),
    PackingStrategy.FIRST_FIT: StrategyRule(PackingStrategy.FIRST_FIT, longest_edge_first),
    PackingStrategy.GREEDY_HEURISTIC: StrategyRule(
        PackingStrategy.GREEDY_HEURISTIC, volume_then_shortest_edge, greedy_score
    ),
}


def rule_for(strategy: PackingStrategy) -> StrategyRule:
    return STRATEGY_RULES[PackingStrategy(strategy)]
