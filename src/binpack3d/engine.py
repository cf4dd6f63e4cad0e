"""Public entry point: a configured packing engine."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from binpack3d.config import PackingConfig
from binpack3d.errors import ConfigurationError
from binpack3d.models import Container, Item, MultiPackingResult, PackingResult, Placement
from binpack3d.packing.feasibility import check_feasibility
from binpack3d.packing.multi_container import pack_multiple
from binpack3d.packing.placement import find_position
from binpack3d.packing.strategies import StrategyRule, rule_for
from binpack3d.spatial_index import Octree


class PackingEngine:
    """
    Runs packing attempts under one PackingConfig.

    Keyword overrides are applied on top of config, e.g.
    PackingEngine(strategy="best_fit", allow_rotation=False).
    """

    def __init__(self, config: Optional[PackingConfig] = None, **overrides: Any):
        base = config or PackingConfig()
        if overrides:
            base = PackingConfig(**{**base.model_dump(), **overrides})
        self.config = base
        self.rule: StrategyRule = rule_for(base.strategy)

    def check_feasibility(self, items: Iterable[Item], container: Container) -> PackingResult:
        """Can every item go into this one container? See packing.feasibility."""
        return check_feasibility(_items(items), _container(container), self.config)

    def pack_multi_container(
        self,
        items: Iterable[Item],
        template: Container,
        max_containers: Optional[int] = None,
    ) -> MultiPackingResult:
        if max_containers is not None and max_containers <= 0:
            raise ConfigurationError(f"max_containers must be positive, got {max_containers}")
        return pack_multiple(_items(items), _container(template), self.config, max_containers)

    def find_position(
        self,
        item: Item,
        container: Container,
        index: Optional[Octree] = None,
    ) -> Optional[Placement]:
        """Where would item go in container's current state? Nothing is modified."""
        if not isinstance(item, Item):
            raise ConfigurationError(f"Expected Item, got {type(item).__name__}")
        return find_position(item, _container(container), self.rule, self.config.allow_rotation, index)


def _items(items: Iterable[Item]) -> list[Item]:
    items = list(items)
    for item in items:
        if not isinstance(item, Item):
            raise ConfigurationError(f"Expected Item, got {type(item).__name__}")
    return items


def _container(container: Container) -> Container:
    if not isinstance(container, Container):
        raise ConfigurationError(f"Expected Container, got {type(container).__name__}")
    return container
