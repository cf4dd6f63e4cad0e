"""Whole-load constraints checked before any placement is attempted."""

from typing import List

from binpack3d.models import Container, Item


class Constraint:
    """Base class for packing constraints."""

    def check(self, items: List[Item], container: Container) -> bool:
        """
        Check if items satisfy the constraint in the container.

        Args:
            items: List of items to check
            container: Container to check against

        Returns:
            True if constraint is satisfied, False otherwise
        """
        raise NotImplementedError


class VolumeConstraint(Constraint):
    """Constraint that checks total volume doesn't exceed container volume."""

    def check(self, items: List[Item], container: Container) -> bool:
        total_volume = sum(item.volume for item in items)
        return total_volume <= container.volume


class WeightConstraint(Constraint):
    """Constraint that checks total weight doesn't exceed the container's capacity."""

    def check(self, items: List[Item], container: Container) -> bool:
        if container.max_weight is None:
            return True
        total_weight = sum(item.weight for item in items)
        return total_weight <= container.max_weight
