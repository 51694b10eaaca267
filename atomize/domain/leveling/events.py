"""Leveling domain events."""

from atomize.domain.shared.events import DomainEvent


class LevelUp(DomainEvent):
    """Event raised when global XP crosses into a higher level.

    Fires at most once per observed crossing and only upward.
    """

    old_level: int
    new_level: int
    total_xp: int
