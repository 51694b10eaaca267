"""Domain value objects and fixed label sets for Atomize.

Immutable value objects and the constant palettes a project draws from.
"""

from dataclasses import dataclass
from enum import Enum

# =============================================================================
# Scoring Constants
# =============================================================================

POINTS_PER_WEIGHT = 100  # One weight unit is worth 100 XP
POINTS_PER_LEVEL = 500  # Size of each level bucket
PLACEHOLDER_TOTAL_POINTS = 100  # Total for a manual project before any task is added
MIN_WEIGHT = 1
MAX_WEIGHT = 5


# =============================================================================
# Label Sets
# =============================================================================


class Priority(str, Enum):
    """Priority of a project."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Category(str, Enum):
    """Category label of a project."""

    PROGRAMMING = "Programming"
    DESIGN = "Design"
    BUSINESS = "Business"
    HEALTH = "Health"
    PERSONAL = "Personal"


THEME_COLORS: tuple[str, ...] = (
    "#8b5cf6",  # purple
    "#10b981",  # emerald
    "#3b82f6",  # blue
    "#f59e0b",  # amber
    "#ec4899",  # pink
    "#ef4444",  # red
    "#000000",  # black
)

ICONS: tuple[str, ...] = (
    "🚀", "💻", "🎨", "💪", "📚", "✈️",
    "💼", "🎵", "❤️", "🧠", "🤖", "🏠",
)

DEFAULT_COLOR = THEME_COLORS[2]
DEFAULT_ICON = ICONS[0]
DEFAULT_DURATION_DAYS = 7


# =============================================================================
# Value Objects
# =============================================================================


@dataclass(frozen=True)
class Point:
    """Screen coordinate where a toggle originated.

    Carries no state semantics; it is handed to the celebration
    collaborator so an effect can burst from where the user clicked.
    """

    x: float = 0.0
    y: float = 0.0

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


@dataclass(frozen=True)
class Weight:
    """Task point weight in the range 1..5.

    Example:
        Weight.clamp(9)  # -> Weight(value=5)
        Weight(3).points  # -> 300
    """

    value: int

    def __post_init__(self) -> None:
        if not MIN_WEIGHT <= self.value <= MAX_WEIGHT:
            raise ValueError(f"Weight must be between {MIN_WEIGHT} and {MAX_WEIGHT}, got {self.value}")

    @classmethod
    def clamp(cls, raw: int) -> "Weight":
        """Build a weight from any integer, pinning it into 1..5."""
        return cls(value=max(MIN_WEIGHT, min(MAX_WEIGHT, int(raw))))

    @property
    def points(self) -> int:
        """XP this weight is worth."""
        return self.value * POINTS_PER_WEIGHT

    def __int__(self) -> int:
        return self.value
