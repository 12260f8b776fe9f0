"""
Scoring categories for the PERMA Profiler.

Invariants:
- Every category has exactly one full name
- Every averaged category lists its member question ids explicitly
- PERMA composite and Lon are derived specially by the Scoring Engine

Design:
- Category is a string-based enum for JSON serialization and for the
  {{score_<KEY>}} template tokens (the enum value is the token key)
- Tables are keyed by the enum, not by string literals, and are
  checked for completeness at import time
"""

from enum import Enum
from typing import Dict, Tuple


class Category(str, Enum):
    """
    Score result keys, in report order.

    P, E, R, M, A:
        The five PERMA dimensions, three questions each.
    N, H:
        Supplementary negative emotion and health groups, three questions each.
    PERMA:
        Composite over the fifteen PERMA questions plus 'hap'.
    LON:
        The standalone loneliness item, reported as-is.
    """
    P = "P"
    E = "E"
    R = "R"
    M = "M"
    A = "A"
    N = "N"
    H = "H"
    PERMA = "PERMA"
    LON = "Lon"


PERMA_DIMENSIONS: Tuple[Category, ...] = (
    Category.P, Category.E, Category.R, Category.M, Category.A
)

# Three-item groups averaged by the Scoring Engine
CATEGORY_MEMBERS: Dict[Category, Tuple[str, ...]] = {
    Category.P: ("P1", "P2", "P3"),
    Category.E: ("E1", "E2", "E3"),
    Category.R: ("R1", "R2", "R3"),
    Category.M: ("M1", "M2", "M3"),
    Category.A: ("A1", "A2", "A3"),
    Category.N: ("N1", "N2", "N3"),
    Category.H: ("H1", "H2", "H3"),
}

HAPPINESS_QUESTION_ID = "hap"
LONELINESS_QUESTION_ID = "Lon"

CATEGORY_NAMES: Dict[Category, str] = {
    Category.P: "Positive Emotion",
    Category.E: "Engagement",
    Category.R: "Relationships",
    Category.M: "Meaning",
    Category.A: "Accomplishment",
    Category.N: "Negative Emotion",
    Category.H: "Health",
    Category.LON: "Loneliness",
    Category.PERMA: "Overall Well-being",
}


def category_name(category) -> str:
    """
    Resolve a category to its human-readable name.

    Args:
        category: Category member or raw key string

    Returns:
        str: Full name, or the raw key if it is not a known category
    """
    try:
        return CATEGORY_NAMES[Category(category)]
    except ValueError:
        return str(category)


def all_referenced_question_ids() -> Tuple[str, ...]:
    """Every question id the Scoring Engine reads, in category order"""
    ids = []
    for members in CATEGORY_MEMBERS.values():
        ids.extend(members)
    ids.append(HAPPINESS_QUESTION_ID)
    ids.append(LONELINESS_QUESTION_ID)
    return tuple(ids)


def _check_tables() -> None:
    missing_names = [c.value for c in Category if c not in CATEGORY_NAMES]
    if missing_names:
        raise RuntimeError(f"Category names missing for: {missing_names}")

    for category, members in CATEGORY_MEMBERS.items():
        if len(members) != 3:
            raise RuntimeError(
                f"Category {category.value} must list exactly 3 questions, got {len(members)}"
            )


_check_tables()
