"""
Interpretation Mapper - Qualitative bands and canned explanations

Responsibilities:
- Bucket a numeric category score into Low / Moderate / High
- Resolve the explanatory sentence for each (category, band) pair
- Combine both into Interpretation records for the renderer

Band thresholds:
    score < 3.33  -> Low
    score < 6.67  -> Moderate
    otherwise     -> High

The cut points are the literal decimals, so 3.33 itself is Moderate and
6.67 itself is High (inclusive-low for the band above).

The sentence table is keyed by (Category, Band) and checked for
completeness at import time. The generic fallback exists only for keys
outside the Category enum; it is logged as a warning whenever it fires.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Tuple

from backend.utils.categories import Category, category_name

logger = logging.getLogger(__name__)

LOW_UPPER_BOUND = 3.33
MODERATE_UPPER_BOUND = 6.67


class Band(str, Enum):
    """Qualitative interpretation band"""
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


EXPLANATIONS: Dict[Tuple[Category, Band], str] = {
    (Category.P, Band.LOW): (
        "You rarely experience feelings of joy, positivity and contentment. "
        "Consider making room for small activities that reliably lift your mood."
    ),
    (Category.P, Band.MODERATE): (
        "You experience positive emotions some of the time. "
        "There is room to cultivate more joy and contentment in your daily life."
    ),
    (Category.P, Band.HIGH): (
        "You frequently experience joy, positivity and contentment in your daily life."
    ),
    (Category.E, Band.LOW): (
        "You seldom feel absorbed or interested in what you do. "
        "Exploring activities that use your strengths may help you feel more engaged."
    ),
    (Category.E, Band.MODERATE): (
        "You feel engaged in some of your activities. "
        "Finding more tasks that absorb you could deepen this sense of involvement."
    ),
    (Category.E, Band.HIGH): (
        "You often become absorbed in and excited by what you are doing."
    ),
    (Category.R, Band.LOW): (
        "You may not feel well supported or loved by others at present. "
        "Reaching out to people you trust could strengthen these connections."
    ),
    (Category.R, Band.MODERATE): (
        "You have some supportive relationships. "
        "Investing time in them may help you feel more connected and cared for."
    ),
    (Category.R, Band.HIGH): (
        "You feel loved, supported and satisfied with your personal relationships."
    ),
    (Category.M, Band.LOW): (
        "You may currently lack a clear sense of purpose or direction. "
        "Reflecting on what matters most to you could help build a sense of meaning."
    ),
    (Category.M, Band.MODERATE): (
        "You have some sense of purpose and direction. "
        "Connecting your daily activities to your values could strengthen it."
    ),
    (Category.M, Band.HIGH): (
        "You generally feel that your life is purposeful, valuable and headed in a clear direction."
    ),
    (Category.A, Band.LOW): (
        "You may feel that you are not making progress towards your goals. "
        "Setting small, achievable goals can help build momentum."
    ),
    (Category.A, Band.MODERATE): (
        "You make progress towards your goals some of the time. "
        "Clarifying priorities may help you accomplish more of what matters to you."
    ),
    (Category.A, Band.HIGH): (
        "You regularly make progress towards your goals and handle your responsibilities well."
    ),
    (Category.N, Band.LOW): (
        "You rarely feel anxious, angry or sad. Negative emotions play a small part in your daily life."
    ),
    (Category.N, Band.MODERATE): (
        "You experience negative emotions such as anxiety, anger or sadness some of the time. "
        "This is common, but notice whether they interfere with your daily life."
    ),
    (Category.N, Band.HIGH): (
        "You frequently feel anxious, angry or sad. "
        "Consider talking with someone you trust or a professional about how you feel."
    ),
    (Category.H, Band.LOW): (
        "You rate your physical health as poor. "
        "It may be worth discussing your health with a medical professional."
    ),
    (Category.H, Band.MODERATE): (
        "You rate your physical health as fair. "
        "Small changes in activity, sleep or diet may help you feel better."
    ),
    (Category.H, Band.HIGH): (
        "You rate your physical health as good and feel satisfied with it."
    ),
    (Category.LON, Band.LOW): (
        "You rarely feel lonely in your daily life."
    ),
    (Category.LON, Band.MODERATE): (
        "You feel lonely some of the time. "
        "Spending more time with people you care about may help."
    ),
    (Category.LON, Band.HIGH): (
        "You often feel lonely. "
        "Reaching out to friends, family or a support group could help you feel more connected."
    ),
    (Category.PERMA, Band.LOW): (
        "Your overall well-being is low at the moment. "
        "Focusing on one or two areas above may be a good place to start."
    ),
    (Category.PERMA, Band.MODERATE): (
        "Your overall well-being is moderate. "
        "You are doing well in some areas and have room to grow in others."
    ),
    (Category.PERMA, Band.HIGH): (
        "Your overall well-being is high. You are flourishing across most areas of your life."
    ),
}


@dataclass(frozen=True)
class Interpretation:
    """
    Interpretation of one category score.

    Attributes:
        category: Category key
        name: Full category name (e.g. 'Positive Emotion')
        score: Category average
        band: Qualitative band
        text: Explanatory sentence for (category, band)
    """
    category: Category
    name: str
    score: float
    band: Band
    text: str


def band(score: float) -> Band:
    """
    Bucket a score into its band.

    Examples:
        >>> band(3.32)
        <Band.LOW: 'Low'>
        >>> band(3.33)
        <Band.MODERATE: 'Moderate'>
        >>> band(6.67)
        <Band.HIGH: 'High'>
    """
    if score < LOW_UPPER_BOUND:
        return Band.LOW
    if score < MODERATE_UPPER_BOUND:
        return Band.MODERATE
    return Band.HIGH


def explain(category, score_band: Band) -> str:
    """
    Explanatory sentence for a category in a band.

    Args:
        category: Category member or raw key string
        score_band: Band from band()

    Returns:
        str: Canned sentence, or the generic fallback for unknown keys
    """
    try:
        key = Category(category)
    except ValueError:
        key = None

    if key is not None and (key, score_band) in EXPLANATIONS:
        return EXPLANATIONS[(key, score_band)]

    logger.warning(f"No interpretation for category {category!r}, using generic sentence")
    return f"Your score for {category_name(category)} is in the {score_band.value} range."


def interpret(scores: Mapping[Category, float]) -> Dict[Category, Interpretation]:
    """
    Interpret every score in a Score Result mapping.

    Args:
        scores: Output of ScoringEngine.score()

    Returns:
        dict: Category -> Interpretation, in the same order as scores
    """
    interpretations = {}
    for category, score in scores.items():
        score_band = band(score)
        interpretations[category] = Interpretation(
            category=category,
            name=category_name(category),
            score=score,
            band=score_band,
            text=explain(category, score_band),
        )
    return interpretations


def _check_tables() -> None:
    gaps = [
        f"{category.value}/{score_band.value}"
        for category in Category
        for score_band in Band
        if (category, score_band) not in EXPLANATIONS
    ]
    if gaps:
        raise RuntimeError(f"Interpretation table missing entries: {gaps}")


_check_tables()
