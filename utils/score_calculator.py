"""Score calculator utility for weighted risk-engineering ratings.

This module provides functions to load industry weights and aggregate
1-5 factor ratings into weighted totals, worst-of pillar ratings and
top-contributor lists.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-06
Version: 2.0.0
License: MIT
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models.score_factor import (
    MAX_RATING,
    MIN_RATING,
    ScoreBreakdown,
    ScoreFactor,
    ScoreResult,
)

from .config import config
from .schema_validator import load_validated_yaml

logger = logging.getLogger(__name__)

# RE-07 exposure factors
ENVIRONMENTAL_PERIL_KEYS = (
    "exposures_flood",
    "exposures_wind_storm",
    "exposures_earthquake",
    "exposures_wildfire",
)
OTHER_PERIL_KEY = "exposures_other"
HUMAN_EXPOSURE_KEY = "exposures_human_malicious"


@lru_cache(maxsize=1)
def load_weights() -> dict:
    """Load the industry weight map from config/industry_weights.yml.

    Returns:
        Dictionary with 'meta' and 'industries' sections.

    Raises:
        FileNotFoundError: If the weight map doesn't exist.
        ValueError: If the weight map fails schema validation.

    Example:
        >>> weights = load_weights()
        >>> print(weights['meta']['default_weight'])
        3
    """
    weights_config = load_validated_yaml("industry_weights")
    logger.info(
        f"Loaded weights for {len(weights_config['industries'])} industries"
    )
    return weights_config


def canonical_keys(weights_config: Optional[dict] = None) -> List[str]:
    """Get the canonical risk-engineering factor keys, in display order."""
    weights_config = weights_config or load_weights()
    return list(weights_config['meta']['canonical_keys'])


def humanize_key(key: str) -> str:
    """Turn a snake_case key into a title ("exposures_flood" -> "Exposures Flood")."""
    return " ".join(word.capitalize() for word in str(key).split("_") if word)


def industry_label(industry_key: Optional[str], weights_config: Optional[dict] = None) -> str:
    """Get the display label of an industry classification."""
    if not industry_key:
        return "No Industry Selected"
    weights_config = weights_config or load_weights()
    industry = weights_config['industries'].get(industry_key) or {}
    return industry.get('label') or humanize_key(industry_key)


def get_factor_weight(
    industry_key: Optional[str],
    canonical_key: str,
    weights_config: Optional[dict] = None
) -> float:
    """Get the weight of a factor for an industry.

    Falls back to the default weight when no industry is selected, the
    industry has no entry for the factor, or the configured weight is
    outside 1-5.

    Args:
        industry_key: Selected industry classification, may be None.
        canonical_key: Factor key.
        weights_config: Weight map (loaded from config when None).

    Returns:
        Weight as a float.
    """
    weights_config = weights_config or load_weights()
    default_weight = float(weights_config['meta'].get('default_weight', config.DEFAULT_WEIGHT))

    if not industry_key or industry_key not in weights_config['industries']:
        return default_weight

    weight = weights_config['industries'][industry_key].get('weights', {}).get(canonical_key)
    if weight is None:
        return default_weight

    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight < 1 or weight > 5:
        logger.warning(
            f"Invalid weight {weight!r} for {canonical_key} in {industry_key}, "
            f"using default {default_weight}"
        )
        return default_weight

    return float(weight)


def normalize_rating(value: Any) -> int:
    """Coerce a stored rating into the closed 1-5 domain.

    Missing, non-integer or out-of-range values read as the neutral rating
    so an incomplete assessment neither minimises nor maximises the total.

    Example:
        >>> normalize_rating(None)
        3
        >>> normalize_rating("2")
        2
    """
    if isinstance(value, bool) or value is None:
        return config.NEUTRAL_RATING
    try:
        number = float(value)
    except (TypeError, ValueError):
        return config.NEUTRAL_RATING
    if not number.is_integer() or number < MIN_RATING or number > MAX_RATING:
        return config.NEUTRAL_RATING
    return int(number)


def calculate_score(rating: int, weight: float) -> float:
    """Weighted score of one factor."""
    return rating * weight


def pillar_rating(ratings: Iterable[int]) -> Optional[int]:
    """Worst (minimum) rating of a factor group, None for an empty group.

    Deliberately not an average: one severe factor is never diluted by
    several benign ones.
    """
    ratings = list(ratings)
    return min(ratings) if ratings else None


def overall_rating(pillar_ratings: Iterable[Optional[int]]) -> Optional[int]:
    """Combine pillar ratings the same way: the worst pillar wins."""
    return pillar_rating(r for r in pillar_ratings if r is not None)


def score(factors: List[ScoreFactor]) -> ScoreResult:
    """Aggregate a list of factors.

    Args:
        factors: Rated factors.

    Returns:
        ScoreResult with total (sum of rating x weight), score per factor
        and the worst-of pillar rating.

    Example:
        >>> result = score([ScoreFactor(canonical_key="flood", rating=2)])
        >>> result.total, result.pillar_rating
        (2.0, 2)
    """
    per_factor = {factor.canonical_key: factor.score for factor in factors}
    return ScoreResult(
        total=sum(factor.score for factor in factors),
        per_factor=per_factor,
        pillar_rating=pillar_rating(factor.rating for factor in factors),
    )


def rescore(
    factors: List[ScoreFactor],
    result: ScoreResult,
    canonical_key: str,
    new_rating: Any,
    weight: Optional[float] = None
) -> Tuple[List[ScoreFactor], ScoreResult]:
    """Change one factor's rating and update the aggregate incrementally.

    Only the re-rated factor's score and the total change; the total moves
    by exactly (new - old) x weight. Setting the same rating twice is a
    no-op. A key not yet in the list is appended with `weight` (default
    weight when None) and counted from zero.

    Args:
        factors: Current factor list.
        result: Aggregate previously computed for `factors`.
        canonical_key: Factor to re-rate.
        new_rating: New rating (normalised to 1-5).
        weight: Weight for a factor not yet in the list.

    Returns:
        Tuple of (updated factor list, updated result).
    """
    rating = normalize_rating(new_rating)
    updated: List[ScoreFactor] = []
    delta = 0.0
    found = False

    for factor in factors:
        if factor.canonical_key == canonical_key:
            found = True
            delta = (rating - factor.rating) * factor.weight
            factor = factor.model_copy(update={'rating': rating})
        updated.append(factor)

    if not found:
        new_factor = ScoreFactor(
            canonical_key=canonical_key,
            rating=rating,
            weight=weight if weight is not None else config.DEFAULT_WEIGHT,
        )
        delta = new_factor.score
        updated.append(new_factor)

    per_factor = dict(result.per_factor)
    per_factor[canonical_key] = per_factor.get(canonical_key, 0.0) + delta

    return updated, ScoreResult(
        total=result.total + delta,
        per_factor=per_factor,
        pillar_rating=pillar_rating(factor.rating for factor in updated),
    )


def top_contributors(factors: List[ScoreFactor], limit: Optional[int] = None) -> List[ScoreFactor]:
    """Highest scoring factors for executive reporting.

    Sorted by score descending; ties keep their input order.
    """
    limit = limit if limit is not None else config.TOP_CONTRIBUTORS
    return sorted(factors, key=lambda factor: factor.score, reverse=True)[:limit]


def build_factors(
    ratings: Mapping[str, Any],
    industry_key: Optional[str] = None,
    keys: Optional[Iterable[str]] = None,
    weights_config: Optional[dict] = None
) -> List[ScoreFactor]:
    """Build weighted factors from a ratings map.

    Args:
        ratings: Canonical key to stored rating; missing keys read as neutral.
        industry_key: Industry used to look up weights.
        keys: Factor keys to include (all canonical keys when None).
        weights_config: Weight map (loaded from config when None).

    Returns:
        List of ScoreFactor in key order.
    """
    weights_config = weights_config or load_weights()
    keys = list(keys) if keys is not None else canonical_keys(weights_config)

    return [
        ScoreFactor(
            canonical_key=key,
            rating=normalize_rating(ratings.get(key)),
            weight=get_factor_weight(industry_key, key, weights_config),
            label=humanize_key(key),
        )
        for key in keys
    ]


def build_score_breakdown(
    risk_engineering_data: Mapping[str, Any],
    weights_config: Optional[dict] = None
) -> ScoreBreakdown:
    """Build the risk-score table from the RISK_ENGINEERING module data.

    Args:
        risk_engineering_data: Module data holding 'industry_key' and 'ratings'.
        weights_config: Weight map (loaded from config when None).

    Returns:
        ScoreBreakdown with per-factor rows, total, max score, worst-of
        pillar rating and top contributors.

    Example:
        >>> breakdown = build_score_breakdown({"industry_key": "data_center", "ratings": {}})
        >>> breakdown.total_score == 3 * breakdown.max_score / 5
        True
    """
    weights_config = weights_config or load_weights()
    industry_key = risk_engineering_data.get('industry_key') or None
    ratings = risk_engineering_data.get('ratings')
    if not isinstance(ratings, Mapping):
        ratings = {}

    factors = build_factors(ratings, industry_key, weights_config=weights_config)
    result = score(factors)
    max_score = sum(calculate_score(MAX_RATING, factor.weight) for factor in factors)

    breakdown = ScoreBreakdown(
        industry_key=industry_key,
        industry_label=industry_label(industry_key, weights_config),
        factors=factors,
        total_score=result.total,
        max_score=max_score,
        pillar_rating=result.pillar_rating,
        top_contributors=top_contributors(factors),
    )

    logger.info(
        f"Risk score {breakdown.total_score:.1f}/{breakdown.max_score:.1f} "
        f"for industry {industry_key or 'none'}"
    )
    return breakdown


def exposure_ratings(ratings: Mapping[str, Any], include_other: bool = False) -> Dict[str, Optional[int]]:
    """Derive the RE-07 exposure pillars.

    Args:
        ratings: Canonical key to stored rating for the exposure factors.
        include_other: Whether the optional "other" peril is assessed.

    Returns:
        Dictionary with 'environmental' (worst peril), 'human' and
        'overall' (worst of the two pillars).

    Example:
        >>> exposure_ratings({"exposures_flood": 2, "exposures_human_malicious": 4})
        {'environmental': 2, 'human': 4, 'overall': 2}
    """
    peril_keys = list(ENVIRONMENTAL_PERIL_KEYS)
    if include_other:
        peril_keys.append(OTHER_PERIL_KEY)

    environmental = pillar_rating(normalize_rating(ratings.get(key)) for key in peril_keys)
    human = normalize_rating(ratings.get(HUMAN_EXPOSURE_KEY))

    return {
        'environmental': environmental,
        'human': human,
        'overall': overall_rating([environmental, human]),
    }


# Made with Bob
