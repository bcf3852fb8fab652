"""Normalization of raw provider reviews into NormalizedReview.

Every function here is pure: same raw record in, same review out.
"""

import logging
import re
from datetime import datetime, timezone
from functools import singledispatch
from statistics import mean
from typing import Iterable, List

from .constants import ProviderConstants, RatingConstants
from .models import NormalizedReview, ReviewSource, ReviewType
from .provider_models import GoogleReview, HostawayReview

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def to_five_point_scale(native_rating: float) -> float:
    """Project a 0-10 category rating onto the 1-5 review scale."""
    return native_rating / RatingConstants.CATEGORY_SCALE_DIVISOR


def round_rating(value: float) -> float:
    return round(float(value), RatingConstants.RATING_PRECISION)


def derive_property_id(property_name: str) -> str:
    """Build a property id from the code before the first hyphen.

    "2B N1 A - 29 Shoreditch Heights" -> "2b_n1_a"; names without a hyphen
    map to "unknown".
    """
    if "-" not in property_name:
        return "unknown"
    code = property_name.split("-", 1)[0].strip()
    return _WHITESPACE_RE.sub("_", code).lower()


def hostaway_rating(raw: HostawayReview) -> float:
    """Overall rating if Hostaway sent one, else the category mean on 1-5."""
    if raw.rating is not None:
        return float(raw.rating)
    if raw.review_category:
        category_mean = mean(c.rating for c in raw.review_category)
        return round_rating(to_five_point_scale(category_mean))
    logger.debug(f"Hostaway review {raw.id} has no rating signal, defaulting to {RatingConstants.DEFAULT_RATING}")
    return RatingConstants.DEFAULT_RATING


def _parse_hostaway_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@singledispatch
def normalize(raw) -> NormalizedReview:
    """Convert one raw provider record into a NormalizedReview."""
    raise TypeError(f"No normalizer registered for {type(raw).__name__}")


@normalize.register
def _(raw: HostawayReview) -> NormalizedReview:
    review_type = (
        ReviewType.GUEST_REVIEW if raw.type == ProviderConstants.GUEST_TO_HOST
        else ReviewType.HOST_REVIEW
    )
    return NormalizedReview(
        id=str(raw.id),
        source=ReviewSource.HOSTAWAY,
        property_id=derive_property_id(raw.listing_name),
        property_name=raw.listing_name,
        guest_name=raw.guest_name,
        rating=hostaway_rating(raw),
        comment=raw.public_review,
        submitted_at=_parse_hostaway_timestamp(raw.submitted_at),
        categories=tuple(raw.review_category),
        channel=ProviderConstants.HOSTAWAY_CHANNEL,
        is_approved=False,
        is_public=False,
        type=review_type,
    )


@normalize.register
def _(raw: GoogleReview) -> NormalizedReview:
    # Google reviews are already public on Maps, so they start approved.
    return NormalizedReview(
        id=f"{ProviderConstants.GOOGLE_ID_PREFIX}_{raw.place_id}_{raw.index}",
        source=ReviewSource.GOOGLE,
        property_id=derive_property_id(raw.property_name),
        property_name=raw.place_name or raw.property_name,
        guest_name=raw.author_name,
        rating=float(raw.rating),
        comment=raw.text,
        submitted_at=datetime.fromtimestamp(raw.time, tz=timezone.utc),
        categories=(),
        channel=ProviderConstants.GOOGLE_CHANNEL,
        is_approved=True,
        is_public=False,
        type=ReviewType.GUEST_REVIEW,
    )


def normalize_all(records: Iterable) -> List[NormalizedReview]:
    return [normalize(raw) for raw in records]
