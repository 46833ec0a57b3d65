import json
import logging
import re
from typing import List

from pydantic import ValidationError

from models.data_models import Digest, DigestPoint, DigestSchema
from services.errors import MalformedDigest

logger = logging.getLogger(__name__)

FENCE_PATTERN = re.compile(r"^```(?:json)?|```$", re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r"\s+")

REQUIRED_FIELDS = {
    DigestSchema.BASIC: (
        "overallSummary",
        "topPraise",
        "topPain",
        "topIntensity",
        "praisePoints",
        "painPoints",
    ),
    DigestSchema.FULL: (
        "overallSummary",
        "topPraise",
        "topPain",
        "topIntensity",
        "topRequestedFeature",
        "praisePoints",
        "painPoints",
        "requestedFeatures",
    ),
}

POINT_LISTS = ("praise_points", "pain_points", "requested_features")


def strip_code_fences(raw: str) -> str:
    """Remove a leading ``` / ```json marker and a trailing ``` marker."""
    return FENCE_PATTERN.sub("", raw.strip()).strip()


def parse_digest(raw: str, schema: DigestSchema = DigestSchema.FULL) -> Digest:
    """
    Decode the model's reply into a Digest.
    Raises MalformedDigest on any decoding or validation problem; a partial
    digest is never returned.
    """
    text = strip_code_fences(raw or "")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDigest(f"Model reply is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedDigest("Model reply is not a JSON object")

    missing = [f for f in REQUIRED_FIELDS[schema] if payload.get(f) is None]
    if missing:
        raise MalformedDigest(f"Model reply is missing fields: {', '.join(missing)}")

    try:
        return Digest.model_validate(payload)
    except ValidationError as e:
        raise MalformedDigest(f"Model reply failed validation: {e}") from e


def _collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def _normalize_quote(source: str) -> str:
    return _collapse_whitespace(source.strip().strip('"'))


def is_verbatim(source, comments: List[str]) -> bool:
    """
    True when the quote appears word for word inside one of the comments.
    Runs of whitespace compare equal, so line breaks the model folded into
    spaces still match.
    """
    if not source:
        return False
    quote = _normalize_quote(source)
    if not quote:
        return False
    return any(quote in _collapse_whitespace(comment) for comment in comments)


def verify_sources(digest: Digest, comments: List[str]) -> Digest:
    """
    Drop every point whose source quote cannot be found in the comments
    that were sent to the model.
    """
    updates = {}
    for field in POINT_LISTS:
        points: List[DigestPoint] = getattr(digest, field)
        if points is None:
            continue
        kept = [p for p in points if is_verbatim(p.source, comments)]
        if len(kept) != len(points):
            logger.info(
                f"Dropped {len(points) - len(kept)} {field} with unverifiable quotes"
            )
        updates[field] = kept
    return digest.model_copy(update=updates)
