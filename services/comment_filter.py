import logging
from typing import Iterable, List

from config import Config
from models.data_models import FilterMode, RedditComment, RedditThread
from services.errors import PerThreadExpansionFailure

logger = logging.getLogger(__name__)


def has_text(comment: RedditComment) -> bool:
    return bool(comment.body and comment.body.strip())


def passes_engagement_filter(
    comment: RedditComment,
    score_threshold: int = Config.SCORE_THRESHOLD,
    ratio_threshold: float = Config.UPVOTE_RATIO_THRESHOLD,
) -> bool:
    """Keep a comment with text that is upvoted, well received, or awarded."""
    if not has_text(comment):
        return False
    return (
        comment.score > score_threshold
        or comment.upvote_ratio > ratio_threshold
        or comment.award_count > 0
    )


def filter_comments(
    comments: Iterable[RedditComment], mode: FilterMode = FilterMode.ENGAGEMENT
) -> List[RedditComment]:
    """Apply the relevance predicate for the given mode, preserving order."""
    if mode == FilterMode.ENGAGEMENT:
        predicate = passes_engagement_filter
    elif mode == FilterMode.NONE:
        predicate = has_text
    else:
        raise ValueError(f"Unknown filter mode: {mode}")
    return [c for c in comments if predicate(c)]


def cap_comments(texts: List[str], limit: int = Config.MAX_DIGEST_COMMENTS) -> List[str]:
    """Keep the first `limit` texts in discovery order; later ones are dropped."""
    if len(texts) > limit:
        logger.info(f"Capping {len(texts)} comments to the first {limit}")
    return texts[:limit]


def gather_comments(
    source,
    threads: Iterable[RedditThread],
    mode: FilterMode = FilterMode.ENGAGEMENT,
    reply_depth: int = 1,
    more_limit: int = 5,
    limit: int = Config.MAX_DIGEST_COMMENTS,
) -> List[str]:
    """
    Expand each thread in turn and accumulate the bodies of comments that
    pass the filter. A thread whose replies fail to load is logged and
    skipped; every other error propagates.
    `source` is anything with a RedditService-style collect_comments().
    """
    texts: List[str] = []
    for thread in threads:
        try:
            comments = source.collect_comments(
                thread.id, reply_depth=reply_depth, more_limit=more_limit
            )
        except PerThreadExpansionFailure as e:
            logger.warning(f"Skipping thread {e.thread_id}: {e}")
            continue
        texts.extend(c.body for c in filter_comments(comments, mode))
    return cap_comments(texts, limit)
