import logging
from typing import List, Optional

import praw
from praw.models import MoreComments

from models.data_models import RedditComment, RedditThread
from services.errors import PerThreadExpansionFailure, UpstreamSourceFailure

logger = logging.getLogger(__name__)


class RedditService:
    """Handles all Reddit API interactions via PRAW."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        user_agent: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 16,
    ):
        self._settings = {
            "client_id": client_id,
            "client_secret": client_secret,
            "user_agent": user_agent,
            "timeout": timeout,
        }
        # Script-app login is optional; without it PRAW runs read-only
        if username and password:
            self._settings["username"] = username
            self._settings["password"] = password
        self._reddit = None

    @property
    def reddit(self) -> praw.Reddit:
        if self._reddit is None:
            self._reddit = praw.Reddit(**self._settings)
        return self._reddit

    def search_threads(
        self,
        keyword: str,
        max_threads: int = 10,
        time_filter: str = "week",
        sort: str = "relevance",
    ) -> List[RedditThread]:
        """
        Search all of Reddit for threads matching the keyword.
        Order is Reddit's own ranking. The listing is consumed inside the
        try block so that any API failure surfaces as UpstreamSourceFailure
        and no partial result escapes.
        """
        try:
            submissions = list(
                self.reddit.subreddit("all").search(
                    keyword, sort=sort, time_filter=time_filter, limit=max_threads
                )
            )
            threads = [self._to_thread(s) for s in submissions]
        except Exception as e:
            logger.error(f"Reddit search failed for '{keyword}': {e}")
            raise UpstreamSourceFailure(f"Reddit search failed: {e}") from e

        logger.info(f"Reddit search for '{keyword}' returned {len(threads)} threads")
        return threads

    def collect_comments(
        self, thread_id: str, reply_depth: int = 1, more_limit: int = 5
    ) -> List[RedditComment]:
        """
        Collect comments from a single thread.
        Expands at most more_limit "load more comments" stubs, skips any that
        remain, and keeps only comments shallower than reply_depth (depth 0 is
        top-level).
        """
        try:
            submission = self.reddit.submission(id=thread_id)
            submission.comments.replace_more(limit=more_limit)
            comments = []
            for comment in submission.comments.list():
                # Stubs left over once the expansion budget runs out
                if isinstance(comment, MoreComments) or comment.depth >= reply_depth:
                    continue
                comments.append(self._to_comment(thread_id, comment))
        except Exception as e:
            raise PerThreadExpansionFailure(thread_id, str(e)) from e
        return comments

    @staticmethod
    def _to_thread(submission) -> RedditThread:
        return RedditThread(
            id=submission.id,
            title=submission.title,
            subreddit=str(submission.subreddit),
            score=submission.score,
            num_comments=submission.num_comments,
            url=submission.url,
            permalink=f"https://reddit.com{submission.permalink}",
            selftext=(submission.selftext or "")[:500],
            created_utc=submission.created_utc,
            author=str(submission.author) if submission.author else "[deleted]",
        )

    @staticmethod
    def _to_comment(thread_id: str, comment) -> RedditComment:
        body = getattr(comment, "body", "") or ""
        if body in ("[deleted]", "[removed]"):
            body = ""
        return RedditComment(
            id=comment.id,
            thread_id=thread_id,
            author=str(comment.author) if comment.author else "[deleted]",
            body=body,
            score=getattr(comment, "score", 0) or 0,
            created_utc=getattr(comment, "created_utc", 0.0),
            depth=comment.depth,
            permalink=f"https://reddit.com{comment.permalink}",
            # Comments rarely carry a ratio or awards; absent means zero
            upvote_ratio=getattr(comment, "upvote_ratio", None) or 0.0,
            award_count=len(getattr(comment, "all_awardings", None) or []),
        )
