import logging

from config import Config
from models.data_models import Digest, ModeSettings
from services.comment_filter import gather_comments
from services.digest_service import DigestService
from services.errors import InvalidInput
from services.reddit_service import RedditService

logger = logging.getLogger(__name__)


class VibecheckService:
    """Runs the keyword -> comments -> digest pipeline for one query."""

    def __init__(
        self,
        reddit: RedditService,
        digest: DigestService,
        mode: ModeSettings,
        reply_depth: int = 1,
        more_limit: int = 5,
        max_comments: int = Config.MAX_DIGEST_COMMENTS,
    ):
        self.reddit = reddit
        self.digest = digest
        self.mode = mode
        self.reply_depth = reply_depth
        self.more_limit = more_limit
        self.max_comments = max_comments

    def run(self, query) -> Digest:
        """
        Search Reddit, collect and filter comments, and ask the LLM for a
        digest. Steps run strictly in sequence. An empty search result still
        reaches the LLM with an empty comment list.
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidInput("Query must be a non-empty string")
        keyword = query.strip()

        threads = self.reddit.search_threads(
            keyword,
            max_threads=self.mode.max_threads,
            time_filter="week",
            sort="relevance",
        )
        comments = gather_comments(
            self.reddit,
            threads,
            mode=self.mode.filter_mode,
            reply_depth=self.reply_depth,
            more_limit=self.more_limit,
            limit=self.max_comments,
        )
        logger.info(
            f"Collected {len(comments)} comments from {len(threads)} threads for '{keyword}'"
        )
        return self.digest.summarize(keyword, comments)
