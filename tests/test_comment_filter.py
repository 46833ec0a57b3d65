"""Tests for comment extraction, filtering and capping."""
import pytest

from config import Config
from conftest import FakeCommentSource, make_comment, make_thread
from models.data_models import FilterMode
from services.comment_filter import (
    cap_comments,
    filter_comments,
    gather_comments,
    has_text,
    passes_engagement_filter,
)
from services.errors import PerThreadExpansionFailure


class TestEngagementFilter:
    """Score / ratio / award predicate."""

    def test_high_score_passes(self):
        assert passes_engagement_filter(make_comment("c1", "Great", score=11))

    def test_score_at_threshold_fails(self):
        assert not passes_engagement_filter(make_comment("c1", "Okay", score=10))

    def test_thresholds_come_from_config(self):
        at_score = make_comment("c1", "Okay", score=Config.SCORE_THRESHOLD)
        above_score = make_comment("c2", "Good", score=Config.SCORE_THRESHOLD + 1)
        at_ratio = make_comment("c3", "Fine", upvote_ratio=Config.UPVOTE_RATIO_THRESHOLD)
        assert not passes_engagement_filter(at_score)
        assert passes_engagement_filter(above_score)
        assert not passes_engagement_filter(at_ratio)

    def test_upvote_ratio_passes(self):
        assert passes_engagement_filter(make_comment("c1", "Nice", upvote_ratio=0.81))

    def test_award_passes(self):
        assert passes_engagement_filter(make_comment("c1", "Gold", award_count=1))

    def test_empty_body_never_passes(self):
        assert not passes_engagement_filter(make_comment("c1", "", score=500))
        assert not passes_engagement_filter(make_comment("c2", "   ", award_count=3))

    def test_low_engagement_fails(self):
        assert not passes_engagement_filter(make_comment("c1", "meh", score=2, upvote_ratio=0.5))


class TestFilterModes:
    """Engagement and text-only modes stay distinct."""

    def setup_method(self):
        self.comments = [
            make_comment("c1", "loved it", score=15),
            make_comment("c2", "fine", score=3),
            make_comment("c3", ""),
            make_comment("c4", "awarded", award_count=2),
        ]

    def test_engagement_mode(self):
        kept = filter_comments(self.comments, FilterMode.ENGAGEMENT)
        assert [c.id for c in kept] == ["c1", "c4"]

    def test_none_mode_keeps_all_with_text(self):
        kept = filter_comments(self.comments, FilterMode.NONE)
        assert [c.id for c in kept] == ["c1", "c2", "c4"]
        assert all(has_text(c) for c in kept)

    def test_filter_is_idempotent(self):
        for mode in (FilterMode.ENGAGEMENT, FilterMode.NONE):
            once = filter_comments(self.comments, mode)
            twice = filter_comments(once, mode)
            assert once == twice


class TestCap:

    def test_default_limit_is_config_value(self):
        texts = [f"comment {i}" for i in range(Config.MAX_DIGEST_COMMENTS + 5)]
        assert len(cap_comments(texts)) == Config.MAX_DIGEST_COMMENTS

    def test_keeps_first_fifty(self):
        texts = [f"comment {i}" for i in range(80)]
        capped = cap_comments(texts)
        assert len(capped) == 50
        assert capped == texts[:50]

    def test_short_list_untouched(self):
        assert cap_comments(["a", "b"]) == ["a", "b"]


class TestGatherComments:
    """Per-thread isolation and ordering."""

    def test_failing_thread_is_skipped(self):
        source = FakeCommentSource(
            comments_by_thread={
                "t1": [make_comment("a1", "first", score=20)],
                "t2": PerThreadExpansionFailure("t2", "boom"),
                "t3": [make_comment("c1", "third", score=30)],
            }
        )
        threads = [make_thread("t1"), make_thread("t2"), make_thread("t3")]

        result = gather_comments(source, threads)

        assert result == ["first", "third"]
        assert source.collected == ["t1", "t2", "t3"]

    def test_headphones_scenario(self):
        """Thread A yields two of three comments, thread B fails."""
        source = FakeCommentSource(
            comments_by_thread={
                "A": [
                    make_comment("A1", "Best ANC I've owned", score=15, thread_id="A"),
                    make_comment("A2", "They're ok", score=3, thread_id="A"),
                    make_comment("A3", "Battery lasts forever", score=11, thread_id="A"),
                ],
                "B": PerThreadExpansionFailure("B", "replies failed"),
            }
        )

        result = gather_comments(source, [make_thread("A"), make_thread("B")])

        assert result == ["Best ANC I've owned", "Battery lasts forever"]

    def test_more_than_fifty_qualifying_comments(self):
        comments = [make_comment(f"c{i}", f"text {i}", score=50) for i in range(60)]
        source = FakeCommentSource(comments_by_thread={"t1": comments[:30], "t2": comments[30:]})

        result = gather_comments(source, [make_thread("t1"), make_thread("t2")])

        assert result == [f"text {i}" for i in range(50)]

    def test_no_threads(self):
        assert gather_comments(FakeCommentSource(), []) == []

    def test_unexpected_error_propagates(self):
        source = FakeCommentSource(comments_by_thread={"t1": RuntimeError("bug")})
        with pytest.raises(RuntimeError):
            gather_comments(source, [make_thread("t1")])
