"""Shared fixtures for the vibecheck test suite."""
import json

import pytest

from models.data_models import RedditComment, RedditThread


def make_thread(thread_id, title="Thread"):
    return RedditThread(
        id=thread_id,
        title=title,
        subreddit="headphones",
        score=100,
        num_comments=10,
        url=f"https://reddit.com/r/headphones/comments/{thread_id}",
        permalink=f"https://reddit.com/r/headphones/comments/{thread_id}/",
        selftext="",
        created_utc=1700000000.0,
        author="poster",
    )


def make_comment(comment_id, body, score=0, upvote_ratio=0.0, award_count=0, thread_id="t1"):
    return RedditComment(
        id=comment_id,
        thread_id=thread_id,
        author="commenter",
        body=body,
        score=score,
        created_utc=1700000000.0,
        depth=0,
        permalink=f"/r/headphones/comments/{thread_id}/_/{comment_id}/",
        upvote_ratio=upvote_ratio,
        award_count=award_count,
    )


class FakeCommentSource:
    """Stands in for RedditService: thread id -> comments, or an exception."""

    def __init__(self, threads=None, comments_by_thread=None, search_error=None):
        self.threads = threads or []
        self.comments_by_thread = comments_by_thread or {}
        self.search_error = search_error
        self.collected = []
        self.search_calls = []

    def search_threads(self, keyword, max_threads=10, time_filter="week", sort="relevance"):
        self.search_calls.append(
            {"keyword": keyword, "max_threads": max_threads, "time_filter": time_filter, "sort": sort}
        )
        if self.search_error:
            raise self.search_error
        return list(self.threads)

    def collect_comments(self, thread_id, reply_depth=1, more_limit=5):
        self.collected.append(thread_id)
        result = self.comments_by_thread.get(thread_id, [])
        if isinstance(result, Exception):
            raise result
        return result


class FakeLLM:
    """Records prompts and replies with a canned string (or raises)."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete_text(self, system_prompt, user_prompt, temperature=0.3, max_tokens=1500):
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def sample_payload():
    return {
        "overallSummary": "Owners like the sound but complain about comfort.",
        "topPraise": "Noise cancelling",
        "topPain": "Ear fatigue",
        "topIntensity": "Returned them after a week",
        "topRequestedFeature": "Replaceable ear pads",
        "praisePoints": [
            {"text": "ANC is excellent", "source": "The ANC blocks out my whole commute"},
        ],
        "painPoints": [
            {"text": "Uncomfortable after hours", "source": "My ears hurt after two hours"},
        ],
        "requestedFeatures": [
            {"text": "Replaceable pads", "source": "Wish I could swap the ear pads"},
        ],
    }


@pytest.fixture
def sample_comments():
    return [
        "The ANC blocks out my whole commute",
        "My ears hurt after two hours",
        "Wish I could swap the ear pads",
    ]


@pytest.fixture
def sample_reply(sample_payload):
    return json.dumps(sample_payload)
