import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Reddit API
    REDDIT_CLIENT_ID = os.environ.get("REDDIT_CLIENT_ID", "")
    REDDIT_CLIENT_SECRET = os.environ.get("REDDIT_CLIENT_SECRET", "")
    REDDIT_USER_AGENT = os.environ.get("REDDIT_USER_AGENT", "Vibecheck/1.0")
    REDDIT_USERNAME = os.environ.get("REDDIT_USERNAME", "")
    REDDIT_PASSWORD = os.environ.get("REDDIT_PASSWORD", "")
    REDDIT_TIMEOUT = float(os.environ.get("REDDIT_TIMEOUT", 16))

    # OpenAI API
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
    LLM_MODEL = os.environ.get("LLM_MODEL", "gpt-4o-mini")
    LLM_TEMPERATURE = float(os.environ.get("LLM_TEMPERATURE", 0.3))
    LLM_MAX_TOKENS = int(os.environ.get("LLM_MAX_TOKENS", 1500))
    LLM_TIMEOUT = float(os.environ.get("LLM_TIMEOUT", 60))

    # App settings
    DEBUG = os.environ.get("FLASK_DEBUG", "true").lower() == "true"
    PORT = int(os.environ.get("PORT", 5000))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Pipeline behaviour
    VIBECHECK_MODE = os.environ.get("VIBECHECK_MODE", "strict")
    ENFORCE_QUOTE_PROVENANCE = (
        os.environ.get("ENFORCE_QUOTE_PROVENANCE", "true").lower() == "true"
    )

    # Collection limits and engagement thresholds
    REPLY_DEPTH = 1
    MORE_COMMENTS_LIMIT = 5
    MAX_DIGEST_COMMENTS = 50
    SCORE_THRESHOLD = 10
    UPVOTE_RATIO_THRESHOLD = 0.8
