import logging

from flask import Flask, jsonify, request

from config import Config
from logging_config import setup_logging
from models.data_models import MODE_SETTINGS, PipelineMode
from services.digest_service import DigestService
from services.errors import VibecheckError
from services.llm_provider import OpenAIProvider
from services.reddit_service import RedditService
from services.vibecheck_service import VibecheckService

config = Config()
setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)

mode = PipelineMode(config.VIBECHECK_MODE.lower())
mode_settings = MODE_SETTINGS[mode]

# Initialize services
reddit_svc = RedditService(
    config.REDDIT_CLIENT_ID,
    config.REDDIT_CLIENT_SECRET,
    config.REDDIT_USER_AGENT,
    username=config.REDDIT_USERNAME,
    password=config.REDDIT_PASSWORD,
    timeout=config.REDDIT_TIMEOUT,
)
llm = OpenAIProvider(config.OPENAI_API_KEY, config.LLM_MODEL, timeout=config.LLM_TIMEOUT)
digest_svc = DigestService(
    llm,
    schema=mode_settings.schema,
    temperature=config.LLM_TEMPERATURE,
    max_tokens=config.LLM_MAX_TOKENS,
    enforce_provenance=config.ENFORCE_QUOTE_PROVENANCE,
)
vibecheck_svc = VibecheckService(
    reddit_svc,
    digest_svc,
    mode_settings,
    reply_depth=config.REPLY_DEPTH,
    more_limit=config.MORE_COMMENTS_LIMIT,
    max_comments=config.MAX_DIGEST_COMMENTS,
)


# ----- API Routes -----


@app.route("/healthz")
def healthz():
    return jsonify(status="ok", mode=mode.value)


@app.route("/api/vibecheck", methods=["POST"])
def vibecheck():
    data = request.get_json(silent=True)
    query = data.get("query") if isinstance(data, dict) else None
    if not query or not isinstance(query, str) or not query.strip():
        return jsonify(error="Missing query"), 400

    try:
        digest = vibecheck_svc.run(query)
    except VibecheckError as e:
        logger.error(f"Vibecheck failed for '{query}': {type(e).__name__}: {e}")
        return jsonify(error="AI summarization failed"), 500
    except Exception:
        logger.exception(f"Unexpected error during vibecheck for '{query}'")
        return jsonify(error="AI summarization failed"), 500

    return jsonify(digest.to_payload())


if __name__ == "__main__":
    app.run(debug=config.DEBUG, port=config.PORT)
