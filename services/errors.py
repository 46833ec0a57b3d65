class VibecheckError(Exception):
    """Base class for every failure the vibecheck pipeline reports."""


class InvalidInput(VibecheckError):
    """The query is missing, not a string, or blank."""


class UpstreamSourceFailure(VibecheckError):
    """Reddit search failed (auth, network, rate limit)."""


class PerThreadExpansionFailure(VibecheckError):
    """Loading one thread's replies failed. Recovered by skipping the thread."""

    def __init__(self, thread_id: str, message: str = ""):
        self.thread_id = thread_id
        super().__init__(message or f"Failed to load comments for thread {thread_id}")


class MalformedDigest(VibecheckError):
    """The model's reply did not decode into a valid digest."""


class CompletionServiceFailure(VibecheckError):
    """The LLM completion call itself failed."""
