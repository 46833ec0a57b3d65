from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_POINTS_PER_LIST = 5


class FilterMode(str, Enum):
    """Which comments survive extraction."""

    ENGAGEMENT = "engagement"
    NONE = "none"


class DigestSchema(str, Enum):
    """Shape of the digest the model is asked for."""

    BASIC = "basic"
    FULL = "full"


class PipelineMode(str, Enum):
    STRICT = "strict"
    SIMPLE = "simple"


@dataclass(frozen=True)
class ModeSettings:
    filter_mode: FilterMode
    schema: DigestSchema
    max_threads: int


MODE_SETTINGS = {
    PipelineMode.STRICT: ModeSettings(
        filter_mode=FilterMode.ENGAGEMENT,
        schema=DigestSchema.FULL,
        max_threads=10,
    ),
    PipelineMode.SIMPLE: ModeSettings(
        filter_mode=FilterMode.NONE,
        schema=DigestSchema.BASIC,
        max_threads=5,
    ),
}


@dataclass
class RedditThread:
    id: str
    title: str
    subreddit: str
    score: int
    num_comments: int
    url: str
    permalink: str
    selftext: str
    created_utc: float
    author: str = ""


@dataclass
class RedditComment:
    id: str
    thread_id: str
    author: str
    body: str
    score: int
    created_utc: float
    depth: int
    permalink: str
    upvote_ratio: float = 0.0
    award_count: int = 0


@dataclass
class DigestRequest:
    keyword: str
    comments: List[str]
    schema: DigestSchema
    system_prompt: str
    user_prompt: str

    @property
    def prompt(self) -> str:
        return f"{self.system_prompt}\n\n{self.user_prompt}"


# ===== LLM output =====


class DigestPoint(BaseModel):
    text: str = Field(description="Summarized insight or feedback theme")
    source: Optional[str] = Field(
        default=None,
        description="Direct, unedited quote from one of the input comments",
    )


class Digest(BaseModel):
    """Structured sentiment and feature-request summary for one keyword."""

    model_config = ConfigDict(populate_by_name=True)

    overall_summary: str = Field(alias="overallSummary")
    top_praise: str = Field(alias="topPraise")
    top_pain: str = Field(alias="topPain")
    top_intensity: str = Field(alias="topIntensity")
    top_requested_feature: Optional[str] = Field(
        default=None, alias="topRequestedFeature"
    )
    praise_points: List[DigestPoint] = Field(alias="praisePoints")
    pain_points: List[DigestPoint] = Field(alias="painPoints")
    requested_features: Optional[List[DigestPoint]] = Field(
        default=None, alias="requestedFeatures"
    )

    @field_validator("praise_points", "pain_points", "requested_features")
    @classmethod
    def _cap_points(cls, points):
        # The model is asked for 3-5 entries; extras are dropped, not rejected
        if points is None:
            return points
        return points[:MAX_POINTS_PER_LIST]

    def to_payload(self) -> dict:
        """Wire form: camelCase keys, unset optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
