import logging
from typing import List

from models.data_models import Digest, DigestRequest, DigestSchema
from services.digest_parser import parse_digest, verify_sources
from services.llm_provider import LLMProvider

logger = logging.getLogger(__name__)

DIGEST_SYSTEM_PROMPT = (
    "You are a senior product designer acting as a product-feedback analyst. "
    "You read raw user feedback and turn it into honest, evidence-backed insights."
)

BASIC_SCHEMA_DESCRIPTION = """{
  "overallSummary": "A 5-7 sentence summary of overall sentiment and themes.",
  "topPraise": "The most commonly praised aspect or feature.",
  "topPain": "The most common complaint or pain point.",
  "topIntensity": "The strongest or most emotional opinion.",
  "praisePoints": [
    {
      "text": "Summarized insight (e.g. 'Users love the minimal design')",
      "source": "A real quoted Reddit comment from the input that best illustrates this praise."
    }
  ],
  "painPoints": [
    {
      "text": "Summarized issue (e.g. 'Shipping delays are a common frustration')",
      "source": "A real quoted Reddit comment from the input that best illustrates this pain point."
    }
  ]
}"""

FULL_SCHEMA_DESCRIPTION = """{
  "overallSummary": "A 5-7 sentence summary of overall sentiment and themes.",
  "topPraise": "The most commonly praised aspect or feature.",
  "topPain": "The most common complaint or pain point.",
  "topIntensity": "The strongest or most emotional opinion.",
  "topRequestedFeature": "The feature or change users ask for most often.",
  "praisePoints": [
    {
      "text": "Summarized insight (e.g. 'Users love the minimal design')",
      "source": "A real quoted Reddit comment from the input that best illustrates this praise."
    }
  ],
  "painPoints": [
    {
      "text": "Summarized issue (e.g. 'Shipping delays are a common frustration')",
      "source": "A real quoted Reddit comment from the input that best illustrates this pain point."
    }
  ],
  "requestedFeatures": [
    {
      "text": "Summarized request (e.g. 'Users want a longer battery life')",
      "source": "A real quoted Reddit comment from the input that asks for this feature."
    }
  ]
}"""

SCHEMA_DESCRIPTIONS = {
    DigestSchema.BASIC: BASIC_SCHEMA_DESCRIPTION,
    DigestSchema.FULL: FULL_SCHEMA_DESCRIPTION,
}

LIST_NAMES = {
    DigestSchema.BASIC: "praisePoints and painPoints",
    DigestSchema.FULL: "praisePoints, painPoints and requestedFeatures",
}

DIGEST_USER_TEMPLATE = """You're given a list of Reddit comments about "{keyword}". Your job is to extract real product feedback and summarize it into insights.

Return only valid JSON in the following format:
{schema}

Instructions:
- Include 3 to 5 items in each of {lists} (or fewer if there aren't enough unique insights).
- Each "text" is a string that summarizes the insight or feedback theme.
- Each "source" is a string and must be a direct, unedited quote from one of the actual Reddit comments provided. Do not paraphrase, truncate, reword, or synthesize.
- Do not invent or simulate quotes. Do not generate placeholder users or dialogue.
- Only select full and original comments from the provided input text.
- Do not include typographic quotation marks in the comment.
- If no appropriate quote exists for a point, omit that point entirely.

Return a valid JSON object only. No markdown, no commentary, no code fences.

Comments:
{comments}"""


def build_digest_request(
    keyword: str, comments: List[str], schema: DigestSchema = DigestSchema.FULL
) -> DigestRequest:
    """Assemble the system and user prompts for one keyword. Pure function."""
    user_prompt = DIGEST_USER_TEMPLATE.format(
        keyword=keyword,
        schema=SCHEMA_DESCRIPTIONS[schema],
        lists=LIST_NAMES[schema],
        comments="\n\n".join(comments),
    )
    return DigestRequest(
        keyword=keyword,
        comments=list(comments),
        schema=schema,
        system_prompt=DIGEST_SYSTEM_PROMPT,
        user_prompt=user_prompt,
    )


class DigestService:
    """Turns a filtered comment set into a validated Digest via one LLM call."""

    def __init__(
        self,
        llm: LLMProvider,
        schema: DigestSchema = DigestSchema.FULL,
        temperature: float = 0.3,
        max_tokens: int = 1500,
        enforce_provenance: bool = True,
    ):
        self.llm = llm
        self.schema = schema
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.enforce_provenance = enforce_provenance

    def summarize(self, keyword: str, comments: List[str]) -> Digest:
        request = build_digest_request(keyword, comments, self.schema)
        raw = self.llm.complete_text(
            system_prompt=request.system_prompt,
            user_prompt=request.user_prompt,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        digest = parse_digest(raw, self.schema)
        if self.enforce_provenance:
            digest = verify_sources(digest, request.comments)
        return digest
