from datetime import datetime
from enum import Enum
from typing import Optional

from config.constants import GENERATION_CONFIG, NO_TEXT_SENTINEL, PIPELINE_LIMITS


class PromptVariant(str, Enum):
    COMPACT = "compact"
    VERBOSE = "verbose"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PromptVariant":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.COMPACT


CLAIMS_PROMPT = """
You extract factual claims from social media posts.

Read the post below and list between 2 and 5 atomic, independently verifiable factual claims it makes.
- Each claim is one short declarative sentence (under {max_claim_length} characters).
- Skip opinions, jokes, questions, predictions and forecasts.
- Resolve pronouns so each claim stands alone.
{image_note}
POST:
'''{text}'''

Return ONLY a JSON array of strings, no markdown, no commentary, then write {stop}.
Example: ["The Eiffel Tower is 330 metres tall", "It was completed in 1889"]{stop}
"""

COMPACT_FACT_CHECK_PROMPT = """
You are a meticulous fact-checker with web search. Fact-check the social media post below using search results from reliable publishers.
{date_context}{image_note}{claims_hint}
POST:
'''{text}'''

Return ONLY ultra-compact JSON in exactly this shape:
{{"oa":"<True|Likely True|Mixed|Likely False|False|Unverifiable>","oc":0.0,"claims":[{{"c":"claim","r":1,"conf":0.0,"exp":"one or two sentences","src":["https://publisher.example/article"]}}]}}

STRICT RULES:
1. At most 3 claims; each "c" is one atomic factual statement from the post.
2. At most 3 URLs per claim in "src", copied exactly from pages you actually found through search.
3. Only direct publisher URLs. Never use shorteners or redirectors (t.co, bit.ly, news.google.com, vertexaisearch.cloud.google.com).
4. Never invent or guess a URL. If you have no source for a claim, use "src":[] and set "conf" to 0.4 or lower.
5. If most claims lack supporting sources, set "oa" to "Unverifiable".
6. "r" is an integer 1-10 where 10 is fully accurate; "oc" and "conf" are between 0 and 1.
7. No markdown, no code fences, no citation markers like [1], no text outside the JSON.
"""

VERBOSE_FACT_CHECK_PROMPT = """
Fact-check the post below.
{date_context}{image_note}{claims_hint}
Return ONLY JSON with fields: verdict, rationale, sources (array of URLs).
verdict must be one of: True, Likely True, Mixed, Likely False, False, Unverifiable.
No markdown, no backticks. Never invent URLs or use redirect links.
If nothing can be verified with reliable web sources, set verdict="Unverifiable" and sources=[].

Post:
'''{text}'''
"""

OCR_PROMPT = f"""Extract all text content from this image. Include:
1. Any visible text, captions, or labels
2. Headlines or titles
3. Any quotes or claims visible in the image
4. Text from signs, screenshots, or documents

Transcribe literally. Do not add commentary, interpretation or analysis.
Return the extracted text in a clear, organized format. If there are multiple claims or statements, list them as bullet points.
If no text is found, return exactly: {NO_TEXT_SENTINEL}"""

IMAGE_CLAIMS_PROMPT = """Extract 2-3 verifiable claims from the following text extracted from an image. Each claim should be a single statement that can be verified or denied.

Text from image:
{text}

Return ONLY short bullet points, each starting with '- '. Do not include any analysis, commentary, emojis, or extra text. Just the claims."""


def _image_note(image_count: int) -> str:
    if image_count <= 0:
        return ""
    plural = "image" if image_count == 1 else "images"
    return f"The post also has {image_count} attached {plural}; text-only analysis applies.\n"


def build_date_context(post_date: Optional[str]) -> str:
    """Render the post timestamp as a date sentence, or nothing if it does not parse."""
    if not post_date:
        return ""
    try:
        parsed = datetime.fromisoformat(post_date.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return ""
    return (
        f"The post was published on {parsed.strftime('%B %d, %Y')}. "
        "Judge claims against what was known at that date and mention later developments if relevant.\n"
    )


def build_claims_prompt(text: str, image_count: int = 0) -> str:
    return CLAIMS_PROMPT.format(
        text=text,
        image_note=_image_note(image_count),
        max_claim_length=PIPELINE_LIMITS.MAX_CLAIM_LENGTH,
        stop=GENERATION_CONFIG.CLAIMS_STOP_SEQUENCE,
    )


def build_fact_check_prompt(
    text: str,
    variant: PromptVariant = PromptVariant.COMPACT,
    image_count: int = 0,
    post_date: Optional[str] = None,
    claims_hint: str = "",
) -> str:
    template = VERBOSE_FACT_CHECK_PROMPT if variant == PromptVariant.VERBOSE else COMPACT_FACT_CHECK_PROMPT
    hint = f"Claims already identified in this post:\n{claims_hint}\n" if claims_hint else ""
    return template.format(
        text=text,
        date_context=build_date_context(post_date),
        image_note=_image_note(image_count),
        claims_hint=hint,
    )


def build_image_claims_prompt(text: str) -> str:
    return IMAGE_CLAIMS_PROMPT.format(text=text[:PIPELINE_LIMITS.MAX_OCR_TEXT_FOR_CLAIMS])
