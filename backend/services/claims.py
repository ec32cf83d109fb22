from typing import Any, List, Optional

from config import logger
from config.constants import CLAIMS_SENTINEL, GENERATION_CONFIG, PIPELINE_LIMITS
from prompts import build_claims_prompt
from utils.parsing import first_result, parse_json, split_bullet_lines
from utils.validation import InputValidator
from .llm import GeminiClient, build_generation_config


def _json_array(text: str) -> Optional[List[Any]]:
    parsed = parse_json(text)
    if parsed is None:
        return None
    # valid JSON of the wrong shape ends the chain with nothing usable
    return parsed if isinstance(parsed, list) else []


def _bullet_lines(text: str) -> Optional[List[Any]]:
    return split_bullet_lines(text) or None


CLAIM_PARSE_STEPS = (_json_array, _bullet_lines)


def clean_claims(items: List[Any]) -> List[str]:
    """Keep usable strings, trimmed to MAX_CLAIM_LENGTH, at most MAX_CLAIMS."""
    claims = []
    for item in items:
        if not isinstance(item, str):
            continue
        claim = item.strip()[:PIPELINE_LIMITS.MAX_CLAIM_LENGTH].strip()
        if claim and claim not in claims:
            claims.append(claim)
    return claims[:PIPELINE_LIMITS.MAX_CLAIMS]


def parse_claims(raw_text: str) -> List[str]:
    """Strict JSON array first, bullet-line splitting second, sentinel last."""
    raw_text = (raw_text or "").split(GENERATION_CONFIG.CLAIMS_STOP_SEQUENCE)[0]
    items = first_result(CLAIM_PARSE_STEPS, raw_text)
    claims = clean_claims(items or [])
    if not claims:
        logger.warning("No usable claims in model output; returning sentinel.")
        return [CLAIMS_SENTINEL]
    return claims


class ClaimExtractor:
    """Single-purpose model call that turns post text into atomic claims."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def extract(self, text: str, image_count: int = 0) -> List[str]:
        """
        Extract 0-5 claims from post text.

        Never raises: too-short input, provider failures and unparseable
        output all degrade to the single sentinel claim.
        """
        sanitized = InputValidator.sanitize_post_text(text)
        if sanitized is None:
            logger.warning("Post text too short for claim extraction.")
            return [CLAIMS_SENTINEL]

        prompt = build_claims_prompt(sanitized, image_count)
        generation_config = build_generation_config(
            GENERATION_CONFIG.CLAIMS_MAX_TOKENS,
            stop_sequences=[GENERATION_CONFIG.CLAIMS_STOP_SEQUENCE],
        )
        try:
            reply = await self.client.generate_text(prompt, generation_config)
        except Exception as e:
            logger.warning("Claim extraction call failed: %s", e)
            return [CLAIMS_SENTINEL]

        return parse_claims(reply.get("text", ""))
