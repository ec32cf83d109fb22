import asyncio
from typing import List, Optional

from config import Settings, logger
from config.constants import CLAIMS_SENTINEL, GENERATION_CONFIG
from exceptions import InputValidationException
from models.verdicts import FactCheckResult
from prompts import PromptVariant, build_fact_check_prompt
from utils.validation import InputValidator
from .claims import ClaimExtractor
from .grounding import extract_grounding_sources, extract_search_queries
from .llm import GOOGLE_SEARCH_TOOL, GeminiClient, build_generation_config
from .normalizer import normalize_fact_check


class FactCheckPipeline:
    """Sanitize, run the grounded model call, recover grounding, normalize."""

    def __init__(self, client: GeminiClient, settings: Settings, claim_extractor: Optional[ClaimExtractor] = None):
        self.client = client
        self.settings = settings
        self.variant = PromptVariant.parse(settings.PROMPT_VARIANT)
        self.claim_extractor = claim_extractor or ClaimExtractor(client)

    async def run(
        self,
        text: str,
        images: Optional[List[str]] = None,
        post_date: Optional[str] = None,
        claims: Optional[str] = None,
    ) -> FactCheckResult:
        start_time = asyncio.get_event_loop().time()

        sanitized = InputValidator.sanitize_post_text(text)
        if sanitized is None:
            raise InputValidationException("text", "Invalid input: post text is missing or too short to analyze")

        image_count = len(images or [])
        claims_hint = InputValidator.sanitize_claims_hint(claims)
        if not claims_hint and self.settings.PRE_EXTRACT_CLAIMS:
            claims_hint = await self._pre_extract(sanitized, image_count)

        prompt = build_fact_check_prompt(
            sanitized,
            variant=self.variant,
            image_count=image_count,
            post_date=post_date,
            claims_hint=claims_hint,
        )
        reply = await self.client.generate_text(
            prompt,
            generation_config=build_generation_config(GENERATION_CONFIG.FACT_CHECK_MAX_TOKENS),
            tools=[GOOGLE_SEARCH_TOOL],
        )

        raw = reply.get("raw", {})
        grounding = extract_grounding_sources(raw, limit=self.settings.MAX_GROUNDING_SOURCES)
        result = normalize_fact_check(
            reply.get("text", ""),
            grounding,
            search_queries=extract_search_queries(raw),
            reject_redirectors=self.settings.REJECT_REDIRECTOR_SOURCES,
        )

        duration = round(asyncio.get_event_loop().time() - start_time, 2)
        logger.info(
            f"Fact-check for '{sanitized[:50]}...' finished in {duration}s: "
            f"{result.overall_rating.assessment}, {len(result.claims)} claims, {len(grounding)} grounding sources."
        )
        return result

    async def _pre_extract(self, text: str, image_count: int) -> str:
        extracted = await self.claim_extractor.extract(text, image_count)
        if extracted == [CLAIMS_SENTINEL]:
            return ""
        return InputValidator.sanitize_claims_hint("\n".join(f"- {claim}" for claim in extracted))
