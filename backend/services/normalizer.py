from typing import Any, Dict, List, Optional

from config import logger
from config.constants import (
    ASSESSMENT_EXPLANATIONS,
    ASSESSMENT_LABELS,
    ASSESSMENT_RATINGS,
    PIPELINE_LIMITS,
    SOURCE_DEFAULTS,
    UNVERIFIABLE,
)
from models.api_responses import GroundingSource
from models.verdicts import (
    ClaimRating,
    FactCheckResult,
    OverallRating,
    SearchMetadata,
    Source,
)
from utils.parsing import extract_json_block, first_result, parse_json, parse_unit_float
from utils.validation import InputValidator

DEFAULT_CONFIDENCE = 0.5
OVERALL_CLAIM_TEXT = "Overall assessment"

_LABELS_BY_KEY = {label.lower(): label for label in ASSESSMENT_LABELS}


def _json_object(text: str) -> Optional[Dict[str, Any]]:
    parsed = parse_json(text)
    return parsed if isinstance(parsed, dict) else None


MODEL_OUTPUT_PARSE_STEPS = (_json_object, extract_json_block)


def fallback_verdict() -> Dict[str, Any]:
    return {"oa": UNVERIFIABLE, "oc": DEFAULT_CONFIDENCE, "claims": []}


def parse_model_output(text: str) -> Dict[str, Any]:
    """Parse the model's JSON body, degrading to an Unverifiable verdict."""
    parsed = first_result(MODEL_OUTPUT_PARSE_STEPS, text or "")
    if parsed is None:
        logger.warning("Model output is not valid JSON; treating as Unverifiable.")
        return fallback_verdict()
    return parsed


def coerce_assessment(value: Any) -> str:
    """Map model output onto one of the six labels; anything else is Unverifiable."""
    if not isinstance(value, str):
        return UNVERIFIABLE
    key = " ".join(value.replace("_", " ").split()).lower()
    return _LABELS_BY_KEY.get(key, UNVERIFIABLE)


def rating_for(assessment: str) -> int:
    return ASSESSMENT_RATINGS.get(assessment, ASSESSMENT_RATINGS[UNVERIFIABLE])


def _first(mapping: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def _candidate_urls(src: Any) -> List[str]:
    if isinstance(src, (str, dict)):
        src = [src]
    if not isinstance(src, list):
        return []
    urls = []
    for item in src:
        url = item if isinstance(item, str) else _first(item, "url", "uri") if isinstance(item, dict) else None
        if isinstance(url, str):
            urls.append(url.strip())
    return urls


def filter_source_urls(src: Any, reject_redirectors: bool = True) -> List[str]:
    """Valid, de-duplicated URLs from a model-claimed source list."""
    kept: List[str] = []
    for url in _candidate_urls(src):
        if not InputValidator.is_valid_url(url) or url in kept:
            continue
        if reject_redirectors and InputValidator.is_redirector_url(url):
            logger.info("Dropping redirector source URL: %s", url)
            continue
        kept.append(url)
    return kept


def build_sources(urls: List[str], titles: Dict[str, str], summary: str) -> List[Source]:
    return [
        Source(
            url=url,
            title=titles.get(url) or InputValidator.title_from_url(url),
            credibility_score=SOURCE_DEFAULTS.CREDIBILITY_SCORE,
            relevance_score=SOURCE_DEFAULTS.RELEVANCE_SCORE,
            summary=summary,
        )
        for url in urls
    ]


def _model_claims(parsed: Dict[str, Any]) -> List[Dict[str, Any]]:
    claims = parsed.get("claims")
    if isinstance(claims, list):
        return [c for c in claims if isinstance(c, dict)]
    rationale = _first(parsed, "rationale", "overallExplanation", "explanation")
    if isinstance(rationale, str) and rationale.strip():
        return [{"c": OVERALL_CLAIM_TEXT, "exp": rationale, "src": parsed.get("sources", [])}]
    return []


def normalize_fact_check(
    model_text: str,
    grounding: List[GroundingSource],
    search_queries: Optional[List[str]] = None,
    reject_redirectors: bool = True,
) -> FactCheckResult:
    """
    Reshape a best-effort model answer into the extension-facing result.

    Claim ratings and confidences come from the overall label, not from the
    model's per-claim numbers. Without grounding, no claim carries sources.
    """
    parsed = parse_model_output(model_text)

    assessment = coerce_assessment(_first(parsed, "oa", "assessment", "verdict", "rating"))
    confidence = parse_unit_float(_first(parsed, "oc", "confidence"), DEFAULT_CONFIDENCE)
    rating = rating_for(assessment)

    grounding_urls = [g["url"] for g in grounding]
    grounding_titles = {g["url"]: g["title"] for g in grounding}
    grounding_used = bool(grounding_urls)

    claims: List[ClaimRating] = []
    for model_claim in _model_claims(parsed):
        if len(claims) >= PIPELINE_LIMITS.MAX_CLAIMS:
            break
        text = _first(model_claim, "c", "claim", "text")
        if not isinstance(text, str) or not text.strip():
            continue

        sources: List[Source] = []
        if grounding_used:
            urls = filter_source_urls(_first(model_claim, "src", "sources"), reject_redirectors)
            summary = SOURCE_DEFAULTS.SUMMARY
            if not urls:
                urls, summary = grounding_urls, SOURCE_DEFAULTS.GROUNDING_SUMMARY
            sources = build_sources(urls, grounding_titles, summary)

        explanation = _first(model_claim, "exp", "explanation", "rationale")
        claims.append(ClaimRating(
            claim=text.strip()[:PIPELINE_LIMITS.MAX_CLAIM_LENGTH],
            rating=rating,
            confidence=confidence,
            explanation=explanation.strip() if isinstance(explanation, str) else "",
            sources=sources,
            grounding_used=grounding_used,
        ))

    cited = {source.url for claim in claims for source in claim.sources}

    return FactCheckResult(
        overall_rating=OverallRating(
            rating=rating,
            confidence=confidence,
            assessment=assessment,
            explanation=ASSESSMENT_EXPLANATIONS[assessment],
        ),
        claims=claims,
        search_metadata=SearchMetadata(
            sources_found=len(grounding_urls),
            authoritative_sources=len(cited),
            search_queries=list(search_queries or []),
        ),
    )
