from dataclasses import dataclass
from typing import Dict, Tuple

@dataclass(frozen=True)
class PipelineLimits:
    MAX_TEXT_LENGTH: int = 2000
    MIN_TEXT_LENGTH: int = 5
    MAX_CLAIMS: int = 5
    MAX_CLAIM_LENGTH: int = 500
    MAX_IMAGES: int = 5
    MAX_OCR_TEXT_FOR_CLAIMS: int = 4000
    MIN_OCR_TEXT_FOR_CLAIMS: int = 10
    MAX_CLIENT_CLAIMS_LENGTH: int = 1000

@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters sent with every generateContent call."""
    TEMPERATURE: float = 0.0
    SEED: int = 42
    CANDIDATE_COUNT: int = 1
    FACT_CHECK_MAX_TOKENS: int = 2048
    CLAIMS_MAX_TOKENS: int = 512
    OCR_MAX_TOKENS: int = 4096
    IMAGE_CLAIMS_MAX_TOKENS: int = 1024
    CLAIMS_STOP_SEQUENCE: str = "<END_OF_CLAIMS>"

@dataclass(frozen=True)
class SourceDefaults:
    CREDIBILITY_SCORE: int = 7
    RELEVANCE_SCORE: int = 8
    SUMMARY: str = "Fact-checking source"
    GROUNDING_SUMMARY: str = "Source retrieved by web-search grounding"

@dataclass(frozen=True)
class RedirectorHosts:
    HOSTS: frozenset = frozenset({
        "vertexaisearch.cloud.google.com",
        "news.google.com",
        "t.co",
        "bit.ly",
        "lnkd.in",
        "ow.ly",
        "buff.ly",
        "goo.gl",
        "tinyurl.com",
    })

    def matches(self, host: str) -> bool:
        host = host.lower()
        return any(host == h or host.endswith("." + h) for h in self.HOSTS)

ASSESSMENT_LABELS: Tuple[str, ...] = (
    "True",
    "Likely True",
    "Mixed",
    "Likely False",
    "False",
    "Unverifiable",
)

UNVERIFIABLE = "Unverifiable"

ASSESSMENT_RATINGS: Dict[str, int] = {
    "True": 9,
    "Likely True": 8,
    "Mixed": 6,
    "Likely False": 3,
    "False": 1,
    "Unverifiable": 5,
}

ASSESSMENT_EXPLANATIONS: Dict[str, str] = {
    "True": "Claims are supported by evidence from authoritative sources",
    "Likely True": "Most claims are supported by available evidence",
    "Mixed": "Evidence is mixed; some claims are supported while others are not",
    "Likely False": "Most claims are not supported by available evidence",
    "False": "Claims are contradicted by evidence from authoritative sources",
    "Unverifiable": "Insufficient evidence was found to verify these claims",
}

CLAIMS_SENTINEL = "Unable to extract claims from this post"
NO_TEXT_SENTINEL = "No text detected in image."

PIPELINE_LIMITS = PipelineLimits()
GENERATION_CONFIG = GenerationConfig()
SOURCE_DEFAULTS = SourceDefaults()
REDIRECTOR_HOSTS = RedirectorHosts()
