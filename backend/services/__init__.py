from .llm import GeminiClient, build_generation_config, extract_candidate_text
from .claims import ClaimExtractor, parse_claims
from .grounding import extract_grounding_sources, extract_search_queries
from .normalizer import normalize_fact_check, parse_model_output, coerce_assessment
from .fact_check import FactCheckPipeline
from .image_extraction import ImageTextExtractor
from .quota import QuotaGate, InMemoryUserStore, UserStore
from .auth import TokenVerifier

__all__ = [
    "GeminiClient",
    "build_generation_config",
    "extract_candidate_text",
    "ClaimExtractor",
    "parse_claims",
    "extract_grounding_sources",
    "extract_search_queries",
    "normalize_fact_check",
    "parse_model_output",
    "coerce_assessment",
    "FactCheckPipeline",
    "ImageTextExtractor",
    "QuotaGate",
    "InMemoryUserStore",
    "UserStore",
    "TokenVerifier",
]
