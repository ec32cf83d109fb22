from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AssessmentLabel = Literal["True", "Likely True", "Mixed", "Likely False", "False", "Unverifiable"]


class _WireModel(BaseModel):
    """Immutable model serialized with camelCase keys for the extension."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Source(_WireModel):
    url: str
    title: str
    credibility_score: int = Field(ge=1, le=10)
    relevance_score: int = Field(ge=1, le=10)
    summary: str


class ClaimRating(_WireModel):
    claim: str
    rating: int = Field(ge=1, le=10)
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str
    sources: List[Source] = []
    grounding_used: bool = False


class OverallRating(_WireModel):
    rating: int = Field(ge=1, le=10)
    confidence: float = Field(ge=0.0, le=1.0)
    assessment: AssessmentLabel
    explanation: str


class SearchMetadata(_WireModel):
    sources_found: int = 0
    authoritative_sources: int = 0
    search_queries: List[str] = []


class FactCheckResult(_WireModel):
    """Complete response from the fact-check endpoint."""
    overall_rating: OverallRating
    claims: List[ClaimRating] = Field(default_factory=list, max_length=5)
    search_metadata: SearchMetadata
