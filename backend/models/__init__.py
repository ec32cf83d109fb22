from .api_responses import (
    GroundingSource,
    ModelClaim,
    ModelVerdict,
    GeminiReply,
)
from .claims import (
    FactCheckRequest,
    ImageExtractionRequest,
    ImageExtractionResponse,
)
from .verdicts import (
    AssessmentLabel,
    Source,
    ClaimRating,
    OverallRating,
    SearchMetadata,
    FactCheckResult,
)
from .users import Identity, UsageRecord, UserRecord, PlanLimits

__all__ = [
    "GroundingSource",
    "ModelClaim",
    "ModelVerdict",
    "GeminiReply",

    "FactCheckRequest",
    "ImageExtractionRequest",
    "ImageExtractionResponse",

    "AssessmentLabel",
    "Source",
    "ClaimRating",
    "OverallRating",
    "SearchMetadata",
    "FactCheckResult",

    "Identity",
    "UsageRecord",
    "UserRecord",
    "PlanLimits",
]
