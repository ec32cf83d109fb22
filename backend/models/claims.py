from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class FactCheckRequest(BaseModel):
    """Request body for /api/fact-check."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "text": "The unemployment rate in 2023 was 3.7%",
                "images": [],
                "postDate": "2024-03-01T12:00:00Z",
            }
        },
    )

    text: str
    images: List[str] = []
    post_date: Optional[str] = None
    claims: Optional[str] = None

    @field_validator("images", mode="before")
    @classmethod
    def images_default(cls, v):
        return v or []


class ImageExtractionRequest(BaseModel):
    """Request body for /api/image-extraction."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    images: List[str] = Field(default_factory=list)
    extract_claims: bool = False


class ImageExtractionResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    extracted_text: str
    claims: Optional[str] = None
    image_count: int
