import re
from typing import Any, Dict, List

from config import Settings, logger
from config.constants import GENERATION_CONFIG, NO_TEXT_SENTINEL, PIPELINE_LIMITS
from exceptions import InputValidationException
from models.claims import ImageExtractionResponse
from prompts import OCR_PROMPT, build_image_claims_prompt
from .llm import GeminiClient, build_generation_config

DATA_URI_PATTERN = re.compile(r"^data:([^;,]+);base64,(.+)$", re.DOTALL)
DEFAULT_MIME_TYPE = "image/png"


def to_inline_part(image: str) -> Dict[str, Any]:
    """Turn a data URI or raw base64 string into a Gemini inline_data part."""
    mime_type, data = DEFAULT_MIME_TYPE, image.strip()
    if data.startswith("data:"):
        match = DATA_URI_PATTERN.match(data)
        if match:
            mime_type, data = match.group(1), match.group(2)
        elif "base64," in data:
            data = data.split("base64,", 1)[1]
    return {"inline_data": {"mime_type": mime_type, "data": data}}


def validate_images(images: Any) -> List[str]:
    if not images or not isinstance(images, list):
        raise InputValidationException("images", "No images provided")
    if len(images) > PIPELINE_LIMITS.MAX_IMAGES:
        raise InputValidationException("images", f"Maximum {PIPELINE_LIMITS.MAX_IMAGES} images per request")
    for image in images:
        if not image or not isinstance(image, str):
            raise InputValidationException("images", "Invalid image format")
    return images


def is_no_text(text: str) -> bool:
    cleaned = text.strip().strip('"').strip()
    return not cleaned or cleaned.lower().rstrip(".") == NO_TEXT_SENTINEL.lower().rstrip(".")


class ImageTextExtractor:
    """OCR through a vision model, plus optional bullet-point claim extraction."""

    def __init__(self, client: GeminiClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def extract_text(self, images: List[str]) -> str:
        """Literal transcription of every image in one call; empty when nothing is readable."""
        parts = [to_inline_part(image) for image in images]
        parts.append({"text": OCR_PROMPT})

        logger.info("Processing %d image(s) for text extraction", len(images))
        reply = await self.client.generate(
            parts,
            generation_config=build_generation_config(GENERATION_CONFIG.OCR_MAX_TOKENS),
            model=self.settings.GEMINI_VISION_MODEL,
        )
        text = reply.get("text", "")
        if is_no_text(text):
            return ""
        return text.strip()

    async def extract_claims(self, text: str) -> str:
        """Bullet list of 2-3 claims; empty on short input or provider failure."""
        if not text or len(text) < PIPELINE_LIMITS.MIN_OCR_TEXT_FOR_CLAIMS:
            return ""
        try:
            reply = await self.client.generate_text(
                build_image_claims_prompt(text),
                generation_config=build_generation_config(GENERATION_CONFIG.IMAGE_CLAIMS_MAX_TOKENS),
                model=self.settings.GEMINI_VISION_MODEL,
            )
        except Exception as e:
            logger.warning("Claim extraction from image text failed, returning no claims: %s", e)
            return ""
        return reply.get("text", "").strip()

    async def run(self, images: Any, extract_claims: bool = False) -> ImageExtractionResponse:
        images = validate_images(images)
        logger.info("Image extraction request: %d image(s), extract_claims=%s", len(images), extract_claims)

        extracted_text = await self.extract_text(images)
        claims = await self.extract_claims(extracted_text) if extract_claims else ""

        return ImageExtractionResponse(
            success=True,
            extracted_text=extracted_text,
            claims=claims or None,
            image_count=len(images),
        )
