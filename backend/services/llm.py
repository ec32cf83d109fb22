import json
from typing import Dict, Any, List, Optional

import httpx

from config import Settings, logger
from config.constants import GENERATION_CONFIG
from exceptions import ProviderException
from models.api_responses import GeminiReply

GOOGLE_SEARCH_TOOL = {"google_search": {}}


def build_generation_config(max_output_tokens: int, stop_sequences: Optional[List[str]] = None) -> Dict[str, Any]:
    """Deterministic sampling settings shared by all pipeline calls."""
    config: Dict[str, Any] = {
        "temperature": GENERATION_CONFIG.TEMPERATURE,
        "seed": GENERATION_CONFIG.SEED,
        "candidateCount": GENERATION_CONFIG.CANDIDATE_COUNT,
        "maxOutputTokens": max_output_tokens,
    }
    if stop_sequences:
        config["stopSequences"] = stop_sequences
    return config


def extract_candidate_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    return "".join(texts).strip()


class GeminiClient:
    """Thin async wrapper over the generateContent REST endpoint."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def generate(
        self,
        parts: List[Dict[str, Any]],
        generation_config: Optional[Dict[str, Any]] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        model: Optional[str] = None,
    ) -> GeminiReply:
        if not self.settings.GEMINI_API_KEY:
            logger.critical("GEMINI_API_KEY not configured.")
            raise ProviderException("API key not configured")

        endpoint = self.settings.model_endpoint(model or self.settings.GEMINI_MODEL)
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.settings.GEMINI_API_KEY}
        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
        if generation_config:
            body["generationConfig"] = generation_config
        if tools:
            body["tools"] = tools

        try:
            async with httpx.AsyncClient(timeout=self.settings.GEMINI_TIMEOUT) as client:
                response = await client.post(endpoint, headers=headers, json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Gemini HTTP error %s for URL %s: %s", e.response.status_code, e.request.url, e.response.text)
            raise ProviderException(f"HTTP {e.response.status_code}", provider_status=e.response.status_code)
        except httpx.RequestError as e:
            logger.error("Gemini request error for URL %s: %s", endpoint, str(e))
            raise ProviderException(f"Request failed: {str(e)}")
        except json.JSONDecodeError as e:
            logger.error("Gemini returned a non-JSON body: %s", str(e))
            raise ProviderException("Malformed provider response")

        return {"raw": data if isinstance(data, dict) else {}, "text": extract_candidate_text(data)}

    async def generate_text(
        self,
        prompt: str,
        generation_config: Optional[Dict[str, Any]] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        model: Optional[str] = None,
    ) -> GeminiReply:
        return await self.generate([{"text": prompt}], generation_config, tools, model)
