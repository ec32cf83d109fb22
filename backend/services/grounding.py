"""
Recover the URLs a grounded Gemini answer actually relied on.

The shape of grounding metadata differs between API versions, so it is
walked structurally instead of being parsed against a schema: known legacy
paths first, then any object reachable through a key whose name mentions
"source", "result", "url" or "web".
"""
import re
from itertools import chain
from typing import Any, Dict, Iterator, List, Optional, Tuple

from config import logger
from models.api_responses import GroundingSource
from utils.validation import InputValidator

SOURCE_KEY_PATTERN = re.compile(r"source|result|url|web", re.IGNORECASE)
METADATA_KEYS = ("groundingMetadata", "grounding_metadata")
URL_FIELDS = ("url", "uri", "link", "href")
TITLE_FIELDS = ("title", "name", "domain")
MAX_DEPTH = 12

Candidate = Tuple[Any, Any]


def _metadata_nodes(raw: Any) -> Iterator[Dict[str, Any]]:
    if not isinstance(raw, dict):
        return
    for key in METADATA_KEYS:
        if isinstance(raw.get(key), dict):
            yield raw[key]
    candidates = raw.get("candidates")
    if isinstance(candidates, list):
        for candidate in candidates:
            if not isinstance(candidate, dict):
                continue
            for key in METADATA_KEYS:
                if isinstance(candidate.get(key), dict):
                    yield candidate[key]


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _legacy_candidates(metadata: Dict[str, Any]) -> Iterator[Candidate]:
    for chunk in _as_list(metadata.get("groundingChunks")):
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if isinstance(web, dict):
            yield web.get("uri") or web.get("url"), web.get("title")

    for query in _as_list(metadata.get("webSearchQueries")):
        if not isinstance(query, dict):
            continue
        for result in _as_list(query.get("webSearchResults")):
            if isinstance(result, dict):
                yield result.get("url") or result.get("uri"), result.get("title")


def _harvest(node: Dict[str, Any]) -> Optional[Candidate]:
    for field in URL_FIELDS:
        url = node.get(field)
        if isinstance(url, str):
            title = next((node[f] for f in TITLE_FIELDS if isinstance(node.get(f), str)), None)
            return url, title
    return None


def _walk(node: Any, inside: bool, depth: int = 0) -> Iterator[Candidate]:
    """Yield (url, title) pairs from every object under a source-like key."""
    if depth > MAX_DEPTH:
        return
    if isinstance(node, list):
        for item in node:
            yield from _walk(item, inside, depth + 1)
    elif isinstance(node, dict):
        if inside:
            harvested = _harvest(node)
            if harvested:
                yield harvested
        for key, value in node.items():
            key_matches = bool(SOURCE_KEY_PATTERN.search(str(key)))
            if isinstance(value, str):
                # bare URL strings such as {"sourceUrl": "..."}
                if key_matches and key not in URL_FIELDS:
                    yield value, None
            else:
                yield from _walk(value, inside or key_matches, depth + 1)


def extract_grounding_sources(raw: Any, limit: int = 5) -> List[GroundingSource]:
    """
    Ordered, de-duplicated {url, title} pairs recovered from grounding metadata.

    Candidates that fail URL validation are dropped silently; a title
    derived from the hostname stands in when none was given.
    """
    sources: List[GroundingSource] = []
    seen = set()

    for metadata in _metadata_nodes(raw):
        for url, title in chain(_legacy_candidates(metadata), _walk(metadata, False)):
            if len(sources) >= limit:
                return sources
            if not InputValidator.is_valid_url(url) or url in seen:
                continue
            seen.add(url)
            clean_title = title.strip() if isinstance(title, str) and title.strip() else InputValidator.title_from_url(url)
            sources.append({"url": url, "title": clean_title})

    if not sources:
        logger.info("No grounding sources recovered from provider response.")
    return sources


def extract_search_queries(raw: Any) -> List[str]:
    """Search queries the provider reports having issued."""
    queries: List[str] = []
    for metadata in _metadata_nodes(raw):
        for query in _as_list(metadata.get("webSearchQueries")):
            text = query if isinstance(query, str) else (query.get("query") if isinstance(query, dict) else None)
            if isinstance(text, str) and text.strip() and text.strip() not in queries:
                queries.append(text.strip())
    return queries
