import re
from typing import Optional
from urllib.parse import urlsplit

from config.constants import PIPELINE_LIMITS, REDIRECTOR_HOSTS


class InputValidator:

    PROMPT_BREAKING_PATTERN = re.compile(r"[<>{}]")

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    URL_WHITESPACE_PATTERN = re.compile(r"[\s\x00-\x1f\x7f]")

    @staticmethod
    def sanitize_post_text(text: Optional[str], max_length: int = PIPELINE_LIMITS.MAX_TEXT_LENGTH) -> Optional[str]:
        """
        Make raw post text safe to embed in a JSON-structured prompt.

        Returns None when fewer than MIN_TEXT_LENGTH characters survive,
        meaning the post cannot be analyzed.
        """
        if not text or not isinstance(text, str):
            return None

        text = InputValidator.PROMPT_BREAKING_PATTERN.sub('', text)
        text = InputValidator.CONTROL_CHARS_PATTERN.sub('', text)
        text = text.strip()[:max_length].strip()

        if len(text) < PIPELINE_LIMITS.MIN_TEXT_LENGTH:
            return None
        return text

    @staticmethod
    def sanitize_claims_hint(claims: Optional[str]) -> str:
        """Client-supplied claim bullets get the same treatment, but may be empty."""
        if not claims or not isinstance(claims, str):
            return ""
        claims = InputValidator.PROMPT_BREAKING_PATTERN.sub('', claims)
        claims = InputValidator.CONTROL_CHARS_PATTERN.sub('', claims)
        return claims.strip()[:PIPELINE_LIMITS.MAX_CLIENT_CLAIMS_LENGTH].strip()

    @staticmethod
    def is_valid_url(candidate) -> bool:
        """Absolute http(s) URL with a host and no whitespace or control characters."""
        if not isinstance(candidate, str) or not candidate:
            return False
        if InputValidator.URL_WHITESPACE_PATTERN.search(candidate):
            return False
        try:
            parts = urlsplit(candidate)
            parts.port
        except ValueError:
            return False
        return parts.scheme in ("http", "https") and bool(parts.hostname)

    @staticmethod
    def is_redirector_url(url: str) -> bool:
        try:
            host = urlsplit(url).hostname or ""
        except ValueError:
            return False
        return REDIRECTOR_HOSTS.matches(host)

    @staticmethod
    def title_from_url(url: str) -> str:
        """Hostname without a leading www., used when no title is known."""
        try:
            host = urlsplit(url).hostname or ""
        except ValueError:
            host = ""
        if host.startswith("www."):
            host = host[4:]
        return host or url
