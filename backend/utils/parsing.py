import json
import re
from typing import Any, Callable, Iterable, List, Optional, Dict

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
BULLET_PREFIX_PATTERN = re.compile(r"^\s*(?:[-*•·>\"'“”‘’]+|\d+[.)])\s*")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences, keeping their content."""
    if not text:
        return ""
    return CODE_FENCE_PATTERN.sub(r"\1", text).strip()


def parse_json(text: str) -> Optional[Any]:
    """Strict JSON parse of fence-stripped text; None when it is not JSON."""
    stripped = strip_code_fences(text)
    if not stripped:
        return None
    try:
        return json.loads(stripped)
    except (json.JSONDecodeError, ValueError):
        return None


def extract_json_block(text: str) -> Optional[Dict[str, Any]]:
    """Extract the first valid JSON object from text."""
    if not text:
        return None

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                candidate = text[start : i + 1]
                try:
                    return json.loads(candidate)
                except json.JSONDecodeError:
                    try:
                        cleaned = re.sub(r"[\x00-\x1f]", "", candidate)
                        return json.loads(cleaned)
                    except json.JSONDecodeError:
                        return None
    return None


def first_result(steps: Iterable[Callable[[str], Optional[Any]]], text: str) -> Optional[Any]:
    """Run fallible parse steps in order and return the first non-None result."""
    for step in steps:
        result = step(text)
        if result is not None:
            return result
    return None


def split_bullet_lines(text: str) -> List[str]:
    """
    Split free text into items, dropping leading bullets, numbering and quotes.

    When any line carries such a prefix, unmarked lines (preambles, sign-offs)
    are dropped; otherwise every non-empty line is an item.
    """
    lines = [line.strip().lstrip("[") for line in strip_code_fences(text).splitlines()]
    marked = [line for line in lines if BULLET_PREFIX_PATTERN.match(line)]

    items = []
    for line in marked or lines:
        item = BULLET_PREFIX_PATTERN.sub("", line)
        item = item.strip().strip("[]\"'“”,").strip()
        if item:
            items.append(item)
    return items


def parse_unit_float(val: Any, default: float) -> float:
    """Parse a 0..1 confidence value, clamping out-of-range numbers."""
    if isinstance(val, bool) or val is None:
        return default
    try:
        number = float(val)
    except (TypeError, ValueError):
        return default
    if number != number:
        return default
    return min(max(number, 0.0), 1.0)
