from .parsing import (
    strip_code_fences,
    parse_json,
    extract_json_block,
    first_result,
    split_bullet_lines,
    parse_unit_float,
)
from .validation import InputValidator

__all__ = [
    "strip_code_fences",
    "parse_json",
    "extract_json_block",
    "first_result",
    "split_bullet_lines",
    "parse_unit_float",
    "InputValidator",
]
