"""
LLM layer - Client factory and response utilities
"""

from bizassist.llm.client import create_llm, create_hosted_llm, log_provider_status
from bizassist.llm.response_utils import (
    clean_json_response,
    extract_text_from_response,
    parse_json_response,
)

__all__ = [
    "create_llm",
    "create_hosted_llm",
    "log_provider_status",
    "clean_json_response",
    "extract_text_from_response",
    "parse_json_response",
]
