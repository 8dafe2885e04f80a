"""
LLM response utilities for handling multi-format model outputs.

Supports both:
- Simple string responses (gpt-4o-mini, gpt-4o, llama3, etc.)
- Structured content blocks with reasoning (o1-style models)
"""

import json
from typing import Any

from loguru import logger


def extract_text_from_response(response: Any) -> str:
    """
    Extract text content from LLM response (handles all formats).

    Supports:
    - Simple string: "text here"
    - Structured blocks: [{'type': 'reasoning', ...}, {'type': 'text', 'text': '...'}]
    - LangChain AIMessage with content attribute

    Args:
        response: LLM response (AIMessage, dict, str, or list)

    Returns:
        Extracted text content as string
    """
    content = response.content if hasattr(response, "content") else response

    if not content:
        return ""

    if isinstance(content, str):
        return content

    if isinstance(content, list):
        text_parts = []
        for block in content:
            if isinstance(block, dict):
                if block.get("type") == "text" and "text" in block:
                    text_parts.append(block["text"])
                elif "text" in block and block.get("type") != "reasoning":
                    text_parts.append(block["text"])
            elif isinstance(block, str):
                text_parts.append(block)

        result = "".join(text_parts)
        if result:
            return result

        content_preview = str(content)[:200]
        logger.warning(f"No text blocks found in structured response: {content_preview}")
        return ""

    return str(content)


def clean_json_response(raw: str) -> str:
    """Strip markdown code fences that models like to wrap JSON in."""
    raw = raw.strip()
    if raw.startswith("```json"):
        raw = raw[7:]
    elif raw.startswith("```"):
        raw = raw[3:]
    if raw.endswith("```"):
        raw = raw[:-3]
    return raw.strip()


def parse_json_response(response: Any) -> Any:
    """
    Extract text from an LLM response and decode it as JSON.

    Raises:
        ValueError: If the response is empty or not valid JSON
    """
    raw = clean_json_response(extract_text_from_response(response))
    if not raw:
        raise ValueError("Empty response from model")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON from model: {raw[:200]}") from e
