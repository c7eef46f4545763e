from __future__ import annotations

import logging
from typing import Any

from app.core.constants import UNCATEGORIZED
from app.domain.enums import ContactCategory
from app.services.gemini_client import GeminiClient

logger = logging.getLogger("contact_classifier.contact")


def build_prompt(message: str) -> str:
    labels = ", ".join(f'"{c.value}"' for c in ContactCategory)
    return (
        f"Categorize the following message into one of these types: {labels}. "
        "Provide only the category name, without any extra text or punctuation. "
        f'If unsure, choose "{ContactCategory.other.value}".\n\n'
        f'Message: "{message}"'
    )


def extract_category(result: Any) -> str:
    if not isinstance(result, dict):
        return UNCATEGORIZED
    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return UNCATEGORIZED
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return UNCATEGORIZED
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return UNCATEGORIZED
    text = parts[0].get("text")
    if not isinstance(text, str):
        return UNCATEGORIZED
    return text.strip()


class ContactService:
    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def classify_message(self, message: str) -> str:
        result = await self.gemini.generate_content(build_prompt(message))
        category = extract_category(result)
        if category == UNCATEGORIZED:
            logger.warning(f"Could not read a category from Gemini response: {str(result)[:300]}")
        else:
            logger.info(f"Contact message categorized as '{category}'")
        return category
