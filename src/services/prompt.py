from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from src.app.config import settings

logger = logging.getLogger(__name__)

FAILED_INSTRUCTIONS = "Failed to load instructions."
CONTENT_SEPARATOR = "\n\nHere is the recipe text to analyze:\n\n"


def load_instructions(file_path: Path) -> str:
    """Read the instruction template, degrading to a sentinel when unreadable."""
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        logger.error("Error reading instructions file %s: %s", file_path, error)
        return FAILED_INSTRUCTIONS


@lru_cache(maxsize=1)
def get_instructions() -> str:
    path = settings.resolve_path(settings.INSTRUCTIONS_PATH)
    instructions = load_instructions(path)
    logger.info("Loaded instructions from %s (%d chars)", path, len(instructions))
    return instructions


def build_prompt(instructions: str, content: str) -> str:
    return f"{instructions}{CONTENT_SEPARATOR}{content}"
