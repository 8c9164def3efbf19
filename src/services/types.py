from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ResolvedContent:
    content: str
    bypass_ai: bool = False
    parsed_json: Optional[Any] = None


@dataclass
class ParsedReply:
    text: str
    json: Optional[Any] = None


@dataclass
class ExtractionResult:
    response_text: str
    recipe_json: Optional[Any] = None
