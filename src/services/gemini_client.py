from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors

from src.services.errors import ExtractionConfigurationError, ExtractionError
from src.services.prompt import build_prompt

logger = logging.getLogger(__name__)


class GeminiExtractionClient:
    def __init__(self, api_key: str, instructions: str, model_name: str = "gemini-2.5-flash") -> None:
        if not api_key:
            raise ExtractionConfigurationError("Missing Gemini API key.")
        self.model_name = model_name
        self.instructions = instructions
        self.client = genai.Client(api_key=api_key)

    def build_prompt(self, content: str) -> str:
        return build_prompt(self.instructions, content)

    async def extract(self, content: str) -> str:
        """Send the prompt in streaming mode and return the joined reply."""
        prompt = self.build_prompt(content)
        logger.info("gemini.request model=%s prompt_chars=%d", self.model_name, len(prompt))

        chunks: list[str] = []
        try:
            stream = await self.client.aio.models.generate_content_stream(
                model=self.model_name,
                contents=prompt,
            )
            async for chunk in stream:
                if chunk.text:
                    chunks.append(chunk.text)
        except genai_errors.APIError as error:
            raise ExtractionError(error.message or str(error)) from error
        except (httpx.HTTPError, httpx.StreamError, OSError, ValueError) as error:
            raise ExtractionError(str(error) or type(error).__name__) from error

        logger.info("gemini.response chunks=%d", len(chunks))
        return "".join(chunks)
