import logging
from functools import lru_cache

from google import genai
from google.genai import types

from reviewer.prompt import build_prompt
from shared.config import config

logger = logging.getLogger(__name__)


class GeminiReviewer:
    """Sends one review prompt to Gemini and returns the Markdown reply."""

    def __init__(self, client: genai.Client, model: str):
        self.client = client
        self.model = model

    async def generate(self, code: str, system_instruction: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=[
                types.Content(
                    role="user",
                    parts=[types.Part(text=build_prompt(system_instruction, code))],
                )
            ],
        )
        return response.text


@lru_cache(maxsize=1)
def get_reviewer() -> GeminiReviewer:
    if not config.GEMINI_API_KEY:
        raise RuntimeError("GEMINI_API_KEY is not set. Put it in .env or export it in your shell.")
    logger.info("Using Gemini model %s", config.GEMINI_MODEL)
    return GeminiReviewer(genai.Client(api_key=config.GEMINI_API_KEY), config.GEMINI_MODEL)
