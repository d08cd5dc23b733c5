import json
import logging

import google.generativeai as genai

from .config import settings
from .models import AiHint

logger = logging.getLogger(__name__)

FALLBACK_HINT = AiHint(
    example_sentence="Could not connect to the AI service.",
    translation="Please check your network connection.",
    tips="Wait a moment and try again.",
)

PROMPT_TEMPLATE = (
    "For the English word \"{word}\" (meaning: {meaning}), give a practical "
    "example sentence, its translation into the language of the meaning, and "
    "a tip or mnemonic for remembering the word. Respond with a JSON object "
    "with the string fields \"example_sentence\", \"translation\" and \"tips\"."
)


class HintProvider:
    """Fetches an example sentence and memory tip for a word from Gemini."""

    def __init__(self, api_key: str = None, model_name: str = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL

    def get_hint(self, word: str, meaning: str) -> AiHint:
        """Returns the AI hint, or FALLBACK_HINT if anything goes wrong."""
        if not self.api_key:
            logger.warning("GEMINI_API_KEY is not set; returning fallback hint.")
            return FALLBACK_HINT
        try:
            genai.configure(api_key=self.api_key)
            model = genai.GenerativeModel(self.model_name)
            response = model.generate_content(
                PROMPT_TEMPLATE.format(word=word, meaning=meaning),
                generation_config={"response_mime_type": "application/json"},
            )
            return AiHint.model_validate(json.loads(response.text or "{}"))
        except Exception:
            logger.exception(f"Hint request for '{word}' failed")
            return FALLBACK_HINT
