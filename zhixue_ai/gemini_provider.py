# zhixue_ai/gemini_provider.py

import logging
import random
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from .errors import ProviderError
from .provider import QuestionProvider, question_schema_fields

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

_TYPES = {
    "string": types.Type.STRING,
    "integer": types.Type.INTEGER,
    "array": types.Type.ARRAY,
    "object": types.Type.OBJECT,
}


def _to_schema(field_def: Dict[str, Any]) -> types.Schema:
    return types.Schema(
        type=_TYPES[field_def["type"]],
        description=field_def.get("description"),
        enum=field_def.get("enum"),
        items=_to_schema(field_def["items"]) if "items" in field_def else None,
    )


def question_list_schema(with_topic: bool) -> types.Schema:
    """Structured-output schema: an array of question objects."""
    fields = question_schema_fields(with_topic)
    return types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties={name: _to_schema(field_def) for name, field_def in fields.items()},
            required=list(fields.keys()),
        ),
    )


class GeminiProvider(QuestionProvider):
    backend = "gemini"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        self.api_key = api_key
        self.model = model
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                logger.error("❌ GOOGLE_API_KEY is not set (.env or environment)")
                raise ProviderError("API Key is missing", backend=self.backend)
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _generate_json(self, prompt: str, *, with_topic: bool, temperature: float) -> str:
        response = self._get_client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=question_list_schema(with_topic),
                temperature=temperature,
            ),
        )
        return response.text or "[]"

    def _generate_text(self, prompt: str) -> str:
        response = self._get_client().models.generate_content(model=self.model, contents=prompt)
        return response.text or ""
