# zhixue_ai/openai_provider.py

import json
import logging
import random
from typing import Optional

from openai import OpenAI

from .errors import ProviderError
from .provider import QuestionProvider, question_schema_fields

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
SYSTEM_PROMPT = "You are an expert junior high school teacher who writes exam questions."


def json_envelope_instruction(with_topic: bool) -> str:
    """json_object mode needs the expected shape spelled out in the prompt."""
    fields = question_schema_fields(with_topic)
    return (
        'Return ONLY a JSON object of the form {"questions": [ ... ]} where every item has these fields:\n'
        + json.dumps(fields, ensure_ascii=False, indent=2)
    )


class OpenAIProvider(QuestionProvider):
    backend = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        self.api_key = api_key
        self.model = model
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                logger.error("❌ OPENAI_API_KEY is not set (.env or environment)")
                raise ProviderError("API Key is missing", backend=self.backend)
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def _generate_json(self, prompt: str, *, with_topic: bool, temperature: float) -> str:
        response = self._get_client().chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"{prompt}\n\n{json_envelope_instruction(with_topic)}"},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
        )
        return response.choices[0].message.content or "[]"

    def _generate_text(self, prompt: str) -> str:
        response = self._get_client().chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.5,
        )
        return response.choices[0].message.content or ""
