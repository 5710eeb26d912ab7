# zhixue_ai/provider.py

from __future__ import annotations

import json
import logging
import random
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from zhixue_core.schema import GradeLevel, KnowledgePoint, QuizQuestion, Subject

from .call_guard import ProviderCallGuard
from .errors import ProviderError
from .prompts import comment_prompt, diagnostic_prompt, training_prompt

logger = logging.getLogger(__name__)

COMMENT_EMPTY = "加油！保持优势，攻克薄弱环节！"
COMMENT_FAILED = "系统暂时无法生成评语，请根据图表自行分析。"

DIAGNOSTIC_TEMPERATURE = 0.6
TRAINING_TEMPERATURE = 0.8


# ============ CLEAN JSON REPLY ============
def _try_parse_json(text: str) -> Optional[Any]:
    clean = text.strip().replace("```json", "").replace("```", "").strip()
    try:
        return json.loads(clean)
    except json.JSONDecodeError:
        fixed = clean.replace("\n", " ").replace("“", "\"").replace("”", "\"")
        try:
            return json.loads(fixed)
        except json.JSONDecodeError:
            return None


def parse_questions(raw: str, backend: str = "", operation: str = "") -> List[QuizQuestion]:
    """
    Turn a model reply into questions.

    Accepts a bare JSON array or an object with a "questions" array. An
    unreadable reply raises ProviderError; single malformed items are
    dropped with a warning.
    """
    data = _try_parse_json(raw or "")
    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise ProviderError(
            f"{backend} {operation}: reply is not a JSON question list",
            backend=backend,
            operation=operation,
        )

    questions = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"⚠️ Item {i} is not an object, skipped")
            continue
        item = dict(item)
        if not item.get("id"):
            item["id"] = str(uuid.uuid4())
        try:
            questions.append(QuizQuestion.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Invalid AI question {item.get('id')}: {e}")
    return questions


class QuestionProvider(ABC):
    """
    Contract between the composer and a generative model.

    Subclasses only implement the two raw calls; prompt building, parsing
    and the commentary fallback live here.
    """

    backend = "base"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.guard = ProviderCallGuard(self.backend)

    def generate_diagnostic_quiz(
        self,
        grade: GradeLevel,
        subject: Subject,
        topics: Sequence[str],
        per_topic: int = 2,
    ) -> List[QuizQuestion]:
        if not topics:
            return []
        prompt = diagnostic_prompt(grade, subject, topics, per_topic)
        raw = self.guard.invoke(
            "diagnostic", self._generate_json, prompt,
            with_topic=True, temperature=DIAGNOSTIC_TEMPERATURE,
        )
        questions = parse_questions(raw, self.backend, "diagnostic")
        logger.info(f"🤖 {len(questions)} diagnostic questions for {len(topics)} topic(s)")
        return questions

    def generate_training_quiz(
        self,
        grade: GradeLevel,
        subject: Subject,
        topic: str,
        learning_goal: Optional[str] = None,
        current_score: Optional[float] = None,
        size: int = 5,
    ) -> List[QuizQuestion]:
        seed = self.rng.randint(0, 9999)
        prompt = training_prompt(grade, subject, topic, learning_goal, current_score, size, seed)
        raw = self.guard.invoke(
            "training", self._generate_json, prompt,
            with_topic=False, temperature=TRAINING_TEMPERATURE,
        )
        return parse_questions(raw, self.backend, "training")

    def generate_analysis_comment(
        self,
        grade: GradeLevel,
        subject: Subject,
        points: Sequence[KnowledgePoint],
    ) -> str:
        """Short teacher-style remark. Never raises: failures become a fixed text."""
        try:
            text = self.guard.invoke("comment", self._generate_text, comment_prompt(grade, subject, points))
        except ProviderError:
            return COMMENT_FAILED
        return (text or "").strip() or COMMENT_EMPTY

    # ------------------------------
    # Raw model calls
    # ------------------------------
    @abstractmethod
    def _generate_json(self, prompt: str, *, with_topic: bool, temperature: float) -> str:
        """Return the model's JSON text for a question list."""

    @abstractmethod
    def _generate_text(self, prompt: str) -> str:
        """Return free text."""


def question_schema_fields(with_topic: bool) -> Dict[str, Dict[str, Any]]:
    """Field descriptions shared by both backends' structured-output schemas."""
    fields: Dict[str, Dict[str, Any]] = {
        "id": {"type": "string"},
        "question": {"type": "string"},
        "options": {
            "type": "array",
            "items": {"type": "string"},
            "description": "An array of 4 possible answers",
        },
        "correctIndex": {
            "type": "integer",
            "description": "The index (0-3) of the correct answer in the options array",
        },
        "explanation": {
            "type": "string",
            "description": "A detailed explanation of why the answer is correct and why others are wrong.",
        },
        "difficulty": {
            "type": "string",
            "enum": ["easy", "medium", "hard"],
            "description": "Difficulty level of the question",
        },
    }
    if with_topic:
        fields["knowledgePoint"] = {
            "type": "string",
            "description": "Must be one of the requested knowledge points exactly.",
        }
    return fields
