# zhixue_core/question_bank.py

import logging
import time
from typing import Callable, Iterator, List, Optional

from .errors import QuestionValidationError
from .schema import OPTION_COUNT, GradeLevel, QuestionDraft, QuizQuestion, Subject
from .topic_catalog import is_known_topic

logger = logging.getLogger(__name__)

INCOMPLETE_MESSAGE = "请完整填写题目和所有选项"
DEFAULT_EXPLANATION = "暂无解析"


def now_ms() -> int:
    return int(time.time() * 1000)


class QuestionBank:
    """
    Teacher-authored questions for the current session.

    Every write goes through add_question/delete_question so that ids stay
    unique even when several entries are added within the same millisecond.
    Newest entries come first.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._items: List[QuizQuestion] = []

    # ------------------------------
    # Read access
    # ------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QuizQuestion]:
        return iter(list(self._items))

    def __contains__(self, question_id: str) -> bool:
        return self.get(question_id) is not None

    def get(self, question_id: str) -> Optional[QuizQuestion]:
        for q in self._items:
            if q.id == question_id:
                return q
        return None

    def filter(
        self,
        grade: GradeLevel,
        subject: Subject,
        knowledge_point: Optional[str] = None,
    ) -> List[QuizQuestion]:
        return [
            q for q in self._items
            if q.grade == grade
            and q.subject == subject
            and (knowledge_point is None or q.knowledge_point == knowledge_point)
        ]

    # ------------------------------
    # Mutations
    # ------------------------------
    def add_question(self, draft: QuestionDraft) -> QuizQuestion:
        """Validate the draft, assign a fresh custom-<ms> id and prepend it."""
        validate_draft(draft)

        question = QuizQuestion(
            id=self._next_id(),
            question=draft.question.strip(),
            options=[o.strip() for o in draft.options],
            correct_index=draft.correct_index,
            explanation=draft.explanation.strip() or DEFAULT_EXPLANATION,
            knowledge_point=draft.knowledge_point,
            difficulty=draft.difficulty,
            grade=draft.grade,
            subject=draft.subject,
        )
        self._items.insert(0, question)
        logger.info(f"📝 Added {question.id} ({draft.subject.value}/{draft.knowledge_point})")
        return question

    def delete_question(self, question_id: str) -> bool:
        before = len(self._items)
        self._items = [q for q in self._items if q.id != question_id]
        removed = len(self._items) < before
        if removed:
            logger.info(f"🗑️ Deleted {question_id}")
        return removed

    def _next_id(self) -> str:
        stamp = self._clock()
        while f"custom-{stamp}" in self:
            stamp += 1
        return f"custom-{stamp}"


def validate_draft(draft: QuestionDraft) -> None:
    if not draft.question.strip():
        raise QuestionValidationError(INCOMPLETE_MESSAGE)
    if len(draft.options) != OPTION_COUNT or any(not o.strip() for o in draft.options):
        raise QuestionValidationError(INCOMPLETE_MESSAGE)
    if not 0 <= draft.correct_index < OPTION_COUNT:
        raise QuestionValidationError(f"正确答案序号必须在 0-{OPTION_COUNT - 1} 之间")
    if draft.grade is None or draft.subject is None:
        raise QuestionValidationError("请选择年级和学科")
    if not is_known_topic(draft.subject, draft.knowledge_point):
        raise QuestionValidationError(f"知识点不属于{draft.subject.value}: {draft.knowledge_point}")
