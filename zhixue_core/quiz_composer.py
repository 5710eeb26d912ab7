# zhixue_core/quiz_composer.py

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from .errors import CompositionError
from .question_bank import QuestionBank, now_ms
from .schema import QuizQuestion, StudentProfile, TopicDefinition

if TYPE_CHECKING:
    from zhixue_ai.provider import QuestionProvider

logger = logging.getLogger(__name__)


def dedupe_by_id(questions: Sequence[QuizQuestion]) -> List[QuizQuestion]:
    """Drop repeated ids; the later entry replaces the earlier one in place."""
    by_id: Dict[str, QuizQuestion] = {}
    for q in questions:
        if q.id in by_id:
            logger.warning(f"⚠️ Duplicate question id {q.id}, keeping the later one")
        by_id[q.id] = q
    return list(by_id.values())


class QuizComposer:
    """
    Assembles the diagnostic quiz and the weak-topic training quiz.

    Bank questions are preferred; topics the bank cannot cover are sent to
    the AI provider in one batch. `rng` and `clock` are injectable so the
    selection and the id suffixes are reproducible in tests.
    """

    def __init__(
        self,
        provider: "QuestionProvider",
        *,
        per_topic: int = 2,
        training_size: int = 5,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = now_ms,
    ):
        if per_topic < 1 or training_size < 1:
            raise ValueError("per_topic and training_size must be >= 1")
        self.provider = provider
        self.per_topic = per_topic
        self.training_size = training_size
        self.rng = rng or random.Random()
        self.clock = clock

    # ============================
    # Diagnostic quiz
    # ============================

    def compose_diagnostic(
        self,
        profile: StudentProfile,
        bank: QuestionBank,
        topic_defs: Sequence[TopicDefinition],
    ) -> List[QuizQuestion]:
        relevant = bank.filter(profile.grade, profile.subject)

        from_bank: List[QuizQuestion] = []
        topics_needing_ai: List[str] = []

        for topic in topic_defs:
            matches = [q for q in relevant if q.knowledge_point == topic.name]

            if len(matches) >= self.per_topic:
                from_bank.extend(self.rng.sample(matches, self.per_topic))
            elif matches:
                # not enough coverage: keep what the bank has and ask for backup
                from_bank.extend(matches)
                topics_needing_ai.append(topic.name)
            else:
                topics_needing_ai.append(topic.name)

        logger.info(
            f"📚 Bank supplied {len(from_bank)} questions, "
            f"{len(topics_needing_ai)} topic(s) need AI: {topics_needing_ai}"
        )

        from_ai: List[QuizQuestion] = []
        if topics_needing_ai:
            generated = self.provider.generate_diagnostic_quiz(
                profile.grade, profile.subject, topics_needing_ai, per_topic=self.per_topic
            )
            from_ai = self._keep_requested_topics(generated, topics_needing_ai)

        questions = dedupe_by_id(from_bank + from_ai)
        if not questions:
            raise CompositionError("Failed to generate any questions")
        return questions

    def _keep_requested_topics(
        self, generated: Sequence[QuizQuestion], requested: Sequence[str]
    ) -> List[QuizQuestion]:
        wanted = set(requested)
        kept = []
        for q in generated:
            if q.knowledge_point in wanted:
                kept.append(q)
            else:
                logger.warning(
                    f"⚠️ Dropping AI question {q.id}: knowledge point "
                    f"{q.knowledge_point!r} was not requested"
                )
        return kept

    # ============================
    # Training quiz
    # ============================

    def compose_training(
        self,
        profile: StudentProfile,
        bank: QuestionBank,
        weak_topic: str,
        learning_goal: Optional[str] = None,
        current_score: Optional[float] = None,
    ) -> List[QuizQuestion]:
        matches = bank.filter(profile.grade, profile.subject, weak_topic)

        if len(matches) >= self.training_size:
            shuffled = list(matches)
            self.rng.shuffle(shuffled)
            stamp = self.clock()
            # suffix keeps repeated rounds apart from earlier ones
            picked = [q.with_id(f"{q.id}-{stamp}") for q in shuffled[: self.training_size]]
            logger.info(f"📚 Training on {weak_topic!r} from the bank ({len(matches)} available)")
            return picked

        logger.info(
            f"🤖 Bank has {len(matches)}/{self.training_size} questions for {weak_topic!r}, asking AI"
        )
        return self.provider.generate_training_quiz(
            profile.grade,
            profile.subject,
            weak_topic,
            learning_goal=learning_goal,
            current_score=current_score,
            size=self.training_size,
        )
