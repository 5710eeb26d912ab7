# zhixue_core/session.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from . import report
from .errors import InvalidTransitionError, ProfileValidationError, ValidationError
from .question_bank import QuestionBank
from .quiz_composer import QuizComposer
from .schema import (
    OPTION_COUNT,
    GradeLevel,
    KnowledgePoint,
    QuestionDraft,
    QuizQuestion,
    StudentProfile,
    Subject,
    TrainingResult,
)
from .scorer import grade_training, score
from .topic_catalog import topics_for

if TYPE_CHECKING:
    from zhixue_ai.provider import QuestionProvider

logger = logging.getLogger(__name__)

# Shown when the commentary call itself blew up inside the session
COMMENT_PLACEHOLDER = "分析生成中..."


class Step(Enum):
    SETUP = "setup"
    DIAGNOSING = "diagnosing"
    QUIZ = "quiz"
    ANALYZING = "analyzing"
    DASHBOARD = "dashboard"


_TRANSITIONS = {
    Step.SETUP: {Step.DIAGNOSING},
    Step.DIAGNOSING: {Step.QUIZ, Step.SETUP},
    Step.QUIZ: {Step.ANALYZING},
    Step.ANALYZING: {Step.DASHBOARD},
    Step.DASHBOARD: {Step.SETUP},
}


@dataclass
class TrainingState:
    weak_point: str
    learning_goal: str
    questions: List[QuizQuestion]
    result: Optional[TrainingResult] = None


@dataclass
class AppState:
    """Everything the screens read. Only DiagnosisSession writes to it."""
    step: Step = Step.SETUP
    profile: StudentProfile = field(default_factory=StudentProfile)
    diagnostic_questions: List[QuizQuestion] = field(default_factory=list)
    answers: Dict[str, int] = field(default_factory=dict)
    knowledge_points: List[KnowledgePoint] = field(default_factory=list)
    ai_comment: str = ""
    training: Optional[TrainingState] = None


class DiagnosisSession:
    """
    Single owner of the application state.

    Screens call the action methods below; each action checks the current
    step, mutates the state and moves along
    setup → diagnosing → quiz → analyzing → dashboard (→ setup).
    """

    def __init__(
        self,
        provider: "QuestionProvider",
        *,
        bank: Optional[QuestionBank] = None,
        composer: Optional[QuizComposer] = None,
    ):
        self.provider = provider
        self.bank = bank if bank is not None else QuestionBank()
        self.composer = composer or QuizComposer(provider)
        self.state = AppState()

    # ============================
    # Helpers
    # ============================

    @property
    def step(self) -> Step:
        return self.state.step

    def _require(self, *allowed: Step) -> None:
        if self.state.step not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise InvalidTransitionError(
                f"action needs step {names}, current step is {self.state.step.value}",
                current=self.state.step.value,
            )

    def _go(self, target: Step) -> None:
        current = self.state.step
        if target not in _TRANSITIONS[current]:
            raise InvalidTransitionError(
                f"cannot move from {current.value} to {target.value}",
                current=current.value,
                target=target.value,
            )
        logger.debug(f"🔀 {current.value} → {target.value}")
        self.state.step = target

    # ============================
    # Setup
    # ============================

    def update_profile(
        self,
        name: Optional[str] = None,
        grade: Optional[GradeLevel] = None,
        subject: Optional[Subject] = None,
    ) -> StudentProfile:
        self._require(Step.SETUP)
        p = self.state.profile
        if name is not None:
            p.name = name
        if grade is not None:
            p.grade = grade
        if subject is not None:
            p.subject = subject
        return p

    def add_question(self, draft: QuestionDraft) -> QuizQuestion:
        self._require(Step.SETUP)
        return self.bank.add_question(draft)

    def delete_question(self, question_id: str) -> bool:
        self._require(Step.SETUP)
        return self.bank.delete_question(question_id)

    def start_diagnosis(self) -> List[QuizQuestion]:
        """
        Build the diagnostic quiz for the current profile.

        Any failure (nothing composed, AI error) sends the flow back to
        setup and is re-raised for the screen to alert on.
        """
        self._require(Step.SETUP)
        profile = self.state.profile
        if not profile.name.strip():
            raise ProfileValidationError("请输入学生姓名")

        self._go(Step.DIAGNOSING)
        try:
            questions = self.composer.compose_diagnostic(
                profile, self.bank, topics_for(profile.subject)
            )
        except Exception:
            logger.exception("❌ Diagnostic quiz generation failed")
            self._go(Step.SETUP)
            raise

        self.state.diagnostic_questions = questions
        self.state.answers = {}
        self._go(Step.QUIZ)
        logger.info(f"✅ Diagnostic quiz ready: {len(questions)} questions for {profile.name}")
        return questions

    # ============================
    # Diagnostic quiz
    # ============================

    def answer(self, question_id: str, option_index: int) -> None:
        self._require(Step.QUIZ)
        if not any(q.id == question_id for q in self.state.diagnostic_questions):
            raise ValidationError(f"unknown question id: {question_id}")
        if not 0 <= option_index < OPTION_COUNT:
            raise ValidationError(f"option index out of range: {option_index}")
        self.state.answers[question_id] = option_index

    def submit_quiz(self) -> List[KnowledgePoint]:
        self._require(Step.QUIZ)
        self._go(Step.ANALYZING)

        profile = self.state.profile
        points = score(self.state.diagnostic_questions, self.state.answers, topics_for(profile.subject))
        self.state.knowledge_points = points

        try:
            self.state.ai_comment = self.provider.generate_analysis_comment(
                profile.grade, profile.subject, points
            )
        except Exception as e:
            logger.warning(f"⚠️ Commentary failed: {e}")
            self.state.ai_comment = COMMENT_PLACEHOLDER

        self._go(Step.DASHBOARD)
        return points

    # ============================
    # Dashboard
    # ============================

    def weak_points(self) -> List[KnowledgePoint]:
        return report.weak_points(self.state.knowledge_points)

    def strong_points(self) -> List[KnowledgePoint]:
        return report.strong_points(self.state.knowledge_points)

    def overall_mastery(self) -> int:
        return report.overall_mastery(self.state.knowledge_points)

    def start_training(self, point_name: str) -> List[QuizQuestion]:
        """Training set for one knowledge point; the state is untouched on failure."""
        self._require(Step.DASHBOARD)
        point = next((p for p in self.state.knowledge_points if p.name == point_name), None)
        goal = point.learning_goal if point and point.learning_goal else ""
        current = point.score if point else None

        questions = self.composer.compose_training(
            self.state.profile, self.bank, point_name, goal or None, current
        )
        self.state.training = TrainingState(weak_point=point_name, learning_goal=goal, questions=questions)
        return questions

    def finish_training(self, answers: Mapping[str, Optional[int]]) -> TrainingResult:
        self._require(Step.DASHBOARD)
        training = self.state.training
        if training is None:
            raise InvalidTransitionError("no training round in progress", current=self.state.step.value)
        training.result = grade_training(training.questions, answers, training.weak_point)
        return training.result

    def reset(self) -> None:
        """Back to setup; profile and bank survive, results do not."""
        self._go(Step.SETUP)
        profile = self.state.profile
        self.state = AppState(profile=profile)
