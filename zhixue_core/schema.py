# zhixue_core/schema.py

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class GradeLevel(Enum):
    SEVEN = "七年级"
    EIGHT = "八年级"
    NINE = "九年级"


class Subject(Enum):
    MATH = "数学"
    CHINESE = "语文"
    ENGLISH = "英语"
    PHYSICS = "物理"
    CHEMISTRY = "化学"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


GRADES: List[GradeLevel] = [GradeLevel.SEVEN, GradeLevel.EIGHT, GradeLevel.NINE]
SUBJECTS: List[Subject] = [
    Subject.MATH,
    Subject.CHINESE,
    Subject.ENGLISH,
    Subject.PHYSICS,
    Subject.CHEMISTRY,
]

OPTION_COUNT = 4
FULL_MARK = 100


@dataclass(frozen=True)
class TopicDefinition:
    """Knowledge point of a subject together with its learning goal."""
    name: str
    goal: str


@dataclass(frozen=True)
class QuizQuestion:
    """
    Multiple-choice question, teacher-authored or AI-generated.

    - options always holds 4 strings, correct_index points into it
    - teacher-authored entries carry grade/subject/knowledge_point
    - AI entries carry knowledge_point only in the diagnostic flow
    """
    id: str
    question: str
    options: List[str]
    correct_index: int
    explanation: str = ""

    # Optional tags
    knowledge_point: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    grade: Optional[GradeLevel] = None
    subject: Optional[Subject] = None

    def with_id(self, new_id: str) -> "QuizQuestion":
        return replace(self, id=new_id)

    def is_correct(self, selected: Optional[int]) -> bool:
        return selected is not None and selected == self.correct_index

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape shared with the AI provider (camelCase keys)."""
        data: Dict[str, Any] = {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correctIndex": self.correct_index,
            "explanation": self.explanation,
        }
        if self.knowledge_point is not None:
            data["knowledgePoint"] = self.knowledge_point
        if self.difficulty is not None:
            data["difficulty"] = self.difficulty.value
        if self.grade is not None:
            data["grade"] = self.grade.value
        if self.subject is not None:
            data["subject"] = self.subject.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuizQuestion":
        """
        Build a question from the wire shape.
        Raises ValueError/KeyError/TypeError on malformed input.
        """
        options = data["options"]
        if not isinstance(options, list) or len(options) != OPTION_COUNT:
            raise ValueError(f"expected {OPTION_COUNT} options, got {options!r}")
        options = [str(o) for o in options]

        correct_index = int(data["correctIndex"])
        if not 0 <= correct_index < len(options):
            raise ValueError(f"correctIndex out of range: {correct_index}")

        text = str(data["question"]).strip()
        if not text:
            raise ValueError("empty question text")

        difficulty = data.get("difficulty")
        grade = data.get("grade")
        subject = data.get("subject")

        return cls(
            id=str(data["id"]),
            question=text,
            options=options,
            correct_index=correct_index,
            explanation=str(data.get("explanation") or ""),
            knowledge_point=data.get("knowledgePoint") or None,
            difficulty=Difficulty(str(difficulty).lower()) if difficulty else None,
            grade=GradeLevel(grade) if grade else None,
            subject=Subject(subject) if subject else None,
        )


@dataclass
class KnowledgePoint:
    """Mastery of one topic after scoring (0-100)."""
    name: str
    score: int
    full_mark: int = FULL_MARK
    learning_goal: Optional[str] = None


@dataclass
class StudentProfile:
    name: str = ""
    grade: GradeLevel = GradeLevel.EIGHT
    subject: Subject = Subject.MATH


@dataclass
class TrainingResult:
    correct_count: int
    total_count: int
    weak_point: str


@dataclass
class QuestionDraft:
    """Form fields typed by the teacher before the bank assigns an id."""
    grade: Optional[GradeLevel]
    subject: Optional[Subject]
    knowledge_point: str
    question: str
    options: List[str] = field(default_factory=lambda: ["", "", "", ""])
    correct_index: int = 0
    explanation: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
