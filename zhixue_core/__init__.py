# zhixue_core/__init__.py

"""
Core module for the 智学AI diagnosis system

Contents:
- Schema: grades, subjects, questions, scored knowledge points
- Topic catalog per subject
- Question bank owned by the session
- Quiz composer (bank first, AI for uncovered topics) and training policy
- Scorer and report classification
- DiagnosisSession: the setup → quiz → dashboard state machine

Common exports:
    QuizQuestion, KnowledgePoint, StudentProfile, QuestionDraft
    QuestionBank, QuizComposer, DiagnosisSession, Step
    score, grade_training, plan_for_score, difficulty_instruction
"""

# Schema models
from .schema import (
    GRADES,
    SUBJECTS,
    Difficulty,
    GradeLevel,
    KnowledgePoint,
    QuestionDraft,
    QuizQuestion,
    StudentProfile,
    Subject,
    TopicDefinition,
    TrainingResult,
)

# Errors
from .errors import (
    CompositionError,
    DiagnosisError,
    InvalidTransitionError,
    ProfileValidationError,
    QuestionValidationError,
    ValidationError,
)

# Catalog & bank
from .topic_catalog import SUBJECT_TOPICS, find_topic, topic_names, topics_for
from .question_bank import QuestionBank

# Composition & scoring
from .training_policy import DifficultyPlan, difficulty_instruction, plan_for_score
from .quiz_composer import QuizComposer
from .scorer import grade_training, score

# Application state
from .session import AppState, DiagnosisSession, Step


__all__ = [
    # Schema
    "GRADES",
    "SUBJECTS",
    "Difficulty",
    "GradeLevel",
    "KnowledgePoint",
    "QuestionDraft",
    "QuizQuestion",
    "StudentProfile",
    "Subject",
    "TopicDefinition",
    "TrainingResult",

    # Errors
    "CompositionError",
    "DiagnosisError",
    "InvalidTransitionError",
    "ProfileValidationError",
    "QuestionValidationError",
    "ValidationError",

    # Catalog & bank
    "SUBJECT_TOPICS",
    "find_topic",
    "topic_names",
    "topics_for",
    "QuestionBank",

    # Composition & scoring
    "DifficultyPlan",
    "difficulty_instruction",
    "plan_for_score",
    "QuizComposer",
    "grade_training",
    "score",

    # Application state
    "AppState",
    "DiagnosisSession",
    "Step",
]
