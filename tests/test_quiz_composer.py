# tests/test_quiz_composer.py

import random

import pytest

from zhixue_core.errors import CompositionError
from zhixue_core.question_bank import QuestionBank
from zhixue_core.quiz_composer import QuizComposer, dedupe_by_id
from zhixue_core.schema import GradeLevel, QuestionDraft, QuizQuestion, StudentProfile, Subject
from zhixue_core.topic_catalog import topic_names, topics_for


class RecordingProvider:
    """Answers every request with per_topic questions per topic and records the calls."""

    def __init__(self, extra=None):
        self.diagnostic_calls = []
        self.training_calls = []
        self.extra = list(extra or [])

    def generate_diagnostic_quiz(self, grade, subject, topics, per_topic=2):
        self.diagnostic_calls.append({"grade": grade, "subject": subject, "topics": list(topics), "per_topic": per_topic})
        out = [
            QuizQuestion(id=f"ai-{t}-{i}", question=f"{t} #{i}", options=["a", "b", "c", "d"], correct_index=0, knowledge_point=t)
            for t in topics
            for i in range(per_topic)
        ]
        return out + self.extra

    def generate_training_quiz(self, grade, subject, topic, learning_goal=None, current_score=None, size=5):
        self.training_calls.append(
            {"topic": topic, "learning_goal": learning_goal, "current_score": current_score, "size": size}
        )
        return [
            QuizQuestion(id=f"train-{i}", question=f"{topic} #{i}", options=["a", "b", "c", "d"], correct_index=1)
            for i in range(size)
        ]


PROFILE = StudentProfile(name="小明", grade=GradeLevel.EIGHT, subject=Subject.MATH)
MATH_TOPICS = topics_for(Subject.MATH)


def make_bank(counts):
    """counts: knowledge point -> number of bank questions for 八年级 数学."""
    ticks = iter(range(1000, 2000))
    bank = QuestionBank(clock=lambda: next(ticks))
    for topic, n in counts.items():
        for i in range(n):
            bank.add_question(
                QuestionDraft(
                    grade=GradeLevel.EIGHT,
                    subject=Subject.MATH,
                    knowledge_point=topic,
                    question=f"{topic} bank {i}",
                    options=["1", "2", "3", "4"],
                    correct_index=2,
                )
            )
    return bank


def make_composer(provider, **kwargs):
    kwargs.setdefault("rng", random.Random(7))
    kwargs.setdefault("clock", lambda: 123456)
    return QuizComposer(provider, **kwargs)


# ============ DIAGNOSTIC ============
def test_empty_bank_asks_ai_for_every_topic_once():
    provider = RecordingProvider()
    questions = make_composer(provider).compose_diagnostic(PROFILE, QuestionBank(), MATH_TOPICS)

    assert len(provider.diagnostic_calls) == 1, "Provider must be called exactly once"
    call = provider.diagnostic_calls[0]
    assert call["topics"] == topic_names(Subject.MATH)
    assert call["per_topic"] == 2
    assert len(questions) == 10


def test_fully_covered_bank_skips_provider():
    provider = RecordingProvider()
    bank = make_bank({t: 3 for t in topic_names(Subject.MATH)})

    questions = make_composer(provider).compose_diagnostic(PROFILE, bank, MATH_TOPICS)

    assert provider.diagnostic_calls == [], "No AI call when the bank covers every topic"
    assert len(questions) == 10
    for name in topic_names(Subject.MATH):
        assert sum(1 for q in questions if q.knowledge_point == name) == 2
    assert all(q.id.startswith("custom-") for q in questions)


def test_partial_coverage_keeps_bank_question_and_requests_backup():
    provider = RecordingProvider()
    bank = make_bank({"代数基础": 2, "平面几何": 1})

    questions = make_composer(provider).compose_diagnostic(PROFILE, bank, MATH_TOPICS)

    requested = provider.diagnostic_calls[0]["topics"]
    assert "代数基础" not in requested
    assert "平面几何" in requested, "Partially covered topic still needs AI backup"
    assert len(requested) == 4

    bank_ids = {q.id for q in bank}
    # bank questions come first
    head = [q for q in questions[:3]]
    assert all(q.id in bank_ids for q in head)
    assert all(q.id not in bank_ids for q in questions[3:])
    assert len(questions) == 3 + 4 * 2


def test_other_grade_bank_questions_are_ignored():
    provider = RecordingProvider()
    bank = make_bank({t: 2 for t in topic_names(Subject.MATH)})

    ninth = StudentProfile(name="小红", grade=GradeLevel.NINE, subject=Subject.MATH)
    questions = make_composer(provider).compose_diagnostic(ninth, bank, MATH_TOPICS)

    assert len(provider.diagnostic_calls[0]["topics"]) == 5
    assert not any(q.id.startswith("custom-") for q in questions)


def test_unrequested_ai_topic_is_dropped():
    stray = QuizQuestion(id="stray", question="?", options=["a", "b", "c", "d"], correct_index=0, knowledge_point="光学")
    untagged = QuizQuestion(id="untagged", question="?", options=["a", "b", "c", "d"], correct_index=0)
    provider = RecordingProvider(extra=[stray, untagged])

    questions = make_composer(provider).compose_diagnostic(PROFILE, QuestionBank(), MATH_TOPICS)

    ids = {q.id for q in questions}
    assert "stray" not in ids
    assert "untagged" not in ids


def test_nothing_composed_raises():
    class EmptyProvider(RecordingProvider):
        def generate_diagnostic_quiz(self, grade, subject, topics, per_topic=2):
            super().generate_diagnostic_quiz(grade, subject, topics, per_topic)
            return []

    with pytest.raises(CompositionError):
        make_composer(EmptyProvider()).compose_diagnostic(PROFILE, QuestionBank(), MATH_TOPICS)


def test_single_question_per_topic_variant():
    provider = RecordingProvider()
    bank = make_bank({"代数基础": 1})

    questions = make_composer(provider, per_topic=1).compose_diagnostic(PROFILE, bank, MATH_TOPICS)

    assert "代数基础" not in provider.diagnostic_calls[0]["topics"]
    assert provider.diagnostic_calls[0]["per_topic"] == 1
    assert len(questions) == 5


def test_dedupe_keeps_later_entry():
    a = QuizQuestion(id="x", question="old", options=["a", "b", "c", "d"], correct_index=0)
    b = QuizQuestion(id="x", question="new", options=["a", "b", "c", "d"], correct_index=1)
    c = QuizQuestion(id="y", question="other", options=["a", "b", "c", "d"], correct_index=2)

    out = dedupe_by_id([a, c, b])
    assert [q.id for q in out] == ["x", "y"]
    assert out[0].question == "new"


# ============ TRAINING ============
def test_training_from_bank_when_enough_questions():
    provider = RecordingProvider()
    bank = make_bank({"函数图像": 6})

    picked = make_composer(provider).compose_training(PROFILE, bank, "函数图像", "目标", 40)

    assert provider.training_calls == []
    assert len(picked) == 5
    assert len({q.id for q in picked}) == 5
    bank_ids = {q.id for q in bank}
    for q in picked:
        original, _, stamp = q.id.rpartition("-")
        assert stamp == "123456"
        assert original in bank_ids
        assert q.knowledge_point == "函数图像"


def test_training_falls_back_to_ai():
    provider = RecordingProvider()
    bank = make_bank({"函数图像": 4})

    out = make_composer(provider).compose_training(PROFILE, bank, "函数图像", "理解函数", 45)

    assert provider.training_calls == [
        {"topic": "函数图像", "learning_goal": "理解函数", "current_score": 45, "size": 5}
    ]
    assert len(out) == 5


def test_training_size_three():
    provider = RecordingProvider()
    bank = make_bank({"函数图像": 3})

    picked = make_composer(provider, training_size=3).compose_training(PROFILE, bank, "函数图像")

    assert provider.training_calls == []
    assert len(picked) == 3


def test_invalid_sizes_rejected():
    with pytest.raises(ValueError):
        QuizComposer(RecordingProvider(), per_topic=0)
