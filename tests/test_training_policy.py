# tests/test_training_policy.py

import pytest

from zhixue_core.training_policy import (
    DifficultyPlan,
    difficulty_instruction,
    plan_for_score,
    score_band,
    split_counts,
)


def test_score_bands():
    assert score_band(None) is None
    assert score_band(0) == "Weak"
    assert score_band(59.9) == "Weak"
    assert score_band(60) == "Average"
    assert score_band(84) == "Average"
    assert score_band(85) == "Strong"


def test_plans_for_five_questions():
    assert plan_for_score(45) == DifficultyPlan(easy=2, medium=3, hard=0)
    assert plan_for_score(70) == DifficultyPlan(easy=1, medium=2, hard=2)
    assert plan_for_score(90) == DifficultyPlan(easy=0, medium=1, hard=4)
    assert plan_for_score(None) == DifficultyPlan(easy=1, medium=3, hard=1)


def test_plans_always_sum_to_size():
    for size in (1, 3, 5, 7):
        for s in (None, 10, 60, 85, 100):
            plan = plan_for_score(s, size)
            assert plan.total() == size, f"size={size} score={s} → {plan}"
    assert plan_for_score(None, 3) == DifficultyPlan(easy=1, medium=1, hard=1)


def test_weak_student_never_gets_hard_questions():
    for size in (3, 5):
        assert plan_for_score(30, size).hard == 0


def test_invalid_size():
    with pytest.raises(ValueError):
        plan_for_score(50, 0)


def test_split_counts_largest_remainder():
    counts = split_counts(3, {"easy": 0.4, "medium": 0.6, "hard": 0.0})
    assert counts == {"easy": 1, "medium": 2, "hard": 0}
    assert sum(split_counts(4, {"a": 0.0, "b": 0.0}).values()) == 4


def test_difficulty_instruction_text():
    text = difficulty_instruction(45)
    assert text.startswith("The student scored 45/100 (Weak).")
    assert "2 'easy' and 3 'medium' questions" in text
    assert "'hard'" not in text

    default = difficulty_instruction(None)
    assert default == "Generate 1 'easy', 3 'medium' and 1 'hard' questions to progressively test the student."


def test_instruction_shows_score_as_banded():
    text = difficulty_instruction(59.6)
    assert text.startswith("The student scored 59.6/100 (Weak).")
    assert difficulty_instruction(85.0).startswith("The student scored 85/100 (Strong).")
