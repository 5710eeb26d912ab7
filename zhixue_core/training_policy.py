# zhixue_core/training_policy.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .schema import Difficulty


# ============================
# Difficulty plan types
# ============================

@dataclass(frozen=True)
class DifficultyMix:
    """Share of easy/medium/hard questions in a training set."""
    easy: float
    medium: float
    hard: float


@dataclass(frozen=True)
class DifficultyPlan:
    """Exact question counts per difficulty."""
    easy: int
    medium: int
    hard: int

    def total(self) -> int:
        return self.easy + self.medium + self.hard

    def as_dict(self) -> Dict[Difficulty, int]:
        return {
            Difficulty.EASY: self.easy,
            Difficulty.MEDIUM: self.medium,
            Difficulty.HARD: self.hard,
        }


# ============================
# Score bands
# ============================

WEAK_BELOW = 60
STRONG_FROM = 85

WEAK_MIX = DifficultyMix(easy=0.4, medium=0.6, hard=0.0)
AVERAGE_MIX = DifficultyMix(easy=0.2, medium=0.4, hard=0.4)
STRONG_MIX = DifficultyMix(easy=0.0, medium=0.2, hard=0.8)

# Plans used when no score is known yet
DEFAULT_PLANS: Dict[int, DifficultyPlan] = {
    5: DifficultyPlan(easy=1, medium=3, hard=1),
    3: DifficultyPlan(easy=1, medium=1, hard=1),
}
DEFAULT_MIX = DifficultyMix(easy=0.2, medium=0.6, hard=0.2)

_BAND_FOCUS = {
    "Weak": "Focus on building confidence and basic concepts.",
    "Average": "Challenge them further with a growing share of hard questions.",
    "Strong": "Focus on advanced application and pitfalls.",
}


def split_counts(total: int, mix: Dict[str, float]) -> Dict[str, int]:
    """Apportion `total` by weights, handing remainders to the largest fractions."""
    s = sum(max(0.0, v) for v in mix.values())
    if s <= 0:
        mix = {k: 1.0 for k in mix}
        s = float(len(mix) or 1)
    norm = {k: max(0.0, v) / s for k, v in mix.items()}

    keys = list(norm.keys())
    base = {k: int(total * norm[k]) for k in keys}
    remain = total - sum(base.values())
    # leftover goes to the largest fractional parts
    fracs = sorted(keys, key=lambda k: (total * norm[k]) - base[k], reverse=True)
    for k in fracs:
        if remain <= 0:
            break
        base[k] += 1
        remain -= 1
    return base


def score_band(score: Optional[float]) -> Optional[str]:
    if score is None:
        return None
    if score < WEAK_BELOW:
        return "Weak"
    if score < STRONG_FROM:
        return "Average"
    return "Strong"


def plan_for_score(score: Optional[float], size: int = 5) -> DifficultyPlan:
    """
    Difficulty counts for a training set, picked from the current score.

    - score < 60      → easy/medium only
    - 60 ≤ score < 85 → balanced, more hard questions
    - score ≥ 85      → mostly hard
    - score is None   → fixed default (1/3/1, or 1/1/1 for three questions)
    """
    if size <= 0:
        raise ValueError(f"training size must be positive, got {size}")

    band = score_band(score)
    if band is None:
        if size in DEFAULT_PLANS:
            return DEFAULT_PLANS[size]
        mix = DEFAULT_MIX
    else:
        mix = {"Weak": WEAK_MIX, "Average": AVERAGE_MIX, "Strong": STRONG_MIX}[band]

    counts = split_counts(size, {"easy": mix.easy, "medium": mix.medium, "hard": mix.hard})
    return DifficultyPlan(easy=counts["easy"], medium=counts["medium"], hard=counts["hard"])


def describe_plan(plan: DifficultyPlan) -> str:
    parts = [
        f"{n} '{d.value}'"
        for d, n in plan.as_dict().items()
        if n > 0
    ]
    if len(parts) > 1:
        listed = ", ".join(parts[:-1]) + f" and {parts[-1]}"
    else:
        listed = parts[0]
    noun = "question" if plan.total() == 1 else "questions"
    return f"Generate {listed} {noun}"


def difficulty_instruction(score: Optional[float], size: int = 5) -> str:
    """Prompt sentence telling the model how to spread difficulty."""
    plan = plan_for_score(score, size)
    band = score_band(score)
    if band is None:
        return f"{describe_plan(plan)} to progressively test the student."
    shown = f"{score:g}"
    return f"The student scored {shown}/100 ({band}). {describe_plan(plan)}. {_BAND_FOCUS[band]}"
