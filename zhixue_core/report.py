# zhixue_core/report.py

from typing import List, Sequence

from .schema import KnowledgePoint
from .scorer import round_half_up

WEAK_THRESHOLD = 80
CRITICAL_THRESHOLD = 60


def weak_points(points: Sequence[KnowledgePoint]) -> List[KnowledgePoint]:
    """Training candidates, weakest first."""
    return sorted((p for p in points if p.score < WEAK_THRESHOLD), key=lambda p: p.score)


def strong_points(points: Sequence[KnowledgePoint]) -> List[KnowledgePoint]:
    return sorted((p for p in points if p.score >= WEAK_THRESHOLD), key=lambda p: p.score)


def is_critical(point: KnowledgePoint) -> bool:
    return point.score < CRITICAL_THRESHOLD


def overall_mastery(points: Sequence[KnowledgePoint]) -> int:
    if not points:
        return 0
    return round_half_up(sum(p.score for p in points) / len(points))
