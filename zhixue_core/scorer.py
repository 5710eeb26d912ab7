# zhixue_core/scorer.py

import math
from typing import Dict, List, Mapping, Optional, Sequence

from .schema import FULL_MARK, KnowledgePoint, QuizQuestion, TopicDefinition, TrainingResult

# Score given to a topic that no diagnostic question touched
UNTESTED_SCORE = 50


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def score(
    questions: Sequence[QuizQuestion],
    answers: Mapping[str, Optional[int]],
    topic_defs: Sequence[TopicDefinition],
) -> List[KnowledgePoint]:
    """
    Per-topic mastery from the diagnostic answers.

    answers maps question id -> selected option index; a missing entry
    counts as wrong. Questions without a knowledge point, or tagged with a
    topic outside topic_defs, are ignored. The result follows topic_defs
    order and every topic is present.
    """
    counters: Dict[str, Dict[str, int]] = {t.name: {"total": 0, "correct": 0} for t in topic_defs}

    for q in questions:
        point = q.knowledge_point
        if not point or point not in counters:
            continue
        counters[point]["total"] += 1
        if q.is_correct(answers.get(q.id)):
            counters[point]["correct"] += 1

    points = []
    for t in topic_defs:
        c = counters[t.name]
        if c["total"] > 0:
            value = round_half_up(c["correct"] / c["total"] * FULL_MARK)
        else:
            value = UNTESTED_SCORE
        points.append(KnowledgePoint(name=t.name, score=value, full_mark=FULL_MARK, learning_goal=t.goal))
    return points


def grade_training(
    questions: Sequence[QuizQuestion],
    answers: Mapping[str, Optional[int]],
    weak_point: str,
) -> TrainingResult:
    correct = sum(1 for q in questions if q.is_correct(answers.get(q.id)))
    return TrainingResult(correct_count=correct, total_count=len(questions), weak_point=weak_point)
