# zhixue_ai/prompts.py

from typing import Optional, Sequence

from zhixue_core.schema import GradeLevel, KnowledgePoint, Subject
from zhixue_core.training_policy import difficulty_instruction

# Comment thresholds differ from the dashboard's weak/strong split
COMMENT_WEAK_BELOW = 70
COMMENT_STRONG_FROM = 85


# ============ DIAGNOSTIC ============
def diagnostic_prompt(grade: GradeLevel, subject: Subject, topics: Sequence[str], per_topic: int = 2) -> str:
    topics_str = ", ".join(topics)
    if per_topic >= 2:
        tiers = """
1. The first question should be of 'easy' or 'medium' difficulty (Basic concept check).
2. The second question should be of 'medium' or 'hard' difficulty (Deep understanding check)."""
        if per_topic > 2:
            tiers += "\nFurther questions may use any difficulty."
    else:
        tiers = "\nThe question should be of 'medium' difficulty."

    return f"""
You are an expert junior high school teacher.
Create a diagnostic test for a {grade.value} student in {subject.value}.

For EACH of the following knowledge points: {topics_str}, you must generate exactly {per_topic} question(s):{tiers}

Every question must set "knowledgePoint" to exactly one of the requested knowledge points.
Total questions: {len(topics) * per_topic}.

The output must be in Chinese (Simplified).
""".strip()


# ============ TRAINING ============
def training_prompt(
    grade: GradeLevel,
    subject: Subject,
    topic: str,
    learning_goal: Optional[str],
    current_score: Optional[float],
    size: int,
    seed: int,
) -> str:
    goal_line = f'Target Learning Goal: "{learning_goal}".' if learning_goal else ""
    return f"""
You are an expert junior high school tutor.
Create a set of {size} multiple-choice practice questions (Single Choice) for a student in {grade.value} studying {subject.value}.

Target Topic: "{topic}".
{goal_line}

ADAPTIVE DIFFICULTY STRATEGY:
{difficulty_instruction(current_score, size)}

Ensure these questions are varied and distinct.
Random Seed: {seed}
The output must be in Chinese (Simplified).
""".strip()


# ============ COMMENT ============
def comment_prompt(grade: GradeLevel, subject: Subject, points: Sequence[KnowledgePoint]) -> str:
    weak = ", ".join(p.name for p in points if p.score < COMMENT_WEAK_BELOW)
    strong = ", ".join(p.name for p in points if p.score >= COMMENT_STRONG_FROM)
    return f"""
As a teacher, provide a short, encouraging 2-sentence summary analysis for a {grade.value} student in {subject.value}.
Their weak points are: {weak or "None"}.
Their strong points are: {strong or "None"}.
Write in Chinese. Be direct and helpful.
""".strip()
