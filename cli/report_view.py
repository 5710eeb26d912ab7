# cli/report_view.py

from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from zhixue_core import report
from zhixue_core.schema import Difficulty, KnowledgePoint, QuizQuestion, StudentProfile

DIFFICULTY_LABELS = {
    Difficulty.EASY: ("简单", "green"),
    Difficulty.MEDIUM: ("中等", "yellow"),
    Difficulty.HARD: ("困难", "red"),
}

LETTERS = "ABCD"


def difficulty_label(difficulty: Optional[Difficulty]) -> str:
    label, color = DIFFICULTY_LABELS[difficulty or Difficulty.MEDIUM]
    return f"[{color}]{label}[/{color}]"


def score_color(score: int) -> str:
    if score >= report.WEAK_THRESHOLD:
        return "green"
    if score < report.CRITICAL_THRESHOLD:
        return "red"
    return "dark_orange"


def score_bar(score: int, width: int = 20) -> str:
    """Text bar standing in for one radar axis; never shorter than one cell."""
    filled = max(1, round(width * max(0, min(score, 100)) / 100))
    return "█" * filled + "░" * (width - filled)


def render_question(console: Console, q: QuizQuestion, index: int, total: int, topic_fallback: str = "综合测试"):
    console.print(
        f"\n[bold cyan]第 {index} / {total} 题[/bold cyan]  "
        f"[magenta]{q.knowledge_point or topic_fallback}[/magenta]  {difficulty_label(q.difficulty)}"
    )
    console.print(f"[bold]{escape(q.question)}[/bold]")
    for i, opt in enumerate(q.options):
        console.print(f"  {LETTERS[i]}. {escape(opt)}")


def knowledge_table(points: Sequence[KnowledgePoint]) -> Table:
    table = Table(title="知识图谱", show_lines=False)
    table.add_column("知识点", style="bold")
    table.add_column("掌握度")
    table.add_column("分数", justify="right")
    for p in points:
        color = score_color(p.score)
        table.add_row(p.name, f"[{color}]{score_bar(p.score)}[/{color}]", f"[{color}]{p.score}[/{color}]")
    return table


def render_dashboard(
    console: Console,
    profile: StudentProfile,
    points: List[KnowledgePoint],
    comment: str,
) -> List[KnowledgePoint]:
    """Print the report and return the weak points in the order they are listed."""
    console.print(
        Panel(
            f"[bold]综合掌握度[/bold] [bold blue]{report.overall_mastery(points)}%[/bold blue]\n\n"
            f"✨ [bold]AI 智能点评[/bold]\n{escape(comment or '分析完成。')}",
            title=f"{profile.name} · {profile.grade.value} {profile.subject.value}",
        )
    )
    console.print(knowledge_table(points))

    weak = report.weak_points(points)
    console.print("\n📖 [bold]薄弱项专项突破[/bold]")
    if not weak:
        console.print("[green]太棒了！测试显示暂无明显薄弱项。您可以尝试其他学科或更高年级挑战。[/green]")
    for i, p in enumerate(weak, 1):
        color = score_color(p.score)
        console.print(f"  {i}. [bold]{p.name}[/bold] [{color}]{p.score}分[/{color}]")
        if p.learning_goal:
            console.print(f"     [dim]目标：{p.learning_goal}[/dim]")

    strong = report.strong_points(points)
    console.print("\n💪 [bold]强项保持[/bold]")
    if strong:
        console.print("  " + "  ".join(f"[green]{p.name} ({p.score})[/green]" for p in strong))
    else:
        console.print("  [dim]暂无明显强项，继续加油！[/dim]")
    return weak
