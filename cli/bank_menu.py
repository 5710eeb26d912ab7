# cli/bank_menu.py

from typing import List, Optional, Sequence, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from zhixue_core import DiagnosisSession
from zhixue_core.errors import QuestionValidationError
from zhixue_core.schema import GRADES, SUBJECTS, Difficulty, GradeLevel, QuestionDraft, Subject
from zhixue_core.topic_catalog import topic_names

from .report_view import LETTERS, difficulty_label

T = TypeVar("T")


def choose(console: Console, title: str, items: Sequence[T], labels: List[str], default: Optional[int] = None) -> T:
    """Numbered pick list; Enter keeps the default, invalid input falls back to it."""
    console.print(f"\n[magenta]{title}[/magenta]")
    for i, label in enumerate(labels, 1):
        marker = " [dim](默认)[/dim]" if default is not None and i - 1 == default else ""
        console.print(f"  [cyan]{i}.[/cyan] {label}{marker}")
    raw = console.input("👉 请输入序号: ").strip()
    if raw.isdigit() and 1 <= int(raw) <= len(items):
        return items[int(raw) - 1]
    if default is None:
        console.print("[yellow]⚠️ 输入无效，默认选择第 1 项[/yellow]")
        return items[0]
    return items[default]


def _read_draft(console: Console, grade: GradeLevel, subject: Subject) -> QuestionDraft:
    topics = topic_names(subject)
    topic = choose(console, "知识点", topics, topics, default=0)
    difficulties = list(Difficulty)
    difficulty = choose(
        console, "难度", difficulties, [difficulty_label(d) for d in difficulties], default=1
    )

    question = console.input("\n✏️ 题目内容: ")
    options = [console.input(f"   选项 {LETTERS[i]}: ") for i in range(4)]
    raw = console.input("✅ 正确答案 (A-D, Enter = A): ").strip().upper()
    correct_index = LETTERS.index(raw) if len(raw) == 1 and raw in LETTERS else 0
    explanation = console.input("💡 解析 (可留空): ")

    return QuestionDraft(
        grade=grade,
        subject=subject,
        knowledge_point=topic,
        question=question,
        options=options,
        correct_index=correct_index,
        explanation=explanation,
        difficulty=difficulty,
    )


def _list_questions(console: Console, session: DiagnosisSession, grade: GradeLevel, subject: Subject):
    rows = session.bank.filter(grade, subject)
    table = Table(title=f"已录入题目 {grade.value} {subject.value} ({len(rows)}/{len(session.bank)})")
    table.add_column("ID", style="dim")
    table.add_column("知识点")
    table.add_column("难度")
    table.add_column("题目")
    table.add_column("答案", justify="center")
    for q in rows:
        table.add_row(
            q.id,
            q.knowledge_point or "",
            difficulty_label(q.difficulty),
            escape(q.question),
            LETTERS[q.correct_index],
        )
    console.print(table)


def run_bank_menu(console: Console, session: DiagnosisSession) -> None:
    """Teacher question bank management (add / list / delete)."""
    grade = GradeLevel.EIGHT
    subject = Subject.MATH

    while True:
        console.print(f"\n[bold]📚 教师题库管理[/bold]  当前: {grade.value} {subject.value}  共 {len(session.bank)} 题")
        console.print("  [cyan]1.[/cyan] 录入新题")
        console.print("  [cyan]2.[/cyan] 查看已录入题目")
        console.print("  [cyan]3.[/cyan] 删除题目")
        console.print("  [cyan]4.[/cyan] 切换年级 / 学科")
        console.print("  [cyan]b.[/cyan] 返回")
        cmd = console.input("👉 ").strip().lower()

        if cmd == "1":
            draft = _read_draft(console, grade, subject)
            try:
                added = session.add_question(draft)
            except QuestionValidationError as e:
                console.print(f"[red]🚫 {e}[/red]")
                continue
            console.print(f"[green]✅ 题目添加成功！({added.id})[/green]")
        elif cmd == "2":
            _list_questions(console, session, grade, subject)
        elif cmd == "3":
            qid = console.input("🗑️ 输入要删除的题目 ID: ").strip()
            if session.delete_question(qid):
                console.print(f"[green]已删除 {qid}[/green]")
            else:
                console.print(f"[yellow]⚠️ 未找到 {qid}[/yellow]")
        elif cmd == "4":
            grade = choose(console, "年级", GRADES, [g.value for g in GRADES], default=GRADES.index(grade))
            subject = choose(console, "学科", SUBJECTS, [s.value for s in SUBJECTS], default=SUBJECTS.index(subject))
        elif cmd == "b":
            return
        else:
            console.print("[yellow]⚠️ 无效指令[/yellow]")
