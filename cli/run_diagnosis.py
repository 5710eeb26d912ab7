# cli/run_diagnosis.py

import logging
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from zhixue_ai import load_settings, make_provider
from zhixue_core import DiagnosisSession, QuestionBank, QuizComposer, Step
from zhixue_core.errors import DiagnosisError, ProfileValidationError
from zhixue_core.schema import GRADES, SUBJECTS, QuizQuestion

from .bank_menu import choose, run_bank_menu
from .report_view import LETTERS, render_dashboard, render_question

console = Console()


def banner():
    console.print("\n[bold cyan]╔══════════════════════════════════════╗[/bold cyan]")
    console.print("[bold cyan]║     🧠 智学AI · 学情诊断系统         ║[/bold cyan]")
    console.print("[bold cyan]╚══════════════════════════════════════╝[/bold cyan]\n")


def read_option(prompt: str = "→ 选择答案 (A-D): ") -> Optional[int]:
    raw = console.input(prompt).strip().upper()
    if len(raw) == 1 and raw in LETTERS:
        return LETTERS.index(raw)
    if raw.isdigit() and 1 <= int(raw) <= len(LETTERS):
        return int(raw) - 1
    return None


# ============ SETUP ============
def setup_screen(session: DiagnosisSession) -> bool:
    """Returns False when the user quits."""
    while session.step == Step.SETUP:
        p = session.state.profile
        bank_size = len(session.bank)
        console.print("\n[bold]📋 开始您的学情诊断[/bold]")
        if bank_size:
            console.print(f"[dim]AI 将结合题库中的 {bank_size} 道题目为您生成专属试题[/dim]")
        else:
            console.print("[dim]AI 将为您生成专属试题以分析知识盲区[/dim]")
        console.print(f"  [cyan]1.[/cyan] 学生姓名: {escape(p.name) or '[dim]未填写[/dim]'}")
        console.print(f"  [cyan]2.[/cyan] 所在年级: {p.grade.value}")
        console.print(f"  [cyan]3.[/cyan] 诊断学科: {p.subject.value}")
        console.print("  [cyan]4.[/cyan] 题库管理 (教师)")
        console.print("  [cyan]5.[/cyan] 生成诊断试卷 ➜")
        console.print("  [cyan]q.[/cyan] 退出")
        cmd = console.input("👉 ").strip().lower()

        if cmd == "1":
            session.update_profile(name=console.input("请输入姓名: ").strip())
        elif cmd == "2":
            session.update_profile(
                grade=choose(console, "所在年级", GRADES, [g.value for g in GRADES], default=GRADES.index(p.grade))
            )
        elif cmd == "3":
            session.update_profile(
                subject=choose(console, "诊断学科", SUBJECTS, [s.value for s in SUBJECTS], default=SUBJECTS.index(p.subject))
            )
        elif cmd == "4":
            run_bank_menu(console, session)
        elif cmd == "5":
            try:
                with console.status("正在生成诊断试卷... 融合教师题库与AI生成题目中"):
                    session.start_diagnosis()
            except ProfileValidationError as e:
                console.print(f"[yellow]⚠️ {e}[/yellow]")
            except DiagnosisError:
                console.print("[red]🚨 生成试卷失败，请重试。[/red]")
        elif cmd == "q":
            return False
    return True


# ============ DIAGNOSTIC QUIZ ============
def quiz_screen(session: DiagnosisSession) -> None:
    questions = session.state.diagnostic_questions
    for i, q in enumerate(questions, 1):
        render_question(console, q, i, len(questions))
        choice = read_option()
        while choice is None:
            console.print("[yellow]⚠️ 请选择 A-D[/yellow]")
            choice = read_option()
        session.answer(q.id, choice)

    with console.status("AI 正在分析您的答题结果... 生成雷达图与个性化建议"):
        session.submit_quiz()


# ============ TRAINING ============
def run_training(session: DiagnosisSession, questions: List[QuizQuestion], topic: str) -> None:
    console.print(f"\n[bold magenta]✨ {topic} - 专项训练[/bold magenta]")
    answers: Dict[str, int] = {}
    for i, q in enumerate(questions, 1):
        render_question(console, q, i, len(questions), topic_fallback=topic)
        choice = read_option()
        while choice is None:
            console.print("[yellow]⚠️ 请选择 A-D[/yellow]")
            choice = read_option()
        answers[q.id] = choice
        if q.is_correct(choice):
            console.print("[green]✅ 回答正确！[/green]")
        else:
            console.print(f"[red]❌ 回答错误，正确答案是 {LETTERS[q.correct_index]}[/red]")
        if q.explanation:
            console.print(f"[dim]💡 解析：{escape(q.explanation)}[/dim]")

    result = session.finish_training(answers)
    console.print(
        f"\n🏁 训练完成：{result.correct_count} / {result.total_count} 正确 "
        f"([bold]{result.weak_point}[/bold])"
    )


# ============ DASHBOARD ============
def dashboard_screen(session: DiagnosisSession) -> bool:
    """Returns False when the user quits."""
    while session.step == Step.DASHBOARD:
        weak = render_dashboard(
            console, session.state.profile, session.state.knowledge_points, session.state.ai_comment
        )
        console.print("\n输入序号开始 AI 专项训练 (可重复练习)，[cyan]r[/cyan] 重新诊断，[cyan]q[/cyan] 退出")
        cmd = console.input("👉 ").strip().lower()

        if cmd.isdigit() and 1 <= int(cmd) <= len(weak):
            topic = weak[int(cmd) - 1].name
            try:
                with console.status(f"正在生成「{topic}」专项训练..."):
                    questions = session.start_training(topic)
            except DiagnosisError:
                console.print("[red]🚨 生成题目失败，请检查 API Key 或稍后重试。[/red]")
                continue
            if not questions:
                console.print("[yellow]⚠️ 未生成任何题目，请稍后重试。[/yellow]")
                continue
            run_training(session, questions, topic)
        elif cmd == "r":
            session.reset()
        elif cmd == "q":
            return False
    return True


def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="[%(asctime)s] %(levelname)s - %(message)s",
    )

    provider = make_provider(settings)
    composer = QuizComposer(provider, per_topic=settings.per_topic, training_size=settings.training_size)
    session = DiagnosisSession(provider, bank=QuestionBank(), composer=composer)
    logging.info(f"🚀 Backend={settings.backend} per_topic={settings.per_topic} training_size={settings.training_size}")

    banner()
    while True:
        if session.step == Step.SETUP and not setup_screen(session):
            break
        if session.step == Step.QUIZ:
            quiz_screen(session)
        if session.step == Step.DASHBOARD and not dashboard_screen(session):
            break

    console.print("\n👋 再见！")


if __name__ == "__main__":
    main()
