# tests/test_report_view.py

import io

from rich.console import Console

from cli.report_view import difficulty_label, render_dashboard, render_question, score_bar, score_color
from zhixue_core.schema import Difficulty, KnowledgePoint, QuizQuestion, StudentProfile


def make_console():
    return Console(file=io.StringIO(), width=100, color_system=None)


def test_score_bar_width_and_minimum():
    assert score_bar(100) == "█" * 20
    assert score_bar(50) == "█" * 10 + "░" * 10
    assert score_bar(0).startswith("█"), "Zero score still shows one cell"
    assert len(score_bar(0)) == 20
    assert len(score_bar(150, width=10)) == 10


def test_score_colors():
    assert score_color(85) == "green"
    assert score_color(70) == "dark_orange"
    assert score_color(40) == "red"
    assert "中等" in difficulty_label(None)
    assert "困难" in difficulty_label(Difficulty.HARD)


def test_render_question_escapes_markup():
    console = make_console()
    q = QuizQuestion(id="1", question="[b]x[/b] + 1 = ?", options=["0", "1", "2", "3"], correct_index=0)
    render_question(console, q, 1, 10)

    out = console.file.getvalue()
    assert "第 1 / 10 题" in out
    assert "综合测试" in out
    assert "[b]x[/b]" in out
    assert "D. 3" in out


def test_render_dashboard_returns_weak_points_weakest_first():
    console = make_console()
    points = [
        KnowledgePoint("代数基础", 90, learning_goal="g1"),
        KnowledgePoint("平面几何", 40, learning_goal="掌握全等"),
        KnowledgePoint("函数图像", 70),
    ]
    weak = render_dashboard(console, StudentProfile(name="小明"), points, "不错")

    assert [p.name for p in weak] == ["平面几何", "函数图像"]
    out = console.file.getvalue()
    assert "67%" in out
    assert "不错" in out
    assert "目标：掌握全等" in out


def test_render_dashboard_without_weak_points():
    console = make_console()
    weak = render_dashboard(console, StudentProfile(name="小明"), [KnowledgePoint("代数基础", 95)], "")

    assert weak == []
    assert "暂无明显薄弱项" in console.file.getvalue()
