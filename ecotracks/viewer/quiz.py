"""
Quiz renderer - Timed multiple-choice display.

Provides:
- Question rendering with answer feedback
- Countdown display
- Revealed answers for lesson check questions
- Quiz result display
"""

import html
from typing import Optional

from ecotracks.classroom import PASS_THRESHOLD, QuizSession
from ecotracks.schemas import Question, QuizResult


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e8f5e9;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #2e7d32;
    }
    .quiz-header {
        display: flex;
        justify-content: space-between;
        margin-bottom: 1em;
        color: #555;
        font-size: 0.9em;
    }
    .quiz-timer.low {
        color: #c62828;
        font-weight: 600;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-option {
        background: white;
        border: 2px solid #ddd;
        border-radius: 8px;
        padding: 0.6em 1em;
        margin: 0.4em 0;
    }
    .quiz-option.correct {
        border-color: #388E3C;
        background: #f1f8e9;
    }
    .quiz-option.wrong {
        border-color: #c62828;
        background: #ffebee;
    }
    .quiz-explanation {
        background: #fff8e1;
        padding: 0.8em 1em;
        border-radius: 8px;
        margin-top: 1em;
        color: #5d4037;
    }
    .quiz-score-box {
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-box.passed {
        background: #e8f5e9;
    }
    .quiz-score-box.failed {
        background: #ffebee;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def format_countdown(seconds: int) -> str:
    """Format seconds as M:SS."""
    seconds = max(0, seconds)
    return f"{seconds // 60}:{seconds % 60:02d}"


def _render_options(question: Question, selected_index: Optional[int]) -> list[str]:
    """Option rows; once an answer is picked the correct and wrong ones are marked."""
    answered = selected_index is not None
    parts = []
    for idx, option in enumerate(question.options):
        css = "quiz-option"
        if answered and idx == question.correct_option_index:
            css += " correct"
        elif answered and idx == selected_index:
            css += " wrong"
        parts.append(f'<div class="{css}">{html.escape(option)}</div>')

    if answered and question.explanation:
        parts.append(f'<div class="quiz-explanation">{html.escape(question.explanation)}</div>')
    return parts


def render_quiz_question(session: QuizSession) -> str:
    """
    Render the current question of a running session.

    Once an answer is locked in, the correct option and the chosen wrong
    option are highlighted and the explanation is shown.
    """
    question = session.current_question
    timer_class = "quiz-timer low" if session.remaining_seconds <= 10 else "quiz-timer"

    parts = ['<div class="quiz-container">']
    parts.append('<div class="quiz-header">')
    parts.append(f'<span>Question {session.current_index + 1} of {session.question_count}</span>')
    parts.append(f'<span class="{timer_class}">{format_countdown(session.remaining_seconds)}</span>')
    parts.append('</div>')

    parts.append(f'<div class="quiz-question">{html.escape(question.prompt)}</div>')
    parts.extend(_render_options(question, session.selected_option_index))

    parts.append('</div>')
    return ''.join(parts)


def render_answer_feedback(question: Question, selected_index: int) -> str:
    """Render a lesson check question after its answer is revealed."""
    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-question">{html.escape(question.prompt)}</div>')
    parts.extend(_render_options(question, selected_index))
    parts.append('</div>')
    return ''.join(parts)


def render_quiz_result(result: QuizResult) -> str:
    """Render the final score box."""
    css = "passed" if result.passed else "failed"
    if result.passed:
        message = f"You scored {result.score_percent}% and passed the quiz!"
    else:
        message = f"You scored {result.score_percent}%. You need {PASS_THRESHOLD}% to pass."
    return f"""
    <div class="quiz-score-box {css}">
        <div class="quiz-score-value">{result.score_percent}%</div>
        <div class="quiz-score-label">{result.correct_count} of {result.question_count} correct · {result.points_earned} points</div>
        <div class="quiz-score-label">{html.escape(message)}</div>
    </div>
    """
