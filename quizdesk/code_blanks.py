"""Authoring helpers for code drag-and-drop questions.

Authors mark blanks in a snippet with double asterisks::

    const total = **items**.reduce((a, b) => a + b, 0);

The markers become ``___BLANK_<n>___`` placeholders; the marked text is the
blank's correct answer and the token list offered to students is the
correct answers mixed with AI-generated distractors.
"""
from __future__ import annotations

import random
import re
from typing import Any

from quizdesk.client.models import CodeDistractors

BLANK_MARKER_RE = re.compile(r"\*\*([^*]+)\*\*")


def placeholder(index: int) -> str:
    return f"___BLANK_{index}___"


def extract_blanks(code: str) -> list[str]:
    return BLANK_MARKER_RE.findall(code or "")


def build_code_template(code: str) -> tuple[str, list[dict[str, Any]]]:
    """Replace markers with placeholders. Returns ``(template, blanks)``."""
    if not extract_blanks(code):
        raise ValueError("Please add code with **text** markers for blanks")

    blanks: list[dict[str, Any]] = []

    def _replace(match: re.Match[str]) -> str:
        index = len(blanks)
        blanks.append(
            {
                "id": index,
                "correctAnswer": match.group(1),
                "placeholder": placeholder(index),
                "points": 1,
            }
        )
        return placeholder(index)

    template = BLANK_MARKER_RE.sub(_replace, code)
    return template, blanks


def build_drag_drop_question(
    question: str,
    code: str,
    language: str,
    distractors: CodeDistractors,
    explanation: str = "",
    difficulty: str = "Medium",
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """Question document in the backend's ``CodeDragDrop`` shape."""
    if not question.strip():
        raise ValueError("Please fill in question text and code")
    template, blanks = build_code_template(code)
    options = distractors.allOptions
    if not options:
        options = [*distractors.correctAnswers, *distractors.distractors]
        (rng or random.Random()).shuffle(options)
    return {
        "questionType": "CodeDragDrop",
        "question": question,
        "language": language,
        "rawCode": code,
        "codeTemplate": template,
        "blanks": blanks,
        "correctAnswers": distractors.correctAnswers,
        "distractors": distractors.distractors,
        "options": options,
        "explanation": explanation,
        "difficulty": difficulty,
    }
