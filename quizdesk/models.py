from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Dict, List, Union


@dataclass(frozen=True)
class Hint:
    text: str
    point_penalty: int = 1


@dataclass(frozen=True)
class CodeBlank:
    id: int
    placeholder: str
    correct_answer: str | None = None
    points: int = 1


@dataclass(frozen=True)
class CodeReference:
    language: str
    code: str
    show_to_students: bool = False


@dataclass(frozen=True)
class McqQuestion:
    id: str
    text: str
    options: List[str]
    correct_answer: int | None = None
    explanation: str = ""
    difficulty: str | None = None


@dataclass(frozen=True)
class TrueFalseQuestion:
    id: str
    text: str
    options: List[str] = field(default_factory=lambda: ["True", "False"])
    correct_answer: int | None = None
    explanation: str = ""
    difficulty: str | None = None


@dataclass(frozen=True)
class FillInBlankQuestion:
    id: str
    text: str
    correct_answer: str | None = None
    explanation: str = ""
    difficulty: str | None = None


@dataclass(frozen=True)
class EssayQuestion:
    id: str
    text: str
    hints: List[Hint] = field(default_factory=list)
    explanation: str = ""
    difficulty: str | None = None


@dataclass(frozen=True)
class CodeDragDropQuestion:
    id: str
    text: str
    language: str
    code_template: str
    blanks: List[CodeBlank]
    options: List[str]
    explanation: str = ""
    difficulty: str | None = None


Question = Union[
    McqQuestion,
    TrueFalseQuestion,
    FillInBlankQuestion,
    EssayQuestion,
    CodeDragDropQuestion,
]

# int for choice questions, str for typed answers, blank id -> token for drag-drop
AnswerValue = Union[int, str, Dict[str, str]]


@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    duration: int  # minutes
    questions: List[Question]
    description: str = ""
    quiz_code: str | None = None
    code_reference: CodeReference | None = None
    results_shared: bool = False
    start_date: str | None = None
    end_date: str | None = None

    def question(self, question_id: str) -> Question | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


@dataclass(frozen=True)
class ShuffledOption:
    option: str
    original_index: int


@dataclass
class SessionState:
    quiz_id: str
    current_question: int = 0
    answers: Dict[str, AnswerValue] = field(default_factory=dict)
    time_left: int = 0
    shuffled_options: Dict[str, List[ShuffledOption]] = field(default_factory=dict)
    hints_unlocked: Dict[str, List[int]] = field(default_factory=dict)


class AttemptState(str, enum.Enum):
    """Lifecycle of a single quiz attempt."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


def question_options(question: Question) -> List[str]:
    """Options a student picks from, empty for typed answers."""
    match question:
        case McqQuestion(options=options) | TrueFalseQuestion(options=options):
            return list(options)
        case CodeDragDropQuestion(options=options):
            return list(options)
        case FillInBlankQuestion() | EssayQuestion():
            return []
    raise TypeError(f"Unknown question type: {type(question).__name__}")


def question_type_name(question: Question) -> str:
    """Backend ``questionType`` tag for a question."""
    match question:
        case McqQuestion():
            return "MCQ"
        case TrueFalseQuestion():
            return "TrueFalse"
        case FillInBlankQuestion():
            return "FillInBlank"
        case EssayQuestion():
            return "Essay"
        case CodeDragDropQuestion():
            return "CodeDragDrop"
    raise TypeError(f"Unknown question type: {type(question).__name__}")
