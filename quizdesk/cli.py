import argparse
import getpass
import logging
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from quizdesk import config
from quizdesk.client import QuizApiClient
from quizdesk.client.models import (
    FlagCreate,
    GroupCreate,
    GroupUpdate,
    QuizCreate,
    QuizDuplicate,
    QuizUpdate,
    SubmissionResult,
)
from quizdesk.client.services import (
    auth_service,
    group_service,
    quiz_service,
    submission_service,
)
from quizdesk.code_blanks import build_drag_drop_question
from quizdesk.core.logging_setup import setup_console_logging
from quizdesk.errors import (
    AttemptError,
    IncompleteAttemptError,
    QuizdeskError,
    QuizEndedError,
    QuizNotStartedError,
    SubmissionError,
)
from quizdesk.models import AttemptState, CodeDragDropQuestion, EssayQuestion, FillInBlankQuestion
from quizdesk.session import QuestionView, QuizAttempt, SessionStore
from quizdesk.storage import KeyValueStorage, build_storage
from quizdesk.text_format import render_plain
from quizdesk.utils import json_dump, parse_iso_timestamp

log = logging.getLogger("quizdesk.cli")

Output = Callable[[str], None]

TAKE_HELP = (
    "Commands: A-Z pick an option | n next | p previous | g N go to question N | "
    "h N unlock hint N | t type an answer | s submit | q quit (progress is kept)"
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="quizdesk", description="Quiz platform client")
    parser.add_argument("--api-url", default=config.API_URL, help="Backend base URL")
    parser.add_argument(
        "--storage",
        choices=["json", "database", "memory"],
        default=config.STORAGE_BACKEND,
        help="Where progress and credentials are kept",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Console log level")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in and remember the token")
    login.add_argument("email")
    login.add_argument("--password", help="Prompted when omitted")

    register = sub.add_parser("register", help="Create a student account")
    register.add_argument("name")
    register.add_argument("email")
    register.add_argument("--password", help="Prompted when omitted")

    sub.add_parser("logout", help="Forget the stored token")

    take = sub.add_parser("take", help="Take a quiz by code")
    take.add_argument("code")

    my_results = sub.add_parser("my-results", help="List your submissions")
    my_results.add_argument("--quiz", dest="quiz_id", help="Only your submission for this quiz")

    progress = sub.add_parser("progress", help="Saved attempt progress")
    progress_sub = progress.add_subparsers(dest="action", required=True)
    progress_sub.add_parser("list")
    progress_clear = progress_sub.add_parser("clear")
    progress_clear.add_argument("quiz_id")

    flag = sub.add_parser("flag", help="Dispute a question's correct answer")
    flag.add_argument("submission_id")
    flag.add_argument("question_id")
    flag.add_argument("reason")

    quizzes = sub.add_parser("quizzes", help="Manage quizzes (admin)")
    quizzes_sub = quizzes.add_subparsers(dest="action", required=True)
    quizzes_sub.add_parser("list")
    mine = quizzes_sub.add_parser("mine")
    mine.add_argument("--page", type=int, default=1)
    show = quizzes_sub.add_parser("show")
    show.add_argument("code")
    delete = quizzes_sub.add_parser("delete")
    delete.add_argument("quiz_id")
    update = quizzes_sub.add_parser("update")
    update.add_argument("quiz_id")
    update.add_argument("--title")
    update.add_argument("--description")
    update.add_argument("--duration", type=int)
    update.add_argument("--start-date")
    update.add_argument("--end-date")
    duplicate = quizzes_sub.add_parser("duplicate")
    duplicate.add_argument("quiz_id")
    duplicate.add_argument("--title", default="")
    duplicate.add_argument("--description", default="")
    duplicate.add_argument("--duration", type=int, default=30)
    duplicate.add_argument("--start-date", default="")
    duplicate.add_argument("--end-date", default="")
    share = quizzes_sub.add_parser("share")
    share.add_argument("quiz_id")
    delete_question = quizzes_sub.add_parser("delete-question")
    delete_question.add_argument("quiz_id")
    delete_question.add_argument("question_index", type=int)

    create = sub.add_parser("create", help="Create a quiz from a PDF, URL or existing quizzes (admin)")
    create.add_argument("title")
    create.add_argument("--description", default="")
    create.add_argument("--duration", type=int, default=30)
    create.add_argument("--num-questions", type=int, default=10)
    create.add_argument("--difficulty", default="Medium", choices=config.DIFFICULTIES)
    create.add_argument(
        "--breakdown",
        action="append",
        default=[],
        metavar="LEVEL=COUNT",
        help="Questions per difficulty, e.g. --breakdown Easy=3",
    )
    create.add_argument("--randomize", action="store_true")
    create.add_argument("--pdf", type=Path)
    create.add_argument("--url")
    create.add_argument("--from-quiz", action="append", default=[], dest="quiz_ids")
    create.add_argument("--start-date")
    create.add_argument("--end-date")

    submissions = sub.add_parser("submissions", help="Submissions for a quiz (admin)")
    submissions.add_argument("quiz_id")

    leaderboard = sub.add_parser("leaderboard", help="Overall or per-quiz leaderboard")
    leaderboard.add_argument("quiz_id", nargs="?")

    flags = sub.add_parser("flags", help="Review flagged questions (admin)")
    flags_sub = flags.add_subparsers(dest="action", required=True)
    flags_list = flags_sub.add_parser("list")
    flags_list.add_argument("--status", choices=config.FLAG_STATUSES)
    flags_update = flags_sub.add_parser("update")
    flags_update.add_argument("flag_id")
    flags_update.add_argument("status", choices=config.FLAG_STATUSES)
    flags_update.add_argument("--notes", default="")
    fix_answer = flags_sub.add_parser("fix-answer")
    fix_answer.add_argument("quiz_id")
    fix_answer.add_argument("question_id")
    fix_answer.add_argument("correct_answer")
    flags_show = flags_sub.add_parser("show", help="Flags raised on one submission")
    flags_show.add_argument("submission_id")

    groups = sub.add_parser("groups", help="Student groups (admin)")
    groups_sub = groups.add_subparsers(dest="action", required=True)
    groups_sub.add_parser("list")
    group_create = groups_sub.add_parser("create")
    group_create.add_argument("name")
    group_create.add_argument("--description", default="")
    group_add = groups_sub.add_parser("add")
    group_add.add_argument("group_id")
    group_add.add_argument("student_ids", nargs="+")
    group_remove = groups_sub.add_parser("remove")
    group_remove.add_argument("group_id")
    group_remove.add_argument("student_id")
    group_delete = groups_sub.add_parser("delete")
    group_delete.add_argument("group_id")
    group_show = groups_sub.add_parser("show")
    group_show.add_argument("group_id")
    group_update = groups_sub.add_parser("update")
    group_update.add_argument("group_id")
    group_update.add_argument("--name")
    group_update.add_argument("--description")

    students = sub.add_parser("students", help="Students (admin)")
    students_sub = students.add_subparsers(dest="action", required=True)
    students_sub.add_parser("list")
    student_show = students_sub.add_parser("show")
    student_show.add_argument("student_id")

    questions = sub.add_parser("questions", help="Browse the question bank (admin)")
    questions.add_argument("--page", type=int, default=1)
    questions.add_argument("--search")
    questions.add_argument("--tag", action="append", default=[], dest="tags")
    questions.add_argument("--difficulty", choices=config.DIFFICULTIES)
    questions.add_argument("--question-type")
    questions.add_argument("--list-tags", action="store_true", help="Only print the known tags")

    code_question = sub.add_parser(
        "code-question",
        help="Build a drag-and-drop code question from a snippet with **blank** markers (admin)",
    )
    code_question.add_argument("question")
    code_question.add_argument("code_file", type=Path)
    code_question.add_argument("--language", default="javascript")
    code_question.add_argument("--explanation", default="")
    code_question.add_argument("--difficulty", default="Medium", choices=config.DIFFICULTIES)

    return parser.parse_args(argv)


# rendering


def _format_date(value: str | None) -> str:
    parsed = parse_iso_timestamp(value)
    return parsed.strftime("%Y-%m-%d %H:%M") if parsed else (value or "?")


def load_error_message(exc: QuizdeskError) -> str:
    """Inline message for a quiz that could not be loaded by code."""
    if isinstance(exc, QuizNotStartedError):
        return f"This quiz hasn't started yet. It will be available from {_format_date(exc.start_date)}"
    if isinstance(exc, QuizEndedError):
        return f"This quiz has ended. It was available until {_format_date(exc.end_date)}"
    return exc.message or "Quiz not found"


def render_question(view: QuestionView, title: str, out: Output) -> None:
    warning = " (hurry!)" if view.low_time else ""
    out("")
    out(f"{title}  [{view.time_display}{warning}]  Question {view.index + 1} of {view.total}")
    out(render_plain(view.text))
    if view.code_template:
        out(f"--- {view.language} ---")
        out(view.code_template)
        out("---")
    for option in view.options:
        marker = "*" if view.selected == option.original_index else " "
        out(f" {marker} {option.letter}. {render_plain(option.text)}")
    for hint in view.hints:
        if hint.unlocked:
            out(f"   Hint {hint.index + 1} (-{hint.point_penalty}): {hint.text}")
        else:
            out(f"   Hint {hint.index + 1} locked (costs {hint.point_penalty} point(s))")
    match view.question:
        case FillInBlankQuestion() | EssayQuestion():
            out(f"   Your answer: {view.selected if view.selected else '[none]'}")
        case CodeDragDropQuestion() if isinstance(view.selected, dict):
            for blank_id, token in sorted(view.selected.items()):
                out(f"   Blank {blank_id}: {token}")
    if not view.all_answered:
        out(f"   {view.answered_count}/{view.total} answered")


def render_result(result: SubmissionResult, out: Output) -> None:
    out("")
    if result.isPractice:
        out(f"PRACTICE MODE - Attempt #{result.attemptNumber} (does not affect your ranking)")
    out(f"Quiz completed: {result.percentage:g}% - {'Congratulations!' if result.passed else 'Keep learning!'}")
    out(f"You answered {result.score:g} out of {result.totalQuestions} questions correctly")
    for number, item in enumerate(result.detailedResults, start=1):
        mark = "+" if item.isCorrect else "-"
        out(f"[{mark}] Q{number}: {render_plain(item.question)}")
        if item.essayGrading:
            out(f"    Score {item.essayGrading.score:g}/10: {item.essayGrading.feedback}")
        elif item.options:
            selected = item.selectedAnswer
            correct = item.correctAnswer
            for index, option in enumerate(item.options):
                note = " (correct)" if index == correct else " (your answer)" if index == selected else ""
                out(f"    {chr(ord('A') + index)}. {render_plain(option)}{note}")
        else:
            out(f"    Your answer: {item.selectedAnswer or '[No answer]'}")
            if not item.isCorrect:
                out(f"    Correct answer: {item.correctAnswer}")
        if not item.isCorrect and item.explanation:
            out(f"    Explanation: {render_plain(item.explanation)}")


# quiz taking


def _read_answer(view: QuestionView, raw: str, input_fn: Callable[[str], str]) -> object:
    if isinstance(view.question, CodeDragDropQuestion):
        filled = {}
        for blank in raw.split(","):
            blank_id, _, token = blank.partition("=")
            if token:
                filled[blank_id.strip()] = token.strip()
        return filled
    return raw if raw else input_fn("Answer: ")


def run_take(
    attempt: QuizAttempt,
    input_fn: Callable[[str], str] = input,
    out: Output = print,
) -> SubmissionResult | None:
    """Interactive loop for one attempt. Returns the result once submitted."""
    if attempt.resumed:
        out("Resuming your saved progress.")
    out(TAKE_HELP)
    try:
        while attempt.state is not AttemptState.COMPLETED:
            view = attempt.current_view()
            render_question(view, attempt.quiz.title, out)
            try:
                command = input_fn("> ").strip()
            except EOFError:
                command = "q"
            if attempt.state is AttemptState.COMPLETED:
                break
            try:
                if not command:
                    continue
                verb, _, rest = command.partition(" ")
                lowered = verb.lower()
                if lowered == "q":
                    out("Progress saved. Run the same command to resume.")
                    return None
                if lowered == "n":
                    attempt.next_question()
                elif lowered == "p":
                    attempt.previous_question()
                elif lowered == "g":
                    attempt.go_to(int(rest) - 1)
                elif lowered == "h":
                    out(attempt.unlock_hint(view.question_id, int(rest) - 1))
                elif lowered == "t":
                    attempt.select_answer(view.question_id, _read_answer(view, rest, input_fn))
                elif lowered == "s":
                    attempt.submit()
                elif len(verb) == 1 and verb.isalpha() and view.options:
                    attempt.select_displayed_option(ord(verb.upper()) - ord("A"), view.question_id)
                else:
                    out(TAKE_HELP)
            except IncompleteAttemptError as exc:
                out(f"{exc.message} ({len(exc.unanswered)} left)")
            except SubmissionError as exc:
                out(f"Error submitting quiz: {exc.message}. Your answers are saved; try again.")
            except (AttemptError, ValueError) as exc:
                out(str(exc))
    finally:
        attempt.close()
    return attempt.result


def cmd_take(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    try:
        quiz = quiz_service.get_quiz_by_code(client, args.code)
    except QuizdeskError as exc:
        print(load_error_message(exc), file=sys.stderr)
        return 1

    def _on_submitted(result: SubmissionResult) -> None:
        render_result(result, print)

    def _on_error(exc: SubmissionError) -> None:
        if attempt.time_expired:
            print(f"Time is up but submitting failed: {exc.message}. Type s to retry.")

    attempt = QuizAttempt(quiz, client, storage, on_submitted=_on_submitted, on_error=_on_error)
    attempt.start()
    run_take(attempt)
    return 0


# account


def _password(args: argparse.Namespace) -> str:
    return args.password or getpass.getpass("Password: ")


def cmd_login(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    response = auth_service.login(client, args.email, _password(args))
    print(f"Logged in as {response.user.name or response.user.email} ({response.user.role})")
    return 0


def cmd_register(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    response = auth_service.register(client, args.name, args.email, _password(args))
    print(f"Registered {response.user.email}")
    return 0


def cmd_logout(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    auth_service.logout(client)
    print("Logged out")
    return 0


def cmd_my_results(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.quiz_id:
        submission = submission_service.get_submission(client, args.quiz_id)
        print(f"Score: {submission.get('score')}/{submission.get('totalQuestions')}")
        for item in submission.get("answers") or []:
            mark = "+" if item.get("isCorrect") else "-"
            print(f"[{mark}] {item.get('questionId')}: {item.get('selectedAnswer')}")
        return 0
    for submission in submission_service.get_my_submissions(client):
        quiz = submission.get("quiz") or {}
        title = quiz.get("title") if isinstance(quiz, dict) else quiz
        practice = " (practice)" if submission.get("isPractice") else ""
        print(f"{title}: {submission.get('score')}/{submission.get('totalQuestions')}{practice}")
    return 0


def cmd_progress(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    store = SessionStore(storage)
    if args.action == "list":
        for quiz_id in store.saved_quiz_ids():
            print(quiz_id)
        return 0
    store.clear(args.quiz_id)
    print(f"Cleared saved progress for {args.quiz_id}")
    return 0


def cmd_flag(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    flag = FlagCreate(submissionId=args.submission_id, questionId=args.question_id, reason=args.reason)
    reply = submission_service.flag_question(client, flag)
    print(reply.get("message", "Question flagged for review"))
    return 0


# admin


def cmd_quizzes(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.action == "list":
        for quiz in quiz_service.get_quiz_list(client):
            print(f"{quiz.id}  {quiz.quizCode or '-':<8} {quiz.title}")
    elif args.action == "mine":
        page = quiz_service.get_my_quizzes(client, page=args.page)
        for quiz in page.quizzes:
            shared = " [results shared]" if quiz.resultsShared else ""
            print(f"{quiz.id}  {quiz.quizCode or '-':<8} {quiz.title} ({len(quiz.questions)} questions){shared}")
        print(f"Page {page.pagination.currentPage} of {page.pagination.totalPages}")
    elif args.action == "show":
        quiz = quiz_service.get_quiz_by_code(client, args.code)
        print(f"{quiz.title} ({quiz.duration} min, {len(quiz.questions)} questions)")
        for number, question in enumerate(quiz.questions, start=1):
            print(f"{number}. [{type(question).__name__}] {render_plain(question.text)}")
    elif args.action == "delete":
        quiz_service.delete_quiz(client, args.quiz_id)
        print(f"Deleted quiz {args.quiz_id}")
    elif args.action == "update":
        update = QuizUpdate(
            title=args.title,
            description=args.description,
            duration=args.duration,
            startDate=args.start_date,
            endDate=args.end_date,
        )
        quiz_service.update_quiz(client, args.quiz_id, update)
        print(f"Updated quiz {args.quiz_id}")
    elif args.action == "duplicate":
        duplicate = QuizDuplicate(
            title=args.title,
            description=args.description,
            duration=args.duration,
            startDate=args.start_date,
            endDate=args.end_date,
        )
        reply = quiz_service.duplicate_quiz(client, args.quiz_id, duplicate)
        print(f"Quiz duplicated. New code: {(reply.get('quiz') or {}).get('quizCode')}")
    elif args.action == "share":
        shared = quiz_service.share_results(client, args.quiz_id)
        print("Results are now shared" if shared else "Results are now hidden")
    elif args.action == "delete-question":
        quiz_service.delete_question(client, args.quiz_id, args.question_index)
        print(f"Deleted question {args.question_index}")
    return 0


def _parse_breakdown(items: list[str]) -> dict[str, int]:
    breakdown: dict[str, int] = {}
    for item in items:
        level, _, count = item.partition("=")
        if not count.isdigit():
            raise ValueError(f"Invalid breakdown {item!r}; expected LEVEL=COUNT")
        breakdown[level] = int(count)
    return breakdown


def cmd_create(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    form = QuizCreate(
        title=args.title,
        description=args.description,
        duration=args.duration,
        numQuestions=args.num_questions,
        difficulty=args.difficulty,
        randomizeQuestions=args.randomize,
        contentUrl=args.url,
        startDate=args.start_date,
        endDate=args.end_date,
        selectedQuizIds=args.quiz_ids,
        difficultyBreakdown=_parse_breakdown(args.breakdown),
        pdfFile=args.pdf,
    )
    reply = quiz_service.create_quiz(client, form)
    print(f"Quiz created successfully! Code: {(reply.get('quiz') or {}).get('quizCode')}")
    return 0


def cmd_submissions(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    for submission in quiz_service.get_quiz_submissions(client, args.quiz_id):
        user = submission.get("user") or {}
        total = submission.get("totalQuestions") or 0
        score = submission.get("score") or 0
        percentage = (score / total * 100) if total else 0.0
        print(f"{user.get('name', '?'):<24} {score}/{total} ({percentage:.2f}%)")
    return 0


def cmd_leaderboard(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.quiz_id:
        board = quiz_service.get_quiz_leaderboard(client, args.quiz_id)
    else:
        board = quiz_service.get_overall_leaderboard(client)
    for entry in board.leaderboard:
        if entry.averagePercentage is not None:
            detail = f"{entry.averagePercentage:g}% avg over {entry.totalQuizzes} quizzes"
        else:
            detail = f"{entry.score}/{entry.totalQuestions} ({entry.percentage:g}%)" if entry.percentage is not None else ""
        print(f"{entry.rank:>3}. {entry.userName:<24} {detail}")
    if board.totalUsers is not None:
        print(f"{board.totalUsers} users")
    return 0


def cmd_flags(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.action == "list":
        for flag in submission_service.get_flagged_questions(client, args.status):
            user = flag.user or {}
            print(f"{flag.id}  [{flag.status}] quiz={flag.quiz_id} question={flag.question} by {user.get('name', '?')}: {flag.reason}")
    elif args.action == "update":
        submission_service.update_flag_status(client, args.flag_id, args.status, args.notes)
        print("Flag status updated successfully")
    elif args.action == "fix-answer":
        answer: int | str = int(args.correct_answer) if args.correct_answer.isdigit() else args.correct_answer
        quiz_service.update_question_correct_answer(client, args.quiz_id, args.question_id, answer)
        print("Correct answer updated successfully")
    elif args.action == "show":
        for flag in submission_service.get_submission_flags(client, args.submission_id):
            notes = f" ({flag.adminNotes})" if flag.adminNotes else ""
            print(f"{flag.id}  [{flag.status}] question={flag.question}: {flag.reason}{notes}")
    return 0


def cmd_groups(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.action == "list":
        for group in group_service.get_my_groups(client):
            print(f"{group.id}  {group.name} ({len(group.students)} students)")
    elif args.action == "create":
        group_service.create_group(client, GroupCreate(name=args.name, description=args.description))
        print(f"Created group {args.name}")
    elif args.action == "add":
        group_service.add_students(client, args.group_id, args.student_ids)
        print(f"Added {len(args.student_ids)} student(s)")
    elif args.action == "remove":
        group_service.remove_student(client, args.group_id, args.student_id)
        print("Student removed")
    elif args.action == "delete":
        group_service.delete_group(client, args.group_id)
        print("Group deleted")
    elif args.action == "show":
        group = group_service.get_group(client, args.group_id)
        print(f"{group.name}: {group.description}")
        for student in group.students:
            if isinstance(student, dict):
                print(f"  {student.get('_id')}  {student.get('name', '')} {student.get('email', '')}")
            else:
                print(f"  {student}")
    elif args.action == "update":
        group_service.update_group(client, args.group_id, GroupUpdate(name=args.name, description=args.description))
        print("Group updated")
    return 0


def cmd_students(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.action == "list":
        for student in auth_service.get_all_students(client):
            print(f"{student.id}  {student.name:<24} {student.email}")
        return 0
    performance = auth_service.get_student_performance(client, args.student_id)
    for key, value in performance.items():
        if not isinstance(value, (list, dict)):
            print(f"{key}: {value}")
    return 0


def cmd_questions(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    if args.list_tags:
        for tag in quiz_service.get_all_tags(client):
            print(tag)
        return 0
    filters = {
        "search": args.search,
        "tags": args.tags,
        "difficulty": args.difficulty,
        "questionType": args.question_type,
    }
    if any(filters.values()):
        filters["page"] = args.page
        page = quiz_service.get_question_bank(client, filters)
    else:
        page = quiz_service.get_all_questions(client, page=args.page)
    for question in page.questions:
        print(f"[{question.get('questionType', 'MCQ')}] {render_plain(question.get('question'))}")
    if page.totalQuizzes is not None:
        print(f"{len(page.questions)} questions from {page.totalQuizzes} quizzes")
    return 0


def cmd_code_question(client: QuizApiClient, storage: KeyValueStorage, args: argparse.Namespace) -> int:
    """Print the question document; the correct tokens come from the **marked** snippet text."""
    code = args.code_file.read_text(encoding="utf-8")
    distractors = quiz_service.generate_code_distractors(client, code, args.language)
    question = build_drag_drop_question(
        args.question,
        code,
        args.language,
        distractors,
        explanation=args.explanation,
        difficulty=args.difficulty,
    )
    print(json_dump(question))
    return 0


COMMANDS = {
    "login": cmd_login,
    "register": cmd_register,
    "logout": cmd_logout,
    "take": cmd_take,
    "my-results": cmd_my_results,
    "progress": cmd_progress,
    "flag": cmd_flag,
    "quizzes": cmd_quizzes,
    "create": cmd_create,
    "submissions": cmd_submissions,
    "leaderboard": cmd_leaderboard,
    "flags": cmd_flags,
    "groups": cmd_groups,
    "students": cmd_students,
    "questions": cmd_questions,
    "code-question": cmd_code_question,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_console_logging(args.log_level)
    log.debug("Running %s against %s", args.command, args.api_url)
    storage = build_storage(args.storage)
    client = QuizApiClient(base_url=args.api_url, storage=storage)
    try:
        return COMMANDS[args.command](client, storage, args)
    except ValidationError as exc:
        for error in exc.errors():
            print(error["msg"], file=sys.stderr)
        return 2
    except (QuizdeskError, ValueError) as exc:
        print(getattr(exc, "message", None) or str(exc), file=sys.stderr)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
