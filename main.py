"""
Console Harness for the PERMA Profiler

Simple console loop that drives ProfilerSession without the web UI.

Input at each question:
    0-10        set score (any value within the question's scale)
    r <text>    set reflection
    n / p       next / previous question
    f           finish (last question only)
    quit        abandon the test (nothing is saved)
"""

import argparse
import logging
import sys

from backend.commands import (
    StartTest, SetScore, SetReflection, NextQuestion, PreviousQuestion, FinishTest
)
from backend.core.question_catalog import QuestionCatalog, DEFAULT_QUESTIONS_PATH
from backend.core.scoring_engine import ScoringEngine
from backend.core.template_renderer import TemplateRenderer
from backend.core.profiler_session import ProfilerSession
from backend.persistence import ResultPersistence
from backend.results import IllegalCommand, TestResult
from backend.settings import load_settings

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"quit", "exit", "stop"}


def print_separator(char="=", length=60):
    """Print a separator line"""
    print(char * length)


def print_step(step):
    """Print the current question with its scale and answer"""
    print_separator("-")
    print(step.progress_text)
    print(f"\n{step.question.text}")
    print(f"({step.question.scale.describe()})")

    if step.answer is not None:
        print(f"Current score: {step.answer.score}")
        if step.answer.reflection:
            print(f"Reflection: {step.answer.reflection}")

    options = []
    if step.can_go_back:
        options.append("p = previous")
    options.append("f = finish" if step.can_finish else "n = next")
    options.append("r <text> = reflection")
    print(f"[{', '.join(options)}]")


def parse_command(user_input: str):
    """
    Map console input to a session command.

    Returns:
        Command, or None if the input is not understood
    """
    text = user_input.strip()
    lowered = text.lower()

    if lowered == "n":
        return NextQuestion()
    if lowered == "p":
        return PreviousQuestion()
    if lowered == "f":
        return FinishTest()
    if lowered.startswith("r "):
        return SetReflection(text[2:].strip())

    try:
        score = float(text)
    except ValueError:
        return None
    return SetScore(int(score) if score.is_integer() else score)


def main(argv=None):
    """Run console test"""
    parser = argparse.ArgumentParser(description="PERMA Profiler console test")
    parser.add_argument("--questions", default=str(DEFAULT_QUESTIONS_PATH))
    parser.add_argument("--settings", default="data/settings.json")
    parser.add_argument("--results-dir", default="outputs/results")
    args = parser.parse_args(argv)

    print_separator()
    print("PERMA PROFILER - CONSOLE TEST")
    print_separator()

    try:
        catalog = QuestionCatalog.from_file(args.questions)
        settings = load_settings(args.settings)

        session = ProfilerSession(
            catalog=catalog,
            scoring_engine=ScoringEngine(catalog),
            renderer=TemplateRenderer(catalog),
            template=settings.result_template
        )
    except (OSError, ValueError) as e:
        print(f"\nFailed to initialize: {e}")
        return 1

    print("Type 'quit', 'exit', or 'stop' to end early\n")

    outcome = session.handle(StartTest())

    while not isinstance(outcome, TestResult):
        if isinstance(outcome, IllegalCommand):
            print(f"\n{outcome.reason}")
            outcome = session.current_step()

        print_step(outcome)

        try:
            user_input = input("> ")
        except (KeyboardInterrupt, EOFError):
            print("\n\nTest abandoned, nothing saved")
            return 0

        if user_input.strip().lower() in EXIT_COMMANDS:
            print("\nTest abandoned, nothing saved")
            return 0

        command = parse_command(user_input)
        if command is None:
            print("Please enter a score, r <text>, n, p or f.")
            continue

        outcome = session.handle(command)

    print_separator()
    print("TEST COMPLETE")
    print_separator()
    print(outcome.document)

    if not settings.create_result_file:
        return 0

    persistence = ResultPersistence(args.results_dir)
    while True:
        try:
            path = persistence.save_result(outcome.document, settings, outcome.completed_at)
            print(f"\nResult saved to {path}")
            return 0
        except (OSError, ValueError) as e:
            logger.error(f"Saving result failed: {e}")
            print(f"\nCould not save result: {e}")
            try:
                retry = input("Retry? (y/n): ").strip().lower()
            except (KeyboardInterrupt, EOFError):
                retry = "n"
            if retry != "y":
                return 1


if __name__ == '__main__':
    sys.exit(main())
