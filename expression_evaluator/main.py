"""
Command-line entry point.

This script:
- Evaluates a single expression given as argument, or
- Evaluates every line of an expressions file (plain text or archive) and writes
  the results next to it, or
- Runs an interactive loop when neither is given

All expressions of one run share a session: variables assigned by one line are
visible to the following lines, and result(n) recalls earlier results.
"""

import argparse
from pathlib import Path
import sys
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from expression_evaluator.common import logger as log_config
from expression_evaluator.common.config import EngineConfig
from expression_evaluator.common.errors import EvaluationError
from expression_evaluator.common.logger import logger
from expression_evaluator.common.models import OperationRequest
from expression_evaluator.engine.values import dereference
from expression_evaluator.frontend.loader import read_expressions
from expression_evaluator.frontend.session import Session

QUIT_COMMANDS = ("q", "quit", "exit")


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str, optional
        Expression to evaluate.
    file_path : FilePath, optional
        Path to a file containing one expression per line.
    places : int
        Fractional digits used to print Real results.
    precision : int
        Real working precision in significant digits.
    log_level : str
        Logging level of the package logger.
    """

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    places: int = Field(default=20, ge=0)
    precision: int = Field(default=EngineConfig().precision, ge=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(description="Arbitrary-precision infix expression evaluator")

    parser.add_argument("expression", nargs="?", help="Expression to evaluate, e.g. \"2 ^ 3 ^ 2\"")
    parser.add_argument("--file", dest="file_path", help="Path to a file (.txt, .zip, .tar.xz, .7z) of expressions")
    parser.add_argument("--places", type=int, default=20, help="Digits printed after the decimal point of Reals")
    parser.add_argument("--precision", type=int, default=EngineConfig().precision, help="Working precision of Reals")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            expression=args.expression,
            file_path=args.file_path,
            places=args.places,
            precision=args.precision,
            log_level=args.log_level.upper(),
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Name the results file after every dot-separated part of the input name.

    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the results file, in the same folder
    """
    parts = input_path.name.split(".")
    return input_path.with_name("_".join(parts + ["results"]) + ".txt")


def run_file(input_path: Path, session: Session, places: int) -> Path:
    """
    Evaluate every expression of a file and write one result line per expression.

    :return: Path of the results file
    """
    output_path = build_output_path(input_path)
    expressions = read_expressions(input_path)
    logger.info("Evaluating %d expressions from %s", len(expressions), input_path)

    with output_path.open("w", encoding="utf-8") as f_out:
        for expression in expressions:
            outcome = session.run(OperationRequest(expression=expression), places=places)
            f_out.write(outcome.render() + "\n")
            f_out.flush()

    logger.info("Results written to %s", output_path)
    return output_path


def run_repl(session: Session, places: int, read: Callable[[str], str] = input) -> None:
    """Read expressions until a quit command or end of input, printing each result."""
    while True:
        try:
            expression = read("> ").strip()
        except EOFError:
            return
        if expression in QUIT_COMMANDS:
            return
        if not expression:
            continue
        try:
            value = dereference(session.evaluate(expression))
        except EvaluationError as exc:
            print(f"ERROR: {exc}")
            continue
        print(value.to_text(places))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``expression-evaluator`` command.

    :return: Process exit status
    """
    cli_args = parse_args(argv)
    log_config.configure(cli_args.log_level)
    session = Session(config=EngineConfig(precision=cli_args.precision))

    if cli_args.file_path is not None:
        output_path = run_file(Path(cli_args.file_path), session, cli_args.places)
        print(output_path)
        return 0

    if cli_args.expression is not None:
        try:
            value = dereference(session.evaluate(cli_args.expression))
        except EvaluationError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        print(value.to_text(cli_args.places))
        return 0

    run_repl(session, cli_args.places)
    return 0


if __name__ == "__main__":
    sys.exit(main())
