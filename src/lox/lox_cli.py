"""
Lox CLI Entrypoint.

This module provides the command-line interface for running Lox source code.
It reads the source (from a `.lox` file or an inline string) and hands the
text to the core pipeline; the core itself never touches the filesystem.

Features:
    - Run `.lox` files or inline strings.
    - Dump the significant token stream (`--tokens`).
    - Dump the parsed AST as display forms or JSON (`--ast`, `--json`).
    - Launch an interactive REPL with optional verbosity.

Example usage:
    lox hello.lox
    lox -s "print 1 + 2;"
    lox hello.lox --ast --json
    lox --repl --verbose

Exit status:
    0 on success, 65 on a lex or parse error, 70 on an evaluation error,
    mirroring the sysexits data/software error codes.
"""

import argparse
import json
import sys

from lox.lox_errors import EvalError, LoxError
from lox.lox_eval import Evaluator
from lox.lox_lexer import CharacterStream, Lexer, significant_tokens
from lox.lox_parser import Parser
from lox.lox_value import EvaluateResult

EXIT_DATA_ERROR = 65
EXIT_SOFTWARE_ERROR = 70


def report_error(error: LoxError) -> None:
    print(f"[error] >>> {error.kind}: {error}", file=sys.stderr)


def run_lox(
    source: str,
    is_string: bool = False,
    tokens_only: bool = False,
    ast_only: bool = False,
    as_json: bool = False,
    pretty: bool = False,
) -> list[EvaluateResult]:
    """
    Run the Lox pipeline: lex, parse, and evaluate, or stop early to dump a stage.

    Args:
        source (str): The Lox source code or path to a `.lox` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens_only (bool): Print the significant tokens and stop.
        ast_only (bool): Print the parsed statements and stop.
        as_json (bool): With `ast_only`, print `to_dict()` JSON instead of display forms.
        pretty (bool): Print banner sections around each dump and the program output.

    Returns:
        list[EvaluateResult]: One result per top-level statement (empty when dumping).

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.lox'.
        LexError, ParseError, EvalError: From the corresponding stage.
    """
    if not is_string and not source.endswith(".lox"):
        raise ValueError("Only .lox files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    banner = "=" * 20

    # 2. Lexing
    tokens = significant_tokens(Lexer(CharacterStream(source, 0, 1, 1)).tokenize())
    if tokens_only:
        if pretty:
            print(f"{banner}\nTokens\n{banner}")
        for tok in tokens:
            print(f"{tok.line}:{tok.col} {tok.type} {tok.lexeme()}")
        return []

    # 3. Parsing
    parser = Parser(tokens)
    ast = parser.parse()
    for warning in parser.warnings:
        print(f"[warn] >>> {warning}", file=sys.stderr)
    if ast_only:
        if pretty:
            print(f"{banner}\nAST\n{banner}")
        if as_json:
            print(json.dumps([node.to_dict() for node in ast], indent=2))
        else:
            for node in ast:
                print(node)
        return []

    # 4. Evaluation
    if pretty:
        print("<<< OUTPUT >>>")
    return Evaluator().execute(ast)


def main() -> None:
    """
    Entry point for the Lox CLI.

    Launches the REPL if no arguments are passed or `--repl` is given; otherwise
    runs the source and exits with the status matching the first error, if any.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from lox.lox_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream instead of running"
    )
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed AST instead of running"
    )
    parser.add_argument(
        "--json", action="store_true", help="With --ast, print the AST as JSON"
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of running"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from lox.lox_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        run_lox(
            source=args.source,
            is_string=args.string,
            tokens_only=args.tokens,
            ast_only=args.ast,
            as_json=args.json,
            pretty=args.pretty,
        )
    except EvalError as e:
        report_error(e)
        sys.exit(EXIT_SOFTWARE_ERROR)
    except LoxError as e:
        report_error(e)
        sys.exit(EXIT_DATA_ERROR)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
