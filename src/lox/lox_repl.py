"""
Interactive read-eval-print loop for Lox.

Each input is lexed, parsed and evaluated against state that persists for the
whole session: the parser's scope (so later inputs may reference earlier
declarations) and the evaluator's runtime environment.

Session commands:
    exit / quit      leave the REPL
    verbose-mode     toggle echoing each statement's AST before running it

Input spanning several lines is collected while `{` and `}` are unbalanced.
"""

import io
import traceback

from lox.lox_ast import ASTNode
from lox.lox_env import Environment
from lox.lox_errors import LoxError
from lox.lox_eval import Evaluator
from lox.lox_lexer import CharacterStream, Lexer, significant_tokens
from lox.lox_parser import Parser

# Statement kinds whose value is not echoed back
STATEMENT_KINDS = {"print", "variable", "block", "if"}


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_source() -> str:
    """Reads one logical input, continuing while braces are unbalanced."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


class Session:
    """Lox state shared by every input of one REPL session.

    Attributes:
        scope (Environment[ASTNode]): Parse-time declarations. Kept in step with
            the evaluator: a name is declared only once its `var` has run.
        evaluator (Evaluator): Runtime bindings and output.
        verbose (bool): Echo AST display forms before evaluation.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.scope: Environment[ASTNode] = Environment()
        self.evaluator = Evaluator()
        self.verbose = verbose

    def run(self, src: str) -> None:
        """Runs one input, printing results and errors instead of raising."""
        try:
            tokens = significant_tokens(Lexer(CharacterStream(src, 0, 1, 1)).tokenize())
            parser = Parser(tokens, self.scope)
            nodes = parser.parse()
        except LoxError as e:
            self.forget_unbound()
            print(f"[error] >>> {e.kind}: {e}")
            return
        for warning in parser.warnings:
            print(f"[warn] >>> {warning}")

        for node in nodes:
            if self.verbose:
                print(f"[ast] >>> {node}")
            try:
                result = self.evaluator.evaluate(node)
            except LoxError as e:
                self.forget_unbound()
                print(f"[error] >>> {e.kind}: {e}")
                return
            if node.kind not in STATEMENT_KINDS and not result.is_nil:
                print(result)

    def forget_unbound(self) -> None:
        """Drops global declarations whose `var` never ran in the evaluator."""
        frame = self.scope.frames[0]
        for name in [n for n in frame if n not in self.evaluator.environment]:
            del frame[name]


def start_repl(verbose: bool = False) -> None:
    print("Lox REPL. Type 'exit' or 'quit' to leave.")
    session = Session(verbose=verbose)

    while True:
        try:
            src = read_source()
            if not src:
                continue
            if src in ("exit", "quit"):
                print("Exiting Lox REPL.")
                return
            if src.startswith("//"):
                continue
            if src.lower() == "verbose-mode":
                session.verbose = not session.verbose
                print(f"[mode] >>> Verbose mode {'ON' if session.verbose else 'OFF'}")
                continue
            session.run(src)
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Lox REPL.")
            break
        except Exception:
            print_traceback()


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
