"""
FinnLang Interpreter

This is the main entry point for the FinnLang interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. The Interpreter walks the AST, evaluating expressions and executing statements.
"""
import logging
import sys

from finnlang import config
from finnlang.exceptions import FinnException
from finnlang.interpreter import Interpreter
from finnlang.lexer import tokenize
from finnlang.parser import Parser
from finnlang.runner import run_source


def print_usage():
    """
    Print usage.
    """
    print()
    print("FinnLang Interpreter")
    print()
    print("Usage:")
    print("    finn <script.finn>")
    print()
    print("Arguments:")
    print("    <script.finn>")
    print("        Path to a FinnLang source file to execute.")
    print()
    print("Example:")
    print("    finn hello.finn")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print()
    print("Environment:")
    print("    FINNDEBUG")
    print("        When set, print the tokens and AST before running the script.")


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    for stmt in ast:
        print(stmt)
    print(" ")


def run_script(script_name: str) -> int:
    """
    Run a FinnLang script.

    Returns:
        int: The process exit status, non-zero on failure.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"Cannot read {script_name}: {e.strerror}", file=sys.stderr)
        return 2

    if config.debug_enabled():
        try:
            tokens = tokenize(code, script_name)
            debug_print_tokens_ast(tokens, Parser(tokens, script_name).parse())
        except FinnException as e:
            print(f"\nDebug dump unavailable: {e}")

    result = run_source(code, script_name, stream=sys.stdout)
    if not result.success:
        sys.stdout.flush()
        print(result.error, file=sys.stderr)
        return 1
    return 0


def run_repl():
    """
    Run the interactive REPL.

    Variables and functions persist between inputs. Input that ends before a
    statement is complete is buffered until the statement is finished.
    """
    print("FinnLang Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter("<stdin>", sys.stdout)
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            result = run_source(source, "<stdin>", interpreter=interpreter)
            if not result.success:
                # An unfinished statement fails at end of input; keep reading.
                if result.incomplete:
                    continue
                print(result.error)
            buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    logging.basicConfig(
        level=logging.DEBUG if config.debug_enabled() else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args = argv[1:]
    if not args:
        run_repl()
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1 and not args[0].startswith('-'):
        return run_script(args[0])
    print_usage()
    return 1


def console_main() -> int:
    """
    Console script entry point.
    """
    return main(sys.argv)


if __name__ == "__main__":
    sys.exit(main(sys.argv))
