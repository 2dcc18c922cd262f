"""
Mono CLI Entrypoint.

Runs the Mono front-end over a `.mono` file or an inline string and prints
the result, or starts the interactive REPL.

Example usage:
    mono program.mono
    mono -s "let x = 1 + 2 * 3;"
    mono -s "a + b" --tokens
    mono program.mono --ast
    mono --repl --mode parse

Functions:
    run_mono(source: str, is_string: bool = False, show_tokens: bool = False,
             show_ast: bool = False) -> int:
        Lexes and parses the source and prints tokens, JSON tree, or the
        canonical rendering. Returns a process exit status.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and dispatches to the REPL or ``run_mono``.
"""

import argparse
import json
import sys

from mono.mono_lexer import CharacterStream, Lexer
from mono.mono_parser import Parser


def run_mono(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
) -> int:
    """
    Run the Mono front-end and print its output.

    Args:
        source (str): Mono source code or a path to a `.mono` file.
        is_string (bool): Treat ``source`` as code instead of a path.
        show_tokens (bool): Print the token stream instead of parsing.
        show_ast (bool): Print the syntax tree as JSON.

    Returns:
        int: 0 on success, 1 if the parser reported diagnostics.

    Raises:
        ValueError: If ``is_string`` is False and the path does not end with '.mono'.
    """
    if not is_string and not source.endswith(".mono"):
        raise ValueError("Only .mono files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if show_tokens:
        for tok in Lexer(CharacterStream(source)):
            print(repr(tok))
        return 0

    parser = Parser(Lexer(CharacterStream(source)))
    program = parser.parse_program()
    if parser.errors:
        for message in parser.errors:
            print(f"[error] >>> {message}", file=sys.stderr)
        return 1

    if show_ast:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program.string())
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Mono CLI.

    Launches the REPL when no arguments are given or ``--repl`` is passed;
    otherwise runs ``run_mono`` over the source.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(prog="mono")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and stop"
    )
    parser.add_argument("--ast", action="store_true", help="Print the tree as JSON")
    parser.add_argument(
        "--repl", action="store_true", help="Launch the interactive REPL"
    )
    parser.add_argument(
        "--mode",
        choices=("tokens", "parse"),
        default="tokens",
        help="REPL mode (default: tokens)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Dump trees as JSON in the REPL"
    )

    args = parser.parse_args(argv)

    if args.repl or args.source is None:
        from mono.mono_repl import start_repl

        start_repl(mode=args.mode, verbose=args.verbose)
        return 0

    return run_mono(
        source=args.source,
        is_string=args.string,
        show_tokens=args.tokens,
        show_ast=args.ast,
    )


if __name__ == "__main__":
    sys.exit(main())
