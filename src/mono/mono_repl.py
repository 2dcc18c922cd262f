"""
Interactive shell for the Mono language.

Two modes are available:
    tokens: print every token of each input line (the default).
    parse:  print the canonical rendering of each line, or its diagnostics.

Commands:
    :tokens / :parse   switch mode
    verbose-mode       toggle a JSON dump of the tree in parse mode
    exit / quit        leave the shell
"""

import json

from mono.mono_lexer import CharacterStream, Lexer
from mono.mono_parser import ParseError, parse

BANNER = "Welcome! This is the Mono programming language."
MODES = ("tokens", "parse")
PROMPT = ">> "


def tokenize_line(line: str) -> list[str]:
    """Returns one printable entry per token in ``line`` (EOF excluded)."""
    return [repr(tok) for tok in Lexer(CharacterStream(line))]


def parse_line(line: str, verbose: bool = False) -> list[str]:
    """Parses ``line`` and returns the lines to print.

    Every diagnostic is reported; the tree is only shown when there are none.
    """
    try:
        program = parse(line)
    except ParseError as exc:
        return [f"[error] >>> {message}" for message in exc.errors]
    out = [program.string()]
    if verbose:
        out.append(json.dumps(program.to_dict(), indent=2))
    return out


def start_repl(mode: str = "tokens", verbose: bool = False) -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown REPL mode: {mode!r}")
    print(BANNER)
    print(f"Mono REPL [mode={mode}]. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            print("Exiting Mono REPL.")
            return

        src = line.strip()
        if src in ("exit", "quit"):
            print("Exiting Mono REPL.")
            return
        if not src:
            continue
        if src in (":tokens", ":parse"):
            mode = src[1:]
            print(f"[mode] >>> {mode}")
            continue
        if src == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue

        if mode == "tokens":
            output = tokenize_line(line)
        else:
            output = parse_line(line, verbose=verbose)
        for entry in output:
            print(entry)
