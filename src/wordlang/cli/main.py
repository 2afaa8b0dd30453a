"""WordLang.

Usage:
  wordlang [options] tokens FILE
  wordlang [options] tree FILE [--dot=OUTPUT]
  wordlang [options] FILE
  wordlang --version
  wordlang -h | --help

Commands:
  tokens   List the tokens in a file.
  tree     Parse a file and print its syntax tree.
  default  Run a WordLang program.

Options:
  --version       Show version.
  -h, --help      Show this screen.
  -q, --quiet     Be quiet.
  -v, --verbose   Be verbose.
  -V, --vverbose  Be very verbose.
  --no-colours    Disable colours in CLI output.

  --config=CONFIG  Config file to use  [default: wordlang.toml]
  --dot=OUTPUT     Also write the syntax tree as a Graphviz file.
"""

import logging
from pathlib import Path

from docopt import docopt

from .. import __version__, config
from ..exceptions import UnexpectedError, UserResolvableError, WordLangSyntaxError
from ..load import compile_file, read_source
from ..machine.evaluate import run_program
from ..word_parser.ast_tree import format_slots, format_tree, to_dot
from ..word_parser.lexer import Lexer, TokenKind, token_name
from .interface import dim, exit_bug, exit_error, exit_problem, info, init, neutral

LOG = logging.getLogger(__name__)


def _run(args, settings):
    filename = args["FILE"]
    LOG.info("Running %s", filename)
    program = compile_file(filename, settings)
    run_program(program, settings=settings)


def _tokens(args, settings):
    """Print every token, including the ones the parser never sees"""
    text = read_source(args["FILE"], settings)
    lexer = Lexer()
    while True:
        token = lexer.next_token(text)
        if token.kind == TokenKind.EOF:
            break
        if token.kind in (TokenKind.WHITESPACE, TokenKind.COMMENT):
            print(dim(f"{token.line:>4}  {token_name(token.kind):<12} {token.text!r}"))
        else:
            print(f"{token.line:>4}  {token_name(token.kind):<12} {token.text!r}")


def _tree(args, settings):
    """Parse a file and print the AST"""
    program = compile_file(args["FILE"], settings)
    info(neutral("\nSYNTAX TREE:\n"))
    print(format_tree(program))
    info(neutral("\nSLOTS:\n"))
    print(format_slots(program))
    if args["--dot"]:
        Path(args["--dot"]).write_text(to_dot(program).to_string())
        info(dim(f"\nWrote {args['--dot']}"))


def dispatch(args, settings):
    if args["tokens"]:
        _tokens(args, settings)
    elif args["tree"]:
        _tree(args, settings)
    else:
        _run(args, settings)


def main():
    args = docopt(__doc__, version=__version__)
    init(args)
    LOG.debug("CLI args: %s", args)

    try:
        settings = config.load(args)
        dispatch(args, settings)
    except WordLangSyntaxError as exc:
        exit_error(exc.line, exc.msg)
    except UserResolvableError as exc:
        exit_problem(exc.msg, exc.suggested_fix)
    except UnexpectedError as exc:
        exit_bug(str(exc))


if __name__ == "__main__":
    main()
