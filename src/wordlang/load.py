"""Top-level utilities for loading and running WordLang code"""

import logging
from pathlib import Path
from typing import TextIO, Union

from .config_classes import Settings
from .exceptions import UserResolvableError
from .machine.evaluate import run_program
from .machine.state import State
from .word_parser.nodes import Program
from .word_parser.parser import wl_parse

LOG = logging.getLogger(__name__)


def read_source(filename: Union[str, Path], settings: Settings = None) -> str:
    settings = settings or Settings()
    try:
        with open(filename, "r", encoding=settings.encoding) as f:
            return f.read()
    except OSError as exc:
        raise UserResolvableError(
            f"Can't read {filename}: {exc.strerror}", "Check the file path."
        )
    except UnicodeDecodeError as exc:
        raise UserResolvableError(
            f"Can't decode {filename}: {exc.reason}",
            "Set `encoding' in the [wordlang] section of the config file.",
        )


def compile_text(text: str, settings: Settings = None) -> Program:
    "Parse a WordLang program"
    return wl_parse(text, settings)


def compile_file(filename: Union[str, Path], settings: Settings = None) -> Program:
    "Parse a WordLang file"
    LOG.info("Compiling %s", filename)
    return compile_text(read_source(filename, settings), settings)


def run_text(text: str, output: TextIO = None, settings: Settings = None) -> State:
    "Parse and run a WordLang program"
    return run_program(compile_text(text, settings), output, settings)


def run_file(
    filename: Union[str, Path], output: TextIO = None, settings: Settings = None
) -> State:
    "Parse and run a WordLang file"
    return run_program(compile_file(filename, settings), output, settings)
