"""Tree-walking evaluator: every expression evaluates to a set of words"""

import logging
import sys
from functools import singledispatchmethod
from typing import Iterable, TextIO

from ..config_classes import Settings
from ..exceptions import InternalError
from ..word_parser import nodes as n
from .output import format_words
from .state import NO_WORDS, State, Words

LOG = logging.getLogger(__name__)


def matches_any(word: str, patterns: Iterable[str]) -> bool:
    """True if any pattern occurs somewhere in word"""
    return any(pattern in word for pattern in patterns)


def read_words(filename: str, encoding: str) -> set:
    """Whitespace-delimited words in a file"""
    words = set()
    with open(filename, "r", encoding=encoding, errors="replace") as f:
        for line in f:
            words.update(line.split())
    return words


class Evaluator:
    def __init__(self, program: n.Program, output: TextIO = None, settings: Settings = None):
        self.program = program
        self.state = State(program.num_slots)
        self.output = output if output is not None else sys.stdout
        self.settings = settings or Settings()

    def run(self):
        LOG.debug("Running program with %d slots", len(self.state))
        self.evaluate(self.program.root)

    def write(self, words: Words):
        print(format_words(words, self.settings.print_style), file=self.output)

    @singledispatchmethod
    def evaluate(self, node) -> Words:
        raise InternalError(f"Can't evaluate node: {node!r}")

    @evaluate.register
    def _(self, node: n.N_StatementBlock) -> Words:
        for stmt in node.statements:
            self.evaluate(stmt)
        return NO_WORDS

    @evaluate.register
    def _(self, node: n.N_Assign) -> Words:
        if not isinstance(node.target, n.N_VariableRef):
            raise InternalError(f"Assignment to non-variable: {node.target!r}")
        return self.state.set(node.target.slot, self.evaluate(node.value))

    @evaluate.register
    def _(self, node: n.N_BinarySetOp) -> Words:
        lhs = self.evaluate(node.lhs)
        rhs = self.evaluate(node.rhs)
        if node.op == "+":
            return lhs | rhs
        if node.op == "-":
            return lhs - rhs
        raise InternalError(f"Unknown set operator `{node.op}'")

    @evaluate.register
    def _(self, node: n.N_VariableRef) -> Words:
        return self.state.get(node.slot)

    @evaluate.register
    def _(self, node: n.N_Literal) -> Words:
        return node.words

    @evaluate.register
    def _(self, node: n.N_Load) -> Words:
        words = set()
        for filename in sorted(self.evaluate(node.filenames)):
            try:
                found = read_words(filename, self.settings.encoding)
            except (OSError, ValueError) as exc:
                # Unreadable files contribute nothing
                LOG.info("load: skipping %s (%s)", filename, exc)
                continue
            LOG.info("load: %d words from %s", len(found), filename)
            words |= found
        return frozenset(words)

    @evaluate.register
    def _(self, node: n.N_Print) -> Words:
        for arg in node.args:
            self.write(self.evaluate(arg))
        return NO_WORDS

    @evaluate.register
    def _(self, node: n.N_Filter) -> Words:
        words = self.evaluate(node.source)
        patterns = self.evaluate(node.patterns)
        return frozenset(w for w in words if matches_any(w, patterns))

    @evaluate.register
    def _(self, node: n.N_FilterOut) -> Words:
        words = self.evaluate(node.source)
        patterns = self.evaluate(node.patterns)
        return frozenset(w for w in words if not matches_any(w, patterns))


def run_program(program: n.Program, output: TextIO = None, settings: Settings = None) -> State:
    """Evaluate a parsed program, returning the final variable state"""
    evaluator = Evaluator(program, output, settings)
    evaluator.run()
    return evaluator.state
