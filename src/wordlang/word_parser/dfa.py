"""Deterministic finite automaton used by the lexer.

The transition table is generated from the token regexes when this module is
imported: each regex is compiled to an NFA (Thompson construction), the NFAs
are joined under one start state, and subset construction turns the result
into a dense table of ``ALPHABET_SIZE`` columns per state.

Only a small regex dialect is understood -- enough for token definitions:

- literal characters, ``.`` (anything but newline)
- ``[...]`` / ``[^...]`` classes with ranges
- ``\\s``, ``\\w``, ``\\d`` and escaped punctuation / ``\\n`` / ``\\t``
- grouping ``( )``, alternation ``|``, and the ``*``, ``+``, ``?`` operators

Two control symbols bracket every line: ``SYMBOL_START`` is fed before the
first character of a line and ``SYMBOL_STOP`` is tried before a newline or the
end of input. A control symbol without a transition leaves the state alone, so
patterns that don't mention them are unaffected.
"""

import logging
import string
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

LOG = logging.getLogger(__name__)

ALPHABET_SIZE = 128
NO_STATE = -1

SYMBOL_START = 2  # start of line
SYMBOL_STOP = 3  # end of line
SYMBOL_MIN_INPUT = 9  # symbols below this are control symbols

ANY = frozenset(range(SYMBOL_MIN_INPUT, ALPHABET_SIZE))
NEWLINE = ord("\n")

ESCAPE_CLASSES = {
    "s": frozenset(map(ord, " \t\n\r\f\v")),
    "w": frozenset(map(ord, string.ascii_letters + string.digits + "_")),
    "d": frozenset(map(ord, string.digits)),
}
ESCAPE_CHARS = {"n": "\n", "t": "\t", "r": "\r", "f": "\f", "v": "\v"}

Fragment = Tuple[int, int]


class RegexError(ValueError):
    """A token pattern could not be compiled"""


class NFA:
    """Thompson NFA with epsilon moves, built fragment by fragment"""

    def __init__(self):
        self.moves: List[List[Tuple[FrozenSet[int], int]]] = []
        self.epsilon: List[List[int]] = []

    def new_state(self) -> int:
        self.moves.append([])
        self.epsilon.append([])
        return len(self.moves) - 1

    def link(self, src, dest):
        self.epsilon[src].append(dest)

    def symbols(self, syms) -> Fragment:
        start, end = self.new_state(), self.new_state()
        self.moves[start].append((frozenset(syms), end))
        return start, end

    def concat(self, frags) -> Fragment:
        if not frags:
            state = self.new_state()
            return state, state
        for (_, end), (start, _) in zip(frags, frags[1:]):
            self.link(end, start)
        return frags[0][0], frags[-1][1]

    def union(self, frags) -> Fragment:
        start, end = self.new_state(), self.new_state()
        for frag_start, frag_end in frags:
            self.link(start, frag_start)
            self.link(frag_end, end)
        return start, end

    def star(self, frag) -> Fragment:
        start, end = self.new_state(), self.new_state()
        self.link(start, frag[0])
        self.link(start, end)
        self.link(frag[1], frag[0])
        self.link(frag[1], end)
        return start, end

    def plus(self, frag) -> Fragment:
        start, end = self.new_state(), self.new_state()
        self.link(start, frag[0])
        self.link(frag[1], frag[0])
        self.link(frag[1], end)
        return start, end

    def optional(self, frag) -> Fragment:
        start, end = self.new_state(), self.new_state()
        self.link(start, frag[0])
        self.link(start, end)
        self.link(frag[1], end)
        return start, end

    def closure(self, states) -> FrozenSet[int]:
        """All states reachable from `states' by epsilon moves"""
        seen = set(states)
        stack = list(states)
        while stack:
            for nxt in self.epsilon[stack.pop()]:
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return frozenset(seen)

    def step(self, states, symbol) -> FrozenSet[int]:
        targets = set()
        for state in states:
            for syms, dest in self.moves[state]:
                if symbol in syms:
                    targets.add(dest)
        return self.closure(targets) if targets else frozenset()


class RegexCompiler:
    """Recursive-descent compiler from a regex string to an NFA fragment"""

    def __init__(self, pattern: str, nfa: NFA):
        self.pattern = pattern
        self.pos = 0
        self.nfa = nfa

    def compile(self) -> Fragment:
        frag = self.alternation()
        if self.pos != len(self.pattern):
            self.error(f"unexpected `{self.pattern[self.pos]}'")
        return frag

    def error(self, msg):
        raise RegexError(f"{msg} at {self.pos} in /{self.pattern}/")

    def peek(self):
        if self.pos < len(self.pattern):
            return self.pattern[self.pos]
        return None

    def take(self):
        char = self.peek()
        if char is None:
            self.error("unexpected end of pattern")
        self.pos += 1
        return char

    def alternation(self) -> Fragment:
        frags = [self.sequence()]
        while self.peek() == "|":
            self.pos += 1
            frags.append(self.sequence())
        return frags[0] if len(frags) == 1 else self.nfa.union(frags)

    def sequence(self) -> Fragment:
        frags = []
        while self.peek() not in (None, "|", ")"):
            frags.append(self.repeat())
        return self.nfa.concat(frags)

    def repeat(self) -> Fragment:
        frag = self.atom()
        while self.peek() in ("*", "+", "?"):
            op = self.take()
            if op == "*":
                frag = self.nfa.star(frag)
            elif op == "+":
                frag = self.nfa.plus(frag)
            else:
                frag = self.nfa.optional(frag)
        return frag

    def atom(self) -> Fragment:
        char = self.take()
        if char == "(":
            frag = self.alternation()
            if self.take() != ")":
                self.error("expected `)'")
            return frag
        if char == "[":
            return self.nfa.symbols(self.char_class())
        if char == ".":
            return self.nfa.symbols(ANY - {NEWLINE})
        if char == "\\":
            return self.nfa.symbols(self.escape())
        if char in "*+?)":
            self.error(f"nothing to repeat before `{char}'")
        return self.nfa.symbols({ord(char)})

    def escape(self) -> FrozenSet[int]:
        char = self.take()
        if char in ESCAPE_CLASSES:
            return ESCAPE_CLASSES[char]
        return frozenset({ord(ESCAPE_CHARS.get(char, char))})

    def char_class(self) -> FrozenSet[int]:
        negate = self.peek() == "^"
        if negate:
            self.pos += 1
        syms = set()
        first = True
        while first or self.peek() != "]":
            first = False
            char = self.take()
            if char == "\\":
                lo = self.escape()
            else:
                lo = frozenset({ord(char)})
            if self.peek() == "-" and self.pattern[self.pos + 1 : self.pos + 2] not in ("", "]"):
                self.pos += 1
                hi = self.take()
                if len(lo) != 1:
                    self.error("bad range")
                syms.update(range(min(lo), ord(hi) + 1))
            else:
                syms.update(lo)
        self.pos += 1  # ]
        return ANY - syms if negate else frozenset(syms)


@dataclass(frozen=True)
class DFA:
    """A dense DFA transition table with token ids on the stop states"""

    table: Tuple[Tuple[int, ...], ...]
    stop_ids: Tuple[int, ...]

    def __len__(self):
        return len(self.table)

    def next_state(self, state: int, symbol: int) -> int:
        nxt = NO_STATE
        if state >= 0 and 0 <= symbol < ALPHABET_SIZE:
            nxt = self.table[state][symbol]
        # An unused control symbol keeps the current state
        if symbol < SYMBOL_MIN_INPUT and nxt == NO_STATE:
            nxt = state
        return nxt

    def stop(self, state: int) -> int:
        """Token id accepted in `state', or 0 if it is not a stop state"""
        return self.stop_ids[state] if state >= 0 else 0

    def run(self, state: int, text: str) -> int:
        for char in text:
            state = self.next_state(state, ord(char))
        return state

    def test(self, text: str) -> int:
        """Token id that matches the whole of `text' on its own line (or 0)"""
        state = self.run(self.next_state(0, SYMBOL_START), text)
        eol_state = self.next_state(state, SYMBOL_STOP)
        return max(self.stop(state), self.stop(eol_state))


def build_dfa(patterns: Dict[int, str]) -> DFA:
    """Build one DFA that recognises every pattern.

    `patterns' maps token ids to regexes. Where several patterns accept in the
    same state, the highest token id wins.
    """
    nfa = NFA()
    start = nfa.new_state()
    accepts = {}
    for token_id, pattern in patterns.items():
        frag_start, frag_end = RegexCompiler(pattern, nfa).compile()
        nfa.link(start, frag_start)
        accepts[frag_end] = max(token_id, accepts.get(frag_end, 0))

    initial = nfa.closure([start])
    index = {initial: 0}
    order = [initial]
    table = []
    stop_ids = []

    for states in order:
        row = [NO_STATE] * ALPHABET_SIZE
        for symbol in range(ALPHABET_SIZE):
            nxt = nfa.step(states, symbol)
            if not nxt:
                continue
            if nxt not in index:
                index[nxt] = len(order)
                order.append(nxt)
            row[symbol] = index[nxt]
        table.append(tuple(row))
        stop_ids.append(max((accepts[s] for s in states if s in accepts), default=0))

    LOG.debug("Built DFA: %d NFA states -> %d DFA states", len(nfa.moves), len(table))
    return DFA(tuple(table), tuple(stop_ids))
