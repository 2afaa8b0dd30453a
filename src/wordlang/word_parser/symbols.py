"""Parse-time name resolution.

Names are only visible while parsing: the parser resolves every identifier to
a slot index, and the evaluator only ever sees those indices. Slots are never
freed, so a value outlives the block its name was declared in.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..exceptions import InternalError, WordLangSyntaxError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotInfo:
    name: str
    declare_line: int


class SymbolTable:
    def __init__(self):
        self.slots: List[SlotInfo] = []
        self.scopes: List[Dict[str, int]] = [{}]

    @property
    def num_slots(self) -> int:
        return len(self.slots)

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def declare(self, line: int, name: str) -> int:
        """Add `name' to the innermost scope and return its new slot"""
        scope = self.scopes[-1]
        if name in scope:
            raise WordLangSyntaxError(f"Redeclaration of variable '{name}'.", line)
        slot = len(self.slots)
        self.slots.append(SlotInfo(name, line))
        scope[name] = slot
        LOG.debug("Declared %s -> slot %d (line %d, depth %d)", name, slot, line, self.depth)
        return slot

    def lookup(self, name: str) -> Optional[int]:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def has_var(self, name: str) -> bool:
        return self.lookup(name) is not None

    def push_scope(self):
        self.scopes.append({})

    def pop_scope(self):
        if len(self.scopes) <= 1:
            raise InternalError("Attempted to pop the outermost scope")
        self.scopes.pop()
