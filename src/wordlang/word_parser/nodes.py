"""Nodes used to create the WordLang AST"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from .symbols import SlotInfo


@dataclass(frozen=True)
class Node:
    line: int


@dataclass(frozen=True)
class N_StatementBlock(Node):
    """Statements evaluated in order, results discarded"""

    statements: Tuple[Node, ...]


@dataclass(frozen=True)
class N_VariableRef(Node):
    slot: int
    name: str


@dataclass(frozen=True)
class N_Assign(Node):
    target: N_VariableRef
    value: Node


@dataclass(frozen=True)
class N_BinarySetOp(Node):
    lhs: Node
    op: str
    rhs: Node


@dataclass(frozen=True)
class N_Literal(Node):
    words: FrozenSet[str]


@dataclass(frozen=True)
class N_Load(Node):
    filenames: Node


@dataclass(frozen=True)
class N_Print(Node):
    args: Tuple[Node, ...]


@dataclass(frozen=True)
class N_Filter(Node):
    """Keep words of source containing any of the patterns"""

    source: Node
    patterns: Node


@dataclass(frozen=True)
class N_FilterOut(Node):
    """Keep words of source containing none of the patterns"""

    source: Node
    patterns: Node


@dataclass(frozen=True)
class Program:
    root: N_StatementBlock
    slots: Tuple[SlotInfo, ...]

    @property
    def num_slots(self) -> int:
        return len(self.slots)
