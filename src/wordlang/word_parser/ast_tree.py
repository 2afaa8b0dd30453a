"""Debug views of a parsed program: an indented listing and a pydot graph"""

from dataclasses import fields
from functools import singledispatch
from typing import List

import pydot

from .nodes import (
    N_Assign,
    N_BinarySetOp,
    N_Literal,
    N_StatementBlock,
    N_VariableRef,
    Node,
    Program,
)


class NodeStyles:
    statement = {"shape": "box"}
    value = {"shape": "ellipse", "style": "filled", "fillcolor": "lightgrey"}
    default = {}


def class_name(node: Node) -> str:
    return type(node).__name__[2:]  # strip "N_"


@singledispatch
def node_label(node: Node) -> str:
    return class_name(node)


@node_label.register
def _(node: N_BinarySetOp) -> str:
    return f"{class_name(node)}: {node.op}"


@node_label.register
def _(node: N_VariableRef) -> str:
    return f"{class_name(node)}: {node.name} (slot {node.slot})"


@node_label.register
def _(node: N_Literal) -> str:
    return f"{class_name(node)}: {', '.join(sorted(node.words))}"


def node_style(node: Node) -> dict:
    if isinstance(node, (N_StatementBlock, N_Assign)):
        return NodeStyles.statement
    if isinstance(node, (N_Literal, N_VariableRef)):
        return NodeStyles.value
    return NodeStyles.default


def children(node: Node) -> List[Node]:
    """Child nodes, in field order"""
    result = []
    for field in fields(node):
        value = getattr(node, field.name)
        if isinstance(value, Node):
            result.append(value)
        elif isinstance(value, tuple):
            result.extend(v for v in value if isinstance(v, Node))
    return result


def format_tree(program: Program, indent="  ") -> str:
    """Indented listing of the AST, one node per line"""
    lines = []

    def _walk(node, prefix):
        lines.append(f"{prefix}{node_label(node)}")
        for child in children(node):
            _walk(child, prefix + indent)

    _walk(program.root, "")
    return "\n".join(lines)


def format_slots(program: Program) -> str:
    return "\n".join(
        f"{idx:>4}  {info.name:<16} line {info.declare_line}"
        for idx, info in enumerate(program.slots)
    )


class ASTGenerator:
    """Build a pydot graph of the AST"""

    def __init__(self, program: Program, graph_name="wordlang"):
        self.graph = pydot.Dot(graph_type="graph", graph_name=graph_name)
        self._count = 0
        self.recurse_tree(program.root)

    def node(self, wl_node: Node) -> pydot.Node:
        name = f"n{self._count}"
        self._count += 1
        # pydot doesn't escape labels
        label = '"{}"'.format(node_label(wl_node).replace('"', '\\"'))
        graph_node = pydot.Node(name, label=label, **node_style(wl_node))
        self.graph.add_node(graph_node)
        return graph_node

    def recurse_tree(self, wl_node: Node) -> pydot.Node:
        graph_node = self.node(wl_node)
        for child in children(wl_node):
            self.graph.add_edge(pydot.Edge(graph_node, self.recurse_tree(child)))
        return graph_node


def to_dot(program: Program) -> pydot.Dot:
    return ASTGenerator(program).graph
