"""Abstract Syntax Tree (AST) definitions for the Quill language.

The AST classes defined in this module represent the syntactic structure
of parsed Quill programs. Every child node is owned by exactly one parent,
so the tree can be compared structurally with ``==``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node] = field(default_factory=list)


@dataclass
class NumericLiteral(Node):
    value: str  # digits as written in the source


@dataclass
class Identifier(Node):
    symbol: str


@dataclass
class Comment(Node):
    text: str


@dataclass
class Property:
    key: str
    value: Optional[Node] = None  # None for shorthand `{ key }`


@dataclass
class ObjectLiteral(Node):
    properties: List[Property] = field(default_factory=list)


@dataclass
class VarDeclaration(Node):
    constant: bool
    identifier: str
    value: Optional[Node] = None


@dataclass
class FnDeclaration(Node):
    name: str
    parameters: List[str]
    body: List[Node]
    is_const: bool = False


@dataclass
class AssignmentExpr(Node):
    assignee: Node
    value: Node


@dataclass
class MemberExpr(Node):
    object: Node
    property: Node
    computed: bool


@dataclass
class CallExpr(Node):
    caller: Node
    args: List[Node] = field(default_factory=list)


@dataclass
class BinaryExpr(Node):
    left: Node
    right: Node
    operator: str
