"""
Typed syntax tree for one compilation unit, as supplied by the front end.

Expressions, statements and declarations are closed sets of dataclasses.
Nodes compare by identity so they can key the tracker tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TypeKind(Enum):
    BASIC = "basic"
    STRUCT = "struct"
    ARRAY = "array"
    SLICE = "slice"
    POINTER = "pointer"
    MAP = "map"
    CHAN = "chan"
    FUNC = "func"
    INTERFACE = "interface"


@dataclass(eq=False)
class Field:
    name: str
    type: TypeDescriptor


@dataclass(eq=False)
class TypeDescriptor:
    kind: TypeKind
    name: str = ""
    package: str = ""
    elem: TypeDescriptor | None = None
    length: int = 0
    fields: tuple[Field, ...] = ()
    size: int | None = None

    def is_struct(self):
        return self.kind == TypeKind.STRUCT

    def pointee_struct(self):
        """
        Returns the struct a pointer type points to, or None.
        """
        if self.kind != TypeKind.POINTER or self.elem is None:
            return None
        return self.elem if self.elem.is_struct() else None

    def slice_pointee_struct(self):
        """
        Returns T for a slice type []*T where T is a struct, or None.
        """
        if self.kind != TypeKind.SLICE or self.elem is None:
            return None
        return self.elem.pointee_struct()

    def display_name(self):
        if self.name:
            return self.name
        if self.kind == TypeKind.POINTER and self.elem is not None:
            return "*" + self.elem.display_name()
        if self.kind == TypeKind.SLICE and self.elem is not None:
            return "[]" + self.elem.display_name()
        if self.kind == TypeKind.ARRAY and self.elem is not None:
            return f"[{self.length}]{self.elem.display_name()}"
        return self.kind.value


# --- expressions ---


@dataclass(eq=False)
class Ident:
    name: str
    binding: int | None = None
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Nil:
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class BasicLit:
    value: str
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Selector:
    x: Expr
    sel: str
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Index:
    x: Expr
    index: Expr
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Star:
    x: Expr
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Unary:
    op: str
    x: Expr
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Binary:
    op: str
    x: Expr
    y: Expr
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Call:
    fun: Expr
    args: list[Expr] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class CompositeLit:
    type: TypeRef | None
    elts: list[Expr] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class FuncLit:
    results: list[TypeRef] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class TypeRef:
    """
    A type written in source, with the front end's resolution (None when
    the front end could not resolve it).
    """

    type: TypeDescriptor | None
    line: int = 0
    column: int = 0


Expr = Ident | Nil | BasicLit | Selector | Index | Star | Unary | Binary | Call | CompositeLit | FuncLit | TypeRef


# --- statements ---


@dataclass(eq=False)
class Assign:
    lhs: list[Expr]
    rhs: list[Expr]
    op: str = "="
    line: int = 0
    column: int = 0

    @property
    def defines(self):
        return self.op == ":="


@dataclass(eq=False)
class IncDec:
    x: Expr
    op: str = "++"
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Return:
    results: list[Expr] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class ExprStmt:
    x: Expr
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class VarSpec:
    names: list[Ident]
    type: TypeRef | None = None
    values: list[Expr] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class DeclStmt:
    specs: list[VarSpec]
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Block:
    stmts: list[Stmt] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class If:
    cond: Expr
    body: list[Stmt] = field(default_factory=list)
    init: Stmt | None = None
    orelse: list[Stmt] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class For:
    body: list[Stmt] = field(default_factory=list)
    init: Stmt | None = None
    cond: Expr | None = None
    post: Stmt | None = None
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Range:
    x: Expr
    body: list[Stmt] = field(default_factory=list)
    key: Expr | None = None
    value: Expr | None = None
    op: str = ":="
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class CaseClause:
    exprs: list[Expr] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Switch:
    tag: Expr | None = None
    init: Stmt | None = None
    cases: list[CaseClause] = field(default_factory=list)
    line: int = 0
    column: int = 0


Stmt = Assign | IncDec | Return | ExprStmt | DeclStmt | Block | If | For | Range | Switch | CaseClause


# --- declarations ---


@dataclass(eq=False)
class Receiver:
    name: Ident | None
    type: TypeRef
    line: int = 0
    column: int = 0

    @property
    def is_pointer(self):
        t = self.type.type
        return t is not None and t.kind == TypeKind.POINTER


@dataclass(eq=False)
class FuncDecl:
    name: str
    receiver: Receiver | None = None
    results: list[TypeRef] = field(default_factory=list)
    body: list[Stmt] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class GenDecl:
    specs: list[VarSpec]
    line: int = 0
    column: int = 0


Decl = FuncDecl | GenDecl


@dataclass(eq=False)
class Comment:
    text: str
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class FrontEndError:
    message: str
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Unit:
    file: str
    package: str = ""
    decls: list[Decl] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    errors: list[FrontEndError] = field(default_factory=list)
