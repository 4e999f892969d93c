import json
import logging
import os

from syntax_nodes import (
    Assign,
    BasicLit,
    Binary,
    Block,
    Call,
    CaseClause,
    Comment,
    CompositeLit,
    DeclStmt,
    ExprStmt,
    Field,
    For,
    FrontEndError,
    FuncDecl,
    FuncLit,
    GenDecl,
    Ident,
    If,
    IncDec,
    Index,
    Nil,
    Range,
    Receiver,
    Return,
    Selector,
    Star,
    Switch,
    TypeDescriptor,
    TypeKind,
    TypeRef,
    Unary,
    Unit,
    VarSpec,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = {1}


class LoadUnitError(RuntimeError):
    pass


def _load_failure_hint(filename):
    base = os.path.basename(filename)
    return (
        f"Could not load '{base}'. "
        "The file must be a unit dump written by the front end (JSON, format 1). "
        "Regenerate it from a source file that type-checks."
    )


def _require(obj, key, where):
    try:
        return obj[key]
    except (KeyError, TypeError):
        raise LoadUnitError(f"{where}: missing required key '{key}'") from None


def _count(raw, key, type_id):
    value = raw.get(key)
    if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
        raise LoadUnitError(f"type {type_id}: '{key}' must be a non-negative integer, got {value!r}")
    return value


def _load_types(raw_types):
    if not isinstance(raw_types, dict):
        raise LoadUnitError("'types' must be an object keyed by type id")

    table = {}
    for type_id, raw in raw_types.items():
        try:
            kind = TypeKind(_require(raw, "kind", f"type {type_id}"))
        except ValueError:
            raise LoadUnitError(f"type {type_id}: unknown type kind {raw.get('kind')!r}") from None
        size = _count(raw, "size", type_id)
        table[str(type_id)] = TypeDescriptor(
            kind=kind,
            name=raw.get("name", ""),
            package=raw.get("package", ""),
            length=_count(raw, "len", type_id) or 0,
            size=size,
        )

    def lookup(ref, where):
        if ref is None:
            return None
        found = table.get(str(ref))
        if found is None:
            raise LoadUnitError(f"{where}: unknown type id {ref!r}")
        return found

    # Second pass: element and field references may point forward.
    for type_id, raw in raw_types.items():
        desc = table[str(type_id)]
        desc.elem = lookup(raw.get("elem"), f"type {type_id}")
        desc.fields = tuple(
            Field(name=f.get("name", ""), type=lookup(_require(f, "type", f"type {type_id} field"), f"type {type_id}"))
            for f in raw.get("fields", [])
        )

    return lookup


class _NodeBuilder:
    """
    Turns the dump's nested node objects into syntax_nodes dataclasses.
    """

    def __init__(self, lookup_type):
        self.lookup_type = lookup_type

    def pos(self, raw):
        return {"line": int(raw.get("line", 0)), "column": int(raw.get("column", 0))}

    def opt(self, raw):
        return None if raw is None else self.node(raw)

    def many(self, raws):
        return [self.node(r) for r in raws or []]

    def type_ref(self, raw, required=False):
        if raw is None:
            if required:
                raise LoadUnitError("expected TypeRef, got null")
            return None
        node = self.node(raw)
        if not isinstance(node, TypeRef):
            raise LoadUnitError(f"line {raw.get('line', '?')}: expected TypeRef, got {raw.get('kind')!r}")
        return node

    def node(self, raw):
        if not isinstance(raw, dict):
            raise LoadUnitError(f"expected a node object, got {type(raw).__name__}")
        kind = _require(raw, "kind", "node")
        build = getattr(self, f"build_{kind}", None)
        if build is None:
            raise LoadUnitError(f"line {raw.get('line', '?')}: unknown node kind {kind!r}")
        return build(raw)

    def build_Ident(self, raw):
        return Ident(name=_require(raw, "name", "Ident"), binding=raw.get("obj"), **self.pos(raw))

    def build_Nil(self, raw):
        return Nil(**self.pos(raw))

    def build_BasicLit(self, raw):
        return BasicLit(value=str(raw.get("value", "")), **self.pos(raw))

    def build_Selector(self, raw):
        return Selector(x=self.node(_require(raw, "x", "Selector")), sel=raw.get("sel", ""), **self.pos(raw))

    def build_Index(self, raw):
        return Index(
            x=self.node(_require(raw, "x", "Index")),
            index=self.node(_require(raw, "index", "Index")),
            **self.pos(raw),
        )

    def build_Star(self, raw):
        return Star(x=self.node(_require(raw, "x", "Star")), **self.pos(raw))

    def build_Unary(self, raw):
        return Unary(op=raw.get("op", ""), x=self.node(_require(raw, "x", "Unary")), **self.pos(raw))

    def build_Binary(self, raw):
        return Binary(
            op=_require(raw, "op", "Binary"),
            x=self.node(_require(raw, "x", "Binary")),
            y=self.node(_require(raw, "y", "Binary")),
            **self.pos(raw),
        )

    def build_Call(self, raw):
        return Call(fun=self.node(_require(raw, "fun", "Call")), args=self.many(raw.get("args")), **self.pos(raw))

    def build_CompositeLit(self, raw):
        return CompositeLit(type=self.type_ref(raw.get("type")), elts=self.many(raw.get("elts")), **self.pos(raw))

    def build_FuncLit(self, raw):
        return FuncLit(
            results=[self.type_ref(r, required=True) for r in raw.get("results", [])],
            body=self.many(raw.get("body")),
            **self.pos(raw),
        )

    def build_TypeRef(self, raw):
        where = f"line {raw.get('line', '?')}"
        return TypeRef(type=self.lookup_type(raw.get("type"), where), **self.pos(raw))

    def build_Assign(self, raw):
        return Assign(
            lhs=self.many(_require(raw, "lhs", "Assign")),
            rhs=self.many(_require(raw, "rhs", "Assign")),
            op=raw.get("op", "="),
            **self.pos(raw),
        )

    def build_IncDec(self, raw):
        return IncDec(x=self.node(_require(raw, "x", "IncDec")), op=raw.get("op", "++"), **self.pos(raw))

    def build_Return(self, raw):
        return Return(results=self.many(raw.get("results")), **self.pos(raw))

    def build_ExprStmt(self, raw):
        return ExprStmt(x=self.node(_require(raw, "x", "ExprStmt")), **self.pos(raw))

    def build_VarSpec(self, raw):
        return VarSpec(
            names=self.many(_require(raw, "names", "VarSpec")),
            type=self.type_ref(raw.get("type")),
            values=self.many(raw.get("values")),
            **self.pos(raw),
        )

    def build_DeclStmt(self, raw):
        return DeclStmt(specs=self.many(_require(raw, "specs", "DeclStmt")), **self.pos(raw))

    def build_Block(self, raw):
        return Block(stmts=self.many(raw.get("stmts")), **self.pos(raw))

    def build_If(self, raw):
        return If(
            cond=self.node(_require(raw, "cond", "If")),
            body=self.many(raw.get("body")),
            init=self.opt(raw.get("init")),
            orelse=self.many(raw.get("else")),
            **self.pos(raw),
        )

    def build_For(self, raw):
        return For(
            body=self.many(raw.get("body")),
            init=self.opt(raw.get("init")),
            cond=self.opt(raw.get("cond")),
            post=self.opt(raw.get("post")),
            **self.pos(raw),
        )

    def build_Range(self, raw):
        return Range(
            x=self.node(_require(raw, "x", "Range")),
            body=self.many(raw.get("body")),
            key=self.opt(raw.get("key")),
            value=self.opt(raw.get("value")),
            op=raw.get("op", ":="),
            **self.pos(raw),
        )

    def build_CaseClause(self, raw):
        return CaseClause(exprs=self.many(raw.get("exprs")), body=self.many(raw.get("body")), **self.pos(raw))

    def build_Switch(self, raw):
        return Switch(
            tag=self.opt(raw.get("tag")),
            init=self.opt(raw.get("init")),
            cases=self.many(raw.get("cases")),
            **self.pos(raw),
        )

    def build_Receiver(self, raw):
        return Receiver(
            name=self.opt(raw.get("name")),
            type=self.type_ref(_require(raw, "type", "Receiver"), required=True),
            **self.pos(raw),
        )

    def build_FuncDecl(self, raw):
        return FuncDecl(
            name=_require(raw, "name", "FuncDecl"),
            receiver=self.opt(raw.get("recv")),
            results=[self.type_ref(r, required=True) for r in raw.get("results", [])],
            body=self.many(raw.get("body")),
            **self.pos(raw),
        )

    def build_GenDecl(self, raw):
        return GenDecl(specs=self.many(_require(raw, "specs", "GenDecl")), **self.pos(raw))


def unit_from_dict(data):
    if not isinstance(data, dict):
        raise LoadUnitError("unit dump must be a JSON object")

    fmt = data.get("format", 1)
    if fmt not in SUPPORTED_FORMATS:
        raise LoadUnitError(f"unsupported unit dump format {fmt!r}")

    builder = _NodeBuilder(_load_types(data.get("types", {})))
    decls = builder.many(data.get("decls"))
    for decl in decls:
        if not isinstance(decl, (FuncDecl, GenDecl)):
            raise LoadUnitError(f"line {decl.line}: {type(decl).__name__} is not a top-level declaration")

    comments = [
        Comment(text=_require(c, "text", "comment"), line=int(c.get("line", 0)), column=int(c.get("column", 0)))
        for c in data.get("comments", [])
    ]
    errors = [
        FrontEndError(message=str(e.get("message", "")), line=int(e.get("line", 0)), column=int(e.get("column", 0)))
        for e in data.get("errors", [])
    ]

    return Unit(
        file=_require(data, "file", "unit"),
        package=data.get("package", ""),
        decls=decls,
        comments=comments,
        errors=errors,
    )


def load_unit_file(filename):
    if not os.path.exists(filename):
        raise LoadUnitError(f"Input file does not exist: {filename}")
    if not os.path.isfile(filename):
        raise LoadUnitError(f"Input path is not a file: {filename}")

    try:
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LoadUnitError(_load_failure_hint(filename)) from exc

    try:
        unit = unit_from_dict(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise LoadUnitError(f"malformed unit dump: {exc}") from exc
    logger.debug("loaded %s: %d declarations, %d comments", unit.file, len(unit.decls), len(unit.comments))
    return unit
