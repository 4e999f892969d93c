import logging

from syntax_nodes import (
    Assign,
    BasicLit,
    Binary,
    Block,
    Call,
    CaseClause,
    CompositeLit,
    DeclStmt,
    ExprStmt,
    For,
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
    TypeRef,
    Unary,
    VarSpec,
)

logger = logging.getLogger(__name__)


def iter_children(node):
    """
    Yields the direct syntax children of a node in source order.
    """
    match node:
        case Ident() | Nil() | BasicLit() | TypeRef():
            return
        case Selector(x=x) | Star(x=x) | Unary(x=x):
            yield x
        case Index(x=x, index=index):
            yield x
            yield index
        case Binary(x=x, y=y):
            yield x
            yield y
        case Call(fun=fun, args=args):
            yield fun
            yield from args
        case CompositeLit(type=type_ref, elts=elts):
            if type_ref is not None:
                yield type_ref
            yield from elts
        case FuncLit(results=results, body=body):
            yield from results
            yield from body
        case Assign(lhs=lhs, rhs=rhs):
            yield from lhs
            yield from rhs
        case IncDec(x=x) | ExprStmt(x=x):
            yield x
        case Return(results=results):
            yield from results
        case VarSpec(names=names, type=type_ref, values=values):
            yield from names
            if type_ref is not None:
                yield type_ref
            yield from values
        case DeclStmt(specs=specs) | GenDecl(specs=specs):
            yield from specs
        case Block(stmts=stmts):
            yield from stmts
        case If(init=init, cond=cond, body=body, orelse=orelse):
            if init is not None:
                yield init
            yield cond
            yield from body
            yield from orelse
        case For(init=init, cond=cond, post=post, body=body):
            for part in (init, cond, post):
                if part is not None:
                    yield part
            yield from body
        case Range(key=key, value=value, x=x, body=body):
            for part in (key, value):
                if part is not None:
                    yield part
            yield x
            yield from body
        case Switch(init=init, tag=tag, cases=cases):
            for part in (init, tag):
                if part is not None:
                    yield part
            yield from cases
        case CaseClause(exprs=exprs, body=body):
            yield from exprs
            yield from body
        case Receiver(name=name, type=type_ref):
            if name is not None:
                yield name
            yield type_ref
        case FuncDecl(receiver=receiver, results=results, body=body):
            if receiver is not None:
                yield receiver
            yield from results
            yield from body
        case _:
            raise TypeError(f"not a syntax node: {type(node).__name__}")


def walk_ast(node, nodes):
    """
    Recursively walks a syntax node and collects it and all of its
    descendants into a flat preorder list for the rule engine.
    """
    nodes.append(node)

    for child in iter_children(node):
        walk_ast(child, nodes)

    return node


def walk_unit(unit):
    nodes = []
    for decl in unit.decls:
        walk_ast(decl, nodes)
    logger.debug("%s: %d nodes", unit.file, len(nodes))
    return nodes
