"""
Helpers for writing unit dumps in tests, in the same JSON shape the front
end produces.
"""

import itertools


class DumpBuilder:
    def __init__(self, file="a.go", package="a"):
        self.file = file
        self.package = package
        self.types = {}
        self.decls = []
        self.comments = []
        self.errors = []
        self._type_ids = itertools.count(1)
        self._obj_ids = itertools.count(100)
        self._basics = {}

    def _add_type(self, raw):
        type_id = next(self._type_ids)
        self.types[str(type_id)] = raw
        return type_id

    def basic(self, name, size=None):
        if name not in self._basics:
            raw = {"kind": "basic", "name": name}
            if size is not None:
                raw["size"] = size
            self._basics[name] = self._add_type(raw)
        return self._basics[name]

    def struct(self, name, fields):
        return self._add_type(
            {
                "kind": "struct",
                "name": name,
                "package": self.package,
                "fields": [{"name": n, "type": t} for n, t in fields],
            }
        )

    def pointer(self, elem):
        return self._add_type({"kind": "pointer", "elem": elem})

    def slice(self, elem):
        return self._add_type({"kind": "slice", "elem": elem})

    def array(self, elem, length):
        return self._add_type({"kind": "array", "elem": elem, "len": length})

    def other(self, kind):
        return self._add_type({"kind": kind})

    def user_struct(self):
        """
        The 32-byte struct {ID int64; Name string; Age int32; Active bool}.
        """
        return self.struct(
            "User",
            [
                ("ID", self.basic("int64")),
                ("Name", self.basic("string")),
                ("Age", self.basic("int32")),
                ("Active", self.basic("bool")),
            ],
        )

    def large_struct(self):
        """
        Three 512-byte arrays: 1536 bytes.
        """
        block = self.array(self.basic("byte"), 512)
        return self.struct("Large", [("Field1", block), ("Field2", block), ("Field3", block)])

    def obj(self):
        return next(self._obj_ids)

    def comment(self, text, line):
        self.comments.append({"text": text, "line": line, "column": 1})

    def add(self, *decls):
        self.decls.extend(decls)
        return self

    def to_dict(self):
        return {
            "format": 1,
            "file": self.file,
            "package": self.package,
            "types": self.types,
            "comments": self.comments,
            "errors": self.errors,
            "decls": self.decls,
        }


def ident(name, obj=None, line=0):
    return {"kind": "Ident", "name": name, "obj": obj, "line": line, "column": 1}


def nil(line=0):
    return {"kind": "Nil", "line": line}


def lit(value, line=0):
    return {"kind": "BasicLit", "value": str(value), "line": line}


def type_ref(type_id, line=0, column=1):
    return {"kind": "TypeRef", "type": type_id, "line": line, "column": column}


def sel(x, name):
    return {"kind": "Selector", "x": x, "sel": name}


def index(x, i):
    return {"kind": "Index", "x": x, "index": i}


def star(x):
    return {"kind": "Star", "x": x}


def addr(x):
    return {"kind": "Unary", "op": "&", "x": x}


def binary(op, x, y):
    return {"kind": "Binary", "op": op, "x": x, "y": y}


def call(fun, *args):
    return {"kind": "Call", "fun": fun, "args": list(args)}


def composite(type_id, *elts, line=0):
    return {"kind": "CompositeLit", "type": type_ref(type_id, line), "elts": list(elts), "line": line}


def func_lit(body, results=()):
    return {"kind": "FuncLit", "results": [type_ref(r) for r in results], "body": body}


def make(type_id, *args, line=0):
    return call(ident("make"), type_ref(type_id, line), *args)


def ret(*results, line=0):
    return {"kind": "Return", "results": list(results), "line": line}


def assign(lhs, rhs, op="=", line=0):
    return {"kind": "Assign", "lhs": list(lhs), "rhs": list(rhs), "op": op, "line": line}


def define(lhs, rhs, line=0):
    return assign(lhs, rhs, op=":=", line=line)


def incdec(x, op="++", line=0):
    return {"kind": "IncDec", "x": x, "op": op, "line": line}


def expr_stmt(x, line=0):
    return {"kind": "ExprStmt", "x": x, "line": line}


def range_stmt(x, body=(), key=None, value=None, op=":=", line=0):
    return {"kind": "Range", "x": x, "body": list(body), "key": key, "value": value, "op": op, "line": line}


def if_stmt(cond, body, orelse=(), line=0):
    return {"kind": "If", "cond": cond, "body": body, "else": list(orelse), "line": line}


def var_spec(names, type_id=None, values=(), line=0):
    spec = {"kind": "VarSpec", "names": names, "values": list(values), "line": line}
    if type_id is not None:
        spec["type"] = type_ref(type_id, line, column=11)
    return spec


def var_stmt(names, type_id=None, values=(), line=0):
    return {"kind": "DeclStmt", "specs": [var_spec(names, type_id, values, line)], "line": line}


def gen_decl(*specs, line=0):
    return {"kind": "GenDecl", "specs": list(specs), "line": line}


def receiver(name, obj, type_id, line=0):
    return {"kind": "Receiver", "name": ident(name, obj, line) if name else None, "type": type_ref(type_id, line)}


def func(name, results=(), body=(), recv=None, line=1):
    decl = {
        "kind": "FuncDecl",
        "name": name,
        "results": [type_ref(r, line, column=20) for r in results],
        "body": list(body),
        "line": line,
        "column": 1,
    }
    if recv is not None:
        decl["recv"] = recv
    return decl
