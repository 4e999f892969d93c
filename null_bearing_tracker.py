from syntax_nodes import Assign, Binary, Ident, Index, Nil


def _indexed_binding(expr):
    """
    Returns the binding of v for an expression of the form v[i], or None.
    """
    if not isinstance(expr, Index):
        return None
    if not isinstance(expr.x, Ident):
        return None
    return expr.x.binding


class NullBearingTracker:
    """
    Records sequence variables whose elements are compared to nil
    (v[i] == nil, nil != v[i]) or set to nil (v[i] = nil).
    """

    def __init__(self):
        self._bindings = set()

    def _mark(self, binding):
        if binding is not None:
            self._bindings.add(binding)

    def build(self, nodes):
        for node in nodes:
            if isinstance(node, Binary):
                if node.op not in ("==", "!="):
                    continue
                if isinstance(node.y, Nil):
                    self._mark(_indexed_binding(node.x))
                if isinstance(node.x, Nil):
                    self._mark(_indexed_binding(node.y))
            elif isinstance(node, Assign):
                if node.op != "=":
                    continue
                for lhs, rhs in zip(node.lhs, node.rhs):
                    if isinstance(rhs, Nil):
                        self._mark(_indexed_binding(lhs))
        return self

    def is_null_bearing(self, binding):
        return binding is not None and binding in self._bindings

    def __len__(self):
        return len(self._bindings)
