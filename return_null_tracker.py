from syntax_nodes import FuncDecl, GenDecl, Nil, Return


class ReturnNullTracker:
    """
    Records which function declarations can return nil.

    A declaration is flagged on its first return statement that has nil as
    one of its direct results. Returns inside function literals count for
    the enclosing declaration.
    """

    def __init__(self):
        self._nil_returning = set()

    def build(self, nodes):
        current = None
        for node in nodes:
            if isinstance(node, FuncDecl):
                current = node
            elif isinstance(node, GenDecl):
                current = None
            elif isinstance(node, Return):
                if current is None or current in self._nil_returning:
                    continue
                if any(isinstance(result, Nil) for result in node.results):
                    self._nil_returning.add(current)
        return self

    def returns_null(self, decl):
        return decl in self._nil_returning

    def __len__(self):
        return len(self._nil_returning)
