from syntax_nodes import Assign, FuncDecl, GenDecl, Ident, IncDec, Index, Range, Selector, Star


def refers_to_binding(expr, binding):
    """
    Checks if an expression is the given binding, or a field, element or
    dereference path rooted at it.
    """
    while isinstance(expr, (Selector, Index, Star)):
        expr = expr.x
    return isinstance(expr, Ident) and expr.binding is not None and expr.binding == binding


def receiver_binding(decl):
    receiver = decl.receiver
    if receiver is None or receiver.name is None:
        return None
    # The blank receiver can never be referenced.
    if receiver.name.name == "_":
        return None
    return receiver.name.binding


class ReceiverMutationTracker:
    """
    Records which methods write to anything reachable from their receiver.
    """

    def __init__(self):
        self._mutating = set()

    def build(self, nodes):
        current = None
        binding = None
        for node in nodes:
            if isinstance(node, FuncDecl):
                current = node
                binding = receiver_binding(node)
            elif isinstance(node, GenDecl):
                current = None
                binding = None
            elif binding is None or current in self._mutating:
                continue
            elif isinstance(node, Assign):
                if any(refers_to_binding(lhs, binding) for lhs in node.lhs):
                    self._mutating.add(current)
            elif isinstance(node, IncDec):
                if refers_to_binding(node.x, binding):
                    self._mutating.add(current)
            elif isinstance(node, Range) and node.op == "=":
                # for s.key, s.value = range ... stores into the receiver
                if any(refers_to_binding(target, binding) for target in (node.key, node.value)):
                    self._mutating.add(current)
        return self

    def mutates_receiver(self, decl):
        return decl in self._mutating

    def __len__(self):
        return len(self._mutating)
