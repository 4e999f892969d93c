from base_rule import BaseRule
from diagnostics import PatternCategory
from syntax_nodes import FuncDecl


class PointerReceiverRule(BaseRule):
    """
    Suggests a value receiver for methods on small structs that never
    mutate anything reachable from the receiver.
    """

    name = "receiver"
    category = PatternCategory.POINTER_RECEIVER

    def matches(self, node):
        return isinstance(node, FuncDecl) and node.receiver is not None

    def apply(self, node, context):
        receiver = node.receiver
        if not receiver.is_pointer:
            return None

        if context.receiver_mutations.mutates_receiver(node):
            return None

        struct_type = receiver.type.type.pointee_struct()
        size = self.struct_size_within_threshold(struct_type, context)
        if size is None:
            return None

        return self.report(
            context,
            node,
            f"consider using value receiver: {struct_type.display_name()} is {size} bytes "
            f"(threshold: {context.config.threshold} bytes) and method doesn't mutate receiver",
        )
