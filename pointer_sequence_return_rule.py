from base_rule import BaseRule
from diagnostics import PatternCategory, sequence_message
from syntax_nodes import FuncDecl


class PointerSequenceReturnRule(BaseRule):
    """
    Suggests returning []T instead of []*T for small structs.
    """

    name = "sequence-return"
    category = PatternCategory.POINTER_SEQUENCE_RETURN

    def matches(self, node):
        return isinstance(node, FuncDecl) and bool(node.results)

    def apply(self, node, context):
        # A nil return may be the whole slice; that still needs a nil-able result.
        if context.return_nulls.returns_null(node):
            return None

        for result in node.results:
            if result.type is None:
                continue
            struct_type = result.type.slice_pointee_struct()
            size = self.struct_size_within_threshold(struct_type, context)
            if size is None:
                continue
            return self.report(
                context,
                result,
                sequence_message(struct_type.display_name(), size, context.config.threshold),
            )

        return None
