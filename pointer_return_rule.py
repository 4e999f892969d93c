from base_rule import BaseRule
from diagnostics import PatternCategory
from syntax_nodes import FuncDecl


class PointerReturnRule(BaseRule):
    """
    Suggests returning a small struct by value instead of by pointer.
    Functions that can return nil keep their pointer.
    """

    name = "return"
    category = PatternCategory.POINTER_RETURN

    def matches(self, node):
        return isinstance(node, FuncDecl) and bool(node.results)

    def apply(self, node, context):
        if context.return_nulls.returns_null(node):
            return None

        for result in node.results:
            if result.type is None:
                continue
            struct_type = result.type.pointee_struct()
            size = self.struct_size_within_threshold(struct_type, context)
            if size is None:
                continue
            return self.report(
                context,
                result,
                f"consider returning value instead of pointer: {struct_type.display_name()} is {size} bytes "
                f"(threshold: {context.config.threshold} bytes)",
            )

        return None
