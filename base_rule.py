from diagnostics import Diagnostic


class BaseRule:
    name = ""
    category = None

    def matches(self, node):
        raise NotImplementedError("matches() must be implemented")

    def apply(self, node, context):
        raise NotImplementedError("apply() must be implemented")

    def struct_size_within_threshold(self, struct_type, context):
        """
        Returns the struct's size if it is small enough to pass by value,
        otherwise None.
        """
        if struct_type is None or not struct_type.is_struct():
            return None
        size = context.sizes.size_of(struct_type)
        if size > context.config.threshold:
            return None
        return size

    def report(self, context, position, message):
        return Diagnostic(
            file=context.unit.file,
            line=position.line,
            column=position.column,
            category=self.category,
            message=message,
        )
