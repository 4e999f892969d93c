from base_rule import BaseRule
from diagnostics import PatternCategory, sequence_message
from syntax_nodes import Assign, Call, CompositeLit, DeclStmt, GenDecl, Ident, TypeRef


def allocated_pointer_slice(expr):
    """
    Returns the []*T type written in make([]*T, ...) or []*T{...}, or None.
    """
    type_ref = None
    if isinstance(expr, Call):
        fun = expr.fun
        if isinstance(fun, Ident) and fun.name == "make" and expr.args:
            type_ref = expr.args[0]
    elif isinstance(expr, CompositeLit):
        type_ref = expr.type

    if not isinstance(type_ref, TypeRef) or type_ref.type is None:
        return None
    if type_ref.type.slice_pointee_struct() is None:
        return None
    return type_ref


class PointerSequenceVariableRule(BaseRule):
    """
    Suggests []T instead of []*T for variables holding small structs,
    unless elements of the variable are ever compared to or set to nil.
    Every qualifying variable of a group or multi-target statement is
    reported, so apply returns a list.
    """

    name = "sequence-variable"
    category = PatternCategory.POINTER_SEQUENCE_VARIABLE

    def matches(self, node):
        if isinstance(node, (DeclStmt, GenDecl)):
            return True
        return isinstance(node, Assign) and node.defines

    def apply(self, node, context):
        if isinstance(node, Assign):
            return self._check_candidates(zip(node.lhs, node.rhs), context)

        diagnostics = []
        for spec in node.specs:
            if spec.line != node.line and context.suppressions.is_suppressed(spec.line):
                continue
            if spec.type is not None:
                diagnostic = self._check_declared(spec, context)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)
            else:
                diagnostics.extend(self._check_candidates(zip(spec.names, spec.values), context))
        return diagnostics

    def _check_declared(self, spec, context):
        if spec.type.type is None:
            return None
        if any(context.null_bearing.is_null_bearing(name.binding) for name in spec.names):
            return None
        return self._report_slice(spec.type, context)

    def _check_candidates(self, pairs, context):
        diagnostics = []
        for target, value in pairs:
            type_ref = allocated_pointer_slice(value)
            if type_ref is None:
                continue
            if isinstance(target, Ident) and context.null_bearing.is_null_bearing(target.binding):
                continue
            diagnostic = self._report_slice(type_ref, context)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def _report_slice(self, type_ref, context):
        struct_type = type_ref.type.slice_pointee_struct()
        size = self.struct_size_within_threshold(struct_type, context)
        if size is None:
            return None
        return self.report(
            context,
            type_ref,
            sequence_message(struct_type.display_name(), size, context.config.threshold),
        )
