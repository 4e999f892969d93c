import logging

from analysis_context import AnalysisContext
from ast_walker import walk_unit
from exclusion_filter import ExclusionFilter
from size_oracle import SizeOracle

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Applies a collection of rules to the flattened nodes of one unit
    and collects the diagnostics they produce.
    """

    def __init__(self, rules, config, tool_name="pointless"):
        self.rules = rules
        self.config = config
        self.tool_name = tool_name
        self.exclusions = ExclusionFilter(config.exclude)

    def run(self, unit):
        if self.exclusions.should_exclude(unit.file):
            logger.info("skipping excluded file %s", unit.file)
            return []

        nodes = walk_unit(unit)
        context = AnalysisContext.build(unit, nodes, self.config, sizes=SizeOracle(), tool_name=self.tool_name)

        diagnostics = []
        for node in nodes:
            matching = [rule for rule in self.rules if rule.matches(node)]
            if not matching:
                continue

            # Skip if a nolint comment covers the declaration line
            if context.suppressions.is_suppressed(node.line):
                continue

            for rule in matching:
                result = rule.apply(node, context)

                # Only keep meaningful output
                if isinstance(result, list):
                    diagnostics.extend(result)
                elif result is not None:
                    diagnostics.append(result)

        return sorted(diagnostics, key=lambda d: (d.line, d.column))
