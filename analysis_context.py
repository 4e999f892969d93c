import logging
from dataclasses import dataclass

from null_bearing_tracker import NullBearingTracker
from receiver_mutation_tracker import ReceiverMutationTracker
from return_null_tracker import ReturnNullTracker
from size_oracle import SizeOracle
from suppression_index import SuppressionIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisContext:
    """
    Everything the rules may consult for one unit. Built in full before
    any rule runs and never modified afterwards.
    """

    unit: object
    config: object
    sizes: SizeOracle
    return_nulls: ReturnNullTracker
    receiver_mutations: ReceiverMutationTracker
    null_bearing: NullBearingTracker
    suppressions: SuppressionIndex

    @classmethod
    def build(cls, unit, nodes, config, sizes=None, tool_name="pointless"):
        context = cls(
            unit=unit,
            config=config,
            sizes=sizes if sizes is not None else SizeOracle(),
            return_nulls=ReturnNullTracker().build(nodes),
            receiver_mutations=ReceiverMutationTracker().build(nodes),
            null_bearing=NullBearingTracker().build(nodes),
            suppressions=SuppressionIndex.from_comments(unit.comments, tool_name),
        )
        logger.debug(
            "%s: %d nil-returning, %d receiver-mutating, %d nil-bearing, %d suppressed lines",
            unit.file,
            len(context.return_nulls),
            len(context.receiver_mutations),
            len(context.null_bearing),
            len(context.suppressions),
        )
        return context
