from pointer_receiver_rule import PointerReceiverRule
from pointer_return_rule import PointerReturnRule
from pointer_sequence_return_rule import PointerSequenceReturnRule
from pointer_sequence_variable_rule import PointerSequenceVariableRule
from pointless_config import PointlessConfig
from rule_engine import RuleEngine

ALL_RULES = {
    "return": PointerReturnRule,
    "receiver": PointerReceiverRule,
    "sequence-return": PointerSequenceReturnRule,
    "sequence-variable": PointerSequenceVariableRule,
}


def _normalized_rules(enabled_rules):
    if not enabled_rules:
        return list(ALL_RULES)
    return [name for name in ALL_RULES if name in set(enabled_rules)]


def build_engine(config=None, enabled_rules=None):
    if config is None:
        config = PointlessConfig()
    rules = [ALL_RULES[name]() for name in _normalized_rules(enabled_rules)]
    return RuleEngine(rules, config)
