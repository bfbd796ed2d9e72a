"""Use __init__ to make these not need to be nested under lowercase.Capital"""
from es_rollover.actions.initialize import InitializeIndices
from es_rollover.actions.rollover import RollIndicesOver

CLASS_MAP = {
    'initialize': InitializeIndices,
    'rollover': RollIndicesOver,
}
