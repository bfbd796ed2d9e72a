"""Rollover Option Schema definitions"""

from voluptuous import All, Any, Coerce, Match, Optional, Range

# pylint: disable=E1120

#: Elasticsearch time units, see ``common-options.html#time-units``
TIME_UNIT = r'^\d+(nanos|micros|ms|s|m|h|d)$'
#: Elasticsearch byte size units, see ``common-options.html#byte-units``
BYTE_UNIT = r'(?i)^\d+(\.\d+)?(b|kb|mb|gb|tb|pb)$'


def max_age():
    """
    :returns:
        {Optional('max_age', default='7d'): All(str, Match(TIME_UNIT))}
    """
    return {
        Optional('max_age', default='7d'): All(  # type: ignore
            str, Match(TIME_UNIT, msg='max_age must be an Elasticsearch time unit')
        )
    }


def max_size():
    """
    :returns:
        {Optional('max_size', default='50gb'): All(str, Match(BYTE_UNIT))}
    """
    return {
        Optional('max_size', default='50gb'): All(  # type: ignore
            str, Match(BYTE_UNIT, msg='max_size must be an Elasticsearch byte size')
        )
    }


def reindex_timeout():
    """
    :returns:
        {Optional('reindex_timeout', default=3600):
            All(Coerce(int), Range(min=1))}
    """
    return {
        Optional('reindex_timeout', default=3600): All(  # type: ignore
            Coerce(int), Range(min=1)
        )
    }


def reindex_wait_for_active_shards():
    """
    :returns:
        {Optional('reindex_wait_for_active_shards', default='all'):
            Any('all', All(Coerce(int), Range(min=1)))}
    """
    return {
        Optional('reindex_wait_for_active_shards', default='all'): Any(  # type: ignore
            'all', All(Coerce(int), Range(min=1))
        )
    }


def reindex_requests_per_second():
    """
    :returns:
        {Optional('reindex_requests_per_second', default=500):
            All(Coerce(float), Any(-1.0, Range(min=0, min_included=False)))}

    ``-1`` disables throttling
    """
    return {
        Optional('reindex_requests_per_second', default=500): All(  # type: ignore
            Coerce(float), Any(-1.0, Range(min=0, min_included=False))
        )
    }
