"""Utility functions that get things"""

import logging
from es_rollover.defaults.settings import SUFFIX_DIGITS
from es_rollover.exceptions import AliasIntegrityError
from es_rollover.helpers.testers import is_managed, is_suffixed_for


def suffixed_name(raw_name, counter=1):
    """
    :param raw_name: The raw index name, e.g. ``acct-svc-log``
    :param counter: The 1-based position in the rollover chain

    :type raw_name: str
    :type counter: int

    :returns: ``raw_name`` with a zero-padded counter suffix, e.g.
        ``acct-svc-log-000001``. Zero padding is used to ensure that alphabetical
        ordering equals numerical ordering.
    :rtype: str
    """
    return f'{raw_name}-{counter:0{SUFFIX_DIGITS}d}'


def suffix_search_pattern(raw_name):
    """
    :param raw_name: The raw index name

    :type raw_name: str

    :returns: A multi-target pattern matching ``raw_name-*`` but not date-stamped
        names like ``raw_name-2019.01.01``
    :rtype: str
    """
    return f'{raw_name}-*,-{raw_name}-*.*.*'


def rollover_name_for(raw_name, existing):
    """
    Pick the index that ``raw_name`` will be reindexed into.

    There may already be indices with a counter suffix (e.g. from a snapshot
    restore). If so, use the largest (i.e. latest) one. Otherwise start from 1.

    :param raw_name: The raw index name
    :param existing: Index names found with :py:func:`suffix_search_pattern`

    :type raw_name: str
    :type existing: list

    :rtype: str
    """
    candidates = sorted(idx for idx in existing if is_suffixed_for(idx, raw_name))
    if candidates:
        return candidates[-1]
    return suffixed_name(raw_name)


def owning_alias(index, aliases):
    """
    :param index: The index the aliases point to
    :param aliases: Every alias name on ``index``

    :type index: str
    :type aliases: list

    :returns: The single alias in ``aliases`` that es-rollover manages
    :rtype: str

    Raises :py:exc:`~.es_rollover.exceptions.AliasIntegrityError` if there is not
    exactly one. A rollover chain needs one unambiguous name, so nothing is guessed.
    """
    logger = logging.getLogger(__name__)
    all_aliases = list(aliases)
    matching_aliases = [name for name in all_aliases if is_managed(name)]
    if len(matching_aliases) != 1:
        logger.error(
            'Expected exactly one matching alias on index %s. All aliases: %s, '
            'matching aliases: %s', index, all_aliases, matching_aliases,
            extra={'context': {
                'index': index,
                'all_aliases': all_aliases,
                'matching_aliases': matching_aliases,
            }},
        )
        raise AliasIntegrityError(
            f'Expected exactly one matching alias on index {index}, '
            f'found {len(matching_aliases)}: {matching_aliases}'
        )
    return matching_aliases[0]
