"""Utility functions that test things"""

import logging
import re
from elasticsearch8 import Elasticsearch
from es_rollover.defaults.settings import REGEX_INDEX_PATTERN, SUFFIX_DIGITS


def is_managed(name):
    """
    :param name: An index or alias name

    :type name: str

    :returns: ``True`` if ``name`` matches the ``<segment>-<segment>-log`` pattern
        that decides what es-rollover manages, else ``False``
    :rtype: bool
    """
    return re.match(REGEX_INDEX_PATTERN, name) is not None


def is_suffixed_for(name, raw_name):
    """
    :param name: An index name
    :param raw_name: The raw (unsuffixed) index or alias name

    :type name: str
    :type raw_name: str

    :returns: ``True`` if ``name`` is ``raw_name`` followed by a hyphen and a
        zero-padded counter, e.g. ``acct-svc-log-000002`` for ``acct-svc-log``
    :rtype: bool
    """
    pattern = rf'^{re.escape(raw_name)}-\d{{{SUFFIX_DIGITS}}}'
    return re.match(pattern, name) is not None


def verify_client_object(test):
    """
    :param test: The variable or object to test

    :type test: :py:class:`~.elasticsearch.Elasticsearch`

    :returns: ``None`` if ``test`` is a proper :py:class:`~.elasticsearch.Elasticsearch`
        client object, else raise a :py:exc:`TypeError` exception.
    :rtype: None
    """
    logger = logging.getLogger(__name__)
    # Ignore mock type for testing
    if str(type(test)) == "<class 'unittest.mock.Mock'>":
        pass
    elif not isinstance(test, Elasticsearch):
        msg = f'Not a valid client object. Type: {type(test)} was passed'
        logger.error(msg)
        raise TypeError(msg)
