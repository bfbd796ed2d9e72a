"""Helper utilities

The kind that don't fit in testers or getters
"""

import traceback
from elasticsearch8 import ApiError
from es_rollover.classdef import ItemResult


def format_error(error):
    """
    :param error: The exception to describe

    :type error: :py:exc:`Exception`

    :returns: Log context for ``error``: its message and backtrace, plus the HTTP
        ``status`` when Elasticsearch answered with an error response.
    :rtype: dict
    """
    context = {
        'error': {
            'message': str(error),
            'backtrace': ''.join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
        }
    }
    if isinstance(error, ApiError):
        status = getattr(error.meta, 'status', None)
        if status is not None:
            context['status'] = status
    return context


def pick(body, keys):
    """
    :param body: An API response body
    :param keys: The keys worth keeping

    :type body: dict
    :type keys: list

    :returns: Only the entries of ``body`` named in ``keys``
    :rtype: dict
    """
    return {key: body[key] for key in keys if key in body}


def isolate(name, func, *args, **kwargs):
    """
    Run ``func`` for a single batch item so that no exception escapes.

    :param name: The index or alias the item is about
    :param func: The per-item function. Whatever dict it returns ends up in
        :py:attr:`~.es_rollover.classdef.ItemResult.details`

    :type name: str
    :type func: callable

    :returns: The outcome of the item
    :rtype: :py:class:`~.es_rollover.classdef.ItemResult`
    """
    try:
        details = func(*args, **kwargs)
    # pylint: disable=broad-except
    except Exception as err:
        return ItemResult(name=name, error=format_error(err))
    return ItemResult(name=name, details=details or {})
