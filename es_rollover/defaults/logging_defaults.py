"""Logging option schemas with their defaults"""
from voluptuous import All, Any, Coerce, Optional, Schema, Upper

#: Names accepted by ``logging.getLevelName``
LOGLEVELS = ['NOTSET', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

#: ``default`` is plain text. ``json`` and ``logstash`` are the same JSON lines.
LOGFORMATS = ['default', 'json', 'logstash', 'ecs']

#: Loggers too chatty to be worth showing at INFO
BLACKLIST = ['elastic_transport', 'urllib3']

# pylint: disable=E1120

def loglevel():
    """
    :returns: {Optional('loglevel', default='INFO'): Any(*LOGLEVELS, 0-50 by tens)}

    Level names are matched in any case and returned upper-cased.
    """
    return {
        Optional('loglevel', default='INFO'): Any(
            All(str, Upper, Any(*LOGLEVELS)),
            All(Coerce(int), Any(0, 10, 20, 30, 40, 50)),
        )
    }

def logfile():
    """
    :returns: {Optional('logfile', default=None): Any(None, str)}

    ``None`` means stdout
    """
    return {Optional('logfile', default=None): Any(None, str)}

def logformat():
    """
    :returns: {Optional('logformat', default='default'): Any(*LOGFORMATS)}
    """
    return {Optional('logformat', default='default'): Any(*LOGFORMATS)}

def blacklist():
    """
    :returns: {Optional('blacklist', default=BLACKLIST): Any(None, list)}
    """
    return {Optional('blacklist', default=BLACKLIST): Any(None, list)}

def config_logging():
    """
    Logging schema with defaults:

    .. code-block:: yaml

        logging:
          loglevel: INFO
          logfile: None
          logformat: default
          blacklist: ['elastic_transport', 'urllib3']

    :rtype: :py:class:`~.voluptuous.schema_builder.Schema`
    """
    schema = {}
    for option in (loglevel(), logfile(), logformat(), blacklist()):
        schema.update(option)
    return Schema(schema)
