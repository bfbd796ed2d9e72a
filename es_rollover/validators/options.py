"""Set up voluptuous Schema defaults for the rollover settings"""
from voluptuous import Schema
from es_rollover.defaults import option_defaults

def rollover_options():
    """
    :returns: A :py:class:`list` of the
        :py:class:`~.voluptuous.schema_builder.Optional` options from
        :py:mod:`~.es_rollover.defaults.option_defaults`, defining acceptable values
        for the ``rollover`` configuration block
    :rtype: list
    """
    return [
        option_defaults.max_age(),
        option_defaults.max_size(),
        option_defaults.reindex_timeout(),
        option_defaults.reindex_wait_for_active_shards(),
        option_defaults.reindex_requests_per_second(),
    ]

def get_schema():
    """
    :returns: The ``rollover`` configuration block schema, built from
        :py:func:`rollover_options`
    :rtype: :py:class:`~.voluptuous.schema_builder.Schema`
    """
    options = {}
    for option in rollover_options():
        options.update(option)
    return Schema(options)
