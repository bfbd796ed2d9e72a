"""Configuration utilty functions"""
import logging
import click
from es_client.exceptions import FailedValidation
from es_client.helpers.schemacheck import SchemaCheck
from es_client.helpers.utils import prune_nones, ensure_list
from es_rollover.classdef import RolloverSettings
from es_rollover.defaults.logging_defaults import config_logging
from es_rollover.exceptions import ConfigurationError
from es_rollover.logtools import LogInfo, Blacklist
from es_rollover.validators import options

def _validated(data, schema, test_what, location):
    try:
        return SchemaCheck(data, schema, test_what, location).result()
    except FailedValidation as exc:
        raise ConfigurationError(f'{test_what} is invalid: {exc}') from exc

def _block(config, key):
    """Return the pruned ``key`` block of ``config``, or an empty dict"""
    if not isinstance(config, dict):
        click.echo(
            f'Must supply configuration information as a dictionary. '
            f'You supplied: "{config}" which is "{type(config)}". '
            f'Using default {key} values.'
        )
        return {}
    if not config.get(key):
        return {}
    return prune_nones(config[key])

def check_logging_config(config):
    """
    Extract the top-level key ``logging`` from ``config`` and validate its values
    with :py:func:`~.es_rollover.defaults.logging_defaults.config_logging`.

    :param config: Configuration data, with an optional ``logging`` key

    :type config: dict

    :returns: The validated logging configuration, with defaults filled in.
    """
    return _validated(
        _block(config, 'logging'), config_logging(), 'Logging Configuration', 'logging')

def check_rollover_config(config):
    """
    Extract the top-level key ``rollover`` from ``config`` and validate its values
    with :py:func:`~.es_rollover.validators.options.get_schema`.

    :param config: Configuration data, with an optional ``rollover`` key

    :type config: dict

    :returns: The validated settings
    :rtype: :py:class:`~.es_rollover.classdef.RolloverSettings`
    """
    valid = _validated(
        _block(config, 'rollover'), options.get_schema(), 'Rollover Configuration',
        'rollover')
    return RolloverSettings(**valid)

def set_logging(log_opts):
    """Configure global logging options

    :param log_opts: Logging configuration data

    :type log_opts: dict

    :rtype: None
    """
    loginfo = LogInfo(log_opts)
    logging.root.addHandler(loginfo.handler)
    logging.root.setLevel(loginfo.numeric_log_level)
    # Set up NullHandler() to handle nested elasticsearch8.trace Logger
    # instance in elasticsearch python client
    logging.getLogger('elasticsearch8.trace').addHandler(logging.NullHandler())
    if log_opts.get('blacklist'):
        for bl_entry in ensure_list(log_opts['blacklist']):
            loginfo.handler.addFilter(Blacklist(bl_entry))
