"""Main CLI for es-rollover"""

import sys
import logging
import click
from es_client.helpers.schemacheck import password_filter
from es_client.helpers.utils import get_yaml, prune_nones
from es_rollover.actions import CLASS_MAP
from es_rollover.config_utils import (
    check_logging_config,
    check_rollover_config,
    set_logging,
)
from es_rollover.defaults.logging_defaults import LOGFORMATS, LOGLEVELS
from es_rollover.defaults.settings import (
    DEFAULT_ELASTICSEARCH_URL,
    DEFAULT_REQUEST_TIMEOUT,
    default_config_file,
    footer,
)
from es_rollover.exceptions import (
    ClientException,
    ConfigurationError,
    LoggingException,
)
from es_rollover.indexservice import IndexService, get_client
from es_rollover._version import __version__

# pylint: disable=R0913, R0914, W0613, W0718


def get_config(config_file):
    """
    :param config_file: Path to a YAML configuration file, or ``None``

    :type config_file: str

    :returns: The contents of ``config_file``, or of the default configuration file
        if there is one. An empty dict otherwise.
    :rtype: dict

    es_client's ``get_config`` reads the file name from its own ``--config`` click
    parameter. Here the file is read before the es-rollover options are merged in.
    """
    filename = config_file or default_config_file()
    if not filename:
        return {}
    try:
        config = get_yaml(filename)
    except Exception as exc:
        raise ConfigurationError(f'Unable to read YAML file {filename}: {exc}') from exc
    return config if isinstance(config, dict) else {}


def override(config, key, values):
    """
    :returns: A copy of ``config`` where the ``key`` block is updated with every value
        in ``values`` that is not ``None``
    :rtype: dict
    """
    retval = dict(config)
    block = config.get(key)
    retval[key] = {**(block if isinstance(block, dict) else {}), **prune_nones(values)}
    return retval


def generate_configdict(config, elasticsearch_url=None, request_timeout=None):
    """
    Build the :py:class:`~.es_client.builder.Builder` configuration dictionary from
    the ``elasticsearch`` block of ``config``. ``elasticsearch_url`` and
    ``request_timeout`` win over whatever the block says.

    es_client's ``generate_configdict`` only knows its own option names (``--hosts``
    and friends). ``--elasticsearch_url`` and the ``ELASTICSEARCH_URL`` and
    ``REQUEST_TIMEOUT`` environment variables have to be mapped here.

    :rtype: dict
    """
    es_block = config.get('elasticsearch') or {}
    client = prune_nones(dict(es_block.get('client') or {}))
    if elasticsearch_url:
        client['hosts'] = [elasticsearch_url]
    if request_timeout is not None:
        client['request_timeout'] = request_timeout
    client.setdefault('hosts', [DEFAULT_ELASTICSEARCH_URL])
    client.setdefault('request_timeout', DEFAULT_REQUEST_TIMEOUT)
    return {
        'elasticsearch': {
            'client': client,
            'other_settings': prune_nones(dict(es_block.get('other_settings') or {})),
        }
    }


def get_service(ctx):
    """
    Create the :py:class:`~.es_rollover.indexservice.IndexService` on first use and
    keep it in ``ctx.obj`` for any following action.

    Exits with status 1 if no client connection can be made.
    """
    if ctx.obj.get('service') is None:
        logger = logging.getLogger(__name__)
        logger.info('Creating client object and testing connection')
        try:
            client = get_client(ctx.obj['configdict'])
        except ClientException as exc:
            # No matter where logging is set to go, make sure these reach the CLI
            click.echo('Unable to establish client connection to Elasticsearch!')
            click.echo(f'Exception: {exc}')
            sys.exit(1)
        ctx.obj['service'] = IndexService(client)
    return ctx.obj['service']


def process_action(ctx, name):
    """
    Run the batch operation ``name`` from
    :py:data:`~.es_rollover.actions.CLASS_MAP`, or only log what it would do if
    ``--dry-run`` was given.

    Failures of single indices or aliases are logged by the operation itself. Anything
    that escapes it, e.g. a failed discovery request, ends the program with exit
    status 1.
    """
    logger = logging.getLogger(__name__)
    action = CLASS_MAP[name](get_service(ctx), ctx.obj['settings'])
    logger.info('Running "%s"', name)
    try:
        if ctx.obj['dry_run']:
            action.do_dry_run()
        else:
            action.do_action()
    except Exception as err:
        logger.error(
            'Failed to complete action: %s.  %s: %s', name, type(err), err,
            extra={'context': {'action': name}}
        )
        sys.exit(1)
    logger.info('Action "%s" completed.', name)


@click.group(
    invoke_without_command=True,
    context_settings={'help_option_names': ['-h', '--help']},
    epilog=footer(__version__),
)
@click.option(
    '--config', type=click.Path(exists=True),
    help='Path to configuration file. Default: ~/.es_rollover/es_rollover.yml'
)
@click.option(
    '--elasticsearch_url', envvar='ELASTICSEARCH_URL',
    help=f'Elasticsearch URL. Default: {DEFAULT_ELASTICSEARCH_URL}'
)
@click.option(
    '--request_timeout', envvar='REQUEST_TIMEOUT', type=float,
    help=f'Client request timeout in seconds. Default: {DEFAULT_REQUEST_TIMEOUT}'
)
@click.option('--max_age', envvar='MAX_AGE', help='max_age rollover condition, e.g. 7d')
@click.option(
    '--max_size', envvar='MAX_SIZE', help='max_size rollover condition, e.g. 50gb'
)
@click.option(
    '--reindex_timeout', envvar='REINDEX_TIMEOUT_SECONDS',
    help='Seconds a single reindex may take'
)
@click.option(
    '--reindex_wait_for_active_shards', envvar='REINDEX_WAIT_FOR_ACTIVE_SHARDS',
    help='Active shard copies required before reindexing. A number or "all"'
)
@click.option(
    '--reindex_requests_per_second', envvar='REINDEX_REQUESTS_PER_SECOND',
    help='Reindex throttle in sub-requests per second. -1 disables throttling'
)
@click.option(
    '--loglevel', envvar='LOG_LEVEL',
    type=click.Choice(LOGLEVELS, case_sensitive=False),
    help='Log level'
)
@click.option('--logfile', envvar='LOG_FILE', help='Log file. Default: stdout')
@click.option(
    '--logformat', envvar='LOG_FORMAT', type=click.Choice(LOGFORMATS), help='Log format'
)
@click.option('--dry-run', is_flag=True, help='Do not perform any changes.')
@click.version_option(__version__, '-v', '--version', prog_name='es_rollover')
@click.pass_context
def cli(
    ctx,
    config,
    elasticsearch_url,
    request_timeout,
    max_age,
    max_size,
    reindex_timeout,
    reindex_wait_for_active_shards,
    reindex_requests_per_second,
    loglevel,
    logfile,
    logformat,
    dry_run,
):
    """
    Rollover initialization and rollover for *-*-log indices

    Without a command, "run" is performed: initialize, then rollover.

    The default $HOME/.es_rollover/es_rollover.yml configuration file (--config)
    can be used but is not needed.

    Command-line settings and environment variables will always override YAML
    configuration settings.
    """
    ctx.obj = {'dry_run': dry_run}
    try:
        raw = get_config(config)
        raw = override(
            raw, 'logging',
            {'loglevel': loglevel, 'logfile': logfile, 'logformat': logformat}
        )
        raw = override(
            raw, 'rollover',
            {
                'max_age': max_age,
                'max_size': max_size,
                'reindex_timeout': reindex_timeout,
                'reindex_wait_for_active_shards': reindex_wait_for_active_shards,
                'reindex_requests_per_second': reindex_requests_per_second,
            }
        )
        log_opts = check_logging_config(raw)
        set_logging(log_opts)
        ctx.obj['settings'] = check_rollover_config(raw)
    except (ConfigurationError, LoggingException) as exc:
        click.echo(f'Invalid configuration: {exc}')
        sys.exit(1)
    ctx.obj['configdict'] = generate_configdict(raw, elasticsearch_url, request_timeout)
    logger = logging.getLogger(__name__)
    logger.debug('Client configuration: %s', password_filter(ctx.obj['configdict']))
    logger.debug('Rollover settings: %s', ctx.obj['settings'])
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_context
def initialize(ctx):
    """
    Turn raw *-*-log indices into aliases of -NNNNNN suffixed indices
    """
    process_action(ctx, 'initialize')


@cli.command()
@click.pass_context
def rollover(ctx):
    """
    Roll over every *-*-log alias past max_age or max_size
    """
    process_action(ctx, 'rollover')


@cli.command()
@click.pass_context
def run(ctx):
    """
    Initialize, then rollover
    """
    process_action(ctx, 'initialize')
    process_action(ctx, 'rollover')
