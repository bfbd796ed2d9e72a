"""Utilities/Helpers for defaults and schemas"""

from os import path
from es_rollover.exceptions import RolloverException

ROLLOVER_DOCS = 'https://www.elastic.co/guide/en/elasticsearch/reference'

#: The index pattern used by both uninitialized indices and by aliases pointing
#: to already initialized indices.
ES_INDEX_PATTERN = '*-*-log'

#: The regular expression equivalent of :py:data:`ES_INDEX_PATTERN`. This is what
#: decides whether an index or alias is managed by es-rollover.
REGEX_INDEX_PATTERN = r'^.*-.*-log$'

#: Width of the zero-padded numeric suffix of a rollover index
SUFFIX_DIGITS = 6

#: Keys of the reindex API response worth logging
REINDEX_RESULT_CONTEXT = ['timed_out', 'total', 'created', 'updated', 'took']

#: Keys of the rollover API response worth logging
ROLLOVER_RESULT_CONTEXT = ['old_index', 'new_index', 'rolled_over', 'acknowledged']

#: Seconds added to the reindex timeout for the client side of the request, so that
#: the request times out on the Elasticsearch side, if possible
REINDEX_TIMEOUT_PADDING = 10

# Click specifics


def footer(version, tail='indices-rollover-index.html'):
    """
    Generate a footer linking to the Elasticsearch rollover docs

    :param version: The es-rollover version

    :type version: str

    :returns: An epilog/footer suitable for Click
    """
    if not isinstance(version, str):
        raise RolloverException(f'Parameter version is not a string: {type(version)}')
    return f'es-rollover {version}. Learn more at {ROLLOVER_DOCS}/current/{tail}'


# Default Config file location
def default_config_file():
    """
    :returns: The default configuration file location:
        path.join(path.expanduser('~'), '.es_rollover', 'es_rollover.yml')
    """
    default = path.join(path.expanduser('~'), '.es_rollover', 'es_rollover.yml')
    if path.isfile(default):
        return default
    return None


#: Used when neither the command-line, the environment nor the YAML file names a host
DEFAULT_ELASTICSEARCH_URL = 'http://localhost:9200'

#: Client request timeout in seconds, unless configured otherwise
DEFAULT_REQUEST_TIMEOUT = 30
