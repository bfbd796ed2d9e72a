"""Search-index client

A small surface over :py:class:`~.elasticsearch.Elasticsearch`: only the
calls that the initializer and the rollover driver make. Errors raised by the client,
e.g. :py:exc:`~.elasticsearch.NotFoundError` or any other
:py:exc:`~.elasticsearch.ApiError`, are passed through untouched. Retrying is up to the
caller.
"""

import logging
from es_client.builder import Builder
from es_rollover.defaults.settings import REINDEX_TIMEOUT_PADDING
from es_rollover.exceptions import ClientException
from es_rollover.helpers.testers import verify_client_object

logger = logging.getLogger(__name__)


def get_client(configdict):
    """
    Build an :py:class:`~.elasticsearch.Elasticsearch` client with
    :py:class:`~.es_client.builder.Builder` and test the connection.

    :param configdict: ``{'elasticsearch': {'client': {...}, 'other_settings': {...}}}``

    :type configdict: dict

    :rtype: :py:class:`~.elasticsearch.Elasticsearch`
    """
    try:
        builder = Builder(configdict=configdict)
        builder.connect()
    except Exception as exc:
        raise ClientException(
            f'Unable to connect to Elasticsearch as configured: {exc}'
        ) from exc
    return builder.client


class IndexService:
    """Index, alias, reindex and rollover calls against one Elasticsearch cluster"""

    def __init__(self, client):
        """
        :param client: A client connection object

        :type client: :py:class:`~.elasticsearch.Elasticsearch`
        """
        verify_client_object(client)
        #: The :py:class:`~.elasticsearch.Elasticsearch` client object
        self.client = client

    def get_indices(self, pattern):
        """
        :param pattern: An index name, wildcard or multi-target pattern

        :returns: The names of the concrete indices ``pattern`` resolves to. Aliases
            resolve to the indices behind them.
        :rtype: list
        """
        return list(self.client.indices.get(index=pattern).keys())

    def all_indices(self):
        """
        :returns: The names of every open or closed index in the cluster
        :rtype: list
        """
        return list(
            self.client.indices.get(index='*', expand_wildcards='open,closed').keys()
        )

    def get_aliases(self, pattern):
        """
        :param pattern: An alias name or wildcard

        :returns: ``{index: {'aliases': {alias: {...}}}}`` for every index that has
            an alias matching ``pattern``
        :rtype: dict
        """
        return dict(self.client.indices.get_alias(name=pattern))

    def block_writes(self, index):
        """Set ``index.blocks.write`` on ``index``"""
        logger.debug('Setting index.blocks.write on %s', index)
        self.client.indices.put_settings(
            index=index, settings={'index.blocks.write': True}
        )

    def index_exists(self, index):
        """
        :returns: ``True`` if the ``HEAD`` probe for ``index`` succeeds
        :rtype: bool
        """
        return bool(self.client.indices.exists(index=index))

    def create_index(self, index):
        """Create ``index`` with the cluster's default settings and mappings"""
        self.client.indices.create(index=index)

    def reindex(
        self, source, dest, wait_for_active_shards=1, requests_per_second=-1, timeout=60
    ):
        """
        Copy every document of ``source`` into ``dest`` and wait for the result.

        :param source: The index to read from
        :param dest: The index to write to. Existing documents there are kept.
        :param wait_for_active_shards: Shard copies that must be active first
        :param requests_per_second: Throttle in sub-requests per second, ``-1`` for none
        :param timeout: Seconds Elasticsearch may spend on the request. The client
            waits ``REINDEX_TIMEOUT_PADDING`` seconds longer, so that the request times
            out on the Elasticsearch side, if possible.

        :type source: str
        :type dest: str
        :type wait_for_active_shards: int or str
        :type requests_per_second: float
        :type timeout: int

        :returns: The reindex response body
        :rtype: dict
        """
        response = self.client.options(
            request_timeout=timeout + REINDEX_TIMEOUT_PADDING
        ).reindex(
            source={'index': source},
            dest={'index': dest},
            wait_for_active_shards=wait_for_active_shards,
            requests_per_second=requests_per_second,
            timeout=f'{timeout}s',
            wait_for_completion=True,
        )
        return dict(response)

    def replace_index_with_alias(self, index, alias_to):
        """
        In a single :py:meth:`~.elasticsearch.client.IndicesClient.update_aliases`
        request, point a new alias named ``index`` at ``alias_to`` and delete the index
        ``index``. Writers never see ``index`` resolve to nothing.

        :param index: The index to replace. Its name becomes the alias.
        :param alias_to: The index the new alias points to
        """
        self.client.indices.update_aliases(
            actions=[
                {'add': {'index': alias_to, 'alias': index}},
                {'remove_index': {'index': index}},
            ]
        )

    def rollover(self, alias, conditions, dry_run=False):
        """
        :param alias: The alias to roll over
        :param conditions: Rollover conditions, e.g. ``{'max_age': '7d'}``. Meeting
            any one of them is enough.
        :param dry_run: Only evaluate the conditions

        :returns: The rollover response body
        :rtype: dict
        """
        return dict(
            self.client.indices.rollover(
                alias=alias, conditions=conditions, dry_run=dry_run
            )
        )

    def count(self, target):
        """
        :param target: An index or alias

        :returns: The number of documents in ``target``
        :rtype: int
        """
        return self.client.count(index=target)['count']
