"""Initialize indices action class"""
import logging
from es_rollover.defaults.settings import ES_INDEX_PATTERN, REINDEX_RESULT_CONTEXT
from es_rollover.helpers.getters import rollover_name_for, suffix_search_pattern
from es_rollover.helpers.testers import is_managed
from es_rollover.helpers.utils import format_error, isolate, pick
from es_rollover.indexservice import IndexService


class InitializeIndices:
    """
    Turn every raw ``<segment>-<segment>-log`` index into a rollover chain: the raw
    name becomes an alias in front of a ``-NNNNNN`` suffixed index holding the same
    documents.
    """

    def __init__(self, service, settings):
        """
        :param service: The search-index client
        :param settings: Reindex throttling and timeout values

        :type service: :py:class:`~.es_rollover.indexservice.IndexService`
        :type settings: :py:class:`~.es_rollover.classdef.RolloverSettings`
        """
        if not isinstance(service, IndexService):
            raise TypeError(f'Not a valid IndexService object. Type: {type(service)}')
        self.loggit = logging.getLogger('es_rollover.actions.initialize')
        #: Object attribute that gets the value of param ``service``.
        self.service = service
        #: Object attribute that gets the value of param ``settings``.
        self.settings = settings
        #: One :py:class:`~.es_rollover.classdef.ItemResult` per raw index handled
        #: by the latest run
        self.results = []

    def fetch_uninitialized_indices(self):
        """
        :returns: The raw indices matching the managed pattern. Aliases of already
            initialized chains resolve to suffixed names, which do not match.
        :rtype: list
        """
        return [
            idx for idx in self.service.get_indices(ES_INDEX_PATTERN) if is_managed(idx)
        ]

    def disable_writes(self, index):
        """Freeze ``index`` so nothing is written to it while it is being copied"""
        self.loggit.info(
            'Disabling writes for index %s', index, extra={'context': {'index': index}}
        )
        self.service.block_writes(index)

    def rollover_name_for(self, index):
        """
        :returns: The highest existing ``index-NNNNNN`` index, or ``index-000001``
        :rtype: str
        """
        existing = self.service.get_indices(suffix_search_pattern(index))
        return rollover_name_for(index, existing)

    def create_index_if_missing(self, index):
        """Create ``index`` unless the ``HEAD`` probe finds it"""
        self.loggit.info(
            'Checking if index %s already exists.', index,
            extra={'context': {'index': index}}
        )
        if self.service.index_exists(index):
            return
        self.loggit.info(
            'Index %s does not exist. Creating it.', index,
            extra={'context': {'index': index}}
        )
        self.service.create_index(index)

    def reindex(self, source, dest):
        """
        Copy ``source`` into ``dest``. If nothing was copied, or the reindex failed,
        make sure ``dest`` exists anyway so the alias has something to point at.
        """
        context = {'from': source, 'to': dest}
        self.loggit.info(
            'Reindexing data from index %s to %s', source, dest,
            extra={'context': context}
        )
        try:
            response = self.service.reindex(
                source,
                dest,
                wait_for_active_shards=self.settings.reindex_wait_for_active_shards,
                requests_per_second=self.settings.reindex_requests_per_second,
                timeout=self.settings.reindex_timeout,
            )
        # pylint: disable=broad-except
        except Exception as err:
            self.loggit.error(
                'Reindexing from %s to %s failed: %s', source, dest, err,
                extra={'context': {**format_error(err), **context}}
            )
            self.create_index_if_missing(dest)
            return
        result = pick(response, REINDEX_RESULT_CONTEXT)
        self.loggit.info(
            'Reindexing result: %s', result, extra={'context': {**result, **context}}
        )
        if response.get('total', 0) >= 1:
            return
        self.loggit.info(
            'Reindex from %s did not create a new index.', source,
            extra={'context': context}
        )
        self.create_index_if_missing(dest)

    def replace_index_with_alias(self, index, alias_to):
        """Swap index ``index`` for an alias of the same name pointing at ``alias_to``"""
        self.loggit.info(
            'Deleting index %s and replacing it with an alias to %s', index, alias_to,
            extra={'context': {'index': index, 'alias_to': alias_to}}
        )
        self.service.replace_index_with_alias(index, alias_to)

    def initialize_rollover_for_index(self, index):
        """
        Block writes, reindex into the suffixed target, then replace the raw index
        with an alias. Any exception ends the attempt for ``index``.

        :returns: ``{'target': new_index_name}``
        :rtype: dict
        """
        self.loggit.info(
            'Starting rollover initialization for index %s', index,
            extra={'context': {'index': index}}
        )
        self.disable_writes(index)
        new_index_name = self.rollover_name_for(index)
        self.reindex(index, new_index_name)
        self.replace_index_with_alias(index, new_index_name)
        return {'target': new_index_name}

    def initialize_indices(self):
        """
        Initialize every raw index, one after the other. A failure only ends the
        index it happened on. Outcomes are logged and kept in :py:attr:`results`.
        """
        uninitialized = self.fetch_uninitialized_indices()
        total = len(uninitialized)
        self.results = []
        for idx, index in enumerate(uninitialized, start=1):
            result = isolate(index, self.initialize_rollover_for_index, index)
            self.results.append(result)
            if result.success:
                self.loggit.info(
                    'Finished initializing rollover for index %s (%s of %s)',
                    index, idx, total,
                    extra={'context': {
                        'index': index,
                        'total_indices': total,
                        'indices_finished': idx,
                        'indices_left': total - idx,
                    }}
                )
            else:
                self.loggit.error(
                    'Failed to initialize rollover for index %s. Continuing with the '
                    'rest. Error: %s', index, result.error['error']['message'],
                    extra={'context': {**result.error, 'index': index}}
                )
        failed = len([res for res in self.results if not res.success])
        self.loggit.info(
            'Rollover initialization complete. %s indices, %s failed.', total, failed
        )

    def do_dry_run(self):
        """Log what the output would be, but take no action."""
        self.loggit.info('DRY-RUN MODE.  No changes will be made.')
        for index in self.fetch_uninitialized_indices():
            result = isolate(index, lambda idx=index: {'target': self.rollover_name_for(idx)})
            if result.success:
                self.loggit.info(
                    'DRY-RUN: initialize: block writes on "%s", reindex it into "%s" '
                    'and replace it with an alias of the same name', index,
                    result.details['target']
                )
            else:
                self.loggit.error(
                    'DRY-RUN: initialize: unable to determine target for "%s": %s',
                    index, result.error['error']['message']
                )

    def do_action(self):
        """Run :py:meth:`initialize_indices`"""
        self.initialize_indices()
