"""Roll indices over action class"""
import logging
from elasticsearch8 import NotFoundError
from es_rollover.defaults.settings import ES_INDEX_PATTERN, ROLLOVER_RESULT_CONTEXT
from es_rollover.helpers.getters import owning_alias
from es_rollover.helpers.utils import format_error, isolate, pick
from es_rollover.indexservice import IndexService


class RollIndicesOver:
    """
    Roll over every ``<segment>-<segment>-log`` alias whose current index has passed
    the configured ``max_age`` or ``max_size``.
    """

    def __init__(self, service, settings):
        """
        :param service: The search-index client
        :param settings: Holds the ``max_age`` and ``max_size`` conditions

        :type service: :py:class:`~.es_rollover.indexservice.IndexService`
        :type settings: :py:class:`~.es_rollover.classdef.RolloverSettings`
        """
        if not isinstance(service, IndexService):
            raise TypeError(f'Not a valid IndexService object. Type: {type(service)}')
        self.loggit = logging.getLogger('es_rollover.actions.rollover')
        #: Object attribute that gets the value of param ``service``.
        self.service = service
        #: Object attribute that gets the value of param ``settings``.
        self.settings = settings
        #: One :py:class:`~.es_rollover.classdef.ItemResult` per aliased index
        #: handled by the latest run
        self.results = []

    def fetch_rollover_candidates(self):
        """
        :returns: ``(index, [alias, ...])`` for every index carrying an alias that
            matches the managed pattern. An empty list if Elasticsearch reports that
            no such alias exists.
        :rtype: list
        """
        try:
            response = self.service.get_aliases(ES_INDEX_PATTERN)
        except NotFoundError as err:
            self.loggit.warning(
                'Elasticsearch returned 404 for rollover aliases request: %s', err,
                extra={'context': format_error(err)}
            )
            return []
        return [
            (index, list(body.get('aliases', {}).keys()))
            for index, body in response.items()
        ]

    def is_empty(self, alias):
        """
        :returns: ``True`` if there are no documents behind ``alias``
        :rtype: bool
        """
        return self.service.count(alias) == 0

    def rollover(self, alias):
        """
        Roll ``alias`` over unless its index is empty. An empty index may still be old
        enough for ``max_age``, and rolling it over would only produce another empty
        index on every run.

        :returns: The loggable parts of the rollover response
        :rtype: dict
        """
        if self.is_empty(alias):
            self.loggit.info(
                'Alias %s points to an empty index. Not rolling it over', alias,
                extra={'context': {'alias': alias}}
            )
            return {'alias': alias, 'rolled_over': False, 'skipped': 'empty'}
        self.loggit.info(
            'Executing rollover for alias %s', alias, extra={'context': {'alias': alias}}
        )
        response = self.service.rollover(alias, self.settings.conditions)
        context = {**pick(response, ROLLOVER_RESULT_CONTEXT), 'alias': alias}
        if response.get('rolled_over'):
            self.loggit.info(
                'Successfully rolled over alias %s from %s to new index %s', alias,
                context.get('old_index'), context.get('new_index'),
                extra={'context': context}
            )
        else:
            self.loggit.info(
                'Skipped rolling over alias %s. Rollover conditions not met for %s',
                alias, context.get('old_index'), extra={'context': context}
            )
        return context

    def rollover_index(self, index, aliases):
        """Find the managed alias among ``aliases`` of ``index`` and roll it over"""
        return self.rollover(owning_alias(index, aliases))

    def roll_indices_over(self):
        """
        Roll over every managed alias, one after the other. A failure only ends the
        alias it happened on. Outcomes are logged and kept in :py:attr:`results`.
        """
        candidates = self.fetch_rollover_candidates()
        total = len(candidates)
        self.results = []
        for idx, (index, aliases) in enumerate(candidates, start=1):
            result = isolate(index, self.rollover_index, index, aliases)
            self.results.append(result)
            if result.success:
                alias = result.details['alias']
                self.loggit.info(
                    'Finished rollover for alias %s (%s of %s)', alias, idx, total,
                    extra={'context': {
                        'alias': alias,
                        'total_aliases': total,
                        'aliases_finished': idx,
                        'aliases_left': total - idx,
                    }}
                )
            else:
                self.loggit.error(
                    'Failed to rollover alias on index %s. Continuing with the rest. '
                    'Error: %s', index, result.error['error']['message'],
                    extra={'context': {**result.error, 'index': index, 'aliases': aliases}}
                )
        failed = len([res for res in self.results if not res.success])
        self.loggit.info('Rollover complete. %s aliases, %s failed.', total, failed)

    def dry_run_rollover(self, index, aliases):
        """Log whether the managed alias of ``index`` would be rolled over"""
        alias = owning_alias(index, aliases)
        if self.is_empty(alias):
            self.loggit.info(
                'DRY-RUN: rollover: alias "%s" points to an empty index. '
                'It would not be rolled over', alias
            )
            return {'alias': alias}
        response = self.service.rollover(alias, self.settings.conditions, dry_run=True)
        # Any one condition being met is enough
        met = [k for k, v in response.get('conditions', {}).items() if v]
        if met:
            self.loggit.info(
                'DRY-RUN: rollover: alias "%s" would roll over from %s to %s. '
                'Conditions met: %s', alias, response.get('old_index'),
                response.get('new_index'), met
            )
        else:
            self.loggit.info(
                'DRY-RUN: rollover: conditions not met. Alias "%s" would stay on %s',
                alias, response.get('old_index')
            )
        return {'alias': alias}

    def do_dry_run(self):
        """Log what the output would be, but take no action."""
        self.loggit.info('DRY-RUN MODE.  No changes will be made.')
        for index, aliases in self.fetch_rollover_candidates():
            result = isolate(index, self.dry_run_rollover, index, aliases)
            if not result.success:
                self.loggit.error(
                    'DRY-RUN: rollover: unable to evaluate index "%s": %s', index,
                    result.error['error']['message']
                )

    def do_action(self):
        """Run :py:meth:`roll_indices_over`"""
        self.roll_indices_over()
