"""Other Classes"""

import typing as t
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RolloverSettings:
    """
    The validated values that drive both batch operations. Built once at startup by
    :py:func:`~.es_rollover.config_utils.check_rollover_config` and never changed
    afterwards.
    """

    #: The ``max_age`` rollover condition, e.g. ``7d``
    max_age: str = '7d'
    #: The ``max_size`` rollover condition, e.g. ``50gb``
    max_size: str = '50gb'
    #: Seconds Elasticsearch may spend on a single reindex request
    reindex_timeout: int = 3600
    #: Shard copies that must be active before a reindex proceeds
    reindex_wait_for_active_shards: t.Union[int, str] = 'all'
    #: Reindex throttle in sub-requests per second. ``-1`` means unthrottled.
    reindex_requests_per_second: float = 500

    @property
    def conditions(self) -> t.Dict[str, str]:
        """The ``conditions`` for the rollover API"""
        return {'max_age': self.max_age, 'max_size': self.max_size}


@dataclass
class ItemResult:
    """The outcome of processing one index or alias in a batch operation"""

    #: The index or alias name the item was about
    name: str
    #: ``None`` on success, otherwise the
    #: :py:func:`~.es_rollover.helpers.utils.format_error` context of the failure
    error: t.Optional[t.Dict[str, t.Any]] = None
    #: Anything worth keeping about the outcome, e.g. the target index name
    details: t.Dict[str, t.Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """``True`` unless the item failed"""
        return self.error is None
