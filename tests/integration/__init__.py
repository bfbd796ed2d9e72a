"""Test setup"""

# pylint: disable=C0115, C0116
import logging
import os
import time
import uuid
import warnings
from unittest import SkipTest, TestCase
from elasticsearch8 import Elasticsearch
from elasticsearch8.exceptions import ConnectionError as ESConnectionError
from elasticsearch8.exceptions import ElasticsearchWarning, NotFoundError
from click import testing as clicktest
from es_rollover.classdef import RolloverSettings
from es_rollover.indexservice import IndexService

client = None

HOST = os.environ.get('TEST_ES_SERVER', 'http://127.0.0.1:9200')


def get_client():
    # pylint: disable=global-statement, invalid-name
    global client
    if client is not None:
        return client

    client = Elasticsearch(hosts=HOST, request_timeout=300)

    # wait for yellow status
    for _ in range(100):
        time.sleep(0.1)
        try:
            # pylint: disable=E1123
            client.cluster.health(wait_for_status='yellow')
            return client
        except ESConnectionError:
            continue
    # timeout
    raise SkipTest("Elasticsearch failed to start.")


class RolloverTestCase(TestCase):
    def setUp(self):
        super().setUp()
        self.logger = logging.getLogger('RolloverTestCase.setUp')
        self.client = get_client()
        self.test_identifier = uuid.uuid4().hex[:7]
        #: The raw index name every test works with
        self.raw = f'test-{self.test_identifier}-log'
        self.runner = clicktest.CliRunner()
        self.logger.debug('setUp completed...')

    def tearDown(self):
        self.logger = logging.getLogger('RolloverTestCase.tearDown')
        self.logger.debug('tearDown initiated...')
        warnings.filterwarnings("ignore", category=ElasticsearchWarning)
        indices = list(
            self.client.indices.get(
                index=f'*{self.test_identifier}*', expand_wildcards='open,closed'
            ).keys()
        )
        if indices:
            self.client.indices.delete(index=','.join(indices))

    def service(self):
        return IndexService(self.client)

    def settings(self, max_age='1d', max_size='1gb'):
        return RolloverSettings(
            max_age=max_age,
            max_size=max_size,
            reindex_timeout=10,
            reindex_wait_for_active_shards=1,
            reindex_requests_per_second=500,
        )

    def create_index(self, name):
        self.client.indices.create(
            index=name, settings={'index': {'number_of_shards': 1, 'number_of_replicas': 0}}
        )
        # pylint: disable=E1123
        self.client.cluster.health(index=name, wait_for_status='green')

    def create_alias(self, to, name):
        self.client.indices.put_alias(index=to, name=name)

    def post_event(self, index, message):
        self.client.index(index=index, document={'message': message})

    def refresh(self, index):
        self.client.indices.refresh(index=index)

    def has_index(self, name):
        return name in self.service().all_indices()

    def has_event(self, index, message):
        self.refresh(index)
        try:
            hits = self.client.search(index=index)['hits']['hits']
        except NotFoundError:
            return False
        return message in [hit['_source'].get('message') for hit in hits]
