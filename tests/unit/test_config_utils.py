"""Unit tests for configuration checking"""
# pylint: disable=missing-function-docstring, missing-class-docstring
import logging
import os
import tempfile
from unittest import TestCase
from unittest.mock import patch
import pytest
from es_rollover.classdef import RolloverSettings
from es_rollover.config_utils import (
    check_logging_config, check_rollover_config, set_logging
)
from es_rollover.exceptions import ConfigurationError
from es_rollover.logtools import Blacklist

class TestCheckRolloverConfig(TestCase):
    def test_defaults(self):
        assert RolloverSettings() == check_rollover_config({})
    def test_defaults_values(self):
        settings = check_rollover_config({'rollover': None})
        assert '7d' == settings.max_age
        assert '50gb' == settings.max_size
        assert 3600 == settings.reindex_timeout
        assert 'all' == settings.reindex_wait_for_active_shards
        assert 500 == settings.reindex_requests_per_second
    def test_conditions(self):
        settings = check_rollover_config({'rollover': {'max_age': '1d', 'max_size': '5gb'}})
        assert {'max_age': '1d', 'max_size': '5gb'} == settings.conditions
    def test_environment_strings_coerced(self):
        settings = check_rollover_config({'rollover': {
            'reindex_timeout': '120',
            'reindex_wait_for_active_shards': '2',
            'reindex_requests_per_second': '-1',
        }})
        assert 120 == settings.reindex_timeout
        assert 2 == settings.reindex_wait_for_active_shards
        assert -1 == settings.reindex_requests_per_second
    def test_tiny_conditions(self):
        settings = check_rollover_config({'rollover': {'max_age': '1nanos', 'max_size': '1b'}})
        assert '1nanos' == settings.max_age
        assert '1b' == settings.max_size
    def test_nones_pruned(self):
        settings = check_rollover_config({'rollover': {'max_age': None, 'max_size': '1gb'}})
        assert '7d' == settings.max_age
    def test_bad_max_age(self):
        with pytest.raises(ConfigurationError):
            check_rollover_config({'rollover': {'max_age': 'seven days'}})
    def test_bad_max_size(self):
        with pytest.raises(ConfigurationError):
            check_rollover_config({'rollover': {'max_size': 'huge'}})
    def test_bad_requests_per_second(self):
        with pytest.raises(ConfigurationError):
            check_rollover_config({'rollover': {'reindex_requests_per_second': '0'}})
    def test_bad_wait_for_active_shards(self):
        with pytest.raises(ConfigurationError):
            check_rollover_config({'rollover': {'reindex_wait_for_active_shards': 'some'}})
    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            check_rollover_config({'rollover': {'max_docs': 1000}})
    def test_settings_are_frozen(self):
        settings = check_rollover_config({})
        with pytest.raises(AttributeError):
            settings.max_age = '1d'

class TestCheckLoggingConfig(TestCase):
    def test_defaults(self):
        expected = {
            'loglevel': 'INFO',
            'logfile': None,
            'logformat': 'default',
            'blacklist': ['elastic_transport', 'urllib3'],
        }
        assert expected == check_logging_config({})
    def test_not_a_dict(self):
        assert 'INFO' == check_logging_config('string')['loglevel']
    def test_values(self):
        result = check_logging_config({'logging': {'loglevel': 'DEBUG', 'logformat': 'ecs'}})
        assert 'DEBUG' == result['loglevel']
        assert 'ecs' == result['logformat']
    def test_loglevel_any_case(self):
        assert 'INFO' == check_logging_config({'logging': {'loglevel': 'info'}})['loglevel']
        assert 'DEBUG' == check_logging_config({'logging': {'loglevel': 'Debug'}})['loglevel']
    def test_numeric_loglevel(self):
        assert 30 == check_logging_config({'logging': {'loglevel': 30}})['loglevel']
    def test_bad_loglevel(self):
        with pytest.raises(ConfigurationError):
            check_logging_config({'logging': {'loglevel': 'loud'}})
    def test_bad_format(self):
        with pytest.raises(ConfigurationError):
            check_logging_config({'logging': {'logformat': 'xml'}})

class TestSetLogging(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.before = list(logging.root.handlers)
    def tearDown(self):
        for handler in logging.root.handlers:
            if handler not in self.before:
                logging.root.removeHandler(handler)
                handler.close()
        logfile = os.path.join(self.tmpdir, 'es_rollover.log')
        if os.path.exists(logfile):
            os.remove(logfile)
        os.rmdir(self.tmpdir)
    def test_set_logging(self):
        log_opts = check_logging_config({'logging': {
            'loglevel': 'WARNING', 'logfile': os.path.join(self.tmpdir, 'es_rollover.log')}})
        set_logging(log_opts)
        added = [h for h in logging.root.handlers if h not in self.before]
        assert 1 == len(added)
        assert logging.WARNING == logging.root.level
        assert 2 == len([f for f in added[0].filters if isinstance(f, Blacklist)])
    def test_set_logging_container_stdout_not_writable(self):
        denied = PermissionError(13, 'Permission denied', '/proc/1/fd/1')
        with patch('es_rollover.logtools.is_docker', return_value=True), \
                patch('es_rollover.logtools.logging.FileHandler', side_effect=denied):
            set_logging(check_logging_config({}))
        added = [h for h in logging.root.handlers if h not in self.before]
        assert 1 == len(added)
        assert isinstance(added[0], logging.StreamHandler)
