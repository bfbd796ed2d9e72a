"""Unit tests for utils"""
from unittest import TestCase
from es_rollover.classdef import ItemResult
from es_rollover.helpers.utils import format_error, isolate, pick
from . import testvars

class TestFormatError(TestCase):
    """TestFormatError

    Test helpers.utils.format_error functionality.
    """
    def test_plain_exception(self):
        context = format_error(testvars.fake_fail)
        assert 'Simulated Failure' == context['error']['message']
        assert 'status' not in context
    def test_backtrace(self):
        try:
            raise ValueError('broken')
        except ValueError as err:
            context = format_error(err)
        assert 'ValueError: broken' in context['error']['backtrace']
        assert 'test_backtrace' in context['error']['backtrace']
    def test_not_found_status(self):
        assert 404 == format_error(testvars.not_found)['status']
    def test_api_error_status(self):
        assert 500 == format_error(testvars.server_error)['status']

class TestPick(TestCase):
    def test_pick(self):
        expected = {'total': 3, 'created': 3}
        assert expected == pick(testvars.reindexed, ['total', 'created', 'missing'])

class TestIsolate(TestCase):
    """TestIsolate

    Test helpers.utils.isolate functionality.
    """
    def test_success(self):
        result = isolate('idx', lambda x: {'target': x}, 'idx-000001')
        assert ItemResult(name='idx', details={'target': 'idx-000001'}) == result
        assert result.success
    def test_success_without_details(self):
        result = isolate('idx', lambda: None)
        assert {} == result.details
        assert result.success
    def test_exception_does_not_escape(self):
        def fail():
            raise testvars.not_found
        result = isolate('idx', fail)
        assert not result.success
        assert 'idx' == result.name
        assert 404 == result.error['status']
