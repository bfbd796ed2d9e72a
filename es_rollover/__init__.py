"""Rollover initialization and rollover for Elasticsearch log indices"""
from es_rollover._version import __version__
from es_rollover.exceptions import *
from es_rollover.classdef import ItemResult, RolloverSettings
from es_rollover.indexservice import IndexService, get_client
from es_rollover.actions import *
from es_rollover.cli import cli
