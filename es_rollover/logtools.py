"""Logging tools"""
import sys
import json
import logging
import time
from pathlib import Path
import ecs_logging
from es_rollover.exceptions import LoggingException

#: Plain text format above DEBUG
DEFAULT_FORMAT = '%(asctime)s %(levelname)-9s %(message)s'
#: Plain text format at DEBUG, with the emitting logger and function
DEBUG_FORMAT = (
    '%(asctime)s %(levelname)-9s %(name)22s %(funcName)22s:%(lineno)-4d %(message)s')

def is_docker():
    """Check if we're running in a docker container"""
    cgroup = Path('/proc/self/cgroup')
    return Path('/.dockerenv').is_file() or cgroup.is_file() and 'docker' in cgroup.read_text()

def numeric_log_level(loglevel):
    """
    :param loglevel: A level name like ``INFO``, or its number

    :returns: The number of ``loglevel``
    :rtype: int
    """
    if isinstance(loglevel, int):
        return loglevel
    level = getattr(logging, str(loglevel).upper(), None)
    if not isinstance(level, int):
        raise ValueError(f'Invalid log level: {loglevel}')
    return level

def log_handler(logfile=None):
    """
    :param logfile: Path to append to. Without one, log to stdout, or to the stdout of
        PID 1 inside a container so ``docker logs`` shows it.

    :rtype: :py:class:`logging.Handler`

    Only an unusable ``logfile`` raises
    :py:exc:`~.es_rollover.exceptions.LoggingException`. If the container target
    cannot be opened, e.g. for a non-root user, stdout is used instead.
    """
    if logfile:
        try:
            return logging.FileHandler(logfile)
        except OSError as err:
            raise LoggingException(f'Unable to open log destination: {err}') from err
    if is_docker():
        try:
            return logging.FileHandler('/proc/1/fd/1')
        except OSError:
            return logging.StreamHandler(stream=sys.stdout)
    return logging.StreamHandler(stream=sys.stdout)

class LogstashFormatter(logging.Formatter):
    """One JSON object per line, with any ``extra={'context': ...}`` as a field"""
    # LogRecord attribute -> output key
    WANTED_ATTRS = {
        'levelname': 'loglevel',
        'funcName': 'function',
        'lineno': 'linenum',
        'name': 'name',
        'context': 'context',
    }

    def format(self, record):
        self.converter = time.gmtime
        timestamp = '%s.%03dZ' % (
            self.formatTime(record, datefmt='%Y-%m-%dT%H:%M:%S'), record.msecs)
        result = {'@timestamp': timestamp, 'message': record.getMessage()}
        for attribute, key in self.WANTED_ATTRS.items():
            if hasattr(record, attribute):
                result[key] = getattr(record, attribute)
        if record.exc_info:
            result['exception'] = self.formatException(record.exc_info)
        # context values are not always JSON-native
        return json.dumps(result, sort_keys=True, default=str)

class Blacklist(logging.Filter):
    """Drop records from the named loggers and their children"""
    # pylint: disable=super-init-not-called
    def __init__(self, *names):
        self.muted = [logging.Filter(name) for name in names]

    def filter(self, record):
        return not any(f.filter(record) for f in self.muted)

class LogInfo:
    """Handler, formatter and level for one logging configuration"""
    def __init__(self, cfg):
        """
        :param cfg: The logging configuration. Missing keys get the defaults of
            :py:func:`~.es_rollover.defaults.logging_defaults.config_logging`.
        :type: cfg: dict
        """
        #: Attribute. The numeric equivalent of ``cfg['loglevel']``
        self.numeric_log_level = numeric_log_level(cfg.get('loglevel', 'INFO'))
        #: Attribute. The plain text format string
        self.format_string = DEFAULT_FORMAT
        if self.numeric_log_level == logging.DEBUG:
            self.format_string = DEBUG_FORMAT
        #: Attribute. Where the records go
        self.handler = log_handler(cfg.get('logfile'))

        logformat = cfg.get('logformat', 'default')
        if logformat in ('json', 'logstash'):
            self.handler.setFormatter(LogstashFormatter())
        elif logformat == 'ecs':
            self.handler.setFormatter(ecs_logging.StdlibFormatter())
        else:
            self.handler.setFormatter(logging.Formatter(self.format_string))
