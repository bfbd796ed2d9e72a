"""es-rollover Exceptions"""
class RolloverException(Exception):
    """
    Base class for all exceptions raised by es-rollover which are not Elasticsearch
    exceptions.
    """

class ConfigurationError(RolloverException):
    """
    Exception raised when a misconfiguration is detected
    """

class ClientException(RolloverException):
    """
    Exception raised when the Elasticsearch client and/or connection is the source of the problem.
    """

class AliasIntegrityError(RolloverException):
    """
    Exception raised when an index does not carry exactly one managed alias
    """

class LoggingException(RolloverException):
    """
    Exception raised when es-rollover cannot either log or configure logging
    """
