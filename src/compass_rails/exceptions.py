__all__ = ('ConfigurationError', 'MissingHostError',
           'ProjectRootNotFoundError', 'UnrecognizedOptionError',
           'DoubleBootWarning',)


class ConfigurationError(Exception):
    pass


class MissingHostError(ConfigurationError):
    pass


class ProjectRootNotFoundError(ConfigurationError):
    pass


class UnrecognizedOptionError(ConfigurationError, AttributeError):
    """Raised by the sass layer when an option has no writable field.
    """


class DoubleBootWarning(UserWarning):
    pass
