import os


__all__ = ('ConfigStorage', 'EnvironConfigStorage', 'settings')


class ConfigStorage(object):
    """This is the backend the bridge and the compass configuration
    objects use to store their values.

    Subclasses change the place the data is stored: Only
    _meth:`__getitem__`, _meth:`__setitem__`, _meth:`__delitem__` and
    _meth:`__contains__` need to be implemented.

    We don't inherit from ``dict``. It would require us to re-implement
    a whole bunch of methods, like pop() etc.
    """

    def get(self, key, default=None):
        try:
            return self.__getitem__(key)
        except KeyError:
            return default

    def update(self, d):
        for key in d:
            self.__setitem__(key, d[key])

    def setdefault(self, key, value):
        if not key in self:
            self.__setitem__(key, value)
            return value
        return self.__getitem__(key)

    def __contains__(self, key):
        raise NotImplementedError()

    def __getitem__(self, key):
        raise NotImplementedError()

    def __setitem__(self, key, value):
        raise NotImplementedError()

    def __delitem__(self, key):
        raise NotImplementedError()


# Keys holding a sequence; in the environment they are comma separated.
sequence_options = ('host_packages', 'boot_modules')


class EnvironConfigStorage(ConfigStorage):
    """Backs the bridge settings by the process environment.

    Values assigned in-process win over the environment, and both win
    over the defaults.
    """

    _mapping = {
        'host_module': 'COMPASS_RAILS_HOST_MODULE',
        'host_packages': 'COMPASS_RAILS_HOST_PACKAGES',
        'descriptor': 'COMPASS_RAILS_DESCRIPTOR',
        'boot_modules': 'COMPASS_RAILS_BOOT_MODULES',
        # Same names the host framework itself looks at.
        'root': 'RAILS_ROOT',
        'env': 'RAILS_ENV',
    }

    defaults = {
        'host_module': 'rails',
        'host_packages': ('railties', 'rails'),
        'descriptor': os.path.join('config', 'application.py'),
        'boot_modules': (),
    }

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ
        self._overrides = {}

    def _transform_key(self, key):
        return self._mapping.get(key.lower(), 'COMPASS_RAILS_%s' % key.upper())

    def _from_environ(self, key):
        value = self.environ[self._transform_key(key)]
        if key.lower() in sequence_options:
            return tuple(v.strip() for v in value.split(',') if v.strip())
        return value

    def __contains__(self, key):
        key = key.lower()
        return key in self._overrides or \
            self._transform_key(key) in self.environ or \
            key in self.defaults

    def __getitem__(self, key):
        key = key.lower()
        if key in self._overrides:
            return self._overrides[key]
        if self._transform_key(key) in self.environ:
            return self._from_environ(key)
        if key in self.defaults:
            return self.defaults[key]
        raise KeyError("No setting %s (environment variable %s)" % (
            key, self._transform_key(key)))

    def __setitem__(self, key, value):
        self._overrides[key.lower()] = value

    def __delitem__(self, key):
        # Only in-process values can go; the environment stays untouched.
        del self._overrides[key.lower()]

    def clear(self):
        self._overrides.clear()


settings = EnvironConfigStorage()
