"""The sass side of the bridge: a typed configuration object and the
process-wide sass plugin options.

Fields are declared up front; writing to anything else fails right away
instead of silently creating a new attribute nobody reads.
"""

from compass_rails.exceptions import UnrecognizedOptionError


__all__ = ('SassConfig', 'SassPlugin', 'check_options', 'apply_options',
           'plugin')


class SassConfig(object):
    """Sass options as the host framework holds them.

    Subclasses can add fields by extending ``fields``::

        class MySassConfig(SassConfig):
            fields = SassConfig.fields + ('line_height',)
    """

    fields = ('load_paths', 'style', 'line_comments', 'cache',
              'cache_location', 'quiet', 'preferred_syntax', 'debug_info',
              'full_exception', 'read_cache')

    def __init__(self, **options):
        object.__setattr__(self, '_values', {'load_paths': []})
        for name, value in options.items():
            setattr(self, name, value)

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        if name not in self.fields:
            raise AttributeError(
                "'%s' has no sass option '%s'" % (type(self).__name__, name))
        return self._values.get(name)

    def __setattr__(self, name, value):
        if name not in self.fields:
            raise UnrecognizedOptionError(
                "'%s' has no sass option '%s'" % (type(self).__name__, name))
        self._values[name] = value

    def as_dict(self):
        return dict(self._values)

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, self._values)


def check_options(sass_config, options):
    """Raise if any key of ``options`` is not a field of ``sass_config``.

    Sass configurations without a ``fields`` allow-list are not checked;
    they fail, if at all, when the option is assigned.
    """
    fields = getattr(sass_config, 'fields', None)
    if fields is None:
        return
    unknown = sorted(str(k) for k in options if k not in fields)
    if unknown:
        raise UnrecognizedOptionError(
            'Unknown sass option(s) for %s: %s' % (
                type(sass_config).__name__, ', '.join(unknown)))


def apply_options(sass_config, options):
    """Assign every item of ``options`` to ``sass_config``.

    All keys are checked before the first assignment, so an unknown key
    leaves ``sass_config`` untouched.
    """
    check_options(sass_config, options)
    for name, value in options.items():
        setattr(sass_config, name, value)


class SassPlugin(object):
    """Options for compiling stylesheets outside of the asset pipeline.
    """

    def __init__(self):
        self.options = {}
        self._listeners = []

    @property
    def never_update(self):
        return bool(self.options.get('never_update'))

    def on_options_changed(self, callback):
        self._listeners.append(callback)

    def options_changed(self):
        for callback in self._listeners:
            callback(self.options)

    def reset(self):
        self.options.clear()
        del self._listeners[:]


plugin = SassPlugin()
