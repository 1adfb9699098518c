"""The Compass configuration layer.

Compass keeps its project configuration in a chain of data objects: every
configuration added later inherits from the one that was active before,
and attributes nobody set explicitly fall back to the defaults of the
project type. The bridge only ever talks to this chain through the
functions in this module.
"""

import os
import logging
from os import path
from importlib import import_module

import yaml

from compass_rails import sass
from compass_rails.config import ConfigStorage
from compass_rails.exceptions import ConfigurationError


__all__ = ('Configuration', 'CompassDefaults', 'ATTRIBUTES',
           'KNOWN_CONFIG_LOCATIONS',
           'configuration', 'add_configuration', 'add_project_configuration',
           'detect_configuration_file', 'configuration_for',
           'register_framework', 'frameworks', 'discover_extensions',
           'configure_sass_plugin', 'handle_configuration_change',
           'register_app_integration', 'lookup_app_integration', 'reset')


log = logging.getLogger('compass_rails')


ATTRIBUTES = (
    'project_type', 'project_path', 'environment', 'http_path',
    'sass_dir', 'css_dir', 'images_dir', 'fonts_dir', 'javascripts_dir',
    'http_images_path', 'http_fonts_path', 'http_javascripts_path',
    'http_stylesheets_path', 'relative_assets', 'output_style',
    'line_comments', 'cache', 'cache_dir', 'disable_warnings',
    'preferred_syntax', 'sass_options', 'additional_import_paths',
    'extensions_dir', 'extensions',
)

# Relative to the project root, in order of preference.
KNOWN_CONFIG_LOCATIONS = (
    path.join('config', 'compass.yml'),
    path.join('.compass', 'config.yml'),
    path.join('config', 'compass.yaml'),
    'compass.yml',
    path.join('src', 'compass.yml'),
)

_WITHOUT_DEFAULT = '_without_default'


class Configuration(ConfigStorage):
    """A single link in the configuration chain.

    ``defaults`` is any object with ``default_<attribute>(config)``
    methods; it is asked last, and only for attributes that were set
    neither here nor on an inherited configuration.
    """

    def __init__(self, name, values=None, defaults=None):
        self.__dict__.update(name=name, defaults=defaults, inherited=None,
                             _values={})
        if values:
            self.update(values)

    def _check(self, key):
        if key not in ATTRIBUTES:
            raise ConfigurationError(
                'Unknown compass configuration attribute: %s' % key)

    def __contains__(self, key):
        return self.without_default(key) is not None

    def without_default(self, key):
        """The value as set by the user, ignoring project defaults.
        """
        self._check(key)
        if key in self._values:
            return self._values[key]
        if self.inherited is not None:
            return self.inherited.without_default(key)
        return None

    def default_for(self, key):
        self._check(key)
        for data in self._chain():
            method = getattr(data.defaults, 'default_%s' % key, None)
            if method is not None:
                return method(self)
        return None

    def __getitem__(self, key):
        value = self.without_default(key)
        if value is None:
            value = self.default_for(key)
        return value

    def __setitem__(self, key, value):
        self._check(key)
        self._values[key] = value

    def __delitem__(self, key):
        self._check(key)
        self._values.pop(key, None)

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        if name.endswith(_WITHOUT_DEFAULT):
            key = name[:-len(_WITHOUT_DEFAULT)]
            if key in ATTRIBUTES:
                return self.without_default(key)
        if name in ATTRIBUTES:
            return self[name]
        raise AttributeError(
            "'%s' has no attribute '%s'" % (type(self).__name__, name))

    def __setattr__(self, name, value):
        if name in self.__dict__ or name in ('name', 'defaults', 'inherited'):
            self.__dict__[name] = value
        else:
            self[name] = value

    def _chain(self):
        data = self
        while data is not None:
            yield data
            data = data.inherited

    def inherit_from(self, other):
        self.__dict__['inherited'] = other
        return self

    @property
    def top_level(self):
        """The configuration at the root of the inheritance chain.
        """
        data = self
        while data.inherited is not None:
            data = data.inherited
        return data

    @property
    def sass_load_paths(self):
        """Directories sass should search, in lookup order.
        """
        paths = []
        sass_dir = self['sass_dir']
        if sass_dir:
            project_path = self['project_path']
            if project_path:
                sass_dir = path.join(project_path, sass_dir)
            paths.append(sass_dir)
        paths.extend(self['additional_import_paths'] or ())
        for name, stylesheets_dir in frameworks():
            if stylesheets_dir not in paths:
                paths.append(stylesheets_dir)
        return paths

    def to_sass_plugin_options(self):
        """Options for compiling this project outside of the asset
        pipeline.
        """
        project_path = self['project_path'] or os.getcwd()
        options = {
            'template_location': [(
                path.join(project_path, self['sass_dir'] or 'sass'),
                path.join(project_path, self['css_dir'] or 'stylesheets'))],
            'load_paths': self.sass_load_paths,
        }
        for option, sass_option in (('output_style', 'style'),
                                    ('line_comments', 'line_comments'),
                                    ('cache', 'cache'),
                                    ('disable_warnings', 'quiet')):
            value = self[option]
            if value is not None:
                options[sass_option] = value
        if self['cache_dir']:
            options['cache_location'] = path.join(
                project_path, self['cache_dir'])
        options.update(self['sass_options'] or {})
        return options

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.name)


class CompassDefaults(object):
    """Defaults of a plain compass project. The defaults of the
    configuration being read are asked before these.
    """

    def default_http_path(self, config):
        return '/'

    def default_sass_dir(self, config):
        return 'sass'

    def default_css_dir(self, config):
        return 'stylesheets'

    def default_images_dir(self, config):
        return 'images'

    def default_javascripts_dir(self, config):
        return 'javascripts'

    def default_fonts_dir(self, config):
        return 'fonts'


def _default_configuration():
    return Configuration('default', defaults=CompassDefaults())


_configuration = None
_frameworks = []
_app_integrations = {}


def configuration():
    """The head of the configuration chain.
    """
    global _configuration
    if _configuration is None:
        _configuration = _default_configuration()
    return _configuration


def add_configuration(data):
    """Put ``data`` in front of the chain; it inherits everything it does
    not set itself from the configuration active so far.
    """
    global _configuration
    current = configuration()
    if data is current:
        return data
    data.inherit_from(current)
    _configuration = data
    log.debug('Added compass configuration %s', data.name)
    return data


def add_project_configuration(config=None, project_type=None):
    """Add the configuration of a project, given either as a
    ``Configuration`` or as the filename of a configuration file.
    """
    if config is None:
        config = Configuration('project')
    elif not isinstance(config, Configuration):
        config = configuration_for(config)
    if project_type is not None:
        config.project_type = project_type
    return add_configuration(config)


def detect_configuration_file(root=None):
    """Return the first configuration file found under ``root`` (the
    working directory by default), or ``None``.
    """
    root = root or os.getcwd()
    for location in KNOWN_CONFIG_LOCATIONS:
        candidate = path.join(root, location)
        if path.isfile(candidate):
            return candidate
    return None


def configuration_for(file_or_filename):
    """Load a ``Configuration`` from a YAML file.

    Expects a mapping of attributes, for example::

        sass_dir: app/assets/stylesheets
        output_style: compressed
        sass_options:
            debug_info: true

    A relative ``project_path`` is considered relative to the file.
    """
    if isinstance(file_or_filename, str):
        f, filename = open(file_or_filename), file_or_filename
    else:
        f, filename = file_or_filename, getattr(file_or_filename, 'name', None)
    try:
        obj = yaml.safe_load(f) or {}
    finally:
        f.close()

    if not isinstance(obj, dict):
        raise ConfigurationError(
            '%s: expected a mapping of compass options' % (
                filename or 'compass configuration'))
    if filename and obj.get('project_path'):
        obj['project_path'] = path.normpath(
            path.join(path.dirname(filename), obj['project_path']))
    return Configuration(filename or 'compass configuration', values=obj)


def register_framework(name, stylesheets_dir):
    """Make the stylesheets of a compass framework importable.
    """
    for i, (existing, _) in enumerate(_frameworks):
        if existing == name:
            _frameworks[i] = (name, stylesheets_dir)
            return
    _frameworks.append((name, stylesheets_dir))


def frameworks():
    return list(_frameworks)


def discover_extensions():
    """Load the extensions of the active configuration.

    Modules listed in ``extensions`` are imported; import errors bubble
    up. Every directory below ``extensions_dir`` holding a
    ``stylesheets`` directory is registered as a framework.
    """
    config = configuration()
    for module in config['extensions'] or ():
        import_module(module)
        log.debug('Loaded compass extension %s', module)

    extensions_dir = config['extensions_dir']
    if not extensions_dir:
        return
    if not path.isabs(extensions_dir) and config['project_path']:
        extensions_dir = path.join(config['project_path'], extensions_dir)
    if not path.isdir(extensions_dir):
        return
    for entry in sorted(os.listdir(extensions_dir)):
        stylesheets = path.join(extensions_dir, entry, 'stylesheets')
        if path.isdir(stylesheets):
            register_framework(entry, stylesheets)
            log.debug('Discovered compass framework %s', entry)


def configure_sass_plugin():
    options = configuration().to_sass_plugin_options()
    sass.plugin.options.update(options)
    return sass.plugin.options


def handle_configuration_change():
    sass.plugin.options_changed()


def register_app_integration(name, dotted_path):
    _app_integrations[name] = dotted_path


def lookup_app_integration(name):
    """Import and return the module integrating with ``name``.
    """
    try:
        dotted_path = _app_integrations[name]
    except KeyError:
        raise ConfigurationError('No app integration registered as %s' % name)
    return import_module(dotted_path)


def reset():
    global _configuration
    _configuration = None
    del _frameworks[:]
    _app_integrations.clear()
