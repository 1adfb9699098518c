"""Connects the compass configuration to the host framework: copies the
options compass users set over to sass, points the asset pipeline at the
project's stylesheet and image directories, and boots compass for
projects that compile outside of the asset pipeline.
"""

import os
import logging
import warnings

from compass_rails import compass, host, sass
from compass_rails.defaults import RailsDefaults
from compass_rails.helpers import build_context_class
from compass_rails.config import settings
from compass_rails.exceptions import DoubleBootWarning, MissingHostError


__all__ = ('BootState', 'boot_state', 'booted', 'check_for_double_boot',
           'load_rails',
           'sass_config', 'sprockets', 'context', 'setup_fake_rails_env_paths',
           'configure_rails', 'set_maybe', 'configuration', 'boot_config',
           'sass_plugin_enabled', 'initialize', 'register_integration',
           'reset')


log = logging.getLogger('compass_rails')


class BootState(object):
    """Whether compass has been booted in this process. Once booted,
    it stays booted.
    """

    def __init__(self):
        self._booted = False

    def is_booted(self):
        return self._booted

    def mark_booted(self):
        self._booted = True


boot_state = BootState()


def booted():
    return boot_state.is_booted()


def check_for_double_boot():
    """Mark compass as booted. Returns ``False``, after warning, if that
    already happened before.
    """
    if boot_state.is_booted():
        warnings.warn(
            'Compass was booted twice. compass_rails has got your back; '
            'please remove your compass initializer.', DoubleBootWarning)
        return False
    boot_state.mark_booted()
    return True


def load_rails():
    return host.load_rails(boot_state)


def _application():
    load_rails()
    application = host.get_application()
    if application is None:
        raise MissingHostError(
            'No %s application found; import it or run from within its '
            'project directory' % settings['host_module'])
    return application


def sass_config():
    return _application().config.sass


_sprockets = None
_context = None


def sprockets():
    global _sprockets
    application = _application()
    if _sprockets is None:
        _sprockets = application.assets
    return _sprockets


# Below the root of the application and of every engine.
ASSET_ROOTS = (os.path.join('app', 'assets'),
               os.path.join('lib', 'assets'),
               os.path.join('vendor', 'assets'))
ASSET_KINDS = ('images', 'stylesheets')


def _asset_directories(root):
    for asset_root in ASSET_ROOTS:
        for kind in ASSET_KINDS:
            directory = os.path.join(str(root), asset_root, kind)
            if os.path.isdir(directory):
                yield directory


def setup_fake_rails_env_paths(pipeline_env):
    """Put the image and stylesheet directories of the application and
    its engines in front of the pipeline's search paths.

    The application's own directories come first, followed by those of
    the engines in the order they were registered.
    """
    if not host.rails_loaded():
        return
    rails = host.get_rails()
    app_root = os.path.abspath(str(host.root()))

    paths = list(_asset_directories(app_root))
    for engine in getattr(rails, 'engines', None) or ():
        engine_root = os.path.abspath(str(engine.root))
        if engine_root == app_root:
            continue
        paths.extend(_asset_directories(engine_root))

    pipeline_env.paths[:0] = paths
    log.debug('Prepended %d asset paths to the pipeline', len(paths))


def context():
    global _context
    load_rails()
    if _context is None:
        env = sprockets()
        env.version = '%s-%s' % (host.env_name(), env.version)
        setup_fake_rails_env_paths(env)
        application = host.get_application()
        _context = build_context_class(
            env.context_class, sass_config(), host.prefix(),
            getattr(application.config, 'asset_host', None))
    return _context


# compass option -> sass option
OPTION_MAPPING = (
    ('output_style', 'style'),
    ('line_comments', 'line_comments'),
    ('cache', 'cache'),
    ('disable_warnings', 'quiet'),
    ('preferred_syntax', 'preferred_syntax'),
)


def configure_rails(app):
    """Copy the compass configuration of ``app`` to its sass
    configuration.

    Nothing happens if the application has no sass configuration.
    Options from ``sass_options`` are all checked before anything is
    changed; an unknown one raises ``UnrecognizedOptionError``.
    """
    sass_config = getattr(app.config, 'sass', None)
    if sass_config is None:
        return
    compass_config = app.config.compass

    sass_options = compass_config.sass_options
    if sass_options:
        sass.check_options(sass_config, sass_options)

    sass_config.load_paths.extend(compass_config.sass_load_paths)

    for compass_option, sass_option in OPTION_MAPPING:
        set_maybe(sass_config, compass_config, sass_option, compass_option)

    if sass_options:
        sass.apply_options(sass_config, sass_options)


def set_maybe(sass_config, compass_config, sass_option, compass_option):
    """Sets the sass config value only if the corresponding compass
    setting has been explicitly set by the user.
    """
    value = getattr(compass_config, '%s_without_default' % compass_option)
    if value is not None:
        setattr(sass_config, sass_option, value)
        log.debug('sass %s = %r (from compass %s)',
                  sass_option, value, compass_option)


def configuration():
    load_rails()
    return compass.Configuration('rails', defaults=RailsDefaults())


def boot_config():
    config_file = compass.detect_configuration_file()
    config = None
    if config_file:
        config = compass.configuration_for(config_file)
    if config is None:
        config = compass.Configuration('compass_rails_boot')
    config.top_level.project_type = 'rails'
    return config


def sass_plugin_enabled():
    if host.is_rails_31():
        return False
    return not sass.plugin.never_update


def initialize(config=None):
    """Boot compass for projects that don't use the asset pipeline;
    call this from the compass initializer.

    ``config`` is a ``Configuration`` or a configuration file; by default
    one is looked for below the project root.
    """
    if not check_for_double_boot():
        return
    if config is None:
        config = compass.detect_configuration_file(host.root())
    compass.add_project_configuration(config, project_type='rails')
    compass.discover_extensions()
    compass.configure_sass_plugin()
    if sass_plugin_enabled():
        compass.handle_configuration_change()
    log.info('Compass initialized for %s', host.root())


def register_integration():
    compass.register_app_integration('rails', 'compass_rails')
    compass.add_configuration(boot_config())


def reset():
    """Forget everything this process learned; only for tests.
    """
    global _sprockets, _context, boot_state
    _sprockets = None
    _context = None
    boot_state = BootState()
    host.reset()
