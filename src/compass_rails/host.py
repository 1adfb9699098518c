"""Finding out about the host framework: whether it is there, which
version it is, where the project lives, and booting it if nobody did yet.

The host is "defined" as soon as its module has been imported; it is
booted once its application reports itself initialized.
"""

import os
import re
import sys
import logging
from enum import Enum
from importlib import import_module
from importlib.util import spec_from_file_location, module_from_spec
from importlib.metadata import version as package_version, PackageNotFoundError

from compass_rails.config import settings
from compass_rails.exceptions import MissingHostError, ProjectRootNotFoundError


__all__ = ('LoadResult', 'RAILS_4', 'RAILS_32', 'RAILS_31', 'get_rails',
           'rails_loaded', 'get_application', 'rails_version',
           'version_match', 'is_rails_31', 'is_rails_32', 'is_rails_4',
           'find_project_root', 'load_rails', 'root', 'env_name',
           'env_production', 'prefix', 'asset_pipeline_enabled', 'reset')


log = logging.getLogger('compass_rails')


RAILS_4 = re.compile(r'^4\.[012]')
RAILS_32 = re.compile(r'^3\.2')
RAILS_31 = re.compile(r'^3\.1')


class LoadResult(Enum):
    """Outcome of :func:`load_rails`.

    ``NOT_APPLICABLE`` means an application exists but is still being
    set up by somebody else; we leave it alone.
    """
    BOOTED = 'booted'
    NOT_APPLICABLE = 'not_applicable'
    NOT_FOUND = 'not_found'

    def __bool__(self):
        return self is LoadResult.BOOTED


def get_rails():
    return sys.modules.get(settings['host_module'])


def rails_loaded():
    return get_rails() is not None


def get_application():
    rails = get_rails()
    if rails is None:
        return None
    return getattr(rails, 'application', None)


def rails_version():
    if not rails_loaded():
        raise MissingHostError(
            'You have to import %s before compass_rails' % settings['host_module'])
    for name in settings['host_packages']:
        try:
            return package_version(name)
        except PackageNotFoundError:
            continue
    raise MissingHostError(
        'Cannot determine the version of %s: none of the packages %s '
        'is installed' % (settings['host_module'],
                          ', '.join(settings['host_packages'])))


def version_match(pattern):
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return pattern.search(rails_version()) is not None


def is_rails_31():
    if not rails_loaded():
        return False
    return version_match(RAILS_31)


def is_rails_32():
    if not rails_loaded():
        return False
    return version_match(RAILS_32)


def is_rails_4():
    if not rails_loaded():
        return False
    return version_match(RAILS_4)


def find_project_root(start=None):
    """Walk up from ``start`` to the first directory holding the
    application descriptor. Returns ``None`` if there is none.
    """
    current = os.path.abspath(start or os.getcwd())
    descriptor = settings['descriptor']
    while True:
        if os.path.isfile(os.path.join(current, descriptor)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def _is_filesystem_root(directory):
    return os.path.dirname(directory) == directory


def _load_descriptor(project_root):
    filename = os.path.join(project_root, settings['descriptor'])
    spec = spec_from_file_location('%s_application' % settings['host_module'],
                                   filename)
    module = module_from_spec(spec)
    # Ensure the project's own modules are importable from the descriptor
    sys.path.insert(0, project_root)
    try:
        spec.loader.exec_module(module)
    finally:
        sys.path.remove(project_root)
    return module


def load_rails(boot_state=None):
    """Make sure the host application is booted.

    Returns a :class:`LoadResult`. If there is no application yet, the
    project is searched from the working directory upwards; when found,
    its descriptor is loaded and the application initialized.
    """
    application = get_application()
    if application is not None:
        if getattr(application, 'initialized', False):
            return LoadResult.BOOTED
        return LoadResult.NOT_APPLICABLE

    project_root = find_project_root()
    if project_root is None:
        return LoadResult.NOT_FOUND
    if _is_filesystem_root(project_root):
        raise ProjectRootNotFoundError(
            'Rails application not found: %s is at the filesystem root' %
            settings['descriptor'])

    log.debug('Booting application found in %s', project_root)
    _load_descriptor(project_root)
    for module in settings['boot_modules']:
        import_module(module)

    application = get_application()
    if application is None:
        raise MissingHostError(
            '%s did not set up a %s application' % (
                settings['descriptor'], settings['host_module']))
    application.initialize()
    if boot_state is not None:
        boot_state.mark_booted()
    return LoadResult.BOOTED


_root = None


def root():
    global _root
    if _root is None:
        rails = get_rails()
        if rails is not None and getattr(rails, 'root', None) is not None:
            _root = str(rails.root)
        elif settings.get('root'):
            _root = settings['root']
        else:
            _root = os.getcwd()
    return _root


def env_name():
    rails = get_rails()
    if rails is not None and getattr(rails, 'env', None) is not None:
        return str(rails.env)
    return settings.get('env')


def env_production():
    return env_name() == 'production'


def prefix():
    return get_application().config.assets.prefix


def asset_pipeline_enabled():
    application = get_application()
    if application is None:
        return False
    assets = getattr(application.config, 'assets', None)
    if assets is None:
        return False
    return getattr(assets, 'enabled', None) is not False


def reset():
    global _root
    _root = None
