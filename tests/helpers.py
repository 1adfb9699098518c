import os
import sys
import shutil
import tempfile
from os import path
from types import ModuleType, SimpleNamespace

from compass_rails import bridge, compass, host, sass
from compass_rails.config import settings


__all__ = ('TempDirHelper', 'FakeApplication', 'install_rails',
           'uninstall_rails', 'reset_all')


def reset_all():
    """Forget all process-wide state the tests may have touched.
    """
    bridge.reset()
    compass.reset()
    sass.plugin.reset()
    uninstall_rails()
    settings.clear()


class TempDirHelper(object):
    """Provides a temporary project directory; tests work inside of
    it.
    """

    def setup_method(self, method=None):
        reset_all()
        self.prev_cwd = os.getcwd()
        self.tempdir = tempfile.mkdtemp()
        os.chdir(self.tempdir)

    def teardown_method(self, method=None):
        os.chdir(self.prev_cwd)
        shutil.rmtree(self.tempdir)
        reset_all()

    def path(self, name):
        return path.join(self.tempdir, name)

    def create_files(self, files):
        """Helper that allows to quickly create a bunch of files in
        the temporary directory. Either a dict of name -> content, or
        a list of names.
        """
        if not hasattr(files, 'items'):
            files = dict((name, '') for name in files)
        for name, data in files.items():
            dirs = path.dirname(self.path(name))
            if not path.exists(dirs):
                os.makedirs(dirs)
            f = open(self.path(name), 'w')
            f.write(data)
            f.close()

    def create_directories(self, *dirs):
        for name in dirs:
            os.makedirs(self.path(name))
        return [self.path(name) for name in dirs]


class FakeApplication(object):
    """Stands in for the host's application object.
    """

    def __init__(self, initialized=True, sass_config=None, assets=True):
        self.initialized = initialized
        self.initialize_calls = 0
        self.config = SimpleNamespace()
        if sass_config is not None:
            self.config.sass = sass_config
        if assets:
            self.config.assets = SimpleNamespace(prefix='/assets', enabled=True)
        self.assets = SimpleNamespace(paths=[], version='1.0',
                                      context_class=object)

    def initialize(self):
        self.initialize_calls += 1
        self.initialized = True
        return self


def install_rails(application=None, root=None, env='development',
                  engines=(), version=None, monkeypatch=None):
    """Put a fake host framework module into ``sys.modules``.

    If ``version`` is given, it is reported as the installed version of
    the host package.
    """
    rails = ModuleType(settings['host_module'])
    rails.application = application
    rails.root = root
    rails.env = env
    rails.engines = list(engines)
    sys.modules[settings['host_module']] = rails
    if version is not None:
        monkeypatch.setattr(host, 'package_version', lambda name: version)
    return rails


def uninstall_rails():
    for name in ('rails', settings['host_module']):
        sys.modules.pop(name, None)
