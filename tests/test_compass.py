import os
import sys
import textwrap
from io import StringIO

import pytest

from compass_rails import compass, sass
from compass_rails.compass import Configuration
from compass_rails.exceptions import ConfigurationError

from tests.helpers import TempDirHelper


class Defaults(object):

    def default_output_style(self, config):
        return 'expanded'

    def default_line_comments(self, config):
        return config['environment'] != 'production'


class TestConfiguration(object):

    def test_explicit_and_default(self):
        config = Configuration('test', defaults=Defaults())
        assert config.output_style == 'expanded'
        assert config.output_style_without_default is None
        config.output_style = 'compressed'
        assert config.output_style == 'compressed'
        assert config.output_style_without_default == 'compressed'

    def test_defaults_see_the_configuration(self):
        config = Configuration('test', defaults=Defaults())
        assert config.line_comments is True
        config.environment = 'production'
        assert config.line_comments is False
        assert config.line_comments_without_default is None

    def test_explicit_false(self):
        """``False`` counts as set; only ``None`` is unset.
        """
        config = Configuration('test', {'cache': False})
        assert config.cache_without_default is False
        assert 'cache' in config
        assert 'output_style' not in config

    def test_unknown_attribute(self):
        config = Configuration('test')
        with pytest.raises(ConfigurationError):
            config.color_scheme = 'dark'
        with pytest.raises(ConfigurationError):
            config['color_scheme']
        with pytest.raises(AttributeError):
            config.color_scheme

    def test_inheritance(self):
        parent = Configuration('parent', {'sass_dir': 'scss',
                                          'output_style': 'nested'})
        child = Configuration('child', {'output_style': 'compact'})
        child.inherit_from(parent)
        assert child.sass_dir == 'scss'
        assert child.sass_dir_without_default == 'scss'
        assert child.output_style == 'compact'
        assert child.top_level is parent
        assert parent.top_level is parent

    def test_inherited_defaults(self):
        parent = Configuration('parent', defaults=Defaults())
        child = Configuration('child').inherit_from(parent)
        assert child.output_style == 'expanded'
        assert child.output_style_without_default is None

    def test_delete(self):
        config = Configuration('test', {'cache': True})
        del config['cache']
        assert config.cache is None

    def test_sass_load_paths(self):
        config = Configuration('test', {
            'project_path': '/srv/app', 'sass_dir': 'app/styles',
            'additional_import_paths': ['/opt/shared']})
        compass.register_framework('blueprint', '/opt/blueprint/stylesheets')
        assert config.sass_load_paths == [
            os.path.join('/srv/app', 'app/styles'), '/opt/shared',
            '/opt/blueprint/stylesheets']

    def test_sass_load_paths_empty(self):
        assert Configuration('test').sass_load_paths == []

    def test_sass_plugin_options(self):
        config = Configuration('test', {
            'project_path': '/srv/app', 'sass_dir': 'sass',
            'css_dir': 'css', 'output_style': 'compressed',
            'disable_warnings': True, 'cache_dir': 'tmp/cache',
            'sass_options': {'debug_info': True}})
        options = config.to_sass_plugin_options()
        assert options['template_location'] == [
            (os.path.join('/srv/app', 'sass'), os.path.join('/srv/app', 'css'))]
        assert options['style'] == 'compressed'
        assert options['quiet'] is True
        assert options['cache_location'] == os.path.join('/srv/app', 'tmp/cache')
        assert options['debug_info'] is True
        assert 'line_comments' not in options


class TestConfigurationChain(object):

    def test_default_configuration(self):
        config = compass.configuration()
        assert config.sass_dir == 'sass'
        assert config.http_path == '/'
        assert compass.configuration() is config

    def test_add_configuration(self):
        default = compass.configuration()
        data = Configuration('mine', {'sass_dir': 'scss'})
        assert compass.add_configuration(data) is data
        assert compass.configuration() is data
        assert data.css_dir == 'stylesheets'
        assert data.top_level is default

        # Adding the head again doesn't make it inherit from itself
        compass.add_configuration(data)
        assert data.inherited is default

    def test_add_project_configuration(self):
        config = compass.add_project_configuration(project_type='rails')
        assert compass.configuration() is config
        assert config.project_type == 'rails'

    def test_reset(self):
        compass.add_configuration(Configuration('mine'))
        compass.register_framework('x', '/x')
        compass.register_app_integration('x', 'os')
        compass.reset()
        assert compass.configuration().name == 'default'
        assert compass.frameworks() == []
        with pytest.raises(ConfigurationError):
            compass.lookup_app_integration('x')


class TestConfigurationFiles(TempDirHelper):

    def test_detect(self):
        assert compass.detect_configuration_file() is None
        self.create_files(['compass.yml'])
        assert compass.detect_configuration_file() == self.path('compass.yml')
        # config/ is preferred
        self.create_files(['config/compass.yml'])
        assert compass.detect_configuration_file(self.tempdir) == \
            self.path('config/compass.yml')

    def test_load(self):
        self.create_files({'config/compass.yml': textwrap.dedent("""
            project_path: ..
            sass_dir: app/assets/stylesheets
            output_style: compressed
            line_comments: false
            sass_options:
                debug_info: true
            """)})
        config = compass.configuration_for(self.path('config/compass.yml'))
        assert config.project_path == os.path.normpath(self.tempdir)
        assert config.output_style_without_default == 'compressed'
        assert config.line_comments_without_default is False
        assert config.sass_options == {'debug_info': True}

    def test_load_file_object(self):
        config = compass.configuration_for(StringIO('cache: true\n'))
        assert config.cache is True
        assert config.name == 'compass configuration'

    def test_load_empty(self):
        config = compass.configuration_for(StringIO(''))
        assert config.sass_dir is None

    def test_load_invalid(self):
        with pytest.raises(ConfigurationError):
            compass.configuration_for(StringIO('- a\n- b\n'))
        with pytest.raises(ConfigurationError):
            compass.configuration_for(StringIO('color_scheme: dark\n'))

    def test_add_project_configuration_from_file(self):
        self.create_files({'compass.yml': 'sass_dir: scss\n'})
        config = compass.add_project_configuration(
            self.path('compass.yml'), project_type='rails')
        assert compass.configuration() is config
        assert config.sass_dir == 'scss'
        assert config.project_type == 'rails'


class TestExtensions(TempDirHelper):

    def test_extensions_dir(self):
        self.create_directories('ext/blueprint/stylesheets', 'ext/empty',
                                'ext/susy/stylesheets')
        compass.add_configuration(Configuration('test', {
            'project_path': self.tempdir, 'extensions_dir': 'ext'}))
        compass.discover_extensions()
        assert compass.frameworks() == [
            ('blueprint', self.path('ext/blueprint/stylesheets')),
            ('susy', self.path('ext/susy/stylesheets'))]

        # Discovering again doesn't register twice
        compass.discover_extensions()
        assert len(compass.frameworks()) == 2

    def test_missing_extensions_dir(self):
        compass.add_configuration(Configuration('test', {
            'project_path': self.tempdir, 'extensions_dir': 'nothere'}))
        compass.discover_extensions()
        assert compass.frameworks() == []

    def test_extension_modules(self):
        self.create_files({'my_extension.py': textwrap.dedent("""
            from compass_rails import compass
            compass.register_framework('mine', '/opt/mine/stylesheets')
            """)})
        compass.add_configuration(Configuration('test', {
            'extensions': ['my_extension']}))
        sys.path.insert(0, self.tempdir)
        try:
            compass.discover_extensions()
        finally:
            sys.path.remove(self.tempdir)
            sys.modules.pop('my_extension', None)
        assert compass.frameworks() == [('mine', '/opt/mine/stylesheets')]

    def test_extension_import_error(self):
        compass.add_configuration(Configuration('test', {
            'extensions': ['no_such_compass_extension']}))
        with pytest.raises(ImportError):
            compass.discover_extensions()


class TestSassPluginHookup(object):

    def test_configure_sass_plugin(self):
        compass.add_configuration(Configuration('test', {
            'project_path': '/srv/app', 'output_style': 'compact'}))
        options = compass.configure_sass_plugin()
        assert options is sass.plugin.options
        assert sass.plugin.options['style'] == 'compact'
        assert sass.plugin.options['template_location'] == [
            (os.path.join('/srv/app', 'sass'),
             os.path.join('/srv/app', 'stylesheets'))]

    def test_handle_configuration_change(self):
        seen = []
        sass.plugin.on_options_changed(seen.append)
        compass.handle_configuration_change()
        assert seen == [sass.plugin.options]


class TestAppIntegration(object):

    def test_lookup(self):
        compass.register_app_integration('rails', 'compass_rails')
        import compass_rails
        assert compass.lookup_app_integration('rails') is compass_rails

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            compass.lookup_app_integration('merb')


class TestBuiltinDefaults(object):

    def test_not_reported_as_set(self):
        data = compass.add_configuration(Configuration('mine'))
        assert data.sass_dir == 'sass'
        assert data.http_path == '/'
        assert data.sass_dir_without_default is None
        assert data.http_path_without_default is None
        assert 'sass_dir' not in data

    def test_own_defaults_come_first(self):
        class ProjectDefaults(object):
            def default_sass_dir(self, config):
                return 'styles'
        data = compass.add_configuration(
            Configuration('mine', defaults=ProjectDefaults()))
        assert data.sass_dir == 'styles'
        assert data.css_dir == 'stylesheets'
