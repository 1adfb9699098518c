"""Project defaults compass uses for a Rails project.

Each ``default_<attribute>`` is asked only when the attribute was not set
explicitly anywhere in the configuration chain.
"""

from os import path

from compass_rails import host


__all__ = ('RailsDefaults',)


class RailsDefaults(object):

    def _prefix(self):
        application = host.get_application()
        if application is None or getattr(application.config, 'assets', None) is None:
            return '/assets'
        return host.prefix()

    def default_project_type(self, config):
        return 'rails'

    def default_project_path(self, config):
        return host.root()

    def default_environment(self, config):
        return host.env_name() or 'development'

    def default_http_path(self, config):
        return '/'

    def default_sass_dir(self, config):
        return path.join('app', 'assets', 'stylesheets')

    def default_css_dir(self, config):
        return path.join('public', self._prefix().strip('/'))

    def default_images_dir(self, config):
        return path.join('app', 'assets', 'images')

    def default_fonts_dir(self, config):
        return path.join('app', 'assets', 'fonts')

    def default_javascripts_dir(self, config):
        return path.join('app', 'assets', 'javascripts')

    def default_http_images_path(self, config):
        return self._prefix()

    def default_http_fonts_path(self, config):
        return self._prefix()

    def default_http_javascripts_path(self, config):
        return self._prefix()

    def default_http_stylesheets_path(self, config):
        return self._prefix()

    def default_cache_dir(self, config):
        return path.join('tmp', 'sass-cache')

    def default_extensions_dir(self, config):
        return path.join('vendor', 'plugins', 'compass_extensions')

    def default_line_comments(self, config):
        return config['environment'] != 'production'

    def default_output_style(self, config):
        if config['environment'] == 'production':
            return 'compressed'
        return 'expanded'
