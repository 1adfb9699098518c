"""Capabilities of the context stylesheets are evaluated in.

The asset pipeline gives us its own context class; we do not touch it,
but derive a new class that adds our helpers on top.
"""

import posixpath
from urllib.parse import urlsplit


__all__ = ('IsolatedHelpers', 'RailsHelpers', 'SassContext',
           'build_context_class')


class IsolatedHelpers(object):
    """Path computation that works without a request.
    """

    assets_prefix = '/assets'
    asset_host = None

    def is_uri(self, source):
        return bool(urlsplit(source).scheme) or source.startswith('//')

    def compute_public_path(self, source, directory='', ext=None):
        if self.is_uri(source):
            return source
        if ext and not posixpath.splitext(source)[1]:
            source = '%s.%s' % (source, ext)
        if not source.startswith('/'):
            source = posixpath.join('/', directory.strip('/'), source)
        if self.asset_host:
            return '%s%s' % (self.asset_host.rstrip('/'), source)
        return source


class RailsHelpers(object):
    """The host framework's asset helpers; everything below the asset
    prefix.
    """

    def asset_path(self, source, ext=None):
        return self.compute_public_path(source, self.assets_prefix, ext)

    def image_path(self, source):
        return self.asset_path(source)

    def font_path(self, source):
        return self.asset_path(source)

    def javascript_path(self, source):
        return self.asset_path(source, 'js')

    def stylesheet_path(self, source):
        return self.asset_path(source, 'css')


class SassContext(object):

    sass_config = None

    def sass_options(self):
        if self.sass_config is None:
            return {}
        return self.sass_config.as_dict()


def build_context_class(base, sass_config, prefix=None, asset_host=None):
    """Compose the pipeline's ``base`` context class with our helpers.
    """
    attrs = {'sass_config': sass_config, 'asset_host': asset_host}
    if prefix is not None:
        attrs['assets_prefix'] = prefix
    return type('CompassRailsContext',
                (IsolatedHelpers, RailsHelpers, SassContext, base), attrs)
