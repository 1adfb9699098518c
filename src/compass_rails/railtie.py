"""Hooks for the host framework's initialization.

The host calls ``before_configuration`` while the application config is
being built, and ``initialize`` once the application's own initializers
ran. Applications using the asset pipeline need nothing else.
"""

import logging

from compass_rails import bridge, compass


__all__ = ('CompassRailtie', 'railtie')


log = logging.getLogger('compass_rails')


class CompassRailtie(object):

    def before_configuration(self, app):
        if getattr(app.config, 'compass', None) is None:
            app.config.compass = bridge.configuration()

    def initialize(self, app):
        if not bridge.check_for_double_boot():
            return
        self.before_configuration(app)
        compass.add_project_configuration(app.config.compass,
                                          project_type='rails')
        compass.discover_extensions()
        bridge.configure_rails(app)
        log.debug('Compass configured for the asset pipeline')


railtie = CompassRailtie()
