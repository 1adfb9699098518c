__version__ = (0, 1, 0)


# Make a couple frequently used things available right here.
from compass_rails.exceptions import *
from compass_rails.host import (
    LoadResult, rails_loaded, rails_version, version_match, is_rails_31,
    is_rails_32, is_rails_4, root, prefix, env_production,
    asset_pipeline_enabled)
from compass_rails.bridge import (
    BootState, booted, check_for_double_boot, sass_config, sprockets,
    context, setup_fake_rails_env_paths, configure_rails, set_maybe,
    configuration, boot_config, sass_plugin_enabled, initialize,
    load_rails, register_integration)


if rails_loaded():
    register_integration()
