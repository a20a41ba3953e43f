from modulescope.core.config.loader import load_view_config
from modulescope.core.config.models import ViewConfig
from modulescope.core.config.paths import ConfigFsPaths

__all__ = ["ConfigFsPaths", "ViewConfig", "load_view_config"]
