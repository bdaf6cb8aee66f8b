"""
Configuration for vc_changelog.

Provides the :class:`Options` consumed by the pipeline and a loader for
the JSON configuration file stored in the repository. See
:mod:`vc_changelog.config.loader` for details.
"""

from .loader import ConfigError, load_config  # noqa: F401
from .options import Options  # noqa: F401
