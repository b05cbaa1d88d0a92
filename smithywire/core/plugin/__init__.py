"""Smithy plugin — extends a host project with Smithy model support.

Public re-exports for convenient access.
"""

from smithywire.core.plugin.build_task import BUILD_TASK_NAME, SmithyBuildTask
from smithywire.core.plugin.lifecycle import (
    PLUGIN_ID,
    PluginState,
    SmithyPlugin,
    WiringReport,
    apply_plugin,
)
from smithywire.core.plugin.versions import DEFAULT_CLI_VERSION, CliVersionResolution

__all__ = [
    "BUILD_TASK_NAME",
    "CliVersionResolution",
    "DEFAULT_CLI_VERSION",
    "PLUGIN_ID",
    "PluginState",
    "SmithyBuildTask",
    "SmithyPlugin",
    "WiringReport",
    "apply_plugin",
]
