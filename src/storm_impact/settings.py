"""Project settings for the Kedro framework.

Only the config loader is customised; everything else uses Kedro's defaults.
"""

from kedro.config import OmegaConfigLoader

CONFIG_LOADER_CLASS = OmegaConfigLoader
CONFIG_LOADER_ARGS = {
    "base_env": "base",
    "default_run_env": "local",
}
