# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Literal, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "gantry"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TASKS_DIR: Path = DATA_PATH / "tasks"
DATA_PROJECTS_DIR: Path = DATA_PATH / "projects"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"

Density = Literal["comfortable", "compact"]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Configuration(TypedDict):
    density: Density
    row_height: int
    bar_inset: int
    bar_height: int
    edge_band_width: int
    progress_handle_width: int
    terminal_pixels_per_cell: int
    show_header: bool
    log_level: LogLevel
    data_path: Optional[str]


DEFAULT_CONFIGURATION: Configuration = {
    "density": "comfortable",
    "row_height": 48,
    "bar_inset": 8,
    "bar_height": 32,
    "edge_band_width": 8,
    "progress_handle_width": 16,
    "terminal_pixels_per_cell": 10,
    "show_header": True,
    "log_level": "WARNING",
    "data_path": None,
}


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_TASKS_DIR, DATA_PROJECTS_DIR, DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_TASKS_DIR = DATA_PATH / "tasks"
    DATA_PROJECTS_DIR = DATA_PATH / "projects"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are used.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
