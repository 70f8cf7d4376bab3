# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gantry import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded: Optional[dict[str, Any]] = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        if loaded is None:
            loaded = {}

        # Migration: fill in any key added since the file was written
        for key, default in configuration.DEFAULT_CONFIGURATION.items():
            if key not in loaded:
                loaded[key] = default
                self.is_dirty = True

        self._config = cast(configuration.Configuration, loaded)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        density: Optional[configuration.Density] = None,
        row_height: Optional[int] = None,
        bar_inset: Optional[int] = None,
        bar_height: Optional[int] = None,
        edge_band_width: Optional[int] = None,
        progress_handle_width: Optional[int] = None,
        terminal_pixels_per_cell: Optional[int] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[configuration.LogLevel] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        config = self.config
        new_row_height = row_height if row_height is not None else config["row_height"]
        new_bar_inset = bar_inset if bar_inset is not None else config["bar_inset"]
        new_bar_height = bar_height if bar_height is not None else config["bar_height"]
        if min(new_row_height, new_bar_height) <= 0 or new_bar_inset < 0:
            raise ValueError("row_height and bar_height must be positive")
        if new_bar_inset + new_bar_height > new_row_height:
            raise ValueError("bar_inset + bar_height must fit within row_height")

        self.is_dirty = True

        if density is not None:
            self.config["density"] = density
        if row_height is not None:
            self.config["row_height"] = row_height
        if bar_inset is not None:
            self.config["bar_inset"] = bar_inset
        if bar_height is not None:
            self.config["bar_height"] = bar_height
        if edge_band_width is not None:
            self.config["edge_band_width"] = edge_band_width
        if progress_handle_width is not None:
            self.config["progress_handle_width"] = progress_handle_width
        if terminal_pixels_per_cell is not None:
            self.config["terminal_pixels_per_cell"] = terminal_pixels_per_cell
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
