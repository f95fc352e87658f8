# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from ticktrack import configuration
from ticktrack.repository.yaml_repository import storage_errors

logger = logging.getLogger(__name__)


class ConfigurationRepository:
    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._config: Optional[configuration.Configuration] = None

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not self.config_path.is_file():
            self._config = configuration.get_default_configuration()
            return

        with storage_errors("reading the configuration"):
            raw_config = load(self.config_path.read_text(), Loader=Loader)
        loaded: dict[str, Any] = raw_config if isinstance(raw_config, dict) else {}

        # Back-fill keys added after the file was written
        config = configuration.get_default_configuration()
        for key in config:
            if key in loaded:
                config[key] = loaded[key]  # type: ignore[literal-required]
        self._config = config

    def __save_data(self, config: configuration.Configuration) -> None:
        with storage_errors("writing the configuration"):
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(dump(dict(config), Dumper=Dumper))

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def save_config(self, config: configuration.Configuration) -> None:
        self.__save_data(config)
        self._config = cast(configuration.Configuration, deepcopy(config))
        logger.info("saved configuration to %s", self.config_path)
