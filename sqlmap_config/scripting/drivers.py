"""Statement language drivers."""

import re
from typing import Dict, Optional

from ..interfaces import LanguageDriver
from ..type.type_resolver import instantiate

_WHITESPACE = re.compile(r'\s+')


class XMLLanguageDriver(LanguageDriver):
    """Default driver: collapses the whitespace of an XML statement body."""

    def create_sql_source(self, script: str, parameter_type: Optional[type] = None) -> str:
        return _WHITESPACE.sub(' ', script).strip()


class RawLanguageDriver(XMLLanguageDriver):
    """Driver for static statements; rejects dynamic ${} fragments."""

    def create_sql_source(self, script: str, parameter_type: Optional[type] = None) -> str:
        if '${' in script:
            raise ValueError("Dynamic content is not allowed when using RAW language")
        return super().create_sql_source(script, parameter_type)


class LanguageDriverRegistry:
    """One driver instance per driver type, plus the configured default."""

    def __init__(self):
        self._drivers: Dict[type, LanguageDriver] = {}
        self.default_driver_class: Optional[type] = None

    def register(self, driver_class: type) -> None:
        if driver_class not in self._drivers:
            self._drivers[driver_class] = instantiate(driver_class)

    def get_driver(self, driver_class: type) -> Optional[LanguageDriver]:
        return self._drivers.get(driver_class)

    def get_default_driver(self) -> Optional[LanguageDriver]:
        return self._drivers.get(self.default_driver_class)

    def set_default_driver_class(self, driver_class: type) -> None:
        self.register(driver_class)
        self.default_driver_class = driver_class
