"""
Configuration View Module

Read-only, case-insensitive key/value view over the merged settings, for
lookups of keys that have no typed field. Sections are addressed with ":"
(``configuration["LOGGING:level"]``).
"""

from collections.abc import Mapping
from typing import Any, Iterator, Optional

from discussion_web.config import Settings
from discussion_web.hosting import HostingEnvironment

KEY_DELIMITER = ":"


class Configuration(Mapping):
    """
    Read-only Configuration

    Immutable after construction. Lookup returns the merged value of the
    highest precedence layer that defines the key, or None.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._entries = {str(key).lower(): (str(key), value) for key, value in (values or {}).items()}

    @classmethod
    def from_settings(cls, settings: Settings) -> "Configuration":
        return cls(settings.model_dump(by_alias=True))

    def _find(self, key: str) -> tuple[bool, Any]:
        head, _, rest = key.partition(KEY_DELIMITER)
        entry = self._entries.get(head.lower())
        if entry is None:
            return False, None
        value = entry[1]
        if not rest:
            return True, value
        if not isinstance(value, Mapping):
            return False, None
        return Configuration(value)._find(rest)

    def __getitem__(self, key: str) -> Any:
        found, value = self._find(key)
        if not found:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key)[0]

    def get(self, key: str, default: Any = None) -> Any:
        found, value = self._find(key)
        return value if found else default

    def get_section(self, key: str) -> "Configuration":
        """Return the sub-configuration below ``key``; empty when it is not a section."""
        value = self.get(key)
        return Configuration(value) if isinstance(value, Mapping) else Configuration()

    def __repr__(self) -> str:
        return f"Configuration(keys={len(self)})"


def build_configuration(hosting_environment: HostingEnvironment) -> Configuration:
    """
    Build the application configuration

    Layers, in increasing precedence: appsettings.json,
    appsettings.<environment>.json, environment variables.
    """
    return Configuration.from_settings(Settings.for_environment(hosting_environment))
