"""
Hosting Environment Module

Describes where the application runs: content root, environment name and the
interpreter implementation. Resolved once at startup.
"""

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

CONTENT_ROOT_VARIABLE = "DISCUSSION_CONTENT_ROOT"
ENVIRONMENT_VARIABLE = "DISCUSSION_ENVIRONMENT"

DEVELOPMENT = "Development"
PRODUCTION = "Production"


@dataclass(frozen=True)
class HostingEnvironment:
    """
    Hosting Environment

    Attributes:
        content_root: Base directory for configuration files and the web root
        environment_name: e.g. "Development" or "Production"
    """

    content_root: Path
    environment_name: str = PRODUCTION

    @classmethod
    def from_environ(cls) -> "HostingEnvironment":
        """Build from DISCUSSION_CONTENT_ROOT / DISCUSSION_ENVIRONMENT, defaulting to the cwd and Production."""
        content_root = os.environ.get(CONTENT_ROOT_VARIABLE) or os.getcwd()
        environment_name = os.environ.get(ENVIRONMENT_VARIABLE) or PRODUCTION
        return cls(content_root=Path(content_root).resolve(), environment_name=environment_name)

    def is_environment(self, name: str) -> bool:
        return self.environment_name.lower() == name.lower()

    def is_development(self) -> bool:
        return self.is_environment(DEVELOPMENT)

    def web_root(self, relative: str) -> Path:
        """Resolve the static file root below the content root."""
        return (self.content_root / relative).resolve()


def detect_runtime() -> Optional[str]:
    """
    Detect the interpreter implementation

    Returns:
        str: e.g. "CPython" or "PyPy"; None when the platform cannot tell
    """
    return platform.python_implementation() or None


def is_runtime(expected: str, runtime: Optional[str] = None) -> bool:
    """
    Check whether the process runs on the given interpreter implementation

    Comparison is case-insensitive. An undetectable runtime never matches.
    """
    if runtime is None:
        runtime = detect_runtime()
    if not runtime or not expected:
        return False
    return runtime.lower() == expected.strip().lower()
