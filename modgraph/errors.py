"""Error taxonomy.

Usage and environment problems are raised. Conditions found inside the module
graph (unknown references, cycles) are never raised: they are recorded in the
resolution result instead.
"""

from __future__ import annotations

from pathlib import Path


class ModgraphError(Exception):
    """Base class for all modgraph errors."""


class UsageError(ModgraphError):
    """Invalid invocation, detected before scanning starts."""


class ConfigError(ModgraphError):
    """A config file that cannot be read or does not validate."""


class DescriptorReadError(ModgraphError):
    """A build descriptor that cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot read build descriptor {path}: {reason}")


class UnknownModuleError(ModgraphError, LookupError):
    """A path-analysis query naming a root or target that was never observed."""

    def __init__(self, message: str, root: str, target: str | None = None):
        self.root = root
        self.target = target
        super().__init__(message)
