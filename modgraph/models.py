"""Data models for the modgraph pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from modgraph.errors import UsageError


class OutputFormat(enum.Enum):
    MIND_MAP = "mindmap"
    DEPLOYMENT_DIAGRAM = "deployment"
    TABLE = "table"
    PATH_ANALYSIS = "paths"
    TRANSITIVE_MIND_MAP = "transitive-mindmap"

    @property
    def requires_resolution(self) -> bool:
        """Direct-only reports can be rendered straight from the module graph."""
        return self not in (OutputFormat.MIND_MAP, OutputFormat.DEPLOYMENT_DIAGRAM)


# Layering of the analyzed platform: shared modules first, leaf/UI modules last.
DEFAULT_MODULE_PRIORITIES: dict[str, int] = {
    "common": 1,
    "servercommon": 2,
    "comms": 3,
    "dataaccess": 4,
    "lookup": 5,
    "identity": 6,
    "edna": 7,
    "search": 8,
    "service": 9,
    "admin": 10,
    "events": 11,
    "fraudpolicy": 12,
    "graphql": 13,
    "pipeline": 14,
    "reports": 15,
    "sar": 16,
    "thirdparty": 17,
    "sanctionservice": 18,
    "sanctions": 19,
    "sanctions-client": 20,
    "sanctions-reports": 21,
    "sanctions-saas": 22,
    "auditreports": 23,
    "engine": 24,
    "alerter": 25,
    "ednaui/server": 26,
    "frontend": 27,
    "verifier": 28,
    "status": 29,
}

# Directory name -> module name, for modules living under a different path
DEFAULT_NAME_TRANSLATIONS: dict[str, str] = {
    "Administration": "admin",
}

DEFAULT_COMMON_MODULES: tuple[str, ...] = ("common", "servercommon")


@dataclass(frozen=True)
class DependencyId:
    """A ``root:target`` pair selecting one path analysis."""
    root: str
    target: str

    @classmethod
    def parse(cls, identifier: str) -> DependencyId:
        parts = identifier.split(":")
        if len(parts) != 2 or not all(p.strip() for p in parts):
            raise UsageError(
                f"Dependency identifier {identifier!r} is malformed, "
                "expected [root-module-name]:[dependency-module-name]"
            )
        return cls(root=parts[0].strip(), target=parts[1].strip())

    def __str__(self) -> str:
        return f"{self.root}:{self.target}"


@dataclass
class ModuleDescriptor:
    """Result from the scanner stage: one build descriptor and what it declares."""
    name: str
    descriptor_path: Path
    dependencies: set[str] = field(default_factory=set)


@dataclass
class AnalyzerConfig:
    """Configuration for the analysis pipeline."""
    project_dir: Path = field(default_factory=lambda: Path("."))
    output_format: OutputFormat = OutputFormat.TABLE
    dependency_id: DependencyId | None = None
    descriptor_name: str = "build.gradle"
    configurations: list[str] = field(default_factory=lambda: ["compile"])
    skip_dirs: list[str] = field(default_factory=lambda: [
        ".git", ".gradle", ".idea", "build", "out", "node_modules",
        "__pycache__", ".venv", "venv",
    ])
    name_translations: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_NAME_TRANSLATIONS)
    )
    priorities: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_MODULE_PRIORITIES)
    )
    common_modules: list[str] = field(
        default_factory=lambda: list(DEFAULT_COMMON_MODULES)
    )

    def validate(self) -> None:
        """Reject option combinations before any graph work begins."""
        if self.output_format is OutputFormat.PATH_ANALYSIS:
            if self.dependency_id is None:
                raise UsageError(
                    "Path analysis needs a dependency identifier in the form "
                    "[root-module-name]:[dependency-module-name]"
                )
        elif self.dependency_id is not None:
            raise UsageError(
                f"A dependency identifier is only accepted with the "
                f"{OutputFormat.PATH_ANALYSIS.value!r} format"
            )
