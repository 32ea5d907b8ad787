"""Abstract base scanner: descriptor discovery and module naming."""

from __future__ import annotations

import abc
import fnmatch
import logging
from pathlib import Path

from modgraph.errors import DescriptorReadError
from modgraph.models import ModuleDescriptor

logger = logging.getLogger(__name__)


class BaseScanner(abc.ABC):
    """Base class for build-descriptor scanners."""

    descriptor_name: str

    def __init__(
        self,
        skip_dirs: list[str] | None = None,
        name_translations: dict[str, str] | None = None,
    ):
        self.skip_dirs = skip_dirs or [".git", "build", "out", "node_modules"]
        self.name_translations = name_translations or {}

    @abc.abstractmethod
    def extract_dependencies(self, text: str) -> set[str]:
        """Return the module names declared as dependencies in descriptor text."""

    def scan_file(self, project_dir: Path, file_path: Path) -> ModuleDescriptor:
        """Read one descriptor. An unreadable descriptor aborts the scan."""
        try:
            text = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise DescriptorReadError(file_path, e.strerror or str(e)) from e
        return ModuleDescriptor(
            name=self.module_name(project_dir, file_path),
            descriptor_path=file_path,
            dependencies=self.extract_dependencies(text),
        )

    def scan_directory(self, project_dir: Path) -> list[ModuleDescriptor]:
        """Recursively scan a project for module descriptors."""
        return [
            self.scan_file(project_dir, path)
            for path in self.discover(project_dir)
        ]

    def discover(self, project_dir: Path) -> list[Path]:
        """Module descriptors below ``project_dir``; the project's own is skipped."""
        root_descriptor = project_dir / self.descriptor_name
        found: list[Path] = []
        for path in sorted(project_dir.rglob(self.descriptor_name)):
            if not path.is_file() or path == root_descriptor:
                continue
            if self._should_skip(path.relative_to(project_dir)):
                continue
            found.append(path)
        logger.debug("found %d descriptor(s) under %s", len(found), project_dir)
        return found

    def module_name(self, project_dir: Path, file_path: Path) -> str:
        """Module name from the descriptor's directory, relative to the project."""
        name = file_path.parent.relative_to(project_dir).as_posix()
        return self.name_translations.get(name, name)

    def _should_skip(self, relative: Path) -> bool:
        for part in relative.parts[:-1]:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
