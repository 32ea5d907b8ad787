"""Gradle scanner: regex extraction of project dependencies from build.gradle."""

from __future__ import annotations

import re

from modgraph.scanner.base import BaseScanner

# project(':x') / project(":x:y")
_PROJECT_RE = re.compile(r"project\(\s*['\"]:([^'\"\s]+)['\"]\s*\)")
_DEPENDENCIES_RE = re.compile(r"dependencies\W+\{")
# A line holding nothing but the closing bracket of a compile ( ... ) block
_BLOCK_END_RE = re.compile(r"^\W*\)\W*$")


def gradle_path_to_module(gradle_path: str) -> str:
    """``a:b`` (Gradle project path without the leading colon) -> ``a/b``."""
    return gradle_path.strip(":").replace(":", "/")


class GradleScanner(BaseScanner):
    """Finds module dependencies declared in either of two styles.

    One declaration per line::

        dependencies {
            compile project(':common')
        }

    or grouped in a block::

        dependencies {
            compile (
                project(':common'),
                project(':dataaccess')
            )
        }
    """

    descriptor_name = "build.gradle"

    def __init__(
        self,
        skip_dirs: list[str] | None = None,
        name_translations: dict[str, str] | None = None,
        configurations: list[str] | None = None,
        descriptor_name: str | None = None,
    ):
        super().__init__(skip_dirs=skip_dirs, name_translations=name_translations)
        if descriptor_name:
            self.descriptor_name = descriptor_name
        self.configurations = list(configurations or ["compile"])
        keywords = "|".join(re.escape(c) for c in self.configurations)
        self._single_line_re = re.compile(
            rf"\b(?:{keywords})\s+project\(\s*['\"]:([^'\"\s]+)['\"]\s*\)"
        )
        self._block_start_re = re.compile(rf"\b(?:{keywords})\W*\(")

    def extract_dependencies(self, text: str) -> set[str]:
        found: set[str] = set()
        in_dependencies = in_block = False
        for line in text.splitlines():
            opened = False
            if not in_dependencies:
                in_dependencies = bool(_DEPENDENCIES_RE.search(line))
            elif not in_block:
                in_block = opened = bool(self._block_start_re.search(line))
            if in_dependencies and in_block:
                found.update(
                    gradle_path_to_module(m.group(1)) for m in _PROJECT_RE.finditer(line)
                )
                if _BLOCK_END_RE.search(line) or (opened and _closes_itself(line)):
                    in_dependencies = in_block = False
            match = self._single_line_re.search(line)
            if match:
                found.add(gradle_path_to_module(match.group(1)))
        return found


def _closes_itself(line: str) -> bool:
    """``compile(project(':a'))`` opens and closes the block on one line."""
    return "(" in line and line.count("(") == line.count(")")
