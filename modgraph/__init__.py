"""modgraph: direct and transitive dependencies of multi-module Gradle projects."""

__version__ = "0.1.0"
