"""modorder - load order resolution for interdependent modules."""

from __future__ import annotations

# Core
from modorder.graph import ROOT_ID, DependencyGraph, ModuleNode, build_graph
from modorder.resolver import resolve, resolve_load_order
from modorder.version import is_compatible, parse_constraint, parse_version

# Types
from modorder.types import DependencyOrder, DependencySpec, ModuleRecord, ResolvedModule

# Config
from modorder.config import Config

# Errors
from modorder.errors import (
    CircularDependencyError,
    ConfigError,
    ConfigNotFoundError,
    DescriptorInvalidError,
    DuplicateModuleError,
    ErrorCodes,
    ExitCodes,
    IncompatibleDependencyError,
    InvalidConstraintError,
    InvalidInputError,
    InvalidVersionError,
    MissingRequiredDependencyError,
    ModorderError,
    UnsupportedDescriptorError,
)

# Loader
from modorder.loader import load_descriptor, load_records, scan_descriptors

__version__ = "0.1.0"

__all__ = [
    # Core
    "build_graph",
    "resolve",
    "resolve_load_order",
    "is_compatible",
    "parse_version",
    "parse_constraint",
    "DependencyGraph",
    "ModuleNode",
    "ROOT_ID",
    # Types
    "DependencyOrder",
    "DependencySpec",
    "ModuleRecord",
    "ResolvedModule",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "ExitCodes",
    "ModorderError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidInputError",
    "UnsupportedDescriptorError",
    "DescriptorInvalidError",
    "MissingRequiredDependencyError",
    "InvalidVersionError",
    "InvalidConstraintError",
    "IncompatibleDependencyError",
    "CircularDependencyError",
    "DuplicateModuleError",
    # Loader
    "load_descriptor",
    "load_records",
    "scan_descriptors",
]
