"""Descriptor discovery and parsing.

Usage::

    from modorder.loader import load_records

    records = load_records("./modules")
"""

from __future__ import annotations

from modorder.loader.descriptor import (
    SUPPORTED_DEFINITION_VERSION,
    DependencyEntry,
    ModuleDescriptor,
    load_descriptor,
    load_records,
    parse_descriptor,
)
from modorder.loader.scanner import DiscoveredDescriptor, scan_descriptors

__all__ = [
    "SUPPORTED_DEFINITION_VERSION",
    "DependencyEntry",
    "DiscoveredDescriptor",
    "ModuleDescriptor",
    "load_descriptor",
    "load_records",
    "parse_descriptor",
    "scan_descriptors",
]
