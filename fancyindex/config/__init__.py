"""Configuration management for fancyindex.

This package turns command-line arguments and location config files
into one merged ListingConfig per location.

Modules:
- model: ListingConfig and the readme / include-mode constants
- parsers: Parse directives and readme options
- merger: Inherit settings from enclosing locations
- validators: Validate merged configuration
"""

from .model import ListingConfig
from .parsers import DirectiveParser, ReadmeOptionsParser
from .merger import ConfigMerger
from .validators import ConfigValidator

__all__ = [
    "ListingConfig",
    "DirectiveParser",
    "ReadmeOptionsParser",
    "ConfigMerger",
    "ConfigValidator",
]
