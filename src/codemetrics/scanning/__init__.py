"""Parsing helpers: tree-sitter wrapper and host-template normalizer."""

from .normalizer import find_script_bodies, mask_host_template
from .treesitter_parser import TreeSitterParser, get_supported_grammars

__all__ = [
    "TreeSitterParser",
    "get_supported_grammars",
    "mask_host_template",
    "find_script_bodies",
]
