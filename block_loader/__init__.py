"""
Block Loader — découverte de blocs depuis des templates sur disque.

Usage:
    >>> from block_loader import BlockLoader, BlockLoaderConfig
    >>> loader = BlockLoader(BlockLoaderConfig(root_dir="/srv/theme"))
    >>> blocks = loader.get_blocks()
    >>> html = loader.render_block(blocks["hero"], session=loader.new_session())
"""
from .config import BlockCategory, BlockHooks, BlockLoaderConfig, RegistrarMode, DEFAULT_WRAP
from .schemas import BlockDescriptor
from .headers import HEADERS, get_block_data, get_file_data, normalize, parse_comma_separated_list, parse_file_headers
from .ids import BlockIdCounter, UNIQUE_ID_FIELDS, slugify
from .loader import BlockLoader
from .renderer import render_template, wrap_block

__version__ = "1.0.0"

__all__ = [
    # config
    "BlockCategory", "BlockHooks", "BlockLoaderConfig", "RegistrarMode", "DEFAULT_WRAP",
    # blocs
    "BlockDescriptor", "BlockLoader",
    # en-têtes
    "HEADERS", "get_block_data", "get_file_data", "normalize",
    "parse_comma_separated_list", "parse_file_headers",
    # ids
    "BlockIdCounter", "UNIQUE_ID_FIELDS", "slugify",
    # rendu
    "render_template", "wrap_block",
]
