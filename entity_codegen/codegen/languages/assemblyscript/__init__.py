"""
AssemblyScript entity code generator.

Generates typed entity classes for the graph-ts store from a GraphQL schema.
"""

from .entities import MODULE_IMPORTS, SchemaCodeGenerator
from .generator import AssemblyScriptGenerator
from .renderer import AssemblyScriptRenderer
from .types import (
    DEFAULT_SCALAR_TYPES,
    AscTypeConfig,
    AscTypeMapper,
    split_value_type,
)

__all__ = [
    "AssemblyScriptGenerator",
    "AssemblyScriptRenderer",
    "SchemaCodeGenerator",
    "MODULE_IMPORTS",
    "AscTypeConfig",
    "AscTypeMapper",
    "DEFAULT_SCALAR_TYPES",
    "split_value_type",
]
