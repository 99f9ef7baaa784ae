"""
Core code generation components.

Provides the schema AST, the code model and the base generator interface.
"""

from .generator import (
    CodeGenerator,
    ConfigurationError,
    GeneratorError,
    GenerationResult,
    generate_code,
)
from .schema import (
    Document,
    ObjectTypeDefinition,
    FieldDefinition,
    Directive,
    NamedType,
    NonNullType,
    ListType,
    SchemaError,
    load_document,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "ConfigurationError",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema AST
    "Document",
    "ObjectTypeDefinition",
    "FieldDefinition",
    "Directive",
    "NamedType",
    "NonNullType",
    "ListType",
    "SchemaError",
    "load_document",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
