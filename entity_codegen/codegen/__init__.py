"""
Entity code generation.

Generates typed AssemblyScript entity classes from a GraphQL schema AST.
"""

from typing import Any, Dict, Optional, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import GenerationResult, generate_code
from .core.schema import Document, load_document
from .languages.assemblyscript import AssemblyScriptGenerator


def get_generator(
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> AssemblyScriptGenerator:
    """Create a generator from a config object or a dict of overrides."""
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)
    return AssemblyScriptGenerator(config)


def generate_from_ast(
    ast: Union[Document, Dict[str, Any]],
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> GenerationResult:
    """
    Generate entity classes from a schema AST.

    Args:
        ast: A Document or the graphql-js JSON AST
        config: Generator configuration or overrides

    Returns:
        GenerationResult with generated code
    """
    document = ast if isinstance(ast, Document) else load_document(ast)
    return generate_code(get_generator(config), document)


def quick_generate(ast: Union[Document, Dict[str, Any]], **options) -> str:
    """
    Generate entity classes and return the code, raising on failure.

    Args:
        ast: A Document or the graphql-js JSON AST
        **options: Generator configuration overrides

    Returns:
        Generated code string
    """
    result = generate_from_ast(ast, options)
    if result.success:
        return result.code
    raise RuntimeError(f"Code generation failed: {result.error_message}")


__all__ = [
    "AssemblyScriptGenerator",
    "GeneratorConfig",
    "GenerationResult",
    "generate_from_ast",
    "get_generator",
    "quick_generate",
]
