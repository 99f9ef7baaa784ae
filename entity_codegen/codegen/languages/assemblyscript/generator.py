"""
AssemblyScript code generator implementation.

Generates typed entity classes over the graph-ts store from a GraphQL
schema AST.
"""

from pathlib import Path
from typing import List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.model import ArrayType, Klass, NullableType
from ...core.schema import Document, ObjectTypeDefinition
from .entities import SchemaCodeGenerator
from .renderer import AssemblyScriptRenderer

logger = get_logger(__name__)

HEADER_COMMENT = (
    "THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.\n"
    "Regenerate it from the schema instead."
)


class AssemblyScriptGenerator(CodeGenerator):
    """Code generator for AssemblyScript entity classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize AssemblyScript generator with configuration."""
        super().__init__(config)
        self.renderer = AssemblyScriptRenderer(self.config.indent_size)

    def get_template_directory(self) -> Optional[Path]:
        """Return the AssemblyScript templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        return "assemblyscript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def schema_generator(self, document: Document) -> SchemaCodeGenerator:
        return SchemaCodeGenerator(document, self.config)

    def generate(self, document: Document) -> str:
        """Generate the complete module for all entity types."""
        schema_generator = self.schema_generator(document)

        classes = schema_generator.generate_types()
        logger.debug("Rendering %d classes", len(classes))

        imports = [
            self.renderer.render_imports(block)
            for block in schema_generator.generate_module_imports()
        ]

        return self.render_template(
            "module.ts.j2",
            {
                "header": HEADER_COMMENT if self.config.add_comments else None,
                "imports": imports,
                "classes": [self.render_class(klass) for klass in classes],
            },
        )

    def generate_single_type(self, definition: ObjectTypeDefinition) -> str:
        """Generate the class for one type, entity directive or not."""
        schema_generator = self.schema_generator(Document([definition]))
        return self.render_class(schema_generator.generate_entity_type(definition))

    def render_class(self, klass: Klass) -> str:
        return self.render_template(
            "class.ts.j2",
            {
                "name": klass.name,
                "extends": klass.extends,
                "export": klass.export,
                "methods": [self.renderer.render_method(m) for m in klass.methods],
                "indent_size": self.config.indent_size,
            },
        ).rstrip("\n")

    def get_import_statements(self) -> List[str]:
        schema_generator = SchemaCodeGenerator(Document(), self.config)
        return [
            self.renderer.render_imports(block)
            for block in schema_generator.generate_module_imports()
        ]

    def validate_schema(self, document: Document) -> List[str]:
        """Add checks for field shapes the generator accepts but handles poorly."""
        warnings = super().validate_schema(document)
        type_mapper = self.schema_generator(document).type_mapper

        for definition in self.entity_definitions(document):
            for field_def in definition.fields:
                if field_def.name in ("save", "load"):
                    warnings.append(
                        f"Field {definition.name}.{field_def.name} shadows the "
                        f"generated {field_def.name}() method"
                    )
                elif field_def.name == "id" and str(field_def.type) not in (
                    "ID!",
                    "String!",
                ):
                    warnings.append(
                        f"Field {definition.name}.id is declared as "
                        f"'{field_def.type}'; entity ids should be 'ID!'"
                    )

                # Only non-null lists are rejected for nullable members
                field_type = type_mapper.type_from_graphql(field_def.type)
                if (
                    isinstance(field_type, NullableType)
                    and isinstance(field_type.inner, ArrayType)
                    and isinstance(field_type.inner.inner, NullableType)
                ):
                    warnings.append(
                        f"Field {definition.name}.{field_def.name} is a nullable "
                        f"list with nullable members ('{field_def.type}')"
                    )

        return warnings
