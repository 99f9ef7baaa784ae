"""
Base generator interface for all code generation targets.

Defines the contract that a target language generator must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import Document, ObjectTypeDefinition
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ConfigurationError(GeneratorError):
    """
    The schema declares something the storage layer cannot represent.

    Aborts generation for the whole schema.
    """

    def __init__(
        self, message: str, field_name: str, value_type: str, suggested_type: str
    ):
        super().__init__(message)
        self.field_name = field_name
        self.value_type = value_type
        self.suggested_type = suggested_type


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, document: Document) -> str:
        """
        Generate code for a whole schema.

        Args:
            document: Parsed schema AST

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_single_type(self, definition: ObjectTypeDefinition) -> str:
        """Generate code for one type definition only."""
        pass

    def get_import_statements(self) -> List[str]:
        """Get any required import statements for the generated code."""
        return []

    def entity_definitions(self, document: Document) -> List[ObjectTypeDefinition]:
        """Object types that carry the configured entity directive."""
        return [
            definition
            for definition in document.object_types()
            if definition.has_directive(self.config.entity_directive)
        ]

    def validate_schema(self, document: Document) -> List[str]:
        """
        Report non-fatal issues in the schema.

        Language generators may override this to add their own checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        entities = self.entity_definitions(document)
        if not entities:
            warnings.append(
                f"Schema has no types marked @{self.config.entity_directive}"
            )

        for definition in entities:
            if not definition.fields:
                warnings.append(f"Entity '{definition.name}' has no fields")
            if definition.get_field("id") is None:
                warnings.append(f"Entity '{definition.name}' has no 'id' field")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace and collapses runs of blank lines.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, document: Document) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        document: Schema to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_schema(document)
        for warning in warnings:
            logger.warning(warning)

        code = generator.generate(document)
        formatted_code = generator.format_code(code)

        entities = [d.name for d in generator.entity_definitions(document)]
        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "entity_count": len(entities),
            "entities": entities,
        }

        logger.info("Generated %d entity classes", len(entities))
        return GenerationResult(formatted_code, warnings, metadata)

    except (GeneratorError, TemplateError) as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(str(e), exception=e)
