"""
Lookup of code generators by language name.

The CLI and ``generate_source`` select a generator by name ("csharp", or an
alias such as "cs") and hand it a configuration in whichever form the caller
has: a ``GeneratorConfig``, a dict of overrides, or a JSON file path.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from ..logging_config import get_logger
from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Maps language names and their aliases to generator classes."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
    ):
        """
        Register a generator under a language name.

        Args:
            language: Primary language name (e.g., 'csharp')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this language

        Raises:
            RegistryError: If the class is not a CodeGenerator
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()
        self._generators[language_key] = generator_class
        for alias in aliases or []:
            self._aliases[alias.lower()] = language_key
        logger.debug("Registered %s generator", language_key)

    def resolve(self, language: str) -> str:
        """
        Resolve a name or alias to the primary language name.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        language_key = self._aliases.get(language_key, language_key)
        if language_key not in self._generators:
            raise RegistryError(
                f"No generator registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return language_key

    def is_supported(self, language: str) -> bool:
        """Check whether a name or alias resolves to a generator."""
        try:
            self.resolve(language)
        except RegistryError:
            return False
        return True

    def create_generator(
        self, language: str, config: Optional[ConfigSource] = None
    ) -> CodeGenerator:
        """
        Create a configured generator.

        Args:
            language: Language name or alias
            config: GeneratorConfig, dict of overrides, or JSON file path

        Returns:
            Generator instance

        Raises:
            RegistryError: If the language or the config form is unknown
        """
        generator_class = self._generators[self.resolve(language)]

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config)

    def list_languages(self) -> List[str]:
        """Registered primary language names, sorted."""
        return sorted(self._generators)

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language for the ``--list-languages`` table.

        Raises:
            RegistryError: If language not found
        """
        language_key = self.resolve(language)
        generator = self.create_generator(language_key)
        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": sorted(
                alias
                for alias, target in self._aliases.items()
                if target == language_key
            ),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global registry, registering the bundled generators on first use."""
    global _global_registry
    if _global_registry is None:
        # Imported here; the language packages import the core modules
        from .languages.csharp import CSharpGenerator

        _global_registry = GeneratorRegistry()
        _global_registry.register("csharp", CSharpGenerator, aliases=["cs", "c#"])
    return _global_registry


def get_generator(
    language: str = "csharp", config: Optional[ConfigSource] = None
) -> CodeGenerator:
    """Create a generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Info for every supported language, keyed by primary name."""
    registry = get_registry()
    return {
        language: registry.get_language_info(language)
        for language in registry.list_languages()
    }
