"""
Startup validation utilities to check resolver health before serving requests.

Checks credentials, provider configuration and the bundled entity
registries. Missing credentials only degrade the service (no context
caching), so they are reported as warnings; broken registries are errors.
"""

import os
import sys
from typing import List, Mapping, Optional

from src.config.common_settings import GOOGLE_API_KEY, OPENAI_API_KEY, RESOLVER_LLM_PROVIDER
from src.config.resolver_models import RESOLVER_MODEL_OVERRIDES
from src.knowledge.entity_registry import EntityRegistry, load_default_registries
from src.resolution.context_builder import DELIMITER
from src.utils.logger import logger

# Characters the reference context builder must escape
_DELIMITER_CHARS = (DELIMITER, "\\")
_SUPPORTED_PROVIDERS = ("gemini", "vertex_ai", "openai")


class StartupValidator:
    """Non-fatal startup validation for the entity resolver service."""

    def __init__(self, registries: Optional[Mapping[str, EntityRegistry]] = None):
        self.registries = registries
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self) -> bool:
        """
        Run all validation checks.

        Returns:
            True if all critical checks pass, False otherwise.
        """
        logger.info("StartupValidator: Beginning system validation")

        if self.registries is None:
            self.registries = load_default_registries()

        # Critical validations
        self._validate_registries()
        self._validate_provider_config()

        # Non-critical validations (warnings only)
        self._validate_credentials()
        self._validate_registry_delimiters()

        self._report_results()

        return len(self.errors) == 0

    def _validate_credentials(self) -> None:
        if not GOOGLE_API_KEY:
            self.warnings.append("GOOGLE_API_KEY not set: context caching disabled, resolvers run with inline context")
        if not os.environ.get("RESOLVER_API_TOKEN"):
            self.warnings.append("RESOLVER_API_TOKEN not set: HTTP routes will reject every request")

    def _validate_provider_config(self) -> None:
        providers = {RESOLVER_LLM_PROVIDER}
        providers.update(
            (override.get("provider") or RESOLVER_LLM_PROVIDER).lower()
            for override in RESOLVER_MODEL_OVERRIDES.values()
        )

        for provider in sorted(providers):
            if provider not in _SUPPORTED_PROVIDERS:
                self.errors.append(f"Unsupported LLM provider: {provider}")
            elif provider == "openai" and not OPENAI_API_KEY:
                self.errors.append("OPENAI_API_KEY required for OpenAI provider")
            elif provider == "vertex_ai" and not os.environ.get("GOOGLE_APPLICATION_CREDENTIALS") and not os.path.exists(".gcloud.json"):
                self.warnings.append("Google Cloud credentials not found for Vertex AI provider")

        logger.info("StartupValidator: Provider validation completed")

    def _validate_registries(self) -> None:
        for entity_type, registry in self.registries.items():
            if len(registry) == 0:
                self.errors.append(f"Registry '{entity_type}' is empty")
                continue
            duplicates = registry.duplicate_ids()
            if duplicates:
                self.errors.append(f"Registry '{entity_type}' has duplicate ids: {', '.join(sorted(set(duplicates)))}")

    def _validate_registry_delimiters(self) -> None:
        for entity_type, registry in self.registries.items():
            affected = [
                record.canonical_id
                for record in registry
                if any(
                    char in str(value)
                    for value in (record.id, record.name, record.symbol, record.display_name)
                    if value is not None
                    for char in _DELIMITER_CHARS
                )
            ]
            if affected:
                self.warnings.append(
                    f"Registry '{entity_type}' has delimiter characters in {len(affected)} record(s) "
                    f"({', '.join(affected[:5])}); values will be escaped"
                )

    def _report_results(self) -> None:
        """Report validation results."""
        if self.errors:
            logger.error("StartupValidator: %d critical errors found:", len(self.errors))
            for error in self.errors:
                logger.error("  - %s", error)

        if self.warnings:
            logger.warning("StartupValidator: %d warnings found:", len(self.warnings))
            for warning in self.warnings:
                logger.warning("  - %s", warning)

        if not self.errors and not self.warnings:
            logger.info("StartupValidator: All validation checks passed successfully")
        elif not self.errors:
            logger.info("StartupValidator: Critical validation passed with %d warnings", len(self.warnings))


def validate_startup(registries: Optional[Mapping[str, EntityRegistry]] = None) -> bool:
    """
    Run startup validation and return success status.

    Returns:
        True if validation passes, False if critical errors found.
    """
    validator = StartupValidator(registries)
    return validator.validate_all()


def validate_or_exit() -> None:
    """Run startup validation and exit if critical errors are found."""
    if not validate_startup():
        logger.error("StartupValidator: Critical validation errors found. Exiting.")
        sys.exit(1)

    logger.info("StartupValidator: System validation completed successfully")


if __name__ == "__main__":
    validate_or_exit()
