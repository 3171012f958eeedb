"""Configuration validation"""

from typing import List
from ..models.config import ProxyConfig


class ConfigValidator:
    """Validate proxy configuration for consistency and completeness

    A missing upstream credential is deliberately not checked here: it is
    reported per request by the chat handler.
    """

    def __init__(self, config: ProxyConfig):
        """
        Initialize validator with configuration

        Args:
            config: Proxy configuration to validate
        """
        self.config = config
        self.errors: List[str] = []

    def validate_model_mappings(self) -> None:
        """Validate that an overriding model table is usable"""
        mappings = self.config.model_mappings
        if mappings is None:
            return

        if not mappings:
            self.errors.append("model_mappings is set but empty")

        for public_id, upstream_id in mappings.items():
            if not public_id.strip():
                self.errors.append("Model mapping with an empty public model id")
            if not upstream_id.strip():
                self.errors.append(
                    f"Model mapping '{public_id}' has an empty upstream model id"
                )

    def validate_default_model(self) -> None:
        """Validate the fallback upstream model, if overridden"""
        default_model = self.config.default_model
        if default_model is not None and not default_model.strip():
            self.errors.append("default_model is set but empty")

    def validate_all(self) -> List[str]:
        """
        Run all validation checks

        Returns:
            List of validation error messages (empty if valid)
        """
        self.errors = []

        self.validate_model_mappings()
        self.validate_default_model()

        return self.errors

    def is_valid(self) -> bool:
        """
        Check if configuration is valid

        Returns:
            True if valid, False otherwise
        """
        errors = self.validate_all()
        return len(errors) == 0


def validate_config(config: ProxyConfig) -> None:
    """
    Validate configuration and raise exception if invalid

    Args:
        config: Configuration to validate

    Raises:
        ValueError: If configuration is invalid
    """
    validator = ConfigValidator(config)
    errors = validator.validate_all()

    if errors:
        error_message = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
        raise ValueError(error_message)
