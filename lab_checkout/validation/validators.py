"""
Validation framework for raw request fields.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Reusable field checks returning an error message or None
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    """
    Result of field validation.

    Attributes:
        is_valid: Whether validation passed
        errors: List of error messages
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message.

        Args:
            message: Error message to add

        Returns:
            Self for method chaining
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    @property
    def first_error(self) -> Optional[str]:
        """Get the first recorded error, if any."""
        return self.errors[0] if self.errors else None


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate(); the helpers below return an error
    message when a value is invalid and None when it passes.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with any errors
        """
        pass

    def validate_string_length(
        self,
        value: Any,
        field_name: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None
    ) -> Optional[str]:
        """
        Validate string length.

        Args:
            value: String to validate
            field_name: Name of the field (for error message)
            min_length: Minimum length (optional)
            max_length: Maximum length (optional)

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"

        length = len(value)

        if min_length is not None and length < min_length:
            return f"{field_name} must be at least {min_length} characters, got {length}"

        if max_length is not None and length > max_length:
            return f"{field_name} must be at most {max_length} characters, got {length}"

        return None

    def validate_no_whitespace(
        self,
        value: str,
        field_name: str
    ) -> Optional[str]:
        """Reject strings containing any whitespace character."""
        if any(char.isspace() for char in value):
            return f"{field_name} must not contain whitespace"
        return None

    def validate_integer_range(
        self,
        value: Any,
        field_name: str,
        minimum: int,
        maximum: int
    ) -> Optional[str]:
        """
        Validate that value is an integer within [minimum, maximum].

        Args:
            value: Value to validate
            field_name: Name of the field (for error message)
            minimum: Lowest accepted value
            maximum: Highest accepted value

        Returns:
            Error message if invalid, None if valid
        """
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            return f"{field_name} must be an integer, got {type(value).__name__}"

        if value < minimum or value > maximum:
            return f"{field_name} must be between {minimum} and {maximum}, got {value}"

        return None
