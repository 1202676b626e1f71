"""Error hierarchy for modorder."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ModorderError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "UnsupportedDescriptorError",
    "DescriptorInvalidError",
    "MissingRequiredDependencyError",
    "InvalidVersionError",
    "InvalidConstraintError",
    "IncompatibleDependencyError",
    "CircularDependencyError",
    "DuplicateModuleError",
    "ErrorCodes",
    "ExitCodes",
]


class ExitCodes:
    """Process exit codes used by the command-line interface."""

    OK = 0
    USAGE = 1
    DESCRIPTOR = 2
    MISSING_DEPENDENCY = 3
    INVALID_VERSION = 4
    INCOMPATIBLE_DEPENDENCY = 5
    CIRCULAR_DEPENDENCY = 6
    DUPLICATE_MODULE = 7

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ExitCodes is immutable")


class ModorderError(Exception):
    """Base error for all modorder errors."""

    exit_code: int = ExitCodes.USAGE

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(ModorderError):
    """Raised when a configuration file or directory cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration path not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(ModorderError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(ModorderError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class UnsupportedDescriptorError(ModorderError):
    """Raised when a descriptor declares a definition version we cannot read."""

    exit_code = ExitCodes.DESCRIPTOR

    def __init__(self, file_path: str, definition_version: Any, **kwargs: Any) -> None:
        super().__init__(
            code="DESCRIPTOR_UNSUPPORTED",
            message=f"{file_path} is in an incompatible format/version ({definition_version!r})",
            details={"file_path": file_path, "definition_version": definition_version},
            **kwargs,
        )


class DescriptorInvalidError(ModorderError):
    """Raised when a descriptor file cannot be parsed or fails validation."""

    exit_code = ExitCodes.DESCRIPTOR

    def __init__(self, *, file_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="DESCRIPTOR_INVALID",
            message=f"Invalid descriptor '{file_path}': {reason}",
            details={"file_path": file_path, "reason": reason},
            **kwargs,
        )


class MissingRequiredDependencyError(ModorderError):
    """Raised when a non-optional dependency has no matching module."""

    exit_code = ExitCodes.MISSING_DEPENDENCY

    def __init__(self, module_id: str, target_id: str, **kwargs: Any) -> None:
        super().__init__(
            code="DEPENDENCY_MISSING",
            message=f"Required dependency {target_id} is missing for {module_id}",
            details={"module_id": module_id, "target_id": target_id},
            **kwargs,
        )

    @property
    def module_id(self) -> str:
        """The module declaring the dependency."""
        return self.details["module_id"]

    @property
    def target_id(self) -> str:
        """The dependency that could not be found."""
        return self.details["target_id"]


class InvalidVersionError(ModorderError):
    """Raised when a module version string is malformed."""

    exit_code = ExitCodes.INVALID_VERSION

    def __init__(
        self,
        version: str,
        candidate_owner_id: str,
        constraint_owner_id: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="VERSION_INVALID",
            message=f"Invalid version {version!r} (from {candidate_owner_id}): {reason}",
            details={
                "version": version,
                "candidate_owner_id": candidate_owner_id,
                "constraint_owner_id": constraint_owner_id,
                "reason": reason,
            },
            **kwargs,
        )

    @property
    def version(self) -> str:
        """The malformed version string."""
        return self.details["version"]


class InvalidConstraintError(ModorderError):
    """Raised when a version constraint expression is malformed."""

    exit_code = ExitCodes.INVALID_VERSION

    def __init__(
        self,
        constraint: str,
        candidate_owner_id: str,
        constraint_owner_id: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="CONSTRAINT_INVALID",
            message=(
                f"Invalid version target {constraint!r} "
                f"(from {constraint_owner_id} for {candidate_owner_id}): {reason}"
            ),
            details={
                "constraint": constraint,
                "candidate_owner_id": candidate_owner_id,
                "constraint_owner_id": constraint_owner_id,
                "reason": reason,
            },
            **kwargs,
        )

    @property
    def constraint(self) -> str:
        """The malformed constraint expression."""
        return self.details["constraint"]


class IncompatibleDependencyError(ModorderError):
    """Raised when a dependency's version does not satisfy the declared constraint."""

    exit_code = ExitCodes.INCOMPATIBLE_DEPENDENCY

    def __init__(
        self,
        module_id: str,
        target_id: str,
        constraint: str,
        version: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="DEPENDENCY_INCOMPATIBLE",
            message=(
                f"Required dependency {target_id}({constraint}) for {module_id} "
                f"is not compatible with {target_id}({version})"
            ),
            details={
                "module_id": module_id,
                "target_id": target_id,
                "constraint": constraint,
                "version": version,
            },
            **kwargs,
        )

    @property
    def module_id(self) -> str:
        """The module declaring the dependency."""
        return self.details["module_id"]

    @property
    def target_id(self) -> str:
        """The dependency whose version was rejected."""
        return self.details["target_id"]


class CircularDependencyError(ModorderError):
    """Raised when the ordering edges between modules form a cycle."""

    exit_code = ExitCodes.CIRCULAR_DEPENDENCY

    def __init__(
        self,
        from_id: str,
        to_id: str,
        cycle_path: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        path = cycle_path or [from_id, to_id]
        super().__init__(
            code="CIRCULAR_DEPENDENCY",
            message=f"Circular dependency detected! {from_id} to {to_id} ({' -> '.join(path)})",
            details={"from_id": from_id, "to_id": to_id, "cycle_path": path},
            **kwargs,
        )

    @property
    def from_id(self) -> str:
        """Source of the edge that closed the cycle."""
        return self.details["from_id"]

    @property
    def to_id(self) -> str:
        """Target of the edge that closed the cycle."""
        return self.details["to_id"]

    @property
    def cycle_path(self) -> list[str]:
        return self.details["cycle_path"]


class DuplicateModuleError(ModorderError):
    """Raised when two module records share an id."""

    exit_code = ExitCodes.DUPLICATE_MODULE

    def __init__(self, module_id: str, sources: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="MODULE_DUPLICATE",
            message=f"Module id {module_id} is declared more than once ({', '.join(sources)})",
            details={"module_id": module_id, "sources": sources},
            **kwargs,
        )


class ErrorCodes:
    """All modorder error codes as constants.

    Example:
        if error.code == ErrorCodes.DEPENDENCY_MISSING:
            handle_missing()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    DESCRIPTOR_UNSUPPORTED = "DESCRIPTOR_UNSUPPORTED"
    DESCRIPTOR_INVALID = "DESCRIPTOR_INVALID"
    DEPENDENCY_MISSING = "DEPENDENCY_MISSING"
    VERSION_INVALID = "VERSION_INVALID"
    CONSTRAINT_INVALID = "CONSTRAINT_INVALID"
    DEPENDENCY_INCOMPATIBLE = "DEPENDENCY_INCOMPATIBLE"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    MODULE_DUPLICATE = "MODULE_DUPLICATE"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
