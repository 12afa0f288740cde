import enum
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

if TYPE_CHECKING:
    from .cli import ExhibitorCLI


class CreationFailureKind(enum.Enum):
    """Why the supervisor could not be created."""
    MISSING_CONFIG_TYPE = "missing_config_type"
    CREATOR_EXIT = "creator_exit"
    OTHER = "other"


class ExhibitorCreationError(Exception):
    """
    A tagged failure of the creation step.

    Callers dispatch on `kind` rather than on exception subclasses. `cli` is
    set for the two kinds that print the option table.
    """

    def __init__(
        self,
        kind: CreationFailureKind,
        message: Optional[str] = None,
        cli: Optional["ExhibitorCLI"] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message
        self.cli = cli
        self.cause = cause

    @classmethod
    def missing_config_type(cls, cli: "ExhibitorCLI") -> "ExhibitorCreationError":
        return cls(CreationFailureKind.MISSING_CONFIG_TYPE, cli=cli)

    @classmethod
    def creator_exit(cls, cli: "ExhibitorCLI", message: Optional[str] = None) -> "ExhibitorCreationError":
        return cls(CreationFailureKind.CREATOR_EXIT, message=message, cli=cli)

    @classmethod
    def other(cls, cause: BaseException) -> "ExhibitorCreationError":
        return cls(CreationFailureKind.OTHER, message=str(cause) or type(cause).__name__, cause=cause)


class InitializationError(RuntimeError):
    """Raised to the host when the supervisor could not be brought up."""


class RemoteAuthorizationError(ValueError):
    """The remote client authorization spec is malformed."""


class CloseFailure(NamedTuple):
    resource: Any
    error: Exception
