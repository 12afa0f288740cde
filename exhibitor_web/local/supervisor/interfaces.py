"""
Collaborator protocols for the supervisor bootstrap.

The supervisor and its configuration/backup providers live outside this
package; the bootstrap only relies on the narrow surface described here.
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, Sequence, Tuple

from .models import ExhibitorArguments, ExhibitorArgumentsBuilder

if TYPE_CHECKING:
    from .cli import ExhibitorCLI


class Closeable(Protocol):
    def close(self) -> None: ...


class Supervisor(Protocol):
    """The long-lived coordination-service manager (the Exhibitor)."""

    def start(self) -> None: ...

    def close(self) -> None: ...


class SupervisorCreator(Protocol):
    """Turns an argument array into the pieces a supervisor is built from."""

    cli: "ExhibitorCLI"

    @property
    def config_provider(self) -> Any: ...

    @property
    def backup_provider(self) -> Optional[Any]: ...

    @property
    def builder(self) -> ExhibitorArgumentsBuilder: ...

    @property
    def closeables(self) -> Tuple[Closeable, ...]: ...


CreatorFactory = Callable[[Sequence[str]], SupervisorCreator]

# (config provider, secondary argument (always None), backup provider, arguments)
SupervisorFactory = Callable[[Any, None, Optional[Any], ExhibitorArguments], Supervisor]
