import enum
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from exhibitor_web import settings
from exhibitor_web.local.config import PropertySource, PropertySourceReader
from exhibitor_web.local.loader import load_object
from . import remote_auth
from .arguments import REMOTE_AUTH_ARG, ArgumentTranslator, to_arg_name, to_args_array
from .cli import ExhibitorCLI
from .closeables import close_all, close_quietly
from .errors import CloseFailure, CreationFailureKind, ExhibitorCreationError, InitializationError
from .interfaces import CreatorFactory, Supervisor, SupervisorCreator, SupervisorFactory

log = logging.getLogger(__name__)


class LifecycleState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    RUNNING = "running"
    CLOSED = "closed"


class ExhibitorLifecycle:
    """
    Owns the supervisor for the lifetime of the hosting application.

    `initialize()` builds and starts the supervisor exactly once and
    publishes it on the host's attribute store. `destroy()` is best effort:
    it tolerates any partial state left by a failed `initialize()` and never
    raises.
    """

    def __init__(
        self,
        creator_factory: Union[CreatorFactory, str, None] = None,
        supervisor_factory: Union[SupervisorFactory, str, None] = None,
        resource_path: Optional[Path] = None,
        translator: Optional[ArgumentTranslator] = None,
    ) -> None:
        self.creator_factory = creator_factory if creator_factory is not None else settings.CREATOR_FACTORY
        self.supervisor_factory = supervisor_factory if supervisor_factory is not None else settings.SUPERVISOR_FACTORY
        self.resource_path = resource_path
        self.translator = translator or ArgumentTranslator()

        # Read by request handlers once published; not mutated again until destroy().
        self.exhibitor: Optional[Supervisor] = None
        self.exhibitor_creator: Optional[SupervisorCreator] = None
        self.state = LifecycleState.UNINITIALIZED

    @classmethod
    def attribute_key(cls) -> str:
        """The name the running supervisor is published under on the host's attribute store."""
        return f"{cls.__module__}.{cls.__qualname__}"

    def initialize(self, state: Any, source: Optional[PropertySource] = None) -> Supervisor:
        """
        Builds, starts and publishes the supervisor.

        :param state: The host's shared attribute store (e.g. Starlette's `app.state`).
        :param source: Live properties; defaults to a snapshot of the environment.
        :return: The running supervisor.
        :raises InitializationError: On any failure. The handles assigned before the
            failure are kept so `destroy()` can release them.
        """
        if self.state is not LifecycleState.UNINITIALIZED:
            raise InitializationError(f"Exhibitor lifecycle cannot be initialized while {self.state.value}.")
        self.state = LifecycleState.INITIALIZING

        try:
            source = source if source is not None else PropertySource.from_environ()
            properties = PropertySourceReader(self.resource_path, source).load()
            pairs = self.translator.translate(properties, source)

            # Supervisor modules register their providers on import; load before the creator parses.
            supervisor_factory = self._resolve(self.supervisor_factory, "supervisor")
            creator_factory = self._resolve(self.creator_factory, "creator")

            self.exhibitor_creator = creator_factory(to_args_array(pairs))
            creator = self.exhibitor_creator

            builder = remote_auth.decorate(creator.builder, ArgumentTranslator.lookup(pairs, REMOTE_AUTH_ARG))
            self.exhibitor = supervisor_factory(creator.config_provider, None, creator.backup_provider, builder.build())
            self.exhibitor.start()

            setattr(state, self.attribute_key(), self.exhibitor)
        except Exception as e:
            failure = e if isinstance(e, ExhibitorCreationError) else ExhibitorCreationError.other(e)
            self._report_failure(failure)
            raise InitializationError(f"Could not start Exhibitor: {failure}") from e

        self.state = LifecycleState.RUNNING
        log.info(f"Exhibitor started and published as '{self.attribute_key()}'.")
        return self.exhibitor

    def destroy(self) -> List[CloseFailure]:
        """
        Closes the supervisor, then every auxiliary closeable of the creator.

        Each close failure is logged and collected; none is raised.

        :return: The failures encountered, in the order they happened.
        """
        failures: List[CloseFailure] = []

        if self.exhibitor is not None:
            failure = close_quietly(self.exhibitor)
            if failure is not None:
                failures.append(failure)
            self.exhibitor = None

        if self.exhibitor_creator is not None:
            failures.extend(close_all(self.exhibitor_creator.closeables))
            self.exhibitor_creator = None

        if self.state is not LifecycleState.UNINITIALIZED:
            self.state = LifecycleState.CLOSED
            log.info(f"Exhibitor lifecycle closed with {len(failures)} close failure(s).")
        return failures

    def _resolve(self, factory: Union[Callable, str], role: str) -> Callable:
        if callable(factory):
            return factory
        if not factory:
            raise ValueError(
                f"No {role} factory configured. Set EXHIBITOR_{role.upper()}_FACTORY to a 'module:attr' path."
            )
        return load_object(factory)

    def _report_failure(self, failure: ExhibitorCreationError) -> None:
        prefix = self.translator.prefix
        if failure.kind is CreationFailureKind.MISSING_CONFIG_TYPE:
            config_type = self.translator.property_name(to_arg_name(ExhibitorCLI.CONFIG_TYPE))
            log.error(f"Configuration type ({config_type}) must be specified")
            if failure.cli is not None:
                failure.cli.log_help(prefix)
        elif failure.kind is CreationFailureKind.CREATOR_EXIT:
            if failure.message:
                log.error(failure.message)
            if failure.cli is not None:
                failure.cli.log_help(prefix)
        else:
            log.error("Trying to create Exhibitor", exc_info=failure.cause or failure)
