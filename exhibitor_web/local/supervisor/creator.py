import argparse
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .cli import ExhibitorCLI
from .closeables import close_all
from .errors import ExhibitorCreationError
from .models import ExhibitorArgumentsBuilder

log = logging.getLogger(__name__)

ProviderFactory = Callable[[argparse.Namespace], Any]

# Populated at import time by the supervisor module, which the lifecycle loads before the creator runs.
CONFIG_PROVIDERS: Dict[str, ProviderFactory] = {}
BACKUP_PROVIDERS: Dict[str, ProviderFactory] = {}

TRUE_VALUES = ('true', '1', 't', 'yes', 'y')


def register_config_provider(config_type: str, factory: ProviderFactory) -> None:
    """Makes `-configtype <config_type>` build its config provider with `factory`."""
    CONFIG_PROVIDERS[config_type] = factory
    log.debug(f"Registered config provider for configtype '{config_type}'")


def register_backup_provider(name: str, factory: ProviderFactory) -> None:
    """Registers the backup provider selected by `-s3backup true` ('s3') or `-filesystembackup true` ('filesystem')."""
    BACKUP_PROVIDERS[name] = factory
    log.debug(f"Registered backup provider '{name}'")


def _is_true(value: Optional[str]) -> bool:
    return str(value).lower() in TRUE_VALUES


def _to_int(cli: ExhibitorCLI, name: str, value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ExhibitorCreationError.creator_exit(cli, f"Option -{name} must be a number, got '{value}'.")


class ExhibitorCreator:
    """
    Builds the pieces a supervisor is constructed from.

    Parses the argument array, then resolves the config provider for the
    requested config type, the optional backup provider and the client
    configuration builder. Every provider with a `close()` method is
    registered as an auxiliary closeable for the host to release at shutdown.
    """

    def __init__(
        self,
        args: Sequence[str],
        config_providers: Optional[Mapping[str, ProviderFactory]] = None,
        backup_providers: Optional[Mapping[str, ProviderFactory]] = None,
    ) -> None:
        self.cli = ExhibitorCLI()
        self._closeables: List[Any] = []
        self._config_providers = CONFIG_PROVIDERS if config_providers is None else config_providers
        self._backup_providers = BACKUP_PROVIDERS if backup_providers is None else backup_providers

        options = self.cli.parse(args)
        if options.help:
            raise ExhibitorCreationError.creator_exit(self.cli)
        if not options.configtype:
            raise ExhibitorCreationError.missing_config_type(self.cli)

        try:
            self._config_provider = self._make_config_provider(options)
            self._backup_provider = self._make_backup_provider(options)
            self._builder = self._make_builder(options)
        except Exception:
            # Nothing will own this creator, so release what it registered.
            close_all(self._closeables)
            raise

        self.remote_authorization: Optional[str] = options.remoteauth
        log.info(f"Exhibitor creator ready (configtype={options.configtype}).")

    @property
    def config_provider(self) -> Any:
        return self._config_provider

    @property
    def backup_provider(self) -> Optional[Any]:
        return self._backup_provider

    @property
    def builder(self) -> ExhibitorArgumentsBuilder:
        return self._builder

    @property
    def closeables(self) -> Tuple[Any, ...]:
        return tuple(self._closeables)

    def register_closeable(self, closeable: Any) -> None:
        self._closeables.append(closeable)

    def _register_if_closeable(self, resource: Any) -> Any:
        if callable(getattr(resource, "close", None)):
            self.register_closeable(resource)
        return resource

    def _make_config_provider(self, options: argparse.Namespace) -> Any:
        factory = self._config_providers.get(options.configtype)
        if factory is None:
            known = ", ".join(sorted(self._config_providers)) or "none registered"
            raise ExhibitorCreationError.creator_exit(
                self.cli, f"Unsupported configtype '{options.configtype}' (available: {known})."
            )
        return self._register_if_closeable(factory(options))

    def _make_backup_provider(self, options: argparse.Namespace) -> Optional[Any]:
        selected = [
            name for name, enabled in (("s3", options.s3backup), ("filesystem", options.filesystembackup))
            if _is_true(enabled)
        ]
        if not selected:
            return None
        if len(selected) > 1:
            raise ExhibitorCreationError.creator_exit(self.cli, "Only one of -s3backup and -filesystembackup may be enabled.")

        factory = self._backup_providers.get(selected[0])
        if factory is None:
            raise ExhibitorCreationError.creator_exit(self.cli, f"No backup provider registered for '{selected[0]}'.")
        return self._register_if_closeable(factory(options))

    def _make_builder(self, options: argparse.Namespace) -> ExhibitorArgumentsBuilder:
        return ExhibitorArgumentsBuilder(
            connection_timeout_ms=_to_int(self.cli, "timeout", options.timeout),
            log_window_size_lines=_to_int(self.cli, "loglines", options.loglines),
            hostname=options.hostname,
            rest_port=_to_int(self.cli, "port", options.port),
            config_check_ms=_to_int(self.cli, "configcheckms", options.configcheckms),
            extra_heading_text=options.headingtext,
            allow_node_mutations=_is_true(options.nodemodification),
            preferences_path=options.prefspath,
        )
