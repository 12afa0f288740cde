from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

import requests
from requests.auth import AuthBase


class _ChainedAuth(AuthBase):
    """Applies several requests auth handlers in order."""

    def __init__(self, filters: Tuple[AuthBase, ...]) -> None:
        self.filters = filters

    def __call__(self, r):
        for auth in self.filters:
            r = auth(r)
        return r


@dataclass(frozen=True)
class RemoteConnectionConfiguration:
    """Client filters applied to every remote call the supervisor makes."""
    filters: Tuple[AuthBase, ...] = ()

    def configure_session(self, session: requests.Session) -> requests.Session:
        """
        Attaches the filters to a requests session.

        :param session: The session the supervisor uses for remote calls.
        :return: The same session, for chaining.
        """
        if len(self.filters) == 1:
            session.auth = self.filters[0]
        elif self.filters:
            session.auth = _ChainedAuth(self.filters)
        return session


@dataclass(frozen=True)
class ExhibitorArguments:
    """The built client configuration handed to the supervisor."""
    connection_timeout_ms: int = 30000
    log_window_size_lines: int = 1000
    hostname: str = "localhost"
    rest_port: int = 8080
    config_check_ms: int = 30000
    extra_heading_text: Optional[str] = None
    allow_node_mutations: bool = True
    preferences_path: Optional[str] = None
    remote_connection_configuration: RemoteConnectionConfiguration = field(
        default_factory=RemoteConnectionConfiguration
    )


@dataclass(frozen=True)
class ExhibitorArgumentsBuilder:
    """
    Accumulates the supervisor's client configuration.

    Frozen on purpose: decorating a builder returns a new one
    (`dataclasses.replace`) instead of mutating a shared reference.
    """
    connection_timeout_ms: int = 30000
    log_window_size_lines: int = 1000
    hostname: str = "localhost"
    rest_port: int = 8080
    config_check_ms: int = 30000
    extra_heading_text: Optional[str] = None
    allow_node_mutations: bool = True
    preferences_path: Optional[str] = None
    remote_connection_configuration: RemoteConnectionConfiguration = field(
        default_factory=RemoteConnectionConfiguration
    )

    def build(self) -> ExhibitorArguments:
        return ExhibitorArguments(**{f.name: getattr(self, f.name) for f in fields(self)})
