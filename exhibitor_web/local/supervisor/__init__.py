"""
The Supervisor package.
Manages the lifecycle of the Exhibitor supervisor inside the hosting application.

This package contains the central ExhibitorLifecycle class and its helper
modules, which together translate properties into creator arguments, attach
remote client authorization, and start and tear down the supervisor.
"""
from .creator import ExhibitorCreator, register_backup_provider, register_config_provider
from .errors import CreationFailureKind, ExhibitorCreationError, InitializationError, RemoteAuthorizationError
from .lifecycle import ExhibitorLifecycle, LifecycleState

__all__ = [
    'ExhibitorCreator',
    'ExhibitorLifecycle',
    'LifecycleState',
    'CreationFailureKind',
    'ExhibitorCreationError',
    'InitializationError',
    'RemoteAuthorizationError',
    'register_backup_provider',
    'register_config_provider',
]
