"""
Remote client authorization for the supervisor's outbound HTTP calls.

The spec string has the form ``type:base64(username:password)``. The type
token stays readable; the credential pair is only base64-encoded, which is
obfuscation and not protection.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, replace
from typing import Optional

from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth

from .errors import RemoteAuthorizationError
from .models import ExhibitorArgumentsBuilder, RemoteConnectionConfiguration

log = logging.getLogger(__name__)

AUTH_FILTERS = {
    "basic": HTTPBasicAuth,
    "digest": HTTPDigestAuth,
}


@dataclass(frozen=True)
class RemoteAuthSpec:
    type: str
    username: str
    password: str = ""

    def __repr__(self) -> str:
        return f"RemoteAuthSpec(type={self.type!r}, username={self.username!r}, password='****')"


def parse_auth_spec(remote_auth_spec: Optional[str]) -> Optional[RemoteAuthSpec]:
    """
    Splits a remote authorization spec into its type and credentials.

    :param remote_auth_spec: The raw spec, or None.
    :return: The parsed spec, or None if the input is absent or empty.
    :raises RemoteAuthorizationError: If either level does not hold exactly two fields,
        or the credential part is not valid base64 text.
    """
    if not remote_auth_spec:
        return None

    parts = remote_auth_spec.split(":")
    if len(parts) != 2:
        raise RemoteAuthorizationError(f"Badly formed remote client authorization: {remote_auth_spec}.")

    auth_type = parts[0].strip()
    token = parts[1].strip()
    # Unpadded tokens are accepted.
    token += "=" * (-len(token) % 4)
    try:
        auth = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise RemoteAuthorizationError(f"Remote client authorization token is not valid base64: {e}") from e
    if not auth:
        raise RemoteAuthorizationError("Authentication token cannot be empty.")

    auth_parts = auth.split(":")
    if len(auth_parts) != 2:
        raise RemoteAuthorizationError("Badly formed remote client credentials: expected username:password.")

    return RemoteAuthSpec(auth_type, auth_parts[0].strip(), auth_parts[1].strip())


def make_filter(spec: RemoteAuthSpec) -> Optional[AuthBase]:
    """Builds a fresh requests auth filter for the spec, or None for an unknown type."""
    filter_class = AUTH_FILTERS.get(spec.type)
    if filter_class is None:
        return None
    return filter_class(spec.username, spec.password)


def decorate(builder: ExhibitorArgumentsBuilder, remote_auth_spec: Optional[str]) -> ExhibitorArgumentsBuilder:
    """
    Returns a builder carrying the remote authorization filter.

    The input builder is never mutated. An absent spec or an unknown type
    returns it as is.

    :param builder: The client-configuration builder from the creator.
    :param remote_auth_spec: The raw ``type:base64(user:pass)`` spec, or None.
    :return: The decorated builder.
    :raises RemoteAuthorizationError: If the spec is malformed.
    """
    spec = parse_auth_spec(remote_auth_spec)
    if spec is None:
        return builder

    auth_filter = make_filter(spec)
    if auth_filter is None:
        log.warning(f"Unknown remote client authorization type: {spec.type}.")
        return builder

    log.info(f"Using {spec.type} remote client authorization for user '{spec.username}'.")
    return replace(builder, remote_connection_configuration=RemoteConnectionConfiguration((auth_filter,)))
