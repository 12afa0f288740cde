"""Pytest configuration and fixtures

Provides the fake collaborators shared by the bootstrap tests: a supervisor,
a creator, closeable resources that record the order they are closed in,
and a CLI stand-in that records help requests.
"""

import base64
from typing import List, Optional, Sequence

import pytest
from starlette.datastructures import State

from exhibitor_web.local.config import PropertySource
from exhibitor_web.local.supervisor.models import ExhibitorArgumentsBuilder


def encode_credentials(text: str) -> str:
    """Base64-encodes a credential pair the way a remote auth spec carries it."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FakeCloseable:
    """A resource that records when it is closed, optionally failing."""

    def __init__(self, name: str, closed_order: List[str], fail: bool = False) -> None:
        self.name = name
        self.closed_order = closed_order
        self.fail = fail
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        self.closed_order.append(self.name)
        if self.fail:
            raise IOError(f"{self.name} refused to close")

    def __repr__(self) -> str:
        return f"FakeCloseable({self.name!r})"


class FakeCLI:
    """Records the prefixes help was logged with."""

    def __init__(self) -> None:
        self.help_prefixes: List[str] = []

    def log_help(self, prefix: str = "") -> None:
        self.help_prefixes.append(prefix)


class FakeSupervisor:
    """Stands in for the Exhibitor; counts start and close calls."""

    def __init__(self, config_provider, secondary, backup_provider, arguments, fail_start: bool = False) -> None:
        self.config_provider = config_provider
        self.secondary = secondary
        self.backup_provider = backup_provider
        self.arguments = arguments
        self.fail_start = fail_start
        self.start_calls = 0
        self.close_calls = 0

    def start(self) -> None:
        self.start_calls += 1
        if self.fail_start:
            raise RuntimeError("supervisor could not start")

    def close(self) -> None:
        self.close_calls += 1


class FakeCreator:
    """A creator that records the argument array it was built from."""

    def __init__(
        self,
        args: Sequence[str],
        closeables: Sequence[FakeCloseable] = (),
        builder: Optional[ExhibitorArgumentsBuilder] = None,
    ) -> None:
        self.args = list(args)
        self.cli = FakeCLI()
        self.config_provider = object()
        self.backup_provider = None
        self.builder = builder or ExhibitorArgumentsBuilder()
        self.closeables = tuple(closeables)

    def arg_pairs(self):
        return sorted(zip(self.args[::2], self.args[1::2]))


@pytest.fixture
def encode():
    return encode_credentials


@pytest.fixture
def closed_order() -> List[str]:
    return []


@pytest.fixture
def make_closeable(closed_order):
    """Builds closeables that all record into the same `closed_order` list."""
    def factory(name: str, fail: bool = False) -> FakeCloseable:
        return FakeCloseable(name, closed_order, fail=fail)
    return factory


@pytest.fixture
def fake_cli() -> FakeCLI:
    return FakeCLI()


@pytest.fixture
def state() -> State:
    """A stand-in for the host's shared attribute store."""
    return State()


@pytest.fixture
def missing_resource(tmp_path):
    """A bundled resource path that does not exist."""
    return tmp_path / "exhibitor.properties"


@pytest.fixture
def s3_source() -> PropertySource:
    return PropertySource("test", {
        "exhibitor-configtype": "s3",
        "exhibitor-zkconfigdir": "/tmp",
        "PATH": "/usr/bin",
    })


@pytest.fixture
def recorder():
    """Collects the creators and supervisors a lifecycle builds."""

    class Recorder:
        def __init__(self) -> None:
            self.creators: List[FakeCreator] = []
            self.supervisors: List[FakeSupervisor] = []
            self.closeables: Sequence[FakeCloseable] = ()
            self.fail_start = False

        def creator_factory(self, args):
            creator = FakeCreator(args, closeables=self.closeables)
            self.creators.append(creator)
            return creator

        def supervisor_factory(self, config_provider, secondary, backup_provider, arguments):
            supervisor = FakeSupervisor(
                config_provider, secondary, backup_provider, arguments, fail_start=self.fail_start
            )
            self.supervisors.append(supervisor)
            return supervisor

    return Recorder()
