"""Tests for the Starlette host: lifespan start/stop and the published supervisor."""

from types import SimpleNamespace

import pytest
from starlette.testclient import TestClient

from exhibitor_web import settings
from exhibitor_web.local.config import PropertySource
from exhibitor_web.local.supervisor.lifecycle import ExhibitorLifecycle, LifecycleState
from exhibitor_web.web.setup import create_app, get_exhibitor


@pytest.fixture
def lifecycle(recorder, missing_resource):
    return ExhibitorLifecycle(recorder.creator_factory, recorder.supervisor_factory, missing_resource)


class TestLifespan:
    """The supervisor follows the application's lifespan."""

    def test_startup_publishes_and_shutdown_closes(self, lifecycle, recorder, s3_source, make_closeable, closed_order):
        recorder.closeables = [make_closeable("config")]
        app = create_app(lifecycle, s3_source)

        with TestClient(app) as client:
            response = client.get(settings.STATUS_PATH)
            supervisor = recorder.supervisors[0]
            assert supervisor.start_calls == 1
            assert supervisor.close_calls == 0

        assert response.status_code == 200
        assert response.json() == {"running": True, "exhibitor": "FakeSupervisor"}
        assert supervisor.close_calls == 1
        assert closed_order == ["config"]
        assert lifecycle.state is LifecycleState.CLOSED

    def test_published_handle_is_on_app_state(self, lifecycle, recorder, s3_source):
        app = create_app(lifecycle, s3_source)

        with TestClient(app):
            published = getattr(app.state, ExhibitorLifecycle.attribute_key())
            assert published is recorder.supervisors[0]
            assert app.state.lifecycle is lifecycle

    def test_shutdown_unpublishes_the_supervisor(self, lifecycle, s3_source):
        app = create_app(lifecycle, s3_source)

        with TestClient(app) as client:
            assert client.get(settings.STATUS_PATH).json()["running"] is True

        assert not hasattr(app.state, ExhibitorLifecycle.attribute_key())
        assert client.get(settings.STATUS_PATH).json() == {"running": False, "exhibitor": None}

    def test_startup_failure_aborts_and_releases_resources(self, lifecycle, recorder, make_closeable, closed_order):
        recorder.closeables = [make_closeable("config")]
        source = PropertySource("test", {"exhibitor-configtype": "s3", "exhibitor-remoteauth": "basic"})
        app = create_app(lifecycle, source)

        with pytest.raises(Exception):
            with TestClient(app):
                pass

        assert closed_order == ["config"]
        assert recorder.supervisors == []
        assert lifecycle.state is LifecycleState.CLOSED


class TestStatus:
    """Tests for the status route."""

    def test_reports_not_running_without_lifespan(self, lifecycle):
        client = TestClient(create_app(lifecycle))

        response = client.get(settings.STATUS_PATH)

        assert response.json() == {"running": False, "exhibitor": None}

    def test_get_exhibitor_reads_the_published_attribute(self, lifecycle, recorder, s3_source):
        app = create_app(lifecycle, s3_source)
        request = SimpleNamespace(app=app)

        assert get_exhibitor(request) is None
        with TestClient(app):
            assert get_exhibitor(request) is recorder.supervisors[0]
        assert get_exhibitor(request) is None
