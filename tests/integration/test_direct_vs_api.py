"""
Integration tests: verify that the direct service path and the FastAPI
path produce consistent outputs for the same inputs.
"""
import pytest

from nmsimplex.core.schemas import OptimizerParams
from nmsimplex.core.service import OptimizationService

# Skip API tests if fastapi/httpx are not installed.
fastapi = pytest.importorskip("fastapi")
httpx = pytest.importorskip("httpx")

from fastapi.testclient import TestClient
from nmsimplex.api.app import create_app


# ------------------------------------------------------------------ #
#  Fixtures
# ------------------------------------------------------------------ #

PARAMS = {
    "start_points": [[10, 37], [7, 2], [51, 32]],
    "expansion_factor": 1.5,
    "contraction_factor": 0.5,
    "tolerance": 1e-5,
}


def paraboloid(p) -> float:
    return p[0] ** 2 + p[1] ** 2


@pytest.fixture
def direct_service():
    return OptimizationService()


@pytest.fixture
def api_client():
    app = create_app()
    return TestClient(app)


def drive_direct(svc, max_steps=1000):
    state = svc.snapshot()
    for _ in range(max_steps):
        if state.converged:
            break
        request = svc.ask()
        if request.needs_evaluation:
            state = svc.tell(paraboloid(request.candidate))
        else:
            state = svc.snapshot()
    return state.to_dict()


def drive_api(client, max_steps=1000):
    state = client.get("/api/state").json()["state"]
    for _ in range(max_steps):
        if state["converged"]:
            break
        request = client.post("/api/ask").json()["request"]
        if request["needs_evaluation"]:
            resp = client.post("/api/tell", json={"value": paraboloid(request["candidate"])})
        else:
            resp = client.get("/api/state")
        assert resp.status_code == 200
        state = resp.json()["state"]
    return state


# ------------------------------------------------------------------ #
#  Tests
# ------------------------------------------------------------------ #


class TestHealth:
    def test_health(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestCreateConsistency:
    """create must produce the same state via both paths."""

    def test_create_direct(self, direct_service):
        state = direct_service.create(OptimizerParams.from_dict(PARAMS))
        assert state.dimension == 3
        assert state.status == "filling"

    def test_create_api(self, api_client):
        resp = api_client.post("/api/optimizer", json=PARAMS)
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is True
        assert body["state"]["dimension"] == 3
        assert body["state"]["status"] == "filling"

    def test_create_same_state(self, direct_service, api_client):
        direct_state = direct_service.create(OptimizerParams.from_dict(PARAMS))
        api_state = api_client.post("/api/optimizer", json=PARAMS).json()["state"]
        assert direct_state.to_dict() == api_state


class TestValidation:
    """Invalid input is rejected with a client error."""

    @pytest.mark.parametrize(
        "override",
        [
            {"start_points": [[0.0, 0.0]]},
            {"start_points": [[0.0, 0.0], [1.0], [0.0, 1.0]]},
            {"contraction_factor": 1.5},
            {"expansion_factor": 0.0},
            {"tolerance": -1.0},
            {"dimension": 1},
        ],
    )
    def test_rejected_by_models(self, api_client, override):
        resp = api_client.post("/api/optimizer", json={**PARAMS, **override})
        assert resp.status_code == 422

    def test_arity_mismatch(self, api_client):
        resp = api_client.post("/api/optimizer", json={**PARAMS, "dimension": 4})
        assert resp.status_code == 400
        assert "Expected 4 start points" in resp.json()["detail"]

    def test_ask_without_optimizer(self, api_client):
        resp = api_client.post("/api/ask")
        assert resp.status_code == 400
        assert "No optimizer" in resp.json()["detail"]

    def test_state_without_optimizer(self, api_client):
        assert api_client.get("/api/state").status_code == 400

    def test_tell_without_ask(self, api_client):
        api_client.post("/api/optimizer", json=PARAMS)
        resp = api_client.post("/api/tell", json={"value": 1.0})
        assert resp.status_code == 400
        assert "call ask" in resp.json()["detail"]

    def test_ask_twice(self, api_client):
        api_client.post("/api/optimizer", json=PARAMS)
        api_client.post("/api/ask")
        resp = api_client.post("/api/ask")
        assert resp.status_code == 400


class TestStepConsistency:
    """The first steps hand out the same candidates via both paths."""

    def test_reflection_candidate(self, direct_service, api_client):
        direct_service.create(OptimizerParams.from_dict(PARAMS))
        api_client.post("/api/optimizer", json=PARAMS)

        for value in (100.0, 200.0, 300.0):
            direct_service.ask()
            direct_service.tell(value)
            api_client.post("/api/ask")
            api_client.post("/api/tell", json={"value": value})

        direct_request = direct_service.ask()
        api_request = api_client.post("/api/ask").json()["request"]

        assert api_request["status"] == "reflecting"
        assert api_request["candidate"] == pytest.approx([-34.0, 7.0])
        assert direct_request.to_dict() == api_request


class TestMinimizationConsistency:
    """Minimization must converge to the same point via both paths."""

    def test_minimize_direct(self, direct_service):
        direct_service.create(OptimizerParams.from_dict(PARAMS))
        state = drive_direct(direct_service)
        assert state["converged"]
        assert state["vertices"][0]["value"] < 1e-4

    def test_minimize_api(self, api_client):
        api_client.post("/api/optimizer", json=PARAMS)
        state = drive_api(api_client)
        assert state["converged"]
        assert state["vertices"][0]["value"] < 1e-4

    def test_same_result(self, direct_service, api_client):
        direct_service.create(OptimizerParams.from_dict(PARAMS))
        direct_state = drive_direct(direct_service)

        api_client.post("/api/optimizer", json=PARAMS)
        api_state = drive_api(api_client)

        assert direct_state["n_steps"] == api_state["n_steps"]
        assert direct_state["vertices"] == api_state["vertices"]

    def test_history_api(self, api_client):
        api_client.post("/api/optimizer", json=PARAMS)
        drive_api(api_client)
        resp = api_client.get("/api/history")
        assert resp.status_code == 200
        history = resp.json()["history"]
        assert history["statuses"][:3] == ["filling", "filling", "filling"]
        assert history["values"][:3] == [1469.0, 53.0, 3625.0]


class TestSharedService:
    """An injected service is visible through both paths."""

    def test_api_serves_injected_service(self):
        svc = OptimizationService()
        svc.create(OptimizerParams.from_dict(PARAMS))
        svc.ask()
        client = TestClient(create_app(svc))

        state = client.get("/api/state").json()["state"]
        assert state == svc.snapshot().to_dict()
        assert state["pending"] == [10.0, 37.0]

        client.post("/api/tell", json={"value": 1469.0})
        assert svc.snapshot().n_evaluations == 1
