"""
Flask endpoint tests: app.py, sumcheck_routes.py
"""
import json

import pytest
from tinydb import TinyDB

import sumcheck_routes
from app import create_app


@pytest.fixture
def client():
    app = create_app({"TESTING": True, "SUMCHECK_CHALLENGE_SEED": "test"})
    with app.test_client() as client:
        yield client


@pytest.fixture
def opened(client):
    """v = 3 예제로 세션을 연 클라이언트."""
    res = client.post("/sumcheck/session", json={"g": [1, 2, 3, 4, 5, 6, 7, 8], "v": 3})
    assert res.status_code == 201
    return client


class TestIndex:
    def test_lists_endpoints(self, client):
        res = client.get("/")
        assert res.status_code == 200
        data = res.get_json()
        assert "/sumcheck/session" in data["endpoints"]
        assert data["max_variables"] == 10


class TestLDEEndpoints:
    def test_univariate(self, client):
        res = client.post("/sumcheck/lde/univariate", json={"values": [104, 105], "r": 2})
        assert res.status_code == 200
        assert res.get_json()["value"] == "106"

    @pytest.mark.parametrize("method", ["memoized", "naive"])
    def test_multilinear(self, client, method):
        res = client.post("/sumcheck/lde/multilinear",
                          json={"values": ["104", "105"], "r": ["3"], "method": method})
        assert res.status_code == 200
        assert res.get_json() == {"value": "107", "method": method}

    def test_unknown_method(self, client):
        res = client.post("/sumcheck/lde/multilinear",
                          json={"values": [1, 2], "r": [1], "method": "fft"})
        assert res.status_code == 400

    def test_dimension_mismatch(self, client):
        res = client.post("/sumcheck/lde/multilinear",
                          json={"values": [1, 2, 3, 4], "r": [1]})
        assert res.status_code == 400
        assert res.get_json()["error"] == "DimensionMismatchError"

    def test_empty_values(self, client):
        res = client.post("/sumcheck/lde/univariate", json={"values": [], "r": 0})
        assert res.status_code == 400
        assert res.get_json()["error"] == "EmptyInputError"

    def test_missing_field(self, client):
        res = client.post("/sumcheck/lde/univariate", json={"values": [1]})
        assert res.status_code == 400

    def test_not_json(self, client):
        res = client.post("/sumcheck/lde/univariate", data="values=1")
        assert res.status_code == 400


class TestSessionFlow:
    def test_open(self, client):
        res = client.post("/sumcheck/session", json={"g": [1, 2, 3, 4, 5, 6, 7, 8], "v": 3})
        data = res.get_json()
        assert data["proposed_sum"] == "36"
        assert data["phase"] == "awaiting_round"
        assert data["events"][0]["event"] == "prover.proposed_sum"

    def test_full_run(self, opened):
        for j in range(1, 4):
            res = opened.post("/sumcheck/session/round", json={})
            assert res.status_code == 200
            data = res.get_json()
            assert data["round"] == j
            assert data["rounds_completed"] == j
        assert data["phase"] == "awaiting_oracle_query"
        assert data["polynomials"][0] == ["10", "26"]

        res = opened.post("/sumcheck/session/oracle")
        assert res.status_code == 200
        data = res.get_json()
        assert data["accepted"] is True
        assert data["phase"] == "done"
        assert data["events"][-1]["event"] == "verifier.accepted"

    def test_get_session(self, opened):
        opened.post("/sumcheck/session/round", json={})
        data = opened.get("/sumcheck/session").get_json()
        assert data["rounds_completed"] == 1
        assert len(data["challenges"]) == 1

    def test_seed_is_deterministic(self):
        challenges = []
        for _ in range(2):
            app = create_app({"TESTING": True})
            with app.test_client() as c:
                c.post("/sumcheck/session",
                       json={"g": [1, 2, 3, 4, 5, 6, 7, 8], "v": 3, "seed": "fixed"})
                challenges.append(c.post("/sumcheck/session/round", json={}).get_json()["challenge"])
        assert challenges[0] == challenges[1]

    def test_naive_prover(self, client):
        client.post("/sumcheck/session",
                    json={"g": [1, 2, 3, 4, 5, 6, 7, 8], "v": 3, "incremental": False})
        for _ in range(3):
            assert client.post("/sumcheck/session/round", json={}).status_code == 200
        assert client.post("/sumcheck/session/oracle").get_json()["accepted"] is True

    def test_zero_variables(self, client):
        res = client.post("/sumcheck/session", json={"g": [5], "v": 0})
        assert res.get_json()["phase"] == "awaiting_oracle_query"
        assert client.post("/sumcheck/session/oracle").get_json()["accepted"] is True

    def test_clear(self, opened):
        assert opened.post("/sumcheck/session/clear").get_json() == {"cleared": True}
        assert opened.get("/sumcheck/session").status_code == 404


class TestSessionErrors:
    def test_tamper_rejected(self, opened):
        res = opened.post("/sumcheck/session/round", json={"tamper": 1})
        assert res.status_code == 409
        data = res.get_json()
        assert data["error"] == "SumMismatchError"
        assert data["round"] == 1
        assert data["expected"] == "36"
        assert data["actual"] == "37"

        assert opened.get("/sumcheck/session").get_json()["phase"] == "rejected"
        res = opened.post("/sumcheck/session/round", json={})
        assert res.status_code == 400
        assert res.get_json()["error"] == "SessionClosedError"

    def test_oracle_too_early(self, opened):
        res = opened.post("/sumcheck/session/oracle")
        assert res.status_code == 400
        assert res.get_json()["error"] == "IncompleteRoundsError"

    def test_too_many_rounds(self, opened):
        for _ in range(3):
            opened.post("/sumcheck/session/round", json={})
        res = opened.post("/sumcheck/session/round", json={})
        assert res.status_code == 400
        assert res.get_json()["error"] == "TooManyRoundsError"

    def test_no_session(self, client):
        assert client.get("/sumcheck/session").status_code == 404
        assert client.post("/sumcheck/session/round", json={}).status_code == 404
        assert client.post("/sumcheck/session/oracle").status_code == 404

    def test_too_many_variables(self, client):
        res = client.post("/sumcheck/session", json={"g": [1], "v": 11})
        assert res.status_code == 400

    def test_invalid_v(self, client):
        assert client.post("/sumcheck/session", json={"g": [1], "v": -1}).status_code == 400
        assert client.post("/sumcheck/session", json={"g": [1], "v": "3"}).status_code == 400

    @pytest.mark.parametrize("incremental", ["false", 0, 1, None])
    def test_incremental_must_be_bool(self, client, incremental):
        res = client.post("/sumcheck/session",
                          json={"g": [1, 2], "v": 1, "incremental": incremental})
        assert res.status_code == 400
        assert res.get_json()["error"] == "BadRequest"
        assert client.get("/sumcheck/session").status_code == 404

    def test_table_too_long(self, client):
        res = client.post("/sumcheck/session", json={"g": [1, 2, 3], "v": 1})
        assert res.status_code == 400
        assert res.get_json()["error"] == "InvalidArityError"

    def test_configurable_limit(self):
        app = create_app({"TESTING": True, "SUMCHECK_MAX_VARIABLES": 2})
        with app.test_client() as c:
            res = c.post("/sumcheck/session", json={"g": [1, 2, 3, 4, 5], "v": 3})
            assert res.status_code == 400


# =====================================================================
# TinyDB 저장소 / 세션 만료
# =====================================================================

def _sid(client):
    with client.session_transaction() as sess:
        return sess["sid"]


class TestStorage:
    def test_memory_db_by_default(self, opened):
        assert isinstance(sumcheck_routes.DB, TinyDB)
        sid = _sid(opened)
        types = {doc["type"] for doc in sumcheck_routes.DB.all()}
        assert types == {f"{sid}.incremental", f"{sid}.prover",
                         f"{sid}.verifier", f"{sid}.transcript"}

    def test_round_updates_documents(self, opened):
        opened.post("/sumcheck/session/round", json={})
        # 라운드마다 문서를 덮어쓴다 (upsert)
        assert len(sumcheck_routes.DB) == 4

    def test_clear_removes_documents(self, opened):
        opened.post("/sumcheck/session/clear")
        assert len(sumcheck_routes.DB) == 0

    def test_reopen_replaces_documents(self, opened):
        opened.post("/sumcheck/session", json={"g": [5], "v": 0})
        assert len(sumcheck_routes.DB) == 4
        assert opened.get("/sumcheck/session").get_json()["v"] == 0

    def test_sessions_are_isolated(self):
        app = create_app({"TESTING": True, "SUMCHECK_CHALLENGE_SEED": "test"})
        with app.test_client() as a, app.test_client() as b:
            a.post("/sumcheck/session", json={"g": [1, 2, 3, 4], "v": 2})
            b.post("/sumcheck/session", json={"g": [7], "v": 0})
            assert len(sumcheck_routes.DB) == 8
            a.post("/sumcheck/session/clear")
            assert len(sumcheck_routes.DB) == 4
            assert a.get("/sumcheck/session").status_code == 404
            assert b.get("/sumcheck/session").get_json()["v"] == 0

    def test_file_db(self, tmp_path):
        path = tmp_path / "db.json"
        app = create_app({"TESTING": True, "SUMCHECK_DB_PATH": str(path)})
        with app.test_client() as c:
            c.post("/sumcheck/session", json={"g": [1, 2], "v": 1})
            sid = _sid(c)
        with open(path) as f:
            stored = json.load(f)
        types = {doc["type"] for doc in stored["_default"].values()}
        assert f"{sid}.prover" in types
        sumcheck_routes.DB.close()


class TestSessionExpiry:
    @pytest.fixture
    def clock(self, monkeypatch):
        now = [1000.0]
        monkeypatch.setattr(sumcheck_routes, "_now", lambda: now[0])
        return now

    @pytest.fixture
    def app(self):
        return create_app({"TESTING": True, "SUMCHECK_SESSION_TTL": 100})

    def test_stale_session_removed_on_open(self, app, clock):
        with app.test_client() as a, app.test_client() as b:
            a.post("/sumcheck/session", json={"g": [1, 2, 3, 4], "v": 2})
            clock[0] = 1200.0
            b.post("/sumcheck/session", json={"g": [1, 2], "v": 1})
            assert len(sumcheck_routes.DB) == 4
            assert a.get("/sumcheck/session").status_code == 404
            assert b.get("/sumcheck/session").status_code == 200

    def test_active_session_survives(self, app, clock):
        with app.test_client() as a, app.test_client() as b:
            a.post("/sumcheck/session", json={"g": [1, 2, 3, 4], "v": 2})
            clock[0] = 1080.0
            a.post("/sumcheck/session/round", json={})
            clock[0] = 1150.0
            b.post("/sumcheck/session", json={"g": [1, 2], "v": 1})
            # 라운드 진행이 incremental 키까지 함께 갱신했다
            assert len(sumcheck_routes.DB) == 8
            data = a.get("/sumcheck/session").get_json()
            assert data["rounds_completed"] == 1
            assert a.post("/sumcheck/session/round", json={}).status_code == 200
