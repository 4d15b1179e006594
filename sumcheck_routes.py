"""
Sum-check Flask Blueprint: 모든 sum-check 엔드포인트
=======================================================

JSON 요청/응답으로 LDE 평가와 라운드 단위 프로토콜 실행을 제공한다.

  POST /sumcheck/lde/univariate     {values, r}           → {value}
  POST /sumcheck/lde/multilinear    {values, r, method}   → {value}
  POST /sumcheck/session            {g, v, seed?, incremental?}
  GET  /sumcheck/session
  POST /sumcheck/session/round      {tamper?}
  POST /sumcheck/session/oracle
  POST /sumcheck/session/clear

세션 데이터는 브라우저 세션 id를 접두사로 TinyDB에 저장된다.
새 세션을 열 때 SUMCHECK_SESSION_TTL 동안 갱신되지 않은 다른 세션은 삭제된다.
Prover / Verifier 세션은 요청마다 저장소에서 복원되고, 처리 후 다시 저장된다.
챌린지는 세션별 SHA-256 트랜스크립트로 뽑으며 트랜스크립트 상태도 함께 저장된다.
"""

import secrets
import time

from flask import Blueprint, current_app, jsonify, request, session
from tinydb import Query

from sumcheck import multilinear, univariate
from sumcheck.challenge import TranscriptChallengeSource
from sumcheck.errors import (
    SumcheckError,
    RejectionError,
    SessionClosedError,
    TooManyRoundsError,
)
from sumcheck.prover import Prover
from sumcheck.state import AWAITING_ROUND, REJECTED
from sumcheck.trace import Tracer, TraceLog
from sumcheck.verifier import Verifier

from sumcheck_serializers import (
    serialize_fr, deserialize_fr,
    serialize_fr_list, deserialize_fr_list,
    serialize_prover_session, deserialize_prover_session,
    serialize_verifier_session, deserialize_verifier_session,
    serialize_transcript, deserialize_transcript,
    serialize_event,
)

sumcheck_bp = Blueprint('sumcheck', __name__, url_prefix='/sumcheck')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_sumcheck_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


class BadRequest(ValueError):
    """요청 본문이 잘못되었을 때."""


# ─── DB 헬퍼 ───
# 문서 형태: {"type": "<sid>.<name>", "data": ..., "updated": 초}

def _now():
    return time.time()


def _sid():
    """브라우저 세션 id (없으면 생성)."""
    if "sid" not in session:
        session["sid"] = secrets.token_hex(8)
    return session["sid"]


def _session_key(key):
    return f"{_sid()}.{key}"


def _has_prefix(prefix):
    return DATA.type.test(lambda t: t.startswith(prefix))


def db_get(key):
    """DB에서 현재 세션의 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == _session_key(key))
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 현재 세션의 키로 데이터를 저장한다."""
    full = _session_key(key)
    DB.upsert({"type": full, "data": data, "updated": _now()}, DATA.type == full)


def db_touch():
    """현재 세션의 모든 문서의 갱신 시각을 지금으로 바꾼다."""
    DB.update({"updated": _now()}, _has_prefix(_session_key("")))


def db_remove_prefix(prefix):
    """현재 세션에서 prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(_has_prefix(_session_key(prefix)))


def db_remove_expired(ttl):
    """ttl초 동안 갱신되지 않은 모든 세션의 문서를 삭제한다."""
    DB.remove(DATA.updated < _now() - ttl)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("JSON 객체 본문이 필요합니다")
    return data


def _require(data, key):
    if key not in data:
        raise BadRequest(f"'{key}' 필드가 필요합니다")
    return data[key]


# ─── 오류 응답 ───

@sumcheck_bp.errorhandler(SumcheckError)
def handle_sumcheck_error(error):
    """프로토콜 거부는 409, 호출자 오용은 400."""
    body = {"error": type(error).__name__, "message": str(error)}
    if isinstance(error, RejectionError):
        body["round"] = error.round
        body["expected"] = _display(error.expected)
        body["actual"] = _display(error.actual)
        return jsonify(body), 409
    return jsonify(body), 400


@sumcheck_bp.errorhandler(BadRequest)
def handle_bad_request(error):
    return jsonify({"error": "BadRequest", "message": str(error)}), 400


@sumcheck_bp.errorhandler(ValueError)
def handle_value_error(error):
    return jsonify({"error": "BadRequest", "message": str(error)}), 400


def _display(value):
    if value is None or isinstance(value, int):
        return value
    return serialize_fr(value)


# ──────────────────────────────────────────────────────────────
# LDE 평가
# ──────────────────────────────────────────────────────────────

@sumcheck_bp.route("/lde/univariate", methods=["POST"])
def lde_univariate():
    """일변수 LDE를 r에서 평가한다."""
    data = _json_body()
    values = deserialize_fr_list(_require(data, "values"))
    r = deserialize_fr(_require(data, "r"))
    return jsonify({"value": serialize_fr(univariate.evaluate(values, r))})


@sumcheck_bp.route("/lde/multilinear", methods=["POST"])
def lde_multilinear():
    """다중선형 LDE를 벡터 r에서 평가한다 (method: memoized | naive)."""
    data = _json_body()
    values = deserialize_fr_list(_require(data, "values"))
    r = deserialize_fr_list(_require(data, "r"))
    method = data.get("method", "memoized")
    if method == "memoized":
        value = multilinear.evaluate_memoized(values, r)
    elif method == "naive":
        value = multilinear.evaluate_naive(values, r)
    else:
        raise BadRequest(f"알 수 없는 method: {method}")
    return jsonify({"value": serialize_fr(value), "method": method})


# ──────────────────────────────────────────────────────────────
# 프로토콜 세션
# ──────────────────────────────────────────────────────────────

def _load_parties(tracer):
    """DB에서 (Prover, Verifier)를 복원한다. 세션이 없으면 None."""
    prover_raw = db_get("prover")
    verifier_raw = db_get("verifier")
    transcript_raw = db_get("transcript")
    if prover_raw is None or verifier_raw is None or transcript_raw is None:
        return None
    prover = Prover.from_session(deserialize_prover_session(prover_raw),
                                 incremental=db_get("incremental"), tracer=tracer)
    verifier = Verifier.from_session(deserialize_verifier_session(verifier_raw),
                                     deserialize_transcript(transcript_raw), tracer=tracer)
    return prover, verifier


def _save_parties(prover, verifier):
    db_set("prover", serialize_prover_session(prover.session))
    db_set("verifier", serialize_verifier_session(verifier.session))
    db_set("transcript", serialize_transcript(verifier.challenge_source))
    # 세션의 모든 키는 함께 만료된다
    db_touch()


def _session_view(verifier):
    s = verifier.session
    return {
        "v": s.v,
        "proposed_sum": serialize_fr(s.proposed_sum),
        "phase": s.phase,
        "rounds_completed": s.rounds_completed,
        "polynomials": [serialize_fr_list(p) for p in s.polynomials],
        "challenges": serialize_fr_list(s.challenges),
        "reason": s.reason,
    }


def _no_session():
    return jsonify({"error": "NoSession", "message": "진행 중인 세션이 없습니다"}), 404


@sumcheck_bp.route("/session", methods=["POST"])
def session_open():
    """Prover를 만들고 제안된 합으로 Verifier 세션을 연다."""
    data = _json_body()
    g = deserialize_fr_list(_require(data, "g"))
    v = _require(data, "v")
    if not isinstance(v, int) or isinstance(v, bool) or v < 0:
        raise BadRequest(f"v는 0 이상의 정수여야 합니다: {v!r}")
    max_v = current_app.config["SUMCHECK_MAX_VARIABLES"]
    if v > max_v:
        raise BadRequest(f"v는 {max_v} 이하여야 합니다: {v}")
    incremental = data.get("incremental", True)
    if not isinstance(incremental, bool):
        raise BadRequest(f"incremental은 true 또는 false여야 합니다: {incremental!r}")

    seed = data.get("seed", current_app.config.get("SUMCHECK_CHALLENGE_SEED"))
    if seed is None:
        label = b"sumcheck:" + secrets.token_bytes(16)
    else:
        label = f"sumcheck:{seed}".encode()

    log = TraceLog()
    tracer = Tracer(log)
    prover = Prover(g, v, incremental=incremental, tracer=tracer)
    proposed_sum = prover.get_proposed_sum()
    verifier = Verifier(proposed_sum, v, TranscriptChallengeSource(label), tracer=tracer)

    db_remove_expired(current_app.config["SUMCHECK_SESSION_TTL"])
    db_remove_prefix("")
    db_set("incremental", incremental)
    _save_parties(prover, verifier)

    view = _session_view(verifier)
    view["events"] = [serialize_event(e) for e in log.events]
    return jsonify(view), 201


@sumcheck_bp.route("/session", methods=["GET"])
def session_get():
    """현재 세션 상태."""
    parties = _load_parties(None)
    if parties is None:
        return _no_session()
    _, verifier = parties
    return jsonify(_session_view(verifier))


@sumcheck_bp.route("/session/round", methods=["POST"])
def session_round():
    """라운드 하나를 진행한다.

    tamper가 주어지면 Prover가 보낸 g_j(1)에 그 값을 더해 Verifier에 전달한다
    (부정직한 Prover 시뮬레이션).
    """
    data = request.get_json(silent=True) or {}
    log = TraceLog()
    parties = _load_parties(Tracer(log))
    if parties is None:
        return _no_session()
    prover, verifier = parties

    # Prover를 움직이기 전에 Verifier가 라운드를 받을 수 있는지 확인한다
    if verifier.phase == REJECTED:
        raise SessionClosedError(verifier.phase)
    if verifier.phase != AWAITING_ROUND:
        raise TooManyRoundsError(verifier.session.current_round, verifier.v)

    r_prev = verifier.r[-1] if verifier.r else None
    g_j = prover.get_round_polynomial(r_prev)
    if data.get("tamper") is not None:
        g_j = [g_j[0], g_j[1] + deserialize_fr(data["tamper"])]

    try:
        r_j = verifier.verify_round_polynomial(g_j)
    finally:
        # 거부되어도 REJECTED 상태는 저장한다
        _save_parties(prover, verifier)

    view = _session_view(verifier)
    view["round"] = prover.session.rounds_completed
    view["polynomial"] = serialize_fr_list(g_j)
    view["challenge"] = serialize_fr(r_j)
    view["events"] = [serialize_event(e) for e in log.events]
    return jsonify(view)


@sumcheck_bp.route("/session/oracle", methods=["POST"])
def session_oracle():
    """오라클 질의를 실행하고 최종 판정을 돌려준다."""
    log = TraceLog()
    parties = _load_parties(Tracer(log))
    if parties is None:
        return _no_session()
    prover, verifier = parties

    try:
        accepted = verifier.verify_oracle_query(prover.g)
    finally:
        _save_parties(prover, verifier)

    view = _session_view(verifier)
    view["accepted"] = accepted
    view["events"] = [serialize_event(e) for e in log.events]
    return jsonify(view)


@sumcheck_bp.route("/session/clear", methods=["POST"])
def session_clear():
    """현재 세션의 모든 데이터를 삭제한다."""
    db_remove_prefix("")
    return jsonify({"cleared": True})
