"""
Sum-check 데이터 직렬화/역직렬화 헬퍼
======================================

세션 저장소(JSON 호환 dict)에 저장 가능한 형태로 sum-check 객체를 변환한다.
FR, FR 리스트, ProverSession, VerifierSession, TranscriptChallengeSource, TraceEvent.

FR 값은 10진수 문자열로 저장한다 (JSON 정수 범위를 넘는 254비트 값).
"""

from sumcheck.challenge import TranscriptChallengeSource
from sumcheck.field import FR
from sumcheck.state import ProverSession, VerifierSession


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) 또는 int → FR

    Raises:
        ValueError: 정수로 해석할 수 없는 값
    """
    if isinstance(s, bool) or not isinstance(s, (int, str)):
        raise ValueError(f"필드 원소로 해석할 수 없습니다: {s!r}")
    return FR(int(s))


# ─── FR list ───

def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


def deserialize_fr_list(data):
    """list[str | int] → list[FR]"""
    if not isinstance(data, list):
        raise ValueError(f"리스트가 필요합니다: {data!r}")
    return [deserialize_fr(s) for s in data]


# ─── Sessions ───

def serialize_prover_session(session):
    """ProverSession → dict"""
    return {
        "g": serialize_fr_list(session.g),
        "v": session.v,
        "challenges": serialize_fr_list(session.challenges),
        "rounds_completed": session.rounds_completed,
    }


def deserialize_prover_session(data):
    """dict → ProverSession"""
    return ProverSession(
        deserialize_fr_list(data["g"]),
        data["v"],
        deserialize_fr_list(data["challenges"]),
        data["rounds_completed"],
    )


def serialize_verifier_session(session):
    """VerifierSession → dict"""
    return {
        "proposed_sum": serialize_fr(session.proposed_sum),
        "v": session.v,
        "challenges": serialize_fr_list(session.challenges),
        "polynomials": [serialize_fr_list(p) for p in session.polynomials],
        "phase": session.phase,
        "reason": session.reason,
    }


def deserialize_verifier_session(data):
    """dict → VerifierSession"""
    return VerifierSession(
        deserialize_fr(data["proposed_sum"]),
        data["v"],
        deserialize_fr_list(data["challenges"]),
        [deserialize_fr_list(p) for p in data["polynomials"]],
        data["phase"],
        data.get("reason"),
    )


# ─── Transcript ───

def serialize_transcript(source):
    """TranscriptChallengeSource → {state: hex, counter}"""
    return {"state": bytes(source.state).hex(), "counter": source.counter}


def deserialize_transcript(data):
    """{state: hex, counter} → TranscriptChallengeSource (state 복원)"""
    t = TranscriptChallengeSource.__new__(TranscriptChallengeSource)
    t.state = bytearray(bytes.fromhex(data["state"]))
    t.counter = data["counter"]
    return t


# ─── Trace events ───

def _serialize_field_value(value):
    if isinstance(value, FR):
        return serialize_fr(value)
    if isinstance(value, (list, tuple)):
        return [_serialize_field_value(v) for v in value]
    return value


def serialize_event(event):
    """TraceEvent → {"event": name, ...fields}"""
    data = {"event": event.name}
    for key, value in event.fields.items():
        data[key] = _serialize_field_value(value)
    return data

