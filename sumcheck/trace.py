"""
프로토콜 추적(trace) 훅
========================

Prover / Verifier는 진행 상황을 직접 출력하지 않고 TraceEvent를 발행한다.
호스트(데모 스크립트, Flask 앱, 테스트)는 Tracer에 콜백을 등록해 구독한다.

**이벤트 이름**:
  prover.proposed_sum       (sum)
  prover.round_polynomial   (round, polynomial)
  verifier.round_accepted   (round, claim)
  verifier.challenge        (round, challenge)
  verifier.accepted         (g_of_r, g_v_of_r_v)
  verifier.rejected         (round, reason, expected, actual)

사용 예시:
    >>> tracer = Tracer()
    >>> log = TraceLog()
    >>> tracer.subscribe(log)
    >>> tracer.subscribe(print_hook)
"""


class TraceEvent:
    """이름과 필드를 가진 추적 이벤트."""

    def __init__(self, name, **fields):
        self.name = name
        self.fields = fields

    def __getitem__(self, key):
        return self.fields[key]

    def __repr__(self):
        return f"TraceEvent({self.name}, {self.fields})"


class Tracer:
    """구독자 목록에 TraceEvent를 전달한다."""

    def __init__(self, *subscribers):
        self.subscribers = list(subscribers)

    def subscribe(self, callback):
        self.subscribers.append(callback)
        return callback

    def emit(self, name, **fields):
        event = TraceEvent(name, **fields)
        for callback in self.subscribers:
            callback(event)
        return event


class TraceLog:
    """이벤트를 리스트에 모으는 구독자."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def names(self):
        return [e.name for e in self.events]

    def of(self, name):
        return [e for e in self.events if e.name == name]


def _fmt(value):
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_fmt(v) for v in value) + "]"
    if value is None:
        return "-"
    return str(int(value))


def print_hook(event):
    """이벤트를 사람이 읽을 수 있는 한 줄로 출력한다."""
    f = event.fields
    if event.name == "prover.proposed_sum":
        print(f"    제안된 합 C = {_fmt(f['sum'])}")
    elif event.name == "prover.round_polynomial":
        print(f"    g_{f['round']} = {_fmt(f['polynomial'])}")
    elif event.name == "verifier.round_accepted":
        print(f"    g_{f['round']}(0) + g_{f['round']}(1) = {_fmt(f['claim'])} ✓")
    elif event.name == "verifier.challenge":
        print(f"    r_{f['round']} = {_fmt(f['challenge'])}")
    elif event.name == "verifier.accepted":
        print(f"    g(r) = {_fmt(f['g_of_r'])}, g_v(r_v) = {_fmt(f['g_v_of_r_v'])} ✓")
    elif event.name == "verifier.rejected":
        print(f"    거부 (라운드 {f['round']}): {f['reason']}")
    else:
        print(f"    {event.name}: {f}")
