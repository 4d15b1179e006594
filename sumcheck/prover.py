"""
Sum-check Prover
=================

다중선형 함수 g: {0,1}^v → F 의 전체 평가 테이블을 보유하고,
Σ_{x∈{0,1}^v} g(x) = C 임을 v 라운드에 걸쳐 증명한다.

  ┌─────────────────────────────────────────────────────────────┐
  │  시작:    Prover → Verifier: C = Σ g(x)                      │
  ├─────────────────────────────────────────────────────────────┤
  │  Round j: Verifier → Prover: r_{j-1}  (j = 1 이면 없음)       │
  │           Prover → Verifier: g_j = [g_j(0), g_j(1)]          │
  │             g_j(b) = Σ_{s∈{0,1}^{v-j}} g̃(r_1..r_{j-1}, b, s)  │
  ├─────────────────────────────────────────────────────────────┤
  │  Round v: 자유 변수가 없으므로 합은 항 하나로 축소된다          │
  └─────────────────────────────────────────────────────────────┘

g가 다중선형이므로 g_j는 x_j에 대해 1차 이하이고, 두 점 0, 1의 값만으로
완전히 결정된다.

**두 가지 계산 방식**:
  - incremental=True (기본값): 챌린지 r이 들어올 때마다 테이블을 접는다.
      T'[i] = (1 - r)·T[i] + r·T[i + half]
    j라운드 테이블은 g̃(r_1..r_{j-1}, ·) 의 {0,1}^{v-j+1} 위 값이므로
    g_j = [Σ T[:half], Σ T[half:]]. 라운드당 O(2^{v-j}).
  - incremental=False: 매 라운드 다중선형 LDE로 하위 하이퍼큐브 합을
    처음부터 계산한다. 라운드당 O(2^{v-j} · 2^v).
  두 방식의 결과는 동일하다.

사용 예시:
    >>> prover = Prover([FR(i) for i in range(1, 9)], 3)
    >>> prover.get_proposed_sum()          # FR(36)
    >>> g_1 = prover.get_round_polynomial()
    >>> g_2 = prover.get_round_polynomial(r_1)
"""

from sumcheck import multilinear
from sumcheck.errors import (
    EmptyInputError,
    InvalidArityError,
    RoundOverflowError,
    MissingChallengeError,
    UnexpectedChallengeError,
)
from sumcheck.field import FR, to_field, to_field_list
from sumcheck.state import ProverSession
from sumcheck.utils import binary_vertices, pad_to_length


def _field_sum(values):
    acc = FR(0)
    for value in values:
        acc = acc + value
    return acc


def fold_table(table, r):
    """테이블의 첫 번째 변수를 r로 고정한다 (길이가 절반이 된다)."""
    half = len(table) // 2
    return [table[i] + r * (table[i + half] - table[i]) for i in range(half)]


class Prover:
    """Sum-check Prover.

    속성:
        session: ProverSession (라운드마다 새 값으로 교체)
        incremental: 테이블 접기 방식 사용 여부
        tracer: 선택적 Tracer (prover.* 이벤트 발행)
    """

    def __init__(self, g, v, incremental=True, tracer=None):
        """Prover를 생성한다.

        Args:
            g: v변수 함수의 평가 테이블 (FR 또는 int 리스트, 길이 ≤ 2^v).
               부족한 정점의 값은 0으로 채운다.
            v: 변수 개수
            incremental: True이면 테이블 접기로 라운드 다항식을 계산
            tracer: Tracer 또는 None

        Raises:
            EmptyInputError: g가 비어 있을 때
            InvalidArityError: v < 0 또는 len(g) > 2^v
        """
        if not isinstance(v, int) or v < 0:
            raise InvalidArityError(len(g), v)
        if len(g) == 0:
            raise EmptyInputError("평가 테이블 g가 비어 있습니다")
        if len(g) > (1 << v):
            raise InvalidArityError(len(g), v)

        table = pad_to_length(to_field_list(g), 1 << v)
        self.session = ProverSession(table, v)
        self.incremental = incremental
        self.tracer = tracer
        self._table = table

    @classmethod
    def from_session(cls, session, incremental=True, tracer=None):
        """저장된 ProverSession에서 Prover를 복원한다.

        접힌 테이블은 세션의 챌린지로 다시 접어 재구성한다.
        """
        prover = cls(list(session.g), session.v, incremental, tracer)
        table = prover._table
        for r in session.challenges:
            table = fold_table(table, r)
        prover._table = table
        prover.session = session
        return prover

    @property
    def g(self):
        """2^v 길이로 패딩된 평가 테이블."""
        return list(self.session.g)

    @property
    def v(self):
        return self.session.v

    @property
    def r(self):
        """지금까지 고정한 챌린지 벡터."""
        return list(self.session.challenges)

    def _emit(self, name, **fields):
        if self.tracer is not None:
            self.tracer.emit(name, **fields)

    def get_proposed_sum(self):
        """C = Σ_{x∈{0,1}^v} g̃(x) 를 계산한다.

        Returns:
            FR: 제안할 합
        """
        g = self.session.g
        if self.incremental:
            # 정점에서 g̃(x) = g[x] 이므로 테이블 합과 같다
            total = _field_sum(g)
        else:
            total = _field_sum(
                multilinear.evaluate(g, vertex) for vertex in binary_vertices(self.v)
            )
        self._emit("prover.proposed_sum", sum=total)
        return total

    def get_round_polynomial(self, r_prev=None):
        """현재 라운드 j의 일변수 다항식 g_j 를 점-값 형태로 계산한다.

        Args:
            r_prev: Verifier가 보낸 r_{j-1}. 1라운드에서는 None이어야 한다.

        Returns:
            list[FR]: [g_j(0), g_j(1)]

        Raises:
            RoundOverflowError: v 라운드를 이미 마쳤을 때
            UnexpectedChallengeError: 1라운드에 챌린지가 주어졌을 때
            MissingChallengeError: 2라운드 이후 챌린지가 없을 때
        """
        session = self.session
        if session.rounds_completed >= session.v:
            raise RoundOverflowError(session.v)
        if session.rounds_completed == 0 and r_prev is not None:
            raise UnexpectedChallengeError(to_field(r_prev))
        if session.rounds_completed > 0 and r_prev is None:
            raise MissingChallengeError(session.next_round)

        if r_prev is not None:
            r_prev = to_field(r_prev)
        j = session.next_round

        if self.incremental:
            table = self._table if r_prev is None else fold_table(self._table, r_prev)
            half = len(table) // 2
            polynomial = [_field_sum(table[:half]), _field_sum(table[half:])]
        else:
            prefix = list(session.challenges)
            if r_prev is not None:
                prefix.append(r_prev)
            polynomial = self._sub_hypercube_sums(prefix)
            table = self._table

        self.session = session.with_round(r_prev)
        self._table = table
        self._emit("prover.round_polynomial", round=j, polynomial=polynomial)
        return polynomial

    def _sub_hypercube_sums(self, prefix):
        """[Σ_s g̃(prefix, 0, s), Σ_s g̃(prefix, 1, s)] 를 LDE로 직접 계산한다."""
        free = self.v - len(prefix) - 1
        sum0 = FR(0)
        sum1 = FR(0)
        # free = 0 이면 binary_vertices(0) = [[]] 이므로 항이 하나뿐이다
        for suffix in binary_vertices(free):
            tail = [FR(b) for b in suffix]
            sum0 = sum0 + multilinear.evaluate(self.session.g, prefix + [FR(0)] + tail)
            sum1 = sum1 + multilinear.evaluate(self.session.g, prefix + [FR(1)] + tail)
        return [sum0, sum1]
