"""
Sum-check Verifier
===================

제안된 합 C와 변수 개수 v만 알고, v 라운드 동안 Prover의 라운드 다항식을
검사한 뒤 마지막에 g를 랜덤 점 r에서 한 번 평가(오라클 질의)하여
C = Σ_{x∈{0,1}^v} g(x) 를 검증한다.

**라운드 j 검사** (verify_round_polynomial):
  1. 이미 v 라운드를 마쳤으면 TooManyRoundsError
  2. deg(g_j) ≤ 1  (len(g_j) ≤ 2)                  → 실패 시 DegreeError
  3. s = g_j(0) + g_j(1)
  4. j = 1:  s == C
     j > 1:  s == g_{j-1}(r_{j-1})                   → 실패 시 SumMismatchError
  5. 챌린지 r_j를 뽑아 저장하고 Prover에게 돌려준다

**오라클 질의** (verify_oracle_query):
  g̃(r_1, ..., r_v) == g_v(r_v)                      → 실패 시 OracleMismatchError

**건전성**:
  거짓 주장을 하는 Prover는 어느 라운드에선가 실제 g_j와 다른 1차 다항식을
  보내야 한다. 서로 다른 1차 다항식은 많아야 한 점에서 일치하므로,
  랜덤 r_j에서 들키지 않을 확률은 라운드당 1/|F| 이하이다.

거부는 세션을 종료시킨다 (REJECTED). 재시도는 없다.

사용 예시:
    >>> verifier = Verifier(FR(36), 3)
    >>> r_1 = verifier.verify_round_polynomial(g_1)
    >>> ...
    >>> verifier.verify_oracle_query(g)   # True
"""

from sumcheck import multilinear, univariate
from sumcheck.challenge import RandomChallengeSource
from sumcheck.errors import (
    EmptyInputError,
    InvalidArityError,
    TooManyRoundsError,
    IncompleteRoundsError,
    SessionClosedError,
    DegreeError,
    SumMismatchError,
    OracleMismatchError,
)
from sumcheck.field import FR, to_field, to_field_list
from sumcheck.state import (
    VerifierSession,
    AWAITING_ROUND,
    AWAITING_ORACLE_QUERY,
    DONE,
    REJECTED,
)
from sumcheck.utils import pad_to_length


# 다중선형 g로 제한하므로 라운드 다항식은 두 점 (0, 1)의 값으로 충분하다
MAX_ROUND_POLYNOMIAL_LENGTH = 2


class Verifier:
    """Sum-check Verifier.

    속성:
        session: VerifierSession (라운드마다 새 값으로 교체)
        challenge_source: 챌린지 소스 (기본값: RandomChallengeSource)
        tracer: 선택적 Tracer (verifier.* 이벤트 발행)
    """

    def __init__(self, proposed_sum, v, challenge_source=None, tracer=None):
        """Verifier를 생성한다.

        Args:
            proposed_sum: Prover가 주장한 합 C
            v: g의 변수 개수
            challenge_source: ChallengeSource 또는 None
            tracer: Tracer 또는 None

        Raises:
            InvalidArityError: v가 0 이상의 정수가 아닐 때
        """
        if not isinstance(v, int) or v < 0:
            raise InvalidArityError(None, v)
        self.session = VerifierSession(to_field(proposed_sum), v)
        self.challenge_source = challenge_source or RandomChallengeSource()
        self.tracer = tracer

    @classmethod
    def from_session(cls, session, challenge_source=None, tracer=None):
        """저장된 VerifierSession에서 Verifier를 복원한다."""
        verifier = cls(session.proposed_sum, session.v, challenge_source, tracer)
        verifier.session = session
        return verifier

    @property
    def v(self):
        return self.session.v

    @property
    def r(self):
        return list(self.session.challenges)

    @property
    def polynomials(self):
        return [list(p) for p in self.session.polynomials]

    @property
    def phase(self):
        return self.session.phase

    @property
    def accepted(self):
        return self.session.phase == DONE

    def _emit(self, name, **fields):
        if self.tracer is not None:
            self.tracer.emit(name, **fields)

    def _reject(self, error):
        """세션을 REJECTED로 전이시키고 error를 발생시킨다."""
        self.session = self.session.rejected(str(error))
        self._emit("verifier.rejected", round=error.round, reason=str(error),
                   expected=error.expected, actual=error.actual)
        raise error

    def verify_round_polynomial(self, g_j):
        """j라운드의 다항식 g_j 를 검사하고 챌린지 r_j 를 돌려준다.

        Args:
            g_j: [g_j(0), g_j(1)] 점-값 표현

        Returns:
            FR: Prover가 다음 라운드에서 고정할 r_j

        Raises:
            SessionClosedError: 이미 거부된 세션
            TooManyRoundsError: v 라운드를 이미 마쳤을 때
            EmptyInputError: g_j가 비어 있을 때
            DegreeError: len(g_j) > 2
            SumMismatchError: g_j(0) + g_j(1)이 이전 주장과 다를 때
        """
        session = self.session
        if session.phase == REJECTED:
            raise SessionClosedError(session.phase)
        if session.phase in (AWAITING_ORACLE_QUERY, DONE):
            raise TooManyRoundsError(session.current_round, session.v)
        if len(g_j) == 0:
            raise EmptyInputError("라운드 다항식이 비어 있습니다")

        j = session.current_round
        g_j = to_field_list(g_j)

        # ── 1. 차수 검사 ──
        if len(g_j) > MAX_ROUND_POLYNOMIAL_LENGTH:
            self._reject(DegreeError(
                f"{j}라운드 다항식의 길이가 {len(g_j)}입니다. 다중선형 다항식은 "
                f"길이 {MAX_ROUND_POLYNOMIAL_LENGTH} 이하여야 합니다",
                round=j, expected=MAX_ROUND_POLYNOMIAL_LENGTH, actual=len(g_j),
            ))

        # ── 2. 합 검사: g_j(0) + g_j(1) ──
        claim = univariate.evaluate(g_j, FR(0)) + univariate.evaluate(g_j, FR(1))
        if j == 1:
            expected = session.proposed_sum
        else:
            expected = univariate.evaluate(session.polynomials[-1], session.challenges[-1])
        if claim != expected:
            self._reject(SumMismatchError(
                f"g_{j}가 올바르지 않습니다. g_{j}(0) + g_{j}(1)은 {int(expected)}이어야 "
                f"하지만 {int(claim)}입니다",
                round=j, expected=expected, actual=claim,
            ))
        self._emit("verifier.round_accepted", round=j, claim=claim)

        # ── 3. 챌린지 발급 ──
        self.challenge_source.absorb(f"g_{j}".encode(), g_j)
        r_j = to_field(self.challenge_source.next())
        self.session = session.with_round(g_j, r_j)
        self._emit("verifier.challenge", round=j, challenge=r_j)
        return r_j

    def verify_oracle_query(self, g):
        """최종 오라클 질의: g̃(r) == g_v(r_v) 를 확인한다.

        v = 0 이면 라운드가 없으므로 g̃() == C 를 확인한다.

        Args:
            g: 평가 테이블 (길이 ≤ 2^v, 부족한 정점은 0)

        Returns:
            True (수락). 수락 후 세션은 DONE.

        Raises:
            SessionClosedError: 이미 수락/거부된 세션
            IncompleteRoundsError: v 라운드가 끝나지 않았을 때
            EmptyInputError / InvalidArityError: g가 비었거나 너무 길 때
            OracleMismatchError: g̃(r) ≠ g_v(r_v)
        """
        session = self.session
        if session.phase in (DONE, REJECTED):
            raise SessionClosedError(session.phase)
        if session.phase == AWAITING_ROUND:
            raise IncompleteRoundsError(session.rounds_completed, session.v)
        if len(g) == 0:
            raise EmptyInputError("평가 테이블 g가 비어 있습니다")
        if len(g) > (1 << session.v):
            raise InvalidArityError(len(g), session.v)

        table = pad_to_length(to_field_list(g), 1 << session.v)
        g_of_r = multilinear.evaluate(table, list(session.challenges))
        if session.v == 0:
            expected = session.proposed_sum
        else:
            expected = univariate.evaluate(session.polynomials[-1], session.challenges[-1])

        if g_of_r != expected:
            self._reject(OracleMismatchError(
                f"g(r) != g_v(r_v): g(r) = {int(g_of_r)}, g_v(r_v) = {int(expected)}",
                round=session.v, expected=expected, actual=g_of_r,
            ))

        self.session = session.accepted()
        self._emit("verifier.accepted", g_of_r=g_of_r, g_v_of_r_v=expected)
        return True
