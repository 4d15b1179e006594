"""
Sum-check 예외 계층
====================

모든 예외는 SumcheckError를 상속한다.

**호출자 오용 (misuse)**:
  EmptyInputError, DimensionMismatchError, InvalidArityError,
  RoundOverflowError, MissingChallengeError, UnexpectedChallengeError,
  TooManyRoundsError, IncompleteRoundsError, SessionClosedError.
  상태를 변경하기 전에 발생한다. 같은 세션으로 올바르게 다시 호출할 수 있다.

**프로토콜 거부 (rejection)**:
  DegreeError, SumMismatchError, OracleMismatchError.
  세션은 복구 불가능하며 Verifier는 REJECTED 상태로 전이한다.
  round / expected / actual 속성으로 불일치를 진단할 수 있다.

**필드 연산**:
  DivisionByZeroError (ZeroDivisionError 하위 클래스).
"""


class SumcheckError(Exception):
    """Sum-check 패키지의 최상위 예외."""


class DivisionByZeroError(SumcheckError, ZeroDivisionError):
    """필드 원소 0으로 나누려고 할 때."""


# ─────────────────────────────────────────────────────────────────────
# 입력 / 차원 오류
# ─────────────────────────────────────────────────────────────────────

class EmptyInputError(SumcheckError, ValueError):
    """평가값 리스트가 비어 있을 때."""


class DimensionMismatchError(SumcheckError, ValueError):
    """평가 벡터 r의 차원이 하이퍼큐브 차원 d와 다를 때."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"입력 벡터의 길이가 잘못되었습니다: {expected}개의 변수가 필요하지만 "
            f"{actual}개를 받았습니다"
        )


class InvalidArityError(SumcheckError, ValueError):
    """변수 개수 v가 음수이거나, 평가 테이블 g가 v변수 함수로 표현될 수 없을 때
    (len(g) > 2^v).
    """

    def __init__(self, length, v):
        self.length = length
        self.v = v
        if not isinstance(v, int) or v < 0:
            message = f"변수 개수 v는 0 이상의 정수여야 합니다: {v!r}"
        else:
            message = f"평가 테이블의 크기 {length}는 {v}변수 함수의 최대 크기 {2 ** v}를 초과합니다"
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────
# 라운드 진행 오류
# ─────────────────────────────────────────────────────────────────────

class RoundOverflowError(SumcheckError, RuntimeError):
    """Prover가 v 라운드를 모두 마친 뒤 또 호출될 때."""

    def __init__(self, v):
        self.v = v
        super().__init__(f"라운드 수는 {v}를 초과할 수 없습니다")


class MissingChallengeError(SumcheckError, ValueError):
    """2라운드 이후인데 이전 라운드의 챌린지가 주어지지 않았을 때."""

    def __init__(self, round):
        self.round = round
        super().__init__(
            f"{round}라운드는 r_{round - 1} 챌린지가 필요합니다. 챌린지가 없습니다"
        )


class UnexpectedChallengeError(SumcheckError, ValueError):
    """1라운드에 챌린지가 주어졌을 때."""

    def __init__(self, challenge):
        self.challenge = challenge
        super().__init__(
            f"1라운드에는 고정할 r 값이 없어야 합니다. 예상치 못한 값: {int(challenge)}"
        )


class TooManyRoundsError(SumcheckError, RuntimeError):
    """Verifier가 v 라운드를 모두 검증한 뒤 라운드 다항식을 또 받을 때."""

    def __init__(self, round, v):
        self.round = round
        self.v = v
        super().__init__(
            f"라운드가 너무 많습니다 (j={round}). g는 {v}변수 함수이므로 "
            f"{v}개의 라운드만 존재합니다"
        )


class IncompleteRoundsError(SumcheckError, RuntimeError):
    """v 라운드가 끝나기 전에 오라클 질의를 하려 할 때."""

    def __init__(self, completed, v):
        self.completed = completed
        self.v = v
        super().__init__(
            f"r의 {v}개 변수를 모두 고정하려면 {v}개의 라운드가 필요합니다 "
            f"(완료: {completed})"
        )


class SessionClosedError(SumcheckError, RuntimeError):
    """이미 수락(DONE) 또는 거부(REJECTED)된 세션을 다시 사용할 때."""

    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"세션이 이미 종료되었습니다 (상태: {phase})")


# ─────────────────────────────────────────────────────────────────────
# 프로토콜 거부
# ─────────────────────────────────────────────────────────────────────

class RejectionError(SumcheckError):
    """Verifier가 증명을 거부했다. 세션은 복구 불가능하다.

    속성:
        round: 거부된 라운드 번호 (오라클 질의는 v)
        expected: 기대값 (FR 또는 int)
        actual: 실제값
    """

    def __init__(self, message, round=None, expected=None, actual=None):
        self.round = round
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class DegreeError(RejectionError):
    """라운드 다항식의 차수가 1을 초과할 때 (다중선형 g로 제한)."""


class SumMismatchError(RejectionError):
    """g_j(0) + g_j(1)이 이전 라운드의 주장과 다를 때."""


class OracleMismatchError(RejectionError):
    """최종 오라클 질의 g(r)이 g_v(r_v)와 다를 때."""
