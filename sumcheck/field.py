"""
Sum-check 기반 모듈: 유한체(Finite Field)
==========================================

Sum-check 프로토콜의 모든 값(평가 테이블, 라운드 다항식, 챌린지)은
이 모듈의 FR 원소이다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field).
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - 덧셈/뺄셈/곱셈은 모두 mod p
  - 나눗셈은 모듈러 역원과의 곱셈. 0으로 나누면 DivisionByZeroError

**정수 임베딩**:
  일변수 LDE의 fast path는 "r이 0..n-1 중 하나인가?"를 판정해야 한다.
  FR 원소는 {0, ..., p-1}의 정수로 자연스럽게 대응되므로
  int(r)과 r < n 비교로 구현한다 (node_index 참고).

사용 예시:
    >>> from sumcheck.field import FR
    >>> a = FR(3)
    >>> b = FR(7)
    >>> a * b            # FR(21)
    >>> FR(1) / FR(3)    # 3의 모듈러 역원
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from sumcheck.errors import DivisionByZeroError


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.
    py_ecc는 0의 역원을 0으로 돌려주므로, 나눗셈만은 0 검사를 추가한다.

    속성:
        field_modulus: bn128 곡선 위수 (소수 p)

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(0)  # DivisionByZeroError
    """
    field_modulus = bn128.curve_order

    def __truediv__(self, other):
        if int(other) % self.field_modulus == 0:
            raise DivisionByZeroError(f"0으로 나눌 수 없습니다: {int(self)} / 0")
        return super().__truediv__(other)

    def __rtruediv__(self, other):
        if self.n == 0:
            raise DivisionByZeroError(f"0으로 나눌 수 없습니다: {int(other)} / 0")
        return super().__rtruediv__(other)


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


def to_field(value):
    """정수 또는 FQ 원소를 FR 원소로 변환한다.

    Args:
        value: int, FR, 또는 다른 py_ecc FQ 원소

    Returns:
        FR: value mod p
    """
    if isinstance(value, FR):
        return value
    return FR(value)


def to_field_list(values):
    """리스트의 모든 원소를 FR로 변환한다."""
    return [to_field(v) for v in values]


def node_index(r, n):
    """r이 보간 노드 {0, 1, ..., n-1} 중 하나이면 그 정수 인덱스를 반환한다.

    정수 임베딩 {0, ..., p-1}에서 r < n 인지 비교한다 (lessThan / toInteger).

    Args:
        r: FR 원소
        n: 노드 수

    Returns:
        int 또는 None: r이 노드가 아니면 None

    예시:
        >>> node_index(FR(1), 2)   # 1
        >>> node_index(FR(2), 2)   # None
        >>> node_index(FR(-1), 2)  # None (p-1은 큰 정수)
    """
    r = to_field(r)
    if r < n:
        return int(r)
    return None
