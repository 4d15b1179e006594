"""
메시지 인코더 (Message Extensions)
===================================

응용 데이터를 LDE 평가기가 소비하는 평가값 테이블로 바꾸는 순수 함수들.

**ASCII 인코딩**:
  메시지의 i번째 문자 → ASCII 코드를 FR 원소로.
    - 일변수 LDE:   노드 i (정수)에서 값
    - 다중선형 LDE: i의 이진 표현인 정점에서 값 (2^d 까지 0-패딩)

**Reed-Solomon (단항식 기저)**:
  메시지를 다항식의 계수로 해석한다:
    P(x) = c₀ + c₁·x + ... + c_{n-1}·x^{n-1}
  점-값 형태가 아닌 계수 형태이므로 sum-check 프로토콜은 사용하지 않는다.

사용 예시:
    >>> encode_ascii("hi")                 # [FR(104), FR(105)]
    >>> reed_solomon_eval("1", FR(49))     # FR(49)
"""

from sumcheck.errors import EmptyInputError
from sumcheck.field import FR, to_field


def ascii_code(char):
    """ASCII 문자를 코드 (0-127)로 변환한다.

    Raises:
        ValueError: ASCII 범위를 벗어날 때
    """
    code = ord(char)
    if code > 127:
        raise ValueError(f"ASCII 문자(0-127)여야 합니다: {char!r}")
    return code


def encode_ascii(message):
    """ASCII 메시지를 FR 평가값 리스트로 인코딩한다.

    Raises:
        EmptyInputError: 빈 메시지
        ValueError: ASCII가 아닌 문자
    """
    if len(message) == 0:
        raise EmptyInputError("메시지가 비어 있습니다")
    return [FR(ascii_code(c)) for c in message]


def reed_solomon_eval(message, r):
    """메시지를 계수로 하는 다항식을 r에서 평가한다 (Horner's method).

    Args:
        message: ASCII 문자열 (비어 있으면 안 됨)
        r: 평가 점

    Returns:
        FR: P(r)
    """
    coeffs = encode_ascii(message)
    r = to_field(r)
    result = FR(0)
    for coeff in reversed(coeffs):
        result = result * r + coeff
    return result
