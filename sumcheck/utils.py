"""
Sum-check 공유 유틸리티
=======================

불리언 하이퍼큐브 {0,1}^d 의 인덱싱과 평가 테이블 패딩을 담당한다.

**정점(vertex) 순서**:
  인덱스 i의 이진 표현(최상위 비트가 먼저)이 정점이다.
  d = 3 이면 0 → (0,0,0), 1 → (0,0,1), ..., 6 → (1,1,0), 7 → (1,1,1).
  MLE 평가 벡터 r의 첫 번째 좌표 r_0은 최상위 비트에 대응한다.

**주요 기능**:
  - required_bits: n개의 값을 인덱싱하는 데 필요한 비트 수 ⌈log₂ n⌉
  - to_binary: 정수 → 길이 d의 0/1 리스트
  - binary_vertices: {0,1}^d 의 모든 정점 (정렬된 순서)
  - pad_to_length: 평가 테이블 0-패딩
"""

from sumcheck.field import FR


def required_bits(n):
    """n개의 서로 다른 값을 표현하는 데 필요한 최소 비트 수 ⌈log₂ n⌉.

    Args:
        n: 양의 정수

    Returns:
        int: 비트 수 (n = 1 이면 0)

    Raises:
        ValueError: n < 1

    예시:
        >>> required_bits(1)  # 0
        >>> required_bits(8)  # 3
        >>> required_bits(9)  # 4
    """
    if not isinstance(n, int) or n < 1:
        raise ValueError(f"n은 1 이상의 정수여야 합니다: {n}")
    return (n - 1).bit_length()


def to_binary(num, bits):
    """정수를 최상위 비트가 먼저 오는 0/1 리스트로 변환한다.

    Args:
        num: 0 이상 2^bits 미만의 정수
        bits: 결과 리스트 길이 (앞쪽은 0으로 채워짐)

    예시:
        >>> to_binary(6, 3)  # [1, 1, 0]
        >>> to_binary(1, 3)  # [0, 0, 1]
    """
    return [(num >> shift) & 1 for shift in range(bits - 1, -1, -1)]


def binary_vertices(d):
    """d차원 하이퍼큐브의 모든 정점을 정렬된 순서로 반환한다.

    예시:
        >>> binary_vertices(2)  # [[0, 0], [0, 1], [1, 0], [1, 1]]
        >>> binary_vertices(0)  # [[]]
    """
    return [to_binary(i, d) for i in range(1 << d)]


def pad_to_length(lst, length, fill=None):
    """리스트 뒤를 fill(기본값 FR(0))로 채워 length 길이로 만든다."""
    if fill is None:
        fill = FR(0)
    return list(lst) + [fill] * (length - len(lst))
