"""
일변수 저차 확장 (Univariate LDE)
==================================

n개의 값 values[0..n-1]을 노드 {0, 1, ..., n-1}에서 보간하는
유일한 (n-1)차 이하 다항식 P를 구성하고, 임의의 필드 점 r에서 평가한다.

  P(r) = Σ_i values[i] · L_i(r)
  L_i(x) = Π_{j≠i} (x - j) / (i - j)

**Fast path**:
  r이 노드 중 하나(0 ≤ r < n)이면 values[r]를 바로 반환한다.
  보간 계산이 필요 없고, 분모 구조상 0이 되는 경우도 피할 수 있다.

**Sum-check에서의 사용**:
  Prover가 보낸 라운드 다항식 g_j = [g_j(0), g_j(1)]을
  Verifier가 0, 1, r_j 에서 평가할 때 사용한다.

사용 예시:
    >>> from sumcheck.univariate import evaluate
    >>> evaluate([FR(104), FR(105)], FR(2))  # FR(106)
"""

from sumcheck.errors import EmptyInputError
from sumcheck.field import FR, to_field, node_index


def lagrange_basis_eval(i, n, r):
    """노드 집합 {0..n-1}의 i번째 Lagrange 기저 L_i를 r에서 평가한다.

    성질: L_i(j) = δ_{ij} (크로네커 델타)

    분모 (i - j)는 i ≠ j 이므로 항상 0이 아니다.

    Args:
        i: 기저 인덱스 (0 ≤ i < n)
        n: 노드 수
        r: 평가 점 (FR 원소)

    Returns:
        FR: L_i(r)
    """
    numerator = FR(1)
    denominator = FR(1)
    for j in range(n):
        if j == i:
            continue
        numerator = numerator * (r - j)
        denominator = denominator * (i - j)
    return numerator / denominator


def evaluate(values, r):
    """values를 보간하는 일변수 다항식을 r에서 평가한다.

    Args:
        values: FR 원소 (또는 정수) 리스트, 길이 n ≥ 1
        r: 평가 점

    Returns:
        FR: P(r)

    Raises:
        EmptyInputError: values가 비어 있을 때

    예시:
        >>> evaluate([FR(104), FR(105)], FR(0))  # FR(104)
        >>> evaluate([FR(104), FR(105)], FR(2))  # FR(106)
    """
    n = len(values)
    if n == 0:
        raise EmptyInputError("평가값 리스트가 비어 있습니다")
    r = to_field(r)

    # ── Fast path: r이 보간 노드 ──
    index = node_index(r, n)
    if index is not None:
        return to_field(values[index])

    # ── 일반 경로: Σ values[i] · L_i(r) ──
    result = FR(0)
    for i in range(n):
        result = result + to_field(values[i]) * lagrange_basis_eval(i, n, r)
    return result
