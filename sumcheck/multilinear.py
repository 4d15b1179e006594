"""
다중선형 저차 확장 (Multilinear LDE)
=====================================

d차원 불리언 하이퍼큐브의 정점 {0,1}^d 에서 주어진 값을 보간하는
유일한 다중선형 다항식 f̃ 를 임의의 벡터 r ∈ F^d 에서 평가한다.

  f̃(r) = Σ_{w ∈ {0,1}^d} f(w) · L_w(r)
  L_w(r) = Π_k (w_k · r_k + (1 - w_k) · (1 - r_k))

values의 i번째 원소는 i의 이진 표현(최상위 비트 먼저)인 정점의 값이다.
d = ⌈log₂ len(values)⌉ 이고 values가 2^d보다 짧으면 나머지 정점의 값은 0.

**두 가지 구현**:

  ┌───────────────────┬──────────────────────────────┬────────────┐
  │ evaluate_naive    │ 정점마다 L_w(r)를 독립 계산    │ O(2^d · d) │
  │ evaluate_memoized │ 모든 L_w(r)를 한 번에 구성     │ O(2^d)     │
  │                   │ (Thaler Lemma 3.8 동적계획법)  │            │
  └───────────────────┴──────────────────────────────┴────────────┘

  두 구현은 같은 입력에 대해 항상 동일한 결과를 낸다.
  기본 evaluate는 memoized 버전이다.

사용 예시:
    >>> from sumcheck.multilinear import evaluate_naive, evaluate_memoized
    >>> values = [FR(v) for v in [1, 2, 3, 4]]
    >>> evaluate_memoized(values, [FR(0), FR(1)])  # FR(2)
"""

from sumcheck.errors import EmptyInputError, DimensionMismatchError
from sumcheck.field import FR, to_field, to_field_list
from sumcheck.utils import required_bits, to_binary


def _check_inputs(values, r):
    """입력을 검증하고 하이퍼큐브 차원 d를 반환한다."""
    if len(values) == 0:
        raise EmptyInputError("평가값 리스트가 비어 있습니다")
    d = required_bits(len(values))
    if len(r) != d:
        raise DimensionMismatchError(d, len(r))
    return d


# ─────────────────────────────────────────────────────────────────────
# Naive: 정점별 기저 계산
# ─────────────────────────────────────────────────────────────────────

def vertex_basis_eval(w, r):
    """정점 w의 다중선형 Lagrange 기저 L_w를 r에서 평가한다.

    L_w(r) = Π_k (w_k · r_k + (1 - w_k) · (1 - r_k))

    r이 정점일 때 L_w(r) = 1 (r = w) 또는 0 (r ≠ w).

    Args:
        w: 0/1 정수 리스트 (길이 d)
        r: FR 원소 리스트 (길이 d)
    """
    acc = FR(1)
    for w_k, r_k in zip(w, r):
        acc = acc * (r_k * w_k + (FR(1) - r_k) * (1 - w_k))
    return acc


def evaluate_naive(values, r):
    """다중선형 확장을 정점별 기저로 평가한다 (O(2^d · d)).

    단발성 평가에 적합하다.

    Args:
        values: FR 원소 리스트 (길이 ≤ 2^d)
        r: FR 원소 리스트 (길이 d)

    Returns:
        FR: f̃(r)

    Raises:
        EmptyInputError: values가 비어 있을 때
        DimensionMismatchError: len(r) ≠ d
    """
    d = _check_inputs(values, r)
    r = to_field_list(r)

    acc = FR(0)
    for i in range(1 << d):
        # 2^d보다 짧은 values는 0으로 패딩된 것으로 본다
        if i >= len(values):
            break
        acc = acc + to_field(values[i]) * vertex_basis_eval(to_binary(i, d), r)
    return acc


# ─────────────────────────────────────────────────────────────────────
# Memoized: 동적계획법으로 기저 테이블 구성
# ─────────────────────────────────────────────────────────────────────

def memoized_basis(r):
    """모든 정점 w ∈ {0,1}^d 의 L_w(r)를 정점 순서대로 반환한다.

    차원을 하나씩 늘려가며 테이블을 두 배로 확장한다:

        d=1:  [1 - r_0, r_0]
        d=2:  [(1-r_0)(1-r_1), (1-r_0)r_1, r_0(1-r_1), r_0 r_1]
        ...

    각 항목 e는 e·(1 - r_i)와 e·r_i 두 항목으로 확장되므로
    새 차원이 최하위 비트가 되어 정점 순서가 유지된다.
    전체 곱셈 횟수 O(2^d).

    Args:
        r: FR 원소 리스트 (길이 d). d = 0 이면 [FR(1)]

    Returns:
        list[FR]: 길이 2^d 의 기저 테이블
    """
    table = [FR(1)]
    for r_i in to_field_list(r):
        one_minus = FR(1) - r_i
        expanded = []
        for e in table:
            expanded.append(e * one_minus)
            expanded.append(e * r_i)
        table = expanded
    return table


def evaluate_with_basis(values, basis):
    """기저 테이블과 values의 내적. values 뒤쪽은 0으로 간주한다.

    같은 r에 대해 여러 테이블을 평가할 때 memoized_basis(r)를 재사용한다.
    """
    acc = FR(0)
    for value, l_w in zip(values, basis):
        acc = acc + to_field(value) * l_w
    return acc


def evaluate_memoized(values, r):
    """다중선형 확장을 memoized 기저 테이블로 평가한다 (O(2^d)).

    계약과 오류 조건은 evaluate_naive와 같다.
    """
    _check_inputs(values, r)
    return evaluate_with_basis(values, memoized_basis(r))


evaluate = evaluate_memoized
