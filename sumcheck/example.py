"""
Sum-check E2E 데모: v = 3, g = [1, 2, ..., 8]
==============================================

이 스크립트는 sum-check 프로토콜의 전체 흐름을 시연한다.

실행:
    python -m sumcheck.example

흐름:
    1. 평가 테이블 g 구성 (정점 000..111 에서 1..8)
    2. Prover가 합 C = 36 제안
    3. 3 라운드 (g_j 전송 → 검사 → r_j 발급)
    4. 오라클 질의 g̃(r) == g_3(r_3)
    5. 조작된 g_2로 다시 실행 → 거부
    6. 메시지 "hi"의 LDE 평가
"""

from sumcheck.challenge import SeededChallengeSource
from sumcheck.encoders import encode_ascii
from sumcheck.errors import RejectionError
from sumcheck.field import FR
from sumcheck.protocol import run_sumcheck
from sumcheck.trace import Tracer, print_hook
from sumcheck import multilinear, univariate


def main():
    print("=" * 60)
    print("  Sum-check Interactive Proof Demo")
    print("  g: {0,1}^3 → F,  g = [1, 2, 3, 4, 5, 6, 7, 8]")
    print("=" * 60)

    v = 3
    g = [FR(i + 1) for i in range(2 ** v)]
    tracer = Tracer(print_hook)

    # ── 1~4. 정직한 실행 ──
    print("\n[1] 정직한 Prover로 실행...")
    # 데모 가독성을 위해 작은 범위의 챌린지를 사용한다
    result = run_sumcheck(g, v, challenge_source=SeededChallengeSource(7, bound=100),
                          tracer=tracer)
    print(f"    검증 결과: {'수락 ✓' if result.accepted else '거부 ✗'}")
    print(f"    r = {[int(r) for r in result.challenges]}")

    # ── 5. 조작된 라운드 다항식 ──
    print("\n[2] g_2(1)에 1을 더해 조작한 뒤 실행...")

    def tamper(j, g_j):
        if j == 2:
            return [g_j[0], g_j[1] + FR(1)]
        return g_j

    rejected = False
    try:
        run_sumcheck(g, v, challenge_source=SeededChallengeSource(7, bound=100),
                     tracer=tracer, intercept=tamper)
    except RejectionError as e:
        rejected = True
        print(f"    검증 결과: 거부 ✗ (예상대로 실패, 라운드 {e.round})")

    # ── 6. 메시지 확장 ──
    print("\n[3] 메시지 'hi'의 저차 확장...")
    values = encode_ascii("hi")
    for x in range(4):
        print(f"    univariate({x}) = {int(univariate.evaluate(values, FR(x)))}, "
              f"multilinear([{x}]) = {int(multilinear.evaluate(values, [FR(x)]))}")

    print("\n" + "=" * 60)
    if result.accepted and rejected:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return result.accepted


if __name__ == "__main__":
    main()
