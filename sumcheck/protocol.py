"""
Sum-check 프로토콜 오케스트레이터
==================================

Prover와 Verifier를 연결해 전체 프로토콜을 한 번 실행한다.

  ┌─────────────────────────────────────────────────────┐
  │  Prover → Verifier: C                               │
  ├─────────────────────────────────────────────────────┤
  │  Round j = 1..v:                                    │
  │    Prover → Verifier: g_j                           │
  │    Verifier → Prover: r_j                           │
  ├─────────────────────────────────────────────────────┤
  │  Oracle query: Verifier가 g̃(r_1..r_v) 를 직접 평가   │
  └─────────────────────────────────────────────────────┘

두 당사자는 메시지(C, g_j, r_j)로만 통신하며 상태를 공유하지 않는다.
거부는 RejectionError로 전파된다.

사용 예시:
    >>> result = run_sumcheck([FR(i) for i in range(1, 9)], 3)
    >>> result.proposed_sum   # FR(36)
    >>> result.accepted       # True
"""

from sumcheck.prover import Prover
from sumcheck.verifier import Verifier


class SumcheckResult:
    """한 번의 프로토콜 실행 기록.

    속성:
        proposed_sum: Prover가 주장한 합 C
        polynomials: Verifier가 받은 라운드 다항식 [g_1, ..., g_v]
        challenges: 발급된 챌린지 [r_1, ..., r_v]
        accepted: 최종 판정
    """

    def __init__(self, proposed_sum, polynomials, challenges, accepted):
        self.proposed_sum = proposed_sum
        self.polynomials = polynomials
        self.challenges = challenges
        self.accepted = accepted

    def __repr__(self):
        return (f"SumcheckResult(proposed_sum={int(self.proposed_sum)}, "
                f"rounds={len(self.polynomials)}, accepted={self.accepted})")


def run_sumcheck(g, v, challenge_source=None, tracer=None, incremental=True,
                 intercept=None, claimed_sum=None):
    """Sum-check 프로토콜을 처음부터 끝까지 실행한다.

    Args:
        g: 평가 테이블 (길이 ≤ 2^v)
        v: 변수 개수
        challenge_source: Verifier의 챌린지 소스 (None이면 CSPRNG)
        tracer: Prover/Verifier가 공유할 Tracer
        incremental: Prover의 계산 방식
        intercept: (round, polynomial) → polynomial. Prover가 보낸 g_j를
                   Verifier에 전달하기 전에 바꿔치기한다 (부정직한 Prover 시뮬레이션).
        claimed_sum: 주어지면 Prover의 계산 대신 이 값을 C로 주장한다.

    Returns:
        SumcheckResult

    Raises:
        RejectionError: Verifier가 거부했을 때
    """
    prover = Prover(g, v, incremental=incremental, tracer=tracer)
    proposed_sum = prover.get_proposed_sum()
    if claimed_sum is not None:
        proposed_sum = claimed_sum

    verifier = Verifier(proposed_sum, v, challenge_source=challenge_source, tracer=tracer)

    r_j = None
    for j in range(1, v + 1):
        g_j = prover.get_round_polynomial(r_j)
        if intercept is not None:
            g_j = intercept(j, g_j)
        r_j = verifier.verify_round_polynomial(g_j)

    accepted = verifier.verify_oracle_query(prover.g)
    return SumcheckResult(verifier.session.proposed_sum, verifier.polynomials,
                          verifier.r, accepted)
