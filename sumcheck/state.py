"""
세션 상태 값 (Prover / Verifier)
=================================

Prover와 Verifier는 각자의 세션 상태를 소유하며 공유 가변 상태는 없다.
상태는 라운드마다 새 값으로 교체되는 추가 전용(append-only) 값이다:
기존 값을 수정하지 않고 with_* 메서드가 원소 하나가 추가된 새 세션을 돌려준다.
그래서 라운드 수와 진행 방향(단조 증가)이 값 자체에 드러난다.

  ProverSession:    g, v, challenges (r_1..r_{j-1}), rounds_completed
  VerifierSession:  proposed_sum, v, challenges (r_1..r_j),
                    polynomials (g_1..g_j), phase

**Verifier 상태 전이**:

  AWAITING_ROUND(1) ─g_1─▶ ... ─g_v─▶ AWAITING_ORACLE_QUERY ─g─▶ DONE
          │                                    │
          └────────── 거부 ──────────▶ REJECTED ◀┘
"""

AWAITING_ROUND = "awaiting_round"
AWAITING_ORACLE_QUERY = "awaiting_oracle_query"
DONE = "done"
REJECTED = "rejected"


class ProverSession:
    """Prover의 라운드 간 상태.

    속성:
        g: 평가 테이블 (FR 튜플, 길이 2^v 로 패딩됨)
        v: 변수 개수
        challenges: 지금까지 고정한 r 값 튜플
        rounds_completed: 계산을 마친 라운드 수
    """

    def __init__(self, g, v, challenges=(), rounds_completed=0):
        self.g = tuple(g)
        self.v = v
        self.challenges = tuple(challenges)
        self.rounds_completed = rounds_completed

    @property
    def next_round(self):
        return self.rounds_completed + 1

    def with_round(self, challenge=None):
        """라운드 하나를 마친 세션. challenge가 있으면 r에 추가한다."""
        challenges = self.challenges
        if challenge is not None:
            challenges = challenges + (challenge,)
        return ProverSession(self.g, self.v, challenges, self.rounds_completed + 1)

    def __repr__(self):
        return (f"ProverSession(v={self.v}, rounds_completed={self.rounds_completed}, "
                f"challenges={[int(c) for c in self.challenges]})")


class VerifierSession:
    """Verifier의 라운드 간 상태.

    속성:
        proposed_sum: Prover가 주장한 합 C
        v: 변수 개수
        challenges: 발급한 챌린지 (r_1, ..., r_j)
        polynomials: 수락한 라운드 다항식 (g_1, ..., g_j), 각각 FR 튜플
        phase: AWAITING_ROUND / AWAITING_ORACLE_QUERY / DONE / REJECTED
        reason: 거부 사유 (REJECTED일 때만)
    """

    def __init__(self, proposed_sum, v, challenges=(), polynomials=(),
                 phase=None, reason=None):
        self.proposed_sum = proposed_sum
        self.v = v
        self.challenges = tuple(challenges)
        self.polynomials = tuple(tuple(p) for p in polynomials)
        if phase is None:
            phase = AWAITING_ROUND if len(self.polynomials) < v else AWAITING_ORACLE_QUERY
        self.phase = phase
        self.reason = reason

    @property
    def current_round(self):
        """다음에 검증할 라운드 번호 j."""
        return len(self.polynomials) + 1

    @property
    def rounds_completed(self):
        return len(self.polynomials)

    def with_round(self, polynomial, challenge):
        """라운드 다항식 g_j와 챌린지 r_j가 추가된 세션."""
        return VerifierSession(
            self.proposed_sum,
            self.v,
            self.challenges + (challenge,),
            self.polynomials + (tuple(polynomial),),
        )

    def accepted(self):
        return VerifierSession(self.proposed_sum, self.v, self.challenges,
                               self.polynomials, DONE)

    def rejected(self, reason):
        return VerifierSession(self.proposed_sum, self.v, self.challenges,
                               self.polynomials, REJECTED, reason)

    def __repr__(self):
        return (f"VerifierSession(v={self.v}, phase={self.phase}, "
                f"rounds_completed={self.rounds_completed})")
