"""
Verifier 챌린지 소스
=====================

Verifier는 매 라운드 Prover가 미리 예측할 수 없는 필드 원소 r_j를 뽑는다.
프로토콜의 나머지 로직을 바꾸지 않고 소스만 교체할 수 있도록
next() 하나의 인터페이스로 추상화한다.

  ┌────────────────────────────┬─────────────────────────────────────┐
  │ RandomChallengeSource      │ secrets 기반 CSPRNG (기본값)          │
  │ TranscriptChallengeSource  │ SHA-256 체이닝 트랜스크립트에 바인딩   │
  │ SeededChallengeSource      │ 시드 고정 PRNG (결정론적 테스트용)     │
  │ FixedChallengeSource       │ 미리 정한 값의 순서열 (테스트용)       │
  └────────────────────────────┴─────────────────────────────────────┘

**건전성(soundness) 주의**:
  SeededChallengeSource / FixedChallengeSource는 예측 가능하므로
  실제 검증에 사용하면 안 된다. 하나의 소스를 여러 세션에서
  재사용해서도 안 된다.

사용 예시:
    >>> source = TranscriptChallengeSource(b"sumcheck")
    >>> source.absorb(b"g_1", [FR(10), FR(26)])
    >>> r_1 = source.next()
"""

import hashlib
import random
import secrets

from sumcheck.field import FR, CURVE_ORDER, to_field


class ChallengeSource:
    """챌린지 소스의 기본 클래스.

    하위 클래스는 next()를 구현한다. absorb()는 Verifier가 챌린지를 뽑기 전에
    그 라운드의 메시지를 전달하는 훅이며, 트랜스크립트 기반 소스만 사용한다.
    """

    def absorb(self, label, scalars):
        """라운드 메시지를 소스에 전달한다. 기본 구현은 무시한다."""

    def next(self):
        raise NotImplementedError


class RandomChallengeSource(ChallengeSource):
    """운영체제 CSPRNG(secrets)에서 [0, p) 균등 분포 챌린지를 뽑는다."""

    def next(self):
        return FR(secrets.randbelow(CURVE_ORDER))


class SeededChallengeSource(ChallengeSource):
    """시드 고정 PRNG. 같은 시드는 같은 챌린지 순서열을 만든다.

    Args:
        seed: random.Random 시드
        bound: 챌린지 상한 (기본값: 필드 크기). 작은 값은 사람이 읽기 쉬운
               데모용이지만 건전성 오류 확률이 1/bound 수준으로 커진다.
    """

    def __init__(self, seed, bound=None):
        self.seed = seed
        self.bound = CURVE_ORDER if bound is None else bound
        self._rng = random.Random(seed)

    def next(self):
        return FR(self._rng.randrange(self.bound))


class FixedChallengeSource(ChallengeSource):
    """주어진 값을 순서대로 돌려준다. 값이 떨어지면 IndexError."""

    def __init__(self, values):
        self.values = [to_field(v) for v in values]
        self.position = 0

    def next(self):
        if self.position >= len(self.values):
            raise IndexError(
                f"고정 챌린지가 모두 소진되었습니다 ({len(self.values)}개)"
            )
        value = self.values[self.position]
        self.position += 1
        return value


class TranscriptChallengeSource(ChallengeSource):
    """SHA-256 기반 트랜스크립트 챌린지.

    해시 상태를 누적하여 결정론적이면서 예측 불가능한 챌린지를 생성한다.
    Verifier가 각 라운드 다항식 g_j를 absorb한 뒤 next()를 호출하므로
    r_j는 지금까지 주고받은 모든 메시지에 바인딩된다.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열

    보안 주의:
        - 모든 데이터는 레이블(label)과 함께 추가하여 도메인 분리 보장
        - 초기 레이블(세션 식별자)이 같으면 같은 챌린지가 생성되므로
          세션마다 다른 레이블을 사용해야 한다
    """

    def __init__(self, label=b"sumcheck"):
        self.state = bytearray()
        self.state.extend(label)
        self.counter = 0

    def append_scalar(self, label, scalar):
        """FR 스칼라 값을 32바이트 빅엔디안으로 트랜스크립트에 추가한다."""
        self.state.extend(label)
        val = int(scalar) % CURVE_ORDER
        self.state.extend(val.to_bytes(32, "big"))

    def absorb(self, label, scalars):
        for scalar in scalars:
            self.append_scalar(label, scalar)

    def challenge_scalar(self, label):
        """트랜스크립트로부터 챌린지 스칼라를 생성한다.

        현재 상태를 SHA-256으로 해싱하여 FR 원소를 도출한다.
        생성된 해시는 상태에 다시 추가된다 (체이닝).
        """
        self.state.extend(label)
        h = hashlib.sha256(bytes(self.state)).digest()
        challenge = FR(int.from_bytes(h, "big") % CURVE_ORDER)
        self.state.extend(h)
        return challenge

    def next(self):
        self.counter += 1
        return self.challenge_scalar(f"r_{self.counter}".encode())
