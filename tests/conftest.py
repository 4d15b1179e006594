import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sumcheck.field import FR


# ── 테스트 상수 ──
# g: {0,1}^3 → F,  정점 000..111 에서 1..8.  g(x) = 1 + 4x_0 + 2x_1 + x_2
EXAMPLE_V = 3
EXAMPLE_G = [1, 2, 3, 4, 5, 6, 7, 8]
EXAMPLE_SUM = 36

# 챌린지 r = (2, 3, 5) 로 고정했을 때의 라운드 다항식과 g̃(r)
FIXED_CHALLENGES = [2, 3, 5]
EXPECTED_POLYNOMIALS = [[10, 26], [19, 23], [15, 16]]
EXPECTED_G_OF_R = 20


@pytest.fixture
def example_g():
    """v = 3 예제 평가 테이블 (FR)."""
    return [FR(x) for x in EXAMPLE_G]


@pytest.fixture
def example_data(example_g):
    """v = 3 예제의 기대값 묶음."""
    return {
        "g": example_g,
        "v": EXAMPLE_V,
        "sum": FR(EXAMPLE_SUM),
        "challenges": [FR(r) for r in FIXED_CHALLENGES],
        "polynomials": [[FR(a), FR(b)] for a, b in EXPECTED_POLYNOMIALS],
        "g_of_r": FR(EXPECTED_G_OF_R),
    }


@pytest.fixture
def message_27():
    """길이 27의 ASCII 메시지 (d = 5, 0-패딩 필요)."""
    return "the quick brown fox jumps o"
