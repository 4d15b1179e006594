"""
Field / utils tests: field.py, utils.py
"""
import pytest

from sumcheck.errors import DivisionByZeroError, SumcheckError
from sumcheck.field import FR, CURVE_ORDER, to_field, to_field_list, node_index
from sumcheck.utils import (
    required_bits,
    to_binary,
    binary_vertices,
    pad_to_length,
)


# =====================================================================
# FR arithmetic
# =====================================================================

class TestFR:
    def test_modular_reduction(self):
        assert FR(CURVE_ORDER) == FR(0)
        assert FR(CURVE_ORDER + 7) == FR(7)
        assert FR(-1) == FR(CURVE_ORDER - 1)

    def test_arithmetic(self):
        assert FR(3) + FR(5) == FR(8)
        assert FR(0) - FR(1) == FR(CURVE_ORDER - 1)
        assert FR(3) * FR(7) == FR(21)

    def test_division(self):
        a = FR(1) / FR(3)
        assert a * FR(3) == FR(1)

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            FR(5) / FR(0)

    def test_division_by_zero_int(self):
        with pytest.raises(DivisionByZeroError):
            FR(5) / CURVE_ORDER

    def test_rdivision_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            5 / FR(0)

    def test_division_by_zero_is_zero_division(self):
        # 표준 ZeroDivisionError로도 잡을 수 있다
        with pytest.raises(ZeroDivisionError):
            FR(1) / FR(0)
        assert issubclass(DivisionByZeroError, SumcheckError)

    def test_results_stay_fr(self):
        assert isinstance(FR(2) * 3, FR)
        assert isinstance(1 - FR(2), FR)


class TestConversions:
    def test_to_field_passthrough(self):
        a = FR(11)
        assert to_field(a) is a

    def test_to_field_int(self):
        assert to_field(12) == FR(12)

    def test_to_field_list(self):
        assert to_field_list([1, FR(2), 3]) == [FR(1), FR(2), FR(3)]


class TestNodeIndex:
    def test_node(self):
        assert node_index(FR(0), 2) == 0
        assert node_index(FR(1), 2) == 1

    def test_not_node(self):
        assert node_index(FR(2), 2) is None

    def test_negative_is_large(self):
        # -1 = p-1 은 정수 임베딩에서 가장 큰 값
        assert node_index(FR(-1), 2) is None


# =====================================================================
# Hypercube utilities
# =====================================================================

class TestRequiredBits:
    def test_values(self):
        assert required_bits(1) == 0
        assert required_bits(2) == 1
        assert required_bits(3) == 2
        assert required_bits(8) == 3
        assert required_bits(9) == 4
        assert required_bits(27) == 5

    def test_invalid(self):
        with pytest.raises(ValueError):
            required_bits(0)


class TestBinary:
    def test_msb_first(self):
        assert to_binary(6, 3) == [1, 1, 0]
        assert to_binary(1, 3) == [0, 0, 1]

    def test_vertices_order(self):
        assert binary_vertices(2) == [[0, 0], [0, 1], [1, 0], [1, 1]]

    def test_zero_dimension(self):
        assert binary_vertices(0) == [[]]


class TestPadding:
    def test_pad_to_length(self):
        padded = pad_to_length([FR(1), FR(2)], 4)
        assert padded == [FR(1), FR(2), FR(0), FR(0)]
