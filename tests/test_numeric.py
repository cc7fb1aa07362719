import cmath
import math
import operator

import pytest

from cplxrpn import numeric
from cplxrpn.atoms import TypeMismatch, DomainError, DivisionByZero
from cplxrpn.numeric import Real, Complex, format_number


class TestFormatting:
    def test_integral_real_has_no_fraction(self):
        assert format_number(Real(5.0)) == '5'
        assert format_number(Real(-12.0)) == '-12'

    def test_automatic_mode_is_shortest_round_trip(self):
        assert format_number(Real(0.1 + 0.2)) == '0.30000000000000004'
        assert format_number(Real(1 / 3)) == '0.3333333333333333'
        assert format_number(Real(2.5)) == '2.5'

    def test_fixed_digits(self):
        assert format_number(Real(1 / 3), 4) == '0.3333'
        assert format_number(Real(5), 2) == '5.00'

    def test_complex(self):
        assert format_number(Complex(3 + 4j)) == '3+4j'
        assert format_number(Complex(3 - 4j)) == '3-4j'
        assert format_number(Complex(-0.5 + 1.25j)) == '-0.5+1.25j'
        assert format_number(Complex(1 / 3 + 1j), 2) == '0.33+1.00j'

    def test_complex_without_imaginary_part_renders_as_real(self):
        assert format_number(Complex(2 + 0j)) == '2'


class TestArithmetic:
    def test_reals_stay_real(self):
        assert numeric.add(Real(1), Real(2)) == Real(3)
        assert numeric.subtract(Real(10), Real(4)) == Real(6)
        assert numeric.multiply(Real(3), Real(4)) == Real(12)
        assert numeric.divide(Real(10), Real(4)) == Real(2.5)

    def test_mixing_promotes_to_complex(self):
        assert numeric.add(Real(1), Complex(2j)) == Complex(1 + 2j)
        assert numeric.multiply(Complex(1 + 2j), Complex(3 - 1j)) == Complex(5 + 5j)
        assert numeric.divide(Complex(5 + 5j), Complex(3 - 1j)).value == pytest.approx(1 + 2j)

    def test_complex_without_imaginary_part_stays_complex(self):
        assert isinstance(numeric.subtract(Complex(1 + 1j), Complex(1j)), Complex)

    @pytest.mark.parametrize('divisor', [Real(0), Real(-0.0), Complex(0j)])
    def test_division_by_zero(self, divisor):
        with pytest.raises(DivisionByZero):
            numeric.divide(Real(1), divisor)

    def test_absolute(self):
        assert numeric.absolute(Real(-2)) == Real(2)
        assert numeric.absolute(Complex(3 + 4j)) == Real(5)

    def test_rounding(self):
        assert numeric.round_half_away(Real(2.5)) == Real(3)
        assert numeric.round_half_away(Real(-2.5)) == Real(-3)
        assert numeric.floor(Real(-1.5)) == Real(-2)
        assert numeric.ceil(Real(1.2)) == Real(2)
        assert numeric.floor(Complex(1.5 - 1.5j)) == Complex(1 - 2j)

    def test_complex_parts(self):
        assert numeric.real_part(Complex(3 + 4j)) == Real(3)
        assert numeric.imaginary_part(Complex(3 + 4j)) == Real(4)
        assert numeric.imaginary_part(Real(3)) == Real(0)
        assert numeric.to_complex(Real(2)) == Complex(2 + 0j)
        assert numeric.split_complex(Complex(3 + 4j)) == (Real(3), Real(4))

    def test_r2c_needs_real(self):
        with pytest.raises(TypeMismatch):
            numeric.to_complex(Complex(1j))


class TestLogical:
    def test_bitwise_on_truncated_reals(self):
        assert numeric.logical(operator.and_, 'and')(Real(12), Real(10)) == Real(8)
        assert numeric.logical(operator.or_, 'or')(Real(12.9), Real(10)) == Real(14)
        assert numeric.logical(operator.xor, 'xor')(Real(12), Real(10)) == Real(6)

    def test_complement_is_32_bits(self):
        assert numeric.complement(Real(0)) == Real(0xFFFF_FFFF)

    def test_negative_operand_saturates_to_zero(self):
        assert numeric.logical(operator.and_, 'and')(Real(-1), Real(1)) == Real(0)
        assert numeric.complement(Real(-3)) == Real(0xFFFF_FFFF)

    def test_large_operand_saturates_to_max_word(self):
        assert numeric.logical(operator.or_, 'or')(Real(5e9), Real(0)) == Real(0xFFFF_FFFF)
        assert numeric.complement(Real(5e9)) == Real(0)

    def test_shifts(self):
        assert numeric.shift(Real(1), Real(4), True) == Real(16)
        assert numeric.shift(Real(16), Real(2), False) == Real(4)
        assert numeric.shift(Real(1), Real(40), True) == Real(0)
        with pytest.raises(TypeMismatch):
            numeric.shift(Real(1), Real(-1), True)

    def test_complex_operand_is_rejected(self):
        with pytest.raises(TypeMismatch):
            numeric.logical(operator.and_, 'and')(Complex(1j), Real(1))

    def test_comparisons(self):
        assert numeric.compare(operator.gt, '>')(Real(5), Real(4)) == Real(1)
        assert numeric.compare(operator.gt, '>')(Real(4), Real(5)) == Real(0)
        with pytest.raises(TypeMismatch):
            numeric.compare(operator.eq, '=')(Complex(1j), Complex(1j))


class TestFunctions:
    def test_degrees(self):
        assert numeric.sin_degrees(Real(90)) == Real(1)
        assert numeric.atan_degrees(Real(1)).value == pytest.approx(45)
        with pytest.raises(TypeMismatch):
            numeric.cos_degrees(Complex(1j))

    def test_radians_accept_complex(self):
        assert numeric.cos_radians(Real(0)) == Real(1)
        assert numeric.sin_radians(Complex(1j)).value == pytest.approx(cmath.sin(1j))

    def test_logarithms(self):
        assert numeric.log_10(Real(100)) == Real(2)
        assert numeric.log_2(Real(8)) == Real(3)
        assert numeric.log_base(Real(8), Real(2)).value == pytest.approx(3)
        assert numeric.log_e(Complex(-1 + 0j)).value == pytest.approx(math.pi * 1j)

    def test_exponentials(self):
        assert numeric.exp_e(Real(0)) == Real(1)
        assert numeric.exp_2(Real(3)) == Real(8)
        assert numeric.exp_10(Real(2)) == Real(100)
        assert numeric.power(Real(2), Real(10)) == Real(1024)

    def test_domain_errors(self):
        with pytest.raises(DomainError):
            numeric.log_e(Real(-1))
        with pytest.raises(DomainError):
            numeric.asin_radians(Real(2))
        with pytest.raises(DomainError):
            numeric.exp_e(Real(1000))

    def test_logarithm_in_base_one(self):
        with pytest.raises(DivisionByZero):
            numeric.log_base(Real(8), Real(1))
