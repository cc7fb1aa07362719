''' Number model: real and complex values, their arithmetic and formatting '''

import math
import cmath
from typing import Callable, Tuple, Union
from colorama import Fore as fg
from cplxrpn.atoms import Literal, TypeMismatch, DomainError, DivisionByZero

WORD_MASK = 0xFFFF_FFFF
MAX_DIGITS = 17

class Number(Literal):
    ''' Abstract. Real or complex value, the only thing the stack holds. '''
    kind = 'number'
    def __init__(self, value: Union[float, complex]) -> None:
        self.value = value
    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.value == other.value
    def __hash__(self) -> int:
        return hash((type(self), self.value))
    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.value!r})'
    def __str__(self) -> str:
        return f'{fg.CYAN}{format_number(self)}{fg.RESET}'
    def as_complex(self) -> complex:
        return complex(self.value)

class Real(Number):
    ''' Real value, a 64 bits float. '''
    kind = 'real'
    def __init__(self, value: float) -> None:
        super().__init__(float(value))
    def is_integral(self) -> bool:
        return math.isfinite(self.value) and self.value == int(self.value)

class Complex(Number):
    ''' Complex value, a pair of 64 bits floats. '''
    kind = 'complex'
    def __init__(self, value: complex) -> None:
        super().__init__(complex(value))

def zero(kind: str) -> Number:
    return Complex(0j) if kind == Complex.kind else Real(0.0)

# Formatting

def format_float(x: float, digits: int = 0) -> str:
    if digits > 0: return f'{x:.{digits}f}'
    text = repr(x)
    return text[:-2] if text.endswith('.0') else text

def format_number(number: Number, digits: int = 0) -> str:
    '''
    Renders a value as R, R+Ij or R-Ij. A complex value without imaginary part
    renders as its real part. With digits = 0 the shortest text that reads back
    to the same float is used.
    '''
    if isinstance(number, Real): return format_float(number.value, digits)
    re, im = number.value.real, number.value.imag
    if im == 0: return format_float(re, digits)
    sign = '-' if math.copysign(1.0, im) < 0 else '+'
    return f'{format_float(re, digits)}{sign}{format_float(abs(im), digits)}j'

# Arithmetic

def require_real(number: Number, word: str) -> float:
    if not isinstance(number, Real):
        raise TypeMismatch(f'{word} needs a real argument, got {number}')
    return number.value

def _combine(a: Number, b: Number, op: Callable) -> Number:
    if isinstance(a, Real) and isinstance(b, Real): return Real(op(a.value, b.value))
    return Complex(op(a.as_complex(), b.as_complex()))

def add(a: Number, b: Number) -> Number:
    return _combine(a, b, lambda x, y: x + y)

def subtract(a: Number, b: Number) -> Number:
    return _combine(a, b, lambda x, y: x - y)

def multiply(a: Number, b: Number) -> Number:
    return _combine(a, b, lambda x, y: x * y)

def divide(a: Number, b: Number) -> Number:
    if b.as_complex() == 0: raise DivisionByZero(f'{a} / {b}')
    return _combine(a, b, lambda x, y: x / y)

def absolute(a: Number) -> Real:
    return Real(abs(a.value))

def _round_half_away(x: float) -> float:
    if not math.isfinite(x): return x
    return math.copysign(math.floor(abs(x) + 0.5), x)

def _componentwise(a: Number, op: Callable[[float], float]) -> Number:
    if isinstance(a, Real): return Real(op(a.value))
    return Complex(complex(op(a.value.real), op(a.value.imag)))

def _finite(op: Callable[[float], int]) -> Callable[[float], float]:
    return lambda x: float(op(x)) if math.isfinite(x) else x

def floor(a: Number) -> Number:
    return _componentwise(a, _finite(math.floor))

def ceil(a: Number) -> Number:
    return _componentwise(a, _finite(math.ceil))

def round_half_away(a: Number) -> Number:
    return _componentwise(a, _round_half_away)

def real_part(a: Number) -> Real:
    return Real(a.as_complex().real)

def imaginary_part(a: Number) -> Real:
    return Real(a.as_complex().imag)

def to_complex(a: Number) -> Complex:
    return Complex(complex(require_real(a, 'r2c'), 0.0))

def split_complex(a: Number) -> Tuple[Real, Real]:
    if not isinstance(a, Complex): raise TypeMismatch(f'c2r needs a complex argument, got {a}')
    return Real(a.value.real), Real(a.value.imag)

# Logical operations on 32 bits unsigned words

def to_word(a: Number, word: str) -> int:
    ''' Truncates toward zero and saturates to 0 .. 2^32-1. '''
    x = require_real(a, word)
    if not math.isfinite(x): raise DomainError(f'{word} needs a finite argument, got {a}')
    return min(max(int(x), 0), WORD_MASK)

def logical(op: Callable[[int, int], int], word: str) -> Callable[[Number, Number], Real]:
    def apply(a: Number, b: Number) -> Real:
        return Real(op(to_word(a, word), to_word(b, word)) & WORD_MASK)
    return apply

def complement(a: Number) -> Real:
    return Real(~to_word(a, 'neg') & WORD_MASK)

def shift(a: Number, count: Number, left: bool) -> Real:
    word = 'shl' if left else 'shr'
    n = require_real(count, word)
    if n < 0: raise TypeMismatch(f'{word} needs a non negative shift count, got {count}')
    x = to_word(a, word)
    if n >= 32: return Real(0)
    n = to_word(count, word)
    return Real(((x << n) if left else (x >> n)) & WORD_MASK)

def compare(op: Callable[[float, float], bool], word: str) -> Callable[[Number, Number], Real]:
    def apply(a: Number, b: Number) -> Real:
        return Real(1 if op(require_real(a, word), require_real(b, word)) else 0)
    return apply

# Transcendental functions

def _guarded(function: Callable, word: str, *args):
    try:
        return function(*args)
    except ZeroDivisionError:
        raise DivisionByZero(f'{word} of {" , ".join(f"{arg}" for arg in args)}') from None
    except (ValueError, OverflowError):
        raise DomainError(f'{word} undefined for {" , ".join(f"{arg}" for arg in args)}') from None

def analytic(word: str, real: Callable[[float], float], complex_: Callable[[complex], complex]) -> Callable[[Number], Number]:
    ''' Function accepting both kinds: real math for reals, complex math for complex values. '''
    def apply(a: Number) -> Number:
        if isinstance(a, Real): return Real(_guarded(real, word, a.value))
        return Complex(_guarded(complex_, word, a.value))
    return apply

def real_only(word: str, real: Callable[[float], float]) -> Callable[[Number], Number]:
    def apply(a: Number) -> Number:
        return Real(_guarded(real, word, require_real(a, word)))
    return apply

LN2 = math.log(2.0)
LN10 = math.log(10.0)

sin_radians = analytic('sinr', math.sin, cmath.sin)
cos_radians = analytic('cosr', math.cos, cmath.cos)
tan_radians = analytic('tanr', math.tan, cmath.tan)
asin_radians = analytic('asinr', math.asin, cmath.asin)
acos_radians = analytic('acosr', math.acos, cmath.acos)
atan_radians = analytic('atanr', math.atan, cmath.atan)

sin_degrees = real_only('sind', lambda x: math.sin(math.radians(x)))
cos_degrees = real_only('cosd', lambda x: math.cos(math.radians(x)))
tan_degrees = real_only('tand', lambda x: math.tan(math.radians(x)))
asin_degrees = real_only('asind', lambda x: math.degrees(math.asin(x)))
acos_degrees = real_only('acosd', lambda x: math.degrees(math.acos(x)))
atan_degrees = real_only('atand', lambda x: math.degrees(math.atan(x)))

log_e = analytic('loge', math.log, cmath.log)
log_10 = analytic('log10', math.log10, cmath.log10)
log_2 = analytic('log2', math.log2, lambda z: cmath.log(z) / LN2)
exp_e = analytic('expe', math.exp, cmath.exp)
exp_10 = analytic('exp10', lambda x: math.pow(10.0, x), lambda z: cmath.exp(z * LN10))
exp_2 = analytic('exp2', lambda x: math.pow(2.0, x), lambda z: cmath.exp(z * LN2))

def log_base(a: Number, base: Number) -> Number:
    ''' Logarithm of a in the given base. '''
    if isinstance(a, Real) and isinstance(base, Real):
        return Real(_guarded(lambda x, b: math.log(x) / math.log(b), 'logx', a.value, base.value))
    return Complex(_guarded(lambda x, b: cmath.log(x) / cmath.log(b), 'logx', a.as_complex(), base.as_complex()))

def power(base: Number, exponent: Number) -> Number:
    if isinstance(base, Real) and isinstance(exponent, Real):
        return Real(_guarded(math.pow, 'expx', base.value, exponent.value))
    return Complex(_guarded(lambda b, e: b ** e, 'expx', base.as_complex(), exponent.as_complex()))
