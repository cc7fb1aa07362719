''' All intrinsic implementations '''

import operator
from typing import Callable, Tuple
from colorama import Fore as fg
from cplxrpn.atoms import Intrinsic, TypeMismatch
from cplxrpn.parsing import Pattern
from cplxrpn import numeric
from cplxrpn.numeric import Number, Real, Complex, format_number
from cplxrpn.execution import Runtime, Vector, Quit, BANK_SIZE

HELP = f'''RPN complex calculator, inspired by the FORTH, gforth and dc commands.

   Basic example:      10 6 4 - / p                 {fg.LIGHTBLACK_EX}# 6 - 4 --> 2, 10 / 2 = 5{fg.RESET}

   Stack operation:    dup drop over rot swap clear
   Stack <--> Reg:     VALUE RNUM save, RNUM load, RNUM creg, clregs
   Stack <--> Vector:  VALUE IDX VNUM vsave, IDX VNUM vload
   Create a vector:    LEN VNUM vreal, LEN VNUM vcplx
   Clear vectors:      VNUM vreg, clvecs
   Debug:              dumpstack or ds, dumpreg or dr, dumpvec or dv, dumpsr or dsr

   Literal:            3 4j                         {fg.LIGHTBLACK_EX}# real or complex number{fg.RESET}
   Arithmetic:         + - * / abs
   Rounding:           floor ceil round
   Complex:            real imag r2c c2r
   Logical:            and or xor neg, N shl, N shr

   Trigonometric(rad): sinr cosr tanr asinr acosr atanr
   Trigonometric(deg): sind cosd tand asind acosd atand
   Logarithm:          loge expe log10 exp10 log2 exp2 logx expx

   Output:             print or p                   {fg.LIGHTBLACK_EX}# stack is unchanged!{fg.RESET}
   Output frac. digit: 4 frdigit                    {fg.LIGHTBLACK_EX}# N.xxxx, 0 auto, max 17 (K){fg.RESET}

   Subroutine:         : srname 10 4 p drop ;       {fg.LIGHTBLACK_EX}# multiline is allowed{fg.RESET}
   Call subroutine:    srname

   Relation:           5 4 > p                      {fg.LIGHTBLACK_EX}# 1{fg.RESET}
   Loop:               10 [ 1 - p dup ]             {fg.LIGHTBLACK_EX}# loop until 0 before ']', pops it{fg.RESET}
   Loop:               10 [ 1 - p dup 5 > ]         {fg.LIGHTBLACK_EX}# loop while greater than 5{fg.RESET}

   Word list:          words or .w                  {fg.LIGHTBLACK_EX}# stack effect of every word{fg.RESET}
   Quit:               q quit bye exit
'''

class Unary(Intrinsic, abstract = True):
    ''' Abstract. Replaces the top value a by f(a). '''
    def __init__(self, value: str, comment: str, function: Callable[[Number], Number], aliases: Tuple[str, ...] = ()):
        super().__init__(value, comment, aliases)
        self.function = function
    def execute(self, runtime: Runtime) -> None:
        runtime.push(self.function(runtime.pop(Number)))

class Binary(Intrinsic, abstract = True):
    ''' Abstract. Replaces the two top values a b by f(a, b). '''
    def __init__(self, value: str, comment: str, function: Callable[[Number, Number], Number], aliases: Tuple[str, ...] = ()):
        super().__init__(value, comment, aliases)
        self.function = function
    def execute(self, runtime: Runtime) -> None:
        arg2, arg1 = runtime.pop2(Number, Number)
        runtime.push(self.function(arg1, arg2))

# Stack

class Dup(Intrinsic):
    def __init__(self): super().__init__('dup', 'a -- a a')
    def execute(self, runtime: Runtime) -> None:
        runtime.push(runtime.peek())

class Drop(Intrinsic):
    def __init__(self): super().__init__('drop', 'a --')
    def execute(self, runtime: Runtime) -> None:
        runtime.pop(Number)

class Over(Intrinsic):
    def __init__(self): super().__init__('over', 'a b -- a b a')
    def execute(self, runtime: Runtime) -> None:
        runtime.push(runtime.peek(1))

class Rotate(Intrinsic):
    def __init__(self): super().__init__('rot', 'a b c -- b c a')
    def execute(self, runtime: Runtime) -> None:
        c, b, a = runtime.pop_args([Number, Number, Number])
        runtime.push(b) ; runtime.push(c) ; runtime.push(a)

class Swap(Intrinsic):
    def __init__(self): super().__init__('swap', 'a b -- b a')
    def execute(self, runtime: Runtime) -> None:
        b, a = runtime.pop2(Number, Number)
        runtime.push(b) ; runtime.push(a)

class Clear(Intrinsic):
    def __init__(self): super().__init__('clear', 'a1 .. an --')
    def execute(self, runtime: Runtime) -> None:
        runtime.stack.clear()

# Registers

class Save(Intrinsic):
    def __init__(self): super().__init__('save', 'a r --  , store a in register r')
    def execute(self, runtime: Runtime) -> None:
        index, value = runtime.pop2(Real, Number)
        runtime.registers[runtime.register_index(index)] = value

class Load(Intrinsic):
    def __init__(self): super().__init__('load', 'r -- a  , push register r')
    def execute(self, runtime: Runtime) -> None:
        runtime.push(runtime.load_register(runtime.pop(Real)))

class ClearRegister(Intrinsic):
    def __init__(self): super().__init__('creg', 'r --  , clear register r')
    def execute(self, runtime: Runtime) -> None:
        runtime.registers[runtime.register_index(runtime.pop(Real))] = None

class ClearRegisters(Intrinsic):
    def __init__(self): super().__init__('clregs', 'clear all registers')
    def execute(self, runtime: Runtime) -> None:
        runtime.registers = [None] * BANK_SIZE

# Vectors

class CreateVector(Intrinsic, abstract = True):
    ''' Abstract. Creates a zero filled vector of a given kind. '''
    def __init__(self, value: str, kind: str):
        super().__init__(value, f'n v --  , create {kind} vector v of length n')
        self.kind = kind
    def execute(self, runtime: Runtime) -> None:
        index, length = runtime.pop2(Real, Real)
        slot = runtime.vector_index(index)
        if not length.is_integral() or length.value < 0:
            raise TypeMismatch(f'vector length {length} is not a non negative integer')
        runtime.vectors[slot] = Vector(self.kind, int(length.value))

class CreateRealVector(CreateVector):
    def __init__(self): super().__init__('vreal', Real.kind)

class CreateComplexVector(CreateVector):
    def __init__(self): super().__init__('vcplx', Complex.kind)

class VectorSave(Intrinsic):
    def __init__(self): super().__init__('vsave', 'a i v --  , store a at index i of vector v')
    def execute(self, runtime: Runtime) -> None:
        index, position, value = runtime.pop_args([Real, Real, Number])
        runtime.vector(index).store(position, value)

class VectorLoad(Intrinsic):
    def __init__(self): super().__init__('vload', 'i v -- a  , push element i of vector v')
    def execute(self, runtime: Runtime) -> None:
        index, position = runtime.pop2(Real, Real)
        runtime.push(runtime.vector(index).load(position))

class ClearVector(Intrinsic):
    def __init__(self): super().__init__('vreg', 'v --  , delete vector v', ('cvec',))
    def execute(self, runtime: Runtime) -> None:
        runtime.vectors[runtime.vector_index(runtime.pop(Real))] = None

class ClearVectors(Intrinsic):
    def __init__(self): super().__init__('clvecs', 'delete all vectors')
    def execute(self, runtime: Runtime) -> None:
        runtime.vectors = [None] * BANK_SIZE

# Debug

class DumpStack(Intrinsic):
    def __init__(self): super().__init__('dumpstack', 'print stack', ('ds',))
    def execute(self, runtime: Runtime) -> None:
        print(fg.LIGHTBLACK_EX+'STACK'+fg.RESET, file=runtime.output)
        i = len(runtime.stack)
        for number in runtime.stack:
            print(f'{fg.LIGHTBLACK_EX}  {i:3} :{fg.RESET} {format_number(number, runtime.precision)}', file=runtime.output)
            i -= 1

class DumpRegisters(Intrinsic):
    def __init__(self): super().__init__('dumpreg', 'print non empty registers', ('dr',))
    def execute(self, runtime: Runtime) -> None:
        print(fg.LIGHTBLACK_EX+'REGISTERS'+fg.RESET, file=runtime.output)
        for i, value in enumerate(runtime.registers):
            if value is None: continue
            print(f'{fg.LIGHTBLACK_EX}  Reg {i:3}:{fg.RESET} {format_number(value, runtime.precision)}', file=runtime.output)

class DumpVectors(Intrinsic):
    def __init__(self): super().__init__('dumpvec', 'print defined vectors', ('dv',))
    def execute(self, runtime: Runtime) -> None:
        print(fg.LIGHTBLACK_EX+'VECTORS'+fg.RESET, file=runtime.output)
        defined = [(i, vector) for i, vector in enumerate(runtime.vectors) if vector is not None]
        if not defined:
            print('  No vector defined. Use LEN VNUM vreal or LEN VNUM vcplx to create one.', file=runtime.output)
        for i, vector in defined:
            items = ' '.join(format_number(item, runtime.precision) for item in vector.items)
            print(f'{fg.LIGHTBLACK_EX}  Vec {i:3} {vector.kind:7} len: {len(vector)}{fg.RESET}  [ {items} ]', file=runtime.output)

class DumpSubroutines(Intrinsic):
    def __init__(self): super().__init__('dumpsr', 'print subroutines', ('dsr',))
    def execute(self, runtime: Runtime) -> None:
        print(fg.LIGHTBLACK_EX+'SUBROUTINES'+fg.RESET, file=runtime.output)
        for name in sorted(runtime.subroutines.keys()):
            print(f'  {runtime.subroutines[name]}', file=runtime.output)

class Help(Intrinsic):
    def __init__(self): super().__init__('help', 'print available words')
    def execute(self, runtime: Runtime) -> None:
        print(HELP, file=runtime.output)

class Words(Intrinsic):
    def __init__(self): super().__init__('words', 'print patterns and words with their stack effect', ('.w',))
    def execute(self, runtime: Runtime) -> None:
        print(fg.LIGHTBLACK_EX+'PATTERNS'+fg.RESET, file=runtime.output)
        for pattern in sorted((cls() for cls in Pattern.classes), key = lambda p: p.prefix):
            print(f'  {pattern}  {fg.LIGHTBLACK_EX}( {pattern.comment} ){fg.RESET}', file=runtime.output)
        print(fg.LIGHTBLACK_EX+'WORDS'+fg.RESET, file=runtime.output)
        for intrinsic in sorted(set(runtime.words.values()), key = lambda i: i.value):
            names = ' '.join(f'{fg.YELLOW}{name}{fg.RESET}' for name in intrinsic.names())
            print(f'  {names}  {fg.LIGHTBLACK_EX}( {intrinsic.comment} ){fg.RESET}', file=runtime.output)

# Arithmetic

class Add(Binary):
    def __init__(self): super().__init__('+', 'a b -- a+b', numeric.add, ('add',))

class Substract(Binary):
    def __init__(self): super().__init__('-', 'a b -- a-b', numeric.subtract, ('sub',))

class Multiply(Binary):
    def __init__(self): super().__init__('*', 'a b -- a*b', numeric.multiply, ('mul',))

class Divide(Binary):
    def __init__(self): super().__init__('/', 'a b -- a/b', numeric.divide, ('div',))

class Absolute(Unary):
    def __init__(self): super().__init__('abs', 'a -- |a|', numeric.absolute)

class Floor(Unary):
    def __init__(self): super().__init__('floor', 'a -- floor(a)', numeric.floor)

class Ceil(Unary):
    def __init__(self): super().__init__('ceil', 'a -- ceil(a)', numeric.ceil)

class Round(Unary):
    def __init__(self): super().__init__('round', 'a -- round(a)', numeric.round_half_away)

# Complex

class RealPart(Unary):
    def __init__(self): super().__init__('real', 'z -- re(z)', numeric.real_part)

class ImaginaryPart(Unary):
    def __init__(self): super().__init__('imag', 'z -- im(z)', numeric.imaginary_part)

class RealToComplex(Unary):
    def __init__(self): super().__init__('r2c', 'a -- a+0j', numeric.to_complex)

class ComplexToReal(Intrinsic):
    def __init__(self): super().__init__('c2r', 'z -- re(z) im(z)')
    def execute(self, runtime: Runtime) -> None:
        for part in numeric.split_complex(runtime.pop(Number)): runtime.push(part)

# Logical

class And(Binary):
    def __init__(self): super().__init__('and', 'a b -- a&b', numeric.logical(operator.and_, 'and'))

class Or(Binary):
    def __init__(self): super().__init__('or', 'a b -- a|b', numeric.logical(operator.or_, 'or'))

class Xor(Binary):
    def __init__(self): super().__init__('xor', 'a b -- a^b', numeric.logical(operator.xor, 'xor'))

class Negate(Unary):
    def __init__(self): super().__init__('neg', 'a -- ~a', numeric.complement)

class ShiftLeft(Binary):
    def __init__(self): super().__init__('shl', 'a n -- a<<n', lambda a, n: numeric.shift(a, n, True))

class ShiftRight(Binary):
    def __init__(self): super().__init__('shr', 'a n -- a>>n', lambda a, n: numeric.shift(a, n, False))

# Relational

class GreaterThan(Binary):
    def __init__(self): super().__init__('>', 'a b -- a>b', numeric.compare(operator.gt, '>'))

class LowerThan(Binary):
    def __init__(self): super().__init__('<', 'a b -- a<b', numeric.compare(operator.lt, '<'))

class GreaterOrEqual(Binary):
    def __init__(self): super().__init__('>=', 'a b -- a>=b', numeric.compare(operator.ge, '>='))

class LowerOrEqual(Binary):
    def __init__(self): super().__init__('<=', 'a b -- a<=b', numeric.compare(operator.le, '<='))

class Equals(Binary):
    def __init__(self): super().__init__('=', 'a b -- a=b', numeric.compare(operator.eq, '='))

# Trigonometric

class SinR(Unary):
    def __init__(self): super().__init__('sinr', 'a -- sin(a) , radians', numeric.sin_radians)

class CosR(Unary):
    def __init__(self): super().__init__('cosr', 'a -- cos(a) , radians', numeric.cos_radians)

class TanR(Unary):
    def __init__(self): super().__init__('tanr', 'a -- tan(a) , radians', numeric.tan_radians)

class AsinR(Unary):
    def __init__(self): super().__init__('asinr', 'a -- asin(a) , radians', numeric.asin_radians)

class AcosR(Unary):
    def __init__(self): super().__init__('acosr', 'a -- acos(a) , radians', numeric.acos_radians)

class AtanR(Unary):
    def __init__(self): super().__init__('atanr', 'a -- atan(a) , radians', numeric.atan_radians)

class SinD(Unary):
    def __init__(self): super().__init__('sind', 'a -- sin(a) , degrees', numeric.sin_degrees)

class CosD(Unary):
    def __init__(self): super().__init__('cosd', 'a -- cos(a) , degrees', numeric.cos_degrees)

class TanD(Unary):
    def __init__(self): super().__init__('tand', 'a -- tan(a) , degrees', numeric.tan_degrees)

class AsinD(Unary):
    def __init__(self): super().__init__('asind', 'a -- asin(a) , degrees', numeric.asin_degrees)

class AcosD(Unary):
    def __init__(self): super().__init__('acosd', 'a -- acos(a) , degrees', numeric.acos_degrees)

class AtanD(Unary):
    def __init__(self): super().__init__('atand', 'a -- atan(a) , degrees', numeric.atan_degrees)

# Logarithm and exponential

class LogE(Unary):
    def __init__(self): super().__init__('loge', 'a -- ln(a)', numeric.log_e)

class Log10(Unary):
    def __init__(self): super().__init__('log10', 'a -- log10(a)', numeric.log_10)

class Log2(Unary):
    def __init__(self): super().__init__('log2', 'a -- log2(a)', numeric.log_2)

class LogX(Binary):
    def __init__(self): super().__init__('logx', 'a b -- log(a) in base b', numeric.log_base)

class ExpE(Unary):
    def __init__(self): super().__init__('expe', 'a -- e^a', numeric.exp_e)

class Exp10(Unary):
    def __init__(self): super().__init__('exp10', 'a -- 10^a', numeric.exp_10)

class Exp2(Unary):
    def __init__(self): super().__init__('exp2', 'a -- 2^a', numeric.exp_2)

class ExpX(Binary):
    def __init__(self): super().__init__('expx', 'a b -- a^b', numeric.power)

# Output

class Print(Intrinsic):
    def __init__(self): super().__init__('print', 'a -- a  , print a', ('p',))
    def execute(self, runtime: Runtime) -> None:
        print(format_number(runtime.peek(), runtime.precision), file=runtime.output)

class FractionalDigits(Intrinsic):
    def __init__(self): super().__init__('frdigit', 'n --  , print n fractional digits, 0 for automatic', ('precision', 'k'))
    def execute(self, runtime: Runtime) -> None:
        digits = runtime.pop(Real)
        if not digits.is_integral() or not 0 <= digits.value <= numeric.MAX_DIGITS:
            raise TypeMismatch(f'fractional digits {digits} not an integer in 0..{numeric.MAX_DIGITS}')
        runtime.precision = int(digits.value)

class GetFractionalDigits(Intrinsic):
    def __init__(self): super().__init__('K', ' -- n  , current fractional digits')
    def execute(self, runtime: Runtime) -> None:
        runtime.push(Real(runtime.precision))

class Bye(Intrinsic):
    def __init__(self): super().__init__('quit', 'leave the calculator', ('q', 'bye', 'exit'))
    def execute(self, runtime: Runtime) -> None: raise Quit()
