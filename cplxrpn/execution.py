''' Execution engine '''

import sys
from typing import Dict, List, Iterable, Optional, TextIO, Tuple, TypeVar, Union, Type, cast
from colorama import Fore as fg
from cplxrpn.atoms import Atom, Word, Definition, Intrinsic, Error
from cplxrpn.atoms import StackUnderflow, StackOverflow, TypeMismatch, UnknownWord, LoopControlType
from cplxrpn.atoms import RegisterIndexOutOfRange, EmptyRegister, VectorIndexOutOfRange, EmptyVector, VectorKindMismatch
from cplxrpn.numeric import Number, Real, zero

BANK_SIZE = 256
MAX_DEPTH = 10000

TNumber1 = TypeVar('TNumber1', bound = Number)
TNumber2 = TypeVar('TNumber2', bound = Number)
NumberTypeSpec = Union[Type[Number], Tuple[Type[Number],...]]

class Vector:
    ''' Fixed length vector whose elements are all real or all complex. '''
    def __init__(self, kind: str, length: int) -> None:
        self.kind = kind
        self.items: List[Number] = [zero(kind)] * length
    def __len__(self) -> int:
        return len(self.items)
    def check_index(self, index: Real) -> int:
        if not index.is_integral() or not 0 <= index.value < len(self.items):
            raise VectorIndexOutOfRange(f'element {index} out of range 0..{len(self.items) - 1}')
        return int(index.value)
    def store(self, index: Real, value: Number) -> None:
        i = self.check_index(index)
        if value.kind != self.kind:
            raise VectorKindMismatch(f'cannot store {value.kind} {value} in a {self.kind} vector')
        self.items[i] = value
    def load(self, index: Real) -> Number:
        return self.items[self.check_index(index)]

class Frame:
    ''' Execution context: a body and the cursor on its next atom. '''
    def __init__(self, body: List[Atom], loop: bool = False) -> None:
        self.body = body
        self.cursor = 0
        self.loop = loop
    def exhausted(self) -> bool:
        return self.cursor >= len(self.body)
    def next(self) -> Atom:
        atom = self.body[self.cursor]
        self.cursor += 1
        return atom

class Runtime:
    '''
    Runtime environement for execution.
    Holds the stack, registers, vectors, precision, the primitive and subroutine
    tables, and the context stack of the running bodies.
    '''

    def __init__(self, output: Optional[TextIO] = None, verbose: bool = False, max_depth: int = MAX_DEPTH) -> None:
        self.words: Dict[str, Intrinsic] = {}
        self.subroutines: Dict[str, Definition] = {}
        self.stack: List[Number] = []
        self.registers: List[Optional[Number]] = [None] * BANK_SIZE
        self.vectors: List[Optional[Vector]] = [None] * BANK_SIZE
        self.precision: int = 0
        self.frames: List[Frame] = []
        self.popped: List[Number] = []
        self.output: TextIO = output if output is not None else sys.stdout
        self.verbose = verbose
        self.max_depth = max_depth

    # Stack

    def check_type(self, number: Number, number_type: NumberTypeSpec) -> None:
        if isinstance(number, number_type): return
        if isinstance(number_type, type):
            raise TypeMismatch(f'argument {number} is not a {number_type.kind}')
        raise TypeMismatch(f'argument {number} is not one of {" , ".join(t.kind for t in number_type)}')

    def pop_args(self, types: List[NumberTypeSpec]) -> Iterable[Number]:
        ''' Checks depth and kinds of the n top values, then pops them, top first. '''
        n = len(types)
        if len(self.stack) < n:
           if n > 1: raise StackUnderflow(f'{n} arguments needed, {len(self.stack)} on stack')
           raise StackUnderflow('one argument needed (empty stack)')
        for i, t in enumerate(types): self.check_type(self.peek(i), t)
        for _ in range(n):
            number = self.stack.pop()
            self.popped.append(number)
            yield number

    def pop(self, type1: Type[TNumber1] = Number) -> TNumber1:
        return cast(TNumber1, next(iter(self.pop_args([type1]))))

    def pop2(self, type1: Type[TNumber1] = Number, type2: Type[TNumber2] = Number) -> Tuple[TNumber1, TNumber2]:
        return cast(Tuple[TNumber1,TNumber2], tuple(self.pop_args([type1, type2])))

    def peek(self, i: int = 0) -> Number:
        if len(self.stack) <= i: raise StackUnderflow(f'{i + 1} arguments needed, {len(self.stack)} on stack')
        return self.stack[-(i+1)]

    def push(self, number: Atom) -> None:
        self.stack.append(cast(Number, number))

    # Registers and vectors

    @staticmethod
    def bank_index(index: Real, error: Type[Error], what: str) -> int:
        if not index.is_integral() or not 0 <= index.value < BANK_SIZE:
            raise error(f'{what} number {index} out of range 0..{BANK_SIZE - 1}')
        return int(index.value)

    def register_index(self, index: Real) -> int:
        return Runtime.bank_index(index, RegisterIndexOutOfRange, 'register')

    def vector_index(self, index: Real) -> int:
        return Runtime.bank_index(index, VectorIndexOutOfRange, 'vector')

    def load_register(self, index: Real) -> Number:
        value = self.registers[self.register_index(index)]
        if value is None: raise EmptyRegister(f'register {index} is empty')
        return value

    def vector(self, index: Real) -> Vector:
        vector = self.vectors[self.vector_index(index)]
        if vector is None: raise EmptyVector(f'vector {index} is not defined')
        return vector

    # Dispatch

    def register(self, word: str, definition: Intrinsic) -> None:
        self.words[word] = definition

    def define(self, definition: Definition) -> None:
        self.subroutines[definition.name] = definition

    def resolve(self, name: str) -> Union[Definition, Intrinsic]:
        if name in self.subroutines: return self.subroutines[name]
        if name in self.words: return self.words[name]
        raise UnknownWord(f'unknown word {Word(name)}')

    def execute(self, name: str) -> None:
        word = self.resolve(name)
        if isinstance(word, Definition): self.enter(word.body)
        else: self.apply(word)

    def apply(self, intrinsic: Intrinsic) -> None:
        ''' Runs a primitive. On error or interruption the stack is restored as it was before. '''
        depth = len(self.stack)
        self.popped = []
        try:
            intrinsic.execute(self)
        except BaseException:
            del self.stack[depth - len(self.popped):]
            self.stack.extend(reversed(self.popped))
            raise
        finally:
            self.popped = []

    # Interpreter loop

    def enter(self, body: List[Atom], loop: bool = False) -> None:
        if len(self.frames) >= self.max_depth:
            raise StackOverflow(f'more than {self.max_depth} nested calls and loops')
        self.frames.append(Frame(body, loop))

    def repeat(self) -> bool:
        ''' Consumes the value checked at the end of a loop body. False once it is zero. '''
        if not self.stack: raise LoopControlType('loop end reached with an empty stack')
        top = self.stack[-1]
        if not isinstance(top, Real) or not top.is_integral():
            raise LoopControlType(f'loop end value {top} is not an integral real')
        self.stack.pop()
        return top.value != 0

    def run(self, atoms: Iterable[Atom]) -> None:
        self.frames = []
        self.enter([*atoms])
        try:
            while self.frames:
                frame = self.frames[-1]
                if frame.exhausted():
                    if frame.loop and self.repeat(): frame.cursor = 0
                    else: self.frames.pop()
                    continue
                atom = frame.next()
                if self.verbose: self.trace(atom)
                atom.execute(self)
        finally:
            self.frames = []

    def trace(self, atom: Atom) -> None:
        stack = ' '.join(f'{number}' for number in self.stack[-5:])
        print(f'{fg.LIGHTBLACK_EX}[{len(self.frames)}]{fg.RESET} {atom}\t{fg.LIGHTBLACK_EX}stack: {fg.RESET}{stack}', file=sys.stderr)

class Quit(Exception):
    ''' Raise to end the interpreter. '''
