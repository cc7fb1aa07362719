''' Base classes for atoms and errors '''

from typing import List, Set, Iterable, Optional, Tuple, Type, TYPE_CHECKING
from colorama import Fore as fg
if TYPE_CHECKING: from cplxrpn.execution import Runtime

class Error(Exception):
    ''' Abstract. Applicative Error. Rendered in red. '''
    def __init__(self, msg) -> None:
        super().__init__(f'{fg.LIGHTRED_EX}ERROR:{fg.RESET} {msg}')
        self.msg = msg

class ExecutionError(Error):
    ''' Raised during execution. '''

class StackUnderflow(ExecutionError):
    ''' Not enough values on the stack. '''

class StackOverflow(ExecutionError):
    ''' Too many nested subroutine calls or loops. '''

class TypeMismatch(ExecutionError):
    ''' A value of the wrong kind, or out of the range accepted by a word. '''

class DomainError(TypeMismatch):
    ''' Argument outside the domain of a mathematical function. '''

class DivisionByZero(ExecutionError):
    pass

class UnknownWord(ExecutionError):
    pass

class RegisterIndexOutOfRange(ExecutionError):
    pass

class EmptyRegister(RegisterIndexOutOfRange):
    ''' Read of a register that holds no value. '''

class VectorIndexOutOfRange(ExecutionError):
    pass

class EmptyVector(VectorIndexOutOfRange):
    ''' Access to a vector slot that was never created. '''

class VectorKindMismatch(ExecutionError):
    ''' Real value stored in a complex vector or vice versa. '''

class LoopControlType(ExecutionError):
    ''' The value checked at the end of a loop body is missing or not an integral real. '''

class Atom:
    ''' Abstract. Smallest element of language. '''
    def execute(self, runtime: 'Runtime') -> None:
        raise ExecutionError(f'atom {self} cannot be executed')

class Literal(Atom):
    ''' Abstract. Atomic literal value, pushed on the stack when executed. '''
    def execute(self, runtime: 'Runtime') -> None:
        runtime.push(self)

class Keyword(Atom):
    ''' Intermediate output of the Tokenizer. Not a proper language element. '''
    def __init__(self, value: str) -> None:
        self.value = value
    def __str__(self) -> str:
        return f'{fg.MAGENTA}{self.value}{fg.RESET}'

class Word(Atom):
    ''' Fundamental runtime executable token. '''
    def __init__(self, value: str) -> None:
        self.value = value
    def __str__(self) -> str:
        return f'{fg.YELLOW}{self.value}{fg.RESET}'
    def execute(self, runtime: 'Runtime') -> None:
        runtime.execute(self.value)

class Loop(Atom):
    ''' Body of a [ ... ] block, repeated until it leaves a zero on the stack. '''
    def __init__(self, body: Iterable[Atom]) -> None:
        self.body = [*body]
    def __str__(self) -> str:
        return '[ ' + ' '.join(f'{atom}' for atom in self.body) + ' ]'
    def execute(self, runtime: 'Runtime') -> None:
        runtime.enter(self.body, loop = True)

class Definition(Atom):
    '''
    A : name ... ; block. Keeps the captured tokens verbatim along with the atoms
    they compile to. Executing it binds the name in the subroutine table.
    '''
    def __init__(self, name: str, tokens: Iterable[Atom], body: Iterable[Atom]) -> None:
        self.name = name
        self.tokens = [*tokens]
        self.body = [*body]
    def __str__(self) -> str:
        return f': {Word(self.name)} ' + ' '.join(f'{token}' for token in self.tokens) + ' ;'
    def execute(self, runtime: 'Runtime') -> None:
        runtime.define(self)

class Intrinsic(Atom):
    ''' Intrinsic implementation of a word, under its name and aliases. '''
    classes : Set[Type['Intrinsic']] = set()
    def __init_subclass__(cls, abstract: bool = False) -> None:
        if not abstract: Intrinsic.classes.add(cls)
    def __init__(self, value: str = '', comment: Optional[str] = None, aliases: Tuple[str, ...] = ()):
        self.value = value
        self.comment = comment
        self.aliases = aliases
    def names(self) -> List[str]:
        return [self.value, *self.aliases]
    def register(self, runtime: 'Runtime'):
        for name in self.names(): runtime.register(name, self)
    def __str__(self) -> str:
        return f'{fg.LIGHTBLACK_EX}intrinsic<{type(self).__name__}>{fg.RESET}'
