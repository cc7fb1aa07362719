''' Parsing engine '''

import re
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple, Type, Union, TYPE_CHECKING
from colorama import Fore as fg
from cplxrpn.atoms import Error, Atom, Keyword, Word
from cplxrpn.numeric import Number, Real, Complex
if TYPE_CHECKING: from cplxrpn.execution import Runtime

class ParsingError(Error):
    ''' Raised by the parser. '''

class ParsingIncomplete(ParsingError):
    ''' Raised by the parser when end of input is reached prematuretly. '''

class MalformedDefinition(ParsingError):
    ''' Invalid : name ... ; block. '''

class MalformedLoop(ParsingError):
    ''' Invalid [ ... ] block. '''

class DefinitionIncomplete(MalformedDefinition, ParsingIncomplete):
    ''' Input ended inside a : name ... ; block. '''

class LoopIncomplete(MalformedLoop, ParsingIncomplete):
    ''' Input ended inside a [ ... ] block. '''

# Token are outputs of the Tokenizer
Token = Union[ Number, Keyword ]

NUMBER = re.compile(r'[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?j?')

class Tokenizer:
    '''
    Syntaxical tokenizer. Turns a string into a series of tokens.
    Can only produce Real, Complex or Keyword.
    A real literal directly followed by an imaginary one (3 4j) makes one complex literal.
    '''

    COMMENT = '#'

    def __init__(self, input_str: str) -> None:
        self.input = input_str

    @staticmethod
    def is_number(s: str) -> bool:
        return NUMBER.fullmatch(s) is not None

    @staticmethod
    def is_imaginary(s: str) -> bool:
        return Tokenizer.is_number(s) and s.endswith('j')

    def words(self) -> Iterator[str]:
        for line in self.input.splitlines():
            yield from line.split(Tokenizer.COMMENT, 1)[0].split()

    @staticmethod
    def token(word: str) -> Token:
        if Tokenizer.is_imaginary(word): return Complex(complex(0.0, float(word[:-1])))
        if Tokenizer.is_number(word): return Real(float(word))
        return Keyword(word)

    def tokenize(self) -> Iterator[Token]:
        pending : Optional[Real] = None
        for word in self.words():
            token = Tokenizer.token(word)
            if pending is not None and Tokenizer.is_imaginary(word):
                yield Complex(complex(pending.value, token.value.imag))
                pending = None ; continue
            if pending is not None: yield pending ; pending = None
            if isinstance(token, Real): pending = token
            else: yield token
        if pending is not None: yield pending

class Pattern:
    '''
    Abstract. A pattern is a known sequence of token / keywords that can be handled by the parser.
    It has the form : prefix ... suffix. Parsing implementation is provided in sub classes.
    '''
    ELLIPSIS = f'{fg.LIGHTBLACK_EX} .. {fg.RESET}'
    classes : Set[Type['Pattern']] = set()
    def __init_subclass__(cls) -> None: Pattern.classes.add(cls)
    def __init__(self, prefix: str, suffix: str, comment: Optional[str] = None) -> None:
        self.prefix = prefix ; self.suffix = suffix ; self.comment = comment
    def parse(self, _parser: 'Parser') -> Iterable[Atom]:
        ... # to overload
    def unmatched(self) -> ParsingError:
        ''' Error for a suffix found without its prefix. '''
        return ParsingError(f'unexpected {Keyword(self.suffix)} without {Keyword(self.prefix)}')
    def reserved(self) -> Iterable[str]:
        yield self.prefix
        yield self.suffix
    def __str__(self) -> str:
        return self.prefix + Pattern.ELLIPSIS + self.suffix
    def register(self, parser: 'Parser'):
        parser.register(self.prefix, self)

class Parser:
    '''
    Gramatical parser.
    Parses a string or a series of tokens. Resolves any Keyword into Words, Loops or Definitions.
    '''

    def __init__(self) -> None:
        self.input : Optional[Iterator[Token]] = None
        self.patterns : Dict[str, Pattern] = {}
        self.closers : Dict[str, Pattern] = {}

    def register(self, prefix: str, pattern: Pattern) -> None:
        self.patterns[prefix] = pattern
        self.closers[pattern.suffix] = pattern

    def parse(self, input_str: str) -> List[Atom]:
        return self.compile(Tokenizer(input_str).tokenize())

    def compile(self, tokens: Iterable[Token]) -> List[Atom]:
        ''' Parses a series of tokens, such as a stored subroutine body. '''
        outer = self.input
        self.input = iter(tokens)
        try:
            ((atoms, _),) = self.parse_pattern()
        finally:
            self.input = outer
        return atoms

    def next(self) -> Optional[Token]:
        if self.input is None: return None
        return next(self.input, None)

    def parse_pattern(self, closure: Tuple[str,...] = (), incomplete: Type[ParsingIncomplete] = ParsingIncomplete) -> Iterable[Tuple[List[Atom], Optional[str]]]:
        current : List[Atom] = []
        while True:
            token = self.next()
            if token is None and closure == ():
               yield (current, None) ; break
            if token is None:
               raise incomplete(f'missing closing {" , ".join(closure)}')
            if isinstance(token, Keyword) and token.value in closure:
                yield (current, token.value) ; break
            current.extend( self.parse_token(token) )

    def parse_word(self, error: Type[ParsingError] = ParsingError, incomplete: Type[ParsingIncomplete] = ParsingIncomplete) -> Word:
        token = self.next()
        if token is None: raise incomplete('missing word')
        if not isinstance(token, Keyword): raise error(f'invalid word {token}')
        self.check_valid_word(token.value, error)
        return Word(token.value)

    def reserved_patterns(self) -> Iterable[str]:
        for p in self.patterns.values(): yield from p.reserved()

    def check_valid_word(self, word: str, error: Type[ParsingError] = ParsingError) -> None:
        if word in self.reserved_patterns():
            raise error(f'word name {Keyword(word)} is reserved')
        if Tokenizer.is_number(word):
            raise error(f'word name {word} is a number')

    def parse_token(self, token: Token) -> Iterable[Atom]:
        if not isinstance(token, Keyword):
            yield token ; return
        if token.value in self.patterns:
            yield from self.patterns[token.value].parse(self)
        elif token.value in self.closers:
            raise self.closers[token.value].unmatched()
        else:
            yield Word(token.value)

    def execute(self, runtime: 'Runtime', input_str: str) -> None:
        runtime.run(self.parse(input_str))
