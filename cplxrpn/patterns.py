''' All patterns implementations '''

from typing import Iterable, List
from cplxrpn.atoms import Atom, Keyword, Loop, Definition
from cplxrpn.parsing import Pattern, Parser, ParsingError, Token
from cplxrpn.parsing import MalformedDefinition, MalformedLoop, DefinitionIncomplete, LoopIncomplete

class DefinePattern(Pattern):
    '''
    Pattern : name ... ;  to define a subroutine.
    Tokens up to the ; are captured verbatim, loops included, then compiled. Nothing runs before a call.
    '''
    def __init__(self) : super().__init__(':', ';', 'defines a subroutine')
    def unmatched(self) -> ParsingError:
        return MalformedDefinition(f'unexpected {Keyword(self.suffix)} outside of a definition')
    def parse(self, parser: Parser) -> Iterable[Atom]:
        word = parser.parse_word(MalformedDefinition, DefinitionIncomplete)
        tokens : List[Token] = []
        depth = 0
        while True:
            token = parser.next()
            if token is None:
                raise DefinitionIncomplete(f'missing {Keyword(self.suffix)} closing definition of {word}')
            if isinstance(token, Keyword):
                if token.value == self.suffix: break
                if token.value == self.prefix:
                    raise MalformedDefinition(f'nested definition inside {word}')
                if token.value == '[': depth += 1
                if token.value == ']': depth -= 1
                if depth < 0: raise MalformedLoop(f'unexpected {Keyword(token.value)} in definition of {word}')
            tokens.append(token)
        if depth > 0: raise MalformedLoop(f'missing {Keyword("]")} in definition of {word}')
        yield Definition(word.value, tokens, parser.compile(tokens))

class LoopPattern(Pattern):
    ''' Pattern [ ... ]  repeats its body while it leaves a non zero value on the stack. '''
    def __init__(self) : super().__init__('[', ']', 'loop until zero')
    def unmatched(self) -> ParsingError:
        return MalformedLoop(f'unexpected {Keyword(self.suffix)} without {Keyword(self.prefix)}')
    def parse(self, parser: Parser) -> Iterable[Atom]:
        ((atoms, _),) = parser.parse_pattern((self.suffix,), LoopIncomplete)
        yield Loop(atoms)
