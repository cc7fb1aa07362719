import io
from typing import List

import pytest

from cplxrpn.__main__ import Interpreter
from cplxrpn.numeric import Number


class Session:
    ''' An interpreter writing into a buffer, with helpers to inspect it. '''

    def __init__(self) -> None:
        self.output = io.StringIO()
        self.interpreter = Interpreter(output=self.output)
        self.runtime = self.interpreter.runtime

    def __call__(self, text: str) -> 'Session':
        self.interpreter.execute(text)
        return self

    @property
    def stack(self) -> List[Number]:
        return self.runtime.stack

    @property
    def values(self) -> list:
        return [number.value for number in self.runtime.stack]

    @property
    def printed(self) -> List[str]:
        return self.output.getvalue().splitlines()


@pytest.fixture
def calc() -> Session:
    return Session()
