''' CPLXRPN : RPN complex calculator '''

import sys
import argparse
from typing import Iterable, List, Optional, TextIO
import colorama
from colorama import Fore as fg

from cplxrpn.atoms import Intrinsic, Error, ExecutionError
from cplxrpn.parsing import Parser, Pattern, ParsingIncomplete
from cplxrpn.execution import Runtime, Quit
import cplxrpn.patterns    # ignore 'Unused import' warning, actually usefull
import cplxrpn.intrinsics  # ignore 'Unused import' warning, actually usefull

class Interpreter:
    ''' The interpreter program '''

    def __init__(self, output: Optional[TextIO] = None, verbose: bool = False) -> None:
        self.prompt = fg.LIGHTWHITE_EX + '>> ' + fg.RESET
        self.prompt_continued = fg.LIGHTWHITE_EX + '.. ' + fg.RESET
        self.runtime = Runtime(output, verbose)
        for intrinsic in Intrinsic.classes: intrinsic().register(self.runtime)
        self.parser = Parser()
        for pattern in Pattern.classes: pattern().register(self.parser)

    def banner(self) -> None:
        print(f'Welcome to {fg.LIGHTWHITE_EX}CPLXRPN{fg.RESET} {fg.GREEN}( RPN complex calculator ){fg.RESET}.')
        print(f'Type {fg.YELLOW}help{fg.RESET} for available words, {fg.YELLOW}q{fg.RESET} to leave.')
        print(f'Example:{fg.LIGHTBLACK_EX}  10 6 4 - / p        3 4j abs p        10 [ 1 - p dup ]{fg.RESET}\n')

    def execute(self, expression: str) -> None:
        self.parser.execute(self.runtime, expression)

    def execute_lines(self, lines: Iterable[str]) -> None:
        '''
        Runs lines one statement at a time. A line ending inside a definition or
        a loop is joined with the following ones. Errors propagate to the caller.
        '''
        pending = ''
        for line in lines:
            pending += line + '\n'
            try:
                self.execute(pending)
            except ParsingIncomplete:
                continue
            pending = ''
        if pending: self.execute(pending)

    def execute_file(self, filename: str) -> None:
        with open(filename, encoding = 'utf-8') as file:
            self.execute_lines(line.rstrip('\n') for line in file)

    def execute_input(self) -> None:
        input_str = '' ; prompt = self.prompt
        while True:
            input_str += input(prompt)
            try:
                self.execute(input_str)
            except ParsingIncomplete:
                input_str += '\n'
                prompt = self.prompt_continued
            else: break

    def loop(self) -> None:
        while True :
            try:
                self.execute_input()
            except (Quit, EOFError):
                break
            except Error as error:
                print(error, file=sys.stderr)
            except KeyboardInterrupt:
                print(ExecutionError('execution interupted by user'), file=sys.stderr)
        print(f'\nExit from calculator. {fg.GREEN}Bye.{fg.RESET}\n', file=sys.stderr)

def arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog = 'cplxrpn',
        description = 'RPN complex calculator, inspired by the FORTH, gforth and dc commands.',
        epilog = 'Type help inside the calculator for the list of words.')
    parser.add_argument('-q', '--quiet', action = 'store_true', help = 'do not print the welcome banner')
    parser.add_argument('-f', '--file', action = 'append', default = [], metavar = 'FILE',
                        help = 'run the words of FILE instead of reading the keyboard (repeatable)')
    parser.add_argument('-v', '--verbose', action = 'store_true', help = 'trace every executed word on stderr')
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    args = arguments(argv)
    colorama.just_fix_windows_console()
    interpreter = Interpreter(verbose = args.verbose)
    if args.file:
        for filename in args.file:
            try:
                interpreter.execute_file(filename)
            except Quit:
                return 0
            except Error as error:
                print(f'{filename}: {error}', file=sys.stderr)
                return 1
            except OSError as error:
                print(f'{filename}: {Error(error.strerror)}', file=sys.stderr)
                return 1
            except KeyboardInterrupt:
                print(f'{filename}: {ExecutionError("execution interupted by user")}', file=sys.stderr)
                return 1
        return 0
    if not args.quiet: interpreter.banner()
    interpreter.loop()
    return 0

# Main function calling
if __name__ == '__main__':
    sys.exit(main())
