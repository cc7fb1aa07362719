import pytest

from cplxrpn.__main__ import Interpreter, main


@pytest.fixture
def keyboard(monkeypatch):
    ''' Replaces the keyboard by a list of lines, then end of input. '''
    def feed(*lines):
        pending = iter(lines)
        def fake_input(prompt=''):
            try:
                return next(pending)
            except StopIteration:
                raise EOFError from None
        monkeypatch.setattr('builtins.input', fake_input)
    return feed


def script(tmp_path, text):
    path = tmp_path / 'script.rpn'
    path.write_text(text, encoding='utf-8')
    return str(path)


class TestFile:
    def test_runs_script(self, tmp_path, capsys):
        path = script(tmp_path, '10 6 4 - / p   # five\n: sq\n  dup *\n;\n3 sq p\n')
        assert main(['-f', path]) == 0
        assert capsys.readouterr().out.split() == ['5', '9']

    def test_several_files_share_state(self, tmp_path, capsys):
        first = script(tmp_path, ': twice 2 * ;')
        second = tmp_path / 'second.rpn'
        second.write_text('21 twice p', encoding='utf-8')
        assert main(['-f', first, '--file', str(second)]) == 0
        assert capsys.readouterr().out.split() == ['42']

    def test_error_aborts_script(self, tmp_path, capsys):
        path = script(tmp_path, '1 p\n1 0 /\n2 p\n')
        assert main(['-f', path]) == 1
        captured = capsys.readouterr()
        assert captured.out.split() == ['1']
        assert 'script.rpn' in captured.err and 'ERROR' in captured.err

    def test_unterminated_definition(self, tmp_path, capsys):
        path = script(tmp_path, ': f 1\n2\n')
        assert main(['-f', path]) == 1
        assert 'missing' in capsys.readouterr().err

    def test_quit(self, tmp_path, capsys):
        path = script(tmp_path, '1 p q\n2 p\n')
        assert main(['-f', path]) == 0
        assert capsys.readouterr().out.split() == ['1']

    def test_missing_file(self, tmp_path, capsys):
        assert main(['-f', str(tmp_path / 'nowhere.rpn')]) == 1
        assert 'nowhere.rpn' in capsys.readouterr().err

    def test_interrupted_script(self, tmp_path, monkeypatch, capsys):
        def interrupted(self, filename):
            raise KeyboardInterrupt
        monkeypatch.setattr(Interpreter, 'execute_file', interrupted)
        assert main(['-f', script(tmp_path, '1 p')]) == 1
        assert 'interupted' in capsys.readouterr().err


class TestInteractive:
    def test_session(self, keyboard, capsys):
        keyboard('1 2 +', 'p', 'q', '99 p')
        assert main(['-q']) == 0
        assert capsys.readouterr().out.split() == ['3']

    def test_error_is_reported_and_session_continues(self, keyboard, capsys):
        keyboard('foo', '1 p')
        assert main(['--quiet']) == 0
        captured = capsys.readouterr()
        assert 'unknown word' in captured.err
        assert captured.out.split() == ['1']

    def test_definition_over_several_lines(self, keyboard, capsys):
        keyboard(': sq', 'dup *', ';', '4 sq p')
        assert main(['-q']) == 0
        assert capsys.readouterr().out.split() == ['16']

    def test_banner(self, keyboard, capsys):
        keyboard()
        assert main([]) == 0
        assert 'CPLXRPN' in capsys.readouterr().out


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as info:
        main(['-h'])
    assert info.value.code == 0
    assert '--file' in capsys.readouterr().out
