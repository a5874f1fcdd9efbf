"""Tests for the stencil-helpers command line."""

import pytest

from helpers.cli import main, parse_params, setup_argparser


class TestParseParams:
    def test_raw_strings(self):
        assert parse_params(['abc', '3'], as_json=False) == ['abc', '3']

    def test_json_values(self):
        assert parse_params(['null', '0', 'false', '"x"', '[1]'], as_json=True) == [
            None, 0, False, 'x', [1],
        ]

    def test_invalid_json_falls_back_to_raw(self):
        assert parse_params(['hello world'], as_json=True) == ['hello world']


class TestArgparser:
    def test_defaults(self):
        args = setup_argparser().parse_args(['upper', 'hi'])

        assert args.helper == 'upper'
        assert args.params == ['hi']
        assert args.helpers_file == []
        assert not args.json
        assert not args.verbose

    def test_repeatable_helpers_file(self):
        args = setup_argparser().parse_args(['-f', 'a.py', '-f', 'b.py', '--list'])
        assert args.helpers_file == ['a.py', 'b.py']


class TestMain:
    def test_upper(self, capsys):
        assert main(['upper', 'hello world']) == 0
        assert capsys.readouterr().out == 'HELLO WORLD\n'

    def test_repeat(self, capsys):
        assert main(['repeat', 'abc', '3']) == 0
        assert capsys.readouterr().out == 'abcabcabc\n'

    def test_repeat_invalid_count(self, capsys):
        assert main(['repeat', 'abc', 'not-a-number']) == 0
        assert capsys.readouterr().out == 'abc\n'

    def test_wrap(self, capsys):
        assert main(['wrap', '  hello world  ']) == 0
        assert capsys.readouterr().out == '[hello world]\n'

    def test_json_params(self, capsys):
        assert main(['--json', 'repeat', 'null', '2']) == 0
        assert capsys.readouterr().out == '\n'

        assert main(['-j', 'upper', '0']) == 0
        assert capsys.readouterr().out == '\n'

    def test_list(self, capsys):
        assert main(['--list']) == 0
        assert capsys.readouterr().out.split() == [
            'upper', 'repeat', 'wrap', 'replaceRegex', 'tableRegex',
        ]

    def test_no_helper_prints_help(self, capsys):
        assert main([]) == 1
        assert 'usage: stencil-helpers' in capsys.readouterr().out

    def test_unknown_helper(self, capsys):
        assert main(['nope']) == 1
        assert 'Unknown helper: nope' in capsys.readouterr().err

    def test_helpers_file(self, capsys, write_helper_file):
        path = write_helper_file('''
            def shout(text):
                return str(text).upper() + "!"
        ''')

        assert main(['-f', str(path), 'shout', 'hey']) == 0
        assert capsys.readouterr().out == 'HEY!\n'

    def test_helpers_file_from_config(self, capsys, tmp_path, write_helper_file):
        path = write_helper_file('''
            def double(text):
                return str(text) * 2
        ''')
        config_path = tmp_path / 'stencil.yaml'
        config_path.write_text(f'helpers:\n  files:\n    - {path}\n', encoding='utf-8')

        assert main(['--config', str(config_path), 'double', 'ab']) == 0
        assert capsys.readouterr().out == 'abab\n'

    def test_single_helpers_file_string_in_config(self, capsys, tmp_path, write_helper_file):
        path = write_helper_file('''
            def double(text):
                return str(text) * 2
        ''')
        config_path = tmp_path / 'stencil.yaml'
        config_path.write_text(f'helpers:\n  files: {path}\n', encoding='utf-8')

        assert main(['--config', str(config_path), 'double', 'ab']) == 0
        assert capsys.readouterr().out == 'abab\n'

    def test_missing_helpers_file(self, capsys, tmp_path):
        assert main(['-f', str(tmp_path / 'missing.py'), 'upper', 'x']) == 1
        assert 'Helper load error' in capsys.readouterr().err

    def test_failing_helper(self, capsys, write_helper_file):
        path = write_helper_file('''
            def fail(text):
                raise ValueError("cannot handle " + str(text))
        ''')

        assert main(['-f', str(path), 'fail', 'x']) == 1
        assert 'cannot handle x' in capsys.readouterr().err

    def test_missing_config(self, capsys, tmp_path):
        assert main(['--config', str(tmp_path / 'missing.yaml'), 'upper', 'x']) == 1
        assert 'Config error' in capsys.readouterr().err

    def test_verbose_traces_calls(self, capsys):
        assert main(['--verbose', 'upper', 'hi']) == 0

        captured = capsys.readouterr()
        assert captured.out == 'HI\n'
        assert "call upper('hi')" in captured.err

    @pytest.mark.parametrize('argv', [['upper', 'hi'], ['repeat', 'hi', '2']])
    def test_trace_off_by_default(self, capsys, argv):
        assert main(argv) == 0
        assert 'call ' not in capsys.readouterr().err
