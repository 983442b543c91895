import subprocess
from unittest.mock import Mock, patch

from firebase_setup.utils.command_runner import CommandResult, CommandRunner, is_tool_available


class TestToolAvailability:

    def test_present_tool(self):
        """Tools found by shutil.which are available"""
        with patch('firebase_setup.utils.command_runner.shutil.which', return_value='/usr/bin/gcloud'):
            assert is_tool_available('gcloud') is True

    def test_absent_tool(self):
        """Absence is reported, never raised"""
        with patch('firebase_setup.utils.command_runner.shutil.which', return_value=None):
            assert is_tool_available('firebase') is False


class TestCommandRunner:

    def test_captures_bytes(self):
        """Captured output is returned as raw bytes"""
        completed = Mock(returncode=0, stdout=b'line\r\n', stderr=b'')
        with patch('firebase_setup.utils.command_runner.subprocess.run', return_value=completed) as mock_run:
            result = CommandRunner().run(['firebase', 'apps:sdkconfig', 'ios', 'x'])

        assert result.ok
        assert result.stdout == b'line\r\n'
        assert mock_run.call_args.kwargs['capture_output'] is True
        assert 'text' not in mock_run.call_args.kwargs

    def test_interactive_inherits_terminal(self):
        """Interactive calls do not capture output"""
        completed = Mock(returncode=1)
        with patch('firebase_setup.utils.command_runner.subprocess.run', return_value=completed) as mock_run:
            result = CommandRunner().run(['gcloud', 'auth', 'login'], interactive=True)

        assert not result.ok
        assert 'capture_output' not in mock_run.call_args.kwargs

    def test_interactive_ignores_timeout(self):
        """Logins wait for the operator even when a command timeout is configured"""
        completed = Mock(returncode=0)
        with patch('firebase_setup.utils.command_runner.subprocess.run', return_value=completed) as mock_run:
            result = CommandRunner(timeout=0.5).run(['firebase', 'login', '--no-localhost'], interactive=True)

        assert result.ok
        assert mock_run.call_args.kwargs['timeout'] is None

    def test_captured_calls_use_timeout(self):
        completed = Mock(returncode=0, stdout=b'', stderr=b'')
        with patch('firebase_setup.utils.command_runner.subprocess.run', return_value=completed) as mock_run:
            CommandRunner(timeout=30).run(['gcloud', 'projects', 'list'])

        assert mock_run.call_args.kwargs['timeout'] == 30

    def test_missing_executable(self):
        """A missing binary is a failed result, not an exception"""
        with patch('firebase_setup.utils.command_runner.subprocess.run', side_effect=FileNotFoundError('gcloud')):
            result = CommandRunner().run(['gcloud', 'projects', 'list'])

        assert result.returncode == 127
        assert not result.ok

    def test_timeout(self):
        """An expired timeout is a failed result"""
        error = subprocess.TimeoutExpired(cmd=['firebase'], timeout=5)
        with patch('firebase_setup.utils.command_runner.subprocess.run', side_effect=error):
            result = CommandRunner(timeout=5).run(['firebase', 'projects:addfirebase', 'p'])

        assert not result.ok
        assert 'Timed out' in result.error_text

    def test_records_history(self):
        """Every invocation is recorded with stringified args"""
        completed = Mock(returncode=0, stdout=b'', stderr=b'')
        with patch('firebase_setup.utils.command_runner.subprocess.run', return_value=completed):
            runner = CommandRunner()
            runner.run(['gcloud', 'config', 'set', 'project', 123])

        assert runner.history == [['gcloud', 'config', 'set', 'project', '123']]

    def test_text_decoding(self):
        result = CommandResult(['x'], 0, b'ok\n', b'bad \xff')
        assert result.text == 'ok\n'
        assert result.error_text.startswith('bad')
