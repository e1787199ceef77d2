"""
Tests for the root deploy.py wrapper
"""

import os
import runpy
import sys
import pytest
from unittest.mock import Mock, patch

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
WRAPPER = os.path.join(PROJECT_ROOT, 'deploy.py')


def run_wrapper(returncode):
    with patch('subprocess.run', return_value=Mock(returncode=returncode)) as run:
        with pytest.raises(SystemExit) as exit_info:
            runpy.run_path(WRAPPER, run_name='__main__')

    return run, exit_info.value.code


class TestDeployWrapper:
    """Test network selection and exit code forwarding"""

    def test_network_argument_sets_env(self, monkeypatch):
        monkeypatch.setattr(sys, 'argv', ['deploy.py', 'localhost'])
        monkeypatch.delenv('DEPLOY_NETWORK', raising=False)

        run, code = run_wrapper(1)

        assert code == 1
        args, kwargs = run.call_args
        assert args[0] == [sys.executable, '-m', 'scripts.deploy']
        assert kwargs['cwd'] == PROJECT_ROOT
        assert kwargs['env']['DEPLOY_NETWORK'] == 'localhost'

    def test_without_argument_keeps_env(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'argv', ['deploy.py'])
        monkeypatch.delenv('DEPLOY_NETWORK', raising=False)

        run, code = run_wrapper(0)

        assert code == 0
        assert 'DEPLOY_NETWORK' not in run.call_args[1]['env']

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Upload Contract Deployment (default network)" in captured.err
