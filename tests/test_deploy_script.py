"""
Tests for the Upload deployment script
"""

import os
import pytest
from unittest.mock import Mock, AsyncMock, patch
from loguru import logger

from blockchain import ConfigurationError
from scripts import deploy as deploy_script

DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to captured streams between tests"""
    yield
    logger.remove()


@pytest.fixture
def upload_handle():
    """Deployed contract handle"""
    handle = Mock()
    handle.address = DEPLOYED_ADDRESS
    handle.deployed = AsyncMock(return_value=handle)
    return handle


@pytest.fixture
def upload_factory(upload_handle):
    """Upload contract factory"""
    factory = Mock()
    factory.deploy = AsyncMock(return_value=upload_handle)
    return factory


@pytest.fixture
def runtime(upload_factory):
    """Deployment runtime"""
    runtime = Mock()
    runtime.get_contract_factory = AsyncMock(return_value=upload_factory)
    return runtime


def run_main(runtime):
    with patch.object(deploy_script, 'load_deploy_config', return_value=Mock()), \
            patch.object(deploy_script, 'DeploymentRuntime', return_value=runtime):
        return deploy_script.main()


class TestDeployScript:
    """Test the deploy entry point"""

    def test_success_prints_address(self, runtime, capsys):
        """Successful deployment prints one line and exits 0"""
        exit_code = run_main(runtime)

        out = capsys.readouterr().out
        assert exit_code == 0
        assert out == f"contract deployed at {DEPLOYED_ADDRESS}\n"

    def test_deploys_upload_exactly_once(self, runtime, upload_factory, upload_handle):
        """One factory lookup, one deployment, one confirmation wait"""
        run_main(runtime)

        runtime.get_contract_factory.assert_awaited_once_with("Upload")
        upload_factory.deploy.assert_awaited_once_with()
        upload_handle.deployed.assert_awaited_once()

    def test_deploy_failure_exits_1(self, runtime, upload_factory, capsys):
        """Rejected deployment is logged to stderr and exits 1"""
        upload_factory.deploy = AsyncMock(side_effect=Exception("insufficient funds"))

        exit_code = run_main(runtime)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "insufficient funds" in captured.err
        assert "contract deployed at" not in captured.out
        upload_factory.deploy.assert_awaited_once()

    def test_confirmation_failure_exits_1(self, runtime, upload_handle, capsys):
        """Timeout while waiting for the receipt is a failed deployment"""
        upload_handle.deployed = AsyncMock(side_effect=TimeoutError("receipt not found after 300s"))

        exit_code = run_main(runtime)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "receipt not found" in captured.err
        assert captured.out == ""

    def test_configuration_error_exits_1(self, capsys):
        """Bad configuration fails before any RPC traffic"""
        with patch.object(deploy_script, 'load_deploy_config',
                          side_effect=ConfigurationError("No RPC URL configured for network 'holesky'")), \
                patch.object(deploy_script, 'DeploymentRuntime') as runtime_cls:
            exit_code = deploy_script.main()

        assert exit_code == 1
        assert "No RPC URL configured" in capsys.readouterr().err
        runtime_cls.assert_not_called()

    def test_runs_from_any_directory(self, runtime, tmp_path, monkeypatch, capsys):
        """Shipped config and artifact paths are found outside the project root"""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('DEPLOY_NETWORK', 'localhost')

        with patch('blockchain.network_config.load_dotenv'), \
                patch.object(deploy_script, 'DeploymentRuntime', return_value=runtime) as runtime_cls:
            exit_code = deploy_script.main()

        assert exit_code == 0
        assert capsys.readouterr().out == f"contract deployed at {DEPLOYED_ADDRESS}\n"

        config = runtime_cls.call_args[0][0]
        assert config.artifacts_path == os.path.join(PROJECT_ROOT, 'client', 'src', 'artifacts')
        assert config.sources_path == os.path.join(PROJECT_ROOT, 'contracts')


class TestDeployUpload:
    """Test the deploy coroutine directly"""

    @pytest.mark.asyncio
    async def test_returns_address(self, runtime, capsys):
        address = await deploy_script.deploy_upload(runtime)

        assert address == DEPLOYED_ADDRESS
        assert capsys.readouterr().out.strip() == f"contract deployed at {DEPLOYED_ADDRESS}"

    @pytest.mark.asyncio
    async def test_factory_error_propagates(self, runtime):
        runtime.get_contract_factory = AsyncMock(side_effect=RuntimeError("compilation failed"))

        with pytest.raises(RuntimeError, match="compilation failed"):
            await deploy_script.deploy_upload(runtime)
