"""
Blockchain Interaction Package
Handles configuration, compilation, transaction building and contract deployment
"""

from .exceptions import (
    DeploymentError,
    ConfigurationError,
    CompilationError,
    ArtifactNotFoundError,
    NetworkError
)
from .network_config import DeployConfig, NetworkProfile, load_deploy_config
from .compiler import ContractCompiler
from .wallet_manager import WalletManager
from .transaction_builder import TransactionBuilder
from .contract_factory import ContractFactory, DeployedContract
from .runtime import DeploymentRuntime

__all__ = [
    'DeploymentError',
    'ConfigurationError',
    'CompilationError',
    'ArtifactNotFoundError',
    'NetworkError',
    'DeployConfig',
    'NetworkProfile',
    'load_deploy_config',
    'ContractCompiler',
    'WalletManager',
    'TransactionBuilder',
    'ContractFactory',
    'DeployedContract',
    'DeploymentRuntime'
]
