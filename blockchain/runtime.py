"""
Deployment Runtime
Ties configuration, RPC connection, compiler and wallet together for scripts
"""

import os
from typing import Optional
from web3 import Web3
from loguru import logger

from .compiler import ContractCompiler
from .contract_factory import ContractFactory
from .exceptions import NetworkError
from .network_config import DeployConfig
from .transaction_builder import TransactionBuilder
from .wallet_manager import WalletManager

TRUTHY_VALUES = ('1', 'true', 'yes')


class DeploymentRuntime:
    """
    Per-run environment for a selected network.
    The RPC connection and wallet are created on first use.
    """

    def __init__(self, config: DeployConfig, network_name: Optional[str] = None):
        """
        Initialize Deployment Runtime

        Args:
            config: Loaded project configuration
            network_name: Network to deploy to (None = DEPLOY_NETWORK / default_network)
        """
        self.config = config
        self.network = config.get_network(network_name)
        self.network.validate()

        self.compiler = ContractCompiler(
            solc_version=config.solc_version,
            sources_path=config.sources_path,
            artifacts_path=config.artifacts_path,
            optimizer=config.optimizer
        )

        self._w3 = None
        self._wallet_manager = None

        logger.info(f"Network: {self.network.name} (chain id {self.network.chain_id})")

    @property
    def w3(self) -> Web3:
        """Connected Web3 instance for the selected network"""
        if self._w3 is None:
            self._w3 = self._connect()
        return self._w3

    @property
    def wallet_manager(self) -> WalletManager:
        if self._wallet_manager is None:
            self._wallet_manager = WalletManager(self.network.deployer_key)
        return self._wallet_manager

    def _connect(self) -> Web3:
        """Create the HTTP provider and check it serves the configured chain"""
        w3 = Web3(Web3.HTTPProvider(self.network.rpc_url))

        if not w3.is_connected():
            raise NetworkError(f"Failed to connect to network '{self.network.name}'")

        node_chain_id = w3.eth.chain_id
        if node_chain_id != self.network.chain_id:
            raise NetworkError(
                f"Network '{self.network.name}' expects chain id {self.network.chain_id}, "
                f"node reports {node_chain_id}"
            )

        logger.success(f"Connected to {self.network.name} (block {w3.eth.block_number})")

        return w3

    def get_artifact(self, contract_name: str):
        """Compile sources, or reuse existing artifacts when DEPLOY_SKIP_COMPILE is set"""
        if os.getenv('DEPLOY_SKIP_COMPILE', '').strip().lower() in TRUTHY_VALUES:
            logger.info("DEPLOY_SKIP_COMPILE set - using existing artifacts")
            return self.compiler.load_artifact(contract_name)

        return self.compiler.compile(contract_name)

    async def get_contract_factory(self, contract_name: str) -> ContractFactory:
        """
        Get a deployable factory for a contract

        Args:
            contract_name: Contract name as declared in Solidity

        Returns:
            ContractFactory bound to the deployer wallet
        """
        artifact = self.get_artifact(contract_name)

        tx_builder = TransactionBuilder(
            self.w3,
            self.wallet_manager,
            chain_id=self.network.chain_id,
            gas_buffer=self.config.gas_buffer,
            default_gas_limit=self.config.default_gas_limit
        )

        return ContractFactory(
            self.w3,
            artifact,
            self.wallet_manager,
            tx_builder,
            confirmation_timeout=self.config.confirmation_timeout,
            poll_latency=self.config.poll_latency
        )
