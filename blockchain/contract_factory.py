"""
Contract Factory
Deployable template for a compiled contract and the handle it returns
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from .exceptions import DeploymentError


class DeployedContract:
    """
    Handle for a submitted contract-creation transaction.
    `address` is None until deployed() has seen a successful receipt.
    """

    def __init__(self, w3: Web3, abi: list, tx_hash, contract_name: str, timeout: int = 300, poll_latency: float = 2):
        self.w3 = w3
        self.abi = abi
        self.tx_hash = tx_hash
        self.contract_name = contract_name
        self.timeout = timeout
        self.poll_latency = poll_latency

        self.address: Optional[str] = None
        self.receipt = None
        self.contract = None

    async def deployed(self, timeout: Optional[int] = None, poll_latency: Optional[float] = None):
        """
        Wait for on-chain confirmation

        Args:
            timeout: Seconds to wait for the receipt (None = factory default)
            poll_latency: Seconds between receipt polls (None = factory default)

        Returns:
            self, with address and contract populated
        """
        if self.address:
            return self

        logger.info(f"Waiting for confirmation of {self.tx_hash.hex()}...")

        receipt = self.w3.eth.wait_for_transaction_receipt(
            self.tx_hash,
            timeout=timeout if timeout is not None else self.timeout,
            poll_latency=poll_latency if poll_latency is not None else self.poll_latency
        )

        if receipt['status'] != 1:
            raise DeploymentError(
                f"{self.contract_name} deployment reverted (tx {self.tx_hash.hex()})"
            )

        self.receipt = receipt
        self.address = Web3.to_checksum_address(receipt['contractAddress'])
        self.contract = self.w3.eth.contract(address=self.address, abi=self.abi)

        logger.info(f"Gas used: {receipt['gasUsed']} (block {receipt['blockNumber']})")

        return self


class ContractFactory:
    """
    Deploys one compiled contract from the deployer wallet
    """

    def __init__(self, w3: Web3, artifact: Dict, wallet_manager, tx_builder, confirmation_timeout: int = 300, poll_latency: float = 2):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            artifact: Compiled artifact (abi + bytecode)
            wallet_manager: Signs the creation transaction
            tx_builder: Builds the creation transaction
            confirmation_timeout: Default receipt timeout for deployed()
            poll_latency: Default receipt poll interval for deployed()
        """
        self.w3 = w3
        self.artifact = artifact
        self.contract_name = artifact['contractName']
        self.wallet_manager = wallet_manager
        self.tx_builder = tx_builder
        self.confirmation_timeout = confirmation_timeout
        self.poll_latency = poll_latency

        bytecode = artifact['bytecode']
        if not bytecode or bytecode == '0x':
            raise DeploymentError(
                f"{self.contract_name} has no bytecode (abstract contract or interface?)"
            )

        if artifact.get('linkReferences'):
            raise DeploymentError(f"{self.contract_name} requires library linking, which is not supported")

        self.contract = w3.eth.contract(abi=artifact['abi'], bytecode=bytecode)

    async def deploy(self, *constructor_args) -> DeployedContract:
        """
        Submit the contract-creation transaction

        Args:
            constructor_args: Constructor arguments

        Returns:
            DeployedContract handle (await handle.deployed() for the address)
        """
        logger.info(f"Deploying {self.contract_name} from {self.wallet_manager.address}")

        transaction = self.tx_builder.build_deploy_tx(self.contract, *constructor_args)
        signed_tx = self.wallet_manager.sign_transaction(transaction)

        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        logger.info(f"Transaction sent: {tx_hash.hex()}")

        return DeployedContract(
            self.w3,
            self.artifact['abi'],
            tx_hash,
            self.contract_name,
            timeout=self.confirmation_timeout,
            poll_latency=self.poll_latency
        )
