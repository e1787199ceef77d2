"""
Transaction Builder
Builds contract-creation transactions (nonce, gas, fees, chain id)
"""

from typing import Dict
from web3 import Web3
from loguru import logger


class TransactionBuilder:
    """
    Builds deployment transactions for the deployer wallet
    """

    def __init__(self, w3: Web3, wallet_manager, chain_id: int, gas_buffer: float = 1.2, default_gas_limit: int = 3_000_000):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            wallet_manager: Wallet manager for the deployer address
            chain_id: Chain id stamped on every transaction
            gas_buffer: Multiplier applied to the gas estimate
            default_gas_limit: Gas limit used when estimation fails
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.chain_id = chain_id
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit

    def get_fee_params(self) -> Dict:
        """
        Fee fields for the next transaction

        Returns:
            EIP-1559 fields when the chain reports a base fee, legacy gasPrice otherwise
        """
        latest = self.w3.eth.get_block('latest')
        base_fee = latest.get('baseFeePerGas')

        if base_fee is not None:
            tip = self.w3.eth.max_priority_fee
            max_fee = 2 * int(base_fee) + tip

            logger.info(
                f"Base fee: {self.w3.from_wei(base_fee, 'gwei')} gwei, "
                f"tip: {self.w3.from_wei(tip, 'gwei')} gwei"
            )

            return {
                'maxFeePerGas': max_fee,
                'maxPriorityFeePerGas': tip
            }

        gas_price = self.w3.eth.gas_price
        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        return {'gasPrice': gas_price}

    def estimate_gas_limit(self, constructor) -> int:
        """
        Estimate gas for a constructor call plus buffer

        Args:
            constructor: web3 ContractConstructor

        Returns:
            Gas limit
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': self.wallet_manager.address})
            return int(gas_estimate * self.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit

    def build_deploy_tx(self, contract, *constructor_args) -> Dict:
        """
        Build a contract-creation transaction

        Args:
            contract: web3 contract factory (abi + bytecode)
            constructor_args: Constructor arguments

        Returns:
            Unsigned transaction dict
        """
        constructor = contract.constructor(*constructor_args)
        address = self.wallet_manager.address

        gas_limit = self.estimate_gas_limit(constructor)
        logger.info(f"Gas limit: {gas_limit}")

        tx_params = {
            'from': address,
            'nonce': self.w3.eth.get_transaction_count(address, 'pending'),
            'chainId': self.chain_id,
            'gas': gas_limit,
            'value': 0
        }
        tx_params.update(self.get_fee_params())

        return constructor.build_transaction(tx_params)
