"""
Wallet Manager
Holds the deployer account and signs transactions locally
"""

from typing import Dict
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger


class WalletManager:
    """
    Wraps the deployer private key; the key itself is never logged
    """

    def __init__(self, private_key: str):
        """
        Initialize wallet manager

        Args:
            private_key: Deployer private key (hex)
        """
        self.account = Account.from_key(private_key)
        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer account

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self, w3: Web3) -> Decimal:
        """
        Get deployer native balance

        Args:
            w3: Web3 instance

        Returns:
            Balance in ether
        """
        balance_wei = w3.eth.get_balance(self.address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))
