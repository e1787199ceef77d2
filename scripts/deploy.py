"""
Upload Contract Deployment Script
Compiles and deploys the Upload contract, then prints its address

Usage:
    python -m scripts.deploy
    DEPLOY_NETWORK=localhost python -m scripts.deploy
"""

import os
import sys
import asyncio
from loguru import logger

from blockchain import DeploymentRuntime, load_deploy_config
from blockchain.network_config import DEFAULT_CONFIG_PATH
from utils.logging_setup import configure_logging

CONTRACT_NAME = "Upload"


async def deploy_upload(runtime: DeploymentRuntime) -> str:
    """
    Deploy the Upload contract once and print its address

    Args:
        runtime: Deployment runtime for the selected network

    Returns:
        Deployed contract address
    """
    upload_factory = await runtime.get_contract_factory(CONTRACT_NAME)
    upload = await upload_factory.deploy()

    await upload.deployed()

    print("contract deployed at", upload.address)

    return upload.address


def main(config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """
    Run the deployment

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    configure_logging(log_file=os.getenv('DEPLOY_LOG_FILE'))

    try:
        config = load_deploy_config(config_path)
        runtime = DeploymentRuntime(config)

        asyncio.run(deploy_upload(runtime))

    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
