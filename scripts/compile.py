"""
Compile Script
Compiles all contract sources and writes artifacts for the front-end
"""

import os
import sys
from loguru import logger

from blockchain import ContractCompiler, load_deploy_config
from blockchain.network_config import DEFAULT_CONFIG_PATH
from utils.logging_setup import configure_logging


def main(config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """
    Compile contracts

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    configure_logging(log_file=os.getenv('DEPLOY_LOG_FILE'))

    try:
        config = load_deploy_config(config_path)

        compiler = ContractCompiler(
            solc_version=config.solc_version,
            sources_path=config.sources_path,
            artifacts_path=config.artifacts_path,
            optimizer=config.optimizer
        )

        for artifact in compiler.compile_all():
            logger.info(f"  {artifact['sourceName']}:{artifact['contractName']}")

        logger.info(f"Artifacts written to {config.artifacts_path}")

    except Exception as e:
        logger.exception(f"Compilation failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
