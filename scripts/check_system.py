"""
System Check Script
Verifies configuration, RPC connection and deployer wallet before deploying
"""

import os
import sys
from loguru import logger

from blockchain import DeploymentRuntime, load_deploy_config
from blockchain.network_config import DEFAULT_CONFIG_PATH
from utils.logging_setup import configure_logging

MIN_BALANCE_ETH = 0.01


def check_configuration(state: dict) -> bool:
    """Load config and validate the selected network profile"""
    logger.info("Checking configuration...")

    config = load_deploy_config(DEFAULT_CONFIG_PATH)
    runtime = DeploymentRuntime(config)
    state['config'] = config
    state['runtime'] = runtime

    logger.success(f"  ✓ Network profile '{runtime.network.name}' valid")
    return True


def check_sources(state: dict) -> bool:
    """Check the Solidity sources directory"""
    logger.info("Checking contract sources...")

    sources_path = state['config'].sources_path

    if not os.path.isdir(sources_path):
        logger.error(f"  ✗ Sources directory not found: {sources_path}")
        return False

    sol_files = [
        os.path.join(root, name)
        for root, _, files in os.walk(sources_path)
        for name in files
        if name.endswith('.sol')
    ]
    if not sol_files:
        logger.error(f"  ✗ No .sol files in {sources_path}")
        return False

    logger.success(f"  ✓ {len(sol_files)} source file(s) in {sources_path}")
    return True


def check_rpc_connection(state: dict) -> bool:
    """Connect and compare chain id"""
    logger.info("Checking RPC connection...")

    w3 = state['runtime'].w3
    logger.success(f"  ✓ Chain id {w3.eth.chain_id}, block {w3.eth.block_number}")
    return True


def check_wallet_balance(state: dict) -> bool:
    """Check the deployer can pay for gas"""
    logger.info("Checking deployer balance...")

    runtime = state['runtime']
    balance = runtime.wallet_manager.get_balance(runtime.w3)

    logger.info(f"  Deployer: {runtime.wallet_manager.address}")
    logger.info(f"  Balance: {balance:.4f} ETH")

    if balance < MIN_BALANCE_ETH:
        logger.warning(f"  ⚠ Balance low (need at least {MIN_BALANCE_ETH} ETH)")
        return False

    logger.success("  ✓ Balance sufficient")
    return True


def main():
    """Run all system checks"""
    configure_logging()

    logger.info("=" * 70)
    logger.info("Upload Deployer System Check")
    logger.info("=" * 70)

    checks = [
        ("Configuration", check_configuration),
        ("Contract Sources", check_sources),
        ("RPC Connection", check_rpc_connection),
        ("Wallet Balance", check_wallet_balance)
    ]

    state = {}
    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            result = check_func(state)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            result = False

        results.append((name, result))

        # Later checks need the runtime
        if name == "Configuration" and not result:
            break

    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(checks)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total:
        logger.success("✅ Ready to deploy: python -m scripts.deploy")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
