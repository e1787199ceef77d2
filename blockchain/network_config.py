"""
Network Configuration
Loads config/deploy_config.json and resolves network profiles from the environment
"""

import os
import re
import json
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

from .exceptions import ConfigurationError

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "deploy_config.json")

PRIVATE_KEY_PATTERN = re.compile(r'^(0x)?[0-9a-fA-F]{64}$')


class NetworkProfile:
    """
    Where and as whom a deployment is submitted:
    RPC endpoint, chain id and signing keys
    """

    def __init__(self, name: str, rpc_url: Optional[str], chain_id: int, private_keys: List[str]):
        self.name = name
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.private_keys = private_keys

    def __repr__(self):
        # Keys stay out of logs and tracebacks
        return (
            f"NetworkProfile(name={self.name!r}, rpc_url={self.rpc_url!r}, "
            f"chain_id={self.chain_id}, accounts={len(self.private_keys)})"
        )

    @property
    def deployer_key(self) -> str:
        """First configured account signs deployments"""
        return self.private_keys[0]

    def validate(self):
        """
        Fail fast on missing or malformed settings

        Raises:
            ConfigurationError: RPC URL, chain id or private key is unusable
        """
        if not self.rpc_url:
            raise ConfigurationError(f"No RPC URL configured for network '{self.name}'")

        if not self.rpc_url.startswith(('http://', 'https://')):
            raise ConfigurationError(
                f"RPC URL for network '{self.name}' must be an http(s) endpoint"
            )

        if not isinstance(self.chain_id, int) or isinstance(self.chain_id, bool) or self.chain_id <= 0:
            raise ConfigurationError(f"Invalid chain id for network '{self.name}': {self.chain_id!r}")

        if not self.private_keys:
            raise ConfigurationError(f"No account private key configured for network '{self.name}'")

        for index, key in enumerate(self.private_keys):
            if not key or not PRIVATE_KEY_PATTERN.match(key):
                raise ConfigurationError(
                    f"Account #{index} for network '{self.name}' is not a 32-byte hex private key"
                )


class DeployConfig:
    """
    Project configuration: compiler settings, paths, networks, deployment tuning
    """

    def __init__(self, config: Dict, base_dir: Optional[str] = None):
        """
        Initialize from a parsed config dict

        Args:
            config: Contents of deploy_config.json
            base_dir: Project root relative paths resolve against (None = leave as written)
        """
        self.config = config

        solidity = config.get('solidity', {})
        self.solc_version = solidity.get('version', '0.8.19')
        self.optimizer = solidity.get('optimizer', {'enabled': False, 'runs': 200})

        paths = config.get('paths', {})
        self.base_dir = base_dir
        self.sources_path = self._resolve(paths.get('sources', './contracts'))
        self.artifacts_path = self._resolve(paths.get('artifacts', './artifacts'))

        deployment = config.get('deployment', {})
        self.confirmation_timeout = deployment.get('confirmation_timeout', 300)
        self.poll_latency = deployment.get('poll_latency', 2)
        self.gas_buffer = deployment.get('gas_buffer', 1.2)
        self.default_gas_limit = deployment.get('default_gas_limit', 3_000_000)

        self.networks = config.get('networks', {})
        self.default_network = config.get('default_network')

    def _resolve(self, path: str) -> str:
        if self.base_dir is None or os.path.isabs(path):
            return path
        return os.path.normpath(os.path.join(self.base_dir, path))

    def get_network(self, name: Optional[str] = None) -> NetworkProfile:
        """
        Resolve a network profile

        Args:
            name: Network name (None = DEPLOY_NETWORK env var, then default_network)

        Returns:
            NetworkProfile with values pulled from the environment
        """
        network_name = name or os.getenv('DEPLOY_NETWORK') or self.default_network

        if not network_name:
            raise ConfigurationError("No network selected and no default_network configured")

        if network_name not in self.networks:
            available = ', '.join(sorted(self.networks)) or 'none'
            raise ConfigurationError(f"Unknown network '{network_name}' (available: {available})")

        network = self.networks[network_name]

        rpc_url = network.get('url')
        if not rpc_url and network.get('url_env'):
            rpc_url = os.getenv(network['url_env'])

        private_keys = list(network.get('accounts', []))
        for env_name in network.get('accounts_env', []):
            value = os.getenv(env_name)
            if value:
                private_keys.append(value.strip())
            else:
                logger.warning(f"{env_name} is not set")

        return NetworkProfile(
            name=network_name,
            rpc_url=rpc_url,
            chain_id=network.get('chain_id'),
            private_keys=private_keys
        )


def load_deploy_config(path: str = DEFAULT_CONFIG_PATH) -> DeployConfig:
    """
    Load project configuration, populating the environment from .env first.
    Relative paths in the file resolve against the project root (parent of config/).

    Args:
        path: Path to deploy_config.json

    Returns:
        DeployConfig
    """
    # .env sits in the project root next to config/
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(path)))
    load_dotenv(os.path.join(base_dir, '.env'))

    if not os.path.exists(path):
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed config file {path}: {e}") from e

    logger.debug(f"Loaded deploy config from {path}")

    return DeployConfig(config, base_dir=base_dir)
