"""
Contract Compiler
Compiles Solidity sources with solc and writes Hardhat-format artifacts
"""

import os
import json
from typing import Dict, List
from loguru import logger
from solcx import compile_standard, get_installed_solc_versions, install_solc
from solcx.exceptions import SolcError

from .exceptions import ArtifactNotFoundError, CompilationError

ARTIFACT_FORMAT = "hh-sol-artifact-1"


class ContractCompiler:
    """
    Compiles every .sol file under the sources path in one solc run
    and writes one JSON artifact per contract
    """

    def __init__(self, solc_version: str, sources_path: str, artifacts_path: str, optimizer: Dict = None):
        """
        Initialize Contract Compiler

        Args:
            solc_version: Exact solc version, e.g. "0.8.19"
            sources_path: Directory holding .sol sources
            artifacts_path: Directory artifacts are written to
            optimizer: solc optimizer settings
        """
        self.solc_version = solc_version
        self.sources_path = sources_path
        self.artifacts_path = artifacts_path
        self.optimizer = optimizer or {'enabled': False, 'runs': 200}

    def _ensure_solc(self):
        """Install the configured solc version on first use"""
        installed = [str(version) for version in get_installed_solc_versions()]

        if self.solc_version not in installed:
            logger.info(f"Installing solc {self.solc_version}...")
            install_solc(self.solc_version)

    def _collect_sources(self) -> Dict[str, Dict]:
        """Read all .sol files, keyed by their project-relative source name"""
        if not os.path.isdir(self.sources_path):
            raise CompilationError(f"Sources directory not found: {self.sources_path}")

        sources = {}
        project_root = os.path.dirname(os.path.abspath(self.sources_path))

        for root, _, files in os.walk(self.sources_path):
            for filename in sorted(files):
                if not filename.endswith('.sol'):
                    continue

                path = os.path.join(root, filename)
                # e.g. contracts/Upload.sol
                source_name = os.path.relpath(os.path.abspath(path), project_root).replace(os.sep, '/')

                with open(path, 'r') as f:
                    sources[source_name] = {'content': f.read()}

        if not sources:
            raise CompilationError(f"No Solidity sources in {self.sources_path}")

        return sources

    def compile_all(self) -> List[Dict]:
        """
        Compile every source and write artifacts

        Returns:
            List of artifact dicts
        """
        sources = self._collect_sources()
        self._ensure_solc()

        logger.info(f"Compiling {len(sources)} Solidity file(s) with solc {self.solc_version}")

        standard_input = {
            'language': 'Solidity',
            'sources': sources,
            'settings': {
                'optimizer': self.optimizer,
                'outputSelection': {
                    '*': {
                        '*': ['abi', 'evm.bytecode', 'evm.deployedBytecode']
                    }
                }
            }
        }

        try:
            output = compile_standard(
                standard_input,
                solc_version=self.solc_version,
                allow_paths=[os.path.abspath(self.sources_path)]
            )
        except SolcError as e:
            raise CompilationError(f"solc failed: {e}") from e

        errors = []
        for entry in output.get('errors', []):
            message = entry.get('formattedMessage', entry.get('message', ''))
            if entry.get('severity') == 'error':
                errors.append(message)
            else:
                logger.warning(message.strip())

        if errors:
            raise CompilationError("\n".join(errors))

        artifacts = []

        for source_name, contracts in output.get('contracts', {}).items():
            for contract_name, contract_output in contracts.items():
                artifact = self._build_artifact(source_name, contract_name, contract_output)
                self._write_artifact(artifact)
                artifacts.append(artifact)

        logger.success(f"Compiled {len(artifacts)} contract(s)")

        return artifacts

    def compile(self, contract_name: str) -> Dict:
        """
        Compile sources and return the artifact for one contract

        Args:
            contract_name: Contract to return

        Returns:
            Artifact dict
        """
        for artifact in self.compile_all():
            if artifact['contractName'] == contract_name:
                return artifact

        raise ArtifactNotFoundError(f"Contract '{contract_name}' not found in {self.sources_path}")

    def _build_artifact(self, source_name: str, contract_name: str, contract_output: Dict) -> Dict:
        """Shape solc output like a Hardhat artifact"""
        bytecode = contract_output['evm']['bytecode']
        deployed_bytecode = contract_output['evm']['deployedBytecode']

        return {
            '_format': ARTIFACT_FORMAT,
            'contractName': contract_name,
            'sourceName': source_name,
            'abi': contract_output['abi'],
            'bytecode': '0x' + bytecode['object'],
            'deployedBytecode': '0x' + deployed_bytecode['object'],
            'linkReferences': bytecode.get('linkReferences', {}),
            'deployedLinkReferences': deployed_bytecode.get('linkReferences', {})
        }

    def _artifact_file(self, source_name: str, contract_name: str) -> str:
        return os.path.join(self.artifacts_path, source_name, f"{contract_name}.json")

    def _write_artifact(self, artifact: Dict):
        path = self._artifact_file(artifact['sourceName'], artifact['contractName'])
        os.makedirs(os.path.dirname(path), exist_ok=True)

        with open(path, 'w') as f:
            json.dump(artifact, f, indent=2)

        logger.debug(f"Wrote artifact {path}")

    def load_artifact(self, contract_name: str) -> Dict:
        """
        Load a previously compiled artifact

        Args:
            contract_name: Contract name

        Returns:
            Artifact dict
        """
        if os.path.isdir(self.artifacts_path):
            for root, _, files in os.walk(self.artifacts_path):
                if f"{contract_name}.json" in files:
                    with open(os.path.join(root, f"{contract_name}.json"), 'r') as f:
                        return json.load(f)

        raise ArtifactNotFoundError(
            f"Artifact for '{contract_name}' not found in {self.artifacts_path}. Run python -m scripts.compile first"
        )
