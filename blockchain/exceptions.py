"""
Deployment Exceptions
Single "deployment failed" taxonomy with a few distinguishable causes
"""


class DeploymentError(Exception):
    """Base error for anything that stops a deployment"""


class ConfigurationError(DeploymentError):
    """Missing or malformed network / project configuration"""


class CompilationError(DeploymentError):
    """solc reported errors or sources could not be read"""


class ArtifactNotFoundError(DeploymentError):
    """Requested contract is not in sources or compiled artifacts"""


class NetworkError(DeploymentError):
    """RPC endpoint unreachable or serving the wrong chain"""
