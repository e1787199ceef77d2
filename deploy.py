"""
Contract Deployment Wrapper
Runs the scripts.deploy module, optionally against a named network

Usage:
    python deploy.py            # default_network from config
    python deploy.py localhost
"""

import os
import subprocess
import sys

if __name__ == "__main__":
    env = os.environ.copy()

    if len(sys.argv) > 1:
        env['DEPLOY_NETWORK'] = sys.argv[1]

    network = env.get('DEPLOY_NETWORK', 'default network')

    # Banner on stderr so stdout carries only the deployed address line
    print("=" * 70, file=sys.stderr)
    print(f"Upload Contract Deployment ({network})", file=sys.stderr)
    print("=" * 70, file=sys.stderr)

    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
        env=env
    )

    sys.exit(result.returncode)
