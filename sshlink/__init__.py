"""sshlink - passwordless SSH access for one host per run"""

__version__ = "1.0.0"
