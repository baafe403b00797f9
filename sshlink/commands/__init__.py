"""sshlink CLI commands"""
