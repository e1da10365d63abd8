"""
Main entry point for the cold_mailer package.

Usage:
    python -m cold_mailer [command] [options]

See 'python -m cold_mailer --help' for available commands.
"""

from cold_mailer.cli import main

if __name__ == "__main__":
    main()
