"""Run the configuration store API.

Usage:
    CONFIGURATIONS_DIRECTORY=/srv/configurations python -m configstore
    python -m configstore hash-password    # prints a value for AUTH_PASSWORD_HASH
"""

import argparse
import getpass

import uvicorn

from .config import settings
from .security import hash_password


def main(argv=None):
    parser = argparse.ArgumentParser(prog='configstore')
    commands = parser.add_subparsers(dest='command')
    commands.add_parser('serve', help='run the API server (default)')
    commands.add_parser('hash-password', help='print a bcrypt hash for AUTH_PASSWORD_HASH')
    args = parser.parse_args(argv)

    if args.command == 'hash-password':
        password = getpass.getpass('Password: ')
        if password != getpass.getpass('Repeat password: '):
            parser.exit(1, 'Passwords do not match\n')
        print(hash_password(password))
        return

    uvicorn.run(
        'configstore.main:app',
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level,
    )


if __name__ == '__main__':
    main()
