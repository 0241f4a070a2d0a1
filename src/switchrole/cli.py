# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
aws-switchrole Command Line Interface.

Resolves AWS credentials for a CLI profile and prints them, caching session
credentials so an MFA code or assume-role call is only needed once per
credential lifetime.

Main Commands:
    env: Print credentials for a profile as labeled lines or shell assignments
    clear: Delete a profile's cached credentials

Example:
    eval "$(aws-switchrole env --profile teamA --format sh)"
"""

import typer

from switchrole.commands import clear, env

app = typer.Typer(help="Set AWS credentials from a CLI profile.", no_args_is_help=True)


# Register commands from modules
app.command()(env)
app.command()(clear)


if __name__ == "__main__":
    app()
