# pos_sdk/cli/__main__.py

"""
POS SDK CLI

Usage: python -m pos_sdk.cli [command] [options]

Monitor contract events, inspect ABIs and build call descriptors.
"""

import click

from pos_sdk.core.logging import SdkLogger


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """POS SDK - factory and point-of-sale contract tooling

    Command groups:
    - monitor: stream decoded contract events
    - abi: inspect contract ABIs
    - calls: build factory and POS call descriptors
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    # console only; commands that load an SdkConfig reconfigure from it
    SdkLogger.configure(log_level="DEBUG" if verbose else "INFO")


from pos_sdk.cli.commands.monitor import monitor
from pos_sdk.cli.commands.abi import abi
from pos_sdk.cli.commands.calls import calls

cli.add_command(monitor)
cli.add_command(abi)
cli.add_command(calls)


if __name__ == '__main__':
    cli()
