# pos_sdk/cli/commands/monitor.py

"""
Event monitoring command

Streams decoded events as JSON lines until interrupted.
"""

import asyncio
import json
import signal

import click
import msgspec

from ...core.errors import PosSdkError
from ...types import DecodedEvent, EventCallbackData, EventMetadata


def format_event(event: DecodedEvent, metadata: EventMetadata) -> str:
    # stdlib json keeps u256 values exact
    payload = msgspec.to_builtins(EventCallbackData(event=event, metadata=metadata))
    return json.dumps(payload, sort_keys=True)


def print_event(event: DecodedEvent, metadata: EventMetadata) -> None:
    click.echo(format_event(event, metadata))


async def run_monitor(sdk, address, event_names, abi_path, interval) -> None:
    try:
        monitor = sdk.monitor(address, event_names, print_event,
                              abi_source=abi_path, poll_interval_ms=interval)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, monitor.stop)
            except NotImplementedError:
                # no signal handlers on this event loop; Ctrl+C ends asyncio.run instead
                pass

        await sdk.verify_chain()
        await monitor.run()
    finally:
        await sdk.client.close()


@click.command()
@click.argument('address')
@click.option('--abi', 'abi_path', required=True, help='Compiled contract or ABI JSON file')
@click.option('--event', '-e', 'event_names', multiple=True, required=True,
              help='Event short name to deliver (repeatable)')
@click.option('--interval', type=click.IntRange(min=1), help='Poll interval in milliseconds')
@click.option('--rpc-url', envvar='POS_SDK_RPC_URL', help='Starknet JSON-RPC endpoint')
@click.option('--legacy-wide-integer', is_flag=True,
              help='Decode u256 fields from a single word (historical behaviour)')
@click.pass_context
def monitor(ctx, address, abi_path, event_names, interval, rpc_url, legacy_wide_integer):
    """Monitor ADDRESS and print matching events

    Examples:
        monitor 0x04ab... --abi factory.contract_class.json -e POSCreated
        monitor 0x04ab... --abi pos.json -e Deposit -e RefundSent --interval 2000
    """
    from ... import create_sdk

    try:
        verbose = (ctx.obj or {}).get('verbose')
        sdk = create_sdk(rpc_url=rpc_url,
                         legacy_wide_integer=True if legacy_wide_integer else None,
                         log_level="DEBUG" if verbose else None)
        asyncio.run(run_monitor(sdk, address, list(event_names), abi_path, interval))
    except PosSdkError as e:
        raise click.ClickException(str(e))
