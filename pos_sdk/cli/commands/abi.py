# pos_sdk/cli/commands/abi.py

"""
ABI inspection commands
"""

import click

from ...contracts.abi_loader import ABILoader
from ...contracts.registry import ContractHandle
from ...core.errors import ConfigurationError
from ...decode.event_index import EventIndex, build_event_schema
from ...types import ContractAddress
from ...utils.felts import get_selector_from_name


def _load_handle(abi_path: str) -> ContractHandle:
    try:
        return ContractHandle(ContractAddress("0x0"), ABILoader().load(abi_path))
    except ConfigurationError as e:
        raise click.ClickException(str(e))


@click.group()
def abi():
    """Inspect contract ABIs"""
    pass


@abi.command('events')
@click.argument('abi_path')
@click.option('--event', '-e', 'event_names', multiple=True,
              help='Only show these event short names (fails if one is missing)')
def events(abi_path, event_names):
    """List the events declared in ABI_PATH with their decoding schema"""
    handle = _load_handle(abi_path)

    if event_names:
        try:
            schemas = list(EventIndex(handle.abi, event_names).schemas.values())
        except ConfigurationError as e:
            raise click.ClickException(str(e))
    else:
        schemas = [build_event_schema(entry) for entry in handle.abi
                   if entry.get("type") == "event" and entry.get("kind") != "enum" and entry.get("name")]

    if not schemas:
        click.echo("No events declared")
        return

    for schema in schemas:
        click.echo(f"{schema.name}  ({schema.qualified_name})")
        click.echo(f"  selector: {hex(get_selector_from_name(schema.name))}")
        for field in schema.fields:
            click.echo(f"  - {field.name}: {field.semantic_type.value}  [{field.cairo_type}]")


@abi.command('functions')
@click.argument('abi_path')
def functions(abi_path):
    """List the callable entrypoints declared in ABI_PATH"""
    handle = _load_handle(abi_path)
    for name in handle.function_names():
        click.echo(name)
