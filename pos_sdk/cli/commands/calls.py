# pos_sdk/cli/commands/calls.py

"""
Call descriptor commands

Prints the call as JSON; signing and submission happen elsewhere.
"""

import click
import msgspec

from ...calls.factory import FactoryCalls
from ...calls.pos import PosCalls
from ...contracts.abi_loader import ABILoader
from ...contracts.registry import ContractRegistry
from ...core.errors import ConfigurationError
from ...types import Call


def _emit(call: Call) -> None:
    click.echo(msgspec.json.encode(call).decode())


@click.group()
def calls():
    """Build factory and POS call descriptors"""
    pass


@calls.group()
@click.argument('factory_address')
@click.argument('abi_path')
@click.pass_context
def factory(ctx, factory_address, abi_path):
    """Factory administration calls

    ABI_PATH is the factory's compiled contract or ABI JSON file; entrypoints are checked against it.

    Example:
        calls factory 0x04ab... factory.contract_class.json set-paused true
    """
    ctx.ensure_object(dict)
    try:
        ctx.obj['factory'] = FactoryCalls(ContractRegistry(ABILoader()), factory_address, abi_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))


def _factory_call(ctx, method: str, *args) -> None:
    try:
        _emit(getattr(ctx.obj['factory'], method)(*args))
    except (ConfigurationError, ValueError) as e:
        raise click.ClickException(str(e))


@factory.command('initialize')
@click.option('--treasury', required=True)
@click.option('--fee-percent', type=int, required=True, help='Basis points')
@click.option('--tax-percent', type=int, required=True, help='Basis points')
@click.option('--timeout', type=int, required=True, help='Seconds')
@click.pass_context
def initialize(ctx, treasury, fee_percent, tax_percent, timeout):
    _factory_call(ctx, 'build_initialize', treasury, fee_percent, tax_percent, timeout)


@factory.command('create-pos')
@click.argument('owner')
@click.argument('pos_class_hash')
@click.pass_context
def create_pos(ctx, owner, pos_class_hash):
    _factory_call(ctx, 'build_create_pos', owner, pos_class_hash)


@factory.command('add-token')
@click.argument('token')
@click.pass_context
def add_token(ctx, token):
    _factory_call(ctx, 'build_add_supported_token', token)


@factory.command('remove-token')
@click.argument('token')
@click.pass_context
def remove_token(ctx, token):
    _factory_call(ctx, 'build_remove_supported_token', token)


@factory.command('update-treasury')
@click.argument('treasury')
@click.pass_context
def update_treasury(ctx, treasury):
    _factory_call(ctx, 'build_update_treasury', treasury)


@factory.command('update-fee')
@click.argument('fee_percent', type=int)
@click.pass_context
def update_fee(ctx, fee_percent):
    _factory_call(ctx, 'build_update_fee_percent', fee_percent)


@factory.command('update-tax')
@click.argument('tax_percent', type=int)
@click.pass_context
def update_tax(ctx, tax_percent):
    _factory_call(ctx, 'build_update_tax_percent', tax_percent)


@factory.command('update-timeout')
@click.argument('timeout', type=int)
@click.pass_context
def update_timeout(ctx, timeout):
    _factory_call(ctx, 'build_update_timeout', timeout)


@factory.command('set-paused')
@click.argument('paused', type=bool)
@click.pass_context
def set_paused(ctx, paused):
    _factory_call(ctx, 'build_set_paused', paused)


@calls.group()
@click.argument('pos_address')
@click.pass_context
def pos(ctx, pos_address):
    """Merchant POS calls"""
    ctx.ensure_object(dict)
    ctx.obj['pos'] = PosCalls(pos_address)


def _pos_call(ctx, method: str, *args) -> None:
    try:
        _emit(getattr(ctx.obj['pos'], method)(*args))
    except ValueError as e:
        raise click.ClickException(str(e))


@pos.command('deposit')
@click.argument('amount')
@click.argument('tx_id')
@click.argument('token')
@click.pass_context
def deposit(ctx, amount, tx_id, token):
    _pos_call(ctx, 'build_deposit', amount, tx_id, token)


@pos.command('approve')
@click.argument('tx_id')
@click.pass_context
def approve(ctx, tx_id):
    _pos_call(ctx, 'build_approve_transaction', tx_id)


@pos.command('reject')
@click.argument('tx_id')
@click.pass_context
def reject(ctx, tx_id):
    _pos_call(ctx, 'build_reject_transaction', tx_id)


@pos.command('auto-refund')
@click.argument('tx_id')
@click.argument('refund_receiver')
@click.pass_context
def auto_refund(ctx, tx_id, refund_receiver):
    _pos_call(ctx, 'build_auto_refund', tx_id, refund_receiver)


@pos.command('withdraw')
@click.argument('recipient')
@click.argument('amount')
@click.argument('token')
@click.pass_context
def withdraw(ctx, recipient, amount, token):
    _pos_call(ctx, 'build_withdraw', recipient, amount, token)
