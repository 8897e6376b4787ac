import asyncio
from typing import Callable

import click
from eth_utils import to_hex

from config.settings import settings
from governance.dispatcher.action_dispatcher import ActionDispatcher
from governance.dispatcher.dispatch_result import DispatchHandle, DispatchResult
from governance.dispatcher.dispatcher_factory import create_action_dispatcher
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Proposal Actions CLI")


async def _dispatch(operation: Callable[[ActionDispatcher], DispatchHandle]) -> DispatchResult:
    dispatcher = create_action_dispatcher(settings)
    return await operation(dispatcher)


def run_action(operation: Callable[[ActionDispatcher], DispatchHandle], log_file: str = None) -> None:
    """Runs one dispatch to completion and reports it; exits with 1 unless submitted."""
    configure_logging(log_file, settings.app.log_level)

    try:
        result = asyncio.run(_dispatch(operation))
    except ValueError as e:
        # Misconfiguration (app address, account, key)
        raise click.ClickException(str(e)) from e

    if result.ok:
        tx_hash = result.tx_hash if isinstance(result.tx_hash, str) else to_hex(result.tx_hash)
        click.echo(f"{result.function_name} submitted: {tx_hash}")
        return

    click.echo(f"{result.function_name} {result.status.value}: {result.error}", err=True)
    raise click.exceptions.Exit(1)


log_file_option = click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-t", "--title", required=True, type=str, help="Proposal title.")
@click.option("-l", "--link", default="", show_default=True, type=str, help="Link to the proposal details.")
@click.option("-a", "--amount", required=True, type=str, help="Requested amount in token units, e.g. 1.5.")
@click.option("-b", "--beneficiary", required=True, type=str, help="Address receiving the funds.")
@log_file_option
def new_proposal(title: str, link: str, amount: str, beneficiary: str, log_file: str):
    """Submits a new funding proposal."""
    run_action(lambda dispatcher: dispatcher.new_proposal(title, link, amount, beneficiary), log_file)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-p", "--proposal-id", required=True, type=int, help="Proposal id.")
@click.option("-a", "--amount", required=True, type=int, help="Amount to stake, in base units.")
@log_file_option
def stake_to_proposal(proposal_id: int, amount: int, log_file: str):
    """Stakes support to a proposal."""
    run_action(lambda dispatcher: dispatcher.stake_to_proposal(proposal_id, amount), log_file)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-p", "--proposal-id", required=True, type=int, help="Proposal id.")
@click.option("-a", "--amount", required=True, type=int, help="Amount to withdraw, in base units.")
@log_file_option
def withdraw_from_proposal(proposal_id: int, amount: int, log_file: str):
    """Withdraws support from a proposal."""
    run_action(lambda dispatcher: dispatcher.withdraw_from_proposal(proposal_id, amount), log_file)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-p", "--proposal-id", required=True, type=int, help="Proposal id.")
@log_file_option
def execute_proposal(proposal_id: int, log_file: str):
    """Executes a proposal whose conviction reached the threshold."""
    run_action(lambda dispatcher: dispatcher.execute_proposal(proposal_id), log_file)
