import click

from cli.list_proposals import list_proposals
from cli.proposal_actions import execute_proposal, new_proposal, stake_to_proposal, withdraw_from_proposal


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Proposal list with the action offered to an account
cli.add_command(list_proposals, "list_proposals")

# Conviction voting transactions
cli.add_command(new_proposal, "new_proposal")
cli.add_command(stake_to_proposal, "stake_to_proposal")
cli.add_command(withdraw_from_proposal, "withdraw_from_proposal")
cli.add_command(execute_proposal, "execute_proposal")
