from typing import Any, List

import click
import orjson
from pydantic import ValidationError

from config.settings import settings
from governance.models.proposal import ConvictionProposal
from governance.service.proposal_state_service import evaluate_proposal_action, sort_proposals_by_conviction
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("List Proposals CLI")


def load_proposals(raw: Any) -> List[ConvictionProposal]:
    """Accepts a list of proposals or a subgraph-style {"proposals": [...]} document."""
    if isinstance(raw, dict):
        raw = raw.get("proposals", [])
    if not isinstance(raw, list):
        raise ValueError("Expected a list of proposals")
    return [ConvictionProposal.model_validate(item) for item in raw]


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("-i", "--input", "input_file", required=True, type=click.Path(exists=True, dir_okay=False), help="JSON file with proposal snapshots.")
@click.option(
    "-a",
    "--account",
    default=settings.conviction_voting.account_address,
    show_default=True,
    type=str,
    help="Connected account used to decide the offered action.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of a table.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def list_proposals(input_file: str, account: str, as_json: bool, log_file: str):
    """
    Lists proposals by descending conviction with the action offered to ACCOUNT.
    """
    configure_logging(log_file, settings.app.log_level)

    try:
        with open(input_file, "rb") as f:
            proposals = load_proposals(orjson.loads(f.read()))
    except (orjson.JSONDecodeError, ValidationError, ValueError) as e:
        logger.error(f"Could not load proposals from {input_file}: {e}")
        raise click.ClickException(str(e)) from e

    rows = []
    for proposal in sort_proposals_by_conviction(proposals):
        state = evaluate_proposal_action(proposal, account)
        rows.append(
            {
                "id": proposal.id,
                "name": proposal.name,
                "current_conviction": str(proposal.current_conviction),
                "threshold": None if proposal.threshold is None else str(proposal.threshold),
                "executed": proposal.executed,
                "action": state.action.value if state else None,
                "label": state.label if state else None,
            }
        )

    if as_json:
        click.echo(orjson.dumps(rows, option=orjson.OPT_INDENT_2).decode())
        return

    for row in rows:
        status = "executed" if row["executed"] else f"{row['current_conviction']}/{row['threshold'] or '-'}"
        click.echo(f"#{row['id']} {row['name']} [{status}] {row['label'] or '-'}")


if __name__ == "__main__":
    list_proposals()
