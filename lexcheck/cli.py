"""lexcheck command line.

Commands:
    lexcheck validate-lexica <did>   Check a repo's collections reference valid lexica
"""

import asyncio
import json
from enum import Enum
from typing import Optional

import typer

from lexcheck import __version__
from lexcheck.atproto import (
    AccountIdentifierInvalidError,
    Did,
    LexiconError,
    atproto_client,
    dns_client,
)
from lexcheck.checker import Outcome, VerdictCache, check_user_collections
from lexcheck.core.config import CHECK_CONCURRENCY
from lexcheck.logging_config import configure_logging

EXIT_SUCCESS = 0
EXIT_INVALID_DID = 2
EXIT_PROTOCOL_ERROR = 3


class OutputFormat(str, Enum):
    text = "text"
    json = "json"


app = typer.Typer(
    name="lexcheck",
    help="Verify AT Protocol lexicon NSIDs against their DNS delegation.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lexcheck {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Verify AT Protocol lexicon NSIDs against their DNS delegation."""


def render(outcome: Outcome, did: Did, format: OutputFormat) -> str:
    """Render an outcome for stdout."""
    if format == OutputFormat.json:
        return json.dumps(
            {"did": did.value, "results": outcome.to_dict()},
            indent=2,
            ensure_ascii=False,
        ) + "\n"
    return f"outcome:\n{outcome}"


@app.command("validate-lexica")
def validate_lexica_cmd(
    did: str = typer.Argument(
        ...,
        help="DID of the repository whose collections to check",
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        "-f",
        help="Output format",
    ),
    concurrency: int = typer.Option(
        CHECK_CONCURRENCY,
        "--concurrency",
        "-c",
        min=1,
        help="NSIDs checked at once",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (default: LEXCHECK_LOG_LEVEL or WARNING)",
    ),
) -> None:
    """Check whether a user's collections reference valid lexica.

    Each collection NSID is printed with a check mark when its _lexicon
    DNS delegation resolves and the delegated account publishes a schema
    record for it, or a cross otherwise. app.bsky.* collections are skipped.

    Examples:
        lexcheck validate-lexica did:plc:zylhqsjug3f76uqxguhviqka
        lexcheck validate-lexica did:plc:zylhqsjug3f76uqxguhviqka -f json
    """
    configure_logging(log_level=log_level)

    try:
        user_did = Did.parse(did)
    except AccountIdentifierInvalidError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=EXIT_INVALID_DID)

    cache = VerdictCache()
    try:
        outcome = asyncio.run(
            check_user_collections(
                cache,
                dns_client(),
                atproto_client(),
                user_did,
                max_concurrency=concurrency,
            )
        )
    except LexiconError as e:
        typer.echo(f"Error [{e.code}]: {e.message}", err=True)
        raise typer.Exit(code=EXIT_PROTOCOL_ERROR)

    typer.echo(render(outcome, user_did, format), nl=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
