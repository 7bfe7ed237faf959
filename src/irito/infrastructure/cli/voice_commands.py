"""CLI command for submitting a voice transcript."""

from __future__ import annotations

import json

import click

from irito.application.outcomes import FailureReason
from irito.domain.exceptions import DomainException
from irito.infrastructure import settings
from irito.infrastructure.bootstrap import Container
from irito.infrastructure.cli.errors import (
    RejectedError,
    failure_to_click_error,
    to_click_error,
)


@click.command("voice")
@click.argument("transcript")
@click.option("--user", "user_id", default=settings.VOICE_USER, show_default=True, help="Speaker's user ID.")
@click.option("--confidence", type=click.FloatRange(0.0, 1.0), default=None, help="Transcription confidence.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw response as JSON.")
@click.pass_obj
def voice(container: Container, transcript: str, user_id: str, confidence: float | None, as_json: bool) -> None:
    """Interpret and execute a transcribed voice command."""
    handler = container.submit_voice_command()

    try:
        response = handler.handle(transcript, user_id=user_id, confidence=confidence)
    except DomainException as exc:
        raise to_click_error(exc)

    if as_json:
        click.echo(json.dumps(response.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo(response.interpretation["message"])

    if not response.interpretation["success"]:
        raise RejectedError("Voice command was not understood")

    result = response.result or {}
    if result.get("type") == "error":
        raise failure_to_click_error(FailureReason(result["reason"]), result["message"])

    if as_json:
        return

    click.echo(result.get("message", ""))
    for product in result.get("products", []):
        click.echo(
            f"  {product['code']:<14} {product['name']:<20} "
            f"{product['currentStock']:>6} / min {product['minStock']}"
        )
    for suggestion in result.get("suggestions", []):
        click.echo(
            f"  {suggestion['productCode']:<14} {suggestion['productName']:<20} "
            f"+{suggestion['suggestedQuantity']}{suggestion['unit']}"
        )
