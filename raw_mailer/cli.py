"""Command-line interface for raw-mailer.

Usage:
    raw-mailer send email.json
    raw-mailer send email.json --mode disabled
    raw-mailer render email.json
    raw-mailer check-address someone@example.com other@example

The JSON file describes a ready-to-send email, with either camelCase
(``destinationAddresses``) or snake_case (``destination_addresses``) keys.
Transport, sender and auto-BCC settings come from config.ini and RMAIL_*
environment variables.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import load_settings
from .errors import MailerConfigurationError
from .logger import configure_logging
from .mailer import Mailer, is_valid_email
from .models import MailerMode, ReadyToSendEmail

console = Console()
err_console = Console(stderr=True)


def run_async(coro):
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def load_email(path: str) -> ReadyToSendEmail:
    """Read a :class:`ReadyToSendEmail` from a JSON file."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return ReadyToSendEmail.model_validate(payload)


def _build_mailer(config_path: Optional[str], mode: Optional[str]) -> Mailer:
    settings: Dict[str, Any] = load_settings(config_path)
    configure_logging(settings["log_level"])
    if mode:
        settings["mode"] = MailerMode.parse(mode)
    return Mailer.from_settings(settings)


def _load_or_exit(email_json: str) -> ReadyToSendEmail:
    try:
        return load_email(email_json)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        print_error(f"Cannot read {email_json}: {exc}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="raw-mailer")
def main() -> None:
    """Compose raw MIME emails and send them through SES or SMTP."""


@main.command("send")
@click.argument("email_json", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", default=None, help="Path to config.ini (default: RMAIL_CONFIG).")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in MailerMode], case_sensitive=False),
    default=None,
    help="Override the configured dispatch mode.",
)
def send_command(email_json: str, config_path: Optional[str], mode: Optional[str]) -> None:
    """Send the email described in EMAIL_JSON."""
    rts = _load_or_exit(email_json)
    try:
        mailer = _build_mailer(config_path, mode)
    except (MailerConfigurationError, ValueError) as exc:
        print_error(str(exc))
        sys.exit(1)

    result = run_async(mailer.send_email(rts))
    if result is None:
        print_error("Email not sent (suppressed by mode or failed, see logs)")
        sys.exit(1)
    print_success("Email submitted")
    print_json(result)


@main.command("render")
@click.argument("email_json", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", default=None, help="Path to config.ini (default: RMAIL_CONFIG).")
def render_command(email_json: str, config_path: Optional[str]) -> None:
    """Print the raw MIME text for EMAIL_JSON without sending it."""
    rts = _load_or_exit(email_json)
    try:
        mailer = _build_mailer(config_path, None)
    except (MailerConfigurationError, ValueError) as exc:
        print_error(str(exc))
        sys.exit(1)

    raw_message = mailer.render(rts)
    if raw_message is None:
        print_error(f"Nothing to render in {mailer.config.mode.value} mode")
        sys.exit(1)
    click.echo(raw_message, nl=False)


@main.command("check-address")
@click.argument("addresses", nargs=-1, required=True)
def check_address_command(addresses: tuple[str, ...]) -> None:
    """Check ADDRESSES against the permissive address pattern."""
    table = Table(title="Addresses")
    table.add_column("Address", style="cyan")
    table.add_column("Valid")

    all_valid = True
    for address in addresses:
        valid = is_valid_email(address)
        all_valid = all_valid and valid
        table.add_row(address, "[green]yes[/green]" if valid else "[red]no[/red]")
    console.print(table)
    if not all_valid:
        sys.exit(1)


if __name__ == "__main__":
    main()
