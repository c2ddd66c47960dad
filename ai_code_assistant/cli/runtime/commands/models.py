"""List the models offered by the configured completion service."""

from __future__ import annotations

import click

from ai_code_assistant.cli.utils import get_llm_client
from ai_code_assistant.providers.llm import LLMError

from .._compat import get_cli_state


@click.command(name="models", short_help="List available models.")
@click.pass_context
def models_command(ctx: click.Context) -> None:
    """Query the provider for the models it serves."""
    settings = get_cli_state(ctx).settings
    client = get_llm_client(settings)
    try:
        models = client.list_models()
    except LLMError as exc:
        raise click.ClickException(f"Failed to list models: {exc}") from exc

    for model_id in sorted(str(model.get("id", "")) for model in models):
        marker = "*" if model_id == settings.model else " "
        click.echo(f"{marker} {model_id}")
