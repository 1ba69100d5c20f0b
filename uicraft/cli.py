"""
CLI for UICraft.

One-shot generation from the shell, plus the interactive studio.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from uicraft import __version__
from uicraft.config import Config, FAILURE_POLICIES, GLOBAL_CONFIG_FILE
from uicraft.extract import extract_code
from uicraft.generators import get_gemini_client
from uicraft.models import STACKS, Notification, PreviewTarget, Theme, ViewState, get_stack, stack_values
from uicraft.preview import get_preview_port
from uicraft.render import EMPTY_PLACEHOLDER, highlight_grammar_for, render_source
from uicraft.session import Session

console = Console()


def print_notification(notification: Notification) -> None:
    """Show a session notification on the console."""
    style = "red" if notification.severity == "error" else "green"
    console.print(f"[{style}]{notification.message}[/{style}]")


def load_config_or_exit() -> Config:
    config = Config.load()
    issues = config.validate()
    if issues:
        console.print("[red]Configuration issues:[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
        sys.exit(1)
    return config


def create_session(config: Config, stack: Optional[str], theme: Optional[str], model: Optional[str]) -> Session:
    GeminiClient = get_gemini_client()
    client = GeminiClient(
        api_key=config.api_keys.google,
        model=model or config.defaults.model,
        timeout=config.defaults.timeout,
    )
    state = ViewState(
        stack=get_stack(stack or config.defaults.stack),
        theme=Theme(theme or config.defaults.theme),
    )
    return Session(client, notify=print_notification, state=state, on_failure=config.defaults.on_failure)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """UICraft - Generate front-end components from a description."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@main.command()
@click.argument("description", nargs=-1, required=True)
@click.option("--stack", "-s", type=click.Choice(stack_values()), default=None, help="Target front-end stack")
@click.option("--preview", "preview_target", type=click.Choice([t.value for t in PreviewTarget]), default=None,
              help="Open a sandboxed browser preview instead of printing the source")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write the extracted code to a file")
@click.option("--theme", type=click.Choice([t.value for t in Theme]), default=None, help="Highlight palette")
@click.option("--model", default=None, help="Override the generation model")
def generate(description: tuple, stack: str, preview_target: str, output: str, theme: str, model: str):
    """Generate a component from DESCRIPTION."""
    description_text = " ".join(description)
    config = load_config_or_exit()
    session = create_session(config, stack, theme, model)

    async def run() -> ViewState:
        try:
            with console.status(f"Generating {session.state.stack.label} component..."):
                return await session.generate(description_text)
        finally:
            await session.client.aclose()

    state = asyncio.run(run())

    if not description_text.strip():
        # Rejected before any request; the notice is already printed
        sys.exit(1)

    if session.last_failure:
        console.print(f"[dim]{session.last_failure}[/dim]")
        sys.exit(1)

    if not state.has_code:
        console.print(f"[yellow]{EMPTY_PLACEHOLDER}[/yellow]")
        sys.exit(1)

    if output:
        Path(output).write_text(state.extracted_code, encoding="utf-8")
        console.print(f"[green]Saved:[/green] {output}")

    if preview_target:
        target = PreviewTarget(preview_target)
        path = session.preview(target, get_preview_port(target))
        if path is None:
            error = session.last_preview_error
            console.print(f"[red]Preview could not be opened:[/red] {error.reason}")
            if error.path:
                console.print(f"Open it manually: {error.path}", soft_wrap=True)
            sys.exit(1)
        console.print(f"[blue]Preview:[/blue] {path}")
    elif not output:
        console.print(render_source(state.extracted_code, state.stack, state.theme))


@main.command()
@click.option("--stack", "-s", type=click.Choice(stack_values()), default=None, help="Initial front-end stack")
@click.option("--theme", type=click.Choice([t.value for t in Theme]), default=None, help="Initial theme")
@click.option("--model", default=None, help="Override the generation model")
def studio(stack: str, theme: str, model: str):
    """Open the interactive generation studio."""
    config = load_config_or_exit()
    session = create_session(config, stack, theme, model)

    # Import here so one-shot commands don't pay for Textual
    from uicraft.tui import StudioApp

    state = StudioApp(session).run()

    # Rich output only after the TUI has exited
    if state and state.has_code:
        console.print(f"[dim]Last generated {state.stack.label} component: "
                      f"{len(state.extracted_code.splitlines())} lines[/dim]")


@main.command()
def stacks():
    """List supported front-end stacks."""
    table = Table(title="Supported Stacks")
    table.add_column("Value", style="cyan")
    table.add_column("Label")
    table.add_column("Highlighting", style="dim")
    for stack in STACKS:
        table.add_row(stack.value, stack.label, highlight_grammar_for(stack))
    console.print(table)


@main.command()
@click.argument("reply_file", type=click.File("r"))
@click.option("--stack", "-s", type=click.Choice(stack_values()), default="html", help="Stack used for highlighting")
@click.option("--raw", is_flag=True, help="Print plain code without highlighting")
def extract(reply_file, stack: str, raw: bool):
    """Extract the code from a saved model reply (use - for stdin)."""
    code = extract_code(reply_file.read())
    if not code:
        console.print(f"[yellow]{EMPTY_PLACEHOLDER}[/yellow]")
        return
    if raw:
        click.echo(code)
    else:
        console.print(render_source(code, stack))


@main.command("setup-keys")
@click.option("--google", "google_key", help="Google (Gemini) API key")
@click.option("--model", help="Default generation model")
@click.option("--on-failure", type=click.Choice(FAILURE_POLICIES), help="What to show after a failed generation")
def setup_keys(google_key: str, model: str, on_failure: str):
    """Configure API keys and defaults for UICraft."""
    cfg = Config.load()

    if google_key:
        cfg.api_keys.google = google_key
    if model:
        cfg.defaults.model = model
    if on_failure:
        cfg.defaults.on_failure = on_failure

    cfg.save()

    console.print(f"[green]Configuration saved to {GLOBAL_CONFIG_FILE}[/green]")
    console.print("\n[bold]API Key Status:[/bold]")
    console.print(f"  Google/Gemini: {'[green]configured[/green]' if cfg.api_keys.google else '[red]missing[/red]'}")


@main.command("check-keys")
def check_keys():
    """Check configuration status."""
    cfg = Config.load()
    issues = cfg.validate()

    console.print("[bold]API Key Status:[/bold]")
    console.print(f"  Google/Gemini: {'[green]configured[/green]' if cfg.api_keys.google else '[red]missing[/red]'}")
    console.print(Panel.fit(
        f"Model: {cfg.defaults.model}\n"
        f"Stack: {cfg.defaults.stack}\n"
        f"Theme: {cfg.defaults.theme}\n"
        f"Timeout: {cfg.defaults.timeout}s\n"
        f"On failure: {cfg.defaults.on_failure}",
        title="Defaults",
    ))

    if issues:
        console.print("\n[red]Configuration issues:[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
        sys.exit(1)
    else:
        console.print("\n[green]All required settings configured![/green]")


if __name__ == "__main__":
    main()
