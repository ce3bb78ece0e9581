"""
Web Test Automation - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--visible, --report, etc.)
    2. Environment variables (WEB_TEST_AUTOMATION__LLM__MODEL, etc.)
    3. Config file (config.yaml)

Usage:
    web-test-automation run "go to example.com and verify Example Domain"
    web-test-automation run "login using admin@test.com with password secret" --visible
    web-test-automation interactive
"""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from web_test_automation.config import get_settings
from web_test_automation.config.settings import Settings
from web_test_automation.core.session import TestSession
from web_test_automation.exceptions import WebTestAutomationError
from web_test_automation.interfaces.action import Scenario
from web_test_automation.utils.logging import setup_logging

# Create the CLI app
app = typer.Typer(
    name="web-test-automation",
    help="Turn natural-language test instructions into browser test runs",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)


def _configure(visible: bool, report: Optional[str], verbose: bool = False) -> Settings:
    """Load settings and apply CLI overrides."""
    settings = get_settings()
    overrides: dict = {}
    if visible:
        overrides["browser"] = {"headless": False}
    if report:
        overrides["report"] = {"output_path": report}
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}
    if overrides:
        settings = settings.merge_with(overrides)

    setup_logging(
        level=settings.logging.level,
        log_file=settings.logging.file,
        json_format=settings.logging.json_format,
    )
    return settings


def _require_api_key(settings: Settings) -> None:
    """Exit with setup instructions when no API key is configured."""
    if settings.llm.resolve_api_key():
        return

    console.print("\n[red]❌ ERROR: OPENAI_API_KEY environment variable is required[/red]")
    console.print("\nTo fix this:")
    console.print("1. Get an OpenAI API key from https://platform.openai.com/api-keys")
    console.print("2. Set the environment variable:")
    console.print("   Windows CMD: set OPENAI_API_KEY=sk-your-key-here")
    console.print('   Windows PowerShell: $env:OPENAI_API_KEY="sk-your-key-here"')
    console.print("   Linux/macOS: export OPENAI_API_KEY=sk-your-key-here")
    console.print("   Or: WEB_TEST_AUTOMATION__LLM__API_KEY=sk-your-key-here")
    raise typer.Exit(1)


def _show_scenario(scenario: Scenario) -> None:
    """Print the parsed actions as a table."""
    table = Table(title=f"Parsed scenario: {scenario.name}", show_header=True, header_style="bold cyan")
    table.add_column("#", width=3)
    table.add_column("Type")
    table.add_column("Target")
    table.add_column("Value", style="dim")

    for i, action in enumerate(scenario.actions, 1):
        table.add_row(str(i), action.type.value, escape(action.target), escape(action.value))

    console.print(table)


def _finish(session: TestSession, settings: Settings) -> None:
    """Write the JSON report and print the summary."""
    path = session.reporter.generate_report(settings.report.output_path)
    console.print(f"\n[dim]Test report generated: {path}[/dim]")
    session.reporter.print_summary()


@app.command()
def run(
    prompt: str = typer.Argument(..., help="Natural language test instruction"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    base_url: str = typer.Option("", "--base-url", help="Base URL recorded with the scenario"),
    report: Optional[str] = typer.Option(None, "--report", "-r", help="Path of the JSON report"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Execute without confirmation"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Parse a test instruction and run it in the browser.

    Examples:
        web-test-automation run "go to example.com, verify Example Domain"
        web-test-automation run "click Products" --base-url https://shop.test --yes
    """
    settings = _configure(visible, report, verbose)
    _require_api_key(settings)

    console.print(Panel.fit(
        f"[bold blue]🎭 Web Test Automation[/bold blue]\n"
        f"[dim]Model:[/dim] {settings.llm.model}\n"
        f"[dim]Headless:[/dim] {settings.browser.headless}\n"
        f"[dim]Prompt:[/dim] {escape(prompt)}",
        border_style="blue",
    ))

    success = asyncio.run(_run_async(settings, prompt, base_url, yes))
    if not success:
        raise typer.Exit(1)


async def _run_async(settings: Settings, prompt: str, base_url: str, yes: bool) -> bool:
    session = TestSession(settings=settings)
    try:
        scenario = await session.parse(prompt, base_url)
        _show_scenario(scenario)

        if not yes and not typer.confirm("\nProceed with execution?", default=True):
            console.print("[dim]Cancelled[/dim]")
            return True

        await session.initialize()
        result = await session.run_scenario(scenario)

        verdict = "[green]SUCCESS[/green]" if result.success else "[red]FAILED[/red]"
        console.print(f"\nScenario execution: {verdict}")
        if result.error:
            console.print(f"  Error: {escape(result.error)}")
        _finish(session, settings)
        return result.success

    except WebTestAutomationError as e:
        console.print(f"\n[red]Error: {escape(str(e))}[/red]")
        logger.debug("Run failed", exc_info=True)
        return False

    finally:
        await session.close()


@app.command()
def interactive(
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    report: Optional[str] = typer.Option(None, "--report", "-r", help="Path of the JSON report"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Enter prompts one after another; type 'exit' to quit.

    The report and summary are written when the loop ends.
    """
    settings = _configure(visible, report, verbose)
    _require_api_key(settings)

    console.print(Panel.fit(
        "[bold blue]=== Web Test Automation Tool ===[/bold blue]\n"
        "Enter natural language prompts to automate web testing.\n"
        "[dim]Example: 'login using john.doe@example.com with password mypassword, "
        "then go to products and create a product'[/dim]\n"
        "Type 'exit' to quit.",
        border_style="blue",
    ))
    console.print("[green]✓ AI-powered parsing enabled (OpenAI API key found)[/green]")

    asyncio.run(_interactive_async(settings))


async def _interactive_async(settings: Settings) -> None:
    session = TestSession(settings=settings)
    try:
        await session.initialize()

        while True:
            prompt = typer.prompt("\nEnter your test prompt (or 'exit')", default="", show_default=False)
            if not prompt.strip() or prompt.strip().lower() == "exit":
                break

            try:
                scenario = await session.parse(prompt)
            except WebTestAutomationError as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                continue

            _show_scenario(scenario)
            if not typer.confirm("\nProceed with execution?", default=False):
                continue

            result = await session.run_scenario(scenario)
            verdict = "[green]SUCCESS[/green]" if result.success else "[red]FAILED[/red]"
            console.print(f"\nScenario execution: {verdict}")

    except WebTestAutomationError as e:
        console.print(f"\n[red]ERROR: {escape(str(e))}[/red]")

    finally:
        _finish(session, settings)
        await session.close()


@app.command()
def version():
    """Show version information."""
    from web_test_automation import __version__
    console.print(f"web-test-automation {__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
