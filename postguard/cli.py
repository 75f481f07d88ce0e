"""postguard CLI — check post text against the moderation lexicon."""

import json

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from postguard import __version__
from postguard.config import Settings, configure_logging
from postguard.moderation.models import Category

console = Console()
err_console = Console(stderr=True)

EXIT_FLAGGED = 1
EXIT_BAD_INPUT = 2


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """postguard — lexical content moderation for journal posts.

    Checks post text for profanity, hate speech, anti-Christian content
    and explicit content before it is published.
    """
    configure_logging("DEBUG" if verbose else Settings.from_env().log_level)


def _lexicon(lexicon_path: str | None = None):
    """Load the requested lexicon, or the process-wide one, exiting on bad data."""
    from postguard.moderation.lexicon import get_lexicon, load_lexicon
    from postguard.moderation.models import LexiconError

    try:
        return load_lexicon(lexicon_path) if lexicon_path else get_lexicon()
    except LexiconError as e:
        err_console.print("[red]Invalid lexicon:[/]")
        for issue in e.issues:
            err_console.print(f"  [red]x[/] {issue}")
        raise SystemExit(EXIT_BAD_INPUT)


def _moderator(lexicon_path: str | None):
    from postguard.moderation.moderator import ContentModerator, default_moderator

    if not lexicon_path:
        _lexicon()
        return default_moderator()
    return ContentModerator(_lexicon(lexicon_path))


def _report(result, as_json: bool) -> None:
    from postguard.moderation.messages import describe_violations

    if as_json:
        payload = result.to_dict()
        payload["message"] = describe_violations(result)
        click.echo(json.dumps(payload, indent=2))
    elif result.is_clean:
        console.print("  [green]v[/] Clean")
    else:
        table = Table(title=f"Violations ({len(result.violations)} categories)")
        table.add_column("Category", style="cyan")
        table.add_column("Matched terms", style="red")
        for v in result.violations:
            table.add_row(v.category.value, ", ".join(v.matched_terms))
        console.print(table)
        console.print(Panel(describe_violations(result), title="Message"))

    if not result.is_clean:
        raise SystemExit(EXIT_FLAGGED)


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--lexicon", "-l", "lexicon_path", default=None, help="YAML lexicon file to use")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def check(text: str, lexicon_path: str | None, as_json: bool):
    """Moderate a single piece of text.

    Exits with status 1 when the text is flagged.
    """
    _report(_moderator(lexicon_path).moderate_text(text), as_json)


@main.command(name="check-post")
@click.argument("post_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--lexicon", "-l", "lexicon_path", default=None, help="YAML lexicon file to use")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def check_post(post_path: str, lexicon_path: str | None, as_json: bool):
    """Moderate every text field of a post stored as YAML or JSON.

    POST_PATH holds a mapping of field name to text or list of text, e.g.
    ``myWord: ...`` and ``prayerPoints: [...]``.
    """
    from postguard.moderation.models import InvalidFieldValueError

    try:
        with open(post_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        err_console.print(f"  [red]Failed to parse:[/] {e}")
        raise SystemExit(EXIT_BAD_INPUT)

    if not isinstance(data, dict):
        err_console.print("  [red]Post file must contain a mapping of field names to text[/]")
        raise SystemExit(EXIT_BAD_INPUT)

    moderator = _moderator(lexicon_path)
    try:
        result = moderator.evaluate_record(data)
    except InvalidFieldValueError as e:
        err_console.print(f"  [red]Invalid post:[/] {e}")
        raise SystemExit(EXIT_BAD_INPUT)

    if not as_json:
        console.print(f"\n[bold blue]postguard[/] — Checked {len(data)} field(s) in {post_path}\n")
    _report(result, as_json)


# ── Lexicon ──────────────────────────────────────────────────────────


@main.group()
def lexicon():
    """Inspect and validate moderation word lists."""


@lexicon.command()
@click.option(
    "--category",
    "-c",
    default=None,
    type=click.Choice([c.value for c in Category]),
    help="Only show one category",
)
def show(category: str | None):
    """List the active lexicon."""
    active = _lexicon()
    categories = [Category(category)] if category else active.categories()

    table = Table(title=f"Lexicon ({active.total_terms} terms)")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Terms")

    for c in categories:
        terms = active.terms(c)
        table.add_row(c.value, str(len(terms)), ", ".join(terms))

    console.print(table)


@lexicon.command()
@click.argument("lexicon_path")
def validate(lexicon_path: str):
    """Validate a YAML lexicon file."""
    from postguard.moderation.lexicon import validate_lexicon_file

    console.print(f"\n[bold blue]postguard[/] — Validating: {lexicon_path}\n")

    issues = validate_lexicon_file(lexicon_path)
    if issues:
        console.print("[red]Lexicon validation FAILED:[/]")
        for issue in issues:
            console.print(f"  [red]x[/] {issue}")
        raise SystemExit(EXIT_BAD_INPUT)

    console.print("[green]Valid![/]")


@lexicon.command()
def dump():
    """Print the built-in lexicon as YAML (a starting point for a custom file)."""
    from postguard.moderation.lexicon import DEFAULT_LEXICON, lexicon_to_dict

    click.echo(yaml.safe_dump(lexicon_to_dict(DEFAULT_LEXICON), sort_keys=False))


if __name__ == "__main__":
    main()
