"""Command-line interface for StoryVerse."""

import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from storyverse import __version__
from storyverse.errors import StyleError

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    sys.exit(1)


@contextmanager
def _open_tools() -> Iterator:
    """Build the configured store and the tools on top of it."""
    from storyverse.config import get_settings
    from storyverse.store import build_store
    from storyverse.tools import StyleService, StyleTools

    settings = get_settings()
    try:
        store = build_store(settings)
    except StyleError as e:
        _fail(str(e))

    try:
        yield StyleTools(StyleService(store, settings=settings))
    finally:
        store.close()


def _call(tools, name: str, arguments: dict):
    response = tools.call_tool(name, arguments)
    if response.is_error:
        _fail(response.text.removeprefix("Error: "))
    return response


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show store activity")
def main(verbose: bool) -> None:
    """StoryVerse - Analyze writing samples and write in their style."""
    from storyverse.config import get_settings

    logging.basicConfig(
        level=logging.INFO if verbose else get_settings().log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@main.command()
def status() -> None:
    """Check configuration and store reachability."""
    from storyverse.config import get_settings

    settings = get_settings()
    console.print("[bold]StoryVerse Status[/bold]\n")
    console.print(f"Store backend: {settings.store_backend}")

    if settings.store_backend == "neo4j":
        from storyverse.store.connection import check_neo4j_connection

        console.print(f"Neo4j URI: {settings.neo4j_uri}")
        try:
            reachable = check_neo4j_connection(settings)
        except StyleError:
            reachable = False
        if reachable:
            console.print("[green]OK[/green] Neo4j connected")
        else:
            console.print("[red]X[/red] Neo4j not reachable")
    elif settings.store_backend == "json":
        path = settings.store_path
        state = "exists" if path.exists() else "will be created"
        console.print(f"Store file: {path} ({state})")
    else:
        console.print("[yellow]Memory store: nothing is kept between runs[/yellow]")


# ============================================================================
# Analysis
# ============================================================================

@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option("--text", "-x", help="Analyze this text instead of a file")
@click.option("--title", "-t", help="Sample title (taken from the file or EPUB metadata if not provided)")
@click.option("--author", "-a", help="Author of the sample")
@click.option("--type", "sample_type", help="Type of writing (novel, screenplay, ...)")
@click.option("--tag", "tags", multiple=True, help="Tag for the sample (repeatable)")
@click.option("--project", help="Project ID")
@click.option("--sample-id", help="Re-analyze an existing sample")
@click.option("--no-save", is_flag=True, help="Analyze without storing a sample")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
def analyze(
    path: str | None,
    text: str | None,
    title: str | None,
    author: str | None,
    sample_type: str | None,
    tags: tuple[str, ...],
    project: str | None,
    sample_id: str | None,
    no_save: bool,
    as_json: bool,
) -> None:
    """Analyze a writing sample (.txt, .md or .epub file, or --text).

    Example:
        storyverse analyze chapter1.txt -t "Chapter 1" -a "Jane Doe"
    """
    from storyverse.ingest import load_sample

    if path:
        try:
            loaded = load_sample(Path(path))
        except StyleError as e:
            _fail(str(e))
        text = loaded.text
        title = title or loaded.title
    elif not text:
        _fail("Provide a file path or --text")

    arguments = {
        "text": text,
        "saveSample": not no_save,
        "title": title,
        "author": author,
        "sampleType": sample_type,
        "tags": list(tags),
        "projectId": project,
        "sampleId": sample_id,
    }

    with _open_tools() as tools:
        response = _call(tools, "analyze_writing_sample", arguments)

    result = response.json
    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    if result["sample_id"]:
        console.print(f"[green]OK[/green] Sample ID: {result['sample_id']}\n")

    metrics = result["metrics"]
    sentence = metrics["sentence_metrics"]
    narrative = metrics["narrative_characteristics"]
    tone = metrics["tone_attributes"]

    table = Table(title="Style Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Avg sentence length", f"{sentence['avg_length']:.1f} words")
    table.add_row("Complexity", f"{sentence['complexity_score']:.2f}")
    table.add_row("Questions per sentence", f"{sentence['question_frequency']:.2f}")
    table.add_row("Fragments", f"{sentence['fragment_frequency'] * 100:.0f}%")
    table.add_row("Lexical diversity", f"{metrics['vocabulary_metrics']['lexical_diversity']:.2f}")
    table.add_row("Point of view", narrative["pov"])
    table.add_row("Tense", narrative["tense"])
    table.add_row("Emotional tone", ", ".join(tone["emotional_tone"]))
    table.add_row("Formality", tone["formality_level"])
    console.print(table)

    console.print(f"\n{result['summary']}", highlight=False)


# ============================================================================
# Profiles
# ============================================================================

@main.group()
def profile() -> None:
    """Style profile commands."""
    pass


@profile.command(name="create")
@click.argument("name")
@click.option("--sample", "-s", "sample_ids", multiple=True, required=True, help="Sample ID (repeatable)")
@click.option("--description", "-d", help="Profile description")
@click.option("--genre", "-g", "genres", multiple=True, help="Genre (repeatable)")
@click.option("--author", "-a", "authors", multiple=True, help="Comparable author (repeatable)")
@click.option("--comments", "-c", help="Additional notes for writers")
@click.option("--project", help="Project ID")
@click.option("--profile-id", help="Update this existing profile")
@click.option("--add", "add_to_existing", is_flag=True, help="Add samples to the profile instead of replacing them")
@click.option(
    "--example-file", "example_files", multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Representative passage file (repeatable)",
)
def profile_create(
    name: str,
    sample_ids: tuple[str, ...],
    description: str | None,
    genres: tuple[str, ...],
    authors: tuple[str, ...],
    comments: str | None,
    project: str | None,
    profile_id: str | None,
    add_to_existing: bool,
    example_files: tuple[str, ...],
) -> None:
    """Create or update a style profile from analyzed samples.

    Example:
        storyverse profile create "Noir" -s <sample-id> -s <sample-id> -a "Raymond Chandler"
    """
    from storyverse.ingest import load_sample

    representatives = []
    for example in example_files:
        try:
            loaded = load_sample(Path(example))
        except StyleError as e:
            _fail(str(e))
        representatives.append({"textContent": loaded.text, "description": loaded.title})

    arguments = {
        "name": name,
        "sampleIds": list(sample_ids),
        "description": description,
        "genre": list(genres),
        "comparableAuthors": list(authors),
        "userComments": comments,
        "projectId": project,
        "profileId": profile_id,
        "addToExisting": add_to_existing,
        "representativeSamples": representatives,
    }

    with _open_tools() as tools:
        response = _call(tools, "create_style_profile", arguments)

    summary = response.json
    console.print(f"[green]OK[/green] {response.text}", highlight=False)
    console.print(f"Profile ID: {summary['id']}")


@profile.command(name="show")
@click.argument("profile_id")
@click.option("--examples", "-e", is_flag=True, help="Include example passages")
@click.option("--no-notes", is_flag=True, help="Omit style guidance")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
def profile_show(profile_id: str, examples: bool, no_notes: bool, as_json: bool) -> None:
    """Show a style profile with its writing guidance."""
    arguments = {
        "profileId": profile_id,
        "includeExamples": examples,
        "includeStyleNotes": not no_notes,
    }

    with _open_tools() as tools:
        response = _call(tools, "get_style_profile", arguments)

    if as_json:
        click.echo(json.dumps(response.json, indent=2))
    else:
        click.echo(response.text)


@main.command()
@click.argument("profile_id")
@click.argument("prompt")
@click.option("--length", "-l", type=click.IntRange(min=1), help="Approximate target word count")
@click.option("--no-notes", is_flag=True, help="Omit style guidance")
def write(profile_id: str, prompt: str, length: int | None, no_notes: bool) -> None:
    """Build a writing brief for PROMPT in the style of a profile.

    Example:
        storyverse write <profile-id> "A detective returns to her hometown" -l 800
    """
    arguments = {
        "profileId": profile_id,
        "prompt": prompt,
        "length": length,
        "includeStyleNotes": not no_notes,
    }

    with _open_tools() as tools:
        response = _call(tools, "write_in_style", arguments)

    click.echo(response.text)


# ============================================================================
# Tools
# ============================================================================

@main.group()
def tools() -> None:
    """Inspect and invoke the named style tools."""
    pass


@tools.command(name="list")
@click.option("--schema", is_flag=True, help="Print full input schemas as JSON")
def tools_list(schema: bool) -> None:
    """List available tools."""
    with _open_tools() as registry:
        definitions = registry.list_tools()

    if schema:
        click.echo(json.dumps(definitions, indent=2))
        return

    table = Table(title="Style Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Description")
    for definition in definitions:
        table.add_row(definition["name"], definition["description"])
    console.print(table)


@tools.command(name="call")
@click.argument("name")
@click.argument("arguments", default="{}")
def tools_call(name: str, arguments: str) -> None:
    """Call tool NAME with a JSON object of ARGUMENTS and print the response."""
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as e:
        _fail(f"Arguments are not valid JSON: {e}")
    if not isinstance(parsed, dict):
        _fail("Arguments must be a JSON object")

    with _open_tools() as registry:
        response = registry.call_tool(name, parsed)

    click.echo(json.dumps(response.to_dict(), indent=2))
    if response.is_error:
        sys.exit(1)


if __name__ == "__main__":
    main()
