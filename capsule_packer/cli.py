"""Command-line interface for capsule-packer.

This module defines the CLI for capsule-packer, which packs selectively
redacted C# sources into one Markdown document for pasting into ChatGPT,
Claude, or similar large language models.

The `ide` command opens an interactive shell that works like the desktop
window: browse files, uncheck classes or methods to hide them, stage the
result and export it. The other commands do the same steps non-interactively
so they can be scripted.
"""

import functools
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from capsule_packer import __version__
from capsule_packer.config import Config
from capsule_packer.core import ProjectSession, Snapshot
from capsule_packer.interactive import IdeShell
from capsule_packer.utils import format_size

console = Console()


def handle_errors(f):
    """Decorator printing unexpected errors and exiting with status 1.

    Args:
        f (function): Command callback.

    Returns:
        function: Wrapped callback.
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except click.ClickException:
            raise
        except Exception as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            sys.exit(1)

    return wrapper


def folder_argument(f):
    """Decorator to add the PATH argument for an existing project folder."""
    return click.argument(
        "path",
        type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
        default=".",
    )(f)


def hide_options(f):
    """Decorator to add the --hide-class and --hide-method options.

    Args:
        f (function): Function to decorate.

    Returns:
        function: Decorated function with the hide options added.
    """
    f = click.option(
        "-m",
        "--hide-method",
        multiple=True,
        help=(
            "Replace the body of every method with this name by a placeholder. "
            "Methods with the same name in other classes are hidden too."
        ),
    )(f)
    f = click.option(
        "-k",
        "--hide-class",
        multiple=True,
        help="Collapse the whole body of the class with this name.",
    )(f)
    return f


def output_option(f):
    """Decorator to add output-related options to a Click command.

    Adds:
        - `-o/--output`: Write the bundle to a file instead of the project folder.
        - `-c/--clipboard`: Copy the bundle to clipboard.
        - `--print`: Print the bundle to stdout.

    Args:
        f (function): Function to decorate.

    Returns:
        function: Decorated function with output options added.
    """
    f = click.option(
        "--print",
        "print_bundle",
        is_flag=True,
        help="Print the bundle to stdout instead of writing a file.",
    )(f)
    f = click.option(
        "-o",
        "--output",
        type=click.Path(dir_okay=False, path_type=Path),
        help=(
            "Write the bundle to this file. "
            "Without it the bundle is saved as AiContextMulti.md inside the project folder."
        ),
    )(f)
    f = click.option(
        "-c",
        "--clipboard",
        is_flag=True,
        help="Copy the bundle directly to clipboard (recommended for LLM workflow).",
    )(f)
    return f


def count_tokens_option(f):
    """Decorator to add the --count-tokens/--no-count-tokens options."""
    return click.option(
        "--count-tokens/--no-count-tokens",
        default=None,
        help=(
            "Count tokens with the tokenizer. "
            "Disable for faster runs; a length-based estimate is shown instead."
        ),
    )(f)


@click.group()
@click.version_option(version=__version__, prog_name="capsule-packer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON configuration file (defaults to ./capsule.json if present).",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None) -> None:
    """Pack selectively redacted C# sources into one Markdown document for an LLM."""
    ctx.obj = Config.from_file(config_path)


@main.command("files")
@folder_argument
@click.pass_obj
@handle_errors
def list_files(config: Config, path: Path) -> None:
    """List the source files of a project folder."""
    session = ProjectSession(path, config)
    names = session.list_files()
    if not names:
        console.print("[yellow]No source files found.[/yellow]")
        return
    table = Table(title=session.short_path)
    table.add_column("#", justify="right")
    table.add_column("File")
    table.add_column("Size", justify="right")
    for index, name in enumerate(names, start=1):
        table.add_row(str(index), escape(name), format_size((path / name).stat().st_size))
    console.print(table)


@main.command()
@folder_argument
@click.argument("file_name")
@click.pass_obj
@handle_errors
def outline(config: Config, path: Path, file_name: str) -> None:
    """Show the classes and methods of FILE_NAME."""
    session = ProjectSession(path, config)
    session.open_file(file_name)
    tree = Tree(f"[bold]{escape(session.short_path)}[/bold]")
    for cls in session.outline().classes:
        branch = tree.add(f"[bold]{escape(cls.label)}[/bold]")
        for method in cls.methods:
            branch.add(escape(method.label))
    console.print(tree)


@main.command()
@folder_argument
@click.argument("file_name")
@hide_options
@click.option("--plain", is_flag=True, help="Print raw text without highlighting.")
@click.pass_obj
@handle_errors
def show(
    config: Config,
    path: Path,
    file_name: str,
    hide_class: tuple[str, ...],
    hide_method: tuple[str, ...],
    plain: bool,
) -> None:
    """Print FILE_NAME with the given classes and methods hidden."""
    session = ProjectSession(path, config)
    session.open_file(file_name)
    text = _apply_hidden(session, hide_class, hide_method)
    if plain:
        click.echo(text)
    else:
        console.print(Syntax(text, "csharp", theme="monokai", line_numbers=True))


@main.command()
@folder_argument
@click.option(
    "-f",
    "--file",
    "file_names",
    multiple=True,
    help="File to stage (repeatable). Defaults to every source file in the folder.",
)
@hide_options
@output_option
@count_tokens_option
@click.pass_obj
@handle_errors
def pack(
    config: Config,
    path: Path,
    file_names: tuple[str, ...],
    hide_class: tuple[str, ...],
    hide_method: tuple[str, ...],
    clipboard: bool,
    output: Path | None,
    print_bundle: bool,
    count_tokens: bool | None,
) -> None:
    """Stage files of PATH with hidden parts removed and export the bundle.

    The same --hide-class/--hide-method names are applied to every staged file.
    """
    config.update({"count_tokens": count_tokens})
    session = ProjectSession(path, config)
    for name in file_names or session.list_files():
        session.open_file(name)
        _apply_hidden(session, hide_class, hide_method)
        session.stage()

    snapshot = session.build_snapshot()
    if snapshot is None:
        console.print("[yellow]Nothing to export.[/yellow]")
        return
    _handle_output(session, snapshot, output, clipboard, print_bundle)


@main.command()
@click.argument("path", type=click.Path(file_okay=False, path_type=Path), default=".")
@count_tokens_option
@click.pass_obj
@handle_errors
def ide(config: Config, path: Path, count_tokens: bool | None) -> None:
    """Browse PATH interactively, hide code and build a bundle."""
    config.update({"count_tokens": count_tokens})
    IdeShell(ProjectSession(path, config), console).run()


def _apply_hidden(
    session: ProjectSession, hide_class: tuple[str, ...], hide_method: tuple[str, ...]
) -> str:
    """Hide the given names in the open file and return the displayed text."""
    for name in hide_class:
        session.set_class_hidden(name, True)
    for name in hide_method:
        session.set_method_hidden(name, True)
    return session.displayed_text


def _handle_output(
    session: ProjectSession,
    snapshot: Snapshot,
    output: Path | None,
    clipboard: bool,
    print_bundle: bool,
) -> None:
    """Send the bundle to clipboard, a file, stdout, or the project folder.

    Args:
        session: Session the bundle was built from.
        snapshot: Built bundle.
        output: Explicit output file, or None.
        clipboard: If true, copy to clipboard instead of writing a file.
        print_bundle: If true, print to stdout instead of writing a file.
    """
    names = ", ".join(snapshot.metadata.get("files", []))
    summary = escape(
        f"{snapshot.metadata.get('project', '')}: {snapshot.file_count} file(s) [{names}], "
        f"~{snapshot.token_count:,} tokens"
    )
    if clipboard:
        if session.copy():
            console.print(f"[green]✓[/green] Bundle copied to clipboard ({summary}).")
        else:
            console.print("[yellow]Warning:[/yellow] Clipboard is not available.")
    elif print_bundle:
        click.echo(snapshot.content, nl=False)
    else:
        written = session.save(output)
        if written is None:
            console.print("[yellow]Nothing was written.[/yellow]")
        else:
            console.print(
                f"[green]✓[/green] Bundle written to [bold]{escape(str(written))}[/bold] ({summary})."
            )


if __name__ == "__main__":
    main()
