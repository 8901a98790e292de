"""Interactive packing shell.

The shell mirrors the original project window in a terminal: a numbered list
of source files, a navigator with one checkbox per class and per method, a
syntax-highlighted view of the current file, and the stage / save / copy
actions. Commands are read with `click.prompt` and output goes through a
`rich` console.
"""

import shlex
from dataclasses import dataclass

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from capsule_packer.core import ProjectSession
from capsule_packer.parsing import NodeKind

HELP_TEXT = """\
Commands:
  files                 list source files
  open <n|name>         open a file (resets hidden items)
  outline               show the class/method navigator
  toggle <n>...         flip navigator checkboxes
  hide <n>...           uncheck navigator entries
  unhide <n>...         check navigator entries
  view                  show the current file
  stage                 add the current file to the bundle
  staged                list staged files
  save                  write the bundle into the project folder
  copy                  copy the bundle to the clipboard
  help                  show this help
  quit                  leave the shell"""


@dataclass
class NavigatorEntry:
    """One checkbox of the navigator."""

    kind: NodeKind
    name: str
    label: str


class IdeShell:
    """Read-eval loop over a `ProjectSession`.

    Attributes:
        session (ProjectSession): Session the commands act on.
        console (Console): Output console.
        files (list[str]): File names as last listed.
        entries (list[NavigatorEntry]): Navigator of the current file.
    """

    def __init__(self, session: ProjectSession, console: Console | None = None):
        self.session = session
        self.console = console or Console()
        self.files: list[str] = []
        self.entries: list[NavigatorEntry] = []
        self._commands = {
            "files": self.cmd_files,
            "ls": self.cmd_files,
            "open": self.cmd_open,
            "outline": self.cmd_outline,
            "nav": self.cmd_outline,
            "toggle": self.cmd_toggle,
            "hide": self.cmd_hide,
            "unhide": self.cmd_unhide,
            "view": self.cmd_view,
            "stage": self.cmd_stage,
            "staged": self.cmd_staged,
            "save": self.cmd_save,
            "copy": self.cmd_copy,
            "help": self.cmd_help,
        }

    def run(self) -> None:
        """Run the loop until `quit` or end of input."""
        self.console.print(f"[bold]Capsule Packer IDE[/bold]  {escape(self.session.short_path)}")
        self.console.print("Type [bold]help[/bold] for commands.")
        self.cmd_files([])
        while True:
            try:
                line = click.prompt("capsule", prompt_suffix="> ", default="", show_default=False)
            except click.Abort:
                self.console.print()
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Execute one command line.

        Args:
            line (str): Raw input.

        Returns:
            bool: False when the shell should exit.
        """
        try:
            words = shlex.split(line)
        except ValueError as e:
            self._warn(str(e))
            return True
        if not words:
            return True
        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit", "q"):
            return False
        handler = self._commands.get(command)
        if handler is None:
            self._warn(f"Unknown command '{command}'. Type help for a list.")
            return True
        try:
            handler(args)
        except Exception as e:
            self._warn(f"{command} failed: {e}")
        return True

    def cmd_help(self, args: list[str]) -> None:
        self.console.print(HELP_TEXT, markup=False, highlight=False)

    def cmd_files(self, args: list[str]) -> None:
        self.files = self.session.list_files()
        if not self.files:
            self._warn("No source files in this folder.")
            return
        for index, name in enumerate(self.files, start=1):
            marker = "*" if name == self.session.current_file else " "
            self.console.print(f"{marker}{index:>3}. {escape(name)}")

    def cmd_open(self, args: list[str]) -> None:
        if not args:
            self._warn("Usage: open <n|name>")
            return
        if not self.files:
            self.files = self.session.list_files()
        name = self._resolve(args[0], self.files, "file")
        if name is None:
            return
        self.session.open_file(name)
        self.console.print(f"[bold]{escape(self.session.short_path)}[/bold]")
        self.cmd_outline([])

    def cmd_outline(self, args: list[str]) -> None:
        outline = self.session.outline()
        if outline is None:
            self._warn("No file is open.")
            return
        self.entries = []
        for cls in outline.classes:
            self.entries.append(NavigatorEntry(NodeKind.CLASS, cls.name, cls.label))
            for method in cls.methods:
                self.entries.append(NavigatorEntry(NodeKind.METHOD, method.name, method.label))

        self.console.print("[bold]File structure[/bold]")
        if not self.entries:
            self.console.print("  (no classes)")
        for index, entry in enumerate(self.entries, start=1):
            box = "[ ]" if self._is_hidden(entry) else "[x]"
            if entry.kind is NodeKind.CLASS:
                self.console.print(f"{index:>3}. {escape(box)} [bold]{escape(entry.label)}[/bold]")
            else:
                self.console.print(f"{index:>3}.     {escape(box)} {escape(entry.label)}")

    def cmd_toggle(self, args: list[str]) -> None:
        self._set_entries(args, None)

    def cmd_hide(self, args: list[str]) -> None:
        self._set_entries(args, True)

    def cmd_unhide(self, args: list[str]) -> None:
        self._set_entries(args, False)

    def cmd_view(self, args: list[str]) -> None:
        if self.session.current_file is None:
            self._warn("No file is open.")
            return
        self.console.print(
            Syntax(self.session.displayed_text, "csharp", theme="monokai", line_numbers=True)
        )

    def cmd_stage(self, args: list[str]) -> None:
        if not self.session.stage():
            self._warn("Open a non-empty file before staging.")
            return
        self._status(f"Files in bundle: {len(self.session.staged)}")

    def cmd_staged(self, args: list[str]) -> None:
        if not self.session.staged:
            self.console.print("Bundle is empty.")
            return
        for index, name in enumerate(self.session.staged, start=1):
            self.console.print(f"{index:>3}. {escape(name)}")

    def cmd_save(self, args: list[str]) -> None:
        path = self.session.save()
        if path is not None:
            self._status(f"Saved to {escape(str(path))}")

    def cmd_copy(self, args: list[str]) -> None:
        if self.session.copy():
            self._status("Copied to clipboard")

    def _set_entries(self, args: list[str], hidden: bool | None) -> None:
        if not self.entries:
            self._warn("No navigator entries. Open a file first.")
            return
        if not args:
            self._warn("Give one or more navigator numbers.")
            return
        for arg in args:
            entry = self._resolve_entry(arg)
            if entry is None:
                continue
            value = not self._is_hidden(entry) if hidden is None else hidden
            if entry.kind is NodeKind.CLASS:
                self.session.set_class_hidden(entry.name, value)
            else:
                self.session.set_method_hidden(entry.name, value)
        self.cmd_outline([])

    def _is_hidden(self, entry: NavigatorEntry) -> bool:
        if entry.kind is NodeKind.CLASS:
            return entry.name in self.session.hidden.classes
        return entry.name in self.session.hidden.methods

    def _resolve_entry(self, arg: str) -> NavigatorEntry | None:
        if not arg.isdigit() or not 1 <= int(arg) <= len(self.entries):
            self._warn(f"No navigator entry {arg!r}.")
            return None
        return self.entries[int(arg) - 1]

    def _resolve(self, arg: str, names: list[str], what: str) -> str | None:
        if arg.isdigit():
            index = int(arg)
            if 1 <= index <= len(names):
                return names[index - 1]
        elif arg in names:
            return arg
        self._warn(f"No {what} {arg!r}.")
        return None

    def _status(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def _warn(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")
