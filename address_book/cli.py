from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import ConfigError, Settings, load_settings, parse_log_level
from .errors import AddressBookError
from .models import HEADER, Contact, EditTarget
from .session import Session

# ────────────────────────────────────────────────────────────────────────────
# Rich console
# ────────────────────────────────────────────────────────────────────────────
console = Console()
logger = logging.getLogger(__name__)

MENU_DESC = {
    "1": "Add contact",
    "2": "Delete contact",
    "3": "Modify contact",
    "4": "Find contacts",
    "5": "Show all contacts",
    "6": "Save to file",
    "7": "Load from file",
    "8": "Exit",
}

EDIT_DESC = {
    EditTarget.NAME: "Name",
    EditTarget.GENDER: "Gender",
    EditTarget.PHONE: "Phone",
    EditTarget.CLASS: "Class",
    EditTarget.NOTE: "Note",
    EditTarget.ALL: "All fields",
    EditTarget.CANCEL: "Cancel",
}

FIELD_PROMPT = "Field to search by (Name/Gender/Phone/Class): "


# ────────────────────────────────────────────────────────────────────────────
# Utility helpers
# ────────────────────────────────────────────────────────────────────────────
def ok(msg): return f"[green]✔ {msg}[/]"


def prompt_field(prompt: str, allow_blank=True, default: str = "") -> str:
    while True:
        raw = console.input(prompt).strip()
        if not raw and default:
            return default
        if raw or allow_blank:
            return raw
        console.print("[red]Value cannot be empty.[/]")


def prompt_contact() -> Contact:
    return Contact(
        name=prompt_field("Name: ", allow_blank=False),
        gender=prompt_field("Gender: "),
        phone=prompt_field("Phone: "),
        class_name=prompt_field("Class: "),
        note=prompt_field("Note: "),
    )


def show_records(recs: List[Contact], numbered=False):
    table = Table(header_style="bold blue", expand=False)
    if numbered:
        table.add_column("#", justify="right", style="bold cyan", no_wrap=True)
    for title in HEADER:
        table.add_column(title, style="white")
    for i, rec in enumerate(recs):
        cells = [escape(v) if v else "—" for v in rec.as_row()]
        table.add_row(*([str(i)] if numbered else []), *cells)
    console.print(table)


def menu_msg():
    table = Table(title="\n📘 Address book", header_style="bold blue", style="bold bright_cyan")
    table.add_column("Option", justify="center", style="bold deep_sky_blue1", no_wrap=True)
    table.add_column("Action", style="white")
    for key, desc in MENU_DESC.items():
        table.add_row(f"[green]{key}[/green]", desc)
    console.print(table)


def ask_filename(session: Session) -> str:
    default = session.filename or session.settings.default_file
    return prompt_field(f"File name {escape(f'[{default}]')}: ", default=default)


def choose_candidate(candidates: List[Contact]) -> int:
    console.print("[yellow]Multiple matches found:[/]")
    show_records(candidates, numbered=True)
    idx = console.input("Select number >>> ").strip()
    return int(idx) if idx.isdigit() else -1


def ask_edit(contact: Contact):
    console.print(f"Editing [b]{escape(contact.name)}[/b]. What do you want to change?")
    for target, desc in EDIT_DESC.items():
        console.print(f"  [cyan]{target.value}[/] {desc}")
    target = EditTarget.from_choice(console.input("Choice >>> ").strip())
    if target is EditTarget.CANCEL:
        return target, None
    if target is EditTarget.ALL:
        return target, prompt_contact()
    allow_blank = target is not EditTarget.NAME
    return target, prompt_field(f"New {EDIT_DESC[target].lower()}: ", allow_blank=allow_blank)


def input_error(fn):
    def wrap(session):
        try:
            return fn(session)
        except AddressBookError as e:
            return f"[red]{escape(str(e))}[/]"

    return wrap


# ────────────────────────────────────────────────────────────────────────────
# Handlers
# ────────────────────────────────────────────────────────────────────────────
@input_error
def handle_add(session: Session):
    session.add(prompt_contact())
    return ok("Contact added.")


@input_error
def handle_delete(session: Session):
    field = prompt_field(FIELD_PROMPT, allow_blank=False)
    value = prompt_field("Value: ")
    removed = session.delete(field, value, choose_candidate)
    return ok(f"Contact {escape(removed.name)} deleted.")


@input_error
def handle_modify(session: Session):
    field = prompt_field(FIELD_PROMPT, allow_blank=False)
    value = prompt_field("Value: ")
    target = session.modify(field, value, ask_edit, choose_candidate)
    if target is EditTarget.CANCEL:
        return "[dim]Nothing changed.[/]"
    return ok("Contact modified.")


@input_error
def handle_find(session: Session):
    field = prompt_field(FIELD_PROMPT, allow_blank=False)
    value = prompt_field("Value: ")
    hits = session.store.find_all(field, value)
    if not hits:
        return f"[red]Contact not found: {escape(value)}[/]"
    show_records(hits)
    return ""


@input_error
def handle_show(session: Session):
    show_records(session.store.all())
    return ""


@input_error
def handle_save(session: Session):
    name = ask_filename(session)
    path = session.save(name)
    return ok(f"Saved {len(session.store)} contacts to {path}.")


@input_error
def handle_load(session: Session):
    name = ask_filename(session)
    warnings = session.load(name)
    for w in warnings:
        console.print(f"[yellow]Skipped {escape(str(w))}[/]")
    return ok(f"Loaded {len(session.store)} contacts.")


@input_error
def handle_exit(session: Session):
    if session.dirty and len(session.store):
        if console.input("Save changes before exit? (y/n): ").lower().startswith("y"):
            console.print(ok(f"Saved to {session.save(ask_filename(session))}."))
    session.close()
    return ok("Bye!")


HANDLERS = {
    "1": handle_add,
    "2": handle_delete,
    "3": handle_modify,
    "4": handle_find,
    "5": handle_show,
    "6": handle_save,
    "7": handle_load,
    "8": handle_exit,
}


def dispatch(session: Session, choice: str) -> str:
    handler = HANDLERS.get(choice.strip())
    if handler is None:
        return "[red]Invalid choice.[/]"
    return handler(session)


# ────────────────────────────────────────────────────────────────────────────
# Main loop
# ────────────────────────────────────────────────────────────────────────────
def configure_logging(level: str):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="address-book",
        description="Console address book with CSV save/load.",
    )
    parser.add_argument("--load", metavar="FILE", help="Load contacts from FILE before the menu starts.")
    parser.add_argument("--log-level", help="Logging level (overrides ADDRESS_BOOK_LOG_LEVEL).")
    return parser


def run(session: Session):
    menu_msg()
    while not session.closed:
        try:
            choice = console.input("\n[bold]Choose an option >>> [/]")
            res = dispatch(session, choice)
            if res:
                console.print(res)
        except (KeyboardInterrupt, EOFError):
            console.print("\nInterrupted. Bye!")
            session.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings: Settings = load_settings()
        if args.log_level:
            settings.log_level = parse_log_level(args.log_level)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1

    configure_logging(settings.log_level)
    logger.debug("Settings: %s", settings)
    session = Session(settings)
    console.print("\nWelcome to the [bold yellow]address book[/] 📇\n")

    if args.load:
        try:
            for w in session.load(args.load):
                console.print(f"[yellow]Skipped {escape(str(w))}[/]")
            console.print(ok(f"Loaded {len(session.store)} contacts."))
        except AddressBookError as e:
            console.print(f"[red]{escape(str(e))}[/]")

    run(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
