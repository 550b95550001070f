"""Command-line interface for the lab inventory.

Built with Typer for commands and Rich for output. Every command loads the
store from the database, and mutating commands save it back when they
succeed.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import get_config
from .db import get_db
from .errors import ArchiveError
from .logging_config import configure_logging
from .store import (
    EntityStore,
    InventoryRepository,
    ItemCreate,
    ItemUpdate,
    LendingDesk,
    OperationResult,
    StudentCreate,
    StudentUpdate,
)

# Create the main app
app = typer.Typer(
    name="mathlab",
    help="Track lab items lent out to students.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
student_app = typer.Typer(help="Manage the student roster.")
app.add_typer(student_app, name="student")

item_app = typer.Typer(help="Manage the item catalog.")
app.add_typer(item_app, name="item")

import_app = typer.Typer(help="Import students and items from CSV files.")
app.add_typer(import_app, name="import")

# Rich console for pretty output
console = Console()


@app.callback()
def main_callback() -> None:
    """Track lab items lent out to students."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)
    configure_logging(config.log_level)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def load_store() -> tuple[InventoryRepository, EntityStore]:
    """Load the store from the configured database."""
    repo = InventoryRepository(get_db())
    return repo, repo.load()


def check(result: OperationResult) -> OperationResult:
    """Exit with an error if an operation failed, else print its warnings."""
    if not result.success:
        print_error(result.message or "Operation failed")
        raise typer.Exit(1)
    for warning in result.warnings:
        print_warning(warning)
    return result


def format_student_table(students: list, store: EntityStore, title: str = "Students") -> Table:
    """Create a rich table for displaying students."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan", max_width=30)
    table.add_column("NetID", style="green")
    table.add_column("Phone")
    table.add_column("Items", justify="center")

    for student in students:
        held = len(store.relationships.items_held_by(student.net_id))
        table.add_row(student.name, student.net_id, student.phone, str(held))

    return table


def format_item_table(items: list, store: EntityStore, title: str = "Items") -> Table:
    """Create a rich table for displaying items."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan", max_width=30)
    table.add_column("Number", style="green")
    table.add_column("Status")

    for item in items:
        if item.is_available:
            status = "[green]Available[/green]"
        elif store.find_student(item.checked_out_to) is None:
            status = f"[red]Checked out[/red] to {item.checked_out_to} [dim](not on roster)[/dim]"
        else:
            status = f"[red]Checked out[/red] to {item.checked_out_to}"
        table.add_row(item.name, item.number, status)

    return table


# ============================================================================
# Student Commands
# ============================================================================


@student_app.command("add")
def student_add(
    name: str = typer.Argument(..., help="Student name"),
    net_id: str = typer.Argument(..., help="Unique NetID"),
    phone: str = typer.Option("", "--phone", "-p", help="Phone number"),
) -> None:
    """Add a student to the roster."""
    repo, store = load_store()
    result = check(store.add_student(StudentCreate(name=name, net_id=net_id, phone=phone)))
    repo.save(store)
    print_success(f"Added: {result.value.name} ({result.value.net_id})")


@student_app.command("list")
def student_list(
    search: str = typer.Option("", "--search", "-s", help="Filter by name, NetID or phone"),
) -> None:
    """List students, newest first."""
    _, store = load_store()
    students = store.list_students(search)
    if not students:
        console.print("[dim]No students found.[/dim]")
        return
    console.print(format_student_table(students, store))


@student_app.command("show")
def student_show(
    net_id: str = typer.Argument(..., help="NetID"),
) -> None:
    """Show a student and the items they hold."""
    _, store = load_store()
    desk = LendingDesk(store)
    student = check(desk.open_student(net_id)).value

    console.print(f"[bold]{student.name}[/bold]")
    console.print(f"NetID: {student.net_id}")
    console.print(f"Phone: {student.phone}")

    held = desk.held_items()
    if not held:
        console.print("[dim]No items checked out.[/dim]")
        return
    console.print(format_item_table(held, store, title="Checked Out"))


@student_app.command("edit")
def student_edit(
    net_id: str = typer.Argument(..., help="NetID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    phone: Optional[str] = typer.Option(None, "--phone", "-p", help="New phone"),
) -> None:
    """Edit a student's name or phone."""
    if name is None and phone is None:
        print_error("Nothing to change; pass --name and/or --phone")
        raise typer.Exit(1)
    if any(value is not None and not value.strip() for value in (name, phone)):
        print_error("--name and --phone cannot be blank")
        raise typer.Exit(1)

    repo, store = load_store()
    result = check(store.relationships.edit_student(net_id, StudentUpdate(name=name, phone=phone)))
    repo.save(store)
    print_success(f"Updated: {result.value.name} ({result.value.net_id})")


@student_app.command("delete")
def student_delete(
    net_id: str = typer.Argument(..., help="NetID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a student, returning every item they hold."""
    repo, store = load_store()
    student = store.find_student(net_id)
    if student is None:
        print_error(f"No student with NetID '{net_id}'")
        raise typer.Exit(1)

    if not yes and not typer.confirm(
        f"Delete {student.name}? Their items will be returned.", default=False
    ):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    result = check(LendingDesk(store).delete_student(net_id))
    repo.save(store)
    print_success(f"Deleted: {student.name}. {result.message}")


# ============================================================================
# Item Commands
# ============================================================================


@item_app.command("add")
def item_add(
    name: str = typer.Argument(..., help="Item name"),
    number: str = typer.Argument(..., help="Unique item number"),
    to: Optional[str] = typer.Option(None, "--to", "-t", help="Check out to this NetID right away"),
) -> None:
    """Add an item to the catalog."""
    repo, store = load_store()
    candidate = ItemCreate(name=name, number=number)

    if to:
        desk = LendingDesk(store)
        check(desk.open_student(to))
        result = check(desk.quick_add_item(candidate))
    else:
        result = check(store.add_item(candidate))

    repo.save(store)
    print_success(f'"{result.value.name}" added to inventory')


@item_app.command("list")
def item_list(
    search: str = typer.Option("", "--search", "-s", help="Filter by name or number"),
    available: bool = typer.Option(False, "--available", "-a", help="Only items nobody holds"),
) -> None:
    """List items, newest first."""
    _, store = load_store()
    if available:
        items = store.relationships.available_items(search)
    else:
        items = store.list_items(search)
    if not items:
        console.print("[dim]No items found.[/dim]")
        return
    console.print(format_item_table(items, store))


@item_app.command("show")
def item_show(
    number: str = typer.Argument(..., help="Item number"),
) -> None:
    """Show an item and who holds it."""
    _, store = load_store()
    item = store.find_item(number)
    if item is None:
        print_error(f"No item numbered '{number}'")
        raise typer.Exit(1)

    console.print(f"[bold]{item.name}[/bold]")
    console.print(f"Item #: {item.number}")

    if item.is_available:
        console.print("[green]Status: Available[/green]")
        return

    holder = store.relationships.holder_of(number)
    if holder is None:
        console.print(f"[red]Checked out to:[/red] {item.checked_out_to} (not on roster)")
    else:
        console.print(f"[red]Checked out to:[/red] {holder.name} ({holder.net_id})")


@item_app.command("edit")
def item_edit(
    number: str = typer.Argument(..., help="Item number"),
    name: str = typer.Option(..., "--name", "-n", help="New item name"),
) -> None:
    """Rename an item."""
    if not name.strip():
        print_error("--name cannot be blank")
        raise typer.Exit(1)

    repo, store = load_store()
    result = check(store.relationships.edit_item(number, ItemUpdate(name=name)))
    repo.save(store)
    print_success(f"Updated: {result.value.name} (#{result.value.number})")


@item_app.command("delete")
def item_delete(
    number: str = typer.Argument(..., help="Item number"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete an item."""
    repo, store = load_store()
    item = store.find_item(number)
    if item is None:
        print_error(f"No item numbered '{number}'")
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Delete {item.name}?", default=False):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    check(store.remove_item(number))
    repo.save(store)
    print_success(f"Deleted: {item.name}")


# ============================================================================
# Checkout Commands
# ============================================================================


@app.command()
def checkout(
    item_number: str = typer.Argument(..., help="Item number"),
    net_id: str = typer.Argument(..., help="NetID of the borrower"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--overwrite", help="Refuse items that are already checked out"
    ),
) -> None:
    """Check an item out to a student."""
    if strict is None:
        strict = get_config().strict_checkout

    repo, store = load_store()
    desk = LendingDesk(store, strict_checkout=strict)
    check(desk.open_student(net_id))
    result = check(desk.checkout(item_number))
    repo.save(store)
    print_success(f"{result.value.name} (#{result.value.number}) checked out to {net_id}")


@app.command("return")
def return_cmd(
    item_number: str = typer.Argument(..., help="Item number"),
) -> None:
    """Return an item."""
    repo, store = load_store()
    result = check(store.relationships.return_item(item_number))
    repo.save(store)
    print_success(f"{result.value.name} (#{result.value.number}) returned")


@app.command()
def orphans() -> None:
    """List items checked out to NetIDs that are not on the roster."""
    _, store = load_store()
    items = store.relationships.orphaned_items()
    if not items:
        console.print("[dim]No orphaned checkouts.[/dim]")
        return
    console.print(format_item_table(items, store, title="Orphaned Checkouts"))


# ============================================================================
# Import / Export Commands
# ============================================================================


def _run_import(importer_cls, file: Path, dry_run: bool, label: str) -> None:
    if not file.exists():
        print_error(f"File not found: {file}")
        raise typer.Exit(1)

    repo, store = load_store()
    importer = importer_cls(store)

    if dry_run:
        preview = importer.preview_file(file)
        if "error" in preview:
            print_error(preview["error"])
            raise typer.Exit(1)
        console.print(
            f"Would add {preview['new_records']} new {label}; "
            f"{preview['duplicates']} duplicate(s), {preview['malformed']} malformed row(s)"
        )
        return

    result = importer.import_file(file)
    if not result.success:
        for message in result.error_messages:
            print_error(message)
        raise typer.Exit(1)

    repo.save(store)
    print_success(f"Import complete. Added {result.imported} new {label}.")
    console.print(f"[dim]{result.summary}[/dim]")


@import_app.command("students")
def import_students_cmd(
    file: Path = typer.Argument(..., help="CSV file with Name,NetID,Phone"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Preview without importing"),
) -> None:
    """Import students, skipping NetIDs already on the roster."""
    from .imports import StudentImporter

    _run_import(StudentImporter, file, dry_run, "students")


@import_app.command("items")
def import_items_cmd(
    file: Path = typer.Argument(..., help="CSV file with ItemName,ItemNumber,CheckedOutTo"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Preview without importing"),
) -> None:
    """Import items, skipping numbers already in the catalog."""
    from .imports import ItemImporter

    _run_import(ItemImporter, file, dry_run, "items")


@import_app.command("archive")
def import_archive_cmd(
    file: Path = typer.Argument(..., help="ZIP archive written by 'export'"),
) -> None:
    """Import both files from an export archive."""
    from .export import read_archive
    from .imports import ItemImporter, StudentImporter

    try:
        contents = read_archive(file)
    except ArchiveError as e:
        print_error(str(e))
        raise typer.Exit(1)

    repo, store = load_store()
    students = StudentImporter(store).import_text(contents.students_csv)
    items = ItemImporter(store).import_text(contents.items_csv)
    repo.save(store)
    print_success(
        f"Import complete. Added {students.imported} new students "
        f"and {items.imported} new items."
    )


@app.command()
def export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Archive path or directory"),
) -> None:
    """Export students and items as a ZIP of two CSV files."""
    from .export import ArchiveExporter

    _, store = load_store()
    result = ArchiveExporter(store, archive_name=get_config().export_name).export(output)
    if not result.success:
        print_error(f"Export failed: {result.error}")
        raise typer.Exit(1)

    print_success(
        f"Exported {result.students_exported} students and "
        f"{result.items_exported} items to {result.file_path}"
    )


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__

    console.print(f"mathlab version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


if __name__ == "__main__":
    app()
