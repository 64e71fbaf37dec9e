"""Admin commands for init, backup and configuration."""

import logging
import shutil
import sqlite3
import sys
import tomllib
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finsight.config import DEFAULT_CONFIG, create_default_config, get_config_path, load_config, set_setting
from finsight.store.schema import get_db_path, init_database

console = Console()
logger = logging.getLogger(__name__)


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        console.print("[red]Database not found. Run 'finsight init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".finsight" / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"finsight_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        logger.debug("Copying %s to %s", db_path, db_backup)
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Initialize finsight database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'finsight init --force' to overwrite[/yellow]")
            sys.exit(1)

        if force and db_exists:
            logger.debug("Removing existing database %s", db_path)
            db_path.unlink()

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def config_show_command() -> None:
    """Show current settings."""
    try:
        config = load_config()
        logger.debug("Loaded config: %s", config)
    except (OSError, tomllib.TOMLDecodeError) as e:
        console.print(f"[red]Could not read config: {e}[/red]", style="bold")
        sys.exit(1)

    table = Table(title=str(get_config_path()))
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key in DEFAULT_CONFIG:
        table.add_row(key, escape(str(config[key])))
    console.print(table)


def config_set_command(key: str, value: str) -> None:
    """Change a setting."""
    if key not in DEFAULT_CONFIG:
        console.print(f"[red]Unknown setting '{escape(key)}'. Use one of: {', '.join(DEFAULT_CONFIG)}[/red]")
        sys.exit(1)

    typed_value: str | int = value
    if isinstance(DEFAULT_CONFIG[key], int):
        try:
            typed_value = int(value)
        except ValueError:
            console.print(f"[red]'{key}' must be a whole number[/red]")
            sys.exit(1)

    try:
        set_setting(key, typed_value)
        console.print(f"[green]✓[/green] {key} = {escape(str(typed_value))}")
    except (OSError, tomllib.TOMLDecodeError) as e:
        console.print(f"[red]Could not write config: {e}[/red]", style="bold")
        sys.exit(1)
