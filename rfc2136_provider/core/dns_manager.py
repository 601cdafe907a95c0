"""
DNS Manager - run record operations against a zone and report the outcome

This module drives the configured DNS provider for the command line: it
lists zones, applies append/set/delete batches, and renders the result with
rich.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

import yaml
from rich.console import Console
from rich.table import Table

from ..exceptions import RFC2136Error
from ..providers.dns_client import DNSClient
from .record import Record, UpdateMode

console = Console()
logger = logging.getLogger(__name__)


class DNSManager:
    """Main DNS management class that orchestrates provider operations."""

    def __init__(self, config: Dict):
        """Initialize the DNS manager with configuration."""
        self.config = config
        self.dns_client = DNSClient(config)

    def list_records(self, zone: str, timeout: Optional[float] = None) -> bool:
        """Print every record the provider returns for the zone."""
        try:
            records = self.dns_client.get_records(zone, timeout=timeout)
        except RFC2136Error as e:
            console.print(f"[red]Error: {e}[/red]")
            return False

        self._display_records(f"Records in {zone}", records)
        console.print(f"[blue]Found {len(records)} records[/blue]")
        return True

    def apply_records(
        self,
        mode: UpdateMode,
        zone: str,
        records: List[Record],
        dry_run: bool = False,
        timeout: Optional[float] = None,
        output_file: Optional[str] = None,
    ) -> bool:
        """
        Apply a batch of records to a zone.

        Args:
            mode: Append, set or delete
            zone: Zone to update
            records: Records to apply, one transaction each
            dry_run: Only show what would be sent
            timeout: Deadline in seconds for the whole batch
            output_file: File to save the dry run records to (dry run only)

        Returns:
            True if every record was applied (or on a dry run), False otherwise
        """
        if not records:
            console.print("[red]No valid records to apply[/red]")
            return False

        self._display_records(f"Records to {mode.value} in {zone}", records)

        if dry_run:
            console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")
            if output_file:
                self._save_dry_run_output(mode, zone, records, output_file)
            return True

        operations = {
            UpdateMode.APPEND: self.dns_client.append_records,
            UpdateMode.SET: self.dns_client.set_records,
            UpdateMode.DELETE: self.dns_client.delete_records,
        }

        try:
            applied = operations[mode](zone, records, timeout=timeout)
        except RFC2136Error as e:
            logger.error(f"Stopped after {len(e.applied)} of {len(records)} records: {e}")
            console.print(f"[red]Error: {e}[/red]")
            console.print(
                f"[blue]Successfully applied {len(e.applied)}/{len(records)} records[/blue]"
            )
            return False

        console.print(
            f"[green]Successfully applied {len(applied)}/{len(records)} records[/green]"
        )
        return True

    def _display_records(self, title: str, records: List[Record]):
        """Render records as a table."""
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("TTL", justify="right")
        table.add_column("Value", style="white")

        for record in records:
            table.add_row(record.name, record.type, str(record.ttl_seconds), record.value)

        console.print(table)

    def _save_dry_run_output(
        self, mode: UpdateMode, zone: str, records: List[Record], output_file: str
    ):
        """Save the records a dry run would apply as YAML."""
        summary = {
            "mode": mode.value,
            "zone": zone,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "records": [record.to_dict() for record in records],
        }
        try:
            with open(output_file, "w") as f:
                yaml.safe_dump(summary, f, sort_keys=False)
            logger.info(f"Dry run output saved to: {output_file}")
            console.print(f"[green]Dry run output saved to: {output_file}[/green]")
        except OSError as e:
            logger.error(f"Failed to save dry run output to {output_file}: {e}")
            console.print(
                f"[red]Warning: Failed to save dry run output to {output_file}: {e}[/red]"
            )
