# client/cli.py
"""CLI for the Text-to-Pay merchant client.

Sends invoices, follows live payment updates and manages the local cache.
"""

import json
from pathlib import Path
from typing import Optional

import requests
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from database import check_connection
from logging_config import setup_logging

from .api import ApiError, TextToPayApi
from .display import format_amount, time_ago
from .invoice_flow import InvoiceFlow
from .notifier import Notification, Notifier
from .storage import SqlStorage
from .store import COMPLETED, ReconciliationStore
from .subscriber import subscribe

app = typer.Typer(
     name="texttopay",
     help="Text-to-Pay merchant client - send invoices and watch them get paid",
     add_completion=False,
)

console = Console()

NOTIFICATION_STYLES = {"success": "green", "error": "red", "warning": "yellow", "info": "cyan"}


def _show_notification(notification: Notification) -> None:
     style = NOTIFICATION_STYLES.get(notification.type, "white")
     console.print(f"[{style}]{notification.message}[/{style}]")


def _celebrate() -> None:
     console.print(Panel("[bold green]Payment completed![/bold green]", border_style="green"))


def _open_store() -> ReconciliationStore:
     notifier = Notifier(on_notify=_show_notification, on_celebrate=_celebrate)
     return ReconciliationStore(SqlStorage(), notifier).load()


def _status_style(status: str) -> str:
     return "green" if status == COMPLETED else "yellow"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
     setup_logging(level="DEBUG" if verbose else "WARNING", fmt="console")


@app.command()
def send(
     title: str = typer.Argument(..., help="Invoice title"),
     amount: str = typer.Argument(..., help="Amount in dollars, e.g. 25.00"),
     name: str = typer.Argument(..., help="Customer name"),
     phone: str = typer.Argument(..., help="Customer phone; US numbers may omit +1"),
) -> None:
     """Send a text-to-pay invoice."""
     store = _open_store()
     with console.status("Sending text-to-pay..."):
          record = InvoiceFlow(TextToPayApi(), store).send_text_to_pay(title, amount, name, phone)
     if record is None:
          raise typer.Exit(code=1)
     console.print(f"Payment [bold]{record.id}[/bold] for {format_amount(record.amount)} is {record.status}")


@app.command()
def watch() -> None:
     """Follow live payment updates until interrupted."""
     store = _open_store()
     subscriber, loop = subscribe(TextToPayApi(), store)
     if not subscriber.start():
          console.print("[red]Could not connect to the payment update channel[/red]")
          raise typer.Exit(code=1)
     console.print("Listening for payment updates, Ctrl+C to stop")
     try:
          loop.run_forever()
     except KeyboardInterrupt:
          loop.stop()
     finally:
          subscriber.stop()
          loop.run_pending()


@app.command()
def payments() -> None:
     """List payments sent from this machine."""
     store = _open_store()
     if not store.payments:
          console.print("No payments yet")
          return

     table = Table(title="Payments")
     table.add_column("ID")
     table.add_column("Customer")
     table.add_column("Invoice")
     table.add_column("Amount", justify="right")
     table.add_column("Status")
     table.add_column("Sent")
     for payment in reversed(store.payments):
          style = _status_style(payment.status)
          table.add_row(
               payment.id,
               payment.customerName,
               payment.invoiceTitle,
               format_amount(payment.amount),
               f"[{style}]{payment.status}[/{style}]",
               time_ago(payment.date),
          )
     console.print(table)


@app.command()
def show(payment_id: str = typer.Argument(..., help="Payment id")) -> None:
     """Show one payment in detail."""
     store = _open_store()
     payment = store.view_payment_details(payment_id)
     if payment is None:
          console.print(f"[red]No payment {payment_id}[/red]")
          raise typer.Exit(code=1)

     body = "\n".join([
          f"Customer:  {payment.customerName} ({payment.customerPhone})",
          f"Invoice:   {payment.invoiceTitle} [{payment.invoiceReference}]",
          f"Amount:    {format_amount(payment.amount)}",
          f"Status:    {payment.status}",
          f"Sent:      {payment.date}",
     ])
     console.print(Panel(body, title=payment.id))


@app.command()
def activity() -> None:
     """Show recent activity."""
     store = _open_store()
     if not store.activities:
          console.print("No recent activity")
          return
     for entry in store.activities:
          style = NOTIFICATION_STYLES.get(entry.type, "white")
          console.print(f"[{style}]{entry.message}[/{style}]  [dim]{time_ago(entry.timestamp)}[/dim]")


@app.command()
def stats() -> None:
     """Payment totals."""
     summary = _open_store().stats()
     table = Table(show_header=False)
     table.add_row("Total payments", str(summary["total"]))
     table.add_row("Completed", str(summary["completed"]))
     table.add_row("Pending", str(summary["pending"]))
     table.add_row("Total amount", f"${summary['totalAmount']:,.2f}")
     console.print(table)


@app.command()
def clear(yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation")) -> None:
     """Delete all cached customers, payments and activity."""
     if not yes and not typer.confirm("Are you sure you want to clear all data? This cannot be undone."):
          raise typer.Abort()
     _open_store().clear_all()


@app.command()
def export(output: Optional[Path] = typer.Option(None, "--output", "-o", help="Target file")) -> None:
     """Export cached data as JSON."""
     store = _open_store()
     path = output or Path(store.export_filename())
     path.write_text(json.dumps(store.export_data(), indent=2))
     console.print(f"Wrote {path}")


@app.command()
def health() -> None:
     """Check the service and the local storage."""
     store = _open_store()
     try:
          status = TextToPayApi().health()
     except (ApiError, requests.RequestException) as e:
          console.print(f"[red]Service unhealthy: {e}[/red]")
          raise typer.Exit(code=1)

     table = Table(show_header=False)
     table.add_row("Service", status.get("status", "unknown"))
     for flag, present in status.get("environment", {}).items():
          table.add_row(flag, "yes" if present else "no")
     table.add_row("Local storage", "ok" if check_connection(store.storage.engine) else "unavailable")
     console.print(table)


if __name__ == "__main__":
     app()
