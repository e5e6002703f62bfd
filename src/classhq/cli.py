"""Flask CLI commands for Classroom HQ."""

from __future__ import annotations

from pathlib import Path

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    from .extensions import get_context

    @app.cli.command("classhq-seed")
    @click.option("--demo", is_flag=True, default=False, help="Seed a sample class")
    def classhq_seed(demo: bool) -> None:
        """Seed application data (demo)."""

        if not demo:
            click.echo("No action specified. Use --demo to seed demo data.")
            return

        from .services.seed import run_demo_seed

        summary = run_demo_seed(get_context())
        if summary.students:
            click.echo(f"Seeded {summary.students} students, {summary.expenses} expenses.")
        else:
            click.echo("Roster already present; nothing seeded.")

    @app.cli.command("classhq-summary")
    def classhq_summary() -> None:
        """Print fund totals and the debtor list."""

        from .services import funds

        ctx = get_context()
        summary = funds.load_summary(
            settings_repo=ctx.settings_repo,
            roster_repo=ctx.roster_repo,
            expense_repo=ctx.expense_repo,
            wishlist_repo=ctx.wishlist_repo,
        )
        sym = summary.currency_symbol
        click.echo(f"Income:   {sym}{summary.total_income:,.2f}")
        click.echo(f"Expenses: {sym}{summary.total_expenses:,.2f}")
        click.echo(f"Balance:  {sym}{summary.balance:,.2f}")
        click.echo(f"Wishlist: {sym}{summary.wishlist_total:,.2f}")
        if not summary.debtors:
            click.echo("No outstanding debts.")
            return
        click.echo(f"Debtors ({sym}{summary.total_debt:,.2f} total):")
        for row in summary.debtors:
            click.echo(f"  {row.name}: {sym}{row.debt:,.2f}")

    @app.cli.command("classhq-import-roster")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def classhq_import_roster(path: Path) -> None:
        """Append students from a text file, one per line (optional M/F prefix)."""

        created = get_context().roster_repo.import_from_text(path.read_text(encoding="utf-8"))
        click.echo(f"Imported {created} students.")

    @app.cli.command("classhq-import-roster-image")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def classhq_import_roster_image(path: Path) -> None:
        """Append students read from a class-list photo by the configured parser."""

        from .services.roster_import import import_from_image

        ctx = get_context()
        if ctx.roster_parser is None:
            raise click.ClickException("Set CLASSHQ_ROSTER_PARSER to enable image import.")
        created = import_from_image(ctx.roster_parser, ctx.roster_repo, path.read_bytes())
        click.echo(f"Imported {created} students.")

    @app.cli.command("classhq-export-ledger")
    @click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
    def classhq_export_ledger(path: Path) -> None:
        """Write the student x date payment grid to a CSV file."""

        from .services.export_csv import export_ledger_csv

        ctx = get_context()
        written = export_ledger_csv(
            students=ctx.roster_repo.list_students(),
            settings=ctx.settings_repo.get_settings(),
            output_path=path,
        )
        click.echo(f"Ledger written: {written}")
