"""Command line entry point for NegativeGuard."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from negativeguard import __version__
from negativeguard.analyzers.validation import run_validation_suite
from negativeguard.cli.utils import (
    CLIConfigurationError,
    format_cli_error,
    format_cli_success,
    format_cli_warning,
    get_settings_safely,
    handle_common_cli_errors,
)
from negativeguard.clients.google.client import GoogleAdsAPIClient
from negativeguard.core.config import AuditConfig, DateRange, setup_logging
from negativeguard.data_providers.google_ads import GoogleAdsDataProvider
from negativeguard.reports.csv_export import export_decisions_csv
from negativeguard.runner import RunCoordinator


@click.group()
@click.version_option(version=__version__, prog_name="NegativeGuard")
def cli():
    """NegativeGuard - finds negative keywords that block your own keywords."""
    pass


@cli.command()
def validate():
    """Run the conflict regression suite and print every case."""
    report = run_validation_suite()

    for result in report.results:
        case = result.case
        line = (
            f"{case.negative_match_type} '{case.negative_text}' vs "
            f"'{case.positive_text}': expected {case.expected}, got {result.actual}"
        )
        click.echo(format_cli_success(line) if result.passed else format_cli_error(line))

    summary = f"{report.passed_tests}/{report.total_tests} cases passed"
    if not report.all_passed:
        click.echo(format_cli_error(summary), err=True)
        sys.exit(1)
    click.echo(format_cli_success(summary))


def _build_audit_config(
    settings,
    live: bool | None,
    detailed_logging: bool,
    start_date,
    end_date,
    max_keywords: int | None,
) -> AuditConfig:
    if (start_date is None) != (end_date is None):
        raise CLIConfigurationError(
            "--start-date and --end-date must be given together",
            "Pass both dates, or neither to audit every enabled keyword",
        )

    try:
        date_range = settings.audit.date_range
        if start_date is not None:
            date_range = DateRange(start_date=start_date.date(), end_date=end_date.date())

        return AuditConfig(
            dry_run=settings.audit.dry_run if live is None else not live,
            detailed_logging=detailed_logging or settings.audit.detailed_logging,
            date_range=date_range,
            max_keywords_to_process=max_keywords or settings.audit.max_keywords_to_process,
        )
    except ValidationError as e:
        raise CLIConfigurationError(f"Invalid audit options: {e}") from e


@cli.command()
@click.option("--customer-id", help="Google Ads customer ID (defaults to NG_CUSTOMER_ID)")
@click.option(
    "--live/--dry-run",
    default=None,
    help="Remove conflicting negatives instead of only flagging them [default: dry run]",
)
@click.option("--detailed-logging", is_flag=True, help="Log every negative checked")
@click.option("--start-date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--end-date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option(
    "--max-keywords",
    type=click.IntRange(min=1),
    help="Stop indexing positive keywords after this many",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read settings from this .env file",
)
@click.option(
    "--report-csv",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write conflict decisions to this CSV file",
)
@handle_common_cli_errors
def audit(
    customer_id,
    live,
    detailed_logging,
    start_date,
    end_date,
    max_keywords,
    env_file,
    report_csv,
):
    """Audit negative keywords against the account's active keywords."""
    overrides = {"customer_id": customer_id} if customer_id else {}
    settings = get_settings_safely(env_file, **overrides)
    setup_logging(settings)

    config = _build_audit_config(
        settings, live, detailed_logging, start_date, end_date, max_keywords
    )

    try:
        provider = GoogleAdsDataProvider(
            GoogleAdsAPIClient.from_config(settings.google_ads), settings.customer_id
        )
    except ValueError as e:
        raise CLIConfigurationError(str(e), "Use the 10 digit Google Ads customer ID") from e

    if not config.dry_run:
        click.echo(
            format_cli_warning(
                "Running LIVE: conflicting negative keywords will be removed",
                "Use --dry-run to only flag them",
            )
        )

    result = RunCoordinator(provider, config).run()

    mode = "Dry run" if result.dry_run else "Live run"
    click.echo(format_cli_success(f"{mode} complete", f"Run id: {result.correlation_id}"))
    for key, value in result.summary().items():
        if key == "warnings":
            continue
        click.echo(f"  {key}: {value}")
    for warning in result.warnings:
        click.echo(format_cli_warning(warning))

    if report_csv is not None:
        report_csv.write_text(export_decisions_csv(result.decisions))
        click.echo(format_cli_success(f"Wrote {len(result.decisions)} decisions to {report_csv}"))


if __name__ == "__main__":
    cli()
