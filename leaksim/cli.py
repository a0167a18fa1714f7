"""CLI entry point for leaksim."""

import logging
from typing import Optional

import click
from tabulate import tabulate

from .config import SimulationConfig
from .exceptions import SimulationError


def setup_logging(level: str) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_params(
    preset: str,
    params_file: Optional[str],
    chunk_size: Optional[int],
    workers: Optional[int],
):
    """Build the protocol parameters from the preset, file and overrides."""
    from .spec.params import LeakParams

    if params_file:
        params = LeakParams.from_yaml(params_file)
    else:
        params = LeakParams.for_preset(preset)

    overrides = {}
    if chunk_size is not None:
        overrides["chunk_size"] = chunk_size
    if workers is not None:
        overrides["max_workers"] = workers
    if overrides:
        params = params.replace(**overrides)
    return params


def common_options(func):
    """Options shared by the run and sweep commands."""
    options = [
        click.option(
            "--validators",
            "validator_count",
            default=1_000_000,
            type=int,
            show_default=True,
            help="Number of validators in the simulated set",
            envvar="LEAKSIM_VALIDATORS",
        ),
        click.option(
            "--max-epochs",
            type=int,
            help="Stop after this many epochs even if the leak has not ended",
            envvar="LEAKSIM_MAX_EPOCHS",
        ),
        click.option(
            "--seed",
            type=int,
            help="Random seed for reproducible runs",
            envvar="LEAKSIM_SEED",
        ),
        click.option(
            "--preset",
            default="mainnet",
            type=click.Choice(["mainnet", "minimal"], case_sensitive=False),
            help="Parameter preset (ignored when --params-file is given)",
            envvar="LEAKSIM_PRESET",
        ),
        click.option(
            "--params-file",
            type=click.Path(exists=True, dir_okay=False),
            help="YAML file with protocol parameters",
            envvar="LEAKSIM_PARAMS_FILE",
        ),
        click.option(
            "--chunk-size",
            type=click.IntRange(min=1),
            help="Validators per parallel task",
            envvar="LEAKSIM_CHUNK_SIZE",
        ),
        click.option(
            "--workers",
            type=click.IntRange(min=1),
            help="Maximum parallel tasks (defaults to the executor default)",
            envvar="LEAKSIM_WORKERS",
        ),
        click.option(
            "--log-level",
            default="INFO",
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
            help="Logging level",
            envvar="LEAKSIM_LOG_LEVEL",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="leaksim")
def cli():
    """Leaksim - inactivity leak simulator for proof-of-stake validator sets."""
    pass


@cli.command()
@click.option(
    "--offline-percent",
    default=80,
    type=click.IntRange(0, 100),
    show_default=True,
    help="Percentage of validators offline for the whole run",
    envvar="LEAKSIM_OFFLINE_PERCENT",
)
@common_options
@click.option(
    "--metrics-port",
    type=int,
    help="Serve Prometheus metrics on this port while running",
    envvar="LEAKSIM_METRICS_PORT",
)
def run(
    offline_percent: int,
    validator_count: int,
    max_epochs: Optional[int],
    seed: Optional[int],
    preset: str,
    params_file: Optional[str],
    chunk_size: Optional[int],
    workers: Optional[int],
    log_level: str,
    metrics_port: Optional[int],
):
    """Run one simulation and print its summary."""
    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    from .simulation import format_report, run_simulation

    try:
        params = load_params(preset.lower(), params_file, chunk_size, workers)
        config = SimulationConfig(
            offline_percent=offline_percent,
            validator_count=validator_count,
            max_epochs=max_epochs,
            seed=seed,
        )

        export_metrics = False
        if metrics_port is not None:
            from .metrics import start_metrics_server

            export_metrics = start_metrics_server(metrics_port)

        logger.info("Starting leaksim")
        logger.info(f"  Preset: {params.preset_base}")
        logger.info(f"  Validators: {validator_count}")
        logger.info(f"  Offline: {offline_percent}%")
        logger.info(f"  Chunk size: {params.chunk_size}")
        if max_epochs is not None:
            logger.info(f"  Max epochs: {max_epochs}")
        if seed is not None:
            logger.info(f"  Seed: {seed}")

        result = run_simulation(config, params, export_metrics=export_metrics)
    except SimulationError as e:
        raise click.ClickException(str(e)) from e

    click.echo()
    click.echo(format_report(result))


@cli.command()
@click.option(
    "--offline-percent",
    "offline_percents",
    multiple=True,
    type=click.IntRange(0, 100),
    help="Offline percentage to simulate (can be specified multiple times)",
)
@common_options
def sweep(
    offline_percents: tuple[int, ...],
    validator_count: int,
    max_epochs: Optional[int],
    seed: Optional[int],
    preset: str,
    params_file: Optional[str],
    chunk_size: Optional[int],
    workers: Optional[int],
    log_level: str,
):
    """Run one simulation per offline percentage and print a table."""
    setup_logging(log_level)

    from .simulation import run_simulation

    if not offline_percents:
        offline_percents = (40, 50, 60, 70, 80, 90)

    rows = []
    try:
        params = load_params(preset.lower(), params_file, chunk_size, workers)
        for offline_percent in offline_percents:
            config = SimulationConfig(
                offline_percent=offline_percent,
                validator_count=validator_count,
                max_epochs=max_epochs,
                seed=seed,
            )
            result = run_simulation(config, params)
            rows.append([
                offline_percent,
                result.leak_stop_epoch if result.leak_stop_epoch is not None else "never",
                f"{result.leak_stop_days:.2f}" if result.leak_stop_days is not None else "never",
                f"{result.fraction_balance_burned:.6f}",
                result.end_epoch,
                "yes" if result.completed else "no",
            ])
    except SimulationError as e:
        raise click.ClickException(str(e)) from e

    click.echo(tabulate(
        rows,
        headers=["Offline %", "Leak stop (epochs)", "Leak stop (days)",
                 "Fraction burned", "End epoch", "Completed"],
        tablefmt="simple",
    ))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
