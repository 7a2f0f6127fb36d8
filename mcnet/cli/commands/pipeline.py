"""YAML-based analysis CLI commands."""

import sys
import click
from pathlib import Path

from ...exceptions import InputError


def register_pipeline_commands(cli: click.Group) -> None:
    """Register pipeline-related commands."""
    @cli.command("run", help="Run analyses from YAML configuration")
    @click.argument("config", type=click.Path(exists=True, path_type=Path))
    @click.option(
        "--validate-only",
        is_flag=True,
        help="Only validate configuration, don't run the analyses"
    )
    @click.pass_context
    def run(ctx: click.Context, config: Path, validate_only: bool):
        """Run the analyses configured in a YAML file.

        Examples:

        \b
            mcnet run configs/example.yaml
            mcnet run configs/example.yaml --validate-only
        """
        import logging

        from ...config import AnalysisConfig
        from ...pipeline import run_analysis

        try:
            cfg = AnalysisConfig.from_yaml(config)
        except (ValueError, TypeError, KeyError) as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)

        if validate_only:
            click.echo(f"Configuration valid: {config}")
            click.echo(f"  Graph: {cfg.graph.path}")
            click.echo(f"  Motif: size={cfg.motif.size}, class={cfg.motif.isoclass}")
            click.echo(f"  Analyses: {', '.join(cfg.analyses)}")
            return

        if not ctx.obj.get("verbose"):
            logging.getLogger().setLevel(cfg.logging.level)

        try:
            results = run_analysis(cfg)
        except InputError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        for name, result in results.items():
            if name == "mcc":
                click.echo(str(result))
            elif name == "mcstats":
                click.echo(f"Clustering types: {result}")
            elif name == "mcextract":
                click.echo(
                    f"Extracted {result.n_instances} instances to {cfg.output.extract_path}"
                )
