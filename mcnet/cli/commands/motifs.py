"""Motif clustering commands: mcc, mcstats and mcextract."""

import sys
import click
from pathlib import Path
from typing import Optional

from ...exceptions import InputError


def register_motif_commands(cli: click.Group) -> None:
    """Register the motif clustering commands."""
    @cli.command("mcc", help="Motif clustering coefficient and its z-score")
    @click.argument("graph", type=click.Path(path_type=Path))
    @click.argument("prefix")
    @click.argument("sample_size", metavar="SAMPLE", type=click.IntRange(min=0))
    @click.argument("max_trials", metavar="TRIALS", type=click.IntRange(min=0))
    @click.argument("size", type=int)
    @click.argument("isoclass", metavar="CLASS", type=int)
    @click.option("--jobs", "-j", "n_jobs", type=int, default=1, show_default=True,
                  help="Worker processes for the null samples (-1: all cores but one)")
    @click.option("--seed", type=int, default=None, help="Random seed")
    @click.option("--timing", is_flag=True, help="Log the time spent in each phase")
    def mcc(graph: Path, prefix: str, sample_size: int, max_trials: int, size: int,
            isoclass: int, n_jobs: int, seed: Optional[int], timing: bool):
        """Compare the motif clustering coefficient of GRAPH with SAMPLE null graphs.

        Writes PREFIX_samples.txt and PREFIX_stats.txt.

        \b
            mcnet mcc network.gml results 100 200 3 2
        """
        from ...io_adapters import read_graph
        from ...pipeline import load_motif, run_mcc

        try:
            G = read_graph(graph)
            motif = load_motif(G, size, isoclass)
        except InputError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        result = run_mcc(G, motif, prefix, sample_size, max_trials,
                         n_jobs=n_jobs, seed=seed, timing=timing)
        click.echo(str(result))
        if result.partial_failure:
            click.echo(
                f"Warning: {result.n_failed + result.n_undefined} of {sample_size} "
                f"null samples were unusable ({result.n_valid} valid)",
                err=True,
            )

    @cli.command("mcstats", help="Count motif instance pairs per clustering type")
    @click.argument("graph", type=click.Path(path_type=Path))
    @click.argument("size", type=int)
    @click.argument("isoclass", metavar="CLASS", type=int)
    @click.argument("prefix", required=False)
    @click.option("--timing", is_flag=True, help="Log the time spent in each phase")
    def mcstats(graph: Path, size: int, isoclass: int, prefix: Optional[str], timing: bool):
        """Print the number of instance pairs of each clustering type, unclustered last.

        With PREFIX, writes PREFIXType{i}.gml for each type (from 1) and PREFIXNodeMaps.txt.

        \b
            mcnet mcstats network.gml 3 2
            mcnet mcstats network.gml 3 2 out/
        """
        from ...io_adapters import read_graph
        from ...pipeline import load_motif, run_mcstats

        try:
            G = read_graph(graph)
            motif = load_motif(G, size, isoclass)
            histogram = run_mcstats(G, motif, prefix=prefix, timing=timing)
        except InputError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        click.echo(str(histogram))

    @cli.command("mcextract", help="Extract the subgraph formed by all motif instances")
    @click.argument("graph", type=click.Path(path_type=Path))
    @click.argument("size", type=int)
    @click.argument("isoclass", metavar="CLASS", type=int)
    @click.argument("graph_out", type=click.Path(path_type=Path))
    @click.argument("map_out", type=click.Path(path_type=Path), required=False)
    def mcextract(graph: Path, size: int, isoclass: int, graph_out: Path, map_out: Optional[Path]):
        """Write the union of all motif instances of GRAPH to GRAPH_OUT.

        MAP_OUT receives one "new,original" node pair per line.
        """
        from ...io_adapters import read_graph
        from ...pipeline import load_motif, run_mcextract

        try:
            G = read_graph(graph)
            motif = load_motif(G, size, isoclass)
        except InputError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        result = run_mcextract(G, motif, graph_out, map_out)
        click.echo(
            f"Extracted {result.n_instances} instances: "
            f"{result.graph.n_nodes} nodes, {result.graph.n_edges} edges"
        )
