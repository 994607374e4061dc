"""Command-line interface for the covidatlas pipeline."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="covidatlas",
    help="COVID-19 bubble maps, state rankings and layered globe figures.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit log events as JSON lines."),
    ] = False,
) -> None:
    """Configure logging and the non-interactive plotting backend."""
    import matplotlib

    from covidatlas.utils.logging import configure_logging

    matplotlib.use("Agg")
    configure_logging(level=log_level, json_output=json_logs)


@app.command()
def maps(
    config: ConfigOption,
    dataset: Annotated[
        str,
        typer.Option(
            "--dataset",
            "-d",
            help="Dataset: 'confirmed_global', 'deaths_global' or 'confirmed_us'.",
        ),
    ] = "confirmed_global",
) -> None:
    """Draw the two-class bubble maps of the first and the latest date."""
    from covidatlas.config.loader import load_config
    from covidatlas.etl.pipeline import AtlasPipeline
    from covidatlas.maps.category import build_category_maps, category_note
    from covidatlas.plots.charts import save_figure
    from covidatlas.plots.maps import plot_category_maps

    if dataset not in ["confirmed_global", "deaths_global", "confirmed_us"]:
        console.print(f"[red]Error: Invalid dataset '{dataset}'.[/red]")
        raise typer.Exit(code=1)

    pipeline_config = load_config(config)
    console.print(f"[blue]Building bubble maps for {dataset}[/blue]")

    try:
        pipeline = AtlasPipeline(pipeline_config)
        if dataset == "confirmed_us":
            table = pipeline.us_series()
            view = pipeline_config.maps.us_view
        else:
            table = pipeline.global_series(dataset)
            view = pipeline_config.maps.global_view
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    category_maps = build_category_maps(
        table, view, pipeline_config.maps.basemap_for(dataset), pipeline_config.maps
    )

    summary = Table(title=f"Bubble Maps ({dataset})")
    summary.add_column("Date", style="cyan")
    summary.add_column("Entities plotted", justify="right")
    for label in category_maps[0].colors:
        summary.add_column(label, justify="right", style="green")
    summary.add_column("Max value", justify="right")

    for category_map in category_maps:
        counts = category_map.points["category"].value_counts()
        summary.add_row(
            category_map.date_column,
            str(len(category_map.points)),
            *[str(int(counts.get(label, 0))) for label in category_map.colors],
            f"{category_map.size_limits[1]:,.0f}",
        )
    console.print(summary)

    note = category_note(dataset, pipeline_config.maps.category_threshold)
    console.print(f"[dim]{note}[/dim]")

    fig = plot_category_maps(
        category_maps, title=f"COVID-19 {dataset.replace('_', ' ')}\n{note}"
    )
    path = save_figure(fig, pipeline_config.plots_dir / f"maps_{dataset}.png")
    console.print(f"\n[green]Saved to: {path}[/green]")


@app.command()
def compare(
    config: ConfigOption,
    first: Annotated[str, typer.Option("--first", help="First country.")],
    second: Annotated[str, typer.Option("--second", help="Second country.")],
    dataset: Annotated[
        str,
        typer.Option("--dataset", "-d", help="'confirmed_global' or 'deaths_global'."),
    ] = "confirmed_global",
) -> None:
    """Plot one country on its own and overlaid with a second country."""
    from covidatlas.analysis.comparison import compare_countries
    from covidatlas.config.loader import load_config
    from covidatlas.etl.pipeline import AtlasPipeline
    from covidatlas.normalization.names import canonicalize
    from covidatlas.plots.charts import plot_comparison, save_figure

    if dataset not in ["confirmed_global", "deaths_global"]:
        console.print(f"[red]Error: Invalid dataset '{dataset}'.[/red]")
        raise typer.Exit(code=1)

    pipeline_config = load_config(config)
    first_key, second_key = canonicalize(first), canonicalize(second)

    try:
        table = AtlasPipeline(pipeline_config).global_series(dataset, exclude=False)
        frame = compare_countries(table, first_key, second_key)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except KeyError as e:
        console.print(f"[red]Error: {e.args[0]}[/red]")
        raise typer.Exit(code=1) from e

    table_view = Table(title=f"{first_key} vs {second_key}")
    table_view.add_column("Country", style="cyan")
    table_view.add_column("Latest", justify="right", style="green")
    table_view.add_column("Peak", justify="right")
    for column in frame.columns:
        table_view.add_row(
            str(column),
            f"{frame[column].iloc[-1]:,.0f}" if len(frame) else "-",
            f"{frame[column].max():,.0f}" if len(frame) else "-",
        )
    console.print(table_view)

    slug = f"{first_key}_{second_key}".replace(" ", "_").replace(",", "")
    path = save_figure(
        plot_comparison(frame), pipeline_config.plots_dir / f"compare_{slug}.png"
    )
    console.print(f"\n[green]Saved to: {path}[/green]")


@app.command()
def ranking(
    config: ConfigOption,
    top_k: Annotated[
        int | None,
        typer.Option("--top-k", "-k", help="Number of states (default from config)."),
    ] = None,
    metric: Annotated[
        str,
        typer.Option("--metric", "-m", help="'cases' or 'deaths'."),
    ] = "cases",
) -> None:
    """Rank states by cumulative count and plot their growth curves."""
    from covidatlas.config.loader import load_config
    from covidatlas.etl.pipeline import AtlasPipeline
    from covidatlas.plots.charts import plot_growth_curves, plot_ranking_bars, save_figure

    if metric not in ["cases", "deaths"]:
        console.print(f"[red]Error: Invalid metric '{metric}'. Use 'cases' or 'deaths'.[/red]")
        raise typer.Exit(code=1)

    pipeline_config = load_config(config)

    try:
        result = AtlasPipeline(pipeline_config).state_ranking(top_k, metric=metric)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    as_of = f"{result.as_of:%d-%b-%Y}" if result.as_of is not None else "n/a"
    table = Table(title=f"Top {len(result.rows)} States by {metric.title()} (as of {as_of})")
    table.add_column("Rank", justify="right")
    table.add_column("State", style="cyan")
    table.add_column(metric.title(), justify="right", style="green")
    for row in result.rows.itertuples(index=False):
        table.add_row(str(row.rank), row.entity, f"{row.value:,.0f}")
    console.print(table)

    plots_dir = pipeline_config.plots_dir
    bars = save_figure(plot_ranking_bars(result), plots_dir / f"ranking_{metric}.png")
    growth = save_figure(plot_growth_curves(result), plots_dir / f"growth_{metric}.png")
    console.print(f"\n[green]Saved to: {bars}[/green]")
    console.print(f"[green]Saved to: {growth}[/green]")


@app.command()
def globe(
    config: ConfigOption,
    metric: Annotated[
        str,
        typer.Option("--metric", "-m", help="'cases' or 'deaths'."),
    ] = "cases",
    focus: Annotated[
        str | None,
        typer.Option("--focus", "-f", help="Country to focus the view on."),
    ] = None,
) -> None:
    """Render the layered 3D globe of total cases or deaths."""
    from covidatlas.analysis.magnitude import metric_kind, scale_reference
    from covidatlas.config.loader import load_config
    from covidatlas.etl.pipeline import AtlasPipeline
    from covidatlas.maps.globe import GlobeRenderer, ViewMode
    from covidatlas.maps.surface import MatplotlibGlobeSurface
    from covidatlas.normalization.names import canonicalize

    try:
        kind = metric_kind(metric)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    pipeline_config = load_config(config)

    try:
        data = AtlasPipeline(pipeline_config).globe_data()
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    points = data[["entity", "lat", "lon"]].assign(value=data[f"total_{kind.value}"])

    surface = MatplotlibGlobeSurface(title=f"COVID-19 Total {kind.value.title()}")
    renderer = GlobeRenderer(surface, kind, pipeline_config.globe)
    markers = renderer.render(points)

    if focus is not None:
        view = renderer.focus(canonicalize(focus))
        if view.mode is not ViewMode.FOCUSED:
            console.print(f"[yellow]⚠ '{focus}' not found, keeping the global view[/yellow]")

    console.print(f"[blue]{renderer.view.label}[/blue]")

    scale = Table(title="Scale Reference")
    scale.add_column("Bucket", style="cyan")
    scale.add_column("Markers", justify="right", style="green")
    counts = markers.loc[~markers["halo"], "bucket"].value_counts()
    for bucket, line in zip(range(6, 0, -1), scale_reference(kind)):
        scale.add_row(line, str(int(counts.get(bucket, 0))))
    console.print(scale)

    candidates = Table(title="Focus Candidates")
    candidates.add_column("Rank", justify="right")
    candidates.add_column("Country", style="cyan")
    candidates.add_column(kind.value.title(), justify="right", style="green")
    for row in renderer.focus_candidates().itertuples(index=False):
        candidates.add_row(str(row.rank), row.entity, f"{row.value:,.0f}")
    console.print(candidates)

    suffix = "" if renderer.view.entity is None else "_" + renderer.view.entity.replace(" ", "_")
    path = pipeline_config.plots_dir / f"globe_{kind.value}{suffix}.png"
    surface.save(path)
    console.print(f"\n[green]Saved to: {path}[/green]")


@app.command()
def build(config: ConfigOption) -> None:
    """Build every dataset and summarize what was produced."""
    from covidatlas.config.loader import load_config
    from covidatlas.etl.pipeline import AtlasPipeline

    pipeline_config = load_config(config)
    console.print(f"[blue]Building datasets for {pipeline_config.project}[/blue]")

    result = AtlasPipeline(pipeline_config).run()

    table = Table(title="Atlas Datasets")
    table.add_column("Dataset", style="cyan")
    table.add_column("Rows", justify="right", style="green")
    for name in ["confirmed_global", "deaths_global", "confirmed_us", "globe"]:
        frame = getattr(result, name)
        table.add_row(name, "skipped" if frame is None else str(len(frame)))
    table.add_row(
        "ranking",
        "skipped" if result.ranking is None else str(len(result.ranking.rows)),
    )
    console.print(table)

    if result.skipped:
        console.print(
            f"\n[yellow]⚠ Missing source files for: {', '.join(result.skipped)}[/yellow]"
        )


@app.command()
def schemas() -> None:
    """List the registered data schemas."""
    from covidatlas.schemas.registry import SchemaRegistry

    table = Table(title=f"Schema Registry (v{SchemaRegistry.registry_version()})")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Role", style="green")
    table.add_column("Description")

    for name in SchemaRegistry.list_schemas():
        info = SchemaRegistry.get_info(name)
        table.add_row(name, info.version, info.role.value, info.description)

    console.print(table)


if __name__ == "__main__":
    app()
