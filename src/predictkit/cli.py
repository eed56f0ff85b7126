"""Command-line interface for predictkit models."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="predictkit",
    help="Inspect saved models and run predictions on tabular data.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def predict(
    model_path: Annotated[
        Path,
        typer.Option(
            "--model",
            "-m",
            help="Path to a saved .model.joblib file (or its base path).",
        ),
    ],
    input_path: Annotated[
        Path,
        typer.Option(
            "--input",
            "-i",
            help="CSV file with one row per example.",
            exists=True,
            dir_okay=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output CSV path. Prints a preview when omitted.",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level."),
    ] = "WARNING",
) -> None:
    """Predict the label column for every row of a CSV file."""
    import pandas as pd

    from predictkit.supervised import load_model
    from predictkit.utils.logging import configure_logging, get_logger, log_context

    configure_logging(log_level)
    log = get_logger(__name__)

    try:
        model, _ = load_model(model_path)
    except FileNotFoundError as e:
        console.print(f"[red]Model not found: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Error loading model: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    descriptor = model.descriptor
    if descriptor is None or descriptor.label is None:
        console.print("[red]Error: model has no label column to predict.[/red]")
        raise typer.Exit(code=1)

    console.print(f"[blue]Loaded {model.__class__.__name__}[/blue]")
    console.print(f"[dim]Model features: {', '.join(descriptor.columns)}[/dim]")

    try:
        frame = pd.read_csv(input_path)
        with log_context(model=model.__class__.__name__, input=str(input_path)):
            x = descriptor.convert_frame(frame)
            raw = model.predict_batch(x)
            label = descriptor.label
            frame[label.name] = [label.convert_back(v) for v in raw]
            log.info("Predicted rows", n_rows=len(raw))
    except Exception as e:
        console.print(f"[red]Prediction failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output, index=False)
        console.print(f"[green]Saved {len(frame)} predictions to: {output}[/green]")
        return

    table = Table(title=f"Predictions ({len(frame)} rows)")
    for column in [*descriptor.columns, label.name]:
        table.add_column(column, style="green" if column == label.name else "cyan")
    for _, row in frame.head(20).iterrows():
        table.add_row(*(str(row[c]) for c in [*descriptor.columns, label.name]))
    console.print(table)


@app.command()
def info(
    model_path: Annotated[
        Path,
        typer.Option(
            "--model",
            "-m",
            help="Path to a saved .model.joblib file (or its base path).",
        ),
    ],
) -> None:
    """Show the descriptor and normalization settings of a saved model."""
    from predictkit.supervised import load_model, supports_persistence

    try:
        model, metadata = load_model(model_path)
    except FileNotFoundError as e:
        console.print(f"[red]Model not found: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Model: {model.__class__.__name__}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    descriptor = model.descriptor
    table.add_row("Features", ", ".join(descriptor.columns) if descriptor else "-")
    table.add_row(
        "Label",
        descriptor.label.name if descriptor and descriptor.label else "-",
    )
    table.add_row("Normalize features", "Yes" if model.normalize_features else "No")
    if model.feature_normalizer is not None:
        table.add_row("Normalizer", model.feature_normalizer.name)
    table.add_row("JSON persistence", "Yes" if supports_persistence(model) else "No")
    if metadata.get("saved_at"):
        table.add_row("Saved at", metadata["saved_at"])

    console.print(table)


@app.command()
def check(
    config: Annotated[
        Path,
        typer.Option(
            "--config",
            "-c",
            help="Path to model configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate a model configuration file and show its descriptor."""
    from predictkit.config.loader import load_config
    from predictkit.descriptor import Descriptor
    from predictkit.utils.logging import configure_from_settings

    try:
        model_config = load_config(config)
    except Exception as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_from_settings(model_config.logging)
    descriptor = Descriptor.from_config(model_config.descriptor)

    table = Table(title=f"Model configuration: {model_config.name}")
    table.add_column("Column", style="cyan")
    table.add_column("Role", style="green")
    table.add_column("Encoding")
    for prop in descriptor.features:
        table.add_row(prop.name, "feature", escape(repr(prop)))
    if descriptor.label is not None:
        table.add_row(descriptor.label.name, "label", escape(repr(descriptor.label)))
    console.print(table)

    normalization = model_config.normalization
    console.print(
        f"[dim]Normalization: "
        f"{normalization.method.value if normalization.enabled else 'disabled'}[/dim]"
    )


@app.command()
def version() -> None:
    """Show version information."""
    from predictkit import __version__

    console.print(f"predictkit version {__version__}")


if __name__ == "__main__":
    app()
