import json
from pathlib import Path
from typing import Optional

import typer

from .analysis import AntiqueAnalyzer, CombinedAnalysisResult
from .classifier import ClassifierGateway, Unavailable, load_binary_detector
from .config import Settings
from .errors import ImageProcessingError, ModelUnavailableError, RecordStoreError
from .fusion import FusionPolicy, ResultCombiner
from .heuristics import HeuristicEngine
from .imaging import encode_image_bytes
from .logging import get_logger
from .models import ModelResources, register_stub_models, resolve_loader
from .records import JsonRecordStore, record_from_result

app = typer.Typer(help="Antique identifier – estimate whether a photographed object is an antique", no_args_is_help=True)
logger = get_logger(__name__)


def build_resources(settings: Settings, stub_models: bool = False) -> ModelResources:
    """
    Model resources for the configured directory and loader.

    Raises:
        ModelUnavailableError: If the configured loader cannot be imported
    """
    loader = resolve_loader(settings.model_loader) if settings.model_loader else None
    resources = ModelResources(settings.model_dir, loader=loader)
    if stub_models:
        register_stub_models(
            resources,
            general_name=settings.general_model_name,
            binary_name=settings.binary_model_name,
            include_binary=settings.use_binary_detector,
        )
    return resources


def build_analyzer(settings: Settings, resources: ModelResources) -> AntiqueAnalyzer:
    """
    Wire the pipeline stages from settings.

    Raises:
        ModelUnavailableError: If the general classifier model cannot be loaded
    """
    gateway = ClassifierGateway(
        resources,
        model_name=settings.general_model_name,
        input_size=settings.input_size,
        top_k=settings.top_k,
    )

    if settings.use_binary_detector:
        detector = load_binary_detector(resources, settings.binary_model_name, settings.input_size)
    else:
        detector = Unavailable(reason="disabled by configuration")

    return AntiqueAnalyzer(
        gateway=gateway,
        detector=detector,
        engine=HeuristicEngine(analysis_max_side=settings.analysis_max_side),
        combiner=ResultCombiner(policy=settings.fusion_policy),
    )


@app.command()
def analyze(
    image_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Photo of the object to analyze"),
    model_dir: Optional[Path] = typer.Option(None, "--model-dir", "-m", help="Directory holding model artifacts"),
    model_loader: Optional[str] = typer.Option(None, "--model-loader", help="Loader for model artifacts, as module:callable"),
    stub_models: bool = typer.Option(False, "--stub-models", help="Use deterministic stub models instead of artifacts"),
    policy: Optional[str] = typer.Option(None, help="Fusion policy: override_blend, plain_blend or max_confidence"),
    binary: bool = typer.Option(True, "--binary/--no-binary", help="Use the binary antique detector when available"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    save_as: Optional[str] = typer.Option(None, "--save-as", help="Save the item under this name (empty for top label)"),
    records: Path = typer.Option(Path("antiques.json"), "--records", help="Saved records file"),
    year: Optional[int] = typer.Option(None, help="Year to store with a saved item"),
    notes: Optional[str] = typer.Option(None, help="Notes to store with a saved item"),
) -> None:
    """Analyze a photo and report whether the object is likely an antique."""

    settings = Settings.from_env()
    if model_dir is not None:
        settings.model_dir = model_dir
    if model_loader is not None:
        settings.model_loader = model_loader
    settings.use_binary_detector = settings.use_binary_detector and binary
    if policy is not None:
        try:
            settings.fusion_policy = FusionPolicy(policy.strip().lower())
        except ValueError:
            logger.error(f"Invalid fusion policy: {policy}. Must be one of {[p.value for p in FusionPolicy]}")
            raise typer.Exit(code=1)

    try:
        analyzer = build_analyzer(settings, build_resources(settings, stub_models))
    except ModelUnavailableError as exc:
        logger.error(f"Classifier model unavailable: {exc}")
        logger.info("Pass --model-dir together with --model-loader module:callable, "
                    "or --stub-models to run without artifacts")
        raise typer.Exit(code=2) from exc

    result = analyzer.analyze(image_path)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)

    if result.is_failure:
        raise typer.Exit(code=1)

    if save_as is not None:
        try:
            image_bytes = encode_image_bytes(image_path)
            record = record_from_result(result, name=save_as, year=year, notes=notes, image_bytes=image_bytes)
            store = JsonRecordStore(records)
            store.insert(record)
            store.save()
        except (ImageProcessingError, RecordStoreError) as exc:
            logger.error(f"Failed to save record: {exc}")
            raise typer.Exit(code=1) from exc
        typer.echo(f"Saved '{record.name}' as {record.id}")


@app.command()
def delete(
    record_id: str = typer.Argument(..., help="Identifier of the saved record"),
    records: Path = typer.Option(Path("antiques.json"), "--records", help="Saved records file"),
) -> None:
    """Delete a saved record."""
    try:
        store = JsonRecordStore(records)
        store.delete(record_id)
    except RecordStoreError as exc:
        logger.error(f"Failed to delete record: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(f"Deleted {record_id}")


def _print_result(result: CombinedAnalysisResult) -> None:
    if result.is_failure:
        typer.echo("Analysis failed, please try again.")
        return

    typer.echo(result.user_friendly_message)
    if result.estimated_period:
        typer.echo(result.estimated_period)
    typer.echo("Reasons:")
    for reason in result.reasons:
        typer.echo(f"  - {reason}")
    if result.classifications:
        typer.echo("Top labels:")
        for label, confidence in sorted(result.classifications.items(), key=lambda item: -item[1]):
            typer.echo(f"  {label}: {confidence:.0%}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
