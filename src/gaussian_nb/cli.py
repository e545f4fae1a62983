"""Command-line interface for gaussian-nb.

Provides ``evaluate``, ``train`` and ``predict`` commands over delimited
data files, with rich terminal output using the ``click`` and ``rich``
libraries.

Usage::

    gaussian-nb evaluate iris.csv
    gaussian-nb evaluate --folds 5 --metrics iris.csv
    gaussian-nb train iris.csv --model iris-model.json
    gaussian-nb predict iris-model.json new_samples.csv
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .classifier import GaussianNaiveBayesClassifier
from .datasets import Dataset, load_delimited
from .evaluation import cross_validate
from .metrics import ClassificationMetrics, compute_metrics

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(exc))}", highlight=False, soft_wrap=True)
    sys.exit(1)


def _load(path: Path, delimiter: str, no_header: bool, labeled: bool = True) -> Dataset:
    dataset = load_delimited(path, delimiter=delimiter, has_header=not no_header, labeled=labeled)
    logger.info(
        "Loaded %d rows x %d attributes from %s", dataset.n_rows, dataset.n_attributes, path
    )
    return dataset


def data_options(func):
    """Options shared by every command that reads a data file."""
    func = click.option("--delimiter", "-d", default=",", show_default=True,
                        help="Field separator of the data file.")(func)
    func = click.option("--no-header", is_flag=True, default=False,
                        help="The data file has no header row.")(func)
    func = click.option("--verbose", "-v", count=True,
                        help="Log progress (-v) or debug details (-vv) to stderr.")(func)
    return func


@click.group()
@click.version_option(package_name="gaussian-nb")
def main() -> None:
    """Gaussian Naive Bayes classification of delimited numeric data.

    Data files hold numeric attribute columns followed by the class label
    in the last column.
    """
    pass


@main.command()
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@data_options
@click.option("--var-smoothing", type=float, default=0.0, show_default=True,
              help="Fraction of the largest attribute variance added to all class variances.")
@click.option("--folds", "-k", type=int, default=None,
              help="Run stratified k-fold cross-validation instead of training-set accuracy.")
@click.option("--seed", type=int, default=42, show_default=True,
              help="Random seed for fold assignment.")
@click.option("--metrics", "show_metrics", is_flag=True, default=False,
              help="Show per-class precision, recall and F1.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def evaluate(
    data: Path,
    delimiter: str,
    no_header: bool,
    verbose: int,
    var_smoothing: float,
    folds: int | None,
    seed: int,
    show_metrics: bool,
    output: str,
) -> None:
    """Fit on a data file and report accuracy.

    Without --folds the model is scored on the data it was fitted on.

    Example: gaussian-nb evaluate --folds 5 iris.csv
    """
    _configure_logging(verbose)
    try:
        dataset = _load(data, delimiter, no_header)
        if folds is not None:
            results = cross_validate(
                dataset.features, dataset.labels, k=folds,
                var_smoothing=var_smoothing, seed=seed,
            )
        else:
            clf = GaussianNaiveBayesClassifier(var_smoothing=var_smoothing)
            clf.fit_labels(dataset.features, dataset.labels)
            predictions = clf.predict(dataset.features)
            accuracy = clf.accuracy_score(
                predictions, clf.label_encoder_.transform(dataset.labels)
            )
            metrics = compute_metrics(
                dataset.labels, clf.label_encoder_.decode_predictions(predictions)
            )
    except (ValueError, OSError) as e:
        _fail(e)

    if folds is not None:
        _render_folds(results, output, show_metrics)
        return

    if output == "json":
        payload: dict = {"accuracy": accuracy}
        if show_metrics:
            payload["metrics"] = metrics.to_dict()
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(f"Accuracy: {accuracy * 100:.2f}%", highlight=False, soft_wrap=True)
    if show_metrics:
        _render_metrics(metrics, f"Per-class metrics: {data.name}")


@main.command()
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--model", "-m", "model_path", type=click.Path(dir_okay=False, path_type=Path),
              required=True, help="Where to save the fitted model (JSON).")
@data_options
@click.option("--var-smoothing", type=float, default=0.0, show_default=True,
              help="Fraction of the largest attribute variance added to all class variances.")
def train(
    data: Path,
    model_path: Path,
    delimiter: str,
    no_header: bool,
    verbose: int,
    var_smoothing: float,
) -> None:
    """Fit a model on a data file and save it.

    Example: gaussian-nb train iris.csv --model iris-model.json
    """
    _configure_logging(verbose)
    try:
        dataset = _load(data, delimiter, no_header)
        clf = GaussianNaiveBayesClassifier(var_smoothing=var_smoothing)
        clf.fit_labels(dataset.features, dataset.labels)
        clf.save(model_path)
    except (ValueError, OSError) as e:
        _fail(e)

    table = Table(title=f"Class statistics: {data.name}", show_lines=False)
    table.add_column("Class", style="cyan")
    table.add_column("Rows", justify="right")
    for name in dataset.attribute_names:
        table.add_column(f"{name} (μ ± σ)", justify="right")
    for label, stats in zip(clf.label_encoder_.classes_, clf.model_.classes):
        table.add_row(
            str(label),
            str(stats.count),
            *(f"{mu:.3f} ± {sigma:.3f}" for mu, sigma in zip(stats.mean, stats.std_dev)),
        )
    console.print(table)
    console.print(f"[dim]Model saved to {escape(str(model_path))}[/]", soft_wrap=True)


@main.command()
@click.argument("model_path", metavar="MODEL",
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@data_options
@click.option("--labeled", is_flag=True, default=False,
              help="The last column holds true labels; report accuracy too.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def predict(
    model_path: Path,
    data: Path,
    delimiter: str,
    no_header: bool,
    verbose: int,
    labeled: bool,
    output: str,
) -> None:
    """Classify the rows of a data file with a saved model.

    Example: gaussian-nb predict iris-model.json new_samples.csv
    """
    _configure_logging(verbose)
    try:
        clf = GaussianNaiveBayesClassifier.load(model_path)
        dataset = _load(data, delimiter, no_header, labeled=labeled)
        results = clf.classify(dataset.features)
        accuracy = None
        if labeled:
            accuracy = compute_metrics(
                dataset.labels, [_display_label(r) for r in results]
            ).accuracy
    except (ValueError, OSError) as e:
        _fail(e)

    if output == "json":
        payload: dict = {"predictions": [r.to_dict() for r in results]}
        if accuracy is not None:
            payload["accuracy"] = accuracy
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Predictions: {data.name}")
    table.add_column("#", justify="right", width=5)
    table.add_column("Class", style="cyan")
    table.add_column("Conf.", justify="right", width=8)
    if labeled:
        table.add_column("True", style="white")
    for i, result in enumerate(results, 1):
        row = [str(i), str(_display_label(result)), f"{result.confidence:.0%}"]
        if labeled:
            row.append(dataset.labels[i - 1])
        table.add_row(*row)
    console.print(table)
    if accuracy is not None:
        console.print(f"Accuracy: {accuracy * 100:.2f}%", highlight=False, soft_wrap=True)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _display_label(result) -> str:
    return str(result.label) if result.label is not None else str(result.predicted_code)


def _render_metrics(metrics: ClassificationMetrics, title: str) -> None:
    table = Table(title=title)
    table.add_column("Class", style="cyan")
    table.add_column("Precision", justify="right")
    table.add_column("Recall", justify="right")
    table.add_column("F1", justify="right")
    table.add_column("Support", justify="right")
    for cls, scores in metrics.per_class.items():
        table.add_row(
            str(cls),
            f"{scores['precision']:.4f}",
            f"{scores['recall']:.4f}",
            f"{scores['f1']:.4f}",
            str(metrics.support.get(cls, 0)),
        )
    console.print(table)


def _render_folds(results: list[ClassificationMetrics], output: str, show_metrics: bool) -> None:
    mean_accuracy = sum(m.accuracy for m in results) / len(results) if results else 0.0

    if output == "json":
        click.echo(json.dumps({
            "folds": [
                m.to_dict() if show_metrics else {"accuracy": m.accuracy} for m in results
            ],
            "mean_accuracy": mean_accuracy,
        }, indent=2))
        return

    table = Table(title="Cross-validation")
    table.add_column("Fold", justify="right", width=6)
    table.add_column("Accuracy", justify="right")
    table.add_column("Macro F1", justify="right")
    for i, m in enumerate(results, 1):
        table.add_row(str(i), f"{m.accuracy:.2%}", f"{m.macro_f1:.4f}")
    console.print(table)
    console.print(f"Mean accuracy: {mean_accuracy * 100:.2f}%", highlight=False, soft_wrap=True)

    if show_metrics:
        for i, m in enumerate(results, 1):
            _render_metrics(m, f"Fold {i}")


if __name__ == "__main__":
    main()
