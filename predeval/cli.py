"""Command line evaluation of a saved model on a dataset.

Usage:
    predeval-evaluate -d data.csv -m model.pkl
    predeval-evaluate -d data.csv -m model.pkl -r attributes.yaml -e a
    predeval-evaluate -d data.parquet -m model.pkl -e a --plot roc.png
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt

from predeval.config import load_config
from predeval.data.loader import read_instances
from predeval.evaluation.evaluator import Evaluator
from predeval.evaluation.metrics import MetricKind
from predeval.evaluation.rank import plot_roc_curve
from predeval.exceptions import EvaluationError, UnsupportedModeError
from predeval.models.io import read_predictor

logger = logging.getLogger(__name__)


def _metric_code(value: str) -> MetricKind:
    try:
        return MetricKind.from_code(value)
    except UnsupportedModeError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="predeval-evaluate",
        description="Evaluate a trained predictor on a labeled dataset.",
    )
    parser.add_argument("-d", dest="data_path", required=True, help="data set path")
    parser.add_argument("-m", dest="model_path", required=True, help="model path")
    parser.add_argument("-r", dest="attribute_path", default=None, help="attribute file path")
    parser.add_argument(
        "-e",
        dest="metric",
        type=_metric_code,
        default=None,
        help="AUC (a), Error (c), Logistic Loss (l), MAE (m), RMSE (r) (default: r)",
    )
    parser.add_argument("--config", default=None, help="YAML settings file")
    parser.add_argument("--plot", default=None, help="save the ROC curve to this path (AUC only)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run an evaluation and print ``"<MetricName>: <value>"``.

    Returns:
        Process exit status: 0 on success, 1 on evaluation failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (EvaluationError, FileNotFoundError) as e:
        parser.print_usage(sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    kind = args.metric or config.default_kind
    evaluator = Evaluator(positive_label=config.positive_label, tracking=config.tracking())

    try:
        instances = read_instances(args.data_path, args.attribute_path)
        model = read_predictor(args.model_path, positive_label=config.positive_label)
        result = evaluator.evaluate_detailed(kind, model, instances)
    except (EvaluationError, FileNotFoundError, ValueError) as e:
        logger.error(f"{kind.display_name} evaluation failed: {e}")
        return 1

    print(f"{kind.display_name}: {result.value}")

    if args.plot:
        if kind is not MetricKind.AUC:
            logger.warning("--plot is only supported for AUC; skipping")
        else:
            fig, ax = plt.subplots(figsize=(8, 6))
            plot_roc_curve(
                result.predictions,
                result.targets,
                title=f"ROC Curve - {Path(args.model_path).name}",
                ax=ax,
            )
            fig.savefig(args.plot, dpi=150, bbox_inches="tight")
            plt.close(fig)
            logger.info(f"ROC curve saved to: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
