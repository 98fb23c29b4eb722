"""Command-line entry point: ``python -m cattree --dataset_path car.data --schema_name car --metric gain``."""

from __future__ import annotations

from cattree.logging import enable_logging
from cattree.pipeline import run_experiment
from cattree.settings import ExperimentSettings
from cattree.tree.models import format_tree


def main() -> None:
    """Parse settings from the environment and command line, then run one experiment."""
    settings = ExperimentSettings(_cli_parse_args=True, _cli_prog_name="cattree")  # type: ignore[call-arg]

    with enable_logging(level=settings.log_level, log_format=settings.log_format):
        tree, result = run_experiment(settings)

    print(format_tree(tree))
    print(f"\nLoaded {result.sample_count} samples ({result.train_size} train / {result.test_size} test)")
    print(f"Target attribute: {result.label_name}")
    print(f"Tree depth: {result.depth}, leaves: {result.leaf_count}, nodes: {result.node_count}")
    print(f"Tree Building Time: {result.build_seconds:.3f} seconds")
    print(f"Validation Accuracy: {result.evaluation.accuracy:.2f}%")
    if result.predictions_path is not None:
        print(f"All predictions saved to {result.predictions_path}")
    if result.tree_path is not None:
        print(f"Tree saved to {result.tree_path}")


if __name__ == "__main__":
    main()
