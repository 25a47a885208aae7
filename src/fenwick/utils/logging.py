"""MLflow tracking for benchmark runs."""

from __future__ import annotations

from typing import Any

import mlflow


class ExperimentLogger:
    """Thin wrapper around MLflow for benchmark tracking."""

    def __init__(
        self,
        experiment_name: str,
        tracking_uri: str = "mlruns",
        run_name: str | None = None,
    ):
        mlflow.set_tracking_uri(tracking_uri)
        mlflow.set_experiment(experiment_name)
        self.run = mlflow.start_run(run_name=run_name)

    def log_params(self, params: dict[str, Any], prefix: str = "") -> None:
        """Log a (possibly nested) dict of parameters."""
        flat = self.flatten(params, prefix)
        # MLflow caps a single batch at 100 params
        items = list(flat.items())
        for i in range(0, len(items), 100):
            mlflow.log_params(dict(items[i : i + 100]))

    def log_metrics(self, metrics: dict[str, float], step: int | None = None) -> None:
        mlflow.log_metrics(metrics, step=step)

    def end(self) -> None:
        mlflow.end_run()

    def __enter__(self) -> ExperimentLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.end()

    @staticmethod
    def flatten(d: dict, prefix: str = "") -> dict[str, str]:
        """Flatten a nested dict into dot-separated keys with string values."""
        items: dict[str, str] = {}
        for k, v in d.items():
            key = f"{prefix}.{k}" if prefix else str(k)
            if isinstance(v, dict):
                items.update(ExperimentLogger.flatten(v, key))
            else:
                items[key] = str(v)
        return items
