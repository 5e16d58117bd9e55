from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from ..config import settings
from ..errors import CalibrationError
from .scoring import AppealInput, predict
from .weights import WeightRegistry, registry as default_registry

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE = 0.7
PREDICTED_SUCCESS = 0.5


@dataclass
class CalibrationCase:
    appeal: AppealInput
    actual_outcome: bool


@dataclass
class GroundEffectiveness:
    ground_id: str
    success_rate: float
    total_cases: int


@dataclass
class CalibrationReport:
    accuracy: float
    precision: float
    recall: float
    f1_score: float
    total_cases: int
    correct_predictions: int
    high_confidence_accuracy: float
    grounds_effectiveness: list[GroundEffectiveness] = field(default_factory=list)
    weights_adjusted: bool = False
    weights_version: int = 1

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "precision": self.precision,
            "recall": self.recall,
            "f1_score": self.f1_score,
            "total_cases": self.total_cases,
            "correct_predictions": self.correct_predictions,
            "high_confidence_accuracy": self.high_confidence_accuracy,
            "grounds_effectiveness": [
                {"ground_id": g.ground_id, "success_rate": g.success_rate, "total_cases": g.total_cases}
                for g in self.grounds_effectiveness
            ],
            "weights_adjusted": self.weights_adjusted,
            "weights_version": self.weights_version,
        }


def _ratio(numerator: int | float, denominator: int | float) -> float:
    return numerator / denominator if denominator else 0.0


def calibrate(
    cases: list[CalibrationCase],
    *,
    registry: WeightRegistry = default_registry,
    threshold: float | None = None,
    as_of: date | None = None,
) -> CalibrationReport:
    """Replay historical outcomes and publish nudged weights when accuracy is poor.

    Every case is scored against the same snapshot, taken once up front, so a
    publish from elsewhere mid-run cannot mix weight versions in one report.
    """
    if not cases:
        raise CalibrationError("Calibration needs at least one historical case")

    threshold = settings.calibration_accuracy_threshold if threshold is None else threshold
    as_of = as_of or date.today()
    snapshot = registry.current()
    logger.info("Calibrating weights v%d against %d cases", snapshot.version, len(cases))

    correct = 0
    high_total = 0
    high_correct = 0
    tp = tn = fp = fn = 0
    effectiveness: dict[str, list[int]] = {}

    for case in cases:
        if not isinstance(case.actual_outcome, bool):
            raise CalibrationError(f"Outcome must be a boolean, got {case.actual_outcome!r}")
        prediction = predict(case.appeal, as_of=as_of, weights=snapshot)
        predicted = prediction.success_probability > PREDICTED_SUCCESS
        high_confidence = prediction.confidence > HIGH_CONFIDENCE

        if predicted == case.actual_outcome:
            correct += 1
            if high_confidence:
                high_correct += 1
        if high_confidence:
            high_total += 1

        if predicted and case.actual_outcome:
            tp += 1
        elif not predicted and not case.actual_outcome:
            tn += 1
        elif predicted:
            fp += 1
        else:
            fn += 1

        for ground in prediction.recommended_grounds:
            stats = effectiveness.setdefault(ground.id, [0, 0])
            stats[0] += 1
            if case.actual_outcome:
                stats[1] += 1

    accuracy = correct / len(cases)
    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    f1 = _ratio(2 * precision * recall, precision + recall)

    grounds = [
        GroundEffectiveness(ground_id, successful / total, total)
        for ground_id, (total, successful) in effectiveness.items()
    ]
    grounds.sort(key=lambda g: g.success_rate, reverse=True)

    adjusted = accuracy < threshold
    version = snapshot.version
    if adjusted:
        published = registry.publish(snapshot.nudged())
        version = published.version
        logger.info("Accuracy %.1f%% below %.1f%%, nudged weights", accuracy * 100, threshold * 100)

    logger.info(
        "Calibration complete - accuracy %.1f%%, precision %.1f%%, recall %.1f%%",
        accuracy * 100,
        precision * 100,
        recall * 100,
    )

    return CalibrationReport(
        accuracy=accuracy,
        precision=precision,
        recall=recall,
        f1_score=f1,
        total_cases=len(cases),
        correct_predictions=correct,
        high_confidence_accuracy=_ratio(high_correct, high_total),
        grounds_effectiveness=grounds,
        weights_adjusted=adjusted,
        weights_version=version,
    )
