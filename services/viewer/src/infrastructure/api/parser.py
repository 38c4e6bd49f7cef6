from __future__ import annotations

from typing import Any, List

from pydantic import ValidationError
from src.core.logger import get_logger
from src.domain.models import MetricSample

from .metrics import INVALID_SAMPLES_TOTAL, UNORDERED_RESPONSES_TOTAL

logger = get_logger("viewer.parser")


def parse_samples(payload: Any) -> List[MetricSample]:
    """Translate a decoded response body into an ascending sample list.

    Anything that is not a JSON array counts as zero samples. Records that
    fail validation are skipped individually.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.warning(
            "unexpected_metrics_payload", extra={"payload_type": type(payload).__name__}
        )
        return []

    samples: List[MetricSample] = []
    for record in payload:
        if not isinstance(record, dict):
            INVALID_SAMPLES_TOTAL.inc()
            continue
        try:
            samples.append(MetricSample.model_validate(record))
        except ValidationError as e:
            INVALID_SAMPLES_TOTAL.inc()
            logger.warning(
                "invalid_metric_sample", extra={"errors": e.error_count()}
            )
    return ensure_ascending(samples)


def ensure_ascending(samples: List[MetricSample]) -> List[MetricSample]:
    """Return samples strictly ascending by timestamp.

    Input that already satisfies this is returned as-is. Otherwise the list
    is sorted and duplicate instants collapse to the last record received.
    """
    if all(a.timestamp < b.timestamp for a, b in zip(samples, samples[1:])):
        return samples
    UNORDERED_RESPONSES_TOTAL.inc()
    logger.warning("unordered_metrics_response", extra={"count": len(samples)})
    by_instant = {}
    for sample in samples:
        by_instant[sample.timestamp] = sample
    return [by_instant[t] for t in sorted(by_instant)]
