"""
Plaintext metrics parsing (metric_name{labels} value, one sample per line)
"""

import re

TEMPERATURE_METRIC = "sensors_temperature"
HUMIDITY_METRIC = "sensors_humidity"

_FLOAT = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"

def _metric_pattern(name: str) -> "re.Pattern":
    return re.compile(
        rf"^{re.escape(name)}(?:\{{[^}}]*\}})?[ \t]+({_FLOAT})(?:[ \t]+-?\d+)?[ \t\r]*$",
        re.MULTILINE,
    )

def parse_metric(text: str, name: str) -> float:
    """
    Return the value of the first sample of ``name``.
    Raises ValueError when no line carries the metric.
    """
    match = _metric_pattern(name).search(text)
    if match is None:
        raise ValueError(f"Metric {name} not found")
    return float(match.group(1))
