import pytest

from ceres_bridge.device.metrics import HUMIDITY_METRIC, TEMPERATURE_METRIC, parse_metric

METRICS = """# HELP sensors_temperature Temperature in Celsius
# TYPE sensors_temperature gauge
sensors_temperature{sensor="dht22"} 23.4
sensors_temperature_max{sensor="dht22"} 30.0
sensors_humidity{sensor="dht22"} 41.25
"""


def test_parse_temperature_with_labels():
    assert parse_metric('sensors_temperature{sensor="a"} 21.5\n', TEMPERATURE_METRIC) == 21.5


def test_parse_picks_named_metric_from_full_page():
    assert parse_metric(METRICS, TEMPERATURE_METRIC) == pytest.approx(23.4)
    assert parse_metric(METRICS, HUMIDITY_METRIC) == pytest.approx(41.25)


def test_parse_without_labels_and_negative_value():
    assert parse_metric("sensors_temperature -4.5\n", TEMPERATURE_METRIC) == -4.5


def test_parse_accepts_crlf_and_timestamp():
    text = 'sensors_humidity{sensor="a"} 55 1700000000000\r\n'
    assert parse_metric(text, HUMIDITY_METRIC) == 55.0


def test_missing_metric_raises():
    with pytest.raises(ValueError):
        parse_metric('sensors_humidity{sensor="a"} 40\n', TEMPERATURE_METRIC)


def test_longer_metric_name_does_not_match():
    with pytest.raises(ValueError):
        parse_metric('sensors_temperature_max{sensor="a"} 30\n', TEMPERATURE_METRIC)


def test_comment_lines_are_ignored():
    with pytest.raises(ValueError):
        parse_metric("# sensors_temperature 21\n", TEMPERATURE_METRIC)
