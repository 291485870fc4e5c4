"""
Configuration loader for the Ceres climate bridge
Loads and validates configuration from YAML files
"""

import yaml
import logging
from typing import Dict, Any, List
from pathlib import Path
from datetime import datetime
import pytz

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_TYPE = "_ceres-http._tcp.local."

def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file with validation
    """
    try:
        config_file = Path(config_path)
        if not config_file.exists():
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError("Configuration root must be a mapping")

        config = _apply_defaults(config)
        _validate_config(config)

        logger.info(f"Configuration loaded from {config_path}")
        return config

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

def _validate_config(config: Dict) -> None:
    """Validate configuration values after defaults were applied"""
    discovery = config['discovery']
    service_type = discovery['service_type']
    if not isinstance(service_type, str) or not service_type.endswith('.local.'):
        raise ValueError("discovery.service_type must be a fully qualified mDNS type ending in '.local.'")

    if discovery['resolve_timeout_ms'] <= 0:
        raise ValueError("discovery.resolve_timeout_ms must be positive")

    if config['device']['request_timeout'] <= 0:
        raise ValueError("device.request_timeout must be positive")

    port = config['api']['port']
    if not isinstance(port, int) or not 0 < port < 65536:
        raise ValueError(f"api.port is not a valid port: {port}")

    _validate_known_devices(config['known_devices'])

    level = config['logging']['level']
    if not isinstance(getattr(logging, str(level).upper(), None), int):
        raise ValueError(f"Unknown logging level: {level}")

    tz_name = config['logging']['timezone']
    if tz_name not in pytz.all_timezones_set:
        raise ValueError(f"Unknown logging timezone: {tz_name}")

def _validate_known_devices(known_devices: List) -> None:
    """Every seed device needs a service name and a last-known address"""
    if not isinstance(known_devices, list):
        raise ValueError("known_devices must be a list")

    for index, device in enumerate(known_devices):
        if not isinstance(device, dict):
            raise ValueError(f"known_devices[{index}] must be a mapping")
        for field in ('name', 'address'):
            if not device.get(field):
                raise ValueError(f"Missing required field known_devices[{index}].{field}")

def _apply_defaults(config: Dict) -> Dict:
    """Apply default values to configuration"""

    # Discovery defaults
    if not config.get('discovery'):
        config['discovery'] = {}
    discovery_defaults = {
        'enabled': True,
        'service_type': DEFAULT_SERVICE_TYPE,
        'resolve_timeout_ms': 3000
    }
    for key, default_value in discovery_defaults.items():
        if key not in config['discovery']:
            config['discovery'][key] = default_value

    # Device client defaults
    if not config.get('device'):
        config['device'] = {}
    if 'request_timeout' not in config['device']:
        config['device']['request_timeout'] = 5

    # API defaults
    if not config.get('api'):
        config['api'] = {}
    api_defaults = {
        'host': '0.0.0.0',
        'port': 8000
    }
    for key, default_value in api_defaults.items():
        if key not in config['api']:
            config['api'][key] = default_value

    # Accessory information shown for every device
    if not config.get('accessory_info'):
        config['accessory_info'] = {}
    info_defaults = {
        'manufacturer': 'Custom-Made',
        'model': 'ESP8266-Arduino',
        'serial_number': 'esp8266'
    }
    for key, default_value in info_defaults.items():
        if key not in config['accessory_info']:
            config['accessory_info'][key] = default_value

    if config.get('known_devices') is None:
        config['known_devices'] = []

    # Logging defaults
    if not config.get('logging'):
        config['logging'] = {}
    logging_defaults = {
        'level': 'INFO',
        'file': 'logs/ceres_bridge.log',
        'console_output': True,
        'timezone': 'UTC'
    }
    for key, default_value in logging_defaults.items():
        if key not in config['logging']:
            config['logging'][key] = default_value

    return config


class TimezoneFormatter(logging.Formatter):
    """Formatter that renders timestamps in a configured timezone"""

    def __init__(self, fmt=None, tz_name: str = 'UTC'):
        super().__init__(fmt)
        self.tz = pytz.timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        else:
            # Default format: YYYY-MM-DD HH:MM:SS TZ
            return dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def setup_logging(config: Dict) -> None:
    """Setup logging based on configuration"""
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO')
    tz_name = log_config.get('timezone', 'UTC')

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = TimezoneFormatter(log_format, tz_name)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))

    # Console handler
    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    # File handler
    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logger.info(f"Logging configured: level={level}, timezone={tz_name}, console={log_config.get('console_output', True)}, file={log_file}")

def get_sample_config() -> Dict:
    """Return a sample configuration for reference"""
    return {
        "discovery": {
            "enabled": True,
            "service_type": DEFAULT_SERVICE_TYPE,
            "resolve_timeout_ms": 3000
        },
        "device": {
            "request_timeout": 5
        },
        "api": {
            "host": "0.0.0.0",
            "port": 8000
        },
        "accessory_info": {
            "manufacturer": "Custom-Made",
            "model": "ESP8266-Arduino",
            "serial_number": "esp8266"
        },
        "known_devices": [
            {"name": "living-room-ac", "address": "10.0.0.5"}
        ],
        "logging": {
            "level": "INFO",
            "file": "logs/ceres_bridge.log",
            "console_output": True,
            "timezone": "UTC"
        }
    }
