"""
Ceres HTTP climate bridge - discovers ceres-http devices over mDNS and
exposes their sensors and heater-cooler as accessories
"""

__version__ = "1.0.0"
