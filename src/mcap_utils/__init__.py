"""
MCAP utilities for recorded sensor telemetry
"""

from .reader import (
    read_sensor_events,
    print_mcap_summary,
    SENSOR_CHANNELS
)

from .visualization import (
    plot_sensor_events
)

__all__ = [
    'read_sensor_events',
    'print_mcap_summary',
    'SENSOR_CHANNELS',
    'plot_sensor_events'
]
