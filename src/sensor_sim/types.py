"""
Value types produced by the simulator and the sensor manager
"""

from enum import IntEnum
from typing import List, Optional


class SensorType(IntEnum):
    """Sensor a derived event comes from"""
    ACCELEROMETER = 0
    GYROSCOPE = 1
    MAGNETOMETER = 2

    @property
    def display_name(self) -> str:
        return _SENSOR_NAMES[self]

    def __str__(self):
        return self.display_name


_SENSOR_NAMES = {
    SensorType.ACCELEROMETER: "Accelerometer",
    SensorType.GYROSCOPE: "Gyroscope",
    SensorType.MAGNETOMETER: "Magnetometer",
}


class Position:
    """Device position at a timestamp

    values[0..2]: displacement along x, y, z in millimetres
    """
    def __init__(self, timestamp: int, values: List[float]):
        self.timestamp = timestamp
        self.values = values

    def to_list(self) -> List[float]:
        return list(self.values)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.timestamp == other.timestamp and self.values == other.values

    def __repr__(self):
        return f"Position(timestamp={self.timestamp}, values={self.values})"


class Orientation:
    """Device orientation at a timestamp

    values[0..2]: pitch, roll and yaw in radians, each in (-pi, pi]
    """
    def __init__(self, timestamp: int, values: List[float]):
        self.timestamp = timestamp
        self.values = values

    def to_list(self) -> List[float]:
        return list(self.values)

    def __eq__(self, other):
        if not isinstance(other, Orientation):
            return NotImplemented
        return self.timestamp == other.timestamp and self.values == other.values

    def __repr__(self):
        return f"Orientation(timestamp={self.timestamp}, values={self.values})"


class Event:
    """Derived sensor reading

    Accelerometer: data[0..2] is acceleration along x, y, z in m/s^2
    Gyroscope: data[0..2] is rotation rate around x, y, z in rad/s
    Magnetometer: not simulated, data is always zero
    """
    def __init__(self, sensor: SensorType, timestamp: int = 0, data: Optional[List[float]] = None):
        self.sensor = sensor
        self.timestamp = timestamp
        self.data = data if data is not None else [0.0, 0.0, 0.0]

    def to_list(self) -> List[float]:
        return list(self.data)

    def __repr__(self):
        return f"Event(sensor={self.sensor}, timestamp={self.timestamp}, data={self.data})"
