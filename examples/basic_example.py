#!/usr/bin/env python3
"""
Example: Simulate a device, derive sensor events and record them
"""

import os
import sys

import numpy as np

# Add the src directory to Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from sensor_sim import SensorManager, SensorType, TelemetryRecorder
from mcap_utils import read_sensor_events, print_mcap_summary


def main():
    """Demonstrate the basic simulation workflow"""
    
    print("=== Basic Sensor Simulation Example ===\n")
    
    # Configuration
    output_file = "examples/basic_telemetry.mcap"
    start = 0
    end = 10 * 1_000_000_000
    
    # Step 1: Build the simulation
    print("1. Building a 10s simulation with activity 0.3...")
    manager = SensorManager(start, end, 0.3, rng=np.random.default_rng(42))
    
    # Step 2: Query a few derived events
    print("\n2. Sampling derived events...")
    for t in (0, end // 2, end):
        acc = manager.get(SensorType.ACCELEROMETER, t)
        gyro = manager.get(SensorType.GYROSCOPE, t)
        print(f"   t={t / 1e9:.1f}s {acc.sensor}: {np.round(acc.data, 4).tolist()}")
        print(f"   t={t / 1e9:.1f}s {gyro.sensor}: {np.round(gyro.data, 4).tolist()}")
    
    # Step 3: Record the window and read it back
    print("\n3. Recording telemetry...")
    TelemetryRecorder().record(manager, output_file)
    print_mcap_summary(output_file)
    
    data = read_sensor_events(output_file)
    print("   Data summary:")
    for channel, samples in data.items():
        if samples:
            duration = (samples[-1][0] - samples[0][0]) / 1e9
            print(f"     {channel}: {len(samples)} samples over {duration:.1f}s")
    
    print(f"\n=== Example completed! ===")
    print(f"Generated file: {output_file}")


if __name__ == "__main__":
    main()
