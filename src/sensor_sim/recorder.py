"""
Record simulated sensor telemetry to MCAP files
"""

import json
import os
from typing import Dict, List, Optional

import numpy as np
from mcap.writer import Writer

from .config import SimulatorConfig
from .manager import SensorManager
from .simulator import NS_PER_MS
from .types import SensorType


class TelemetryRecorder:
    """Sample a sensor manager on a fixed grid and write the results to MCAP"""

    def __init__(self):
        self.channel_names = ["position", "orientation", "acc", "gyro"]

    def load_plan(self, plan_file: str) -> dict:
        """Load the plan JSON file"""
        if not os.path.exists(plan_file):
            raise FileNotFoundError(f"Plan file '{plan_file}' not found")

        with open(plan_file, 'r') as f:
            return json.load(f)

    def create_manager(self, plan: dict) -> SensorManager:
        """Create a SensorManager from plan data

        Plan keys: start_time_ns (default 0), duration_s (required),
        activity (default 0.5), seed (default None) and an optional
        simulator configuration block.
        """
        if "duration_s" not in plan:
            raise ValueError("Plan is missing 'duration_s'")

        start = int(plan.get("start_time_ns", 0))
        end = start + int(plan["duration_s"] * 1e9)
        config = SimulatorConfig.from_dict(plan.get("simulator", {}))
        rng = np.random.default_rng(plan.get("seed"))

        return SensorManager(start, end, plan.get("activity", 0.5), rng=rng, config=config)

    def write_message(self, writer: Writer, channel_ids: Dict[str, int],
                      channel_name: str, values: List[float], current_time: int):
        """Write a message to the MCAP file"""
        data = {
            "id": channel_name,
            "timestamp": current_time,
            "values": values
        }
        serialized = json.dumps(data)

        writer.add_message(
            channel_ids[channel_name],
            log_time=current_time,
            publish_time=current_time,
            data=serialized.encode()
        )

    def setup_mcap_writer(self, writer: Writer) -> Dict[str, int]:
        """Setup MCAP writer with schema and channels"""
        schema_data = {
            "title": "sensor_event",
            "type": "object",
            "properties": {
                "values": {
                    "type": "array",
                    "items": {
                        "type": "number"
                    }
                }
            }
        }

        schema_id = writer.register_schema(
            name="sensor_event",
            encoding="jsonschema",
            data=json.dumps(schema_data).encode()
        )

        channel_ids = {}
        for name in self.channel_names:
            channel_ids[name] = writer.register_channel(
                topic=name,
                message_encoding="json",
                schema_id=schema_id
            )

        return channel_ids

    def record(self, manager: SensorManager, output_file: str,
               interval_ms: Optional[int] = None, verbose: bool = True) -> int:
        """Write position, orientation, accelerometer and gyroscope samples

        Samples are taken at t = start, start + interval, ... while t < end.

        Args:
            manager: Sensor manager to sample
            output_file: Output MCAP file path
            interval_ms: Sampling interval (default: the manager's derivation step)
            verbose: Whether to print progress information

        Returns:
            Number of sample instants written
        """
        if interval_ms is None:
            interval_ms = manager.config.derivation_step_ms
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        interval = interval_ms * NS_PER_MS

        if verbose:
            print(f"Recording {(manager.end - manager.start) / 1e9:.1f}s every {interval_ms} ms")

        count = 0
        with open(output_file, "wb") as f:
            writer = Writer(f)
            writer.start()
            channel_ids = self.setup_mcap_writer(writer)

            current_time = manager.start
            while current_time < manager.end:
                position = manager.position(current_time)
                self.write_message(writer, channel_ids, "position", position.to_list(), position.timestamp)

                orientation = manager.orientation(current_time)
                self.write_message(writer, channel_ids, "orientation", orientation.to_list(), orientation.timestamp)

                acc = manager.get(SensorType.ACCELEROMETER, current_time)
                self.write_message(writer, channel_ids, "acc", acc.to_list(), acc.timestamp)

                gyro = manager.get(SensorType.GYROSCOPE, current_time)
                self.write_message(writer, channel_ids, "gyro", gyro.to_list(), gyro.timestamp)

                count += 1
                current_time += interval

            writer.finish()

        if verbose:
            file_size = os.path.getsize(output_file)
            print(f"Wrote {count} samples per channel to {output_file} ({file_size} bytes)")

        return count

    def generate(self, plan_file: str = None, output_file: str = None, plan_data: dict = None,
                 verbose: bool = True) -> SensorManager:
        """Generate telemetry from a plan file or plan data

        Args:
            plan_file: Path to JSON plan file
            output_file: Output MCAP file path
            plan_data: Plan data as dictionary (takes precedence over plan_file)
            verbose: Whether to print progress information

        Returns:
            The SensorManager that was recorded
        """
        if plan_data is not None:
            plan = plan_data
            if verbose:
                print("Using provided plan data")
        elif plan_file is not None:
            plan = self.load_plan(plan_file)
            if verbose:
                print(f"Plan file: {plan_file}")
        else:
            raise ValueError("Either plan_file or plan_data must be provided")

        if output_file is None:
            raise ValueError("output_file must be provided")

        manager = self.create_manager(plan)
        if verbose:
            print(f"Activity: {manager.simulator.activity}")
            for axis, profile in zip("xyz", manager.simulator.position_profiles):
                print(f"Position {axis}: {profile}")
            for axis, profile in zip(("pitch", "roll", "yaw"), manager.simulator.orientation_profiles):
                print(f"Orientation {axis}: {profile}")

        self.record(manager, output_file, plan.get("sample_interval_ms"), verbose=verbose)
        return manager
