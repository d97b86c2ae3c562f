"""
Sensor event visualization utilities
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Dict, List, Optional, Tuple


AXIS_LABELS = {
    "orientation": ("Pitch", "Roll", "Yaw"),
    "gyro": ("Pitch", "Roll", "Yaw"),
}

UNITS = {
    "position": "mm",
    "orientation": "rad",
    "acc": "m/s²",
    "gyro": "rad/s",
}


def plot_sensor_events(data: Dict[str, List[Tuple[int, List[float]]]],
                       channels: Optional[List[str]] = None,
                       output_file: Optional[str] = None):
    """
    Plot sensor events, one subplot per channel
    
    Args:
        data: Dictionary of channel -> [(timestamp_ns, values)], as returned by read_sensor_events
        channels: List of channel names to plot (default: every channel in data)
        output_file: Save the figure to this path instead of showing it
    """
    if channels is None:
        channels = list(data.keys())
    if not channels:
        raise ValueError("No channels to plot")
    
    fig, axes = plt.subplots(len(channels), 1, figsize=(12, 3 * len(channels)), sharex=True)
    if len(channels) == 1:
        axes = [axes]
    
    for i, channel in enumerate(channels):
        samples = data.get(channel, [])
        if samples:
            timestamps_sec = [t / 1e9 for t, _ in samples]
            values_array = np.array([values for _, values in samples])
            for axis, label in enumerate(AXIS_LABELS.get(channel, ("X", "Y", "Z"))):
                axes[i].plot(timestamps_sec, values_array[:, axis], label=label, alpha=0.7)
            axes[i].legend()
        
        axes[i].set_title(channel.replace("_", " ").title())
        axes[i].grid(True, alpha=0.3)
        axes[i].set_ylabel(UNITS.get(channel, "Value"))
    
    axes[-1].set_xlabel('Time (seconds)')
    plt.tight_layout()
    
    if output_file:
        fig.savefig(output_file)
        plt.close(fig)
    else:
        plt.show()
