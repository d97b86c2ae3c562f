"""
MCAP reading utilities
"""

import json
from mcap.reader import make_reader
from typing import List, Dict, Tuple, Optional


SENSOR_CHANNELS = ["position", "orientation", "acc", "gyro"]


def print_mcap_summary(mcap_file: str):
    """Print the channels and message counts of an MCAP file"""
    with open(mcap_file, "rb") as f:
        summary = make_reader(f).get_summary()

    if summary is None:
        print("No summary available.")
        return

    counts = summary.statistics.channel_message_counts if summary.statistics else {}
    print("MCAP File Summary:")
    for channel_id, channel in summary.channels.items():
        print(f"  - Channel: {channel.topic} ({counts.get(channel_id, 0)} messages)")


def read_sensor_events(mcap_file: str, channels: Optional[List[str]] = None) -> Dict[str, List[Tuple[int, List[float]]]]:
    """
    Read recorded sensor events from an MCAP file
    
    Args:
        mcap_file: Path to MCAP file
        channels: List of channel names to read (default: all sensor channels)
    
    Returns:
        Dictionary with channel names as keys and lists of (timestamp, values) tuples as values
    """
    if channels is None:
        channels = SENSOR_CHANNELS
    
    data = {channel: [] for channel in channels}
    
    with open(mcap_file, "rb") as f:
        reader = make_reader(f)
        
        for schema, channel, message in reader.iter_messages(topics=channels):
            json_data = json.loads(message.data.decode("utf8"))
            data[channel.topic].append((json_data["timestamp"], json_data["values"]))
    
    return data
