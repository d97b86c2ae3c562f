#!/usr/bin/env python3
"""
Command-line interface for simulated sensor telemetry
"""

import argparse
import sys
import os

# Add the src directory to Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from sensor_sim import TelemetryRecorder
from mcap_utils import read_sensor_events, plot_sensor_events


def main(argv=None):
    """Main entry point for the telemetry generator CLI"""
    parser = argparse.ArgumentParser(
        description="Generate simulated position, orientation, accelerometer and gyroscope telemetry",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    
    parser.add_argument(
        "-p", "--plan",
        help="Path to a JSON plan file (overrides the options below)"
    )
    
    parser.add_argument(
        "-o", "--output", 
        required=True, 
        help="Output MCAP file path"
    )
    
    parser.add_argument(
        "-d", "--duration",
        type=float,
        default=10.0,
        help="Duration of the simulated window in seconds"
    )
    
    parser.add_argument(
        "-a", "--activity",
        type=float,
        default=0.3,
        help="Activity level between 0 (still) and 1"
    )
    
    parser.add_argument(
        "-s", "--seed",
        type=int,
        help="Random seed for reproducible output"
    )
    
    parser.add_argument(
        "-i", "--interval",
        type=int,
        default=66,
        help="Sampling interval in milliseconds"
    )
    
    parser.add_argument(
        "--plot",
        help="Also plot the recorded channels to this PNG file"
    )
    
    parser.add_argument(
        "-q", "--quiet", 
        action="store_true", 
        help="Suppress verbose output"
    )
    
    args = parser.parse_args(argv)
    
    if args.plan and not os.path.exists(args.plan):
        print(f"Error: Plan file '{args.plan}' does not exist", file=sys.stderr)
        return 1
    
    try:
        recorder = TelemetryRecorder()
        if args.plan:
            recorder.generate(plan_file=args.plan, output_file=args.output, verbose=not args.quiet)
        else:
            plan = {
                "start_time_ns": 0,
                "duration_s": args.duration,
                "activity": args.activity,
                "seed": args.seed,
                "sample_interval_ms": args.interval,
            }
            recorder.generate(plan_data=plan, output_file=args.output, verbose=not args.quiet)
        
        if args.plot:
            plot_sensor_events(read_sensor_events(args.output), output_file=args.plot)
            if not args.quiet:
                print(f"Saved plot: {args.plot}")
        
    except Exception as e:
        print(f"Error generating telemetry: {e}", file=sys.stderr)
        return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
