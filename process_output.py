#!/usr/bin/env python

"""
process_output.py: Parse and process run logs from Steiner system searches.

This module extracts the parameter set and search metrics of every search
block in a driver run log and optionally saves the results to a CSV file.
"""

import re
import sys
import pandas as pd
from typing import List, Dict, Union, Optional, Any

PARAMS_HEADER = '***********params************'
INT_PARAMS = ['t', 'k', 'n', 'max_solutions']

METRIC_PATTERNS = {
    'solutions': (r'^solutions: (\d+)', int),
    'verified': (r'verified: (True|False)', lambda v: v == 'True'),
    'blocks_per_design': (r'blocks per design: (\d+)', int),
    'expansions': (r'expansions: (\d+)', int),
    'dead_ends': (r'dead ends: (\d+)', int),
    'explored': (r'explored: (\d+)', int),
    'elapsed': (r'elapsed: ([0-9]*\.?[0-9]+(?:[eE][-+]?\d+)?)', float),
}


def parse_metrics(line: str) -> Dict[str, Any]:
    """Extract the metric values from a run log metrics line."""
    metrics = {}
    for key, (pattern, convert) in METRIC_PATTERNS.items():
        match = re.search(pattern, line)
        if match:
            metrics[key] = convert(match.group(1))
    return metrics


def process_out(input_file: str, output_file: Optional[str] = None, out_csv: bool = True) -> Union[List[Dict[str, Any]], None]:
    """
    Process a run log to extract parameter information and metrics.

    Args:
        input_file (str): Path to the run log
        output_file (str, optional): Path to save the CSV output (if out_csv=True)
        out_csv (bool): Whether to save results as CSV (True) or return data structure (False)

    Returns:
        Union[List[Dict[str, Any]], None]: List of parameter blocks if out_csv=False, otherwise None

    Notes:
        Only blocks closed by a metrics line are returned, so a search that was
        cut off mid-run is treated as not run.
    """
    try:
        with open(input_file, 'r') as f:
            lines = f.readlines()
    except FileNotFoundError:
        print(f"Error: Could not find input file '{input_file}'")
        return [] if not out_csv else None

    blocks = []
    block_data = {}
    in_block = False

    for line in lines:
        line = line.strip()

        if line.startswith(PARAMS_HEADER):
            block_data = {}
            in_block = True
            continue

        if "Final analysis" in line:
            break

        if not in_block:
            continue

        # Format: solutions: 1; verified: True; blocks per design: 7; expansions: 12; dead ends: 0; explored: 12; elapsed: 0.01
        if line.startswith('solutions:') and 'expansions:' in line:
            block_data.update(parse_metrics(line))
            blocks.append(block_data.copy())
            in_block = False
            continue

        if ': ' in line:
            key, value = line.split(': ', 1)
            if key in INT_PARAMS:
                try:
                    block_data[key] = int(value)
                except ValueError:
                    block_data[key] = value

    if not out_csv:
        return blocks

    if blocks:
        df = pd.DataFrame(blocks)

        desired_columns = INT_PARAMS + list(METRIC_PATTERNS)
        available_columns = [col for col in desired_columns if col in df.columns]
        df = df[available_columns]

        sort_columns = [col for col in ('n', 't', 'k') if col in df.columns]
        if sort_columns:
            df.sort_values(by=sort_columns, inplace=True)

        if output_file:
            try:
                df.to_csv(output_file, index=False)
                print(f"Results saved to {output_file}")
            except OSError as e:
                print(f"Error saving results to CSV: {e}")
    else:
        print("Warning: No valid data blocks found in the input file")

    return None


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python process_output.py <input_file> [output_file]")
        sys.exit(1)

    input_file = sys.argv[1]
    output_file = f'{input_file}_extract.csv' if len(sys.argv) < 3 else sys.argv[2]

    process_out(input_file, output_file)
