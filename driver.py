#!/usr/bin/env python

"""
driver.py: Module for running Steiner system searches across multiple parameter sets.

This module sweeps the (t, k, n) parameter grid given in a YAML config, runs an
exhaustive SteinerSearcher for each admissible parameter set, verifies every
design found, and writes a run log plus a CSV summary. Runs that were
interrupted can be resumed by pointing at the previous run log.

Dependencies:
    - steiner_search: Exhaustive search engine
    - design_check: Admissibility conditions and design verification
    - query_ljcr: Optional cross-check against the La Jolla Covering Repository
    - process_output: Module to parse the run log

    Config layout:
        search:
          t: [2]
          k: [3]
          n: [7, 9]
          max_solutions: 1
        run:
          report_interval: 1.0
          ljcr_check: false
"""

import os
import sys
import time
import argparse
import traceback
from datetime import datetime
from itertools import product

import yaml
import pandas as pd

import design_check
import process_output
import query_ljcr
from steiner_search import SteinerSearcher

PARAM_KEYS = ['t', 'k', 'n', 'max_solutions']
STAT_COLUMNS = ['solutions', 'verified', 'blocks_per_design', 'expansions',
                'dead_ends', 'explored', 'elapsed']


def load_config(path):
    """
    Read a YAML run configuration.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, 'r') as stream:
        return yaml.safe_load(stream)


def log_initial_info(output_path, config):
    """Log initial information about the search run."""
    with open(output_path, 'w') as f:
        f.write('Beginning of run\n')
        f.write(f'{datetime.now()}\n')
        for section in ('search', 'run'):
            f.write(f'{section} params:\n')
            for k, v in (config.get(section) or {}).items():
                f.write(f'{k}: {v}\n')
        f.write('----------------------------\n\n')


def get_valid_configurations(config, output_path):
    """
    Generate valid parameter configurations for searching.

    Every value in the "search" section may be a scalar or a list; the
    cartesian product of all lists is swept. Parameter sets outside t < k < n,
    or failing the divisibility conditions for a Steiner system, are skipped
    with a warning in the run log.

    Args:
        config (dict): Configuration dictionary
        output_path (str): Path for output file

    Returns:
        list: List of valid configuration dictionaries
    """
    if not isinstance(config.get('search'), dict):
        raise KeyError('The input yml file needs to contain a "search" section.')

    hyper_config_dict = dict(config['search'])
    hyper_config_dict.setdefault('max_solutions', 0)
    for key in ('t', 'k', 'n'):
        if key not in hyper_config_dict:
            raise KeyError(f'The "search" section needs a "{key}" entry.')

    keys = list(hyper_config_dict.keys())
    values = [v if isinstance(v, list) else [v] for v in hyper_config_dict.values()]
    config_dicts = [dict(zip(keys, combination)) for combination in product(*values)]

    valid_configs = []
    with open(output_path, 'a') as f:
        for config_dict in config_dicts:
            t, k, n = config_dict['t'], config_dict['k'], config_dict['n']
            if not t < k < n:
                f.write('Warning: parameters must follow t < k < n, so this set will not be run\n')
                f.write(f'{config_dict}\n')
                continue
            if not design_check.is_admissible(t, k, n):
                f.write('Warning: no Steiner system exists for the following parameter set, so it will not be run\n')
                f.write(f'{config_dict}\n')
                continue
            if config_dict not in valid_configs:
                valid_configs.append(config_dict)

    return valid_configs


def filter_already_run_configs(valid_configs, interrupted_file):
    """Filter out configurations that have already been run."""
    if not interrupted_file:
        return valid_configs

    already_run_configs = process_output.process_out(interrupted_file, None, False)
    filtered_configs = [
        config for config in valid_configs
        if not any(all(config[k] == run_config.get(k) for k in PARAM_KEYS) for run_config in already_run_configs)
    ]

    print(f'{len(filtered_configs)} parameter sets will be run')
    return filtered_configs


def run_search(param_set, output_path, report_interval=1.0, verbose=False, ljcr_check=False):
    """
    Run one Steiner system search with the given parameter set.

    Args:
        param_set (dict): Dictionary with t, k, n and max_solutions
        output_path (str): Path for the run log
        report_interval (float): Seconds between progress lines
        verbose (bool): Print progress and designs to stdout
        ljcr_check (bool): Also look the parameters up in the LJCR

    Returns:
        dict: Search statistics keyed by STAT_COLUMNS
    """
    t, k, n = param_set['t'], param_set['k'], param_set['n']
    max_solutions = param_set.get('max_solutions') or 0

    with open(output_path, 'a') as f:
        f.write('***********params************\n')
        for key in PARAM_KEYS:
            f.write(f'{key}: {param_set.get(key, 0)}\n')
        f.write(f'{datetime.now()}\n')

    searcher = SteinerSearcher(t, k, n, report_interval=report_interval,
                               verbose=verbose, logfile=output_path)

    start = time.perf_counter()
    designs = []
    for design in searcher:
        designs.append(design)
        with open(output_path, 'a') as f:
            f.write(f'design {len(designs)}: {design}\n')
        if verbose:
            print(design)
        if max_solutions and len(designs) >= max_solutions:
            break
    elapsed = time.perf_counter() - start

    verified = all(design_check.is_steiner_system(d, t, k, n) for d in designs)
    stats = searcher.stats()
    result = {
        'solutions': len(designs),
        'verified': verified,
        'blocks_per_design': len(designs[0]) if designs else 0,
        'expansions': stats['expansions'],
        'dead_ends': stats['dead_ends'],
        'explored': stats['explored'],
        'elapsed': round(elapsed, 4),
    }

    with open(output_path, 'a') as f:
        if ljcr_check:
            try:
                known = query_ljcr.known_steiner_system(n, k, t)
                f.write(f'ljcr: {"known Steiner system" if known else "no exact design listed"}\n')
            except Exception:
                traceback.print_exc()
                f.write('ljcr: query failed\n')
        f.write(
            f"solutions: {result['solutions']}; "
            f"verified: {result['verified']}; "
            f"blocks per design: {result['blocks_per_design']}; "
            f"expansions: {result['expansions']}; "
            f"dead ends: {result['dead_ends']}; "
            f"explored: {result['explored']}; "
            f"elapsed: {result['elapsed']}\n\n"
        )

    return result


def search_designs(config=None, out=None, verbose=False, interrupted=None):
    """
    Execute Steiner system searches for every valid parameter set.

    Args:
        config (dict): Configuration dictionary, usually from YAML file
        out (str): Output file path prefix; the run log is written to out
            and the summary to f'{out}.csv'
        verbose (bool): Enable verbose output. Defaults to False.
        interrupted (str): Path to previous run log for resumed runs

    Returns:
        pandas.DataFrame: One row per parameter set that was run

    Raises:
        KeyError: If required configuration sections are missing
    """
    log_initial_info(out, config)

    valid_configs = get_valid_configurations(config, out)

    if interrupted:
        valid_configs = filter_already_run_configs(valid_configs, interrupted)

    run_config = config.get('run') or {}
    report_interval = run_config.get('report_interval', 1.0)
    ljcr_check = run_config.get('ljcr_check', False)

    results = []
    for param_set in valid_configs:
        print(f"Searching S({param_set['t']},{param_set['k']},{param_set['n']})")
        results.append(run_search(param_set, out, report_interval, verbose, ljcr_check))

    config_df = pd.DataFrame(valid_configs, columns=PARAM_KEYS)
    stats_df = pd.DataFrame(results, columns=STAT_COLUMNS)
    results_df = pd.concat([config_df, stats_df], axis=1)
    results_df = results_df.sort_values(by=['n', 't', 'k'], ascending=True)

    with open(out, 'a') as f:
        f.write('\n--------------------------------------------\n')
        f.write('Final analysis\n')
        f.write(f'{len(results_df)} parameter sets searched; '
                f'{int(results_df["solutions"].sum()) if len(results_df) else 0} designs found\n')

    results_df.to_csv(f'{out}.csv', index=False)
    return results_df


def main():
    parser = argparse.ArgumentParser(description='Search for Steiner systems over a grid of parameters.')
    parser.add_argument("-c", "--config", help="path of yaml config file", required=True)
    parser.add_argument("-v", "--verbose", help="increase verbosity", action='store_true')
    parser.add_argument("-o", "--outpath", help="path to output file")
    parser.add_argument("-i", "--interrupted", help="previous output file", default=None)

    args = parser.parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
    except yaml.YAMLError as e:
        print(e)
        sys.exit(1)
    except FileNotFoundError:
        print(f"Config file {args.config} not found")
        sys.exit(1)

    if args.outpath:
        outpath = args.outpath
    else:
        config_abs_path = os.path.abspath(args.config)
        project_name = os.path.splitext(os.path.basename(args.config))[0]
        outpath = os.path.join(os.path.dirname(config_abs_path), 'out', f'{project_name}.out')

    out_dir = os.path.dirname(outpath)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    search_designs(
        config=config,
        out=outpath,
        verbose=args.verbose,
        interrupted=args.interrupted,
    )


if __name__ == "__main__":
    main()
