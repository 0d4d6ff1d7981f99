"""
Utility functions for the LFQ bait pipeline.

Internal helpers for configuration loading, directory management,
locale-aware number parsing, identifier splitting and data serialization.
"""

import os
import pickle

import pandas as pd
import yaml


def _load_config(config_path):
    """Load YAML config file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f)


def _output_dirs(base_dir):
    """Map of output directory names to paths (nothing is created)."""
    return {
        'base': base_dir,
        'figures': os.path.join(base_dir, 'figures'),
        'lists': os.path.join(base_dir, 'lists'),
        'tables': os.path.join(base_dir, 'tables'),
    }


def _create_output_dirs(base_dir):
    """Create organized output directory structure."""
    dirs = _output_dirs(base_dir)

    for dir_path in dirs.values():
        os.makedirs(dir_path, exist_ok=True)

    return dirs


def _to_float(values, decimal=','):
    """
    Convert a column of numbers written as text to float.

    A locale decimal separator (comma by default) is read as a period.
    Columns that are already numeric are returned unchanged. Anything that
    still fails to parse becomes NaN, never zero.

    Parameters
    ----------
    values : pd.Series
        Column to convert.
    decimal : str, optional
        Locale decimal separator (default: ',').

    Returns
    -------
    pd.Series
        Float column with the same index.

    Example
    -------
    >>> _to_float(pd.Series(['1,5', '2.25', 'n/a'])).tolist()
    [1.5, 2.25, nan]
    """
    if pd.api.types.is_numeric_dtype(values):
        return values

    text = values.map(
        lambda v: v.strip().replace(decimal, '.') if isinstance(v, str) else v
    )

    return pd.to_numeric(text, errors='coerce').astype(float)


def _split_identifiers(values, delimiter=';'):
    """
    Flatten gene-name cells into a set of atomic identifiers.

    Composite cells such as 'GENE1;GENE2' contribute each part separately.
    Missing cells and empty parts are ignored.
    """
    identifiers = set()
    for value in values:
        if pd.isna(value):
            continue
        for part in str(value).split(delimiter):
            part = part.strip()
            if part:
                identifiers.add(part)
    return identifiers


def save_data(data, filename=None):
    """
    Save analysis data to pickle file.

    Parameters
    ----------
    data : dict
        Analysis data dictionary (output from prep_ip, norm_ip, etc.)
    filename : str, optional
        Custom filename. If None, uses default based on output_dir in config.

    Returns
    -------
    str
        Path where data was saved.

    Example
    -------
    >>> data = run_ip('config/experiment.yaml')
    >>> save_data(data)  # Saves to results/data_checkpoint.pkl
    """
    if filename is None:
        output_dir = data['config']['data_paths']['output_dir']
        filename = os.path.join(output_dir, 'data_checkpoint.pkl')

    with open(filename, 'wb') as f:
        pickle.dump(data, f)

    size_mb = os.path.getsize(filename) / (1024 * 1024)

    print(f"\n{'='*80}")
    print(f"DATA SAVED")
    print(f"{'='*80}")
    print(f"Location: {filename}")
    print(f"Size: {size_mb:.1f} MB")
    print(f"\nTo load this data later:")
    print(f"  from lfqbait import load_data")
    print(f"  data = load_data('{filename}')")
    print(f"{'='*80}\n")

    return filename


def load_data(filepath):
    """
    Load analysis data from pickle file.

    Parameters
    ----------
    filepath : str
        Path to saved pickle file.

    Returns
    -------
    dict
        Analysis data dictionary.

    Example
    -------
    >>> from lfqbait import load_data
    >>> data = load_data('results/data_final.pkl')
    >>> data['overlaps']['all_three']
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Data file not found: {filepath}")

    print(f"\n{'='*80}")
    print(f"LOADING DATA")
    print(f"{'='*80}")

    with open(filepath, 'rb') as f:
        data = pickle.load(f)

    size_mb = os.path.getsize(filepath) / (1024 * 1024)

    print(f"Location: {filepath}")
    print(f"Size: {size_mb:.1f} MB")

    if 'metadata' in data:
        print(f"\nData contains:")
        print(f"  Proteins: {data['metadata']['n_proteins']}")
        print(f"  Samples: {data['metadata']['n_samples']}")
        print(f"  Baits: {data['metadata']['baits']}")

    print(f"{'='*80}\n")

    return data
