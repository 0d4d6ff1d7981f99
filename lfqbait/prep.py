"""
Data preparation functions for the LFQ bait pipeline.

Handles loading the raw statistics export, recovering the true header row,
renaming the intensity block and coercing numeric columns.

Column layout of the export
---------------------------
The export is addressed by position. Every fixed index lives here so that
a change of input format is a one-place edit. Ranges are half-open.

    0-23   sample intensities (log2), renamed 'LFQ intensity <label>'
    24-25  text flag columns inside the numeric range (left as text)
    26-38  numeric metadata, t-test p-values and differences per bait
    39-41  t-test significance flags per bait ('+' when significant)
    42-47  identifiers, protein names, gene names, FASTA headers, id
"""

import os

import pandas as pd

from .utils import _load_config, _output_dirs, _to_float

INTENSITY_START = 0
INTENSITY_STOP = 24
INTENSITY_PREFIX = 'LFQ intensity'

NUMERIC_START = 0
NUMERIC_STOP = 39
NUMERIC_EXCLUDE = (24, 25)

# Highest fixed position used by the layout, plus one
MIN_COLUMNS = 48

GENE_COLUMN = 'Gene names'


def load_matrix(input_file):
    """
    Load the raw export and recover its true column labels.

    The first line of the file is a placeholder header and is discarded.
    The first content row holds the real labels: it becomes the header and
    is dropped from the data. The intensity window is then renamed by
    position to 'LFQ intensity <label>'.

    Parameters
    ----------
    input_file : str
        Path to the tab-delimited export.

    Returns
    -------
    pd.DataFrame
        Matrix with one row per protein group, all cells as text.

    Raises
    ------
    FileNotFoundError
        If the input file does not exist.
    ValueError
        If the table has no label row, no data rows, or fewer columns
        than the fixed layout needs.

    Example
    -------
    >>> df = load_matrix('data/raw/proteinGroups_perseus.txt')
    >>> df.columns[0]
    'LFQ intensity Cwp2_1'
    """
    if not os.path.exists(input_file):
        raise FileNotFoundError(f"Input file not found: {input_file}")

    raw = pd.read_csv(input_file, sep='\t', header=0, dtype=str)

    if raw.shape[1] < MIN_COLUMNS:
        raise ValueError(
            f"Input has {raw.shape[1]} columns, layout needs at least {MIN_COLUMNS}: {input_file}"
        )
    if len(raw) < 2:
        raise ValueError(
            f"Input has {len(raw)} rows after the placeholder header, "
            f"need a label row and at least one data row: {input_file}"
        )

    labels = [str(label).strip() for label in raw.iloc[0].tolist()]
    for i in range(INTENSITY_START, INTENSITY_STOP):
        labels[i] = f"{INTENSITY_PREFIX} {labels[i]}"

    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = labels

    return df


def coerce_numeric(df, start=NUMERIC_START, stop=NUMERIC_STOP,
                   exclude=NUMERIC_EXCLUDE, decimal=','):
    """
    Convert the numeric column range to float in place.

    Columns at positions [start, stop) except those in `exclude` go
    through the locale-aware converter. Cells that cannot be parsed become
    NaN.

    Parameters
    ----------
    df : pd.DataFrame
        Matrix from load_matrix().
    start, stop : int, optional
        Positional column range (half-open).
    exclude : tuple of int, optional
        Positions inside the range that stay as they are.
    decimal : str, optional
        Locale decimal separator (default: ',').

    Returns
    -------
    int
        Number of non-empty cells that failed to parse.
    """
    if df.shape[1] < stop:
        raise ValueError(f"Matrix has {df.shape[1]} columns, numeric range ends at {stop}")

    failed = 0
    for i in range(start, stop):
        if i in exclude:
            continue
        col = df.columns[i]
        before = df[col].notna().sum()
        df[col] = _to_float(df[col], decimal=decimal)
        failed += before - df[col].notna().sum()

    return int(failed)


def _required_columns(config):
    """Named columns the downstream steps read."""
    required = [config.get('data_columns', {}).get('gene_names', GENE_COLUMN)]
    for bait, spec in config['baits'].items():
        required.append(spec['flag_column'])
        required.append(spec['fc_column'])
    return required


def prep_ip(config_path):
    """
    Load and prepare the LFQ export for analysis.

    This function:
    1. Loads the YAML configuration file
    2. Reads the export and recovers the true header row
    3. Renames the intensity block
    4. Checks every configured bait and gene column is present
    5. Converts the numeric column range to float

    Nothing is written to disk here.

    Parameters
    ----------
    config_path : str
        Path to YAML configuration file.

    Returns
    -------
    dict
        Dictionary containing:
        - 'df': pd.DataFrame with the prepared matrix
        - 'config': loaded configuration dictionary
        - 'intensity_cols': list of intensity column names, in layout order
        - 'metadata': summary statistics about the data
        - 'output_dirs': paths to output directories

    Example
    -------
    >>> data = prep_ip('config/experiment.yaml')
    >>> df = data['df']
    >>> print(f"Loaded {len(df)} protein groups")
    """

    # =========================================================================
    # 1. LOAD CONFIGURATION
    # =========================================================================
    print("\n" + "="*80)
    print("STEP 1: LOADING DATA AND CONFIGURATION")
    print("="*80)

    config = _load_config(config_path)

    print(f"\n> Configuration loaded")
    print(f"  Experiment: {config['experiment']['name']}")
    print(f"  Baits: {', '.join(config['baits'])}")

    # =========================================================================
    # 2. LOAD MATRIX AND RECOVER HEADER
    # =========================================================================
    print(f"\n[1/3] Loading LFQ matrix...")

    input_file = config['data_paths']['input_file']
    df = load_matrix(input_file)

    intensity_cols = list(df.columns[INTENSITY_START:INTENSITY_STOP])

    print(f"  > Loaded {df.shape[0]} protein groups, {df.shape[1]} columns")
    print(f"  > Renamed {len(intensity_cols)} intensity columns ('{INTENSITY_PREFIX} ...')")

    # =========================================================================
    # 3. CHECK REQUIRED COLUMNS
    # =========================================================================
    print(f"\n[2/3] Checking required columns...")

    missing = [c for c in _required_columns(config) if c not in df.columns]
    if missing:
        raise ValueError(f"Columns missing from input: {', '.join(missing)}")

    print(f"  > Gene and bait comparison columns present")

    # =========================================================================
    # 4. NUMERIC COERCION
    # =========================================================================
    print(f"\n[3/3] Converting numeric columns...")

    decimal = config.get('data_columns', {}).get('decimal', ',')
    failed = coerce_numeric(df, decimal=decimal)

    n_numeric = NUMERIC_STOP - NUMERIC_START - len(NUMERIC_EXCLUDE)
    print(f"  > Converted {n_numeric} columns to float (decimal separator '{decimal}')")
    if failed > 0:
        print(f"  Warning: {failed} cells could not be parsed and are now missing")

    missing_values = int(df[intensity_cols].isna().sum().sum())
    print(f"    Missing intensities: {missing_values} values")

    # =========================================================================
    # 5. METADATA
    # =========================================================================
    output_dir = config['data_paths']['output_dir']

    metadata = {
        'n_proteins': len(df),
        'n_samples': len(intensity_cols),
        'n_columns': df.shape[1],
        'unparsed_cells': failed,
        'baits': list(config['baits']),
    }

    print("\n" + "="*80)
    print("DATA PREPARATION COMPLETE")
    print("="*80)
    print(f"\nProtein groups:          {metadata['n_proteins']}")
    print(f"Samples:                 {metadata['n_samples']}")
    print(f"Baits:                   {', '.join(metadata['baits'])}")
    print("\n" + "="*80 + "\n")

    return {
        'df': df,
        'config': config,
        'intensity_cols': intensity_cols,
        'metadata': metadata,
        'output_dirs': _output_dirs(output_dir),
    }
