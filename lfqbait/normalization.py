"""
Batch normalization for the LFQ bait pipeline.

Shifts the first measurement batch onto the scale of the remaining
samples, reverses the log2 encoding and mirrors the intensity columns
under the 'Intensity' prefix expected by downstream tools.
"""

import copy

import numpy as np

from .prep import INTENSITY_PREFIX

MIRROR_PREFIX = 'Intensity'

# Samples acquired in the first batch
BATCH1_COLUMNS = [
    f'{INTENSITY_PREFIX} {bait}_{rep}'
    for bait in ('Cwp2', 'Gas1', 'Emp24', 'Ctrl')
    for rep in (1, 2, 3)
]


def _mirror_name(col, prefix=INTENSITY_PREFIX, mirror_prefix=MIRROR_PREFIX):
    """'LFQ intensity Cwp2_1' -> 'Intensity Cwp2_1'."""
    if col.startswith(prefix):
        return mirror_prefix + col[len(prefix):]
    return f'{mirror_prefix} {col}'


def batch_shift(df, batch1_cols, other_cols):
    """
    Per-row difference between the batch-1 mean and the mean of the others.

    A missing value in either group gives a missing shift for that row.
    """
    batch1_mean = df[batch1_cols].mean(axis=1, skipna=False)
    other_mean = df[other_cols].mean(axis=1, skipna=False)
    return batch1_mean - other_mean


def batch_normalize(df, batch1_cols, other_cols):
    """
    Center batch-1 columns on the other samples and reverse log2.

    Steps:
    1. shift = mean(batch-1) - mean(other), per row
    2. batch-1 values -= shift
    3. 2**x over every intensity column
    4. Append a copy of each intensity column named 'Intensity <label>'

    Parameters
    ----------
    df : pd.DataFrame
        Matrix with log2 intensities in `batch1_cols` + `other_cols`.
    batch1_cols : list of str
        Intensity columns from the first batch.
    other_cols : list of str
        Remaining intensity columns.

    Returns
    -------
    pd.DataFrame
        New matrix: linear-scale intensities, mirrored columns appended.
        The input frame is not modified.
    """
    if len(batch1_cols) == 0 or len(other_cols) == 0:
        raise ValueError("Batch normalization needs at least one batch-1 and one other column")

    df = df.copy()
    intensity_cols = list(batch1_cols) + list(other_cols)

    shift = batch_shift(df, batch1_cols, other_cols)
    df[batch1_cols] = df[batch1_cols].sub(shift, axis=0)

    df[intensity_cols] = np.power(2.0, df[intensity_cols])

    # Mirror in layout order
    ordered = [c for c in df.columns if c in set(intensity_cols)]
    for col in ordered:
        df[_mirror_name(col)] = df[col]

    return df


def norm_ip(data, batch1_cols=None):
    """
    Normalize batch effects and convert intensities to linear scale.

    Parameters
    ----------
    data : dict
        Output from prep_ip().
    batch1_cols : list of str, optional
        Batch-1 column names. Defaults to config
        'normalization.batch1_columns', then BATCH1_COLUMNS.

    Returns
    -------
    dict
        Updated data dictionary with the normalized matrix as 'df' and the
        log2 intensities before normalization as 'df_before_norm'.

    Example
    -------
    >>> data = prep_ip('config/experiment.yaml')
    >>> data = norm_ip(data)
    """

    print("\n" + "="*80)
    print("BATCH NORMALIZATION")
    print("="*80)

    df = data['df']
    config = data['config']
    intensity_cols = data['intensity_cols']

    if batch1_cols is None:
        batch1_cols = config.get('normalization', {}).get('batch1_columns')
        if batch1_cols is None:
            batch1_cols = BATCH1_COLUMNS

    unknown = [c for c in batch1_cols if c not in intensity_cols]
    if unknown:
        raise ValueError(f"Batch-1 columns not in intensity block: {', '.join(unknown)}")

    other_cols = [c for c in intensity_cols if c not in set(batch1_cols)]

    print(f"\nBatch 1: {len(batch1_cols)} samples")
    print(f"Other:   {len(other_cols)} samples")
    print(f"Processing {len(df)} protein groups")

    # =========================================================================
    # 1. CHECK DATA BEFORE NORMALIZATION
    # =========================================================================
    print(f"\n[1/3] Data before normalization (log2):")

    shift = batch_shift(df, batch1_cols, other_cols)
    for group, cols in [('batch 1', batch1_cols), ('other', other_cols)]:
        values = df[cols].values.flatten()
        values = values[~np.isnan(values)]
        if len(values) > 0:
            print(f"  {group}:")
            print(f"    Range: {values.min():.1f} to {values.max():.1f}")
            print(f"    Median: {np.median(values):.1f}")
        print(f"    Missing: {df[cols].isna().sum().sum()} values")

    print(f"  Median batch shift: {shift.median():.3f}")
    print(f"  Rows without shift (missing values): {shift.isna().sum()}")

    # =========================================================================
    # 2. NORMALIZE AND REVERSE LOG2
    # =========================================================================
    print(f"\n[2/3] Shifting batch 1 and applying 2^x...")

    df_norm = batch_normalize(df, batch1_cols, other_cols)

    print(f"  > Batch 1 centered on other samples")
    print(f"  > Log2 encoding reversed on {len(intensity_cols)} columns")

    # =========================================================================
    # 3. MIRROR COLUMNS
    # =========================================================================
    print(f"\n[3/3] Mirroring intensity columns...")

    mirrored = [_mirror_name(c) for c in intensity_cols]
    print(f"  > Added {len(mirrored)} '{MIRROR_PREFIX} ...' columns")
    print(f"    Matrix now {df_norm.shape[0]} x {df_norm.shape[1]}")

    # =========================================================================
    # 4. UPDATE DATA DICTIONARY
    # =========================================================================
    data_updated = copy.copy(data)
    data_updated['df'] = df_norm
    data_updated['df_before_norm'] = df[intensity_cols].copy()
    data_updated['normalization'] = {
        'batch1_columns': list(batch1_cols),
        'other_columns': other_cols,
        'mirrored_columns': mirrored,
    }

    print("\n" + "="*80)
    print("NORMALIZATION COMPLETE")
    print("="*80)
    print(f"\nNext step: enrich_ip() to extract enriched interactors")
    print("="*80 + "\n")

    return data_updated
