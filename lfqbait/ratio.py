"""
Cytoscape ratio table for the LFQ bait pipeline.

Looks up the fold changes of a curated list of genes for two baits and
derives their ratio for node colouring in Cytoscape.
"""

import copy

import numpy as np
import pandas as pd

from .prep import GENE_COLUMN
from .utils import _to_float

SENTINEL_FACTOR = 1.25


def _fc_column_name(bait):
    return f'log2FC_{bait.upper()}'


def _find_row(df, gene, gene_col, delimiter=';'):
    """Index of the first row whose (possibly composite) gene name contains `gene`."""
    parts = df[gene_col].fillna('').astype(str).str.split(delimiter)
    hits = parts.apply(lambda names: gene in [n.strip() for n in names])
    if not hits.any():
        return None
    return hits.idxmax()


def cap_ratios(ratio, defined, sentinel_factor=SENTINEL_FACTOR):
    """
    Replace non-finite ratios with sentinel_factor x the largest finite ratio.

    Only entries where `defined` is True (both fold changes present) are
    capped; ratios of missing inputs stay missing.
    """
    ratio = ratio.copy()
    finite = np.isfinite(ratio)
    max_finite = ratio[finite].max() if finite.any() else 1.0
    sentinel = sentinel_factor * max_finite

    ratio[defined & ~finite] = sentinel
    return ratio, sentinel


def ratio_table(df, curated, numerator_fc, denominator_fc, numerator='Cwp2',
                denominator='Gas1', gene_col=GENE_COLUMN,
                sentinel_factor=SENTINEL_FACTOR, delimiter=';', decimal=','):
    """
    Build the fixed-row ratio table for a curated gene list.

    Parameters
    ----------
    df : pd.DataFrame
        Normalized matrix.
    curated : list of (str, str)
        (external ID, gene name) pairs, one output row each, in order.
    numerator_fc, denominator_fc : str
        Fold-change columns of the two baits in `df`.
    numerator, denominator : str, optional
        Bait names used for the output column labels.
    gene_col : str, optional
        Gene name column of `df`.
    sentinel_factor : float, optional
        Multiplier of the largest finite ratio used for undefined or
        infinite ratios (default: 1.25).
    decimal : str, optional
        Locale decimal separator of text fold changes (default: ',').

    Returns
    -------
    pd.DataFrame
        Columns 'ID', 'gene', 'log2FC_<NUM>', 'log2FC_<DEN>', 'ratio'.
        Genes absent from the matrix keep their row with missing values.
    """
    num_col = _fc_column_name(numerator)
    den_col = _fc_column_name(denominator)
    num_values = _to_float(df[numerator_fc], decimal=decimal)
    den_values = _to_float(df[denominator_fc], decimal=decimal)

    rows = []
    for external_id, gene in curated:
        idx = _find_row(df, gene, gene_col, delimiter)
        if idx is None:
            num, den = np.nan, np.nan
        else:
            num = num_values.at[idx]
            den = den_values.at[idx]
        rows.append({'ID': external_id, 'gene': gene, num_col: num, den_col: den})

    table = pd.DataFrame(rows, columns=['ID', 'gene', num_col, den_col])
    table[[num_col, den_col]] = table[[num_col, den_col]].astype(float)

    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = table[num_col] / table[den_col]

    defined = table[num_col].notna() & table[den_col].notna()
    table['ratio'], _ = cap_ratios(ratio, defined, sentinel_factor)

    return table


def ratio_ip(data):
    """
    Build the Cytoscape ratio table from the config curated gene list.

    Parameters
    ----------
    data : dict
        Output from norm_ip() or any later step.

    Returns
    -------
    dict
        Updated data dictionary with 'ratio_table'.

    Example
    -------
    >>> data = ratio_ip(data)
    >>> data['ratio_table'].head()
    """

    print("\n" + "="*80)
    print("CYTOSCAPE RATIO TABLE")
    print("="*80)

    df = data['df']
    config = data['config']
    params = config.get('ratio_table', {})

    numerator = params.get('numerator', 'Cwp2')
    denominator = params.get('denominator', 'Gas1')
    sentinel_factor = params.get('sentinel_factor', SENTINEL_FACTOR)
    curated = [tuple(pair) for pair in params.get('curated', [])]
    gene_col = config.get('data_columns', {}).get('gene_names', GENE_COLUMN)

    for bait in (numerator, denominator):
        if bait not in config['baits']:
            raise ValueError(f"Ratio bait '{bait}' is not a configured bait")

    print(f"\nRatio: {numerator} / {denominator}")
    print(f"Curated genes: {len(curated)}")

    table = ratio_table(
        df, curated,
        numerator_fc=config['baits'][numerator]['fc_column'],
        denominator_fc=config['baits'][denominator]['fc_column'],
        numerator=numerator,
        denominator=denominator,
        gene_col=gene_col,
        sentinel_factor=sentinel_factor,
        delimiter=config.get('enrichment', {}).get('delimiter', ';'),
        decimal=config.get('data_columns', {}).get('decimal', ','),
    )

    n_missing = table[_fc_column_name(numerator)].isna().sum()
    if n_missing > 0:
        print(f"  Warning: {n_missing} curated genes not found in matrix")
    print(f"  > {len(table)} rows")

    data_updated = copy.copy(data)
    data_updated['ratio_table'] = table

    print("\n" + "="*80)
    print("RATIO TABLE COMPLETE")
    print("="*80 + "\n")

    return data_updated
