"""
Enriched interactor extraction for the LFQ bait pipeline.

Selects significant, at least two-fold enriched protein groups per bait
and flattens their gene names into one identifier set per bait.
"""

import copy

from .prep import GENE_COLUMN
from .utils import _split_identifiers, _to_float

SIGNIFICANT_MARKER = '+'
LOG2FC_THRESHOLD = 1.0
DELIMITER = ';'


def enriched_mask(df, flag_col, fc_col, significant_marker=SIGNIFICANT_MARKER,
                  log2fc_threshold=LOG2FC_THRESHOLD, decimal=','):
    """Rows flagged significant with log2 fold change >= threshold."""
    flagged = df[flag_col].astype(str).str.strip() == significant_marker
    enriched = _to_float(df[fc_col], decimal=decimal) >= log2fc_threshold
    return flagged & enriched


def enriched_identifiers(df, flag_col, fc_col, gene_col=GENE_COLUMN,
                         significant_marker=SIGNIFICANT_MARKER,
                         log2fc_threshold=LOG2FC_THRESHOLD, delimiter=DELIMITER,
                         decimal=','):
    """
    Atomic identifiers of the rows enriched for one bait.

    Parameters
    ----------
    df : pd.DataFrame
        Normalized matrix.
    flag_col : str
        Significance flag column for this bait comparison.
    fc_col : str
        Log2 fold-change column for this bait comparison.
    gene_col : str, optional
        Gene name column (default: 'Gene names').
    significant_marker : str, optional
        Flag value marking a significant row (default: '+').
    log2fc_threshold : float, optional
        Minimum log2 fold change, inclusive (default: 1.0).
    delimiter : str, optional
        Separator inside composite gene names (default: ';').
    decimal : str, optional
        Locale decimal separator of text fold changes (default: ',').

    Returns
    -------
    set of str

    Example
    -------
    >>> enriched_identifiers(df, "Student's T-test Significant Gas1_Ctrl",
    ...                      "Student's T-test Difference Gas1_Ctrl")
    {'GAS1', 'KRE6', ...}
    """
    mask = enriched_mask(df, flag_col, fc_col, significant_marker, log2fc_threshold, decimal)
    return _split_identifiers(df.loc[mask, gene_col], delimiter=delimiter)


def enrich_ip(data):
    """
    Extract the enriched interactor set of every configured bait.

    Each bait uses its own (flag_column, fc_column) pair from the
    config 'baits' mapping; thresholds come from 'enrichment'.

    Parameters
    ----------
    data : dict
        Output from norm_ip().

    Returns
    -------
    dict
        Updated data dictionary with 'bait_sets' (bait -> frozenset of
        identifiers, config order) and 'enrichment_params'.

    Example
    -------
    >>> data = norm_ip(data)
    >>> data = enrich_ip(data)
    >>> len(data['bait_sets']['Cwp2'])
    """

    print("\n" + "="*80)
    print("ENRICHED INTERACTORS")
    print("="*80)

    df = data['df']
    config = data['config']

    params = config.get('enrichment', {})
    significant_marker = params.get('significant_marker', SIGNIFICANT_MARKER)
    log2fc_threshold = params.get('log2fc_threshold', LOG2FC_THRESHOLD)
    delimiter = params.get('delimiter', DELIMITER)
    gene_col = config.get('data_columns', {}).get('gene_names', GENE_COLUMN)
    decimal = config.get('data_columns', {}).get('decimal', ',')

    print(f"\nThresholds:")
    print(f"  Significant flag: '{significant_marker}'")
    print(f"  Log2 FC: >= {log2fc_threshold}")

    bait_sets = {}
    for bait, spec in config['baits'].items():
        identifiers = enriched_identifiers(
            df, spec['flag_column'], spec['fc_column'], gene_col=gene_col,
            significant_marker=significant_marker, log2fc_threshold=log2fc_threshold,
            delimiter=delimiter, decimal=decimal,
        )
        mask = enriched_mask(df, spec['flag_column'], spec['fc_column'],
                             significant_marker, log2fc_threshold, decimal)
        bait_sets[bait] = frozenset(identifiers)

        print(f"\n  {bait}:")
        print(f"    Enriched protein groups: {mask.sum()}")
        print(f"    Atomic identifiers: {len(identifiers)}")

    data_updated = copy.copy(data)
    data_updated['bait_sets'] = bait_sets
    data_updated['enrichment_params'] = {
        'significant_marker': significant_marker,
        'log2fc_threshold': log2fc_threshold,
        'delimiter': delimiter,
    }

    print("\n" + "="*80)
    print("ENRICHMENT COMPLETE")
    print("="*80)
    print(f"\nNext step: venn_ip() for bait overlaps")
    print("="*80 + "\n")

    return data_updated
