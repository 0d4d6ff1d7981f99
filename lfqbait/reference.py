"""
Reference interactome comparison for the LFQ bait pipeline.

Loads per-bait lists of known physical interactors (e.g. a BioGRID
tab-delimited export) and measures their overlap with each bait's
enriched set. Reference identifiers never enter the bait sets.
"""

import copy
import os

import pandas as pd


ID_COLUMN = 'Official Symbol Interactor B'


def load_reference(reference_file, id_column=ID_COLUMN, filter_column=None,
                   filter_value=None, exclude=None):
    """
    Read the identifier column of a reference interactor table.

    Parameters
    ----------
    reference_file : str
        Tab-delimited table with a header row.
    id_column : str, optional
        Column holding interactor identifiers.
    filter_column, filter_value : str, optional
        Keep only rows where filter_column == filter_value
        (e.g. 'Experimental System Type' == 'physical').
    exclude : str, optional
        Identifier to drop, typically the bait itself.

    Returns
    -------
    set of str
    """
    if not os.path.exists(reference_file):
        raise FileNotFoundError(f"Reference file not found: {reference_file}")

    ref = pd.read_csv(reference_file, sep='\t', dtype=str)

    for col in [id_column, filter_column]:
        if col is not None and col not in ref.columns:
            raise ValueError(f"Column '{col}' not found in {reference_file}")

    if filter_column is not None:
        ref = ref[ref[filter_column].str.strip().str.lower() == str(filter_value).lower()]

    identifiers = {i for i in ref[id_column].dropna().str.strip() if i}
    if exclude is not None:
        identifiers = {i for i in identifiers if i.upper() != exclude.upper()}

    return identifiers


def compare_sets(enriched, reference):
    """
    Two-set overlap between an enriched set and a reference set.

    Returns
    -------
    dict
        'shared', 'enriched_only', 'reference_only' sets and the matching
        'n_shared', 'n_enriched_only', 'n_reference_only' counts.
    """
    enriched = set(enriched)
    reference = set(reference)

    comparison = {
        'shared': enriched & reference,
        'enriched_only': enriched - reference,
        'reference_only': reference - enriched,
    }
    for key in list(comparison):
        comparison[f'n_{key}'] = len(comparison[key])

    return comparison


def ref_ip(data):
    """
    Compare each bait's enriched set with its reference interactors.

    Baits without a 'reference_file' in the config are skipped.

    Parameters
    ----------
    data : dict
        Output from enrich_ip() or venn_ip().

    Returns
    -------
    dict
        Updated data dictionary with 'reference': bait -> dict holding the
        loaded 'reference' set plus the compare_sets() result.

    Example
    -------
    >>> data = ref_ip(data)
    >>> data['reference']['Gas1']['n_shared']
    """

    print("\n" + "="*80)
    print("REFERENCE INTERACTOME COMPARISON")
    print("="*80)

    config = data['config']
    bait_sets = data['bait_sets']

    params = config.get('reference', {})
    id_column = params.get('id_column', ID_COLUMN)
    filter_column = params.get('filter_column')
    filter_value = params.get('filter_value')
    exclude_bait = params.get('exclude_bait', True)

    print(f"\nIdentifier column: {id_column}")
    if filter_column is not None:
        print(f"Filter: {filter_column} == {filter_value}")

    results = {}
    for bait, spec in config['baits'].items():
        reference_file = spec.get('reference_file')
        if not reference_file:
            print(f"\n  Warning: no reference file for {bait}, skipping")
            continue

        reference = load_reference(
            reference_file,
            id_column=id_column,
            filter_column=filter_column,
            filter_value=filter_value,
            exclude=bait if exclude_bait else None,
        )

        comparison = compare_sets(bait_sets[bait], reference)
        comparison['reference'] = reference
        results[bait] = comparison

        print(f"\n  {bait}:")
        print(f"    Reference interactors: {len(reference)}")
        print(f"    Shared with enriched set: {comparison['n_shared']}")
        print(f"    Enriched only: {comparison['n_enriched_only']}")
        print(f"    Reference only: {comparison['n_reference_only']}")

    data_updated = copy.copy(data)
    data_updated['reference'] = results

    print("\n" + "="*80)
    print("REFERENCE COMPARISON COMPLETE")
    print("="*80 + "\n")

    return data_updated
