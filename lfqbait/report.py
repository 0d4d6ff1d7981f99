"""
Report writer for the LFQ bait pipeline.

Writes every artifact of a finished analysis: the normalized matrix,
identifier lists, the Cytoscape ratio table, summary counts, figures and
a final checkpoint. Runs only after all computation is done, and each
artifact is written on its own so one failed write leaves the others and
the in-memory results intact.
"""

import os

import pandas as pd

from .utils import _create_output_dirs, _output_dirs, save_data
from .visualization import plot_normalization, plot_venn2, plot_venn3


def _write_list(identifiers, path):
    """Newline-delimited, sorted identifier list."""
    with open(path, 'w') as f:
        for identifier in sorted(identifiers):
            f.write(f"{identifier}\n")


def summary_counts(data):
    """One row per reported set with its size."""
    rows = []
    for bait, identifiers in data['bait_sets'].items():
        rows.append({'set': f'{bait}_enriched', 'count': len(identifiers)})
    for category, identifiers in data['overlaps'].items():
        rows.append({'set': category, 'count': len(identifiers)})
    for bait, identifiers in data['totals'].items():
        rows.append({'set': f'{bait}_exclusive_or_partially_shared', 'count': len(identifiers)})
    for bait, comparison in data.get('reference', {}).items():
        rows.append({'set': f'{bait}_reference', 'count': len(comparison['reference'])})
        rows.append({'set': f'{bait}_reference_shared', 'count': comparison['n_shared']})
        rows.append({'set': f'{bait}_enriched_not_in_reference', 'count': comparison['n_enriched_only']})
        rows.append({'set': f'{bait}_reference_only', 'count': comparison['n_reference_only']})
    return pd.DataFrame(rows, columns=['set', 'count'])


def _artifacts(data, dirs):
    """(label, path, writer) for every output of the run."""
    lists_dir = dirs['lists']
    tables_dir = dirs['tables']
    figures_dir = dirs['figures']

    artifacts = [(
        'normalized matrix',
        os.path.join(tables_dir, 'normalized_matrix.txt'),
        lambda path: data['df'].to_csv(path, sep='\t', index=False),
    )]

    for bait, identifiers in data['bait_sets'].items():
        artifacts.append((
            f'{bait} enriched list',
            os.path.join(lists_dir, f'{bait}_enriched.txt'),
            lambda path, ids=identifiers: _write_list(ids, path),
        ))

    for category, identifiers in data['overlaps'].items():
        artifacts.append((
            f'{category} list',
            os.path.join(lists_dir, f'{category}.txt'),
            lambda path, ids=identifiers: _write_list(ids, path),
        ))

    for bait, identifiers in data['totals'].items():
        artifacts.append((
            f'{bait} exclusive or partially shared list',
            os.path.join(lists_dir, f'{bait}_exclusive_or_partially_shared.txt'),
            lambda path, ids=identifiers: _write_list(ids, path),
        ))

    if 'ratio_table' in data:
        artifacts.append((
            'Cytoscape ratio table',
            os.path.join(tables_dir, 'cytoscape_ratio_table.csv'),
            lambda path: data['ratio_table'].to_csv(path, index=False),
        ))

    artifacts.append((
        'summary counts',
        os.path.join(tables_dir, 'summary_counts.csv'),
        lambda path: summary_counts(data).to_csv(path, index=False),
    ))

    artifacts.append((
        'bait Venn diagram',
        os.path.join(figures_dir, 'venn_baits.png'),
        lambda path: plot_venn3(data['bait_sets'], path),
    ))

    for bait, comparison in data.get('reference', {}).items():
        artifacts.append((
            f'{bait} reference Venn diagram',
            os.path.join(figures_dir, f'venn_{bait}_vs_reference.png'),
            lambda path, b=bait, c=comparison: plot_venn2(
                data['bait_sets'][b], c['reference'], b, path),
        ))

    if 'df_before_norm' in data:
        artifacts.append((
            'normalization boxplot',
            os.path.join(figures_dir, 'normalization_boxplot.png'),
            lambda path: plot_normalization(
                data['df_before_norm'], data['df'],
                data['normalization']['batch1_columns'], path),
        ))

    artifacts.append((
        'final checkpoint',
        os.path.join(dirs['base'], 'data_final.pkl'),
        lambda path: save_data(data, path),
    ))

    return artifacts


def report_ip(data):
    """
    Write all outputs of a completed analysis.

    Outputs (under config 'data_paths.output_dir'):
    - tables/normalized_matrix.txt
    - lists/<bait>_enriched.txt, lists/<region>.txt,
      lists/<bait>_exclusive_or_partially_shared.txt
    - tables/cytoscape_ratio_table.csv, tables/summary_counts.csv
    - figures/venn_baits.png, figures/venn_<bait>_vs_reference.png,
      figures/normalization_boxplot.png
    - data_final.pkl

    A write that fails with OSError is reported and skipped; the
    remaining artifacts are still written.

    Parameters
    ----------
    data : dict
        Output from venn_ip(), ref_ip() and ratio_ip().

    Returns
    -------
    dict
        'written': list of paths written
        'failed': list of (path, error message) pairs

    Example
    -------
    >>> result = report_ip(data)
    >>> result['failed']
    []
    """

    print("\n" + "="*80)
    print("WRITING REPORT")
    print("="*80)

    output_dir = data['config']['data_paths']['output_dir']
    try:
        dirs = _create_output_dirs(output_dir)
    except OSError as e:
        print(f"  Warning: could not create output directories: {e}")
        dirs = _output_dirs(output_dir)

    print(f"\nOutput directory: {output_dir}")

    written = []
    failed = []
    artifacts = _artifacts(data, dirs)

    for i, (label, path, writer) in enumerate(artifacts, 1):
        try:
            writer(path)
        except OSError as e:
            print(f"  Warning: could not write {label} ({path}): {e}")
            failed.append((path, str(e)))
            continue
        written.append(path)
        print(f"  [{i}/{len(artifacts)}] > Saved: {os.path.relpath(path, output_dir)}")

    print("\n" + "="*80)
    print("REPORT COMPLETE")
    print("="*80)
    print(f"\nFiles written: {len(written)}")
    if failed:
        print(f"Files failed:  {len(failed)}")
    print("="*80 + "\n")

    return {'written': written, 'failed': failed}
