"""Shared test fixtures for LFQ bait pipeline tests."""

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest
import yaml

BAITS = ['Cwp2', 'Gas1', 'Emp24']
GROUPS = BAITS + ['Ctrl']

# gene names, then (flag, log2FC) for Cwp2, Gas1, Emp24
PROTEINS = [
    ('CWP2',        ('+', '3,0'), ('', '0,2'),  ('', '0,1')),
    ('GAS1',        ('', '0,5'),  ('+', '4,0'), ('', '-0,2')),
    ('EMP24;ERV25', ('+', '1,0'), ('', '0,25'), ('+', '2,5')),
    ('CCW12',       ('+', '1,5'), ('+', '1,5'), ('+', '1,5')),
    ('ERP1',        ('+', '1,2'), ('+', '1,1'), ('', '0,3')),
    ('PST1',        ('', '0,4'),  ('+', '2,0'), ('+', '1,3')),
    ('TOH1',        ('+', '0,8'), ('+', '-1,5'), ('', '0,0')),
    (None,          ('+', '5,0'), ('', '0,0'),  ('', '0,0')),
    ('CWP1',        ('+', '2,0'), ('', '0,0'),  ('', '0,4')),
    ('YPS1',        ('', 'NaN'),  ('', '0,1'),  ('', '0,2')),
]

# Row with a missing intensity in the non-batch-1 group
MISSING_ROW = 9


def layout_labels():
    """True column labels of the export, in layout order."""
    labels = [f'{g}_{r}' for g in GROUPS for r in range(1, 7)]
    labels += ['Only identified by site', 'Reverse']
    labels += ['Peptides', 'Razor + unique peptides', 'Unique peptides',
               'Sequence coverage [%]', 'Mol. weight [kDa]', 'Q-value', 'Score']
    for bait in BAITS:
        labels += [f"-Log Student's T-test p-value {bait}_Ctrl",
                   f"Student's T-test Difference {bait}_Ctrl"]
    labels += [f"Student's T-test Significant {bait}_Ctrl" for bait in BAITS]
    labels += ['Protein IDs', 'Majority protein IDs', 'Protein names',
               'Gene names', 'Fasta headers', 'id']
    return labels


def _fmt(value):
    return f'{value:.4f}'.replace('.', ',')


def build_rows(seed=42):
    """Data rows (as text) matching layout_labels()."""
    rng = np.random.RandomState(seed)
    rows = []
    for i, (gene, *comparisons) in enumerate(PROTEINS):
        base = 20.0 + i
        intensities = []
        for g in GROUPS:
            for r in range(1, 7):
                offset = 1.0 if r <= 3 else 0.0
                intensities.append(_fmt(base + offset + rng.normal(0, 0.2)))
        if i == MISSING_ROW:
            intensities[GROUPS.index('Ctrl') * 6 + 4] = 'NaN'

        row = intensities
        row += ['+' if i == 6 else '', '']
        row += ['n.a.' if i == MISSING_ROW else str(5 + i), str(4 + i), str(3 + i),
                '12,5', '45,3', '0', '123,4']
        for flag, fc in comparisons:
            row += ['2,1' if flag else '0,3', fc]
        row += [flag for flag, fc in comparisons]
        row += [f'P{i:05d}', f'P{i:05d}', f'Protein {i}', gene or '',
                f'>sp|P{i:05d}', str(i)]
        rows.append(row)
    return rows


def write_export(path, labels=None, rows=None):
    """Write a Perseus-style export: placeholder header, label row, data."""
    labels = layout_labels() if labels is None else labels
    rows = build_rows() if rows is None else rows
    placeholder = [f'Column{i + 1}' for i in range(len(labels))]
    pd.DataFrame([labels] + rows, columns=placeholder).to_csv(path, sep='\t', index=False)
    return str(path)


def write_reference(path, bait, partners):
    """BioGRID-style reference table. partners: list of (symbol, system type)."""
    rows = [{
        'Official Symbol Interactor A': bait.upper(),
        'Official Symbol Interactor B': symbol,
        'Experimental System Type': system,
    } for symbol, system in partners]
    pd.DataFrame(rows).to_csv(path, sep='\t', index=False)
    return str(path)


@pytest.fixture
def export_file(tmp_path):
    return write_export(tmp_path / 'export.txt')


@pytest.fixture
def sample_config(tmp_path, export_file):
    """Create a YAML config, export and reference tables for testing."""
    cwp2_ref = write_reference(tmp_path / 'cwp2_ref.txt', 'Cwp2', [
        ('CCW12', 'physical'), ('ERP1', 'physical'), ('SEC61', 'physical'),
        ('FKS1', 'genetic'), ('CWP2', 'physical'),
    ])
    gas1_ref = write_reference(tmp_path / 'gas1_ref.txt', 'Gas1', [
        ('PST1', 'physical'), ('KRE6', 'physical'),
    ])

    baits = {}
    for bait in BAITS:
        baits[bait] = {
            'flag_column': f"Student's T-test Significant {bait}_Ctrl",
            'fc_column': f"Student's T-test Difference {bait}_Ctrl",
        }
    baits['Cwp2']['reference_file'] = cwp2_ref
    baits['Gas1']['reference_file'] = gas1_ref

    config = {
        'experiment': {'name': 'Test_Experiment'},
        'data_paths': {
            'input_file': export_file,
            'output_dir': str(tmp_path / 'results'),
        },
        'data_columns': {'gene_names': 'Gene names', 'decimal': ','},
        'baits': baits,
        'enrichment': {
            'significant_marker': '+',
            'log2fc_threshold': 1.0,
            'delimiter': ';',
        },
        'reference': {
            'id_column': 'Official Symbol Interactor B',
            'filter_column': 'Experimental System Type',
            'filter_value': 'physical',
            'exclude_bait': True,
        },
        'ratio_table': {
            'numerator': 'Cwp2',
            'denominator': 'Gas1',
            'sentinel_factor': 1.25,
            'curated': [
                ['YKL096W-A', 'CWP2'],
                ['YMR307W', 'GAS1'],
                ['YGL200C', 'EMP24'],
                ['YKL096W', 'CWP1'],
                ['YXX000X', 'NOTFOUND'],
            ],
        },
    }

    config_path = str(tmp_path / 'test_config.yaml')
    with open(config_path, 'w') as f:
        yaml.dump(config, f, sort_keys=False)

    return config_path, tmp_path


@pytest.fixture
def prepped_data(sample_config):
    """Run prep_ip and return the result for downstream tests."""
    from lfqbait import prep_ip

    config_path, tmp_path = sample_config
    return prep_ip(config_path)


@pytest.fixture
def normed_data(prepped_data):
    from lfqbait import norm_ip
    return norm_ip(prepped_data)


@pytest.fixture
def enriched_data(normed_data):
    from lfqbait import enrich_ip
    return enrich_ip(normed_data)


@pytest.fixture
def analyzed_data(enriched_data):
    """All computation steps done, nothing written yet."""
    from lfqbait import ratio_ip, ref_ip, venn_ip
    return ratio_ip(ref_ip(venn_ip(enriched_data)))
