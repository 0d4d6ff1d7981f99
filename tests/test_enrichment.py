"""Tests for lfqbait.enrichment module."""

import numpy as np
import pandas as pd
import pytest

from lfqbait import enrich_ip, enriched_identifiers

EXPECTED = {
    'Cwp2': {'CWP2', 'EMP24', 'ERV25', 'CCW12', 'ERP1', 'CWP1'},
    'Gas1': {'GAS1', 'CCW12', 'ERP1', 'PST1'},
    'Emp24': {'EMP24', 'ERV25', 'CCW12', 'PST1'},
}


@pytest.fixture
def small_matrix():
    return pd.DataFrame({
        'flag': ['+', '+', '', '+', '+', np.nan],
        'fc': [2.0, 1.0, 3.0, 0.99, np.nan, 4.0],
        'Gene names': ['GENE1;GENE2', 'GENE3', 'GENE4', 'GENE5', 'GENE6', 'GENE7'],
    })


class TestEnrichedIdentifiers:
    def test_composite_identifier_split(self, small_matrix):
        result = enriched_identifiers(small_matrix, 'flag', 'fc')
        assert 'GENE1' in result
        assert 'GENE2' in result
        assert 'GENE1;GENE2' not in result

    def test_threshold_inclusive(self, small_matrix):
        result = enriched_identifiers(small_matrix, 'flag', 'fc')
        assert 'GENE3' in result
        assert 'GENE5' not in result

    def test_requires_flag(self, small_matrix):
        result = enriched_identifiers(small_matrix, 'flag', 'fc')
        assert 'GENE4' not in result
        assert 'GENE7' not in result

    def test_missing_fold_change_never_passes(self, small_matrix):
        result = enriched_identifiers(small_matrix, 'flag', 'fc')
        assert 'GENE6' not in result

    def test_result(self, small_matrix):
        assert enriched_identifiers(small_matrix, 'flag', 'fc') == {'GENE1', 'GENE2', 'GENE3'}

    def test_custom_threshold_and_marker(self, small_matrix):
        small_matrix['flag'] = small_matrix['flag'].replace('+', 'yes')
        result = enriched_identifiers(small_matrix, 'flag', 'fc',
                                      significant_marker='yes', log2fc_threshold=1.5)
        assert result == {'GENE1', 'GENE2'}

    def test_text_fold_changes_with_either_decimal_mark(self):
        df = pd.DataFrame({
            'flag': ['+', '+', '+'],
            'fc': ['1,5', '2.0', '0,5'],
            'Gene names': ['AAA1', 'BBB2', 'CCC3'],
        })
        assert enriched_identifiers(df, 'flag', 'fc') == {'AAA1', 'BBB2'}


class TestEnrichIp:
    def test_bait_sets(self, enriched_data):
        assert enriched_data['bait_sets'] == EXPECTED

    def test_bait_order_follows_config(self, enriched_data):
        assert list(enriched_data['bait_sets']) == ['Cwp2', 'Gas1', 'Emp24']

    def test_sets_are_immutable(self, enriched_data):
        for identifiers in enriched_data['bait_sets'].values():
            assert isinstance(identifiers, frozenset)

    def test_params_stored(self, enriched_data):
        params = enriched_data['enrichment_params']
        assert params['log2fc_threshold'] == 1.0
        assert params['significant_marker'] == '+'

    def test_stricter_threshold_gives_fewer_hits(self, normed_data):
        strict = dict(normed_data)
        strict['config'] = dict(normed_data['config'])
        strict['config']['enrichment'] = {'log2fc_threshold': 2.0}

        result = enrich_ip(strict)
        for bait, identifiers in result['bait_sets'].items():
            assert identifiers <= EXPECTED[bait]
        assert result['bait_sets']['Gas1'] == {'GAS1', 'PST1'}

    def test_matches_enriched_identifiers(self, normed_data, enriched_data):
        for bait, spec in normed_data['config']['baits'].items():
            expected = enriched_identifiers(normed_data['df'], spec['flag_column'],
                                            spec['fc_column'])
            assert enriched_data['bait_sets'][bait] == expected
