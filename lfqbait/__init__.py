"""
LFQ Bait Interactome Pipeline
=============================

A reusable Python package for comparing the interactomes of three bait
proteins from a label-free quantification (LFQ) statistics export.

Main Functions
--------------
prep_ip()       - Load the export, recover the header, convert numbers
norm_ip()       - Batch-normalize intensities and reverse log2
enrich_ip()     - Extract enriched interactors per bait
venn_ip()       - Exclusive, pairwise-shared and shared-by-all sets
ref_ip()        - Overlap with reference interactomes
ratio_ip()      - Cytoscape ratio table for curated genes
report_ip()     - Write lists, tables and figures
run_ip()        - Run all of the above
save_data()     - Save analysis data for later
load_data()     - Load saved analysis data

Example Workflow
----------------
>>> from lfqbait import prep_ip, norm_ip, enrich_ip, venn_ip, report_ip
>>>
>>> data = prep_ip('config/experiment.yaml')
>>> data = norm_ip(data)
>>> data = enrich_ip(data)
>>> data = venn_ip(data)
>>> report_ip(data)
"""

from .prep import prep_ip, load_matrix, coerce_numeric
from .normalization import norm_ip, batch_normalize
from .enrichment import enrich_ip, enriched_identifiers
from .venn_ip import venn_ip, overlap_sets
from .reference import ref_ip, load_reference, compare_sets
from .ratio import ratio_ip, ratio_table
from .report import report_ip
from .pipeline import run_ip
from .utils import save_data, load_data


__version__ = "0.1.0"

__all__ = [
    'prep_ip',
    'load_matrix',
    'coerce_numeric',
    'norm_ip',
    'batch_normalize',
    'enrich_ip',
    'enriched_identifiers',
    'venn_ip',
    'overlap_sets',
    'ref_ip',
    'load_reference',
    'compare_sets',
    'ratio_ip',
    'ratio_table',
    'report_ip',
    'run_ip',
    'save_data',
    'load_data',
]
