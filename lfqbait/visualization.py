"""
Figure functions for the LFQ bait pipeline.

Venn diagrams of bait overlaps and reference comparisons, and a
before/after view of the batch normalization. Every function draws one
figure, saves it as PNG and closes it.
"""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib_venn import venn2, venn3

_REGION_COLORS = {
    '100': '#E74C3C', '010': '#3498DB', '001': '#2ECC71',
    '110': '#F39C12', '101': '#9B59B6', '011': '#1ABC9C',
    '111': '#34495E'
}


def _save(fig, save_path):
    """Save as PNG and always release the figure."""
    try:
        fig.tight_layout()
        fig.savefig(save_path, dpi=300, bbox_inches='tight')
    finally:
        plt.close(fig)


def plot_venn3(bait_sets, save_path, title='Enriched Interactor Overlap'):
    """3-way Venn diagram of the bait identifier sets."""
    baits = list(bait_sets)

    fig, ax = plt.subplots(figsize=(10, 10))
    v = venn3([set(bait_sets[b]) for b in baits], set_labels=baits, ax=ax)

    for region, color in _REGION_COLORS.items():
        patch = v.get_patch_by_id(region)
        if patch:
            patch.set_color(color)
            patch.set_alpha(0.6)

    ax.set_title(title, fontsize=14, fontweight='bold')

    _save(fig, save_path)


def plot_venn2(enriched, reference, bait, save_path):
    """Enriched set of one bait against its reference interactors."""
    fig, ax = plt.subplots(figsize=(8, 8))
    v = venn2([set(enriched), set(reference)],
              set_labels=(f'{bait} enriched', f'{bait} reference'), ax=ax)

    for region_id, color in [('10', '#E74C3C'), ('01', '#3498DB'), ('11', '#9B59B6')]:
        patch = v.get_patch_by_id(region_id)
        if patch:
            patch.set_color(color)
            patch.set_alpha(0.6)

    ax.set_title(f'{bait}: enriched vs. known interactors', fontsize=14, fontweight='bold')

    _save(fig, save_path)


def plot_normalization(before, after, batch1_cols, save_path):
    """
    Per-sample log2 intensity boxplots before and after batch normalization.

    Parameters
    ----------
    before : pd.DataFrame
        Log2 intensities before normalization.
    after : pd.DataFrame
        Linear intensities after normalization (same columns); shown as log2.
    batch1_cols : list of str
        Columns highlighted as batch 1.
    save_path : str
        Output PNG path.
    """
    frames = []
    for stage, block in [('Before', before), ('After', np.log2(after[before.columns]))]:
        long = block.melt(var_name='sample', value_name='log2 intensity').dropna()
        long['stage'] = stage
        long['batch'] = np.where(long['sample'].isin(batch1_cols), 'batch 1', 'other')
        frames.append(long)
    long = pd.concat(frames, ignore_index=True)
    long['sample'] = long['sample'].str.replace('LFQ intensity ', '', regex=False)

    fig, axes = plt.subplots(2, 1, figsize=(max(10, 0.5 * before.shape[1]), 10), sharey=True)

    for ax, stage in zip(axes, ['Before', 'After']):
        sns.boxplot(data=long[long['stage'] == stage], x='sample', y='log2 intensity',
                    hue='batch', dodge=False, ax=ax)
        ax.set_title(f'{stage} batch normalization', fontweight='bold')
        ax.set_xlabel('')
        ax.tick_params(axis='x', rotation=90, labelsize=8)
        ax.grid(alpha=0.3)

    _save(fig, save_path)
