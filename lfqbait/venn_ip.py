"""
Bait overlap analysis for the LFQ bait pipeline.

Derives exclusive, pairwise-shared and shared-by-all interactor sets
from the three bait identifier sets.
"""

import copy
from itertools import combinations


def overlap_sets(bait_sets):
    """
    Split three bait sets into the seven Venn regions.

    Parameters
    ----------
    bait_sets : dict
        Maps bait name -> set of identifiers. Exactly three baits; their
        order names the pairwise regions.

    Returns
    -------
    dict
        '{X}_only'      X minus the union of the other two
        '{X}_{Y}_only'  shared by X and Y, absent from the third
        'all_three'     shared by all three baits

    Example
    -------
    >>> overlap_sets({'A': {'p1', 'p2', 'p3'}, 'B': {'p2', 'p3', 'p4'}, 'C': {'p3', 'p5'}})['all_three']
    {'p3'}
    """
    baits = list(bait_sets)
    if len(baits) != 3:
        raise ValueError(f"Overlap analysis needs exactly 3 baits, got {len(baits)}")

    sets = {bait: set(bait_sets[bait]) for bait in baits}
    overlaps = {}

    for bait in baits:
        others = set().union(*(sets[b] for b in baits if b != bait))
        overlaps[f'{bait}_only'] = sets[bait] - others

    for x, y in combinations(baits, 2):
        (z,) = [b for b in baits if b not in (x, y)]
        overlaps[f'{x}_{y}_only'] = (sets[x] & sets[y]) - sets[z]

    overlaps['all_three'] = sets[baits[0]] & sets[baits[1]] & sets[baits[2]]

    return overlaps


def partial_totals(overlaps, baits):
    """
    Exclusive-or-partially-shared identifiers per bait.

    Union of the bait's exclusive region and the two pairwise-only regions
    it belongs to. Used for reporting only.
    """
    totals = {}
    for bait in baits:
        total = set(overlaps[f'{bait}_only'])
        for x, y in combinations(baits, 2):
            if bait in (x, y):
                total |= overlaps[f'{x}_{y}_only']
        totals[bait] = total
    return totals


def venn_ip(data, show_names=False, top_n=10):
    """
    Compute overlaps between the enriched sets of the three baits.

    Figures and lists are written later by report_ip().

    Parameters
    ----------
    data : dict
        Output from enrich_ip().
    show_names : bool, optional
        Print identifiers in each region to console (default: False).
    top_n : int, optional
        Number of identifiers to show per region in console (default: 10).

    Returns
    -------
    dict
        Updated data dictionary with 'overlaps' and 'totals'.

    Example
    -------
    >>> data = enrich_ip(data)
    >>> data = venn_ip(data, show_names=True)
    """

    print("\n" + "="*80)
    print("BAIT OVERLAPS")
    print("="*80)

    bait_sets = data['bait_sets']
    baits = list(bait_sets)

    for bait in baits:
        print(f"\n{bait}: {len(bait_sets[bait])} enriched identifiers")

    overlaps = overlap_sets(bait_sets)
    totals = partial_totals(overlaps, baits)

    # =========================================================================
    # PRINT SUMMARY
    # =========================================================================
    print("\n" + "="*80)
    print("VENN SUMMARY")
    print("="*80)

    for category, identifiers in overlaps.items():
        print(f"\n{category}: {len(identifiers)} identifiers")

        if show_names and len(identifiers) > 0:
            names = sorted(identifiers)
            print(f"  First {min(len(names), top_n)}:")
            for name in names[:top_n]:
                print(f"    - {name}")

            if len(names) > top_n:
                print(f"    ... and {len(names) - top_n} more")

    print(f"\nExclusive or partially shared:")
    for bait, identifiers in totals.items():
        print(f"  {bait}: {len(identifiers)}")

    data_updated = copy.copy(data)
    data_updated['overlaps'] = overlaps
    data_updated['totals'] = totals

    print("\n" + "="*80)
    print("VENN ANALYSIS COMPLETE")
    print("="*80 + "\n")

    return data_updated
