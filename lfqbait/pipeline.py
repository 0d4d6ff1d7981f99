"""
Full run of the LFQ bait pipeline.

Every computation step runs to completion before report_ip() writes
anything, so a structural error in the input leaves no partial output.
"""

from .enrichment import enrich_ip
from .normalization import norm_ip
from .prep import prep_ip
from .ratio import ratio_ip
from .reference import ref_ip
from .report import report_ip
from .venn_ip import venn_ip


def run_ip(config_path, write_report=True):
    """
    Run every pipeline step on the files named in the config.

    Parameters
    ----------
    config_path : str
        Path to YAML configuration file.
    write_report : bool, optional
        Write outputs with report_ip() after computing (default: True).

    Returns
    -------
    dict
        Final data dictionary. When the report was written its result is
        stored under 'report'.

    Example
    -------
    >>> data = run_ip('config/experiment.yaml')
    >>> sorted(data['overlaps']['all_three'])
    """
    data = prep_ip(config_path)
    data = norm_ip(data)
    data = enrich_ip(data)
    data = venn_ip(data)
    data = ref_ip(data)
    data = ratio_ip(data)

    if write_report:
        data['report'] = report_ip(data)

    return data
