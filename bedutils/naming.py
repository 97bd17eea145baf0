"""
Resolve the name UCSC uses for the region a feature sits on.

Resolved names are memoized in a caller-owned cache keyed by region name.
A cache is normally one plain dict per output run, and it assumes a single
species.  Caches are not locked: parallel workers should each hold their
own dict, or share a read-only snapshot (e.g. ``types.MappingProxyType``),
in which case misses are resolved but not stored.
"""

import logging
from collections.abc import MutableMapping
import simplejson as json
from bedutils import constants

logger = logging.getLogger(__name__)


def slice_to_ucsc_name(slice, seq_region_name=None):
    """
    Work out what UCSC calls the region of `slice`, or None if nothing
    specific applies.

    A UCSC synonym wins.  Otherwise chromosomes are renamed: MT becomes
    chrM, and reference chromosomes on a slice with a lookup service get
    a "chr" prefix.
    """
    if seq_region_name is None:
        seq_region_name = slice.seq_region_name
    synonyms = slice.get_all_synonyms(constants.ucsc_authority)
    if synonyms:
        return synonyms[0].name

    if slice.is_chromosome:
        if seq_region_name in constants.special_names:
            return constants.special_names[seq_region_name]
        if slice.adaptor is not None and slice.is_reference:
            return constants.chr_prefix + seq_region_name
    return None


def feature_to_ucsc_name(feature, cache):
    """
    Return the UCSC name of the region `feature` sits on.

    Parameters
    ----------
    feature : bedutils.feature.Feature
        Any feature; only its region name and slice are consulted.

    cache : mapping
        Resolved names keyed by region name.  A hit is returned without
        looking at the feature's slice.  Misses are stored if the mapping
        is mutable; existing entries are never overwritten.

    Returns
    -------
    str
    """
    seq_region_name = feature.seq_region_name
    if seq_region_name in cache:
        return cache[seq_region_name]

    if feature.slice is None:
        ucsc_name = seq_region_name
    else:
        ucsc_name = slice_to_ucsc_name(feature.slice, seq_region_name)
        if ucsc_name is None:
            ucsc_name = seq_region_name

    logger.debug('resolved region %s to %s' % (seq_region_name, ucsc_name))
    if isinstance(cache, MutableMapping):
        cache[seq_region_name] = ucsc_name
    return ucsc_name


def save_cache(cache, fn):
    """
    Write a name cache to `fn` as compact JSON.
    """
    with open(fn, 'w') as fout:
        fout.write(json.dumps(dict(cache), separators=(",", ":")))


def load_cache(fn):
    """
    Read a name cache written by :func:`save_cache`.
    """
    with open(fn) as fh:
        return json.loads(fh.read())
