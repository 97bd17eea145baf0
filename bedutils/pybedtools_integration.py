"""
Module for integration with pybedtools
"""

import pybedtools
from bedutils import bedwriter


def asinterval(fields):
    """
    Convert a BED6 or BED12 field list, as returned by
    :func:`bedutils.bedwriter.to_bed_array`, into a pybedtools.Interval.
    """
    return pybedtools.create_interval_from_list([str(i) for i in fields])


def to_bedtool(features, cache=None):
    """
    Convert any iterator of features into a pybedtools.BedTool object.

    Note that the supplied iterator is not consumed by this function. To save
    to a temp file or to a known location, use the `.saveas()` method of the
    returned BedTool object.

    `cache` is the region name cache shared by all features; a new one is
    used if None.
    """
    if cache is None:
        cache = {}

    def gen():
        for feature in features:
            if feature is None:
                continue
            yield asinterval(bedwriter.to_bed_array(feature, cache))
    return pybedtools.BedTool(gen())
