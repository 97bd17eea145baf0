##
## BED Writer (writer): serializing features and transcripts as BED lines.
##
import logging
import os
import shutil
import sys
import tempfile
from bedutils import constants
from bedutils.exceptions import BEDValidationError
from bedutils.naming import feature_to_ucsc_name

formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
ch = logging.StreamHandler()
ch.setLevel(logging.DEBUG)
ch.setFormatter(formatter)
logger.addHandler(ch)


def feature_to_bed_array(feature, cache):
    """
    Encode a feature as the first six BED fields.

    Coordinates are converted from 1-based inclusive to BED's 0-based
    half-open system; the score is always 0.

    Returns
    -------
    List of fields: [chrom, start, end, name, score, strand]
    """
    chrom = feature_to_ucsc_name(feature, cache)
    start = feature.seq_region_start - 1
    end = feature.seq_region_end
    if feature.display_id is None:
        name = constants.missing_name
    else:
        name = feature.display_id
    strand = '-' if feature.seq_region_strand == -1 else '+'
    return [chrom, start, end, name, constants.score, strand]


def _cdna_to_genome(transcript, coord):
    mapped = transcript.cdna2genomic(coord, coord)
    return mapped[0].start


def transcript_to_bed_array(transcript, cache):
    """
    Encode a transcript as a 12-field BED record.

    The transcript is first moved onto the whole region it sits on, so
    exon and coding coordinates are absolute.  Thick start/end mark the
    coding region; non-coding transcripts get both set to the transcript
    end (UCSC does not shift this to 0-based either).  Blocks are the exons
    sorted by start, given relative to the BED start.

    Returns
    -------
    List of fields: the six from :func:`feature_to_bed_array` followed by
    [thickStart, thickEnd, itemRgb, blockCount, blockSizes, blockStarts]
    """
    if transcript.slice is not None:
        new_transcript = transcript.transfer(
            transcript.slice.seq_region_slice())
    else:
        new_transcript = transcript
    # force exon loading
    exons = new_transcript.get_all_exons()

    bed_array = feature_to_bed_array(new_transcript, cache)
    bed_genomic_start = bed_array[1]

    if new_transcript.translation is not None:
        cdna_start = new_transcript.cdna_coding_start
        cdna_end = new_transcript.cdna_coding_end
        if new_transcript.seq_region_strand == -1:
            cdna_start, cdna_end = cdna_end, cdna_start
        coding_start = _cdna_to_genome(new_transcript, cdna_start) - 1
        coding_end = _cdna_to_genome(new_transcript, cdna_end)
    else:
        coding_start = new_transcript.seq_region_end
        coding_end = coding_start

    exon_starts = ''
    exon_lengths = ''
    exon_count = 0
    for exon in sorted(exons, key=lambda e: e.seq_region_start):
        offset = (exon.seq_region_start - 1) - bed_genomic_start
        exon_starts += '%s,' % offset
        exon_lengths += '%s,' % len(exon)
        exon_count += 1

    bed_array.extend([coding_start, coding_end, constants.rgb, exon_count,
                      exon_lengths, exon_starts])
    return bed_array


# Encoders keyed by Feature.featuretype; anything else is a plain feature.
_encoders = {
    'transcript': transcript_to_bed_array,
}


def to_bed_array(feature, cache):
    """
    Encode any feature as a BED6 or BED12 field list, depending on its
    featuretype.
    """
    encoder = _encoders.get(feature.featuretype, feature_to_bed_array)
    return encoder(feature, cache)


def to_bed_line(fields):
    """
    Join BED fields into a single line (without the newline).
    """
    return '\t'.join(str(i) for i in fields)


def validate(feature):
    """
    Raise BEDValidationError if `feature` cannot give a sensible BED record.
    """
    if feature.start > feature.end:
        raise BEDValidationError(
            "%r: start %s is after end %s"
            % (feature, feature.start, feature.end))
    if feature.strand not in constants.strands:
        raise BEDValidationError(
            "%r: strand must be 1 or -1, not %r" % (feature, feature.strand))
    if feature.featuretype != 'transcript':
        return
    for exon in feature.get_all_exons():
        if exon.seq_region_start < feature.seq_region_start or \
                exon.seq_region_end > feature.seq_region_end:
            raise BEDValidationError(
                "%r lies outside %r" % (exon, feature))


class BEDSerializer:
    """
    Simple BED writer class for serializing features and transcripts to
    a file, one line per feature.

    Parameters:
    -----------

    out: string, file-like object or None
        If a string, parsed as a filename, otherwise, a file-like object to
        write to.  If None, write to stdout.

    in_place: bool
        If True and if `out` is a filename, then write the file in place (uses
        named temporary files.)

    cache: dict or None
        Cache of resolved region names used when `print_feature` is not given
        one.  Defaults to a new dict that lives as long as this serializer.

    strict: bool
        If True, validate each feature before encoding and raise
        BEDValidationError on bad coordinates or strand.  By default input is
        trusted as-is.

    verbose: bool or 'debug'
        Logging level: 'debug' for DEBUG, True for INFO, False for ERROR.
    """
    def __init__(self, out=None, in_place=False, cache=None, strict=False,
                 verbose=False):
        self.out = out
        self.in_place = in_place
        self.cache = cache if cache is not None else {}
        self.strict = strict
        self.set_verbose(verbose)
        self.n_written = 0
        # Temporary file to be used (only applies when in_place is True)
        self.temp_file = None
        # Whether close() should close the stream
        self._owns_stream = True
        if out is None:
            if self.in_place:
                raise ValueError("Cannot use 'in_place' when writing to "
                                 "stdout.")
            self.out_stream = sys.stdout
            self._owns_stream = False
        elif isinstance(out, str):
            if self.in_place:
                # Use temporary file
                self.temp_file = tempfile.NamedTemporaryFile(delete=False)
                self.temp_file.close()
                self.out_stream = open(self.temp_file.name, "w")
            else:
                # Just use the filename given
                self.out_stream = open(self.out, "w")
            logger.info("Writing BED to %s" % self.out)
        else:
            # Assumed to be a write-able stream
            if self.in_place:
                # The in_place parameter is undefined for
                # streams, since no filenames are involved
                raise ValueError("Cannot use 'in_place' when writing to "
                                 "a stream.")
            self.out_stream = out

    def set_verbose(self, verbose=None):
        if verbose == 'debug':
            logger.setLevel(logging.DEBUG)
        elif verbose:
            logger.setLevel(logging.INFO)
        else:
            logger.setLevel(logging.ERROR)
        self.verbose = verbose

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.close()
        else:
            self.discard()

    def print_feature(self, feature, cache=None):
        """
        Write one BED line for `feature`.

        Returns True if a line was written, None if `feature` was None.
        """
        if feature is None:
            logger.debug('skipping empty feature %r' % (feature,))
            return None
        if cache is None:
            cache = self.cache
        if self.strict:
            validate(feature)
        bed_array = to_bed_array(feature, cache)
        self.out_stream.write("%s\n" % to_bed_line(bed_array))
        self.n_written += 1
        return True

    def print_features(self, features, cache=None):
        """
        Write one BED line for each of `features`.
        """
        for feature in features:
            self.print_feature(feature, cache)

    def close(self):
        """
        Close the stream, unless it is stdout.
        """
        logger.info("Wrote %s BED records" % self.n_written)
        if self._owns_stream:
            self.out_stream.close()
        else:
            self.out_stream.flush()
        # If we're asked to write in place, substitute the named
        # temporary file for the current file
        if self.in_place:
            shutil.move(self.temp_file.name, self.out)

    def discard(self):
        """
        Close the stream after a failed run.  When writing in place, the
        temporary file is removed and `out` is left untouched.
        """
        logger.info("Discarding output after %s BED records" % self.n_written)
        if self._owns_stream:
            self.out_stream.close()
        else:
            self.out_stream.flush()
        if self.in_place:
            os.remove(self.temp_file.name)
