import copy
from collections import namedtuple
from bedutils import constants
from bedutils.exceptions import TransferError


Synonym = namedtuple('Synonym', ['name', 'dbname'])

# Segments returned by Transcript.cdna2genomic()
Coordinate = namedtuple('Coordinate', ['start', 'end', 'strand'])
Gap = namedtuple('Gap', ['start', 'end'])


class Slice(object):
    def __init__(self, seq_region_name, start=1, end=None, strand=1,
                 seq_region_length=None, coord_system='chromosome',
                 is_reference=True, synonyms=None, adaptor=None):
        """
        A window onto a sequence region (chromosome, scaffold, patch...).

        Features hold coordinates relative to the slice they sit on; the
        slice knows where it lies on its region.

        Parameters
        ----------

        seq_region_name : string
            Name of the region, e.g. "1", "X", "MT", "GL000192.1"

        start, end : int
            1-based inclusive bounds of the slice on its region.  If `end`
            is None it defaults to `seq_region_length`.

        strand : 1 | -1
            Orientation of the slice relative to the region.

        seq_region_length : int or None
            Length of the whole region.  Defaults to `end`.

        coord_system : string
            Name of the coordinate system the region belongs to; only
            "chromosome" regions get UCSC-style chromosome names.

        is_reference : bool
            False for patches and haplotypes.

        synonyms : list of Synonym
            Alternative names already known for this region.

        adaptor : object or None
            Lookup service with a `fetch_all_by_seq_region(name, dbname)`
            method, e.g. :class:`bedutils.aliases.SynonymAdaptor`.  None if
            the slice is detached from any lookup service.
        """
        if end is None:
            end = seq_region_length
        if seq_region_length is None:
            seq_region_length = end
        self.seq_region_name = seq_region_name
        self.start = start
        self.end = end
        self.strand = strand
        self.seq_region_length = seq_region_length
        self.coord_system = coord_system
        self.is_reference = is_reference
        self.synonyms = list(synonyms or [])
        self.adaptor = adaptor

    def __repr__(self):
        return (
            "<Slice {x.coord_system}:{x.seq_region_name}:{x.start}-{x.end}"
            "[{x.strand}] at {loc}>".format(x=self, loc=hex(id(self))))

    def __len__(self):
        return self.end - self.start + 1

    @property
    def is_chromosome(self):
        return self.coord_system == constants.chromosome_coord_system

    def get_all_synonyms(self, dbname=None):
        """
        Return synonyms of this slice's region, optionally restricted to
        a naming authority.

        Synonyms attached to the slice come first, followed by any the
        adaptor knows about.
        """
        synonyms = [i for i in self.synonyms
                    if dbname is None or i.dbname == dbname]
        if self.adaptor is not None:
            for syn in self.adaptor.fetch_all_by_seq_region(
                    self.seq_region_name, dbname):
                if syn not in synonyms:
                    synonyms.append(syn)
        return synonyms

    def seq_region_slice(self):
        """
        Return a forward-strand slice spanning the whole region.
        """
        new = copy.copy(self)
        new.start = 1
        new.end = self.seq_region_length
        new.strand = 1
        return new


class Feature(object):
    featuretype = 'feature'

    def __init__(self, start, end, strand=1, display_id=None, slice=None,
                 seqid=None):
        """
        A stranded interval on a sequence region.

        Parameters
        ----------

        start, end : int
            1-based inclusive coordinates relative to `slice`, or absolute
            region coordinates if there is no slice.

        strand : 1 | -1
            Strand relative to `slice`.

        display_id : string
            Identifier used as the BED name field.

        slice : Slice or None
            Slice the coordinates are expressed on.  A feature without
            a slice has no region reference to consult when naming its
            region.

        seqid : string or None
            Region name, used only when `slice` is None.
        """
        self.start = start
        self.end = end
        self.strand = strand
        self.display_id = display_id
        self.slice = slice
        self.seqid = seqid

    def __repr__(self):
        return (
            "<{cls} {x.display_id} ({x.seq_region_name}:{x.start}-{x.end}"
            "[{x.strand}]) at {loc}>".format(
                cls=self.__class__.__name__, x=self, loc=hex(id(self))))

    def __len__(self):
        return self.end - self.start + 1

    @property
    def seq_region_name(self):
        if self.slice is None:
            return self.seqid
        return self.slice.seq_region_name

    @property
    def seq_region_start(self):
        s = self.slice
        if s is None:
            return self.start
        if s.strand == -1:
            return s.end - self.end + 1
        return s.start + self.start - 1

    @property
    def seq_region_end(self):
        s = self.slice
        if s is None:
            return self.end
        if s.strand == -1:
            return s.end - self.start + 1
        return s.start + self.end - 1

    @property
    def seq_region_strand(self):
        if self.slice is None:
            return self.strand
        return self.strand * self.slice.strand

    def transfer(self, slice):
        """
        Return a copy of this feature with coordinates expressed on `slice`.

        `slice` must lie on the same region as the feature.
        """
        if slice.seq_region_name != self.seq_region_name:
            raise TransferError(
                "Cannot transfer %r from region %s to region %s"
                % (self, self.seq_region_name, slice.seq_region_name))
        sr_start = self.seq_region_start
        sr_end = self.seq_region_end
        new = copy.copy(self)
        if slice.strand == -1:
            new.start = slice.end - sr_end + 1
            new.end = slice.end - sr_start + 1
        else:
            new.start = sr_start - slice.start + 1
            new.end = sr_end - slice.start + 1
        new.strand = self.seq_region_strand * slice.strand
        new.slice = slice
        return new


class Exon(Feature):
    featuretype = 'exon'


class Translation(object):
    def __init__(self, start_exon, start, end_exon, end):
        """
        Coding region of a transcript.

        `start` and `end` are 1-based offsets into `start_exon` and
        `end_exon`, counted in the direction of transcription.
        """
        self.start_exon = start_exon
        self.start = start
        self.end_exon = end_exon
        self.end = end


class Transcript(Feature):
    featuretype = 'transcript'

    def __init__(self, start, end, strand=1, display_id=None, slice=None,
                 seqid=None, exons=None, exon_loader=None, translation=None):
        """
        A feature with exon structure and an optional coding translation.

        In addition to the :class:`Feature` arguments:

        exons : list of Exon
            Exons on the same slice as the transcript, in any order.

        exon_loader : callable or None
            Called with the transcript to fetch its exons on first use when
            `exons` is not given.

        translation : Translation or None
            None for non-coding transcripts and pseudogenes.
        """
        super(Transcript, self).__init__(
            start, end, strand=strand, display_id=display_id, slice=slice,
            seqid=seqid)
        self._exons = list(exons) if exons is not None else None
        self.exon_loader = exon_loader
        self.translation = translation

    def get_all_exons(self):
        """
        Return the exons in transcript order (5' to 3').
        """
        if self._exons is None:
            if self.exon_loader is None:
                self._exons = []
            else:
                self._exons = list(self.exon_loader(self))
        return sorted(self._exons, key=lambda e: e.start,
                      reverse=self.strand == -1)

    def _cdna_offset(self, exon, offset):
        pos = 0
        for e in self.get_all_exons():
            if e is exon:
                return pos + offset
            pos += len(e)
        raise ValueError("%r is not an exon of %r" % (exon, self))

    @property
    def cdna_coding_start(self):
        if self.translation is None:
            return None
        t = self.translation
        return self._cdna_offset(t.start_exon, t.start)

    @property
    def cdna_coding_end(self):
        if self.translation is None:
            return None
        t = self.translation
        return self._cdna_offset(t.end_exon, t.end)

    def cdna2genomic(self, start, end):
        """
        Map the spliced range `start`-`end` onto this transcript's slice.

        Returns a list of segments ordered along the spliced sequence:
        :class:`Coordinate` for parts inside exons and :class:`Gap` for
        parts beyond either end of the transcript.
        """
        mapped = []
        cdna_length = 0
        if start < 1:
            mapped.append(Gap(start, min(end, 0)))
        for exon in self.get_all_exons():
            exon_cdna_start = cdna_length + 1
            exon_cdna_end = cdna_length + len(exon)
            cdna_length = exon_cdna_end
            ov_start = max(start, exon_cdna_start)
            ov_end = min(end, exon_cdna_end)
            if ov_start > ov_end:
                continue
            if self.strand == -1:
                g_start = exon.end - (ov_end - exon_cdna_start)
                g_end = exon.end - (ov_start - exon_cdna_start)
            else:
                g_start = exon.start + (ov_start - exon_cdna_start)
                g_end = exon.start + (ov_end - exon_cdna_start)
            mapped.append(Coordinate(g_start, g_end, self.strand))
        if end > cdna_length:
            mapped.append(Gap(max(start, cdna_length + 1), end))
        return mapped

    def transfer(self, slice):
        """
        Return a copy of this transcript, its exons and its translation
        expressed on `slice`.
        """
        new = super(Transcript, self).transfer(slice)
        old_exons = self.get_all_exons()
        new_exons = [e.transfer(slice) for e in old_exons]
        new._exons = new_exons
        if self.translation is not None:
            t = self.translation
            lookup = dict(
                (id(old), fresh) for old, fresh in zip(old_exons, new_exons))
            new.translation = Translation(
                lookup[id(t.start_exon)], t.start,
                lookup[id(t.end_exon)], t.end)
        return new
