"""
Synonym lookup for sequence regions, backed by UCSC chromAlias tables.
"""

import collections
from bedutils import constants
from bedutils.feature import Synonym


class SynonymAdaptor(object):
    """
    In-memory lookup of alternative names for sequence regions.

    Attach an instance to :class:`bedutils.feature.Slice` objects as their
    `adaptor`; slices with an adaptor are considered to have a backing
    lookup service when naming regions.
    """
    def __init__(self, synonyms=None):
        self._synonyms = collections.defaultdict(list)
        for seq_region_name, synonym in (synonyms or []):
            self.add(seq_region_name, synonym.name, synonym.dbname)

    def __len__(self):
        return sum(len(v) for v in self._synonyms.values())

    def add(self, seq_region_name, name, dbname=constants.ucsc_authority):
        """
        Register `name` as a synonym of `seq_region_name` under the naming
        authority `dbname`.  Duplicates are ignored.
        """
        syn = Synonym(name, dbname)
        existing = self._synonyms[seq_region_name]
        if syn not in existing:
            existing.append(syn)
        return syn

    def fetch_all_by_seq_region(self, seq_region_name, dbname=None):
        """
        Return the synonyms of `seq_region_name` in the order they were
        added, optionally restricted to the authority `dbname`.
        """
        if seq_region_name not in self._synonyms:
            return []
        return [i for i in self._synonyms[seq_region_name]
                if dbname is None or i.dbname == dbname]

    @classmethod
    def from_chrom_alias(cls, fn, source='ensembl',
                         dbname=constants.ucsc_authority):
        """
        Build an adaptor from a UCSC chromAlias.txt table.

        Parameters
        ----------
        fn : str
            Tab-delimited file with columns alias, UCSC chromosome name and
            source of the alias.  Lines starting with "#" are skipped.

        source : str or None
            Only rows whose source matches are used; if None, all rows are
            used.  For Ensembl region names this is "ensembl".

        dbname : str
            Authority under which the UCSC names are registered.
        """
        adaptor = cls()
        with open(fn) as fh:
            for line in fh:
                line = line.rstrip('\n\r')
                if not line or line.startswith('#'):
                    continue
                fields = line.split('\t')
                if len(fields) < 2:
                    raise ValueError(
                        "Malformed chromAlias line in %s: %r" % (fn, line))
                alias, ucsc_name = fields[0], fields[1]
                alias_source = fields[2] if len(fields) > 2 else None
                if source is not None and alias_source != source:
                    continue
                adaptor.add(alias, ucsc_name, dbname)
        return adaptor
