from bedutils.feature import Feature, Exon, Transcript, Translation, Slice
from bedutils.aliases import SynonymAdaptor
from bedutils.naming import feature_to_ucsc_name
from bedutils.bedwriter import BEDSerializer, to_bed_array, to_bed_line
from bedutils.helpers import example_filename
from bedutils.exceptions import BEDValidationError, TransferError
from bedutils.version import version as __version__
