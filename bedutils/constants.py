# Naming authority consulted for synonyms of a sequence region.
ucsc_authority = 'UCSC'

# Coordinate system that identifies a slice as a chromosome.
chromosome_coord_system = 'chromosome'

# UCSC calls the mitochondrion chrM rather than chrMT.
special_names = {
    'MT': 'chrM',
}

# Prepended to the name of reference chromosomes.
chr_prefix = 'chr'

# BED score and itemRgb are always written as literal zeros.
score = 0
rgb = 0

# Placeholder for a missing name field.
missing_name = '.'

# Strand values a feature may carry.
strands = (1, -1)
