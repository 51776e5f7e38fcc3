"""
holds the annotation record shared by variant and genotype calls and the interval contract for
anything mapped onto a reference sequence
"""
__version__ = '1.0.0'
