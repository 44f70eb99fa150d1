'''
Created on Mar 4, 2026

@author: mhindle
'''
from typing import List, Dict

from denovotrio.trio.genotype import Genotype, TrioIndividual


class InferResult(object):
    '''
    outcome of one trio inference at one position
    '''

    def __init__(self, isDenovo: bool, maxTrioGenoType: List[Genotype], details: str,
                 denovoPosterior: float=None, readCounts: Dict[TrioIndividual, int]=None):
        self.isDenovo = isDenovo
        self.maxTrioGenoType: List[Genotype] = list(maxTrioGenoType)
        self.details = details
        self.denovoPosterior = denovoPosterior
        self.readCounts: Dict[TrioIndividual, int] = dict(readCounts) if readCounts is not None else {}

    def __repr__(self):
        return "InferResult(%s)" % self.details
