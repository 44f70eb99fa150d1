'''
Created on Mar 5, 2026

@author: mhindle

Simulates read summaries for a trio under the same sequencing error model
the net scores with.
'''
import os
import time
from typing import Dict, List

import numpy as np

from denovotrio.reads.summary import ReadSummary
from denovotrio.trio.genotype import Base, Genotype, TrioIndividual

_bases: List[Base] = list(Base)


def randomise(seed=None) -> np.random.Generator:
    '''
    ensures seed value is between 0 and 2**32 by taking the remainder for values over limit
    '''
    if seed is None:
        seed = time.time_ns()+os.getpid()
    seed = abs(int(seed))
    if seed >= (2**32)-1:
        seed = seed % (2**32)
    return np.random.default_rng(seed)


def simulateReadSummary(genotype: Genotype, depth: int, sequenceErrorRate: float,
                        rs: np.random.Generator) -> ReadSummary:
    if depth < 0:
        raise ValueError("depth must not be negative but got %s" % depth)
    alleles = np.array([b.index for b in genotype.bases])
    true_bases = alleles[rs.integers(0, 2, size=depth)]
    errors = rs.random(depth) < sequenceErrorRate
    # an error turns the base into one of the other three uniformly
    shift = rs.integers(1, len(_bases), size=depth)
    observed = np.where(errors, (true_bases+shift) % len(_bases), true_bases)
    counts = np.bincount(observed, minlength=len(_bases))
    return ReadSummary({b: int(counts[b.index]) for b in _bases})


def simulateTrio(genoDad: Genotype, genoMom: Genotype, genoChild: Genotype,
                 depth: int=30, sequenceErrorRate: float=1e-2, seed=None) -> Dict[TrioIndividual, ReadSummary]:
    rs = randomise(seed)
    return {TrioIndividual.DAD: simulateReadSummary(genoDad, depth, sequenceErrorRate, rs),
            TrioIndividual.MOM: simulateReadSummary(genoMom, depth, sequenceErrorRate, rs),
            TrioIndividual.CHILD: simulateReadSummary(genoChild, depth, sequenceErrorRate, rs)}
