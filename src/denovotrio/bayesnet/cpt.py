'''
Created on Mar 3, 2026

@author: mhindle
'''
import itertools
from collections.abc import Mapping
from typing import Tuple, List, Iterator

import numpy as np
import pandas as pd

from denovotrio.trio.genotype import Genotype, GENOTYPES, NUM_GENOTYPES


class ConditionalProbabilityTable(Mapping):
    '''
    Probability of a node's own genotype given its parents' genotypes.

    Keys are tuples of Genotype (parents in parent order, then own genotype).
    Values live in a read-only numpy array of shape (10,)*len(key), indexed
    by Genotype.index, so a lookup is a direct array access.
    '''

    def __init__(self, values: np.ndarray):
        values = np.array(values, dtype=np.float64)
        if values.ndim == 0 or any(dim != NUM_GENOTYPES for dim in values.shape):
            raise ValueError("table must have shape (%s,)*n but got %s" % (NUM_GENOTYPES, values.shape))
        values.setflags(write=False)
        self.table = values

    @property
    def arity(self) -> int:
        return self.table.ndim

    def _encode(self, key) -> Tuple[int, ...]:
        if not isinstance(key, tuple):
            key = tuple(key) if isinstance(key, list) else (key,)
        if len(key) != self.arity or not all(isinstance(g, Genotype) for g in key):
            raise KeyError(key)
        return tuple(g.index for g in key)

    def __getitem__(self, key) -> float:
        return float(self.table[self._encode(key)])

    def __contains__(self, key) -> bool:
        try:
            self._encode(key)
        except KeyError:
            return False
        return True

    def __iter__(self) -> Iterator[Tuple[Genotype, ...]]:
        return itertools.product(GENOTYPES, repeat=self.arity)

    def __len__(self) -> int:
        return self.table.size

    def __eq__(self, other):
        if isinstance(other, ConditionalProbabilityTable):
            return np.array_equal(self.table, other.table)
        return super().__eq__(other)

    __hash__ = None

    def contextSums(self) -> np.ndarray:
        '''
        total probability over own genotype for every parent context
        '''
        return self.table.sum(axis=-1)

    def toFrame(self) -> pd.DataFrame:
        contexts: List[str] = []
        if self.arity == 1:
            contexts = ["prior"]
        else:
            contexts = [",".join(g.name for g in ctx)
                        for ctx in itertools.product(GENOTYPES, repeat=self.arity-1)]
        return pd.DataFrame(self.table.reshape(-1, NUM_GENOTYPES),
                            index=contexts,
                            columns=[g.name for g in GENOTYPES])

    def __repr__(self):
        return "ConditionalProbabilityTable(arity=%s)" % self.arity
