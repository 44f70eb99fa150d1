'''
Created on Mar 3, 2026

@author: mhindle
'''
from typing import Tuple, Optional, Sequence

from denovotrio.bayesnet.cpt import ConditionalProbabilityTable
from denovotrio.trio.genotype import TrioIndividual


class Node(object):
    '''
    vertex of the trio net: identity, ordered parents and the CPT of its own
    genotype given the parents' genotypes
    '''

    def __init__(self, individual: TrioIndividual,
                 parents: Optional[Sequence['Node']]=None,
                 conditionalProbabilityTable: ConditionalProbabilityTable=None):
        self._id = individual
        self._parents: Tuple['Node', ...] = tuple(parents) if parents is not None else tuple()
        self._cpt = conditionalProbabilityTable
        if self._cpt is not None and self._cpt.arity != len(self._parents)+1:
            raise ValueError("%s has %s parents but its table is keyed on %s genotypes" %
                             (individual, len(self._parents), self._cpt.arity))

    @property
    def id(self) -> TrioIndividual:
        return self._id

    @property
    def parents(self) -> Tuple['Node', ...]:
        return self._parents

    @property
    def conditionalProbabilityTable(self) -> ConditionalProbabilityTable:
        return self._cpt

    def isRoot(self) -> bool:
        return len(self._parents) == 0

    def __repr__(self):
        return "Node(%s, parents=%s)" % (self._id, [p.id for p in self._parents])
