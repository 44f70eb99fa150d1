'''
Created on Mar 4, 2026

@author: mhindle
'''
import numbers
from collections import OrderedDict
from dataclasses import dataclass
from typing import Tuple, List, Dict, Union, Iterable

import numpy as np
import pandas as pd

from denovotrio.trio.genotype import Base, TrioIndividual


@dataclass
class Read:
    """A single aligned read.

    Attributes:
        position (int): 1-based reference position of the first aligned base
        alignedBases (str): the read bases as aligned to the reference
    """
    position: int
    alignedBases: str

    def baseAt(self, position: int):
        offset = position - self.position
        if offset < 0 or offset >= len(self.alignedBases):
            return None
        return self.alignedBases[offset]


class ReadSummary(object):
    '''
    per base counts of the calls observed for one individual at one position
    '''

    def __init__(self, counts: Dict[Union[str, Base], int]=None):
        self._counts: Dict[Base, int] = OrderedDict((b, 0) for b in Base)
        if counts is not None:
            for base, count in counts.items():
                base = Base.of(base)
                if isinstance(count, (bool, np.bool_)) or not isinstance(count, numbers.Integral):
                    raise ValueError("count for %s must be an integer but got %r" % (base.name, count))
                if count < 0:
                    raise ValueError("count for %s must not be negative but got %s" % (base.name, count))
                self._counts[base] += int(count)

    @classmethod
    def fromReads(cls, reads: Iterable[Read], position: int) -> 'ReadSummary':
        '''
        tallies the base every read shows at position; reads that do not
        cover the position and non ACGT calls are ignored
        '''
        counts: Dict[str, int] = {b.value: 0 for b in Base}
        for read in reads:
            call = read.baseAt(position)
            if call is None:
                continue
            call = call.upper()
            if call in counts:
                counts[call] += 1
        return cls(counts)

    def getCount(self) -> Dict[Base, int]:
        return OrderedDict(self._counts)

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def asArray(self) -> np.ndarray:
        return np.array([self._counts[b] for b in Base], dtype=np.float64)

    def __eq__(self, other):
        return isinstance(other, ReadSummary) and self._counts == other._counts

    def __repr__(self):
        return "ReadSummary(%s)" % ", ".join("%s=%s" % (b.name, c) for b, c in self._counts.items())


_table_columns = ["chrom", "pos", "individual"] + [b.value for b in Base]


def readSummariesFromTable(table: pd.DataFrame) -> Dict[Tuple[str, int], Dict[TrioIndividual, ReadSummary]]:
    '''
    groups a "chrom pos individual A C G T" table into one trio map per
    position, positions kept in first seen order
    '''
    missing = [c for c in _table_columns if c not in table.columns]
    if missing:
        raise ValueError("read count table is missing columns %s" % missing)

    sites: Dict[Tuple[str, int], Dict[TrioIndividual, ReadSummary]] = OrderedDict()
    for row in table.itertuples(index=False):
        key = (str(row.chrom), int(row.pos))
        try:
            individual = TrioIndividual(str(row.individual).upper())
        except ValueError:
            raise ValueError("unknown individual %r at %s:%s" % (row.individual, key[0], key[1])) from None
        summary = ReadSummary({b: int(getattr(row, b.value)) for b in Base})
        site = sites.setdefault(key, OrderedDict())
        if individual in site:
            raise ValueError("%s listed twice at %s:%s" % (individual, key[0], key[1]))
        site[individual] = summary
    return sites
