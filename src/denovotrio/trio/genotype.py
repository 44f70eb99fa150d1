'''
Created on Mar 2, 2026

@author: mhindle

Fixed domain of the trio model: the four bases, the ten unordered
diploid SNP genotypes and the three trio roles.
'''
from enum import Enum
from typing import Tuple, List, Dict, Union, Sequence


class Base(Enum):
    A = 'A'
    C = 'C'
    G = 'G'
    T = 'T'

    @property
    def index(self) -> int:
        return _base_index[self]

    @staticmethod
    def of(value: Union[str, 'Base']) -> 'Base':
        if isinstance(value, Base):
            return value
        try:
            return Base(str(value).upper())
        except ValueError:
            raise ValueError("%s is not a base" % value) from None


_base_index: Dict[Base, int] = {b: i for i, b in enumerate(Base)}


class Genotype(Enum):
    '''
    unordered pair of bases, each genotype is represented exactly once
    '''
    AA = (Base.A, Base.A)
    AC = (Base.A, Base.C)
    AG = (Base.A, Base.G)
    AT = (Base.A, Base.T)
    CC = (Base.C, Base.C)
    CG = (Base.C, Base.G)
    CT = (Base.C, Base.T)
    GG = (Base.G, Base.G)
    TG = (Base.T, Base.G)
    TT = (Base.T, Base.T)

    @property
    def bases(self) -> Tuple[Base, Base]:
        return self.value

    @property
    def index(self) -> int:
        return _genotype_index[self]

    def isHomozygous(self) -> bool:
        return self.value[0] == self.value[1]

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name

    @staticmethod
    def fromBases(first: Union[str, Base], second: Union[str, Base]) -> 'Genotype':
        key = frozenset((Base.of(first), Base.of(second)))
        return _bases2genotype[key]


_genotype_index: Dict[Genotype, int] = {g: i for i, g in enumerate(Genotype)}
_bases2genotype: Dict[frozenset, Genotype] = {frozenset(g.value): g for g in Genotype}

GENOTYPES: List[Genotype] = list(Genotype)
NUM_GENOTYPES: int = len(GENOTYPES)


class TrioIndividual(Enum):
    DAD = 'DAD'
    MOM = 'MOM'
    CHILD = 'CHILD'

    def __repr__(self):
        return self.name

    def __str__(self):
        return self.name


def sortedIndividuals(individuals=None) -> List[TrioIndividual]:
    '''
    roles sorted alphabetically by name, used wherever output must be stable
    '''
    if individuals is None:
        individuals = list(TrioIndividual)
    return sorted(individuals, key=lambda x: x.name)


def parseGenotype(text: str) -> Genotype:
    '''
    accepts "AC", "CA", "A/C" and "A|C"

    >>> parseGenotype("G/T")
    TG
    '''
    cleaned = str(text).strip().replace('/', '').replace('|', '')
    if len(cleaned) != 2:
        raise ValueError("cannot parse genotype %r" % text)
    return Genotype.fromBases(cleaned[0], cleaned[1])


def getMendelianGenotypes(genoDad: Genotype, genoMom: Genotype) -> List[Genotype]:
    '''
    every child genotype formed by one base from each parent, deduplicated,
    in Genotype order
    '''
    found = {Genotype.fromBases(d, m) for d in genoDad.bases for m in genoMom.bases}
    return [g for g in GENOTYPES if g in found]


def checkTrioGenoTypeIsDenovo(trioGenoType: Sequence[Genotype]) -> bool:
    '''
    True if the child genotype cannot be formed from one dad allele and one
    mom allele. Works on allele membership only, not on CPT values.
    '''
    if len(trioGenoType) != 3:
        raise ValueError("expected [dad, mom, child] genotypes but got %s" % (list(trioGenoType),))
    genoDad, genoMom, genoChild = trioGenoType
    c1, c2 = genoChild.bases
    inherited = (c1 in genoDad.bases and c2 in genoMom.bases) or \
                (c2 in genoDad.bases and c1 in genoMom.bases)
    return not inherited
