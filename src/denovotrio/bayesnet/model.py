'''
Created on Mar 3, 2026

@author: mhindle
'''
import math
from collections import OrderedDict
from typing import Tuple, List, Dict

import numpy as np
from pgmpy.factors.discrete import TabularCPD
from pgmpy.models import DiscreteBayesianNetwork
from scipy.special import logsumexp

from denovotrio.bayesnet.cpt import ConditionalProbabilityTable
from denovotrio.bayesnet.node import Node
from denovotrio.reads.summary import ReadSummary
from denovotrio.trio.genotype import Base, Genotype, TrioIndividual, GENOTYPES, NUM_GENOTYPES, \
    getMendelianGenotypes

_default_sequence_error_rate = 1e-2
_default_denovo_mutation_rate = 1e-8

# two genotypes scoring within this are a tie, the first in (dad, mom, child) order wins
tie_tolerance = 1e-9

NUM_BASES = len(Base)


def _mendelian_mask() -> np.ndarray:
    '''
    mask[d, m, c] is True when child genotype c can be formed from one base
    of dad genotype d and one base of mom genotype m
    '''
    mask = np.zeros((NUM_GENOTYPES,)*3, dtype=bool)
    for genoDad in GENOTYPES:
        for genoMom in GENOTYPES:
            for genoChild in getMendelianGenotypes(genoDad, genoMom):
                mask[genoDad.index, genoMom.index, genoChild.index] = True
    mask.setflags(write=False)
    return mask

_default_mendelian_mask = _mendelian_mask()


class DenovoBayesNet(object):
    '''
    Three node net: DAD and MOM are parentless, CHILD has parents [DAD, MOM].

    CPTs are built once from the two rates and never change afterwards, so a
    single net can be shared by any number of concurrent inference calls.
    '''

    def __init__(self, sequenceErrorRate: float=_default_sequence_error_rate,
                 denovoMutationRate: float=_default_denovo_mutation_rate):
        self.sequenceErrorRate = self._checkRate("sequenceErrorRate", sequenceErrorRate)
        self.denovoMutationRate = self._checkRate("denovoMutationRate", denovoMutationRate)
        if (NUM_GENOTYPES-1)*self.denovoMutationRate >= 1:
            raise ValueError("denovoMutationRate %s too large: a parent pair with one consistent "
                             "child genotype would get probability %s" %
                             (self.denovoMutationRate, 1-(NUM_GENOTYPES-1)*self.denovoMutationRate))

        self.nodeMap: Dict[TrioIndividual, Node] = OrderedDict()
        self.mendelianMask = _default_mendelian_mask
        self.logBaseProbs = self._logBaseProbabilities()

        dadNode = Node(TrioIndividual.DAD, None, self.createConditionalProbabilityTable(TrioIndividual.DAD))
        momNode = Node(TrioIndividual.MOM, None, self.createConditionalProbabilityTable(TrioIndividual.MOM))
        childNode = Node(TrioIndividual.CHILD, [dadNode, momNode],
                         self.createConditionalProbabilityTable(TrioIndividual.CHILD))
        for node in (dadNode, momNode, childNode):
            self.addNode(node)

        self._logChildCpt = np.log(childNode.conditionalProbabilityTable.table)

    @staticmethod
    def _checkRate(name: str, value) -> float:
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValueError("%s must be a number but got %r" % (name, value)) from None
        if not math.isfinite(value) or not 0 < value < 1:
            raise ValueError("%s must be in (0,1) but got %s" % (name, value))
        return value

    def getSequenceErrorRate(self) -> float:
        return self.sequenceErrorRate

    def getDenovoMutationRate(self) -> float:
        return self.denovoMutationRate

    def getNodeMap(self) -> Dict[TrioIndividual, Node]:
        return OrderedDict(self.nodeMap)

    def addNode(self, node: Node):
        '''
        registers a node for a role not yet in the net; nodes are never
        replaced, so CHILD always points at the DAD and MOM nodes it scores with
        '''
        if node.id == TrioIndividual.CHILD:
            expected = [self.nodeMap.get(TrioIndividual.DAD), self.nodeMap.get(TrioIndividual.MOM)]
            if list(node.parents) != expected:
                raise ValueError("CHILD parents must be the DAD and MOM nodes of this net but got %s" %
                                 list(node.parents))
        elif not node.isRoot():
            raise ValueError("%s node must not have parents" % node.id)
        if node.id in self.nodeMap:
            raise ValueError("%s node is already in the net" % node.id)
        self.nodeMap[node.id] = node

    def createConditionalProbabilityTable(self, individual: TrioIndividual) -> ConditionalProbabilityTable:
        '''
        DAD and MOM get a uniform prior over the 10 genotypes.

        For CHILD and a fixed parent pair with k consistent genotypes, each
        consistent genotype gets (1 - (10-k)*mu)/k and every other genotype
        gets mu, so each parent context sums to one.
        '''
        if individual in (TrioIndividual.DAD, TrioIndividual.MOM):
            return ConditionalProbabilityTable(np.full(NUM_GENOTYPES, 1.0/NUM_GENOTYPES))

        mu = self.denovoMutationRate
        values = np.full((NUM_GENOTYPES,)*3, mu, dtype=np.float64)
        for genoDad in GENOTYPES:
            for genoMom in GENOTYPES:
                consistent = getMendelianGenotypes(genoDad, genoMom)
                k = len(consistent)
                prob = (1-(NUM_GENOTYPES-k)*mu)/k
                for genoChild in consistent:
                    values[genoDad.index, genoMom.index, genoChild.index] = prob
        return ConditionalProbabilityTable(values)

    def _logBaseProbabilities(self) -> np.ndarray:
        '''
        log P(observed base | genotype) as a (genotypes x bases) matrix.
        A true base is read correctly with 1-e, otherwise as one of the three
        other bases uniformly; each allele is sampled with probability 0.5.
        '''
        e = self.sequenceErrorRate
        per_allele = np.full((NUM_BASES, NUM_BASES), e/3.0)
        np.fill_diagonal(per_allele, 1.0-e)
        probs = np.zeros((NUM_GENOTYPES, NUM_BASES))
        for genotype in GENOTYPES:
            b1, b2 = genotype.bases
            probs[genotype.index] = 0.5*per_allele[b1.index] + 0.5*per_allele[b2.index]
        logprobs = np.log(probs)
        logprobs.setflags(write=False)
        return logprobs

    def getGenotypeLogLikelihoods(self, readSummary: ReadSummary) -> np.ndarray:
        '''
        log likelihood of the read summary for each genotype, in Genotype order
        '''
        counts = readSummary.asArray()
        if counts.sum() == 0:
            return np.zeros(NUM_GENOTYPES)
        return self.logBaseProbs @ counts

    def getIndividualLogLikelihood(self, readSummaryMap: Dict[TrioIndividual, ReadSummary]) \
            -> Dict[TrioIndividual, Dict[Genotype, float]]:
        individualLogLikelihood: Dict[TrioIndividual, Dict[Genotype, float]] = OrderedDict()
        for individual, readSummary in readSummaryMap.items():
            loglik = self.getGenotypeLogLikelihoods(readSummary)
            individualLogLikelihood[individual] = OrderedDict(
                (genotype, float(loglik[genotype.index])) for genotype in GENOTYPES)
        return individualLogLikelihood

    def _jointLogScores(self, individualLogLikelihood: Dict[TrioIndividual, Dict[Genotype, float]]) -> np.ndarray:
        '''
        unnormalised log posterior of every (dad, mom, child) triple. The
        parents' uniform priors are a constant and are left out.
        '''
        def as_vector(individual):
            if individual not in individualLogLikelihood:
                raise ValueError("no log likelihoods for %s" % individual)
            loglik = individualLogLikelihood[individual]
            return np.array([loglik[g] for g in GENOTYPES], dtype=np.float64)

        dad = as_vector(TrioIndividual.DAD)
        mom = as_vector(TrioIndividual.MOM)
        child = as_vector(TrioIndividual.CHILD)
        return dad[:, None, None] + mom[None, :, None] + child[None, None, :] + self._logChildCpt

    def getMaxGenoType(self, individualLogLikelihood: Dict[TrioIndividual, Dict[Genotype, float]]) -> List[Genotype]:
        '''
        MAP [dad, mom, child] over all 1000 triples. Ties within tie_tolerance
        go to the first triple in lexicographic Genotype order.
        '''
        scores = self._jointLogScores(individualLogLikelihood)
        best = np.flatnonzero(scores.ravel() >= scores.max()-tie_tolerance)[0]
        d, m, c = np.unravel_index(best, scores.shape)
        return [GENOTYPES[d], GENOTYPES[m], GENOTYPES[c]]

    def getDenovoPosterior(self, individualLogLikelihood: Dict[TrioIndividual, Dict[Genotype, float]]) -> float:
        '''
        posterior mass of the triples whose child genotype is not Mendelian
        consistent with the parents
        '''
        scores = self._jointLogScores(individualLogLikelihood)
        total = logsumexp(scores)
        denovo = logsumexp(scores[~self.mendelianMask])
        return float(np.exp(denovo-total))

    def toPgmpyModel(self) -> DiscreteBayesianNetwork:
        '''
        the same net as a pgmpy model, node names are the role names and
        state names are the genotype names
        '''
        state_names = [g.name for g in GENOTYPES]
        id2CPD: Dict[str, TabularCPD] = OrderedDict()
        for individual, node in self.nodeMap.items():
            values = node.conditionalProbabilityTable.table
            if node.isRoot():
                id2CPD[individual.name] = TabularCPD(variable=individual.name,
                                                     variable_card=NUM_GENOTYPES,
                                                     values=values.reshape(NUM_GENOTYPES, 1),
                                                     state_names={individual.name: state_names})
            else:
                parents = [p.id.name for p in node.parents]
                # pgmpy wants one column per parent context, first parent varying slowest
                columns = values.reshape(-1, NUM_GENOTYPES).T
                names = {p: state_names for p in parents}
                names[individual.name] = state_names
                id2CPD[individual.name] = TabularCPD(variable=individual.name,
                                                     variable_card=NUM_GENOTYPES,
                                                     values=columns,
                                                     evidence=parents,
                                                     evidence_card=[NUM_GENOTYPES]*len(parents),
                                                     state_names=names)
        edges: List[Tuple[str, str]] = [(p.id.name, node.id.name)
                                        for node in self.nodeMap.values() for p in node.parents]
        model = DiscreteBayesianNetwork(edges)
        model.add_cpds(*id2CPD.values())
        model.check_model()
        return model

    @staticmethod
    def printConditionalProbabilityTable(out, cpt: ConditionalProbabilityTable):
        out.write(cpt.toFrame().to_string())
        out.write("\n")
