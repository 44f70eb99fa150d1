'''
Created on Mar 4, 2026

@author: mhindle

Bayesian inference over trio reads: builds the net, scores every genotype
of every individual against its reads, takes the MAP trio genotype and
checks whether it is a de novo event.
'''
from typing import Dict

from denovotrio.bayesnet.model import DenovoBayesNet, _default_sequence_error_rate, _default_denovo_mutation_rate
from denovotrio.bayesnet.result import InferResult
from denovotrio.reads.summary import ReadSummary
from denovotrio.trio.genotype import TrioIndividual, sortedIndividuals, checkTrioGenoTypeIsDenovo


class BayesInfer(object):

    def __init__(self, sequenceErrorRate: float=_default_sequence_error_rate,
                 denovoMutationRate: float=_default_denovo_mutation_rate):
        self.dbn = DenovoBayesNet(sequenceErrorRate, denovoMutationRate)

    def infer(self, readSummaryMap: Dict[TrioIndividual, ReadSummary]) -> InferResult:
        missing = [x.name for x in TrioIndividual if x not in readSummaryMap]
        extra = [repr(x) for x in readSummaryMap if not isinstance(x, TrioIndividual)]
        if missing or extra:
            raise ValueError("need exactly one read summary per trio individual, missing %s unexpected %s" %
                             (missing, extra))

        individualLogLikelihood = self.dbn.getIndividualLogLikelihood(readSummaryMap)
        maxTrioGenoType = self.dbn.getMaxGenoType(individualLogLikelihood)
        isDenovo = checkTrioGenoTypeIsDenovo(maxTrioGenoType)
        denovoPosterior = self.dbn.getDenovoPosterior(individualLogLikelihood)

        readCounts = {x: readSummaryMap[x].total for x in sortedIndividuals()}
        details = "readCounts=%s,maxGenoType=[%s],isDenovo=%s" % (
            ";".join("%s:%s" % (x.name, n) for x, n in readCounts.items()),
            ", ".join(g.name for g in maxTrioGenoType),
            str(isDenovo).lower())
        return InferResult(isDenovo, maxTrioGenoType, details,
                           denovoPosterior=denovoPosterior, readCounts=readCounts)
