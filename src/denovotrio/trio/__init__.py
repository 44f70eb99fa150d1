from .genotype import Base, Genotype, TrioIndividual, GENOTYPES, NUM_GENOTYPES
from .genotype import sortedIndividuals, parseGenotype, getMendelianGenotypes, checkTrioGenoTypeIsDenovo
