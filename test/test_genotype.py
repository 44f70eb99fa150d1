'''
Created on Mar 2, 2026

@author: mhindle
'''
import unittest

from denovotrio.trio.genotype import Base, Genotype, TrioIndividual, GENOTYPES, NUM_GENOTYPES, \
    sortedIndividuals, parseGenotype, getMendelianGenotypes, checkTrioGenoTypeIsDenovo


class TestGenotype(unittest.TestCase):

    def test_enumerations(self):
        self.assertEqual(NUM_GENOTYPES, 10)
        self.assertEqual([g.name for g in GENOTYPES],
                         ["AA", "AC", "AG", "AT", "CC", "CG", "CT", "GG", "TG", "TT"])
        self.assertEqual([g.index for g in GENOTYPES], list(range(10)))
        self.assertEqual([b.index for b in Base], [0, 1, 2, 3])
        self.assertEqual(len(TrioIndividual), 3)

    def test_from_bases_is_unordered(self):
        self.assertIs(Genotype.fromBases('A', 'C'), Genotype.AC)
        self.assertIs(Genotype.fromBases('C', 'A'), Genotype.AC)
        self.assertIs(Genotype.fromBases('G', 'T'), Genotype.TG)
        self.assertIs(Genotype.fromBases(Base.T, Base.T), Genotype.TT)
        self.assertIs(Genotype.fromBases('c', 'g'), Genotype.CG)
        with self.assertRaises(ValueError):
            Genotype.fromBases('A', 'N')

    def test_parse(self):
        self.assertIs(parseGenotype("A/C"), Genotype.AC)
        self.assertIs(parseGenotype("T|G"), Genotype.TG)
        self.assertIs(parseGenotype("GT"), Genotype.TG)
        self.assertIs(parseGenotype(" CC "), Genotype.CC)
        for bad in ["./.", "A", "ACG", "XY", ""]:
            with self.assertRaises(ValueError):
                parseGenotype(bad)

    def test_homozygous(self):
        self.assertTrue(Genotype.GG.isHomozygous())
        self.assertFalse(Genotype.TG.isHomozygous())

    def test_sorted_individuals(self):
        self.assertEqual(sortedIndividuals(), [TrioIndividual.CHILD, TrioIndividual.DAD, TrioIndividual.MOM])
        self.assertEqual(sortedIndividuals([TrioIndividual.MOM, TrioIndividual.DAD]),
                         [TrioIndividual.DAD, TrioIndividual.MOM])

    def test_mendelian_genotypes(self):
        self.assertEqual(getMendelianGenotypes(Genotype.AA, Genotype.AA), [Genotype.AA])
        self.assertEqual(getMendelianGenotypes(Genotype.AA, Genotype.AC), [Genotype.AA, Genotype.AC])
        self.assertEqual(getMendelianGenotypes(Genotype.AC, Genotype.AC),
                         [Genotype.AA, Genotype.AC, Genotype.CC])
        self.assertEqual(getMendelianGenotypes(Genotype.AC, Genotype.TG),
                         [Genotype.AG, Genotype.AT, Genotype.CG, Genotype.CT])
        self.assertEqual(getMendelianGenotypes(Genotype.AA, Genotype.CC), [Genotype.AC])

    def test_number_of_consistent_genotypes(self):
        for genoDad in GENOTYPES:
            for genoMom in GENOTYPES:
                k = len(getMendelianGenotypes(genoDad, genoMom))
                self.assertIn(k, [1, 2, 3, 4])
                self.assertEqual(getMendelianGenotypes(genoDad, genoMom),
                                 getMendelianGenotypes(genoMom, genoDad))

    def test_check_denovo(self):
        self.assertFalse(checkTrioGenoTypeIsDenovo([Genotype.AA, Genotype.AC, Genotype.AA]))
        self.assertFalse(checkTrioGenoTypeIsDenovo([Genotype.AA, Genotype.AC, Genotype.AC]))
        self.assertTrue(checkTrioGenoTypeIsDenovo([Genotype.AA, Genotype.AC, Genotype.CC]))
        self.assertTrue(checkTrioGenoTypeIsDenovo([Genotype.AA, Genotype.AA, Genotype.TT]))
        self.assertFalse(checkTrioGenoTypeIsDenovo([Genotype.AC, Genotype.TG, Genotype.CT]))
        self.assertTrue(checkTrioGenoTypeIsDenovo([Genotype.AC, Genotype.TG, Genotype.TG]))
        # both child alleles must not come from the same parent
        self.assertTrue(checkTrioGenoTypeIsDenovo([Genotype.AC, Genotype.GG, Genotype.AC]))

    def test_check_denovo_matches_enumeration(self):
        for genoDad in GENOTYPES:
            for genoMom in GENOTYPES:
                consistent = getMendelianGenotypes(genoDad, genoMom)
                for genoChild in GENOTYPES:
                    self.assertEqual(checkTrioGenoTypeIsDenovo([genoDad, genoMom, genoChild]),
                                     genoChild not in consistent)

    def test_check_denovo_needs_three(self):
        with self.assertRaises(ValueError):
            checkTrioGenoTypeIsDenovo([Genotype.AA, Genotype.AA])


if __name__ == "__main__":
    unittest.main()
