#!/usr/local/bin/python3
# encoding: utf-8
'''
denovo_infer -- calls de novo mutations in parent-parent-child trios

denovo_infer runs the two stage de novo experiment on local files

  filter    stage 1, keeps sites whose called child genotype is not
            explained by the called parent genotypes
  infer     stage 2, Bayesian MAP inference over per base read counts
  simulate  writes a simulated read count table for infer

@author:     mhindle

@license:    Apache License 2.0
'''
import sys, os
import time
import pathlib
import multiprocessing
import concurrent.futures
from argparse import ArgumentParser
from argparse import RawDescriptionHelpFormatter
from collections import OrderedDict, Counter
from dataclasses import dataclass
from typing import Tuple, List, Dict, Optional

import pandas as pd
from tqdm import tqdm

from denovotrio.bayesnet.infer import BayesInfer
from denovotrio.bayesnet.model import DenovoBayesNet
from denovotrio.candidates.stage1 import filterCandidates, GQX_THRESH, QD_THRESH, MQ_THRESH
from denovotrio.logoutput.calls import CallWriter
from denovotrio.reads.summary import ReadSummary, readSummariesFromTable
from denovotrio.simulate.trio_reads import randomise, simulateReadSummary
from denovotrio.trio.genotype import Base, TrioIndividual, GENOTYPES, getMendelianGenotypes

__all__: List[str] = []
__version__ = 0.1
__date__ = '2026-03-02'
__updated__ = '2026-03-06'

PROFILE = 0


class CLIError(Exception):
    '''Generic exception to raise and log different fatal errors.'''
    def __init__(self, msg):
        super().__init__(msg)
        self.msg = "E: %s" % msg
    def __str__(self):
        return self.msg


@dataclass
class RunConfig:
    stage: str
    outdir: str
    delimiter: str = ' '
    calls: Optional[str] = None
    readcounts: Optional[str] = None
    candidates: Optional[str] = None
    sequenceErrorRate: float = 1e-2
    denovoMutationRate: float = 1e-8
    threads: int = 1
    gqx: float = GQX_THRESH
    qd: float = QD_THRESH
    mq: float = MQ_THRESH
    printcpt: bool = False
    sites: int = 100
    depth: int = 30
    denovofraction: float = 0.1
    seed: Optional[int] = None


def initializer(sequenceErrorRate, denovoMutationRate):
    multiprocessing.current_process().bayesInfer = BayesInfer(sequenceErrorRate, denovoMutationRate)


def inferSite(key, readSummaryMap: Dict[TrioIndividual, ReadSummary]):
    return key, multiprocessing.current_process().bayesInfer.infer(readSummaryMap)


def runFilter(config: RunConfig) -> int:
    if config.calls is None:
        raise CLIError("filter needs a calls file (-i)")
    calls = pd.read_csv(config.calls, sep=config.delimiter, dtype={"chrom": str})
    print("loaded %s trio calls from %s" % (len(calls), config.calls))
    candidates = filterCandidates(calls, config.gqx, config.qd, config.mq)
    with CallWriter(config.outdir) as writer:
        writer.startCandidates()
        for row in candidates.itertuples(index=False):
            writer.writeCandidate(row.chrom, row.pos)
    print("Denovo candidates/variant calls %s/%s" % (len(candidates), len(calls)))
    return 0


def _readCandidates(filename) -> List[Tuple[str, int]]:
    candidates = pd.read_csv(filename, sep=",", names=["chrom", "pos"], dtype={"chrom": str}, header=None)
    return [(str(chrom), int(pos)) for chrom, pos in candidates.itertuples(index=False)]


def runInfer(config: RunConfig) -> int:
    if config.readcounts is None:
        raise CLIError("infer needs a read count file (-r)")
    try:
        dbn = DenovoBayesNet(config.sequenceErrorRate, config.denovoMutationRate)
    except ValueError as e:
        raise CLIError(str(e)) from None
    table = pd.read_csv(config.readcounts, sep=config.delimiter, dtype={"chrom": str})
    sites = readSummariesFromTable(table)
    print("loaded read counts for %s sites from %s" % (len(sites), config.readcounts))

    if config.candidates is not None:
        wanted = _readCandidates(config.candidates)
        notfound = [k for k in wanted if k not in sites]
        if notfound:
            print("WARN: %s candidates have no read counts: %s" % (len(notfound), notfound[:10]))
        sites = OrderedDict((k, sites[k]) for k in wanted if k in sites)
        print("restricted to %s candidate sites" % len(sites))

    complete = OrderedDict()
    for key, readSummaryMap in sites.items():
        missing = [x.name for x in TrioIndividual if x not in readSummaryMap]
        if missing:
            print("WARN: skipping %s:%s missing reads for %s" % (key[0], key[1], ",".join(missing)))
            continue
        complete[key] = readSummaryMap

    if config.printcpt:
        DenovoBayesNet.printConditionalProbabilityTable(
            sys.stdout, dbn.getNodeMap()[TrioIndividual.CHILD].conditionalProbabilityTable)

    tic = time.time()
    results = {}
    if config.threads <= 1:
        initializer(config.sequenceErrorRate, config.denovoMutationRate)
        for key, readSummaryMap in tqdm(complete.items(), total=len(complete)):
            results[key] = inferSite(key, readSummaryMap)[1]
    else:
        with concurrent.futures.ProcessPoolExecutor(max_workers=config.threads,
                                                    initializer=initializer,
                                                    initargs=(config.sequenceErrorRate, config.denovoMutationRate)) as executor:
            futures = {executor.submit(inferSite, key, readSummaryMap): key for key, readSummaryMap in complete.items()}
            print("waiting on %s queued jobs with %s threads" % (len(futures), config.threads))
            with tqdm(total=len(futures)) as pbar:
                for future in concurrent.futures.as_completed(futures):
                    pbar.update(1)
                    e = future.exception()
                    if e is not None:
                        print(repr(e))
                        raise e
                    key, result = future.result()
                    results[key] = result

    denovo = 0
    with CallWriter(config.outdir) as writer:
        writer.startCalls()
        for key in complete:
            result = results[key]
            if result.isDenovo:
                denovo += 1
                print("######### Denovo detected at %s:%s ########" % key)
            writer.writeCall(key[0], key[1], result)
    toc = time.time()
    print("Denovo calls/sites %s/%s in %.2f seconds" % (denovo, len(complete), toc-tic))
    return 0


def runSimulate(config: RunConfig) -> int:
    rs = randomise(config.seed)
    rows = []
    truth = []
    for site in range(config.sites):
        genoDad = GENOTYPES[rs.integers(len(GENOTYPES))]
        genoMom = GENOTYPES[rs.integers(len(GENOTYPES))]
        consistent = getMendelianGenotypes(genoDad, genoMom)
        isDenovo = bool(rs.random() < config.denovofraction)
        if isDenovo:
            choices = [g for g in GENOTYPES if g not in consistent]
        else:
            choices = consistent
        genoChild = choices[rs.integers(len(choices))]
        pos = site+1
        for individual, genotype in ((TrioIndividual.DAD, genoDad), (TrioIndividual.MOM, genoMom),
                                     (TrioIndividual.CHILD, genoChild)):
            counts = simulateReadSummary(genotype, config.depth, config.sequenceErrorRate, rs).getCount()
            rows.append(["sim", pos, individual.name]+[counts[b] for b in Base])
        truth.append(["sim", pos, genoDad.name, genoMom.name, genoChild.name, str(isDenovo).lower()])

    pathlib.Path(config.outdir).mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=["chrom", "pos", "individual"]+[b.value for b in Base]).to_csv(
        "%s/readcounts.txt" % config.outdir, sep=config.delimiter, index=False)
    pd.DataFrame(truth, columns=["chrom", "pos", "dad", "mom", "child", "isDenovo"]).to_csv(
        "%s/truth.txt" % config.outdir, sep=config.delimiter, index=False)
    print("simulated %s sites: %s" % (config.sites, Counter(t[-1] for t in truth)))
    return 0


def main(argv=None): # IGNORE:C0111
    '''Command line options.'''

    if argv is None:
        argv = sys.argv[1:]

    program_name = os.path.basename(sys.argv[0])
    program_version = "v%s" % __version__
    program_build_date = str(__updated__)
    program_version_message = '%%(prog)s %s (%s)' % (program_version, program_build_date)
    program_shortdesc = __doc__.split("\n")[1]
    program_license = '''%s

  Created on %s.

  Licensed under the Apache License 2.0
  http://www.apache.org/licenses/LICENSE-2.0

  Distributed on an "AS IS" basis without warranties
  or conditions of any kind, either express or implied.

USAGE
''' % (program_shortdesc, str(__date__))

    try:
        # Setup argument parser
        parser = ArgumentParser(description=program_license, formatter_class=RawDescriptionHelpFormatter)
        parser.add_argument('-V', '--version', action='version', version=program_version_message)
        stages = parser.add_subparsers(dest="stage", required=True)

        stage1 = stages.add_parser("filter", help="stage 1: select candidate sites from trio genotype calls")
        stage1.add_argument("-i", "--calls", dest="calls", required=True, help="trio calls file with header chrom pos dad mom child [gqx qd mq]")
        stage1.add_argument("--gqx", dest="gqx", type=float, default=GQX_THRESH, help="minimum GQX")
        stage1.add_argument("--qd", dest="qd", type=float, default=QD_THRESH, help="minimum QD")
        stage1.add_argument("--mq", dest="mq", type=float, default=MQ_THRESH, help="minimum MQ")

        stage2 = stages.add_parser("infer", help="stage 2: bayesian inference over read counts")
        stage2.add_argument("-r", "--readcounts", dest="readcounts", required=True, help="read count file with header chrom pos individual A C G T")
        stage2.add_argument("-c", "--candidates", dest="candidates", default=None, help="candidates file of chrom,pos lines from stage 1")
        stage2.add_argument("-e", "--errorrate", dest="sequenceErrorRate", type=float, default=1e-2, help="sequencing error rate per base call")
        stage2.add_argument("-m", "--mutationrate", dest="denovoMutationRate", type=float, default=1e-8, help="de novo mutation rate")
        stage2.add_argument("-T", "--threads", dest="threads", type=int, default=multiprocessing.cpu_count(), help="worker processes")
        stage2.add_argument("--printcpt", dest="printcpt", action="store_true", help="print the child conditional probability table")

        sim = stages.add_parser("simulate", help="simulate a read count table")
        sim.add_argument("-n", "--sites", dest="sites", type=int, default=100, help="number of sites")
        sim.add_argument("--depth", dest="depth", type=int, default=30, help="reads per individual per site")
        sim.add_argument("-e", "--errorrate", dest="sequenceErrorRate", type=float, default=1e-2, help="sequencing error rate per base call")
        sim.add_argument("--denovofraction", dest="denovofraction", type=float, default=0.1, help="fraction of sites with a de novo child")
        sim.add_argument("--seed", dest="seed", type=int, default=None, help="random seed")

        for sub in (stage1, stage2, sim):
            sub.add_argument("-o", "--outdir", dest="outdir", required=True, help="output directory")
            sub.add_argument("-d", "--delimiter", dest="delimiter", default=' ', type=str, help="delimiter of input and output tables")

        # Process arguments
        args = parser.parse_args(argv)
        config = RunConfig(**vars(args))

        if config.stage == "filter":
            return runFilter(config)
        elif config.stage == "infer":
            return runInfer(config)
        return runSimulate(config)
    except KeyboardInterrupt:
        ### handle keyboard interrupt ###
        return 0
    except CLIError as e:
        indent = len(program_name) * " "
        sys.stderr.write(program_name + ": " + str(e) + "\n")
        sys.stderr.write(indent + "  for help use --help\n")
        return 2

if __name__ == "__main__":
    if PROFILE:
        import cProfile
        import pstats
        profile_filename = 'denovo_infer_profile.txt'
        cProfile.run('main()', profile_filename)
        with open("profile_stats.txt", "w") as statsfile:
            p = pstats.Stats(profile_filename, stream=statsfile)
            stats = p.strip_dirs().sort_stats('cumulative')
            stats.print_stats()
        sys.exit(0)
    sys.exit(main())
