'''
Created on Mar 6, 2026

@author: mhindle
'''
import os
import gzip

from denovotrio.bayesnet.result import InferResult

CALLS_HEADER = ["chrom", "pos", "isDenovo", "dad", "mom", "child", "denovoPosterior", "details"]


class CallWriter(object):
    '''
    candidate and call output files of one run, closed on exit whatever
    happened inside the with block
    '''

    def __init__(self, outputdir=None, compress=False):
        self.outputdir = outputdir if outputdir is not None else os.getcwd()
        os.makedirs(self.outputdir, exist_ok=True)
        self.compress = compress
        self.handles = {}

    def _open(self, name):
        if name not in self.handles:
            if self.compress:
                self.handles[name] = gzip.open("%s/%s.txt.gz" % (self.outputdir, name), "wt")
            else:
                self.handles[name] = open("%s/%s.txt" % (self.outputdir, name), "wt")
        return self.handles[name]

    def startCandidates(self):
        return self._open("candidates")

    def writeCandidate(self, chrom, pos):
        self.startCandidates().write("%s,%s\n" % (chrom, pos))

    def startCalls(self):
        fout = self.handles.get("calls")
        if fout is None:
            fout = self._open("calls")
            fout.write("\t".join(CALLS_HEADER)+"\n")
        return fout

    def writeCall(self, chrom, pos, result: InferResult):
        fout = self.startCalls()
        dad, mom, child = result.maxTrioGenoType
        posterior = "NA" if result.denovoPosterior is None else "%.6g" % result.denovoPosterior
        fout.write("\t".join(map(str, [chrom, pos, str(result.isDenovo).lower(),
                                       dad.name, mom.name, child.name, posterior, result.details]))+"\n")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        for fout in self.handles.values():
            fout.close()
        self.handles = {}
