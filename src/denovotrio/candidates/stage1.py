'''
Created on Mar 5, 2026

@author: mhindle

First pass over trio genotype calls: keeps the sites where the called
child genotype is not Mendelian consistent with the called parents and the
call qualities pass.
'''
from typing import Optional

import pandas as pd

from denovotrio.trio.genotype import Genotype, parseGenotype, checkTrioGenoTypeIsDenovo

GQX_THRESH = 30.0
QD_THRESH = 2.0
MQ_THRESH = 20.0


def _parseOrNone(text) -> Optional[Genotype]:
    try:
        return parseGenotype(text)
    except ValueError:
        return None


def filterCandidates(calls: pd.DataFrame, gqxThreshold: float=GQX_THRESH,
                     qdThreshold: float=QD_THRESH, mqThreshold: float=MQ_THRESH) -> pd.DataFrame:
    missing = [c for c in ["chrom", "pos", "dad", "mom", "child"] if c not in calls.columns]
    if missing:
        raise ValueError("calls table is missing columns %s" % missing)

    keep = pd.Series(True, index=calls.index)
    for column, threshold in (("gqx", gqxThreshold), ("qd", qdThreshold), ("mq", mqThreshold)):
        if column in calls.columns:
            keep &= pd.to_numeric(calls[column], errors="coerce") >= threshold

    def is_denovo(row):
        trio = [_parseOrNone(row[c]) for c in ("dad", "mom", "child")]
        if any(g is None for g in trio):
            return False
        return checkTrioGenoTypeIsDenovo(trio)

    if len(calls) > 0:
        keep &= calls.apply(is_denovo, axis=1).astype(bool)
    return calls.loc[keep, ["chrom", "pos"]].reset_index(drop=True)
