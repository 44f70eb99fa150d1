from .stage1 import filterCandidates, GQX_THRESH, QD_THRESH, MQ_THRESH
