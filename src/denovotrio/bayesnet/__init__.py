from .cpt import ConditionalProbabilityTable
from .node import Node
from .model import DenovoBayesNet
from .result import InferResult
from .infer import BayesInfer
