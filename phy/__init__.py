"""
phy: analytical NR downlink throughput estimator

Stages (in order):
- link_budget : total loss, per-layer Rx power, thermal noise, linear SNR
- spectral    : Shannon SE, CQI / MCS floor quantization
- resources   : data REs per RB and per allocation
- tbs         : Ninfo, Ninfo' and Transport Block Size
- throughput  : bits per slot, MAC and application throughput
- pipeline    : evaluate() / sweep() over the whole chain
"""
from .errors import PipelineError, InvalidInputError, UndefinedOperationError
from .link_budget import LinkBudgetInputs, LinkBudgetResult, estimate_link_budget
from .tbs import TbsDecision, determine_tbs
from .pipeline import RadioConfig, PipelineResult, evaluate, sweep
