import logging
from dataclasses import dataclass
from typing import Optional

from nfa2dfa.nfa import NFA
from nfa2dfa.dfa import DFA, MinimizedDFA
from nfa2dfa.dfa_utils import nfa_to_dfa, simplify_dfa

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    nfa: NFA
    dfa: DFA
    minimized: MinimizedDFA


def convert(nfa: NFA, max_states: Optional[int] = None) -> ConversionResult:
    '''
    subset construction followed by minimization
    '''
    # an nfa is validated when built, this only guards hand edited values
    nfa.validate()
    logger.debug('nfa:\n%s', nfa)
    dfa = nfa_to_dfa(nfa, max_states)
    minimized = simplify_dfa(dfa)
    return ConversionResult(nfa, dfa, minimized)
