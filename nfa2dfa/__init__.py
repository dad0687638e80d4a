from nfa2dfa.utils import Alphabet, ConfigurationError, NFASyntaxError, StateLimitExceeded, Epsilon
from nfa2dfa.nfa import NFA, Transition
from nfa2dfa.closure import epsilon_closure, move
from nfa2dfa.identity import StateIdentityTable
from nfa2dfa.dfa import DFA, DFAState, MinimizedDFA
from nfa2dfa.dfa_utils import nfa_to_dfa, simplify_dfa
from nfa2dfa.pipeline import ConversionResult, convert
