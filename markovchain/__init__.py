"""
markovchain - discrete-time Markov chains over arbitrary keys.

A chain is a set of states, each identified by a hashable key, joined by
transitions that carry a probability. Stepping the chain draws a uniform
random value and follows the matching transition. Probability left over when
a state's transitions sum to less than 1.0 keeps the chain where it is.

- **Explicit construction.** ``add_state()`` and ``add_transition()`` validate
  every addition: probabilities must lie in ``[0, 1]``, a state's total may
  not exceed 1.0 (with a 0.01 allowance for float drift), and each pair of
  states has at most one transition.
- **Transition tables.** ``MarkovChain.from_transitions()`` builds a chain
  from ``{source: [(target, probability), ...]}``.
- **Text corpora.** ``from_token_sequence()`` turns a stream of words into a
  chain of bigram frequencies, ready for generating text.
- **Deterministic runs.** Pass a seeded ``random.Random`` (or any object with
  a ``random()`` method) as ``rng`` to reproduce every draw.

Minimal example:

    ```python
    import markovchain

    chain = markovchain.MarkovChain()
    chain.add_state("S")
    chain.add_state("R")
    chain.add_transition("S", "R", 0.1)
    chain.add_transition("S", "S", 0.9)
    chain.add_transition("R", "S", 0.5)
    chain.add_transition("R", "R", 0.5)

    chain.set_state("S")
    print(list(chain.walk(10)))
    ```

Package-level exports: ``MarkovChain``, ``State``, ``from_token_sequence``
and the error classes.
"""

import markovchain.corpus
import markovchain.errors
import markovchain.markov_chain
import markovchain.state


__version__ = "0.1.0"

MarkovChain = markovchain.markov_chain.MarkovChain
State = markovchain.state.State
from_token_sequence = markovchain.corpus.from_token_sequence

MarkovChainError = markovchain.errors.MarkovChainError
InvalidArgumentError = markovchain.errors.InvalidArgumentError
StateNotDefinedError = markovchain.errors.StateNotDefinedError
StateAlreadyDefinedError = markovchain.errors.StateAlreadyDefinedError
DuplicateTransitionError = markovchain.errors.DuplicateTransitionError
