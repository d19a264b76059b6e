"""Build word-level Markov chains from sequences of tokens.

Each distinct token becomes a state. Transition probabilities are the
empirical bigram frequencies of the sequence: if ``"the"`` is followed by
``"man"`` three times and by ``"dog"`` once, the chain moves from ``"the"``
to ``"man"`` with probability 0.75 and to ``"dog"`` with probability 0.25.
"""

import logging
import random
import typing

import markovchain.errors
import markovchain.markov_chain


logger = logging.getLogger(__name__)


def from_token_sequence (
	tokens: typing.Optional[typing.Iterable[str]],
	rng: typing.Optional[random.Random] = None
) -> markovchain.markov_chain.MarkovChain[str]:

	"""
	Create a chain whose transitions follow the bigram counts of ``tokens``.

	The sequence is read forward exactly once, so one-shot iterators and
	generators are fine. A token that only ever appears last still becomes a
	state, with no outgoing transitions.

	Parameters:
		tokens: Finite iterable of string tokens (may be empty).
		rng: Optional random source shared by every state of the new chain.

	Returns:
		A new, unpositioned ``MarkovChain``.

	Raises:
		InvalidArgumentError: ``tokens`` is ``None``.

	Example:
		```python
		chain = from_token_sequence(["the", "man", "and", "the", "man"])
		chain.transitions_for("the")  # {"man"}
		```
	"""

	if tokens is None:
		raise markovchain.errors.InvalidArgumentError("Token sequence must not be None")

	successors: typing.Dict[str, typing.Dict[str, int]] = {}
	previous: typing.Optional[str] = None

	for current in tokens:

		if current not in successors:
			successors[current] = {}

		if previous is not None:
			counts = successors[previous]
			counts[current] = counts.get(current, 0) + 1

		previous = current

	chain: markovchain.markov_chain.MarkovChain[str] = markovchain.markov_chain.MarkovChain(rng=rng)

	# Every successor was also recorded as a key when it was read, so the keys
	# alone cover the final token of the sequence too.
	for token in successors:
		chain.add_state(token)

	for token, counts in successors.items():

		total = sum(counts.values())

		for successor, count in counts.items():
			chain.add_transition(token, successor, count / total)

	logger.debug(f"Built chain with {len(chain)} states from token sequence")

	return chain


def tokenize (text: str) -> typing.Iterator[str]:

	"""
	Lazily yield the whitespace separated tokens of ``text``.
	"""

	for line in text.splitlines():
		yield from line.split()


def read_tokens (path: str, lowercase: bool = False) -> typing.Iterator[str]:

	"""
	Lazily yield whitespace separated tokens from a UTF-8 text file.

	Parameters:
		path: File to read.
		lowercase: Fold every token to lower case, so that ``"The"`` and
			``"the"`` share a state.
	"""

	with open(path, "r", encoding="utf-8") as f:

		for line in f:

			for token in line.split():
				yield token.lower() if lowercase else token
