import bisect
import random
import typing

import markovchain.errors


KeyType = typing.TypeVar("KeyType")

# Slack allowed above 1.0 when summing a state's transition probabilities,
# so that many small float additions (e.g. 100 x 0.01) are not rejected.
PROBABILITY_EPSILON: float = 0.01


def validate_probability (probability: float) -> None:

	"""
	Raise ``InvalidArgumentError`` unless the probability lies in ``[0, 1]``.
	"""

	# Written as a negated range check so that NaN is rejected too.
	if not 0.0 <= probability <= 1.0:
		raise markovchain.errors.InvalidArgumentError(f"Probability must be between 0 and 1 inclusive, got {probability!r}")


class State (typing.Generic[KeyType]):

	"""
	A single state of a Markov chain and its outgoing transitions.

	Transitions are stored against their cumulative probability, in the order
	they were added. ``next_state()`` draws a uniform value and picks the first
	transition whose cumulative probability is strictly greater than it. Any
	probability mass not covered by transitions (when they sum to less than
	1.0) falls through to the state itself, acting as an implicit self-loop.
	"""

	def __init__ (self, key: KeyType, rng: typing.Optional[random.Random] = None) -> None:

		"""
		Create a state with no transitions.

		Parameters:
			key: Hashable identifier for the state. Must not be ``None``.
			rng: Source of uniform values in ``[0, 1)`` used by
				``next_state()``. Pass a seeded or stubbed ``random.Random``
				for deterministic selection. A private instance is created
				when omitted.
		"""

		if key is None:
			raise markovchain.errors.InvalidArgumentError("State key must not be None")

		self._key = key
		self._rng = rng or random.Random()

		# Parallel lists: cumulative probabilities (ascending) and their targets.
		self._cumulative: typing.List[float] = []
		self._targets: typing.List["State[KeyType]"] = []
		self._sum_of_probabilities = 0.0


	@property
	def key (self) -> KeyType:

		"""The key identifying this state."""

		return self._key


	@property
	def sum_of_probabilities (self) -> float:

		"""Total probability declared across all outgoing transitions."""

		return self._sum_of_probabilities


	def add_transition (self, target: "State[KeyType]", probability: float) -> None:

		"""
		Add a transition to another state (or to this one).

		Duplicates are detected by target identity, so two distinct states
		that happen to share a key count as different targets.

		Raises:
			InvalidArgumentError: ``probability`` is outside ``[0, 1]`` or the
				total would exceed ``1 + PROBABILITY_EPSILON``.
			DuplicateTransitionError: a transition to ``target`` already exists.
		"""

		validate_probability(probability)

		if any(existing is target for existing in self._targets):
			raise markovchain.errors.DuplicateTransitionError(f"Transition already defined from {self} to {target}")

		new_sum = self._sum_of_probabilities + probability

		if new_sum > 1.0 + PROBABILITY_EPSILON:
			raise markovchain.errors.InvalidArgumentError(
				f"Adding probability {probability} to state {self} would raise its total to {new_sum}, above 1.0"
			)

		# The sum never decreases, so appending keeps the keys sorted.
		self._cumulative.append(new_sum)
		self._targets.append(target)
		self._sum_of_probabilities = new_sum


	def transitions (self) -> typing.List["State[KeyType]"]:

		"""
		Return the target states in ascending order of cumulative probability.
		"""

		return list(self._targets)


	def next_state (self) -> "State[KeyType]":

		"""
		Choose the next state using the declared transition probabilities.

		Returns this state when no transition is selected, which happens when
		there are no transitions or the draw lands in the undeclared remainder.
		A zero-probability transition shares its cumulative key with the entry
		before it (or is 0.0), so it is never the first key above the draw.
		"""

		roll = self._rng.random()

		index = bisect.bisect_right(self._cumulative, roll)

		if index == len(self._cumulative):
			return self

		return self._targets[index]


	def __str__ (self) -> str:

		return str(self._key)


	def __repr__ (self) -> str:

		return f"State({self._key!r}, transitions={len(self._targets)})"
