import logging
import random
import typing

import markovchain.errors
import markovchain.state


logger = logging.getLogger(__name__)

KeyType = typing.TypeVar("KeyType")
TransitionTable = typing.Mapping[KeyType, typing.Sequence[typing.Tuple[KeyType, float]]]


class MarkovChain (typing.Generic[KeyType]):

	"""
	A discrete-time Markov chain over arbitrary hashable keys.

	States and transitions are added explicitly and can never be removed. The
	chain tracks an optional current state which ``step()`` advances by one
	random transition.

	Example:
		```python
		chain = MarkovChain()
		chain.add_state("sunny")
		chain.add_state("rainy")
		chain.add_transition("sunny", "rainy", 0.1)
		chain.add_transition("sunny", "sunny", 0.9)
		chain.set_state("sunny")
		chain.step()
		```
	"""

	def __init__ (self, rng: typing.Optional[random.Random] = None) -> None:

		"""
		Initialize an empty chain.

		Parameters:
			rng: Optional random source shared by every state this chain
				creates. Leave unset to give each state its own source.
		"""

		self._rng = rng
		self._states: typing.Dict[KeyType, markovchain.state.State[KeyType]] = {}
		self._current: typing.Optional[markovchain.state.State[KeyType]] = None


	@classmethod
	def from_transitions (
		cls,
		transitions: TransitionTable,
		initial_state: typing.Optional[KeyType] = None,
		rng: typing.Optional[random.Random] = None
	) -> "MarkovChain[KeyType]":

		"""
		Build a chain from a table of weighted transitions.

		Parameters:
			transitions: Mapping of source key to a sequence of
				``(target, probability)`` pairs, e.g.
				``{"S": [("R", 0.1), ("S", 0.9)], "R": [("S", 0.5), ("R", 0.5)]}``.
				Targets that never appear as a source still become states.
			initial_state: Key to position the chain on, if any.
			rng: Random source shared by every state.

		Raises the same errors as ``add_state`` / ``add_transition`` /
		``set_state`` for invalid tables.
		"""

		chain: "MarkovChain[KeyType]" = cls(rng=rng)

		for source, options in transitions.items():

			if not chain.contains_state(source):
				chain.add_state(source)

			for target, _ in options:
				if not chain.contains_state(target):
					chain.add_state(target)

		for source, options in transitions.items():
			for target, probability in options:
				chain.add_transition(source, target, probability)

		if initial_state is not None:
			chain.set_state(initial_state)

		logger.debug(f"Built chain with {len(chain)} states from transition table")

		return chain


	def add_state (self, key: KeyType) -> None:

		"""
		Define a new state.

		Raises:
			InvalidArgumentError: ``key`` is ``None``.
			StateAlreadyDefinedError: a state with this key already exists.
		"""

		if key is None:
			raise markovchain.errors.InvalidArgumentError("State key must not be None")

		if key in self._states:
			raise markovchain.errors.StateAlreadyDefinedError(f"State {key!r} is already defined")

		self._states[key] = markovchain.state.State(key, rng=self._rng)


	def contains_state (self, key: typing.Optional[KeyType]) -> bool:

		"""
		Return True if a state with this key has been defined.

		Unlike ``add_state``, a ``None`` key is not an error; it is simply
		never present.
		"""

		if key is None:
			return False

		return key in self._states


	def set_state (self, key: KeyType) -> None:

		"""
		Make the state with this key the current state.

		Raises ``StateNotDefinedError`` if the key has not been added.
		"""

		if not self.contains_state(key):
			raise markovchain.errors.StateNotDefinedError(f"Cannot set state {key!r} because it is not defined")

		self._current = self._states[key]


	def current_state (self) -> typing.Optional[KeyType]:

		"""
		Return the key of the current state, or None if no state has been set.
		"""

		if self._current is None:
			return None

		return self._current.key


	def states (self) -> typing.Set[KeyType]:

		"""
		Return the keys of all defined states.
		"""

		return set(self._states)


	def add_transition (self, from_key: KeyType, to_key: KeyType, probability: float) -> None:

		"""
		Add a transition between two defined states.

		Parameters:
			from_key: Key of the source state.
			to_key: Key of the target state (may equal ``from_key``).
			probability: Chance of taking this transition, in ``[0, 1]``.

		Raises:
			InvalidArgumentError: a key is ``None``, the probability is out of
				range, or the source's total probability would exceed 1.01.
			StateNotDefinedError: either state has not been added.
			DuplicateTransitionError: the transition already exists.
		"""

		if from_key is None or to_key is None:
			raise markovchain.errors.InvalidArgumentError("Transition source and target must not be None")

		if from_key not in self._states or to_key not in self._states:
			raise markovchain.errors.StateNotDefinedError(
				f"Both states must be defined to add a transition from {from_key!r} to {to_key!r}"
			)

		markovchain.state.validate_probability(probability)

		self._states[from_key].add_transition(self._states[to_key], probability)


	def transitions_for (self, key: KeyType) -> typing.Set[KeyType]:

		"""
		Return the keys reachable from a state by one declared transition.

		Raises:
			InvalidArgumentError: ``key`` is ``None``.
			StateNotDefinedError: the state has not been added.
		"""

		if key is None:
			raise markovchain.errors.InvalidArgumentError("State key must not be None")

		if key not in self._states:
			raise markovchain.errors.StateNotDefinedError(f"Cannot get transitions for {key!r} because it is not defined")

		return {target.key for target in self._states[key].transitions()}


	def step (self) -> typing.Optional[KeyType]:

		"""
		Advance to the next state and return its key.

		Does nothing (and returns None) when no current state has been set.
		"""

		if self._current is None:
			return None

		self._current = self._current.next_state()

		return self._current.key


	def walk (self, steps: int) -> typing.Iterator[KeyType]:

		"""
		Step the chain repeatedly, yielding the key reached after each step.

		Yields nothing if no current state has been set.
		"""

		if steps < 0:
			raise markovchain.errors.InvalidArgumentError(f"Steps must not be negative, got {steps}")

		if self._current is None:
			return

		for _ in range(steps):
			key = self.step()
			# step() only returns None when unpositioned, which was checked above.
			yield typing.cast(KeyType, key)


	def __contains__ (self, key: object) -> bool:

		return self.contains_state(typing.cast(typing.Optional[KeyType], key))


	def __len__ (self) -> int:

		return len(self._states)
