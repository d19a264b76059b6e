import random
import typing

import pytest

import markovchain.markov_chain


class FixedRandom (random.Random):

	"""Random source that returns the same value from every ``random()`` call."""

	def __init__ (self, value: float) -> None:

		super().__init__(0)
		self.value = value
		self.calls = 0


	def random (self) -> float:

		"""Return the fixed value."""

		self.calls += 1
		return self.value


class SequenceRandom (random.Random):

	"""Random source that cycles through a list of values."""

	def __init__ (self, values: typing.List[float]) -> None:

		super().__init__(0)
		self.values = values
		self._index = 0


	def random (self) -> float:

		"""Return the next value, wrapping around at the end of the list."""

		value = self.values[self._index % len(self.values)]
		self._index += 1
		return value


@pytest.fixture
def chain () -> markovchain.markov_chain.MarkovChain:

	"""An empty chain with default random sources."""

	return markovchain.markov_chain.MarkovChain()


def make_weather_chain (rng: typing.Optional[random.Random] = None) -> markovchain.markov_chain.MarkovChain:

	"""Sunny/rainy chain: S->R 0.1, S->S 0.9, R->S 0.5, R->R 0.5."""

	weather: markovchain.markov_chain.MarkovChain = markovchain.markov_chain.MarkovChain(rng=rng)
	weather.add_state("S")
	weather.add_state("R")
	weather.add_transition("S", "R", 0.1)
	weather.add_transition("S", "S", 0.9)
	weather.add_transition("R", "S", 0.5)
	weather.add_transition("R", "R", 0.5)
	return weather


@pytest.fixture
def fixed_random () -> typing.Type[FixedRandom]:

	"""Factory for constant random sources: ``fixed_random(0.51)``."""

	return FixedRandom


@pytest.fixture
def sequence_random () -> typing.Type[SequenceRandom]:

	"""Factory for cycling random sources: ``sequence_random([0.1, 0.9])``."""

	return SequenceRandom


@pytest.fixture
def weather_chain () -> typing.Callable[..., markovchain.markov_chain.MarkovChain]:

	"""Factory for the sunny/rainy chain, optionally with a given random source."""

	return make_weather_chain
