"""
Exceptions raised by states, chains and the corpus builder.

Every error is a synchronous validation failure raised before anything is
modified, so a caught error leaves the chain exactly as it was.
"""


class MarkovChainError (Exception):

	"""Base class for all errors raised by this package."""


class InvalidArgumentError (MarkovChainError, ValueError):

	"""A required argument was ``None`` or a probability was out of range."""


class StateNotDefinedError (MarkovChainError, LookupError):

	"""An operation referenced a key that has not been added to the chain."""


class StateAlreadyDefinedError (MarkovChainError):

	"""A state was added with a key that already exists in the chain."""


class DuplicateTransitionError (MarkovChainError):

	"""A second transition was added between the same pair of states."""
