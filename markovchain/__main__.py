"""Generate a random walk through a Markov chain from the command line.

Usage::

    python -m markovchain --corpus speech.txt --steps 30 --seed 7
    python -m markovchain --config weather.yaml --start S --steps 10

The chain comes either from a text corpus (word bigrams) or from an explicit
transition table in the YAML config file::

    corpus:
      path: speech.txt
      lowercase: true
    walk:
      start: the
      steps: 30
      seed: 7

    # or, instead of corpus:
    transitions:
      S: [[R, 0.1], [S, 0.9]]
      R: [[S, 0.5], [R, 0.5]]

Command line options override values from the config file.

State keys in a transition table are read as strings, so ``1`` and ``"1"``
name the same state. YAML reads bare ``yes``, ``no``, ``on`` and ``off`` as
booleans (keyed as ``True`` / ``False``); quote them to use them as words.
"""

import argparse
import itertools
import logging
import os
import random
import sys
import typing

import yaml

import markovchain.corpus
import markovchain.errors
import markovchain.markov_chain


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "markovchain.yaml"
DEFAULT_STEPS = 20


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> dict:

	"""
	Load configuration from a YAML file.

	Raises ``ValueError`` if the file does not hold a mapping at the top level.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")

	return config


def _section (config: dict, name: str) -> dict:

	"""Return a config section as a dict, treating a missing or empty section as ``{}``."""

	section = config.get(name)

	if section is None:
		return {}

	if not isinstance(section, dict):
		raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")

	return section


def _parse_table (transitions: typing.Any) -> typing.Dict[str, typing.List[typing.Tuple[str, float]]]:

	"""
	Convert a YAML transition table into ``{source: [(target, probability), ...]}``.

	Keys and targets are converted with ``str()`` so that plain YAML scalars
	such as ``1`` can be matched by ``--start``.
	"""

	if not isinstance(transitions, dict):
		raise ValueError(f"Config section 'transitions' must be a mapping, got {type(transitions).__name__}")

	table: typing.Dict[str, typing.List[typing.Tuple[str, float]]] = {}

	for source, options in transitions.items():

		if options is None:
			options = []

		if not isinstance(options, list):
			raise ValueError(f"Transitions for {source!r} must be a list of [target, probability] pairs")

		pairs: typing.List[typing.Tuple[str, float]] = []

		for option in options:

			if not isinstance(option, (list, tuple)) or len(option) != 2:
				raise ValueError(f"Transition {option!r} from {source!r} must be a [target, probability] pair")

			target, probability = option
			pairs.append((str(target), float(probability)))

		table[str(source)] = pairs

	return table


def build_chain (
	config: dict,
	rng: random.Random
) -> typing.Tuple[markovchain.markov_chain.MarkovChain, typing.Optional[str]]:

	"""
	Build the chain described by ``config`` and return it with a default start key.

	A ``corpus`` section takes precedence over a ``transitions`` table. The
	default start is the first corpus token, or the first table source.
	Raises ``ValueError`` for a malformed config.
	"""

	corpus_config = _section(config, 'corpus')
	corpus_path = corpus_config.get('path')

	if corpus_path:
		lowercase = bool(corpus_config.get('lowercase', False))
		tokens = markovchain.corpus.read_tokens(str(corpus_path), lowercase=lowercase)
		first = next(tokens, None)

		if first is None:
			return markovchain.markov_chain.MarkovChain(rng=rng), None

		chain = markovchain.corpus.from_token_sequence(itertools.chain([first], tokens), rng=rng)
		logger.info(f"Built chain with {len(chain)} states from {corpus_path}")

		return chain, first

	transitions = config.get('transitions')

	if transitions:
		table = _parse_table(transitions)
		chain = markovchain.markov_chain.MarkovChain.from_transitions(table, rng=rng)
		return chain, next(iter(table))

	raise ValueError("No chain source configured: set corpus.path or transitions")


def parse_args (argv: typing.Optional[typing.List[str]] = None) -> argparse.Namespace:

	parser = argparse.ArgumentParser(prog="markovchain", description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--config",    type=str,  default=DEFAULT_CONFIG_PATH, help=f"YAML config file (default: {DEFAULT_CONFIG_PATH})")
	parser.add_argument("--corpus",    type=str,  default=None,                help="Text file to build the chain from")
	parser.add_argument("--lowercase", action="store_true",                    help="Fold corpus tokens to lower case")
	parser.add_argument("--start",     type=str,  default=None,                help="Key of the starting state")
	parser.add_argument("--steps",     type=int,  default=None,                help=f"Number of steps to walk (default: {DEFAULT_STEPS})")
	parser.add_argument("--seed",      type=int,  default=None,                help="Seed for reproducible walks")
	return parser.parse_args(argv)


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point: build a chain, walk it and print the visited keys.
	"""

	logging.basicConfig(level=logging.INFO)

	args = parse_args(argv)

	try:
		config = load_config(args.config)

		if args.corpus:
			config['corpus'] = {'path': args.corpus, 'lowercase': args.lowercase}

		elif args.lowercase and _section(config, 'corpus'):
			config['corpus']['lowercase'] = True

		walk_config = _section(config, 'walk')
		steps = args.steps if args.steps is not None else int(walk_config.get('steps', DEFAULT_STEPS))
		seed = args.seed if args.seed is not None else walk_config.get('seed')

		rng = random.Random(seed)
		chain, default_start = build_chain(config, rng)

		start = args.start or walk_config.get('start') or default_start

		if start is None:
			logger.error("Chain is empty, nothing to walk")
			return 1

		start = str(start)
		chain.set_state(start)
		keys = [start] + list(chain.walk(steps))

	except (markovchain.errors.MarkovChainError, ValueError, TypeError, OSError, yaml.YAMLError) as exc:
		logger.error(f"Cannot generate walk: {exc}")
		return 1

	logger.info(f"Walked {steps} steps over {len(chain)} states from {start!r}")
	print(" ".join(str(key) for key in keys))

	return 0


if __name__ == "__main__":
	sys.exit(main())
