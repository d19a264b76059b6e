import logging
import random

import markovchain
import markovchain.corpus

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEXT = """
the cat sat on the mat and the dog sat on the log
the cat saw the dog and the dog saw the cat
"""

chain = markovchain.from_token_sequence(markovchain.corpus.tokenize(TEXT), rng=random.Random(7))

logger.info(f"{len(chain)} distinct words")
logger.info(f"Words that can follow 'the': {sorted(chain.transitions_for('the'))}")

chain.set_state("the")
sentence = ["the"] + list(chain.walk(12))

logger.info(" ".join(sentence))
