import logging
import random

import markovchain

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# A two-state weather model. Sunny days tend to stay sunny; rainy days are a coin toss.
weather = markovchain.MarkovChain.from_transitions({
	"sunny": [("rainy", 0.1), ("sunny", 0.9)],
	"rainy": [("sunny", 0.5), ("rainy", 0.5)],
}, initial_state="sunny", rng=random.Random(2024))

days = list(weather.walk(14))

logger.info(f"Two weeks of weather: {', '.join(days)}")
logger.info(f"Rainy days: {days.count('rainy')} of {len(days)}")

# The residual probability of a state stays on the state itself: here a
# 'storm' clears to 'rainy' 30% of the time and lingers otherwise.
weather.add_state("storm")
weather.add_transition("storm", "rainy", 0.3)
weather.set_state("storm")

logger.info(f"After a storm: {', '.join(weather.walk(5))}")
