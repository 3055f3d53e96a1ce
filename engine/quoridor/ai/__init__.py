"""AI components: greedy decision procedure and path evaluation."""

from .greedy import GreedyAI, GreedyConfig, choose_action, play_move
from .evaluator import PathEvaluator
